import pytest

from ghkit.commands.shared.cli_options import CommonOptions


@pytest.mark.parametrize(
    "factory, flags, default",
    [
        (CommonOptions.token, ("--token", "-t"), None),
        (CommonOptions.cli_only, ("--cli-only", "-c"), False),
        (CommonOptions.name, ("--name", "-n"), None),
        (CommonOptions.description, ("--description", "-d"), None),
        (CommonOptions.public, ("--public", "-p"), False),
        (CommonOptions.external, ("--external", "-e"), None),
    ],
)
def test_option_flags_and_defaults(factory, flags, default):
    option = factory()

    assert tuple(option.param_decls) == flags
    assert option.default is default


def test_options_are_fresh_instances():
    assert CommonOptions.token() is not CommonOptions.token()
