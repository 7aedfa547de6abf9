from typer.testing import CliRunner

from ghkit import __version__
from ghkit.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == f"ghkit {__version__}"


def test_no_command_prints_welcome():
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "Welcome to ghkit" in result.output


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("new", "publish", "clone", "fork", "config", "logs"):
        assert command in result.output


def test_fork_options_reach_command(mocker):
    command = mocker.patch("ghkit.commands.fork.ForkCommand")

    result = runner.invoke(app, ["fork", "-c", "-n", "copy", "-p"])

    assert result.exit_code == 0
    command.return_value.run.assert_called_once_with(
        external=None, name="copy", public=True, token=None, cli_only=True
    )
