import ghkit.utils.console as console_utils


def test_success_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.success("ok")
    mock_print.assert_called_once()


def test_error_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.error("fail")
    mock_print.assert_called_once()


def test_warning_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.warning("warn")
    mock_print.assert_called_once()


def test_info_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.info("hello")
    mock_print.assert_called_once()


def test_rule_draws_line(mocker):
    mock_rule = mocker.patch.object(console_utils.console, "rule")
    console_utils.rule()
    mock_rule.assert_called_once()


def test_create_table():
    table = console_utils.create_table("Title", ["a", "b"])
    assert table.title == "Title"
    assert len(table.columns) == 2


def test_status_wraps_console_status(mocker):
    mock_status = mocker.patch.object(console_utils.console, "status")

    with console_utils.status("Cloning octocat/hello..."):
        pass

    mock_status.assert_called_once_with("Cloning octocat/hello...", spinner="dots")


def test_helpers_use_theme_styles(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")

    console_utils.error("fail")

    assert mock_print.call_args.kwargs["style"] == "ghkit.error"
