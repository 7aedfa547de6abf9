"""
Settings management commands for ghkit CLI.
"""

import typer

from ghkit.errors import InvalidInputError
from ghkit.logging import get_logger
from ghkit.utils.config_store import ConfigStore
from ghkit.utils.console import console, create_table, error, info, success

app = typer.Typer(help="Manage ghkit settings")


@app.command("show")
def show_config() -> None:
    """Show current settings"""
    config_store = ConfigStore()
    settings = config_store.load_settings()

    table = create_table("ghkit Settings", ["Setting", "Value"])
    for key, value in settings.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
    info(f"Settings file: {config_store.settings_file}")


@app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Setting name, see 'ghkit config show'"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one setting"""
    logger = get_logger("ghkit.commands.config")
    try:
        settings = ConfigStore().set_setting(key, value)
    except InvalidInputError as e:
        logger.error(f"Failed to update setting '{key}': {e}")
        error(str(e))
        raise typer.Exit(1)

    logger.info(f"Setting '{key}' updated")
    success(f"{key} = {getattr(settings, key)}")
