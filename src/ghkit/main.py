import typer

from ghkit import __version__
from ghkit.commands import clone, config, fork, logs, new, publish
from ghkit.logging import get_logger, setup_logging

app = typer.Typer(
    help="[bold blue]ghkit[/bold blue] - create, publish, clone and fork "
    "GitHub repositories from the command line",
    rich_markup_mode="rich",
)

# Command groups
app.add_typer(config.app, name="config")
app.add_typer(logs.app, name="logs")

# Repository commands
app.command("new")(new.new_repo)
app.command("publish")(publish.publish_repo)
app.command("clone")(clone.clone_repo)
app.command("fork")(fork.fork_repo)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    [bold blue]ghkit[/bold blue] - create, publish, clone and fork GitHub
    repositories from the command line.
    """
    if version:
        print(f"ghkit {__version__}")
        raise typer.Exit()
    if not ctx.invoked_subcommand:
        print("Welcome to ghkit! To proceed type ghkit --help")


def main():
    setup_logging()
    logger = get_logger("ghkit.main")
    logger.info("ghkit CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("ghkit CLI finished")


if __name__ == "__main__":
    main()
