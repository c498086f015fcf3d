import typer

from scalpel import __version__
from scalpel.cli import css, js
from scalpel.cli.config import CLIConfig
from scalpel.logging_config import reset_logging, setup_logging

app = typer.Typer()


def _version_callback(value: bool):
    if value:
        typer.echo(f"scalpel {__version__}")
        raise typer.Exit()


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: coloured errors and log output (also via SCALPEL_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """
    Scalpel: structural codemods for JavaScript modules and CSS stylesheets.

    Machine mode is DEFAULT (plain output, JSON errors).
    Use --human/-H for readable errors.
    """
    if human:
        CLIConfig.set_machine_mode(False)

    reset_logging()
    setup_logging(
        level="DEBUG" if verbose else "INFO",
        suppress_console=CLIConfig.is_machine_mode() and not verbose,
    )


app.add_typer(js.app, name="js", help="JavaScript codemods (imports, objects, LiveSocket hooks, stats)")
app.add_typer(css.app, name="css", help="Stylesheet codemods (imports, rules, declarations)")


if __name__ == "__main__":
    app()
