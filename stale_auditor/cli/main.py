"""Main CLI entry point."""

import typer
from rich.console import Console

from .audit import run, state

app = typer.Typer(
    name="stale-auditor",
    help="Stale issue auditing for GitHub repositories",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="run", context_settings={"help_option_names": ["-h", "--help"]})(
    run
)
app.command(name="state", context_settings={"help_option_names": ["-h", "--help"]})(
    state
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from stale_auditor import __version__

    console.print(f"Stale Auditor v{__version__}")


if __name__ == "__main__":
    app()
