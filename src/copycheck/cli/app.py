from typing import Optional

import typer


def version_callback(value: Optional[bool]) -> None:
    """Show version and exit."""
    if value:
        import copycheck

        typer.echo(f"copycheck version: {copycheck.__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="copycheck",
    help="Check that every file under SOURCE exists, by content, under some DEST.",
    add_completion=False,
)
