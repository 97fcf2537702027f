"""Chainview CLI: inspect the collapse state of diagram snapshots.

Entry point for the `chainview` command. Requires ``pip install chainview[cli]``.

Commands:
    inspect     Show visible/hidden nodes and edges, plus decorative edges
    ls          List snapshots registered in pyproject.toml
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install chainview[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all commands."""
    _require_typer()

    import typer

    from chainview.cli.view_cmd import register_commands

    app = typer.Typer(
        name="chainview",
        help="Inspect collapse state of chain diagram snapshots.",
        no_args_is_help=True,
    )
    register_commands(app)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
