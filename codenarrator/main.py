"""Entry point for CodeNarrator.

Delegates to the Click command group, which loads the .env file,
configuration and logging for each command.
"""

from codenarrator.cli.commands import cli


def main() -> None:
    """Launch the CLI."""
    cli(prog_name="codenarrator")


if __name__ == "__main__":
    main()
