"""Entry point for `python -m physiolog`."""

from physiolog.cli import cli

if __name__ == "__main__":
    cli()
