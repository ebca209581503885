"""
Command-line interface for physiolog.

Provides commands for reading CMRR physio log sets, finding them on disk,
and managing configuration.
"""

import logging

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import click
import numpy as np

from physiolog.config import (
    get_config_path,
    get_expected_version,
    load_config,
    set_expected_version,
    unset_expected_version,
)
from physiolog.logging_config import setup_logging
from physiolog.parsers.base import PhysioLogError
from physiolog.parsers.discovery import base_from_path, find_sessions
from physiolog.session import read_physio

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("physiolog")
except PackageNotFoundError:
    __version__ = "dev"


@click.group()
@click.version_option(__version__, prog_name="physiolog")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """physiolog: CMRR physiological log reader"""
    setup_logging(verbose=verbose, console_format="%(levelname)s: %(message)s")


@cli.command()
@click.argument("base", type=click.Path())
@click.option(
    "--expected-version",
    help="LogVersion to accept (default: config, then EJA_1)",
)
@click.option(
    "--channels", "show_channels", is_flag=True, help="Show per-channel statistics"
)
def read(base: str, expected_version: str | None, show_channels: bool) -> None:
    """Read the five log files sharing BASE and summarize the scan.

    BASE is the common filename prefix, or the path of any one of the
    companion files.
    """
    version = get_expected_version(expected_version)
    try:
        result = read_physio(base_from_path(base), expected_version=version)
    except PhysioLogError as e:
        raise click.ClickException(str(e)) from e

    summary = result.summary()
    click.echo(f"UUID:                {summary['uuid']}")
    click.echo(f"Slices in scan:      {summary['num_slices']}")
    click.echo(f"Volumes in scan:     {summary['num_volumes']}")
    click.echo(f"First timestamp:     {summary['first_time']}")
    click.echo(f"Last timestamp:      {summary['last_time']}")
    click.echo(f"Total scan duration: {summary['duration_ticks']} ticks")
    click.echo(f"Total scan duration: {summary['duration_seconds']:.4f} s")
    click.echo(f"Active channels:     {', '.join(summary['channels']) or 'none'}")

    if show_channels:
        click.echo()
        click.echo(f"{'Channel':<8} {'Nonzero':>10} {'Min':>7} {'Max':>7}")
        click.echo("-" * 35)
        for name in ["ACQ", *result.active_channels]:
            values = result.acq if name == "ACQ" else result[name]
            click.echo(
                f"{name:<8} {int(np.count_nonzero(values)):>10} "
                f"{int(values.min()):>7} {int(values.max()):>7}"
            )


@cli.command("list-sessions")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--recursive", "-r", is_flag=True, help="Search subdirectories")
def list_sessions(directory: Path, recursive: bool) -> None:
    """List physio log sets found in DIRECTORY."""
    sessions = find_sessions(directory, recursive=recursive)

    if not sessions:
        click.echo(f"No physio logs found in {directory}")
        return

    for session in sessions:
        if session.is_complete:
            click.echo(f"{session.base}")
        else:
            missing = ", ".join(path.name for path in session.missing)
            click.echo(f"{session.base}  (incomplete, missing: {missing})")

    complete = sum(1 for s in sessions if s.is_complete)
    click.echo(f"\n{len(sessions)} log set(s), {complete} complete")


@cli.group()
def config() -> None:
    """Manage physiolog configuration."""
    pass


@config.command("set-version")
@click.argument("version")
def set_version_cmd(version: str) -> None:
    """Set the LogVersion accepted by default."""
    set_expected_version(version)
    click.echo(f"Expected log version set to: {version}")


@config.command("unset-version")
def unset_version_cmd() -> None:
    """Revert to the built-in LogVersion."""
    unset_expected_version()
    click.echo(f"Expected log version reset to: {get_expected_version()}")


@config.command("show")
def show_config_cmd() -> None:
    """Show current configuration."""
    config_path = get_config_path()
    click.echo(f"Config file: {config_path}")

    if not config_path.exists():
        click.echo("  (file does not exist)")

    config_data = load_config()
    click.echo(f"  expected log version = {get_expected_version()!r}")
    for section, values in config_data.items():
        if section == "format" or not isinstance(values, dict):
            continue
        click.echo(f"\n  [{section}]")
        for key, value in values.items():
            click.echo(f"    {key} = {value!r}")


if __name__ == "__main__":
    cli()
