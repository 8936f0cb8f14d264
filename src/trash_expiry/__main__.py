"""CLI entry point for trash-expiry."""

import logging
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError

from . import __version__
from .config import (
    PathsConfig,
    PolicyConfig,
    config_search_path,
    load_policy,
    xdg_config_home,
)
from .domain.errors import TrashDirectoryError
from .domain.models import Classification, RunReport
from .expiry import run_expiry

SERVICE_NAME = "trash-expiry.service"
TIMER_NAME = "trash-expiry.timer"
RESOURCES_DIR = Path(__file__).parent / "resources"
INTERVALS = ["hourly", "daily", "weekly"]


class FatalError(click.ClickException):
    """Error that stops the run before any entry is processed."""

    exit_code = 2


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def systemd_user_dir() -> Path:
    return xdg_config_home() / "systemd" / "user"


def resolve_policy(config_path: Path | None) -> PolicyConfig:
    try:
        return load_policy(config_search_path(config_path))
    except ValidationError as e:
        raise FatalError(f"Invalid configuration: {e}") from e


def resolve_paths(trash_dir: Path | None) -> PathsConfig:
    try:
        return PathsConfig(trash=trash_dir) if trash_dir else PathsConfig()
    except ValidationError as e:
        raise FatalError(f"Invalid configuration: {e}") from e


def echo_report(report: RunReport) -> None:
    """Print erased, warned and failed items plus a summary line."""
    for outcome in report.outcomes:
        original = outcome.record.original_path
        if outcome.classification is Classification.WARN:
            click.echo(
                f"{original}: deleted {outcome.age_days} days ago, "
                f"will be erased in {outcome.days_left} days"
            )
        elif outcome.erased:
            click.echo(f"Erased {original} (deleted {outcome.age_days} days ago)")
        elif outcome.partial:
            click.echo(f"Erased {original}, but: {outcome.error}", err=True)
        elif outcome.error:
            click.echo(f"✗ {original}: {outcome.error}", err=True)

    for failure in report.parse_failures:
        click.echo(f"✗ Error reading trash info {failure}", err=True)

    click.echo(
        f"\nExpired: {report.erased} erased, {report.warned} warned, "
        f"{report.fresh} fresh, {report.errors} errors"
    )


def exec_command() -> str:
    """Command line the systemd service uses to invoke us."""
    exe = shutil.which("trash-expiry")
    if exe:
        return exe
    return f"{sys.executable} -m trash_expiry"


def render_unit(name: str, **values: str) -> str:
    """Fill ``@KEY@`` placeholders in a bundled unit template."""
    text = (RESOURCES_DIR / name).read_text()
    for key, value in values.items():
        text = text.replace(f"@{key.upper()}@", value)
    return text


@click.group()
@click.version_option(__version__, prog_name="trash-expiry")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """Trash Expiry - remove old items from trash."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.option(
    "--trash-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Trash root containing info/ and files/",
)
@click.pass_context
def run(ctx: click.Context, trash_dir: Path | None) -> None:
    """Erase trashed items past the retention period."""
    policy = resolve_policy(ctx.obj["config_path"])
    paths = resolve_paths(trash_dir)

    try:
        report = run_expiry(paths.info, datetime.now().astimezone(), policy)
    except TrashDirectoryError as e:
        raise FatalError(str(e)) from e

    echo_report(report)
    if not report.success:
        sys.exit(1)


@cli.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the resolved policy and trash location."""
    policy = resolve_policy(ctx.obj["config_path"])
    paths = resolve_paths(None)
    click.echo(f"trash: {paths.trash}")
    click.echo(f"warn_after_days: {policy.warn_after_days}")
    click.echo(f"delete_after_days: {policy.delete_after_days}")
    if policy.warn_after_days > policy.delete_after_days:
        click.echo(
            "note: warn_after_days > delete_after_days, no warnings will be shown"
        )


@cli.command()
@click.option(
    "--interval",
    type=click.Choice(INTERVALS),
    default="daily",
    show_default=True,
    help="How often the timer fires",
)
def install(interval: str) -> None:
    """Install systemd user timer."""
    unit_dir = systemd_user_dir()
    unit_dir.mkdir(parents=True, exist_ok=True)

    service_path = unit_dir / SERVICE_NAME
    service_path.write_text(render_unit(SERVICE_NAME, exec=exec_command()))
    click.echo(f"Installed: {service_path}")

    timer_path = unit_dir / TIMER_NAME
    timer_path.write_text(render_unit(TIMER_NAME, interval=interval))
    click.echo(f"Installed: {timer_path}")

    subprocess.run(["systemctl", "--user", "daemon-reload"], check=True)
    subprocess.run(["systemctl", "--user", "enable", "--now", TIMER_NAME], check=True)
    click.echo("Timer enabled")


@cli.command()
def uninstall() -> None:
    """Remove systemd user timer."""
    unit_dir = systemd_user_dir()
    timer_path = unit_dir / TIMER_NAME

    if not timer_path.exists():
        click.echo("Timer not installed")
        return

    subprocess.run(
        ["systemctl", "--user", "disable", "--now", TIMER_NAME], check=False
    )
    click.echo("Timer disabled")

    for path in (timer_path, unit_dir / SERVICE_NAME):
        path.unlink(missing_ok=True)
        click.echo(f"Removed: {path}")

    subprocess.run(["systemctl", "--user", "daemon-reload"], check=False)


if __name__ == "__main__":
    cli()
