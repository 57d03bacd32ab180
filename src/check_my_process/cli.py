"""check-my-process CLI entry point."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from check_my_process import __version__

_SECTION_TITLES: dict[str, str] = {
    "settings": "Settings",
    "pr": "PR rules",
    "branch": "Branch rules",
    "ticket": "Ticket rules",
}


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="cmp")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """cmp - enforce software development process standards as code."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    _configure_logging(verbose=verbose, quiet=quiet)


_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (default: ./cmp.toml, else built-in defaults).",
)


@main.command()
@click.option("--repo", required=True, help="GitHub repository (e.g. owner/repo).")
@click.option("--pr", "pr_number", required=True, type=int, help="Pull request number.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@_config_option
def check(*, repo: str, pr_number: int, fmt: str, config_path: Path | None) -> None:
    """Check a pull request against process standards.

    Exit codes: 0 = no failing error-severity rule,
    1 = at least one error-severity rule failed,
    2 = configuration, input, or GitHub error.
    """
    from check_my_process.checks import CheckContext, run_checks
    from check_my_process.config import (
        ConfigNotFoundError,
        ConfigParseError,
        ConfigValidationError,
        load_config,
    )
    from check_my_process.formatter import format_json, format_text
    from check_my_process.github import (
        GitHubAPIError,
        GitHubAuthError,
        GitHubNotFoundError,
        create_github_client,
    )

    try:
        config = load_config(config_path)
    except (ConfigNotFoundError, ConfigParseError, ConfigValidationError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        click.echo("Error: GITHUB_TOKEN environment variable is required", err=True)
        click.echo("Set it with: export GITHUB_TOKEN=<your-token>", err=True)
        sys.exit(2)

    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        click.echo("Error: --repo must be in format owner/repo", err=True)
        sys.exit(2)

    try:
        with create_github_client(token, os.environ.get("GITHUB_API_URL")) as client:
            snapshot = client.get_pull_request(owner, name, pr_number)
    except GitHubAuthError:
        click.echo("Error: Invalid GitHub token", err=True)
        sys.exit(2)
    except GitHubNotFoundError:
        click.echo(f"Error: PR #{pr_number} not found in {repo}", err=True)
        sys.exit(2)
    except GitHubAPIError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    summary = run_checks(CheckContext(snapshot=snapshot, config=config))

    if fmt == "json":
        output = format_json(summary, version=__version__, repo=repo, pr_number=pr_number)
    else:
        output = format_text(
            summary,
            version=__version__,
            repo=repo,
            pr_number=pr_number,
            color=sys.stdout.isatty(),
        )
    click.echo(output)

    if summary.has_errors:
        sys.exit(1)


@main.command()
@_config_option
def validate(*, config_path: Path | None) -> None:
    """Validate the cmp.toml config file and show the effective settings."""
    from check_my_process.config import (
        ConfigNotFoundError,
        ConfigParseError,
        ConfigValidationError,
        config_to_dict,
        find_config_path,
        load_config,
    )

    try:
        config = load_config(config_path)
    except (ConfigNotFoundError, ConfigParseError, ConfigValidationError) as exc:
        click.echo(f"✗ {exc}", err=True)
        sys.exit(1)

    source = config_path or find_config_path()
    click.echo("✓ Config is valid")
    click.echo(f"Source: {source if source is not None else 'built-in defaults'}")

    for section, values in config_to_dict(config).items():
        click.echo("")
        click.echo(f"{_SECTION_TITLES.get(section, section)}:")
        for key, value in values.items():
            shown = ", ".join(value) if isinstance(value, list) else value
            click.echo(f"  {key}: {shown}")


@main.command()
@click.option(
    "--path",
    "target",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the config (default: ./cmp.toml).",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def init(*, target: Path | None, force: bool) -> None:
    """Create a starter cmp.toml config file."""
    from check_my_process.config import CONFIG_FILENAME, DEFAULT_CONFIG, render_config

    path = target or Path.cwd() / CONFIG_FILENAME
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    path.write_text(render_config(DEFAULT_CONFIG), encoding="utf-8")
    click.echo(f"Created {path}")
