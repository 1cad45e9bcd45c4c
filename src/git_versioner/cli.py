"""Command line interface for Git Versioner."""

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .config import BranchConfig, Config, ConfigManager, FormatOptions
from .config import TimeComponentConfig
from .report import VersionReportDisplay
from .services.branch_name_providers import create_branch_name_resolver
from .services.git_history_provider import GitHistoryProvider
from .versioning.errors import GitVersionerError
from .versioning.versioner import GitVersioner, VersionOutcome

console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"❌ {message}", style="red", markup=False)
    sys.exit(1)


def _apply_overrides(
    config: Config,
    base_branch: Tuple[str, ...],
    no_details: bool,
    year_factor: Optional[int],
) -> Config:
    """Return a copy of ``config`` with command line overrides applied."""
    update = {}
    if base_branch:
        update["branches"] = BranchConfig(base_branches=list(base_branch))
    if no_details:
        update["format"] = FormatOptions(add_local_changes_details=False)
    if year_factor is not None:
        update["time_component"] = TimeComponentConfig(year_factor=year_factor)
    return config.model_copy(update=update) if update else config


def _compute(ctx, base_branch, no_details, year_factor) -> VersionOutcome:
    """Load configuration and compute the version for the project directory."""
    project_dir: Path = ctx.obj["project_dir"]
    try:
        config = ctx.obj["config_manager"].load()
        config = _apply_overrides(config, base_branch, no_details, year_factor)
    except ValueError as e:
        _fail(f"Invalid configuration: {e}")

    ctx.obj["config"] = config
    history = GitHistoryProvider(project_dir, timeout=config.git.timeout)
    resolver = create_branch_name_resolver(
        history,
        env_vars=config.ci.branch_env_vars,
        prefer_environment=config.ci.prefer_environment,
    )
    versioner = GitVersioner(history, branch_name_resolver=resolver)

    try:
        return versioner.compute_version(
            config.branches, config.format, config.time_component
        )
    except GitVersionerError as e:
        _fail(f"Failed to compute version: {e}")


def version_options(func):
    """Options shared by every command that computes a version."""
    func = click.option(
        "--year-factor",
        type=click.IntRange(min=0),
        default=None,
        help="Version code points per year of history (0 disables)",
    )(func)
    func = click.option(
        "--no-details",
        is_flag=True,
        help="Omit '(files +additions -deletions)' after -SNAPSHOT",
    )(func)
    func = click.option(
        "--base-branch",
        "-b",
        multiple=True,
        help="Base branch candidate, repeat for fallbacks (overrides config)",
    )(func)
    return func


@click.group()
@click.option("--config", "-c", type=click.Path(exists=False), help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option(
    "--path",
    "-p",
    type=click.Path(exists=True, file_okay=False),
    help="Repository directory (default: current directory)",
)
@click.version_option(version=__version__, prog_name="git-versioner")
@click.pass_context
def cli(ctx, config: Optional[str], verbose: bool, path: Optional[str]):
    """Derive build versions from git history.

    \b
    The version code is the number of commits on the base branch up to the
    point where the current checkout branched off. The version name adds the
    branch, the number of feature commits and uncommitted changes:

    \b
      7                      on the base branch
      7-bug_123+4            4 commits on feature/bug_123
      7-bug_123+4-SNAPSHOT(3 +5 -7)   with local changes

    \b
    CONFIGURATION:
      Config file: .git-versioner/config.json (see 'git-versioner init')
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    project_dir = Path(path).resolve() if path else Path.cwd()
    ctx.obj["project_dir"] = project_dir
    if config:
        ctx.obj["config_manager"] = ConfigManager(Path(config))
    else:
        ctx.obj["config_manager"] = ConfigManager.create_with_backtrack(project_dir)


@cli.command()
@version_options
@click.pass_context
def show(ctx, base_branch, no_details, year_factor):
    """Display the version information extracted from git history."""
    outcome = _compute(ctx, base_branch, no_details, year_factor)
    VersionReportDisplay(console).display(outcome)


@cli.command()
@version_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file (default: build/gitversion/gitversion.json)",
)
@click.pass_context
def generate(ctx, base_branch, no_details, year_factor, output: Optional[str]):
    """Write the version information as a machine readable JSON file."""
    outcome = _compute(ctx, base_branch, no_details, year_factor)

    if output:
        output_path = Path(output)
    else:
        output_path = ctx.obj["config"].output.output_file
        if not output_path.is_absolute():
            output_path = ctx.obj["project_dir"] / output_path

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(outcome.to_dict(), indent=2) + "\n", encoding="utf-8"
        )
    except OSError as e:
        _fail(f"Failed to write {output_path}: {e}")

    console.print(
        f"✅ Version {outcome.version_name} written to: {output_path}", markup=False
    )


@cli.command()
@version_options
@click.pass_context
def code(ctx, base_branch, no_details, year_factor):
    """Print only the version code."""
    outcome = _compute(ctx, base_branch, no_details, year_factor)
    click.echo(outcome.version_code)


@cli.command()
@version_options
@click.pass_context
def name(ctx, base_branch, no_details, year_factor):
    """Print only the version name."""
    outcome = _compute(ctx, base_branch, no_details, year_factor)
    click.echo(outcome.version_name)


@cli.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config")
@click.pass_context
def init(ctx, force: bool):
    """Create a default configuration file."""
    config_manager: ConfigManager = ctx.obj["config_manager"]
    if not ctx.parent.params.get("config"):
        # Always create next to the repository, not in a parent directory
        config_manager = ConfigManager(
            ctx.obj["project_dir"] / ConfigManager.DEFAULT_CONFIG_PATH
        )

    if config_manager.config_path.exists() and not force:
        _fail(
            f"Config already exists: {config_manager.config_path} "
            "(use --force to overwrite)"
        )

    config_manager.save(Config())
    console.print(
        f"✅ Created config: {config_manager.config_path}", style="green", markup=False
    )


def main():
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n❌ Interrupted by user", style="red")
        sys.exit(1)


if __name__ == "__main__":
    main()
