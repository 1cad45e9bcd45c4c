"""Console report for computed versions."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .versioning.models import FallbackReason, FallbackResult, VersionResult
from .versioning.versioner import VersionOutcome


class VersionReportDisplay:
    """Renders a VersionResult or FallbackResult with rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display(self, outcome: VersionOutcome) -> None:
        if isinstance(outcome, FallbackResult):
            self._display_fallback(outcome)
        else:
            self._display_result(outcome)

    def _header(self) -> None:
        self.console.print(f"[bold]Git Versioner v{__version__}[/bold]")

    def _display_result(self, result: VersionResult) -> None:
        self._header()

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value")

        table.add_row("VersionCode", str(result.version_code))
        table.add_row(
            "VersionName", f"[bold green]{escape(result.version_name)}[/bold green]"
        )
        table.add_row("", "")
        table.add_row(
            "baseBranch", escape(result.base_branch or "") or "[dim]none[/dim]"
        )
        table.add_row(
            "current branch", escape(result.branch_name or "") or "[dim]detached[/dim]"
        )
        table.add_row("current commit", result.current_commit_short)
        table.add_row("", "")
        table.add_row(
            "baseBranch commits",
            f"{result.base_branch_commit_count} ({result.base_branch_range})",
        )
        table.add_row(
            "featureBranch commits",
            f"{result.feature_branch_commit_count} ({result.feature_branch_range})",
        )
        table.add_row("", "")
        table.add_row(
            "timeComponent",
            f"{result.time_component} (yearFactor:{result.year_factor})",
        )
        table.add_row("LocalChanges", result.local_changes.short_stats())

        self.console.print(table)

    def _display_fallback(self, fallback: FallbackResult) -> None:
        self._header()

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value")
        table.add_row("VersionCode", str(fallback.version_code))
        table.add_row("VersionName", fallback.version_name)
        table.add_row("", "")
        candidates = ", ".join(fallback.base_branch_candidates)
        table.add_row("baseBranch", escape(candidates))
        self.console.print(table)

        lines = [f"[bold]{fallback.message}[/bold]"]
        if fallback.reason == FallbackReason.SHALLOW_HISTORY:
            lines.append(
                f"Default values versionName: '{fallback.version_name}', "
                f"versionCode: {fallback.version_code} are used instead."
            )
            lines.append("")
            lines.append("Please fetch the complete history with:")
        else:
            lines.append("")
            lines.append("Run:")
        lines.append(f"    {fallback.remedy}")

        self.console.print(
            Panel(
                "\n".join(lines),
                title="WARNING",
                title_align="left",
                border_style="yellow",
            )
        )
