"""Rich UI components for the tracker."""

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from scholarquest.leveling import LevelingResult, rank_name
from scholarquest.models import PaperRecord, PaperStatus, Tier

# Shared console instance
console = Console()

TIER_STYLES = {
    Tier.A: "bold gold1",
    Tier.B: "bold green",
    Tier.C: "bold deep_sky_blue1",
    Tier.OTHER: "grey62",
}

TIER_LABELS = {
    Tier.A: "Golden Legend",
    Tier.B: "Emerald",
    Tier.C: "Sapphire",
    Tier.OTHER: "Common",
}

STATUS_STYLES = {
    PaperStatus.ACCEPTED: "green",
    PaperStatus.SUBMITTED: "blue",
    PaperStatus.WRITING: "magenta",
    PaperStatus.TARGET: "violet",
    PaperStatus.REJECTED: "red",
}

EMPTY_MESSAGE = "No records yet. Add one to start your research chapter."
EMPTY_REJECTED_MESSAGE = "Nothing here. May the abyss stay silent forever."


def create_progress_panel(leveling: LevelingResult) -> Panel:
    """Create the level/XP panel."""
    header = Text()
    header.append(f"LV.{leveling.level}", style="bold blue")
    header.append("  ")
    header.append(rank_name(leveling.level), style="bold cyan")

    bar = ProgressBar(total=100, completed=leveling.progress_percent, width=40)

    counters = Text()
    counters.append(f"{leveling.current_xp} / {leveling.required_xp} XP", style="yellow")
    counters.append(f"  ({leveling.progress_percent:.0f}%)", style="dim")
    counters.append(f"  Next: LV.{leveling.next_level}", style="dim")

    return Panel(
        Group(header, Text(), bar, counters),
        title="[bold]Scholar Rank[/bold]",
        border_style="blue",
        box=box.ROUNDED,
    )


def create_stats_text(counts: dict[PaperStatus, int], leveling: LevelingResult) -> Text:
    """One-line summary: total XP, accepted papers and rejections."""
    text = Text()
    text.append("Total XP: ", style="dim")
    text.append(str(leveling.total_points), style="bold blue")
    text.append(" | Accepted: ", style="dim")
    text.append(str(counts.get(PaperStatus.ACCEPTED, 0)), style="bold green")
    text.append(" | Scars: ", style="dim")
    text.append(str(counts.get(PaperStatus.REJECTED, 0)), style="bold red")
    return text


def create_records_table(records: list[PaperRecord], status: PaperStatus) -> Table | Panel:
    """Create a table of the records in one status tab."""
    if not records:
        message = EMPTY_REJECTED_MESSAGE if status == PaperStatus.REJECTED else EMPTY_MESSAGE
        return Panel(f"[dim]{message}[/dim]", border_style="dim", box=box.ROUNDED)

    table = Table(
        title=f"[bold {STATUS_STYLES[status]}]{status.value}[/bold {STATUS_STYLES[status]}]",
        box=box.ROUNDED,
        show_lines=False,
        header_style="bold magenta",
        title_justify="left",
    )

    table.add_column("ID", style="dim", width=10)
    table.add_column("Tier", width=14)
    table.add_column("Title", style="cyan", max_width=45, overflow="ellipsis")
    table.add_column("Venue", style="white", max_width=16, overflow="ellipsis")
    table.add_column("Submitted", style="dim", width=11)
    table.add_column("Scores", style="yellow", max_width=12)
    table.add_column("Result", width=10)

    for record in records:
        if record.status == PaperStatus.REJECTED:
            tier_str = "[red]Abyss Bound[/red]"
            result_str = "[red]Banished[/red]"
        else:
            style = TIER_STYLES[record.tier]
            tier_str = f"[{style}]{TIER_LABELS[record.tier]}[/{style}]"
            if record.status == PaperStatus.ACCEPTED:
                result_str = "[green]Ascended[/green]"
            else:
                result_str = record.result.value

        table.add_row(
            record.id,
            tier_str,
            record.title,
            record.conference or "-",
            record.submission_date or "-",
            record.final_scores or record.scores or "-",
            result_str,
        )

    return table


def create_dashboard(
    leveling: LevelingResult,
    counts: dict[PaperStatus, int],
    records: list[PaperRecord],
    status: PaperStatus,
) -> Group:
    """Progress panel, stats line and the records of one status tab."""
    return Group(
        create_progress_panel(leveling),
        create_stats_text(counts, leveling),
        Text(),
        create_records_table(records, status),
    )


class ConsoleEventHandler:
    """Event handler that announces level changes on the console."""

    def __init__(self, target: Console | None = None):
        self.console = target or console

    def on_records_changed(self, *args, **kwargs) -> None:
        pass

    def on_status_changed(self, record: PaperRecord, old_status: PaperStatus, new_status: PaperStatus, **kwargs) -> None:
        style = STATUS_STYLES[new_status]
        self.console.print(
            f"[dim]{record.title[:50]}:[/dim] {old_status.value} -> [{style}]{new_status.value}[/{style}]"
        )

    def on_level_change(self, old_level: int, new_level: int, **kwargs) -> None:
        if new_level > old_level:
            self.console.print(f"[bold gold1]Level up! LV.{old_level} -> LV.{new_level} ({rank_name(new_level)})[/bold gold1]")
        else:
            self.console.print(f"[yellow]Level down: LV.{old_level} -> LV.{new_level}[/yellow]")
