# -*- coding: utf-8 -*-
import asyncio
import typing as t
from datetime import date, datetime
from zoneinfo import ZoneInfo

import click
from openai import AsyncOpenAI
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from academic_planner.extractor import AssignmentSource, PdfTextSource, StaticCatalogSource
from academic_planner.planner import OpenAIStudyPlanner, StudyPlanner
from clients.productivity import HttpCalendarStore
from clients.study_planner import HttpStudyPlanner
from orchestrator.driver import CalendarDriver
from orchestrator.models import ClearSummary, ImportSummary
from orchestrator.utils import configure_logging, console, expand_document_paths
from productivity_server.models import CalendarEvent, Task
from productivity_server.store import CalendarStore, InMemoryCalendarStore
from schedule_parser.documents import read_schedule_html
from services.shared.config import Settings


def format_datetime_human(value: datetime, allday: bool = False) -> str:
    """Convert a datetime to human-readable format (MM/DD HH:MM)."""
    return value.strftime("%m/%d" if allday else "%m/%d %H:%M")


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def create_calendar_table(events: list[CalendarEvent], tasks: list[Task]) -> Table:
    """Create a summary table for events and tasks."""
    table = Table(title="📅 Calendar", show_header=True, header_style="bold magenta")
    table.add_column("", style="cyan", width=3)
    table.add_column("Title", style="white")
    table.add_column("Date/Time", style="yellow")
    table.add_column("Repeats", style="green")

    for event in sorted(events, key=lambda e: e.startdatetime):
        start_formatted = format_datetime_human(event.startdatetime, event.allday)
        end_formatted = format_datetime_human(event.enddatetime, event.allday)
        table.add_row(
            "📅",
            truncate_title(event.title),
            start_formatted if event.allday else f"{start_formatted} → {end_formatted}",
            "weekly" if event.rrule else "",
        )

    for task in sorted(tasks, key=lambda x: x.duedate):
        table.add_row(
            "✅",
            truncate_title(f"{task.coursename} - {task.taskname}"),
            format_datetime_human(task.duedate),
            "",
        )

    return table


def print_import_summary(title: str, summary: ImportSummary) -> None:
    stats_text = Text()
    stats_text.append("Created: ", style="white")
    stats_text.append(f"{summary.created}", style="bold green")
    if summary.skipped:
        stats_text.append("\nAlready present: ", style="white")
        stats_text.append(f"{summary.skipped}", style="bold yellow")
    if summary.tasks_created or summary.tasks_failed:
        stats_text.append("\nTasks created: ", style="white")
        stats_text.append(f"{summary.tasks_created}", style="bold green")
    if summary.source:
        stats_text.append("\nPlan source: ", style="white")
        stats_text.append(summary.source, style="bold cyan")
    failed = summary.failed + summary.tasks_failed
    if failed:
        stats_text.append("\nFailed: ", style="white")
        stats_text.append(f"{failed}", style="bold red")

    console.print(Panel(stats_text, title=f"📊 {title}", border_style="red" if failed else "green"))


def print_clear_summary(title: str, summary: ClearSummary) -> None:
    stats_text = Text()
    stats_text.append("Deleted events: ", style="white")
    stats_text.append(f"{summary.deleted_events}", style="bold green")
    stats_text.append("\nDeleted tasks: ", style="white")
    stats_text.append(f"{summary.deleted_tasks}", style="bold green")
    if summary.failed:
        stats_text.append("\nFailed: ", style="white")
        stats_text.append(f"{summary.failed}", style="bold red")

    console.print(Panel(stats_text, title=f"🧹 {title}", border_style="red" if summary.failed else "green"))


class CliContext:
    """Settings and store selection shared by all commands."""

    def __init__(self, settings: Settings, in_memory: bool) -> None:
        self.settings = settings
        self.in_memory = in_memory

    def store(self) -> CalendarStore:
        if self.in_memory:
            return InMemoryCalendarStore(self.settings.user)
        return HttpCalendarStore(
            self.settings.productivity_service_url,
            self.settings.user,
            tz=ZoneInfo(self.settings.tzid),
        )

    async def run(
        self,
        operation: t.Callable[[CalendarDriver], t.Awaitable[t.Any]],
        assignment_source: t.Optional[AssignmentSource] = None,
    ) -> t.Any:
        """Build a driver, run one operation on it and release its clients."""
        openai_client = None
        planner: t.Optional[StudyPlanner] = None
        tz = ZoneInfo(self.settings.tzid)
        if not self.in_memory:
            planner = HttpStudyPlanner(
                self.settings.academic_planner_service_url,
                timeout=self.settings.planner_timeout,
                tz=tz,
            )
        elif self.settings.openai_api_key:
            openai_client = AsyncOpenAI(api_key=self.settings.openai_api_key, timeout=self.settings.planner_timeout)
            planner = OpenAIStudyPlanner(openai_client, model=self.settings.openai_model, tz=tz)

        driver = CalendarDriver(
            self.store(),
            planner=planner,
            assignment_source=assignment_source,
            settings=self.settings,
        )
        try:
            return await operation(driver)
        finally:
            if openai_client is not None:
                await openai_client.close()


pass_cli = click.make_pass_decorator(CliContext)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option(
    "--in-memory",
    is_flag=True,
    help="Use a throwaway in-process calendar instead of the productivity service.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, in_memory: bool) -> None:
    """Populate a student calendar with classes, deadlines and study sessions."""
    configure_logging(verbose)
    ctx.obj = CliContext(Settings.from_env(), in_memory)


@main.command("import-classes")
@click.argument("schedule")
@click.option("--start", "start_date", type=click.DateTime(["%Y-%m-%d"]), help="First term day.")
@click.option("--end", "end_date", type=click.DateTime(["%Y-%m-%d"]), help="Last term day.")
@click.option("--with-dates", is_flag=True, help="Also add the term's important dates.")
@pass_cli
def import_classes(
    cli: CliContext,
    schedule: str,
    start_date: t.Optional[datetime],
    end_date: t.Optional[datetime],
    with_dates: bool,
) -> None:
    """Import weekly classes from a calendar-grid SCHEDULE page (path or URL)."""
    html = read_schedule_html(schedule)
    start: t.Optional[date] = start_date.date() if start_date else None
    end: t.Optional[date] = end_date.date() if end_date else None

    with console.status("[bold green]Importing classes..."):
        if with_dates:
            summary = asyncio.run(cli.run(lambda d: d.populate_from_schedule(html, start, end)))
        else:
            summary = asyncio.run(cli.run(lambda d: d.import_classes(html, start, end)))
    print_import_summary("Classes", summary)


@main.command("import-dates")
@pass_cli
def import_dates(cli: CliContext) -> None:
    """Add the term's important dates as all-day events."""
    with console.status("[bold green]Adding important dates..."):
        summary = asyncio.run(cli.run(lambda d: d.import_important_dates()))
    print_import_summary("Important dates", summary)


@main.command("import-assignments")
@click.argument("documents", nargs=-1, required=True)
@click.option(
    "--mine-pdf",
    is_flag=True,
    help="Read dates from the PDF text instead of the built-in course table.",
)
@pass_cli
def import_assignments(cli: CliContext, documents: tuple[str, ...], mine_pdf: bool) -> None:
    """Import assignments and exams from course DOCUMENTS (files or directories)."""
    paths = expand_document_paths(documents)
    source = PdfTextSource(term_year=cli.settings.term_start.year) if mine_pdf else StaticCatalogSource()

    console.print(
        Panel.fit(
            f"[bold blue]📚 Course documents[/bold blue]\n"
            f"Processing [bold]{len(paths)}[/bold] documents",
            border_style="blue"
        )
    )
    with console.status("[bold green]Importing assignments and exams..."):
        summary = asyncio.run(cli.run(lambda d: d.import_assignments(paths), assignment_source=source))
    print_import_summary("Assignments and exams", summary)


@main.command("study-plan")
@pass_cli
def study_plan(cli: CliContext) -> None:
    """Generate study sessions for the assignments and exams on the calendar."""
    with console.status("[bold green]Generating study plan..."):
        summary = asyncio.run(cli.run(lambda d: d.generate_study_schedule()))
    if summary.source in ("mock", "mock_fallback"):
        console.print("[yellow]AI planner unavailable, using the built-in study plan.[/yellow]")
    print_import_summary("Study sessions", summary)


@main.command("clear")
@click.option("--assignments", "category", flag_value="assignments", help="Assignment and exam events and tasks.")
@click.option("--sessions", "category", flag_value="sessions", help="AI-generated study sessions.")
@click.option("--all", "category", flag_value="all", help="Every calendar event.")
@pass_cli
def clear(cli: CliContext, category: t.Optional[str]) -> None:
    """Remove one category of calendar entries."""
    operations: dict[str, t.Callable[[CalendarDriver], t.Awaitable[ClearSummary]]] = {
        "assignments": lambda d: d.clear_assignments_and_exams(),
        "sessions": lambda d: d.clear_study_sessions(),
        "all": lambda d: d.clear_all_events(),
    }
    if category is None:
        raise click.UsageError("Choose one of --assignments, --sessions or --all.")

    summary = asyncio.run(cli.run(operations[category]))
    print_clear_summary(f"Cleared {category}", summary)


@main.command("show")
@pass_cli
def show(cli: CliContext) -> None:
    """List the calendar events and tasks."""
    async def _load(driver: CalendarDriver) -> tuple[list[CalendarEvent], list[Task]]:
        return await asyncio.gather(driver.store.list_calendar_events(), driver.store.list_tasks())

    events, tasks = asyncio.run(cli.run(_load))
    if not events and not tasks:
        console.print("📅 No calendar events or tasks found.")
        return
    console.print(create_calendar_table(events, tasks))


if __name__ == "__main__":
    main()
