"""CLI entry point for podgrab."""

import asyncio
import signal
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from podgrab.audio.downloader import ChunkedDownloader, DownloadProgress
from podgrab.config.logging import setup_logging
from podgrab.config.manager import ConfigManager
from podgrab.pipeline import DownloadPipeline, RunOutcome, RunReport
from podgrab.utils.errors import ConfigError

app = typer.Typer(
    name="podgrab",
    help="Download every episode of a podcast feed",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


class ProgressDisplay:
    """Feeds downloader progress updates into a rich progress bar."""

    def __init__(self, progress: Progress) -> None:
        self.progress = progress
        self._task = None
        self._filename: str | None = None

    def __call__(self, update: DownloadProgress) -> None:
        if self._task is not None and update.filename != self._filename:
            self.progress.remove_task(self._task)
            self._task = None

        if self._task is None:
            self._filename = update.filename
            self._task = self.progress.add_task(
                update.filename or "episode", total=update.total_bytes
            )

        self.progress.update(
            self._task, completed=update.downloaded_bytes, total=update.total_bytes
        )

        if update.status == "finished":
            self.progress.remove_task(self._task)
            self._task = None


def install_interrupt_handler(cancel_event: asyncio.Event) -> None:
    """Make the first Ctrl-C request a graceful stop.

    The handler removes itself, so a second Ctrl-C raises KeyboardInterrupt.
    """
    loop = asyncio.get_running_loop()

    def on_interrupt() -> None:
        err_console.print("[yellow]Stopping after the current episode...[/yellow]")
        cancel_event.set()
        loop.remove_signal_handler(signal.SIGINT)

    try:
        loop.add_signal_handler(signal.SIGINT, on_interrupt)
    except (NotImplementedError, RuntimeError):
        # No loop signal support (Windows, non-main thread): Ctrl-C stays a
        # KeyboardInterrupt and is handled by the caller.
        return


def print_summary(report: RunReport) -> None:
    """Print the end-of-run table."""
    if report.output_directory is None:
        return

    if report.outcome == RunOutcome.COMPLETED:
        console.print("\n[bold green]✓ Complete![/bold green]")
    elif report.outcome == RunOutcome.CANCELLED:
        console.print("\n[yellow]⚠ Cancelled[/yellow]")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="white")

    table.add_row("Feed:", escape(report.feed_title or ""))
    table.add_row("Downloaded:", str(report.downloaded))
    table.add_row("Skipped:", str(report.skipped))
    table.add_row("Failed:", f"[red]{report.failed}[/red]" if report.failed else "0")
    table.add_row("Output:", escape(str(report.output_directory)))

    console.print(table)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from podgrab import __version__

    console.print(f"[bold cyan]podgrab[/bold cyan] v{__version__}")


@app.command("download")
def download_command(
    url: str = typer.Argument(..., help="Podcast RSS feed URL"),
    output_directory: Path | None = typer.Option(
        None,
        "--output-directory",
        "-o",
        help="Directory to create the feed folder in (default: from config, else current directory)",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show informational messages and progress"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write log lines to this file"
    ),
) -> None:
    """Download all episodes of a podcast feed.

    Episodes are saved oldest first into a folder named after the feed.
    Files that already exist are skipped, so re-running only fetches new
    episodes.

    Examples:
        podgrab download https://example.com/feed.xml

        podgrab download https://example.com/feed.xml -o ~/Podcasts -v
    """
    try:
        config = ConfigManager().load_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    logger = setup_logging(verbose=verbose, log_file=log_file, console=err_console)

    async def run_download() -> RunReport:
        cancel_event = asyncio.Event()
        install_interrupt_handler(cancel_event)

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=err_console,
            transient=True,
            disable=not verbose,
        ) as progress:
            downloader = ChunkedDownloader(
                chunk_count=config.chunk_count,
                parallel=config.parallel_download,
                user_agent=config.user_agent,
                timeout=config.request_timeout,
                progress_callback=ProgressDisplay(progress) if verbose else None,
            )
            pipeline = DownloadPipeline(config, logger, downloader=downloader)
            return await pipeline.run(
                url, base_dir=output_directory, cancel_event=cancel_event
            )

    try:
        report = asyncio.run(run_download())
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(RunOutcome.CANCELLED.exit_code)
    except Exception as e:
        console.print(f"\n[red]✗[/red] Unexpected error: {escape(str(e))}")
        import traceback

        console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
        sys.exit(1)

    print_summary(report)
    sys.exit(report.outcome.exit_code)


if __name__ == "__main__":
    app()
