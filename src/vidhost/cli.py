"""Command-line interface using Typer."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from vidhost import __version__
from vidhost.config import settings
from vidhost.logging import setup_logging

if TYPE_CHECKING:
    from vidhost.dashboard import Dashboard, UploadReceipt

# Setup logging
setup_logging()

app = typer.Typer(
    name="vidhost",
    help="vidhost - upload videos and watch their analytics",
    add_completion=False,
)

console = Console()

T = TypeVar("T")

STATUS_STYLES = {
    "PENDING": "yellow",
    "PROCESSING": "blue",
    "COMPLETED": "green",
    "FAILED": "red",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"vidhost v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """vidhost - upload videos, track processing, and count views and likes."""
    pass


def _with_dashboard(action: Callable[["Dashboard"], Awaitable[T]]) -> T:
    """Run an async action against a dashboard wired to the configured APIs."""
    from vidhost.adapters.analytics.http import HttpAnalyticsAccessor
    from vidhost.dashboard import Dashboard, UploaderClient

    async def run() -> T:
        uploader = UploaderClient(settings.uploader_api_url)
        analytics = HttpAnalyticsAccessor(settings.analytics_api_url)
        dashboard = Dashboard(
            uploader,
            analytics,
            poll_interval_seconds=settings.dashboard_poll_interval_seconds,
            bucket_override=settings.s3_public_bucket_name,
        )
        try:
            return await action(dashboard)
        finally:
            await dashboard.close()
            await uploader.aclose()
            await analytics.aclose()

    return asyncio.run(run())


def _render(dashboard: "Dashboard") -> Table:
    """Build the video table as currently displayed."""
    from vidhost.dashboard.merge import has_pending

    visible = dashboard.visible()
    title = f"Videos ({dashboard.sort_by.label})"
    if dashboard.search.strip():
        noun = "video" if len(visible) == 1 else "videos"
        title += f" - {len(visible)} {noun} matching \"{dashboard.search}\""
    if has_pending(dashboard.videos):
        title += " [dim](refreshing)[/dim]"

    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Status")
    table.add_column("Views", justify="right")
    table.add_column("Likes", justify="right")
    table.add_column("Created")
    table.add_column("URL")

    for video in visible:
        style = STATUS_STYLES.get(video.status.value, "white")
        table.add_row(
            video.id[:8],
            video.title[:40],
            f"[{style}]{video.status.value}[/{style}]",
            str(video.views),
            str(video.likes),
            video.created_at.strftime("%Y-%m-%d %H:%M"),
            video.video_url,
        )

    return table


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port"),
) -> None:
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "vidhost.main:app",
        host=host or settings.api_host,
        port=port or settings.port,
        reload=settings.api_reload,
    )


@app.command()
def upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Video file to upload"),
    title: str = typer.Option(..., "--title", "-t", help="Video title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
) -> None:
    """Upload a video file."""
    from vidhost.adapters.storage.base import guess_content_type
    from vidhost.domain.errors import ApiError

    if not title.strip():
        console.print("[bold red]Title is required[/bold red]")
        raise typer.Exit(code=1)

    async def action(dashboard: "Dashboard") -> "UploadReceipt":
        with path.open("rb") as fileobj:
            return await dashboard.uploader.upload_video(
                fileobj,
                path.name,
                title,
                description=description,
                content_type=guess_content_type(path.name),
            )

    try:
        receipt = _with_dashboard(action)
    except ApiError as e:
        console.print(f"[bold red]Upload failed: {e}[/bold red]")
        raise typer.Exit(code=1)

    console.print(f"[bold green]✓ {receipt.message}[/bold green]")
    console.print(f"  Video ID: [cyan]{receipt.video_id}[/cyan]")
    console.print(f"  Status: {receipt.status.value}")


@app.command()
def videos() -> None:
    """List stored video records without analytics."""
    from vidhost.domain.errors import ApiError

    async def action(board: "Dashboard") -> list:
        return await board.uploader.list_videos()

    try:
        records = _with_dashboard(action)
    except ApiError as e:
        console.print(f"[bold red]Failed to fetch videos: {e}[/bold red]")
        raise typer.Exit(code=1)

    if not records:
        console.print("[yellow]No videos uploaded yet[/yellow]")
        return

    table = Table(title=f"Videos ({len(records)})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Status")
    table.add_column("Key")
    table.add_column("Created")

    for video in records:
        style = STATUS_STYLES.get(video.status.value, "white")
        table.add_row(
            video.id,
            video.title[:40],
            f"[{style}]{video.status.value}[/{style}]",
            video.s3_key_original,
            video.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command()
def dashboard(
    search: str = typer.Option("", "--search", "-s", help="Filter by title or description"),
    sort: str = typer.Option(
        "newest",
        "--sort",
        help="Sort order: newest, oldest, most-viewed, most-liked",
    ),
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Keep refreshing while videos are pending or processing",
    ),
) -> None:
    """Show videos with their views and likes."""
    from vidhost.domain.enums import SortOption

    try:
        sort_by = SortOption(sort)
    except ValueError:
        console.print(f"[bold red]Unknown sort order: {sort}[/bold red]")
        raise typer.Exit(code=1)

    async def action(board: "Dashboard") -> bool:
        board.search = search
        board.sort_by = sort_by
        await board.load()
        if board.error:
            console.print(f"[bold red]{board.error}[/bold red] (run the command again to retry)")
            return False

        console.print(_render(board))
        if not watch:
            return True

        seen = board.videos
        while board.poller.running:
            await asyncio.sleep(0.2)
            if board.videos is not seen:
                seen = board.videos
                console.print(_render(board))
        return True

    if not _with_dashboard(action):
        raise typer.Exit(code=1)


@app.command()
def play(video_id: str = typer.Argument(..., help="Video ID")) -> None:
    """Open a video: records one view and prints its URL."""

    async def action(board: "Dashboard") -> bool:
        await board.refresh()
        if board.error:
            console.print(f"[bold red]{board.error}[/bold red]")
            return False
        video = board.find(video_id)
        if video is None:
            console.print(f"[bold red]Video not found: {video_id}[/bold red]")
            return False

        player = board.player()
        await player.open(video)
        views = (board.find(video_id) or video).views
        console.print(f"[cyan]{video.title}[/cyan] - {views} views")
        console.print(video.video_url)
        failed = player.error
        player.close()
        if failed:
            console.print(f"[bold red]View not recorded: {failed}[/bold red]")
            return False
        return True

    if not _with_dashboard(action):
        raise typer.Exit(code=1)


@app.command()
def like(video_id: str = typer.Argument(..., help="Video ID")) -> None:
    """Like a video."""

    async def action(board: "Dashboard") -> bool:
        await board.refresh()
        if board.error:
            console.print(f"[bold red]{board.error}[/bold red]")
            return False

        likes = await board.like(video_id)
        if likes is None:
            console.print(f"[bold red]Video not found: {video_id}[/bold red]")
            return False
        if board.like_error:
            console.print(f"[bold red]Like failed: {board.like_error}[/bold red]")
            return False
        console.print(f"[green]♥ {likes} likes[/green]")
        return True

    if not _with_dashboard(action):
        raise typer.Exit(code=1)


@app.command()
def reconcile(
    delete: bool = typer.Option(
        False,
        "--delete",
        help="Delete orphaned objects and create missing analytics rows",
    ),
) -> None:
    """Find objects without a video row and videos without analytics."""
    from vidhost.db.session import get_session_context
    from vidhost.services.reconcile import reconcile as run_reconcile
    from vidhost.services.upload import get_object_store

    with get_session_context() as session:
        report = run_reconcile(session, get_object_store(), apply=delete)

    if report.clean:
        console.print("[bold green]✓ Object store and database agree[/bold green]")
        return

    table = Table(title="Reconciliation")
    table.add_column("Kind", style="cyan")
    table.add_column("Item")
    table.add_column("Action")

    for key in report.orphaned_keys:
        action = "deleted" if key in report.deleted_keys else "-"
        table.add_row("orphaned object", key, action)
    for video_id in report.videos_missing_analytics:
        action = "created" if video_id in report.created_analytics else "-"
        table.add_row("missing analytics", str(video_id), action)

    console.print(table)
    if not delete:
        console.print("[dim]Run with --delete to repair.[/dim]")


if __name__ == "__main__":
    app()
