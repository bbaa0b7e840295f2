"""Watches the Tailwind config file on disk and reports saves to its editor."""

import asyncio
from pathlib import Path

from rich.console import Console
from watchfiles import Change, awatch

from tailwind_assist.console_host import FileTextEditor
from tailwind_assist.logger import get_logger

logger = get_logger(__name__)


class ConfigFileWatcher:
    """Turns filesystem changes of one file into editor save events."""

    def __init__(self, editor: FileTextEditor, console: Console | None = None) -> None:
        self.editor = editor
        self.path = Path(editor.path).resolve()
        self.console = console or Console()
        self.is_watching = False
        self._watch_task: asyncio.Task | None = None

    async def start_watching(self) -> None:
        if self.is_watching:
            return

        self.is_watching = True
        self.console.print(f"[dim]Watching for changes in:[/dim] {self.path}")
        self._watch_task = asyncio.create_task(self._watch_file())

    async def stop_watching(self) -> None:
        if not self.is_watching:
            return

        self.is_watching = False

        if self._watch_task:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass

    async def wait(self) -> None:
        if self._watch_task:
            await self._watch_task

    def _should_watch_file(self, change: Change, file_path: str) -> bool:
        return change != Change.deleted and Path(file_path).resolve() == self.path

    async def _watch_file(self) -> None:
        try:
            # Watch the directory so editors that save by replacing the file
            # are still picked up
            async for _changes in awatch(
                self.path.parent, watch_filter=self._should_watch_file
            ):
                if not self.is_watching:
                    break
                await self.editor.notify_saved()
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.exception(f"Error watching {self.path}: {e}")
            self.console.print(f"[red]Error watching files:[/red] {e}")
