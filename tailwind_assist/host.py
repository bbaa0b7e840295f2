"""
Interfaces the extension needs from the editor it runs in.

A concrete editor binding implements Host, TextEditor and TreeView. Nothing in
the completion, sidebar or naming modules depends on these types.

"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

from tailwind_assist.logger import get_logger

logger = get_logger(__name__)

Callback = Callable[..., Awaitable[None] | None]


async def dispatch(callback: Callback, *args: Any) -> None:
    """Invoke a listener, awaiting it if it is a coroutine function."""
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Disposable:
    """Releases one registration. Disposing more than once is a no-op."""

    def __init__(self, on_dispose: Callable[[], None] | None = None) -> None:
        self._on_dispose = on_dispose
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        if self._on_dispose is not None:
            self._on_dispose()


class CompositeDisposable(Disposable):
    """
    Collects disposables and releases them together. Unlike a single
    Disposable it stays usable after dispose(), so the same collection can be
    refilled by the next load.

    """

    def __init__(self) -> None:
        super().__init__()
        self._disposables: list[Disposable] = []

    def add(self, disposable: Disposable) -> Disposable:
        self._disposables.append(disposable)
        return disposable

    def __len__(self) -> int:
        return len(self._disposables)

    def dispose(self) -> None:
        disposables, self._disposables = self._disposables, []
        for disposable in disposables:
            try:
                disposable.dispose()
            except Exception:
                logger.exception(f"Failed to dispose {disposable!r}")


class TextEditor(ABC):
    @property
    @abstractmethod
    def path(self) -> str | None:
        """Path of the open document, if it has been saved to disk."""

    @abstractmethod
    def get_text(self) -> str:
        """Full text of the document."""

    @abstractmethod
    def insert(self, text: str) -> None:
        """Insert text at the current selection."""

    @abstractmethod
    def on_did_save(self, callback: Callback) -> Disposable:
        """Call ``callback(editor)`` after every save."""


class TreeView(Disposable, ABC):
    @property
    @abstractmethod
    def selection(self) -> Sequence[Any]:
        """Currently selected tree items."""

    @abstractmethod
    def reload(self) -> None:
        """Re-read the whole tree from the data provider."""


class Host(ABC):
    """The editor capabilities the extension consumes."""

    @property
    @abstractmethod
    def workspace_path(self) -> Path | None:
        pass

    @property
    @abstractmethod
    def text_editors(self) -> Sequence[TextEditor]:
        """Editors that are already open."""

    @property
    @abstractmethod
    def active_text_editor(self) -> TextEditor | None:
        pass

    @abstractmethod
    def get_config(self, key: str) -> str | None:
        pass

    @abstractmethod
    def on_config_change(self, key: str, callback: Callback) -> Disposable:
        pass

    @abstractmethod
    def on_did_add_text_editor(self, callback: Callback) -> Disposable:
        pass

    @abstractmethod
    def register_completion_provider(
        self, file_types: Sequence[str], provider: Any
    ) -> Disposable:
        pass

    @abstractmethod
    def register_tree_view(self, view_id: str, data_provider: Any) -> TreeView:
        pass

    @abstractmethod
    def register_command(self, name: str, callback: Callback) -> Disposable:
        pass

    @abstractmethod
    def open_url(self, url: str) -> None:
        pass
