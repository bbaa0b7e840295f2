"""A terminal host for running the extension outside of an editor."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from tailwind_assist.config import AssistConfig
from tailwind_assist.host import (
    Callback,
    Disposable,
    Host,
    TextEditor,
    TreeView,
    dispatch,
)
from tailwind_assist.sidebar import ClassDataProvider


def _remove_on_dispose(listeners: list, callback: Callback) -> Disposable:
    listeners.append(callback)

    def remove() -> None:
        if callback in listeners:
            listeners.remove(callback)

    return Disposable(remove)


class FileTextEditor(TextEditor):
    """An "open" file on disk. Saves are reported by the file watcher."""

    def __init__(self, path: Path, console: Console) -> None:
        self._path = path
        self.console = console
        self._save_listeners: list[Callback] = []

    @property
    def path(self) -> str | None:
        return str(self._path)

    def get_text(self) -> str:
        if not self._path.exists():
            return ""
        return self._path.read_text(encoding="utf-8")

    def insert(self, text: str) -> None:
        self.console.print(text)

    def on_did_save(self, callback: Callback) -> Disposable:
        return _remove_on_dispose(self._save_listeners, callback)

    async def notify_saved(self) -> None:
        for callback in self._save_listeners[:]:
            await dispatch(callback, self)


class ConsoleTreeView(TreeView):
    def __init__(
        self, view_id: str, data_provider: ClassDataProvider, console: Console
    ) -> None:
        super().__init__()
        self.view_id = view_id
        self.data_provider = data_provider
        self.console = console
        self._selection: list[Any] = []

    @property
    def selection(self) -> Sequence[Any]:
        return self._selection

    def select(self, name: str) -> Any | None:
        """Select the first node called ``name``, searching depth first."""
        pending = list(self.data_provider.get_children(None))
        while pending:
            item = pending.pop(0)
            if item.name == name:
                self._selection = [item]
                return item
            pending[:0] = self.data_provider.get_children(item)

        self._selection = []
        return None

    def build(self) -> Tree:
        root = Tree(f"[bold]{self.view_id}[/bold]")

        def add(parent: Tree, item: Any) -> None:
            view = self.data_provider.get_tree_item(item)
            label = escape(view.label)
            if view.collapsible:
                label = f"[cyan]{label}[/cyan]"
            if view.tooltip:
                label += f" [dim]{view.tooltip}[/dim]"
            node = parent.add(label)
            for child in self.data_provider.get_children(item):
                add(node, child)

        for item in self.data_provider.get_children(None):
            add(root, item)
        return root

    def reload(self) -> None:
        if not self.disposed:
            self.console.print(self.build())


class ConsoleHost(Host):
    """Host backed by the local filesystem, AssistConfig and a rich console."""

    def __init__(self, config: AssistConfig, console: Console | None = None) -> None:
        self.config = config
        self.console = console or Console()
        self.settings = config.as_host_settings()
        self.editors: list[FileTextEditor] = []
        self.completion_providers: list[Any] = []
        self.tree_views: list[ConsoleTreeView] = []
        self.commands: dict[str, Callback] = {}
        self._active_editor: FileTextEditor | None = None
        self._config_listeners: dict[str, list[Callback]] = {}
        self._editor_listeners: list[Callback] = []

    @property
    def workspace_path(self) -> Path | None:
        return self.config.workspace_path

    @property
    def text_editors(self) -> Sequence[TextEditor]:
        return list(self.editors)

    @property
    def active_text_editor(self) -> TextEditor | None:
        return self._active_editor

    def get_config(self, key: str) -> str | None:
        return self.settings.get(key)

    async def set_config(self, key: str, value: str | None) -> None:
        self.settings[key] = value
        for callback in self._config_listeners.get(key, [])[:]:
            await dispatch(callback, value)

    def on_config_change(self, key: str, callback: Callback) -> Disposable:
        return _remove_on_dispose(self._config_listeners.setdefault(key, []), callback)

    def on_did_add_text_editor(self, callback: Callback) -> Disposable:
        return _remove_on_dispose(self._editor_listeners, callback)

    async def open_editor(self, path: Path) -> FileTextEditor:
        editor = FileTextEditor(path, self.console)
        self.editors.append(editor)
        self._active_editor = editor
        for callback in self._editor_listeners[:]:
            await dispatch(callback, editor)
        return editor

    def register_completion_provider(
        self, file_types: Sequence[str], provider: Any
    ) -> Disposable:
        return _remove_on_dispose(self.completion_providers, provider)

    def register_tree_view(self, view_id: str, data_provider: Any) -> TreeView:
        tree_view = ConsoleTreeView(view_id, data_provider, self.console)
        self.tree_views.append(tree_view)
        return tree_view

    def register_command(self, name: str, callback: Callback) -> Disposable:
        self.commands[name] = callback

        def remove() -> None:
            self.commands.pop(name, None)

        return Disposable(remove)

    async def execute_command(self, name: str, *args: Any) -> None:
        if name not in self.commands:
            raise ValueError(f"Unknown command: {name}")
        await dispatch(self.commands[name], *args)

    def open_url(self, url: str) -> None:
        self.console.print(f"[blue]Opening[/blue] {url}")
        click.launch(url)
