from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from tailwind_assist.config import TAILWIND_CONFIG_SETTING
from tailwind_assist.host import (
    Callback,
    Disposable,
    Host,
    TextEditor,
    TreeView,
    dispatch,
)

DEFINITIONS_YAML = """
version: "3.4"
sections:
  - name: LAYOUT
    categories:
      - name: Display
        classes: [block, inline-block, flex, hidden]
  - name: BORDERS
    categories:
      - name: Border Radius
        classes: [rounded, rounded-lg, rounded-full]
  - name: SVG
    categories:
      - name: Fill
        classes: [fill-current]
"""


def _listen(listeners: list, callback: Callback) -> Disposable:
    listeners.append(callback)

    def remove() -> None:
        if callback in listeners:
            listeners.remove(callback)

    return Disposable(remove)


class FakeTextEditor(TextEditor):
    def __init__(self, path: str | None, text: str = "") -> None:
        self._path = path
        self.text = text
        self.inserted: list[str] = []
        self.save_listeners: list[Callback] = []

    @property
    def path(self) -> str | None:
        return self._path

    def get_text(self) -> str:
        return self.text

    def insert(self, text: str) -> None:
        self.inserted.append(text)

    def on_did_save(self, callback: Callback) -> Disposable:
        return _listen(self.save_listeners, callback)

    async def save(self, text: str | None = None) -> None:
        if text is not None:
            self.text = text
        for callback in self.save_listeners[:]:
            await dispatch(callback, self)


class FakeTreeView(TreeView):
    def __init__(self, view_id: str, data_provider: Any) -> None:
        super().__init__()
        self.view_id = view_id
        self.data_provider = data_provider
        self.selected: list[Any] = []
        self.reload_count = 0

    @property
    def selection(self) -> Sequence[Any]:
        return self.selected

    def reload(self) -> None:
        self.reload_count += 1


class FakeHost(Host):
    """In-memory host recording everything the extension registers."""

    def __init__(self, workspace_path: Path, settings: dict | None = None) -> None:
        self._workspace_path = workspace_path
        self.settings: dict[str, str | None] = dict(settings or {})
        self.editors: list[FakeTextEditor] = []
        self.active_editor: FakeTextEditor | None = None
        self.config_listeners: dict[str, list[Callback]] = {}
        self.editor_listeners: list[Callback] = []
        self.completion_providers: list[tuple[Sequence[str], Any]] = []
        self.tree_views: list[FakeTreeView] = []
        self.commands: dict[str, Callback] = {}
        self.opened_urls: list[str] = []

    @property
    def workspace_path(self) -> Path | None:
        return self._workspace_path

    @property
    def text_editors(self) -> Sequence[TextEditor]:
        return list(self.editors)

    @property
    def active_text_editor(self) -> TextEditor | None:
        return self.active_editor

    @property
    def tree_view(self) -> FakeTreeView:
        return self.tree_views[-1]

    def get_config(self, key: str) -> str | None:
        return self.settings.get(key)

    async def set_config(self, key: str, value: str | None) -> None:
        self.settings[key] = value
        for callback in self.config_listeners.get(key, [])[:]:
            await dispatch(callback, value)

    def on_config_change(self, key: str, callback: Callback) -> Disposable:
        return _listen(self.config_listeners.setdefault(key, []), callback)

    def on_did_add_text_editor(self, callback: Callback) -> Disposable:
        return _listen(self.editor_listeners, callback)

    async def open_editor(self, editor: FakeTextEditor) -> FakeTextEditor:
        self.editors.append(editor)
        self.active_editor = editor
        for callback in self.editor_listeners[:]:
            await dispatch(callback, editor)
        return editor

    def register_completion_provider(
        self, file_types: Sequence[str], provider: Any
    ) -> Disposable:
        entry = (file_types, provider)
        self.completion_providers.append(entry)

        def remove() -> None:
            self.completion_providers.remove(entry)

        return Disposable(remove)

    def register_tree_view(self, view_id: str, data_provider: Any) -> TreeView:
        tree_view = FakeTreeView(view_id, data_provider)
        self.tree_views.append(tree_view)
        return tree_view

    def register_command(self, name: str, callback: Callback) -> Disposable:
        self.commands[name] = callback
        return Disposable(lambda: self.commands.pop(name, None))

    async def run_command(self, name: str) -> Any:
        return self.commands[name]()

    def open_url(self, url: str) -> None:
        self.opened_urls.append(url)


@pytest.fixture
def definitions_file(tmp_path):
    path = tmp_path / "definitions.yml"
    path.write_text(DEFINITIONS_YAML)
    return path


@pytest.fixture
def tailwind_config_file(tmp_path):
    path = tmp_path / "tailwind.config.js"
    path.write_text("module.exports = { content: ['./src/**/*.html'] }\n")
    return path


@pytest.fixture
def host(tmp_path, tailwind_config_file):
    """A host whose workspace setting points at tailwind.config.js."""
    return FakeHost(tmp_path, {TAILWIND_CONFIG_SETTING: "tailwind.config.js"})


@pytest.fixture
def bare_host(tmp_path):
    """A host without a Tailwind config setting."""
    return FakeHost(tmp_path)


@pytest.fixture
def make_editor():
    """Factory for in-memory text editors."""
    return FakeTextEditor
