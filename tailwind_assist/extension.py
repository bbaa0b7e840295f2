"""Lifecycle of the extension inside a host editor."""

import asyncio
import time
from dataclasses import replace
from pathlib import Path

from tailwind_assist.completions import SUPPORTED_FILE_TYPES, CompletionProvider
from tailwind_assist.config import TAILWIND_CONFIG_SETTING
from tailwind_assist.definitions import Configuration
from tailwind_assist.host import CompositeDisposable, Host, TextEditor
from tailwind_assist.logger import get_logger
from tailwind_assist.models import TreeItem
from tailwind_assist.naming import BASE_DOCS_URL, docs_url
from tailwind_assist.paths import normalize_path
from tailwind_assist.sidebar import (
    INSERT_COMMAND,
    TREE_VIEW_ID,
    ClassDataProvider,
    ClassList,
)
from tailwind_assist.state import ExtensionState, LoadStatus, Sidebar

logger = get_logger(__name__)

OPEN_DOCS_COMMAND = "tailwind.openDocs"
OPEN_DOCS_CONTEXT_COMMAND = "tailwind.openDocsContext"
TOGGLE_COMMAND = "tailwind.toggle"


class Extension:
    """
    Wires host events to loading of the definitions, the completion provider
    and the sidebar.

    Every trigger (activation, a changed save of the Tailwind config file, a
    change of the config path setting) disposes everything the previous load
    registered and builds a fresh ExtensionState. Load failures are logged and
    leave the extension in a degraded state until the next trigger.
    """

    def __init__(
        self,
        host: Host,
        definitions_file: Path | None = None,
        completions_enabled: bool = True,
        base_docs_url: str = BASE_DOCS_URL,
    ) -> None:
        self.host = host
        self.definitions_file = definitions_file
        self.completions_enabled = completions_enabled
        self.base_docs_url = base_docs_url

        self.state = ExtensionState()
        self.reload_count = 0

        self._extension_disposables = CompositeDisposable()
        self._config_editor_disposables = CompositeDisposable()
        self._command_disposables = CompositeDisposable()
        # Text of each watched config editor as of its last observed save
        self._last_saved_text: dict[int, str] = {}
        self._lock = asyncio.Lock()

    async def activate(self) -> ExtensionState:
        self._register_commands()
        async with self._lock:
            self.dispose()
            self.state = await self._load()
        return self.state

    def deactivate(self) -> None:
        self.dispose()
        self._command_disposables.dispose()
        self.state = ExtensionState()

    def dispose(self) -> None:
        """Release every listener and registration of the current load."""
        self._extension_disposables.dispose()
        self._config_editor_disposables.dispose()
        self._last_saved_text.clear()

    async def reload(self) -> ExtensionState:
        async with self._lock:
            self.dispose()
            self.state = ExtensionState()

            start_time = time.perf_counter()
            self.state = await self._load()
            self.reload_count += 1
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"Reload finished ({self.state.status.value}) in {duration_ms:.1f}ms"
            )

            if self.state.sidebar is not None:
                try:
                    self.state.sidebar.tree_view.reload()
                except Exception as e:
                    logger.exception(f"Failed to reload the class tree view: {e}")

        return self.state

    async def _load(self) -> ExtensionState:
        state = ExtensionState(status=LoadStatus.LOADING)
        try:
            # Registered first so fixing a broken setting can recover the extension
            self._extension_disposables.add(
                self.host.on_config_change(
                    TAILWIND_CONFIG_SETTING, self._on_config_changed
                )
            )

            config = Configuration.from_host(self.host, self.definitions_file)
            state = replace(state, config=config)
            await config.load_definitions()

            provider = await self._register_completion_provider(config)
            state = replace(state, completion_provider=provider)

            sidebar = await self._register_tree_view(config)
            state = replace(state, sidebar=sidebar)

            if config.tailwind_config_file_path is not None:
                self._extension_disposables.add(
                    self.host.on_did_add_text_editor(self.evaluate_text_editor)
                )
                for editor in self.host.text_editors:
                    self._watch_config_editor(editor, config.tailwind_config_file_path)

            return replace(state, status=LoadStatus.LOADED)
        except Exception as e:
            logger.exception(f"Failed to load Tailwind extension: {e}")
            return replace(state, status=LoadStatus.FAILED, error=str(e))

    async def _register_completion_provider(
        self, config: Configuration
    ) -> CompletionProvider:
        provider = CompletionProvider(
            config, enabled=self.completions_enabled, base_docs_url=self.base_docs_url
        )
        await provider.load_completion_items()
        self._extension_disposables.add(
            self.host.register_completion_provider(SUPPORTED_FILE_TYPES, provider)
        )
        return provider

    async def _register_tree_view(self, config: Configuration) -> Sidebar:
        class_list = ClassList(config)
        await class_list.load_definitions()

        data_provider = ClassDataProvider(class_list.items, self.base_docs_url)
        tree_view = self.host.register_tree_view(TREE_VIEW_ID, data_provider)
        self._extension_disposables.add(tree_view)

        return Sidebar(
            list=class_list, data_provider=data_provider, tree_view=tree_view
        )

    async def _on_config_changed(self, *args) -> None:
        logger.info(f"Setting {TAILWIND_CONFIG_SETTING} changed, reloading")
        await self.reload()

    def evaluate_text_editor(self, editor: TextEditor) -> None:
        """Start watching ``editor`` if it shows the project's Tailwind config."""
        config = self.state.config
        if config is None or config.tailwind_config_file_path is None:
            return
        self._watch_config_editor(editor, config.tailwind_config_file_path)

    def _watch_config_editor(self, editor: TextEditor, config_path: Path) -> None:
        if normalize_path(editor.path, self.host.workspace_path) != config_path:
            return

        key = id(editor)
        if key in self._last_saved_text:
            return

        self._last_saved_text[key] = editor.get_text()
        self._config_editor_disposables.add(
            editor.on_did_save(self.saved_tailwind_config)
        )

    async def saved_tailwind_config(self, editor: TextEditor) -> None:
        """Reload when a save actually changed the Tailwind config."""
        key = id(editor)
        text = editor.get_text()
        if self._last_saved_text.get(key) == text:
            return

        self._last_saved_text[key] = text
        logger.info(f"Tailwind config {editor.path} changed, reloading")
        await self.reload()

    def _register_commands(self) -> None:
        if len(self._command_disposables):
            return

        commands = {
            OPEN_DOCS_COMMAND: self.open_docs,
            OPEN_DOCS_CONTEXT_COMMAND: self.open_docs_for_selection,
            INSERT_COMMAND: self.insert_selection,
            TOGGLE_COMMAND: self.toggle_completions,
        }
        for name, callback in commands.items():
            self._command_disposables.add(self.host.register_command(name, callback))

    def _selected_item(self) -> TreeItem | None:
        sidebar = self.state.sidebar
        if sidebar is None or not sidebar.tree_view.selection:
            return None
        return sidebar.tree_view.selection[0]

    def open_docs(self, *args) -> None:
        self.host.open_url(self.base_docs_url)

    def open_docs_for_selection(self, *args) -> None:
        selected = self._selected_item()
        if selected is None:
            self.host.open_url(self.base_docs_url)
        else:
            self.host.open_url(docs_url(selected, self.base_docs_url))

    def insert_selection(self, *args) -> None:
        """Insert the selected class name; categories are ignored."""
        selected = self._selected_item()
        if selected is None or selected.children:
            return

        editor = self.host.active_text_editor
        if editor is None:
            logger.warning(f"No active editor to insert {selected.name} into")
            return
        editor.insert(selected.name)

    def toggle_completions(self, *args) -> bool:
        self.completions_enabled = not self.completions_enabled
        provider = self.state.completion_provider
        if provider is not None:
            provider.enabled = self.completions_enabled
        logger.info(
            f"Completions {'enabled' if self.completions_enabled else 'disabled'}"
        )
        return self.completions_enabled
