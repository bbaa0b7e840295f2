"""Tests for the terminal host and the config file watcher."""

from unittest.mock import patch

import pytest
from rich.console import Console
from watchfiles import Change

from tailwind_assist.config import TAILWIND_CONFIG_SETTING, AssistConfig
from tailwind_assist.console_host import ConsoleHost, FileTextEditor
from tailwind_assist.extension import OPEN_DOCS_CONTEXT_COMMAND, Extension
from tailwind_assist.watcher import ConfigFileWatcher


@pytest.fixture
def console():
    return Console(record=True, width=120)


@pytest.fixture
def console_host(tmp_path, tailwind_config_file, console):
    config = AssistConfig(workspace_path=tmp_path, tailwind_config="tailwind.config.js")
    return ConsoleHost(config, console)


@pytest.fixture
def extension(console_host, definitions_file):
    return Extension(console_host, definitions_file=definitions_file)


class TestConsoleHost:
    """Test cases for running the extension in the terminal host."""

    def test_settings_come_from_config(self, console_host, tailwind_config_file):
        assert console_host.get_config(TAILWIND_CONFIG_SETTING) == str(
            tailwind_config_file
        )

    @pytest.mark.asyncio
    async def test_tree_view_renders_classes(self, extension, console_host, console):
        """Test that the tree view prints every section, category and class."""
        state = await extension.activate()

        console.print(state.sidebar.tree_view.build())
        output = console.export_text()

        assert "Border Radius" in output
        assert "https://tailwindcss.com/docs/border-radius" in output
        assert "rounded-lg" in output

    @pytest.mark.asyncio
    async def test_select_finds_nested_items(self, extension):
        """Test that selecting by name finds nodes at any depth."""
        state = await extension.activate()
        tree_view = state.sidebar.tree_view

        assert tree_view.select("rounded-full").name == "rounded-full"
        assert tree_view.selection[0].is_leaf
        assert tree_view.select("Unknown") is None
        assert tree_view.selection == []

    @pytest.mark.asyncio
    async def test_open_url_launches_browser(self, extension, console_host):
        """Test that opening a URL goes through click.launch."""
        state = await extension.activate()
        state.sidebar.tree_view.select("Display")

        with patch("tailwind_assist.console_host.click.launch") as launch:
            await console_host.execute_command(OPEN_DOCS_CONTEXT_COMMAND)

        launch.assert_called_once_with("https://tailwindcss.com/docs/display")

    @pytest.mark.asyncio
    async def test_unknown_command(self, console_host):
        """Test that executing an unregistered command raises ValueError."""
        with pytest.raises(ValueError):
            await console_host.execute_command("tailwind.unknown")

    @pytest.mark.asyncio
    async def test_changed_file_reloads(
        self, extension, console_host, tailwind_config_file, console
    ):
        """Test that a changed config file on disk triggers a reload."""
        await extension.activate()
        editor = await console_host.open_editor(tailwind_config_file)

        await editor.notify_saved()
        assert extension.reload_count == 0

        tailwind_config_file.write_text("module.exports = { theme: {} }\n")
        await editor.notify_saved()

        assert extension.reload_count == 1
        # The new tree view prints itself when reloaded
        assert "rounded-lg" in console.export_text()

    @pytest.mark.asyncio
    async def test_setting_change_reloads(self, extension, console_host):
        await extension.activate()
        await console_host.set_config(TAILWIND_CONFIG_SETTING, None)

        assert extension.reload_count == 1
        assert extension.state.config.tailwind_config_file_path is None


class TestConfigFileWatcher:
    """Test cases for ConfigFileWatcher."""

    def test_filter_only_accepts_watched_file(self, console_host, tailwind_config_file):
        """Test that only changes of the watched file pass the filter."""
        watcher = ConfigFileWatcher(
            FileTextEditor(tailwind_config_file, console_host.console)
        )
        other = tailwind_config_file.parent / "index.html"

        assert watcher._should_watch_file(Change.modified, str(tailwind_config_file))
        assert not watcher._should_watch_file(Change.modified, str(other))
        assert not watcher._should_watch_file(Change.deleted, str(tailwind_config_file))

    @pytest.mark.asyncio
    async def test_changes_are_reported_as_saves(
        self, extension, console_host, tailwind_config_file
    ):
        """Test that file changes are forwarded as editor saves."""
        await extension.activate()
        editor = await console_host.open_editor(tailwind_config_file)
        tailwind_config_file.write_text("module.exports = { plugins: [] }\n")

        async def fake_awatch(*paths, watch_filter=None):
            yield {(Change.modified, str(tailwind_config_file))}

        with patch("tailwind_assist.watcher.awatch", fake_awatch):
            watcher = ConfigFileWatcher(editor)
            await watcher.start_watching()
            await watcher.wait()
            await watcher.stop_watching()

        assert extension.reload_count == 1
        assert watcher.is_watching is False

    @pytest.mark.asyncio
    async def test_stop_without_start(self, console_host, tailwind_config_file):
        editor = await console_host.open_editor(tailwind_config_file)
        watcher = ConfigFileWatcher(editor)

        await watcher.stop_watching()

        assert watcher.is_watching is False

