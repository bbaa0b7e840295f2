"""Configuration management for tailwind-assist."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from tailwind_assist.paths import resolve_path

# Host settings key holding the path to the project's Tailwind config file
TAILWIND_CONFIG_SETTING = "tailwindcss.workspace.tailwindConfig"

DEFAULT_DOCS_URL = "https://tailwindcss.com/docs/"


class AssistConfig(BaseSettings):
    """Settings for running the extension outside of an editor."""

    model_config = SettingsConfigDict(
        env_prefix="TAILWIND_ASSIST_",
        case_sensitive=False,
    )

    workspace_path: Path = Field(
        default_factory=Path.cwd,
        description="Root of the workspace; relative settings resolve against it",
    )
    tailwind_config: Path | None = Field(
        default=None,
        description="Path to the project's tailwind.config.js",
    )
    definitions_file: Path | None = Field(
        default=None,
        description="YAML file of class definitions to use instead of the "
        "bundled ones",
    )
    docs_url: str = Field(
        default=DEFAULT_DOCS_URL, description="Base URL of the Tailwind documentation"
    )
    completions_enabled: bool = Field(
        default=True, description="Start with the completion assistant enabled"
    )

    _custom_config_file: Path | None = PrivateAttr(default=None)

    def __init__(self, config_file: Path | None = None, **kwargs: Any) -> None:
        if config_file is not None and config_file.exists():
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            # Explicit kwargs take priority over the file
            kwargs = {**config_data, **kwargs}

        super().__init__(**kwargs)

        self._custom_config_file = config_file

        # Relative paths in a config file are relative to that file
        if config_file is not None:
            config_dir = config_file.parent
            self.workspace_path = resolve_path(self.workspace_path, config_dir)
            if self.definitions_file is not None:
                self.definitions_file = resolve_path(self.definitions_file, config_dir)

        if self.tailwind_config is not None:
            self.tailwind_config = resolve_path(
                self.tailwind_config, self.workspace_path
            )

    @property
    def config_file_path(self) -> Path | None:
        """Return the path to the configuration file, if one was given."""
        return self._custom_config_file

    def as_host_settings(self) -> dict[str, str | None]:
        """Expose the settings under the keys the extension reads from its host."""
        return {
            TAILWIND_CONFIG_SETTING: (
                str(self.tailwind_config) if self.tailwind_config else None
            ),
        }
