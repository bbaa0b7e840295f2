"""Loading of the Tailwind class definitions shown in completions and the sidebar."""

import asyncio
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tailwind_assist.config import TAILWIND_CONFIG_SETTING
from tailwind_assist.exceptions import DefinitionsLoadError
from tailwind_assist.io import get_asset_path
from tailwind_assist.logger import get_logger
from tailwind_assist.paths import normalize_path

logger = get_logger(__name__)

DEFAULT_DEFINITIONS_FILE = "definitions.yml"


class Definition(BaseModel):
    """A single utility class and the category it is documented under."""

    model_config = ConfigDict(frozen=True)

    class_name: str
    category: str
    section: str


class CategoryEntry(BaseModel):
    name: str
    classes: list[str] = Field(default_factory=list)


class SectionEntry(BaseModel):
    name: str
    categories: list[CategoryEntry] = Field(default_factory=list)


class DefinitionsFile(BaseModel):
    """On-disk layout of a definitions file."""

    version: str
    sections: list[SectionEntry] = Field(default_factory=list)


class DefinitionSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    definitions: tuple[Definition, ...] = ()

    def categories(self) -> list[str]:
        """Category names in file order, without duplicates."""
        return list(dict.fromkeys(d.category for d in self.definitions))


def parse_definitions(data: Any) -> DefinitionSet:
    """Flatten the nested section/category layout into a DefinitionSet."""
    try:
        parsed = DefinitionsFile.model_validate(data)
    except ValidationError as e:
        raise DefinitionsLoadError(f"Invalid definitions: {e}") from e

    definitions = tuple(
        Definition(class_name=class_name, category=category.name, section=section.name)
        for section in parsed.sections
        for category in section.categories
        for class_name in category.classes
    )
    return DefinitionSet(version=parsed.version, definitions=definitions)


def read_definitions(path: Path) -> DefinitionSet:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise DefinitionsLoadError(f"Cannot read definitions file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise DefinitionsLoadError(f"Malformed definitions file {path}: {e}") from e

    return parse_definitions(data)


class Configuration:
    """
    Holds the definitions and the Tailwind config path for one load of the
    extension. A new Configuration is created on every reload.

    """

    def __init__(
        self,
        tailwind_config_file_path: Path | None = None,
        definitions_file: Path | None = None,
    ) -> None:
        self.tailwind_config_file_path = tailwind_config_file_path
        self.definitions_file = definitions_file or get_asset_path(
            DEFAULT_DEFINITIONS_FILE
        )
        self._definition_set: DefinitionSet | None = None

    @classmethod
    def from_host(cls, host, definitions_file: Path | None = None) -> "Configuration":
        """Read the Tailwind config path from the host's workspace settings."""
        tailwind_config = normalize_path(
            host.get_config(TAILWIND_CONFIG_SETTING), host.workspace_path
        )
        return cls(
            tailwind_config_file_path=tailwind_config,
            definitions_file=definitions_file,
        )

    async def load_definitions(self) -> DefinitionSet:
        """Read the definitions file off the event loop."""
        self._definition_set = await asyncio.to_thread(
            read_definitions, self.definitions_file
        )
        logger.info(
            f"Loaded {len(self._definition_set.definitions)} definitions "
            f"(Tailwind {self._definition_set.version}) from {self.definitions_file}"
        )
        return self._definition_set

    @property
    def is_loaded(self) -> bool:
        return self._definition_set is not None

    @property
    def version(self) -> str | None:
        return self._definition_set.version if self._definition_set else None

    @property
    def definitions(self) -> tuple[Definition, ...]:
        if self._definition_set is None:
            raise RuntimeError("Definitions have not been loaded yet")
        return self._definition_set.definitions
