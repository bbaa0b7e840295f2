from dataclasses import dataclass
from enum import Enum

from tailwind_assist.completions import CompletionProvider
from tailwind_assist.definitions import Configuration
from tailwind_assist.host import TreeView
from tailwind_assist.sidebar import ClassDataProvider, ClassList


class LoadStatus(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class Sidebar:
    list: ClassList
    data_provider: ClassDataProvider
    tree_view: TreeView


@dataclass(frozen=True)
class ExtensionState:
    """
    Everything one load of the extension produced. Reloading builds a new
    instance rather than mutating the current one; a failed load keeps
    whatever had been built before the error.

    """
    status: LoadStatus = LoadStatus.UNLOADED
    config: Configuration | None = None
    completion_provider: CompletionProvider | None = None
    sidebar: Sidebar | None = None
    error: str | None = None

    @property
    def is_loaded(self) -> bool:
        return self.status == LoadStatus.LOADED
