from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class TreeItem:
    """
    A node of the class browser. Sections and categories carry children; a leaf
    is one concrete utility class and has none.

    """
    name: str
    children: tuple["TreeItem", ...] = field(default_factory=tuple)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class CompletionKind(str, Enum):
    CLASS = "class"
    VARIANT = "variant"


@dataclass(frozen=True)
class CompletionItem:
    label: str
    insert_text: str
    detail: str
    kind: CompletionKind = CompletionKind.CLASS
    documentation_url: str | None = None


@dataclass(frozen=True)
class TreeItemView:
    """
    What the host's tree widget renders for a TreeItem.

    """
    label: str
    collapsible: bool
    tooltip: str | None = None
    command: str | None = None
    context_value: str | None = None
