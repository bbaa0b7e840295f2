"""Completion candidates for Tailwind class names."""

import re

from tailwind_assist.definitions import Configuration
from tailwind_assist.logger import get_logger
from tailwind_assist.models import CompletionItem, CompletionKind, TreeItem
from tailwind_assist.naming import BASE_DOCS_URL, docs_url

logger = get_logger(__name__)

SUPPORTED_FILE_TYPES = (
    "html",
    "php",
    "blade",
    "vue",
    "svelte",
    "astro",
    "jsx",
    "tsx",
    "javascript",
    "typescript",
    "erb",
    "twig",
    "handlebars",
    "liquid",
    "markdown",
)

# Characters that end a class token inside an attribute or template string
TOKEN_BOUNDARY = re.compile(r"[\s\"'`={}]")


def current_token(line: str, column: int) -> str:
    """Return the partial class name immediately before the cursor."""
    before_cursor = line[:column]
    return TOKEN_BOUNDARY.split(before_cursor)[-1]


def split_variants(token: str) -> tuple[str, str]:
    """
    Split a token like ``md:hover:bg-`` into its variant prefix (``md:hover:``)
    and the utility being typed (``bg-``).

    """
    variants, sep, utility = token.rpartition(":")
    return (variants + sep, utility)


class CompletionProvider:
    """Supplies completion items built from the loaded definitions."""

    def __init__(
        self,
        config: Configuration,
        enabled: bool = True,
        base_docs_url: str = BASE_DOCS_URL,
    ) -> None:
        self.config = config
        self.enabled = enabled
        self.base_docs_url = base_docs_url
        self.items: list[CompletionItem] = []

    async def load_completion_items(self) -> list[CompletionItem]:
        self.items = [
            CompletionItem(
                label=definition.class_name,
                insert_text=definition.class_name,
                detail=definition.category,
                kind=CompletionKind.CLASS,
                documentation_url=docs_url(
                    TreeItem(name=definition.category), self.base_docs_url
                ),
            )
            for definition in self.config.definitions
        ]
        logger.info(f"Prepared {len(self.items)} completion items")
        return self.items

    def provide_completion_items(self, line: str, column: int) -> list[CompletionItem]:
        """Return the items matching the class name being typed at ``column``."""
        if not self.enabled:
            return []

        variants, prefix = split_variants(current_token(line, column))

        matches = [item for item in self.items if item.label.startswith(prefix)]
        if not variants:
            return matches

        return [
            CompletionItem(
                label=variants + item.label,
                insert_text=variants + item.insert_text,
                detail=item.detail,
                kind=CompletionKind.VARIANT,
                documentation_url=item.documentation_url,
            )
            for item in matches
        ]
