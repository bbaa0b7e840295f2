"""
Mapping between class browser node names and Tailwind documentation pages.

Categories are the title-cased group names ("Border Radius") and have a docs
page of their own. Leaves are raw utility tokens ("rounded-lg") and all-caps
names ("SVG") and link to the documentation root.

"""

from typing import Protocol

from tailwind_assist.config import DEFAULT_DOCS_URL

BASE_DOCS_URL = DEFAULT_DOCS_URL


class Named(Protocol):
    name: str | None


def _is_title_cased(name: str) -> bool:
    words = name.split(" ")
    # Leading, trailing and repeated spaces produce empty words
    if any(not word for word in words):
        return False

    rebuilt = " ".join(word[0].upper() + word[1:] for word in words)
    return rebuilt == name


def is_category(node: Named) -> bool:
    """
    Return True when the node names a category: not fully upper-case and with
    every space separated word starting with an upper-case letter.

    Blank and malformed names are never categories.
    """
    name = node.name
    if not name or not name.strip():
        return False

    if name.upper() == name:
        return False

    return _is_title_cased(name)


def slugify(name: str | None) -> str:
    """Lower-case a display name and join its words with hyphens."""
    if not name:
        return ""
    return "-".join(name.lower().split())


def docs_url(node: Named, base_url: str = BASE_DOCS_URL) -> str:
    """Documentation page for a category, or the docs root for anything else."""
    if is_category(node):
        return base_url + slugify(node.name)
    return base_url
