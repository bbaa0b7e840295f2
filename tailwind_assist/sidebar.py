"""Tree of Tailwind classes for the editor's sidebar."""

from tailwind_assist.definitions import Configuration
from tailwind_assist.logger import get_logger
from tailwind_assist.models import TreeItem, TreeItemView
from tailwind_assist.naming import BASE_DOCS_URL, docs_url, is_category

logger = get_logger(__name__)

TREE_VIEW_ID = "tw-sidebar-classes"
INSERT_COMMAND = "tailwind.doubleClick"


class ClassList:
    """Groups the loaded definitions into section, category and leaf nodes."""

    def __init__(self, config: Configuration) -> None:
        self.config = config
        self.items: list[TreeItem] = []

    async def load_definitions(self) -> list[TreeItem]:
        grouped: dict[str, dict[str, list[str]]] = {}
        for definition in self.config.definitions:
            categories = grouped.setdefault(definition.section, {})
            categories.setdefault(definition.category, []).append(
                definition.class_name
            )

        self.items = [
            TreeItem(
                name=section,
                children=tuple(
                    TreeItem(
                        name=category,
                        children=tuple(TreeItem(name=name) for name in class_names),
                    )
                    for category, class_names in categories.items()
                ),
            )
            for section, categories in grouped.items()
        ]
        logger.info(f"Built sidebar with {len(self.items)} sections")
        return self.items


class ClassDataProvider:
    """Answers the host tree widget's questions about the class tree."""

    def __init__(self, root_items: list[TreeItem], base_docs_url: str = BASE_DOCS_URL):
        self.root_items = root_items
        self.base_docs_url = base_docs_url

    def get_children(self, item: TreeItem | None) -> list[TreeItem]:
        if item is None:
            return list(self.root_items)
        return list(item.children)

    def get_tree_item(self, item: TreeItem) -> TreeItemView:
        if item.is_leaf:
            return TreeItemView(
                label=item.name,
                collapsible=False,
                command=INSERT_COMMAND,
                context_value="leaf",
            )

        tooltip = (
            docs_url(item, self.base_docs_url) if is_category(item) else None
        )
        return TreeItemView(
            label=item.name,
            collapsible=True,
            tooltip=tooltip,
            context_value="category",
        )
