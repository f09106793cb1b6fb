"""Post-order traversal of the component tree at file granularity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from issueflow.domain.model import Component


class FileVisitor(Protocol):
    def visit_file(self, component: Component) -> None: ...


@dataclass(slots=True)
class PostOrderFileCrawler:
    """Visit every file below ``root`` once, children before their parent."""

    visitor: FileVisitor

    def visit(self, root: Component) -> None:
        for child in root.children:
            self.visit(child)
        if root.is_file:
            self.visitor.visit_file(root)
