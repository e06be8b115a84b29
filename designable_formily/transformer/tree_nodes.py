"""Design tree node definitions for the drag-and-drop editor."""

import random
import string
from typing import Any, Callable, Iterator
from pydantic import BaseModel, ConfigDict, Field


UID_ALPHABET = string.ascii_lowercase + string.digits


def uid(length: int = 10) -> str:
    """Generate a short random node id."""
    return "".join(random.choices(UID_ALPHABET, k=length))


class TreeNode(BaseModel):
    """Editor node: a component name, a property bag and ordered children."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=uid)
    component_name: str = Field("NO_NAME_COMPONENT", alias="componentName")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["TreeNode"] = Field(default_factory=list)

    def __str__(self) -> str:
        return "\n".join(
            "  " * depth + node._label() for node, depth in self._walk_with_depth(0)
        )

    def _label(self) -> str:
        name = self.props.get("name")
        if name is not None:
            return f"{self.component_name} #{self.id} ({name})"
        return f"{self.component_name} #{self.id}"

    def _walk_with_depth(self, depth: int) -> Iterator[tuple["TreeNode", int]]:
        yield self, depth
        for child in self.children:
            yield from child._walk_with_depth(depth + 1)

    def walk(self) -> Iterator["TreeNode"]:
        """Iterate over this node and its descendants in pre-order."""
        for node, _ in self._walk_with_depth(0):
            yield node

    def find(self, finder: Callable[["TreeNode"], bool]) -> "TreeNode | None":
        """Return the first node, depth first and self included, matching finder."""
        for node in self.walk():
            if finder(node):
                return node
        return None

    def find_all(self, finder: Callable[["TreeNode"], bool]) -> list["TreeNode"]:
        """Return every node matching finder in pre-order."""
        return [node for node in self.walk() if finder(node)]

    @property
    def depth(self) -> int:
        """Number of levels in the subtree rooted here."""
        if not self.children:
            return 1
        return 1 + max(child.depth for child in self.children)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeNode":
        """Build a tree from its JSON form (camelCase keys)."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Dump the tree to its JSON form (camelCase keys)."""
        return self.model_dump(by_alias=True)
