"""Project model: the reflections produced by the converter.

A project holds modules, modules hold classes, functions and variables, and
classes hold methods and properties. Every reflection keeps a back-reference
to its parent so themes can build breadcrumbs and full names.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from ..utils.array import remove_if_present


class ReflectionKind(str, Enum):
    """Kinds of declarations the converter understands."""

    PROJECT = "project"
    MODULE = "module"
    CLASS = "class"
    FUNCTION = "function"
    METHOD = "method"
    PROPERTY = "property"
    VARIABLE = "variable"


@dataclass(frozen=True)
class SourceReference:
    """Where a declaration was found, relative to its input root."""

    file_name: str
    line: int


@dataclass(eq=False)
class Reflection:
    """A single documented declaration."""

    name: str
    kind: ReflectionKind
    comment: str = ""
    signature: str = ""
    source: Optional[SourceReference] = None
    flags: set[str] = field(default_factory=set)
    children: list["Reflection"] = field(default_factory=list)
    parent: Optional["Reflection"] = field(default=None, repr=False)

    @property
    def full_name(self) -> str:
        """Dotted name from the owning module down to this reflection."""
        parts = []
        current: Optional[Reflection] = self
        while current is not None and current.kind != ReflectionKind.PROJECT:
            parts.append(current.name)
            current = current.parent
        return ".".join(reversed(parts))

    def add_child(self, child: "Reflection") -> "Reflection":
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: "Reflection") -> bool:
        removed = remove_if_present(self.children, child)
        if removed:
            child.parent = None
        return removed

    def get_child(self, name: str) -> Optional["Reflection"]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def children_of_kind(self, *kinds: ReflectionKind) -> list["Reflection"]:
        return [child for child in self.children if child.kind in kinds]

    def traverse(self) -> Iterator["Reflection"]:
        """Yield every descendant, depth first, parents before children."""
        for child in list(self.children):
            yield child
            yield from child.traverse()


@dataclass(eq=False)
class ProjectReflection(Reflection):
    """Root of the model."""

    name: str = ""
    kind: ReflectionKind = ReflectionKind.PROJECT
    readme: str = ""

    @property
    def modules(self) -> list[Reflection]:
        return self.children_of_kind(ReflectionKind.MODULE)
