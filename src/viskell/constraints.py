"""Type class constraints attached to type variables.

A type class here is a flat membership table: the class name plus the
names of the type constructors that are instances of it. Checking a
constraint is a single lookup, there is no instance resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from viskell.types import TypeCon


@dataclass(frozen=True)
class TypeClass:
    """A named type class and the constructors admitted by it.

    Attributes:
        name: Class name, e.g. "Num"
        instances: Names of the type constructors that are members

    """

    name: str
    instances: frozenset[str] = frozenset()

    def admits(self, con: TypeCon) -> bool:
        """Check if the constructor is an instance of this class."""
        return con.name in self.instances

    def __str__(self) -> str:
        return self.name


class ConstraintSet:
    """The set of type classes a type variable is constrained by."""

    __slots__ = ("_classes",)

    def __init__(self, classes: Iterable[TypeClass] = ()) -> None:
        self._classes = frozenset(classes)

    @property
    def classes(self) -> frozenset[TypeClass]:
        return self._classes

    def has_constraints(self) -> bool:
        return bool(self._classes)

    def all_constraints_match(self, con: TypeCon) -> bool:
        """Check that every class in the set admits `con`.

        An empty set is satisfied by any constructor.
        """
        return all(cls.admits(con) for cls in self._classes)

    def union(self, other: ConstraintSet) -> ConstraintSet:
        """Combine two sets, as needed when merging type variables."""
        if not other._classes:
            return self
        if not self._classes:
            return other
        return ConstraintSet(self._classes | other._classes)

    def __iter__(self):
        return iter(sorted(self._classes, key=lambda cls: cls.name))

    def __len__(self) -> int:
        return len(self._classes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self._classes == other._classes

    def __hash__(self) -> int:
        return hash(self._classes)

    def __repr__(self) -> str:
        return f"ConstraintSet({[cls.name for cls in self]!r})"

    def __str__(self) -> str:
        return "(" + ", ".join(cls.name for cls in self) + ")"
