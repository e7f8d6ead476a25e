"""Type expressions for the type checker.

This module defines the type grammar the unifier works on:

    TypeVar   a            unknown type, shares a mutable cell with its aliases
    TypeCon   Int          nullary type constructor, identified by name
    FunType   a -> b       function type
    TypeApp   Maybe a      application of a type to a type argument

Type variables are handles onto a cell. Unifying two unbound variables
merges their cells (union-find with path compression), so every handle
observes the binding that is made later through any one of them.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeAlias

from viskell.constraints import ConstraintSet

_var_counter = itertools.count()


def reset_var_counter() -> None:
    """Restart fresh variable numbering (useful for deterministic tests)."""
    global _var_counter  # noqa: PLW0603
    _var_counter = itertools.count()


class Type(ABC):
    """Base class of all type expressions."""

    @abstractmethod
    def contains_occurrence_of(self, var: TypeVar) -> bool:
        """Check whether `var` is reachable from this type.

        Follows both structural children and the instantiation of bound
        type variables. This is the occurs check run before binding `var`.
        """

    @abstractmethod
    def resolve(self) -> Type:
        """Return a copy with every bound type variable replaced by its instance."""

    @abstractmethod
    def fresh_copy(self, mapping: dict[int, TypeVar]) -> Type:
        """Copy this type, replacing unbound variables with fresh ones.

        Args:
            mapping: Cell id to fresh variable, shared across one copy so
                that repeated occurrences stay linked.

        """

    def __str__(self) -> str:
        return self.pretty()

    @abstractmethod
    def pretty(self, fixity: int = 0) -> str:
        """Render the type in Haskell notation.

        Args:
            fixity: Binding strength of the enclosing position; 0 at top level,
                1 as the left side of an arrow, 2 as an argument of an
                application.

        """


class _Cell:
    """Shared binding state of one or more type variables."""

    __slots__ = ("constraints", "instance", "parent")

    def __init__(self, constraints: ConstraintSet) -> None:
        self.parent: _Cell | None = None
        self.instance: ConcreteType | None = None
        self.constraints = constraints

    def root(self) -> _Cell:
        cell = self
        while cell.parent is not None:
            cell = cell.parent
        # Path compression
        node = self
        while node.parent is not None and node.parent is not cell:
            node.parent, node = cell, node.parent
        return cell


class TypeVar(Type):
    """A type variable that can be unified with other types.

    Equality is cell identity: two handles are equal once they have been
    merged, no matter what their display names are.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, name: str, constraints: ConstraintSet | None = None) -> None:
        self.name = name
        self._cell = _Cell(constraints if constraints is not None else ConstraintSet())

    @classmethod
    def fresh(cls, prefix: str = "t", constraints: ConstraintSet | None = None) -> TypeVar:
        """Create a variable with a unique generated name."""
        return cls(f"{prefix}{next(_var_counter)}", constraints)

    @property
    def cell_id(self) -> int:
        """Identity of the underlying cell, stable until the next merge."""
        return id(self._cell.root())

    @property
    def constraints(self) -> ConstraintSet:
        return self._cell.root().constraints

    def has_concrete_instance(self) -> bool:
        return self._cell.root().instance is not None

    def get_instantiated_type(self) -> ConcreteType:
        """Return the concrete type this variable is bound to.

        Raises:
            RuntimeError: If the variable is unbound.

        """
        instance = self._cell.root().instance
        if instance is None:
            msg = f"Type variable {self.name} has no concrete instance"
            raise RuntimeError(msg)
        return instance

    def set_concrete_instance(self, instance: ConcreteType) -> None:
        """Bind this variable, and all its aliases, to a concrete type.

        Raises:
            RuntimeError: If the variable is already bound.

        """
        cell = self._cell.root()
        if cell.instance is not None:
            msg = f"Type variable {self.name} is already bound to {cell.instance}"
            raise RuntimeError(msg)
        cell.instance = instance

    def unify_with(self, other: TypeVar) -> None:
        """Merge this variable's cell into the cell of `other`.

        Both variables must be unbound. The constraints of both are kept
        on the surviving cell.
        """
        mine, theirs = self._cell.root(), other._cell.root()
        if mine is theirs:
            return
        if mine.instance is not None or theirs.instance is not None:
            msg = f"Cannot merge bound type variables {self.name} and {other.name}"
            raise RuntimeError(msg)
        theirs.constraints = theirs.constraints.union(mine.constraints)
        mine.parent = theirs
        self._cell = theirs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeVar):
            return NotImplemented
        return self._cell.root() is other._cell.root()

    def __repr__(self) -> str:
        return f"TypeVar({self.name!r})"

    def contains_occurrence_of(self, var: TypeVar) -> bool:
        cell = self._cell.root()
        if cell is var._cell.root():
            return True
        if cell.instance is not None:
            return cell.instance.contains_occurrence_of(var)
        return False

    def resolve(self) -> Type:
        instance = self._cell.root().instance
        return instance.resolve() if instance is not None else self

    def fresh_copy(self, mapping: dict[int, TypeVar]) -> Type:
        cell = self._cell.root()
        if cell.instance is not None:
            return cell.instance.fresh_copy(mapping)
        key = id(cell)
        if key not in mapping:
            mapping[key] = TypeVar.fresh(self.name, cell.constraints)
        return mapping[key]

    def pretty(self, fixity: int = 0) -> str:
        instance = self._cell.root().instance
        if instance is not None:
            return instance.pretty(fixity)
        return self.name


@dataclass(frozen=True, eq=True)
class TypeCon(Type):
    """A nullary type constructor such as Int or Bool."""

    name: str

    def contains_occurrence_of(self, var: TypeVar) -> bool:
        return False

    def resolve(self) -> Type:
        return self

    def fresh_copy(self, mapping: dict[int, TypeVar]) -> Type:
        return self

    def pretty(self, fixity: int = 0) -> str:
        return self.name


@dataclass(frozen=True, eq=True)
class FunType(Type):
    """The type of a function from `argument` to `result`."""

    argument: Type
    result: Type

    def contains_occurrence_of(self, var: TypeVar) -> bool:
        return self.argument.contains_occurrence_of(var) or (
            self.result.contains_occurrence_of(var)
        )

    def resolve(self) -> Type:
        return FunType(self.argument.resolve(), self.result.resolve())

    def fresh_copy(self, mapping: dict[int, TypeVar]) -> Type:
        return FunType(
            self.argument.fresh_copy(mapping),
            self.result.fresh_copy(mapping),
        )

    def pretty(self, fixity: int = 0) -> str:
        text = f"{self.argument.pretty(1)} -> {self.result.pretty(0)}"
        return f"({text})" if fixity > 0 else text



LIST_CON = "[]"
UNIT_CON = "()"


def tuple_con(arity: int) -> str:
    """Name of the tuple constructor of the given arity, e.g. `(,)`."""
    return "(" + "," * (arity - 1) + ")"


@dataclass(frozen=True, eq=True)
class TypeApp(Type):
    """Application of a type function to a type argument, e.g. `Maybe a`.

    Multi-argument constructors are curried:
        Either a b  -> TypeApp(TypeApp(TypeCon("Either"), a), b)
    """

    type_fun: Type
    type_arg: Type

    def contains_occurrence_of(self, var: TypeVar) -> bool:
        return self.type_fun.contains_occurrence_of(var) or (
            self.type_arg.contains_occurrence_of(var)
        )

    def resolve(self) -> Type:
        return TypeApp(self.type_fun.resolve(), self.type_arg.resolve())

    def fresh_copy(self, mapping: dict[int, TypeVar]) -> Type:
        return TypeApp(
            self.type_fun.fresh_copy(mapping),
            self.type_arg.fresh_copy(mapping),
        )

    def spine(self) -> tuple[Type, list[Type]]:
        """Split into the head type function and its arguments in order."""
        args: list[Type] = []
        head: Type = self
        while isinstance(head, TypeApp):
            args.append(head.type_arg)
            head = head.type_fun
        args.reverse()
        return head, args

    def pretty(self, fixity: int = 0) -> str:
        head, args = self.spine()
        head = head.resolve()
        if isinstance(head, TypeCon):
            if head.name == LIST_CON and len(args) == 1:
                return f"[{args[0].pretty(0)}]"
            if head.name == tuple_con(len(args)) and len(args) > 1:
                return "(" + ", ".join(a.pretty(0) for a in args) + ")"
        text = " ".join([head.pretty(2), *(a.pretty(2) for a in args)])
        return f"({text})" if fixity > 1 else text



ConcreteType: TypeAlias = TypeCon | FunType | TypeApp
"""Any type that is not a type variable."""


def instantiate(t: Type) -> Type:
    """Return a copy of `t` with fresh variables for all unbound ones.

    Occurrences of the same variable map to the same fresh variable, and
    each fresh variable carries the constraints of the one it replaces.
    """
    return t.fresh_copy({})


def list_of(element: Type) -> TypeApp:
    """Build the list type `[element]`."""
    return TypeApp(TypeCon(LIST_CON), element)


def tuple_of(*elements: Type) -> Type:
    """Build the tuple type `(e1, e2, ...)`; `()` for no elements."""
    if not elements:
        return TypeCon(UNIT_CON)
    if len(elements) == 1:
        return elements[0]
    result: Type = TypeCon(tuple_con(len(elements)))
    for element in elements:
        result = TypeApp(result, element)
    return result


def function_of(*types: Type) -> Type:
    """Build the curried function type `t1 -> t2 -> ... -> tn`."""
    if not types:
        msg = "function_of needs at least one type"
        raise ValueError(msg)
    result = types[-1]
    for argument in reversed(types[:-1]):
        result = FunType(argument, result)
    return result
