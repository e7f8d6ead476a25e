"""Expression trees built by the editor from its visual graph.

Only the shapes the type checker needs are modelled: values, references
to catalog functions, and function application. Every expression computes
its type once and caches it; the editor builds a new tree whenever the
graph changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from viskell.types import FunType, Type, TypeVar, instantiate
from viskell.unifier import unify

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(eq=False)
class Expression(ABC):
    """Base for expression nodes.

    Expressions compare by identity: the editor maps them back to the
    blocks they were built from.
    """

    _type: Type | None = field(default=None, init=False, repr=False)

    def find_type(self) -> Type:
        """Return the type of this expression, computing it on first use.

        Raises:
            HaskellTypeError: If the expression is ill-typed. Nothing is
                cached in that case, but variables bound before the error
                stay bound.

        """
        if self._type is None:
            self._type = self.analyze()
        return self._type

    @abstractmethod
    def analyze(self) -> Type:
        """Compute the type of this expression."""

    @property
    def children(self) -> tuple[Expression, ...]:
        return ()

    def walk(self) -> Iterator[Expression]:
        """Yield this expression and all sub-expressions, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(eq=False)
class Value(Expression):
    """A literal value of a known type, e.g. `5.0 :: Float`."""

    type: Type
    value: str

    def analyze(self) -> Type:
        return self.type

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Ident(Expression):
    """A reference to a named function.

    Each reference gets its own fresh copy of the signature, so two uses
    of `id` can be applied to arguments of different types.
    """

    name: str
    signature: Type

    def analyze(self) -> Type:
        return instantiate(self.signature)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Apply(Expression):
    """Application of a function expression to one argument.

    Calls with several arguments are nested:
        f x y  -> Apply(Apply(f, x), y)
    """

    function: Expression
    argument: Expression

    @property
    def children(self) -> tuple[Expression, ...]:
        return (self.function, self.argument)

    def analyze(self) -> Type:
        function_type = self.function.find_type()
        argument_type = self.argument.find_type()
        result = TypeVar.fresh()
        unify(self, function_type, FunType(argument_type, result))
        return result

    def __str__(self) -> str:
        return f"({self.function} {self.argument})"


def apply(function: Expression, *arguments: Expression) -> Expression:
    """Build the nested application of `function` to `arguments`."""
    result = function
    for argument in arguments:
        result = Apply(result, argument)
    return result
