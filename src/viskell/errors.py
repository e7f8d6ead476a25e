"""Error types for the type checker.

Type errors are exceptions that carry the expression that was being
typed when unification failed. The editor uses that expression to find
the input slot to highlight (see `viskell.locator`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from viskell.expr import Expression


@dataclass
class HaskellTypeError(Exception):
    """Type error with the expression it was detected in."""

    message: str
    expression: Expression | None = None

    def __str__(self) -> str:
        if self.expression is None:
            return self.message
        return f"{self.message} in {self.expression}"


class RecursiveTypeError(HaskellTypeError):
    """A type variable would be bound to a type containing itself."""


class MismatchedConstructorError(HaskellTypeError):
    """Two type constructors with different names."""


class ConstraintError(HaskellTypeError):
    """A constrained type variable would be bound to a non-instance."""


class ShapeMismatchError(HaskellTypeError):
    """Two types of incompatible shape, e.g. a function and a constructor."""


class CatalogError(ValueError):
    """The function catalog or its type classes are malformed."""


@dataclass
class SignatureError(ValueError):
    """A type signature could not be parsed."""

    message: str
    text: str
    position: int

    def __str__(self) -> str:
        return f"{self.message} at position {self.position} in {self.text!r}"
