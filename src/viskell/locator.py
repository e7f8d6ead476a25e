"""Map a type error back to an input slot of a function block.

The unifier reports the expression it was typing when it failed. For an
application spine like ``Apply(Apply(f, x), y)`` the editor needs to know
which block that is (``f``) and which of its inputs to highlight. The
index counts the `Apply` nodes walked through on the way down to the
function, starting from -1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from viskell.expr import Apply

if TYPE_CHECKING:
    from viskell.errors import HaskellTypeError
    from viskell.expr import Expression


@dataclass(frozen=True)
class ErrorSite:
    """The function block and input index a type error is blamed on."""

    function: Expression
    index: int

    def describe(self) -> str:
        """Human-readable description of the site."""
        if self.index < 0:
            return f"{self.function}"
        return f"input {self.index} of {self.function}"


def argument_index(expression: Expression) -> int:
    """Return the input index of the outermost call blamed for an error."""
    return locate_expression(expression).index


def locate_expression(expression: Expression) -> ErrorSite:
    """Walk down the function side of an application spine."""
    index = -1
    while isinstance(expression, Apply):
        expression = expression.function
        index += 1
    return ErrorSite(expression, index)


def locate(error: HaskellTypeError) -> ErrorSite | None:
    """Find the site of a type error, or None if it has no expression."""
    if error.expression is None:
        return None
    return locate_expression(error.expression)
