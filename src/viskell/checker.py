"""Editor-facing entry point of the type checker.

The editor rebuilds an expression tree whenever its graph changes and
hands the root to `check`. The result either carries the type of the
tree or the type error together with the block input to highlight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from viskell.errors import HaskellTypeError
from viskell.locator import ErrorSite, locate
from viskell.log import get_logger

if TYPE_CHECKING:
    from viskell.expr import Expression
    from viskell.types import Type

logger = get_logger(__name__)


@dataclass
class CheckResult:
    """Result of type checking an expression tree.

    Attributes:
        success: Whether the tree is well-typed
        type: The resolved type of the tree, if well-typed
        error: The type error, if not
        site: The block input the error is blamed on, if any

    """

    success: bool
    type: Type | None = None
    error: HaskellTypeError | None = None
    site: ErrorSite | None = None

    def format(self) -> str:
        """Format the outcome for display."""
        if self.success:
            return f"Type check passed: {self.type}"
        lines = [f"Type error: {self.error.message}"]
        if self.error.expression is not None:
            lines.append(f"  In:    {self.error.expression}")
        if self.site is not None:
            lines.append(f"  Blame: {self.site.describe()}")
        return "\n".join(lines)


def check(expression: Expression) -> CheckResult:
    """Type check an expression tree.

    Only `HaskellTypeError` is turned into a failed result; any other
    exception is a bug and propagates to the caller.

    Args:
        expression: Root of the tree to check

    Returns:
        CheckResult with the resolved type, or the error and its site

    """
    try:
        t = expression.find_type()
    except HaskellTypeError as error:
        site = locate(error)
        logger.info("Type error %s located at %s", error, site)
        return CheckResult(success=False, error=error, site=site)
    return CheckResult(success=True, type=t.resolve())
