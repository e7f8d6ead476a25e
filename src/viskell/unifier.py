"""Unification of type expressions.

Unification is destructive: instead of building a substitution it writes
straight into the cells of the type variables involved. A failed
unification raises a `HaskellTypeError` and leaves any bindings made
before the failure in place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from viskell.errors import (
    ConstraintError,
    MismatchedConstructorError,
    RecursiveTypeError,
    ShapeMismatchError,
)
from viskell.log import get_logger
from viskell.types import FunType, Type, TypeApp, TypeCon, TypeVar

if TYPE_CHECKING:
    from viskell.constraints import ConstraintSet
    from viskell.expr import Expression
    from viskell.types import ConcreteType

logger = get_logger(__name__)


def unify(context: Expression | None, a: Type, b: Type) -> None:
    """Make two types equal by binding type variables.

    Args:
        context: The expression the types belong to, attached to any error
        a: First type
        b: Second type

    Raises:
        RecursiveTypeError: If a variable would have to contain itself.
        MismatchedConstructorError: If two different constructors meet.
        ConstraintError: If a constrained variable meets a non-instance.
        ShapeMismatchError: If the types have incompatible shapes.

    """
    logger.info("Unifying types %s and %s for context %s", a, b, context)

    if a == b:
        # Identical types, nothing to do
        return

    if isinstance(a, TypeVar):
        _unify_var(context, a, b)
    elif isinstance(b, TypeVar):
        # Int and a: same as above, mirrored
        _unify_var(context, b, a)
    elif isinstance(a, TypeCon) and isinstance(b, TypeCon):
        # a == b already failed, so the names differ
        logger.info("Mismatching TypeCon %s and %s for context %s", a, b, context)
        msg = f"{a} ⊥ {b}"
        raise MismatchedConstructorError(msg, context)
    elif isinstance(a, FunType) and isinstance(b, FunType):
        unify(context, a.argument, b.argument)
        unify(context, a.result, b.result)
    elif isinstance(a, TypeApp) and isinstance(b, TypeApp):
        unify(context, a.type_fun, b.type_fun)
        unify(context, a.type_arg, b.type_arg)
    else:
        logger.info("Given up to unify types %s and %s for context %s", a, b, context)
        msg = f"{a} ⊥ {b}"
        raise ShapeMismatchError(msg, context)


def _unify_var(context: Expression | None, va: TypeVar, b: Type) -> None:
    # Checked before anything else, so no binding can ever create a cycle
    if b.contains_occurrence_of(va):
        logger.info("Recursion in types %s and %s for context %s", va, b, context)
        msg = f"{va} ∈ {b}"
        raise RecursiveTypeError(msg, context)

    if va.has_concrete_instance():
        unify(context, va.get_instantiated_type(), b)
    elif isinstance(b, TypeVar):
        if b.has_concrete_instance():
            unify(context, va, b.get_instantiated_type())
        else:
            # Two plain variables end up sharing one cell
            b.unify_with(va)
    else:
        satisfy_constraints(b, va.constraints, context)
        va.set_concrete_instance(b)


def satisfy_constraints(
    t: ConcreteType,
    constraints: ConstraintSet,
    context: Expression | None,
) -> None:
    """Check that a concrete type matches a set of type class constraints.

    Only type constructors can be instances of a class. Any other concrete
    type is accepted only by an empty constraint set.

    Raises:
        ConstraintError: If the constraints are not satisfied.

    """
    if isinstance(t, TypeCon):
        satisfied = constraints.all_constraints_match(t)
    else:
        satisfied = not constraints.has_constraints()

    if not satisfied:
        logger.info(
            "Unable to unify types %s with constraints %s for context %s",
            t,
            constraints,
            context,
        )
        msg = f"{t} ∉ constraints of {constraints}"
        raise ConstraintError(msg, context)
