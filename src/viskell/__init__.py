"""viskell - type checking core of a visual Haskell editor."""

from viskell.catalog import (
    Catalog,
    FunctionInfo,
    load_default_catalog,
    setup,
)
from viskell.checker import (
    CheckResult,
    check,
)
from viskell.config import (
    Settings,
    load_config,
    load_settings,
)
from viskell.constraints import (
    ConstraintSet,
    TypeClass,
)
from viskell.errors import (
    CatalogError,
    ConstraintError,
    HaskellTypeError,
    MismatchedConstructorError,
    RecursiveTypeError,
    ShapeMismatchError,
    SignatureError,
)
from viskell.expr import (
    Apply,
    Expression,
    Ident,
    Value,
    apply,
)
from viskell.locator import (
    ErrorSite,
    argument_index,
    locate,
)
from viskell.signature import build_signature
from viskell.types import (
    ConcreteType,
    FunType,
    Type,
    TypeApp,
    TypeCon,
    TypeVar,
    function_of,
    instantiate,
    list_of,
    tuple_of,
)
from viskell.unifier import unify

__all__ = [
    # Expressions
    "Apply",
    # Catalog
    "Catalog",
    "CatalogError",
    # Checking
    "CheckResult",
    "ConcreteType",
    "ConstraintError",
    # Constraints
    "ConstraintSet",
    "ErrorSite",
    "Expression",
    "FunType",
    "FunctionInfo",
    # Errors
    "HaskellTypeError",
    "Ident",
    "MismatchedConstructorError",
    "RecursiveTypeError",
    # Configuration
    "Settings",
    "ShapeMismatchError",
    "SignatureError",
    # Types
    "Type",
    "TypeApp",
    "TypeClass",
    "TypeCon",
    "TypeVar",
    "Value",
    "apply",
    "argument_index",
    "build_signature",
    "check",
    "function_of",
    "instantiate",
    "list_of",
    "load_config",
    "load_default_catalog",
    "load_settings",
    "locate",
    "setup",
    "tuple_of",
    # Unification
    "unify",
]
