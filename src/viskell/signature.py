"""Build types from Haskell type signatures.

The catalog describes functions with signatures like::

    map :: (a -> b) -> [a] -> [b]
    (+) :: Num a => a -> a -> a
    fst :: (a, b) -> a

This module turns the part after ``::`` into a `Type`. Variables with the
same name within one signature are the same `TypeVar`, and the context
before ``=>`` attaches type classes to them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from viskell.constraints import ConstraintSet, TypeClass
from viskell.errors import SignatureError
from viskell.types import FunType, Type, TypeApp, TypeCon, TypeVar, list_of, tuple_of

if TYPE_CHECKING:
    from collections.abc import Mapping

_TOKEN_RE = re.compile(r"(?P<ident>[A-Za-z_][A-Za-z0-9_']*)|(?P<symbol>->|=>|[()\[\],])")


@dataclass(frozen=True, slots=True)
class Token:
    """Single lexical token of a signature."""

    kind: str
    value: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split a signature into identifier and symbol tokens.

    Raises:
        SignatureError: On characters that are not part of the syntax.

    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            msg = f"Unexpected character {text[pos]!r}"
            raise SignatureError(msg, text, pos)
        kind = match.lastgroup or "symbol"
        tokens.append(Token(kind, match.group(kind), match.start(kind)))
        pos = match.end()
    return tokens


class SignatureParser:
    """Recursive descent parser for one type signature.

    Grammar:
        signature := [context '=>'] type
        context   := assertion | '(' assertion (',' assertion)* ')'
        assertion := ClassName var
        type      := btype ['->' type]
        btype     := atype atype*
        atype     := Con | var | '(' ')' | '(' type (',' type)* ')'
                   | '[' type ']' | '[' ']'
    """

    def __init__(self, text: str, classes: Mapping[str, TypeClass]) -> None:
        self.text = text
        self.classes = classes
        self.tokens = tokenize(text)
        self.pos = 0
        self.variables: dict[str, TypeVar] = {}
        self.constraints: dict[str, set[TypeClass]] = {}

    def parse(self) -> Type:
        """Parse the whole signature.

        Raises:
            SignatureError: If the text is not a well-formed signature.

        """
        if not self.tokens:
            self._fail("Empty type signature")
        arrow = next(
            (i for i, tok in enumerate(self.tokens) if tok.value == "=>"),
            None,
        )
        if arrow is not None:
            self._parse_context(arrow)
            self.pos = arrow + 1
        result = self._parse_type()
        if self.pos < len(self.tokens):
            self._fail(f"Unexpected {self._peek().value!r}")
        return result

    # Context

    def _parse_context(self, stop: int) -> None:
        tokens = self.tokens[:stop]
        if not tokens:
            self._fail("Empty context before '=>'")
        if tokens[0].value == "(":
            if tokens[-1].value != ")":
                self._fail("Unclosed context", tokens[-1].position)
            inner = tokens[1:-1]
            groups: list[list[Token]] = [[]]
            for tok in inner:
                if tok.value == ",":
                    groups.append([])
                else:
                    groups[-1].append(tok)
        else:
            groups = [tokens]
        for group in groups:
            self._parse_assertion(group, tokens[0].position)

    def _parse_assertion(self, group: list[Token], position: int) -> None:
        if len(group) != 2 or group[0].kind != "ident" or group[1].kind != "ident":
            where = group[0].position if group else position
            self._fail("Expected a class assertion like 'Num a'", where)
        class_tok, var_tok = group
        if not _is_variable(var_tok.value):
            self._fail(f"Expected a type variable, got {var_tok.value!r}", var_tok.position)
        type_class = self.classes.get(class_tok.value)
        if type_class is None:
            self._fail(f"Unknown type class {class_tok.value!r}", class_tok.position)
        self.constraints.setdefault(var_tok.value, set()).add(type_class)

    # Types

    def _parse_type(self) -> Type:
        argument = self._parse_btype()
        if self._accept("->"):
            return FunType(argument, self._parse_type())
        return argument

    def _parse_btype(self) -> Type:
        result = self._parse_atype()
        while self._starts_atype():
            result = TypeApp(result, self._parse_atype())
        return result

    def _parse_atype(self) -> Type:
        tok = self._next()
        if tok.kind == "ident":
            if _is_variable(tok.value):
                return self._variable(tok.value)
            return TypeCon(tok.value)
        if tok.value == "[":
            if self._accept("]"):
                return TypeCon("[]")
            element = self._parse_type()
            self._expect("]")
            return list_of(element)
        if tok.value == "(":
            if self._accept(")"):
                return tuple_of()
            elements = [self._parse_type()]
            while self._accept(","):
                elements.append(self._parse_type())
            self._expect(")")
            return tuple_of(*elements)
        self._fail(f"Unexpected {tok.value!r}", tok.position)

    def _variable(self, name: str) -> TypeVar:
        if name not in self.variables:
            classes = self.constraints.get(name, ())
            self.variables[name] = TypeVar(name, ConstraintSet(classes))
        return self.variables[name]

    # Token helpers

    def _starts_atype(self) -> bool:
        if self.pos >= len(self.tokens):
            return False
        tok = self.tokens[self.pos]
        return tok.kind == "ident" or tok.value in ("(", "[")

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _next(self) -> Token:
        if self.pos >= len(self.tokens):
            self._fail("Unexpected end of signature", len(self.text))
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _accept(self, value: str) -> bool:
        if self.pos < len(self.tokens) and self.tokens[self.pos].value == value:
            self.pos += 1
            return True
        return False

    def _expect(self, value: str) -> None:
        if not self._accept(value):
            where = self.tokens[self.pos].position if self.pos < len(self.tokens) else len(self.text)
            self._fail(f"Expected {value!r}", where)

    def _fail(self, message: str, position: int | None = None) -> NoReturn:
        if position is None:
            position = self.tokens[self.pos].position if self.pos < len(self.tokens) else 0
        raise SignatureError(message, self.text, position)


def _is_variable(name: str) -> bool:
    return name[0].islower() or name[0] == "_"


def build_signature(text: str, classes: Mapping[str, TypeClass] | None = None) -> Type:
    """Parse a type signature into a `Type`.

    Args:
        text: The signature, e.g. "Num a => a -> a -> a"
        classes: Type classes that may appear in the context, by name

    Returns:
        The type. Its variables are not shared with any other signature.

    Raises:
        SignatureError: If the signature is malformed or names an
            unknown class.

    Examples:
        >>> str(build_signature("(a -> b) -> [a] -> [b]"))
        '(a -> b) -> [a] -> [b]'

    """
    return SignatureParser(text, classes or {}).parse()
