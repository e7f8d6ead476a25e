"""Tests for building types from signatures."""

import re

import pytest

from viskell.constraints import ConstraintSet, TypeClass
from viskell.errors import SignatureError
from viskell.signature import build_signature, tokenize
from viskell.types import FunType, TypeApp, TypeCon, TypeVar, list_of

CLASSES = {
    "Num": TypeClass("Num", frozenset({"Int", "Float"})),
    "Integral": TypeClass("Integral", frozenset({"Int"})),
}


class TestTokenize:
    """Tests for the tokenizer."""

    def test_identifiers_and_symbols(self) -> None:
        values = [tok.value for tok in tokenize("Num a => [a] -> (a, b')")]
        assert values == [
            "Num", "a", "=>", "[", "a", "]", "->", "(", "a", ",", "b'", ")",
        ]

    def test_positions(self) -> None:
        tokens = tokenize("  a -> b")
        assert [tok.position for tok in tokens] == [2, 4, 7]

    def test_unexpected_character(self) -> None:
        with pytest.raises(SignatureError) as exc_info:
            tokenize("Int $")
        assert exc_info.value.position == 4


class TestBuildSignature:
    """Tests for the signature parser."""

    def test_constructor(self) -> None:
        assert build_signature("Int") == TypeCon("Int")

    def test_repeated_variable_is_shared(self) -> None:
        t = build_signature("a -> a")
        assert isinstance(t, FunType)
        assert isinstance(t.argument, TypeVar)
        assert t.argument == t.result

    def test_arrow_is_right_associative(self) -> None:
        t = build_signature("a -> b -> a")
        assert isinstance(t, FunType)
        assert isinstance(t.result, FunType)
        assert t.argument == t.result.result

    def test_parenthesised_function_argument(self) -> None:
        t = build_signature("(a -> b) -> [a] -> [b]")
        assert str(t) == "(a -> b) -> [a] -> [b]"
        assert isinstance(t, FunType)
        assert isinstance(t.argument, FunType)

    def test_type_application(self) -> None:
        t = build_signature("Either a (Maybe b)")
        assert isinstance(t, TypeApp)
        assert str(t) == "Either a (Maybe b)"

    def test_lists_tuples_and_unit(self) -> None:
        assert str(build_signature("[(a, b)] -> ([a], [b])")) == "[(a, b)] -> ([a], [b])"
        assert build_signature("()") == TypeCon("()")
        assert build_signature("[]") == TypeCon("[]")

    def test_list_of_constructor(self) -> None:
        assert build_signature("[Int]") == list_of(TypeCon("Int"))

    def test_single_constraint(self) -> None:
        t = build_signature("Num a => a -> a", CLASSES)
        assert isinstance(t, FunType)
        assert isinstance(t.argument, TypeVar)
        assert t.argument.constraints == ConstraintSet([CLASSES["Num"]])

    def test_multiple_constraints(self) -> None:
        t = build_signature("(Integral a, Num b) => a -> b", CLASSES)
        assert isinstance(t, FunType)
        assert t.argument.constraints == ConstraintSet([CLASSES["Integral"]])
        assert t.result.constraints == ConstraintSet([CLASSES["Num"]])

    def test_two_constraints_on_one_variable(self) -> None:
        t = build_signature("(Integral a, Num a) => a", CLASSES)
        assert isinstance(t, TypeVar)
        assert len(t.constraints) == 2

    def test_unconstrained_variable(self) -> None:
        t = build_signature("Num a => a -> b", CLASSES)
        assert isinstance(t, FunType)
        assert not t.result.constraints.has_constraints()

    def test_signatures_do_not_share_variables(self) -> None:
        first = build_signature("a")
        second = build_signature("a")
        assert first != second


class TestSignatureErrors:
    """Tests for malformed signatures."""

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("", "Empty type signature"),
            ("a ->", "Unexpected end"),
            ("(a", "Expected ')'"),
            ("[a", "Expected ']'"),
            ("a b )", "Unexpected ')'"),
            ("=> a", "Empty context"),
            ("Num Int => Int", "Expected a type variable"),
            ("Num => a", "Expected a class assertion"),
            ("(Num a => a", "Unclosed context"),
        ],
    )
    def test_malformed(self, text: str, message: str) -> None:
        with pytest.raises(SignatureError, match=re.escape(message)):
            build_signature(text, CLASSES)

    def test_unknown_class(self) -> None:
        with pytest.raises(SignatureError, match="Unknown type class 'Ord'") as exc_info:
            build_signature("Ord a => a", CLASSES)
        assert exc_info.value.position == 0

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="position"):
            build_signature("a -> -> b")
