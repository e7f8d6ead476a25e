"""Shared fixtures for the type checker tests."""

import pytest

from viskell.types import reset_var_counter


@pytest.fixture(autouse=True)
def _fresh_names() -> None:
    """Give every test the same fresh variable names."""
    reset_var_counter()
