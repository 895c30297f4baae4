"""Unit tests for the Ok / Err result primitive."""

from __future__ import annotations

import pytest

from modules.core.exceptions import NotFound
from shared.domain.result import Err, Ok, unwrap

pytestmark = pytest.mark.unit


class TestResult:
    def test_unwrap_ok_returns_value(self):
        assert unwrap(Ok(42)) == 42

    def test_unwrap_err_raises_carried_error(self):
        error = NotFound("gone")
        with pytest.raises(NotFound) as info:
            unwrap(Err(error))
        assert info.value is error

    def test_variants_are_values(self):
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(ValueError())
