"""
Tests for vercollate.versioning.predicate module.

Tests operator evaluation including:
- The full result/operator truth table
- Rejection of unknown operators
- compare_with_operator composition
"""

from __future__ import annotations

import pytest

from vercollate.exceptions import UnknownOperatorError, VercollateError
from vercollate.versioning import OPERATORS, compare_with_operator, evaluate


class TestEvaluate:
    """Tests for evaluate."""

    def test_equal_result(self):
        """Test that only operators with an equality part hold for 0."""
        assert evaluate(0, "=")
        assert evaluate(0, "<=")
        assert evaluate(0, ">=")
        assert not evaluate(0, "<")
        assert not evaluate(0, ">")

    def test_less_result(self):
        assert evaluate(-1, "<")
        assert evaluate(-1, "<=")
        assert not evaluate(-1, "=")
        assert not evaluate(-1, ">=")
        assert not evaluate(-1, ">")

    def test_greater_result(self):
        assert evaluate(1, ">")
        assert evaluate(1, ">=")
        assert not evaluate(1, "=")
        assert not evaluate(1, "<=")
        assert not evaluate(1, "<")

    def test_only_sign_matters(self):
        assert evaluate(-200, "<")
        assert evaluate(37, ">=")

    @pytest.mark.parametrize("op", ["!=", "<>", "==", "", "lt", " <"])
    def test_unknown_operator_raises(self, op):
        with pytest.raises(UnknownOperatorError):
            evaluate(0, op)

    def test_unknown_operator_is_vercollate_error(self):
        with pytest.raises(VercollateError):
            evaluate(1, "!=")

    def test_operator_set(self):
        assert OPERATORS == {"<", "<=", "=", ">=", ">"}


class TestCompareWithOperator:
    """Tests for compare_with_operator."""

    def test_generic_default(self):
        assert compare_with_operator("1.0", "<", "1.1")
        assert not compare_with_operator("1.0", ">", "1.1")

    def test_with_config(self, rhel, generic):
        assert compare_with_operator("1.0~rc1", "<", "1.0", rhel)
        assert not compare_with_operator("1.0~rc1", "<", "1.0", generic)

    def test_remainder_equality(self, arch):
        """Test that a trailing hyphen segment compares equal under arch."""
        assert compare_with_operator("1.0-1", "=", "1.0", arch)

    def test_unknown_operator(self):
        with pytest.raises(UnknownOperatorError):
            compare_with_operator("1.0", "!=", "1.1")
