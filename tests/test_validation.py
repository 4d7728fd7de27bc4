"""Tests for input validation helpers."""

import math

import pytest

from devinsight.exceptions import InvalidInputError
from devinsight.models import TimeRange
from devinsight.validation import (
    validate_choice,
    validate_identifier,
    validate_positive_int,
    validate_time_range,
)


class TestValidateIdentifier:
    def test_accepts_plain_id(self):
        assert validate_identifier("workspace-1") == "workspace-1"

    @pytest.mark.parametrize("bad", ["", " padded", "trailing ", "tab\tinside", "x" * 257, None, 42])
    def test_rejects_malformed(self, bad):
        with pytest.raises(InvalidInputError):
            validate_identifier(bad, "workspace_id")

    def test_error_names_field(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_identifier("", "engine_id")
        assert exc_info.value.field == "engine_id"
        assert exc_info.value.details["reason"] == "must not be empty"


class TestValidateTimeRange:
    def test_tuple_coerced(self):
        assert validate_time_range((1, 2)) == TimeRange(1.0, 2.0)

    def test_empty_range_allowed(self):
        assert validate_time_range(TimeRange(5.0, 5.0)).span == 0.0

    def test_start_after_end(self):
        with pytest.raises(InvalidInputError):
            validate_time_range((10, 5))

    def test_nan_rejected(self):
        with pytest.raises(InvalidInputError):
            validate_time_range((math.nan, 5))

    def test_wrong_arity(self):
        with pytest.raises(InvalidInputError):
            validate_time_range((1, 2, 3))

    @pytest.mark.parametrize("bounds", [("a", "b"), (None, 5), (1, [2])])
    def test_non_numeric_bounds(self, bounds):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_time_range(bounds)
        assert exc_info.value.reason == "bounds must be numbers"


class TestOtherValidators:
    def test_choice(self):
        assert validate_choice("quality", ["quality", "security"], "category") == "quality"
        with pytest.raises(InvalidInputError):
            validate_choice("speed", ["quality", "security"], "category")

    @pytest.mark.parametrize("bad", [0, -1, 1.5, True, "3"])
    def test_positive_int(self, bad):
        with pytest.raises(InvalidInputError):
            validate_positive_int(bad, "limit")
        assert validate_positive_int(3, "limit") == 3
