"""Unit tests for paging parameter resolution."""

import pytest

from collaboration.application.paging import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    compute_paging_limits,
)


class TestComputePagingLimits:
    """Tests for compute_paging_limits."""

    def test_defaults_when_missing(self):
        assert compute_paging_limits(None, None) == (0, DEFAULT_PAGE_LIMIT)

    def test_keeps_valid_values(self):
        assert compute_paging_limits(40, 10) == (40, 10)

    def test_negative_offset_becomes_zero(self):
        assert compute_paging_limits(-5, 10) == (0, 10)

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_uses_default(self, limit):
        assert compute_paging_limits(0, limit) == (0, DEFAULT_PAGE_LIMIT)

    def test_limit_is_capped(self):
        assert compute_paging_limits(0, 500) == (0, MAX_PAGE_LIMIT)
