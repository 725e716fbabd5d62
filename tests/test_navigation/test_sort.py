"""Tests for sort toggling."""

import pytest

from salesview.models import SortDirection, SortField, SortSpec
from salesview.navigation.sort import SortController


class TestSortController:
    def test_starts_unset(self) -> None:
        assert SortController().active is None

    def test_first_toggle_is_ascending(self) -> None:
        controller = SortController()
        assert controller.toggle(SortField.DATE) == SortSpec(SortField.DATE, SortDirection.ASC)

    def test_other_field_resets_to_ascending(self) -> None:
        controller = SortController(SortSpec(SortField.DATE, SortDirection.ASC))
        assert controller.toggle("price") == SortSpec(SortField.PRICE, SortDirection.ASC)

    def test_same_field_flips_direction(self) -> None:
        controller = SortController(SortSpec(SortField.DATE, SortDirection.ASC))
        controller.toggle("price")
        assert controller.toggle("price") == SortSpec(SortField.PRICE, SortDirection.DESC)
        assert controller.toggle("price") == SortSpec(SortField.PRICE, SortDirection.ASC)

    def test_switching_from_descending_field_starts_ascending(self) -> None:
        controller = SortController(SortSpec(SortField.PRICE, SortDirection.DESC))
        assert controller.toggle(SortField.DATE).direction is SortDirection.ASC

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError):
            SortController().toggle("customer_email")
