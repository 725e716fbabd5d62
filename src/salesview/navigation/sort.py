"""Column sort toggling."""

from salesview.models import SortDirection, SortField, SortSpec


class SortController:
    """Owns the active sort. Starts unset (server default ordering)."""

    def __init__(self, initial: SortSpec | None = None) -> None:
        self._active = initial

    @property
    def active(self) -> SortSpec | None:
        return self._active

    def toggle(self, field: SortField | str) -> SortSpec:
        """Select a sort column.

        Re-selecting the active column flips its direction; any other column
        becomes active ascending. Cursor tokens are not valid across orderings,
        so callers must reset pagination after every toggle.
        """
        field = SortField(field)
        if self._active is not None and self._active.field is field:
            self._active = SortSpec(field, self._active.direction.flipped())
        else:
            self._active = SortSpec(field, SortDirection.ASC)
        return self._active
