"""
Selection set backing the checkbox dialogs (catalog, open requests, cards,
suppliers).
"""
from typing import Any, Iterable, List, Optional


class SelectionSet:
    """
    Ordered set of chosen IDs.

    IDs keep the order they were checked in and never repeat. Checking an
    ID and then unchecking it leaves the set exactly as it was.
    """

    def __init__(self, ids: Optional[Iterable[str]] = None):
        self._ids: List[str] = []
        for record_id in ids or []:
            self.add(record_id)

    def add(self, record_id: str) -> None:
        if record_id not in self._ids:
            self._ids.append(record_id)

    def remove(self, record_id: str) -> None:
        if record_id in self._ids:
            self._ids.remove(record_id)

    def toggle(self, record_id: str, checked: bool) -> None:
        """Mirror a checkbox change."""
        if checked:
            self.add(record_id)
        else:
            self.remove(record_id)

    def clear(self) -> None:
        self._ids = []

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other) -> bool:
        if isinstance(other, SelectionSet):
            return self._ids == other._ids
        return NotImplemented

    def resolve(self, records: List[Any]) -> List[Any]:
        """
        Pick the selected records out of a source list.

        Results follow the source list order, not the selection order.
        IDs with no matching record are ignored.
        """
        chosen = set(self._ids)
        return [r for r in records if _record_id(r) in chosen]

    def unknown_ids(self, records: List[Any]) -> List[str]:
        """Selected IDs that do not exist in the source list."""
        known = {_record_id(r) for r in records}
        return [record_id for record_id in self._ids if record_id not in known]


def _record_id(record: Any) -> str:
    if isinstance(record, dict):
        return record.get("id", "")
    return getattr(record, "id", "")
