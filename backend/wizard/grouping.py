"""
Grouping of section lists into named buckets for display.

Header rows are synthetic and only ever appear in the display rows; the
underlying list is never modified.
"""
from typing import Any, Dict, List, Optional
import logging

from shared.constants import UNGROUPED
from shared.schemas import DisplayRow

logger = logging.getLogger(__name__)


def _field_value(record: Any, field: str) -> Any:
    """Read a field from a dict or a model."""
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def _record_id(record: Any) -> str:
    return str(_field_value(record, "id") or "")


def group_key(record: Any, field: str) -> str:
    """
    Bucket name for a record.

    Falsy values (None, "", empty list) go to the Ungrouped bucket. Enum
    values are bucketed by their value, not their repr.
    """
    value = _field_value(record, field)
    if not value:
        return UNGROUPED
    return str(getattr(value, "value", value))


def group_records(records: List[Any], field: str) -> Dict[str, List[Any]]:
    """
    Partition records by field value.

    Buckets are ordered by first appearance and records keep their input
    order within a bucket. Every record lands in exactly one bucket.
    """
    grouped: Dict[str, List[Any]] = {}
    for record in records:
        grouped.setdefault(group_key(record, field), []).append(record)
    return grouped


def _to_payload(record: Any) -> Dict[str, Any]:
    if isinstance(record, dict):
        return dict(record)
    return record.model_dump(mode="json")


def build_display_rows(records: List[Any], field: Optional[str] = None) -> List[DisplayRow]:
    """
    Flatten records into display rows.

    Without a group field the rows are the records themselves. With one,
    each bucket is preceded by a header row with id ``group_<name>``.
    """
    if not field:
        return [DisplayRow(id=_record_id(r), record=_to_payload(r)) for r in records]

    rows: List[DisplayRow] = []
    for group_name, members in group_records(records, field).items():
        rows.append(DisplayRow(
            id=f"group_{group_name}",
            is_group_header=True,
            group_name=group_name,
            count=len(members)
        ))
        rows.extend(
            DisplayRow(id=_record_id(r), group_name=group_name, record=_to_payload(r))
            for r in members
        )
    return rows


def normalize_group_field(field: Optional[str], allowed: Dict[str, str]) -> str:
    """
    Validate a requested group field.

    "none" and "" both mean no grouping. Raises ValueError for fields that
    are not in ``allowed``.
    """
    if not field or field == "none":
        return ""
    if field not in allowed:
        logger.warning(f"[Grouping] Rejected group field '{field}'; allowed: {list(allowed)}")
        raise ValueError(f"Cannot group by '{field}'")
    return field
