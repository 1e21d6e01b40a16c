"""
Unit tests for the checkbox selection set.
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from shared.selection import SelectionSet


RECORDS = [{"id": "a"}, {"id": "b"}, {"id": "c"}]


class TestSelectionSet:

    def test_add_is_idempotent(self):
        selection = SelectionSet()
        selection.add("a")
        selection.add("a")
        assert selection.ids == ["a"]

    def test_toggle_on_then_off_restores_state(self):
        selection = SelectionSet(["a"])
        before = SelectionSet(selection.ids)
        selection.toggle("b", True)
        selection.toggle("b", False)
        assert selection == before

    def test_remove_missing_id_is_noop(self):
        selection = SelectionSet(["a"])
        selection.remove("z")
        assert selection.ids == ["a"]

    def test_resolve_follows_source_order(self):
        selection = SelectionSet(["c", "a"])
        assert [r["id"] for r in selection.resolve(RECORDS)] == ["a", "c"]

    def test_unknown_ids(self):
        selection = SelectionSet(["a", "zzz"])
        assert selection.unknown_ids(RECORDS) == ["zzz"]

    def test_clear(self):
        selection = SelectionSet(["a", "b"])
        selection.clear()
        assert len(selection) == 0
        assert "a" not in selection
