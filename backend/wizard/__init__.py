"""Wizard core: grouping, templating, completion and summaries."""
from backend.wizard.grouping import group_records, build_display_rows
from shared.selection import SelectionSet
from backend.wizard.templating import render_text, render_preview
from backend.wizard.progress import CompletionTracker
from backend.wizard.summary import summarize_draft

__all__ = [
    "group_records",
    "build_display_rows",
    "SelectionSet",
    "render_text",
    "render_preview",
    "CompletionTracker",
    "summarize_draft",
]
