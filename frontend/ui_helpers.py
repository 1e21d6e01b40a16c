"""
Small helpers shared by the wizard section renderers.
"""
import pandas as pd
import streamlit as st

from frontend.api_client import APIError
from shared.schemas import DraftResponse, Notice
from shared.selection import SelectionSet


def show_notice(notice: Notice):
    """Render a toast-style notice."""
    text = f"**{notice.title}**" + (f" - {notice.description}" if notice.description else "")
    if notice.variant.value == "destructive":
        st.error(text)
    else:
        st.success(text)


def flash(notice: Notice):
    """Queue a notice to be shown after the next rerun."""
    st.session_state.pending_notice = notice


def show_pending_notice():
    notice = st.session_state.pop("pending_notice", None)
    if notice is not None:
        show_notice(notice)


def apply(call, *args, on_success=None, **kwargs):
    """
    Run an API call that returns a DraftResponse and rerun on success.

    on_success runs after the call succeeds and before the rerun. API errors
    are shown inline and the page is left as it was.
    """
    try:
        result = call(*args, **kwargs)
    except APIError as e:
        st.error(f"{e.title}: {e.message}")
        return None
    if isinstance(result, DraftResponse) and result.notice:
        flash(result.notice)
    elif isinstance(result, Notice):
        flash(result)
    if on_success is not None:
        on_success()
    st.rerun()


def checkbox_key(key: str, record_id: str) -> str:
    return f"{key}_{record_id}"


def selection_for(state, key: str) -> SelectionSet:
    """The SelectionSet kept in state under key, created on first use."""
    if key not in state:
        state[key] = SelectionSet()
    return state[key]


def reset_selection(state, key: str):
    """Empty a selection and forget the checkbox values that built it."""
    selection = selection_for(state, key)
    for record_id in selection.ids:
        state.pop(checkbox_key(key, record_id), None)
    selection.clear()


def selection_picker(entries, key: str, label, disabled_ids=()) -> SelectionSet:
    """
    Checkbox list backed by a session SelectionSet.

    Entries in disabled_ids are shown checked and greyed out and never
    enter the selection.
    """
    selection = selection_for(st.session_state, key)
    for entry in entries:
        widget_key = checkbox_key(key, entry.id)
        if entry.id in disabled_ids:
            selection.remove(entry.id)
            st.checkbox(label(entry), key=f"{widget_key}_taken", value=True, disabled=True)
            continue
        selection.toggle(entry.id, st.checkbox(label(entry), key=widget_key))
    return selection


def add_selected(call, draft_id: str, key: str, button_key: str):
    """'Add Selected (n)' button; sends the selection and resets it on success."""
    selection = selection_for(st.session_state, key)
    if st.button(f"Add Selected ({len(selection)})", key=button_key):
        apply(call, draft_id, selection.ids, on_success=lambda: reset_selection(st.session_state, key))


def grouped_frame(display, columns):
    """Flatten display rows into a DataFrame, header rows included."""
    rows = []
    for row in display.rows:
        if row.is_group_header:
            rows.append({columns[0]: f"▸ {row.group_name} ({row.count})"})
        else:
            rows.append({col: row.record.get(col) for col in columns})
    return pd.DataFrame(rows, columns=columns)


def group_by_picker(label, fields, current, key):
    """Selectbox over the allowed grouping fields; returns the chosen field or ""."""
    choices = ["none"] + list(fields)
    index = choices.index(current) if current in choices else 0
    picked = st.selectbox(
        label, choices, index=index, key=key,
        format_func=lambda f: "No grouping" if f == "none" else fields[f]
    )
    return "" if picked == "none" else picked
