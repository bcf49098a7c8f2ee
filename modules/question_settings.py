#!/usr/bin/env python3
"""Admin editor for the live question catalogue."""

from __future__ import annotations

from typing import List

import streamlit as st

from modules.clients import get_supabase_client
from modules.question_catalogue import get_questions, reset_questions_to_default, save_questions
from scoring_engine import Section, catalogue_from_records


def edited_catalogue(catalogue: List[Section], titles: dict, question_blocks: dict) -> List[Section]:
    """Rebuild the catalogue from the editor fields, one question per line."""
    records = []
    for section in catalogue:
        block = question_blocks.get(section.id, "")
        records.append(
            {
                "id": section.id,
                "category": section.category,
                "title": titles.get(section.id) or section.title,
                "questions": [line for line in block.splitlines() if line.strip()],
            }
        )
    return catalogue_from_records(records)


def render() -> None:
    st.title("Question Settings")
    supabase = get_supabase_client()
    if supabase is None:
        st.warning("Database not connected. Showing the built-in questions; changes cannot be saved.")

    catalogue = get_questions(supabase)
    titles = {}
    question_blocks = {}
    for section in catalogue:
        with st.expander(f"{section.id} · {section.title} ({len(section.questions)} questions)"):
            st.caption(section.category)
            titles[section.id] = st.text_input("Title", value=section.title, key=f"settings_title_{section.id}")
            question_blocks[section.id] = st.text_area(
                "Questions (one per line)",
                value="\n".join(q.text for q in section.questions),
                height=220,
                key=f"settings_questions_{section.id}",
            )

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Save Questions", disabled=supabase is None):
            try:
                save_questions(supabase, edited_catalogue(catalogue, titles, question_blocks))
            except Exception as exc:
                st.error(f"Save failed: {exc}")
            else:
                st.success("Questions saved")
    with col2:
        if st.button("Reset to Default", disabled=supabase is None):
            try:
                reset_questions_to_default(supabase)
            except Exception as exc:
                st.error(f"Reset failed: {exc}")
            else:
                for key in list(st.session_state.keys()):
                    if str(key).startswith("settings_"):
                        del st.session_state[key]
                st.rerun()
