#!/usr/bin/env python3
"""Admin view of one submission."""

from __future__ import annotations

from typing import Dict, List

import pandas as pd
import streamlit as st

from modules.chart_view import performance_chart, score_table
from modules.clients import get_openai_api_key, get_supabase_client
from modules.insights import generate_individual_admin_report
from modules.question_catalogue import get_questions, sections_for
from modules.submissions import (
    fetch_submission_by_id,
    fetch_submissions_by_email,
    save_ai_summary,
    submission_answers,
    submission_profile,
    submission_scores,
)
from scoring_engine import Section, section_flags, section_yes_count


def _previous_in_history(history, submission_id: str):
    ids = [str(item.get("id")) for item in history]
    if submission_id not in ids:
        return None
    position = ids.index(submission_id)
    return history[position + 1] if position + 1 < len(history) else None


def answer_rows(section: Section, answers) -> List[Dict[str, str]]:
    flags = section_flags(section, answers)
    return [
        {"Question": q.text, "Answer": "Yes" if i < len(flags) and flags[i] is True else "No"}
        for i, q in enumerate(section.questions)
    ]


def render() -> None:
    st.title("Submission Detail")
    supabase = get_supabase_client()
    submission_id = st.session_state.get("selected_submission_id", "")
    submission_id = st.text_input("Submission ID", value=submission_id).strip()
    if not submission_id:
        st.info("Pick a submission from the Submissions page.")
        return

    submission = fetch_submission_by_id(supabase, submission_id)
    if submission is None:
        st.error("Submission not found.")
        return

    profile = submission_profile(submission)
    assessment_type = str(submission.get("assessment_type") or "personal")
    scores = submission_scores(submission)
    history = fetch_submissions_by_email(supabase, profile["email"])
    previous = _previous_in_history(history, submission_id)
    previous_scores = submission_scores(previous) if previous else None

    st.markdown(f"**{profile['name']}** · {profile['email']}")
    st.caption(f"{assessment_type.title()} assessment · {str(submission.get('created_at') or '')[:10]}")

    col1, col2 = st.columns([3, 2])
    with col1:
        performance_chart(scores, previous_scores, chart_type=assessment_type)
    with col2:
        score_table(scores, previous_scores)

    st.subheader("Answers")
    answers = submission_answers(submission)
    for section in sections_for(assessment_type, get_questions(supabase)):
        with st.expander(f"{section.title} ({section_yes_count(section, answers)})"):
            st.dataframe(pd.DataFrame(answer_rows(section, answers)), use_container_width=True, hide_index=True)

    if len(history) > 1:
        st.subheader("History")
        st.dataframe(
            pd.DataFrame(
                [
                    {"Date": str(item.get("created_at") or "")[:10], **submission_scores(item).to_dict()}
                    for item in history
                ]
            ),
            use_container_width=True,
            hide_index=True,
        )

    st.subheader("Admin Note")
    summary = submission.get("ai_summary")
    if summary:
        st.markdown(str(summary))
    else:
        st.caption("No summary generated yet.")

    if st.button("Generate Admin Note"):
        api_key = get_openai_api_key()
        if not api_key:
            st.info("OpenAI API key not found. AI sections disabled.")
            return
        try:
            note = generate_individual_admin_report(api_key, submission)
            save_ai_summary(supabase, submission_id, note)
        except Exception as exc:
            st.error(f"Admin note failed: {exc}")
            return
        st.markdown(note)
