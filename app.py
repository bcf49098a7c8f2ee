#!/usr/bin/env python3
"""Streamlit Conscious Human Performance assessment and admin dashboard."""

from __future__ import annotations

import time

import streamlit as st

from modules.chart_view import performance_chart, score_table
from modules.clients import get_openai_api_key, get_supabase_client
from modules.insights import get_insights
from modules.overview import render as render_overview
from modules.question_catalogue import get_questions, sections_for
from modules.question_settings import render as render_question_settings
from modules.reports import render as render_reports
from modules.submission_detail import render as render_submission_detail
from modules.submission_list import render as render_submission_list
from modules.submissions import get_previous_submission, submission_scores, submit_assessment
from scoring_engine import compute_scores, empty_answers, set_answer

st.set_page_config(
    page_title="Conscious Human Performance",
    layout="wide",
    initial_sidebar_state="expanded"
)

PAGES = [
    "Assessment",
    "Overview",
    "Submissions",
    "Submission Detail",
    "Reports",
    "Question Settings",
]


def _state(key: str, default):
    if key not in st.session_state:
        st.session_state[key] = default
    return st.session_state[key]


def start_assessment(assessment_type: str, user_info: dict) -> None:
    supabase = get_supabase_client()
    sections = sections_for(assessment_type, get_questions(supabase))
    st.session_state["assessment_type"] = assessment_type
    st.session_state["user_info"] = user_info
    st.session_state["sections"] = sections
    st.session_state["answers"] = empty_answers(sections)
    st.session_state["section_index"] = 0
    st.session_state["started_at"] = time.time()
    st.session_state["assessment_run"] = _state("assessment_run", 0) + 1
    st.session_state["view"] = "questions"


def profile_page() -> None:
    st.title("Conscious Human Performance")
    st.markdown("Measure your energetic capacity, leadership alignment and holistic success.")

    assessment_type = st.radio(
        "Assessment",
        ["personal", "corporate"],
        format_func=lambda value: "Personal Profile" if value == "personal" else "Corporate Audit",
        horizontal=True,
    )
    with st.form("profile_form"):
        if assessment_type == "corporate":
            company_name = st.text_input("Company Name")
            name = st.text_input("Representative Name")
            company_size = st.selectbox("Team Size", ["", "1-10", "11-50", "51-200", "200+"])
            occupation = ""
        else:
            company_name = ""
            company_size = ""
            name = st.text_input("Full Name")
            occupation = st.text_input("Occupation (Optional)")
        email = st.text_input("Email")
        submitted = st.form_submit_button("Begin Assessment")

    if submitted:
        if not name.strip() or "@" not in email:
            st.error("Enter your name and a valid email")
            return
        if assessment_type == "corporate" and not company_name.strip():
            st.error("Enter the company name")
            return
        start_assessment(
            assessment_type,
            {
                "name": name,
                "email": email,
                "occupation": occupation,
                "company_name": company_name,
                "company_size": company_size,
            },
        )
        st.rerun()


def finish_assessment() -> None:
    supabase = get_supabase_client()
    user_info = st.session_state["user_info"]
    sections = st.session_state["sections"]
    answers = st.session_state["answers"]
    assessment_type = st.session_state["assessment_type"]
    scores = compute_scores(sections, answers)

    previous = get_previous_submission(supabase, user_info["email"])
    st.session_state["previous_scores"] = submission_scores(previous) if previous else None
    st.session_state["scores"] = scores
    st.session_state["save_error"] = ""
    try:
        st.session_state["submission_id"] = submit_assessment(
            supabase,
            user_info,
            scores,
            answers,
            assessment_type=assessment_type,
            completion_time_seconds=int(time.time() - st.session_state.get("started_at", time.time())),
        )
    except Exception as exc:
        st.session_state["save_error"] = str(exc)
    st.session_state["view"] = "results"


def questions_page() -> None:
    sections = st.session_state["sections"]
    answers = st.session_state["answers"]
    index = min(st.session_state.get("section_index", 0), len(sections) - 1)
    section = sections[index]
    run = st.session_state.get("assessment_run", 0)

    st.progress((index + 1) / len(sections), text=f"Section {index + 1} of {len(sections)}")
    col1, col2 = st.columns([3, 2])
    with col1:
        st.caption(section.category)
        st.header(section.title)
        flags = answers.get(section.id, [])
        for i, question in enumerate(section.questions):
            checked = st.checkbox(
                question.text,
                value=i < len(flags) and flags[i],
                key=f"answer_{run}_{section.id}_{i}",
            )
            answers = set_answer(answers, section.id, i, checked)
        st.session_state["answers"] = answers

        back, forward = st.columns(2)
        with back:
            if index > 0 and st.button("Back", use_container_width=True):
                st.session_state["section_index"] = index - 1
                st.rerun()
        with forward:
            if index < len(sections) - 1:
                if st.button("Next", type="primary", use_container_width=True):
                    st.session_state["section_index"] = index + 1
                    st.rerun()
            elif st.button("Submit Assessment", type="primary", use_container_width=True):
                with st.spinner("Saving your results..."):
                    finish_assessment()
                st.rerun()
    with col2:
        performance_chart(compute_scores(sections, answers), chart_type=st.session_state["assessment_type"])


def results_page() -> None:
    scores = st.session_state["scores"]
    previous_scores = st.session_state.get("previous_scores")
    user_info = st.session_state["user_info"]

    st.title(f"Results for {user_info['name']}")
    if st.session_state.get("save_error"):
        st.warning(f"Your results could not be saved: {st.session_state['save_error']}")

    col1, col2 = st.columns([3, 2])
    with col1:
        performance_chart(scores, previous_scores, chart_type=st.session_state["assessment_type"])
    with col2:
        score_table(scores, previous_scores)

    st.markdown("---")
    st.subheader("Personal Insights")
    if st.button("Generate Insights"):
        api_key = get_openai_api_key()
        if not api_key:
            st.info("OpenAI API key not found. AI sections disabled.")
        else:
            with st.spinner("Generating insights..."):
                try:
                    st.session_state["insights"] = get_insights(api_key, scores)
                except Exception as exc:
                    st.error(f"Insight generation failed: {exc}")
    if st.session_state.get("insights"):
        st.markdown(st.session_state["insights"])

    if st.button("Start Again"):
        for key in ("scores", "previous_scores", "insights", "submission_id", "save_error"):
            st.session_state.pop(key, None)
        st.session_state["view"] = "profile"
        st.rerun()


def assessment_page() -> None:
    view = _state("view", "profile")
    if view == "questions":
        questions_page()
    elif view == "results":
        results_page()
    else:
        profile_page()


def unified_app() -> None:
    with st.sidebar:
        # Other pages request a page switch through "nav".
        if "nav" in st.session_state:
            selection = st.session_state["nav"]
            del st.session_state["nav"]
            st.session_state["navigation"] = selection
        selection = st.selectbox("Navigation", PAGES, key="navigation")

    if selection == "Assessment":
        assessment_page()
    elif selection == "Overview":
        render_overview()
    elif selection == "Submissions":
        render_submission_list()
    elif selection == "Submission Detail":
        render_submission_detail()
    elif selection == "Reports":
        render_reports()
    elif selection == "Question Settings":
        render_question_settings()


if __name__ == "__main__":
    unified_app()
