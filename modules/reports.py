#!/usr/bin/env python3
"""Admin reports: date-range summaries and CSV export."""

from __future__ import annotations

from datetime import date, timedelta

import streamlit as st

from modules.clients import get_openai_api_key, get_supabase_client
from modules.insights import generate_report_summary
from modules.question_catalogue import get_questions
from modules.submissions import compute_dashboard_metrics, fetch_submissions, submissions_to_csv


def submissions_in_range(submissions, start: date, end: date):
    start_key, end_key = start.isoformat(), end.isoformat()
    return [sub for sub in submissions if start_key <= str(sub.get("created_at") or "")[:10] <= end_key]


def render() -> None:
    st.title("Reports")
    supabase = get_supabase_client()

    today = date.today()
    col1, col2 = st.columns(2)
    start = col1.date_input("From", value=today - timedelta(days=30))
    end = col2.date_input("To", value=today)

    in_range = submissions_in_range(fetch_submissions(supabase), start, end)
    metrics = compute_dashboard_metrics(in_range, get_questions(supabase))

    st.metric("Submissions in Range", metrics.total_submissions)
    st.download_button(
        "Export Range as CSV",
        data=submissions_to_csv(in_range),
        file_name=f"conscious_performance_{start.isoformat()}_{end.isoformat()}.csv",
        mime="text/csv",
        disabled=not in_range,
    )

    if st.button("Generate Summary", disabled=not in_range):
        api_key = get_openai_api_key()
        if not api_key:
            st.info("OpenAI API key not found. AI sections disabled.")
            return
        with st.spinner("Writing summary..."):
            try:
                st.markdown(generate_report_summary(api_key, f"{start} to {end}", metrics))
            except Exception as exc:
                st.error(f"Report summary failed: {exc}")
