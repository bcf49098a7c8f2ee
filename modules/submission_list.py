#!/usr/bin/env python3
"""Admin submission list with search, export and delete."""

from __future__ import annotations

import streamlit as st

from modules.clients import get_supabase_client
from modules.submissions import delete_submission, fetch_submissions, submissions_to_csv, submissions_to_frame


def render() -> None:
    st.title("Submissions")
    supabase = get_supabase_client()
    submissions = fetch_submissions(supabase)
    if not submissions:
        st.info("No submissions found.")
        return

    query = st.text_input("Search by name or email", key="submission_search").strip().lower()
    df = submissions_to_frame(submissions)
    if query:
        mask = df["Name"].str.lower().str.contains(query, regex=False) | df["Email"].str.lower().str.contains(
            query, regex=False
        )
        df = df[mask]

    st.dataframe(df, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CSV",
        data=submissions_to_csv(submissions),
        file_name="conscious_performance_export.csv",
        mime="text/csv",
    )

    if df.empty:
        return

    labels = {row["ID"]: f"{row['Name']} <{row['Email']}> - {row['Date']}" for _, row in df.iterrows()}
    selected_id = st.selectbox("Submission", list(labels), format_func=lambda value: labels[value])

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Open Detail", key="open_submission_detail"):
            st.session_state["selected_submission_id"] = selected_id
            st.session_state["nav"] = "Submission Detail"
            st.rerun()
    with col2:
        if st.button("Delete Submission", key="delete_submission"):
            try:
                delete_submission(supabase, selected_id)
            except Exception as exc:
                st.error(f"Delete failed: {exc}")
            else:
                st.rerun()
