#!/usr/bin/env python3
"""Admin overview: aggregate metrics across all submissions."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import streamlit as st

from modules.clients import get_openai_api_key, get_supabase_client
from modules.insights import generate_admin_trend_analysis
from modules.question_catalogue import get_questions
from modules.submissions import compute_dashboard_metrics, fetch_submissions


def _average_chart(average_scores) -> None:
    df = pd.DataFrame([{"Axis": axis, "Average": value} for axis, value in average_scores.items()])
    fig = px.bar(
        df,
        x="Axis",
        y="Average",
        text=df["Average"].map(lambda x: f"{x:.1f}"),
        color="Average",
        color_continuous_scale=[(0.0, "#d64541"), (0.5, "#f39c12"), (1.0, "#2e8b57")],
        range_color=[0, 7],
    )
    fig.update_layout(height=360, coloraxis_showscale=False, margin={"l": 10, "r": 10, "t": 10, "b": 10})
    fig.update_traces(textposition="outside", hovertemplate="%{x}: %{y:.1f}<extra></extra>")
    st.plotly_chart(fig, use_container_width=True)


def _trend_chart(submissions_by_day) -> None:
    if not submissions_by_day:
        st.info("No dated submissions yet.")
        return
    df = pd.DataFrame(submissions_by_day)
    fig = px.line(df, x="date", y="count", markers=True)
    fig.update_traces(line_color="#f97316")
    fig.update_layout(height=300, margin={"l": 10, "r": 10, "t": 10, "b": 10})
    st.plotly_chart(fig, use_container_width=True)


def render() -> None:
    st.title("Overview")
    supabase = get_supabase_client()
    if supabase is None:
        st.warning("Database not connected. Configure SUPABASE_URL and SUPABASE_KEY to see live data.")

    submissions = fetch_submissions(supabase)
    metrics = compute_dashboard_metrics(submissions, get_questions(supabase))

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Submissions", metrics.total_submissions)
    col2.metric("Completion Rate", f"{metrics.completion_rate:.1f}%")
    col3.metric("Average Adventure", f"{metrics.average_scores.get('Adventure', 0.0):.1f}")

    st.subheader("Submissions per Day")
    _trend_chart(metrics.submissions_by_day)

    st.subheader("Average Scores")
    _average_chart(metrics.average_scores)

    if metrics.question_stats:
        st.subheader("Question Analytics")
        stats_df = pd.DataFrame(
            [
                {"Question": s.question_text, "Section": s.category, "% Yes": s.percentage_true}
                for s in metrics.question_stats
            ]
        ).sort_values("% Yes")
        st.dataframe(stats_df, use_container_width=True, hide_index=True)

    st.subheader("AI Trend Analysis")
    if st.button("Generate Trend Analysis", disabled=metrics.total_submissions == 0):
        api_key = get_openai_api_key()
        if not api_key:
            st.info("OpenAI API key not found. AI sections disabled.")
            return
        with st.spinner("Analysing trends..."):
            try:
                st.markdown(generate_admin_trend_analysis(api_key, metrics))
            except Exception as exc:
                st.error(f"Trend analysis failed: {exc}")
