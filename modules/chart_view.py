#!/usr/bin/env python3
"""Streamlit helpers for showing a score profile."""

from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st

from radial_chart import ChartOptions, project, render_svg
from scoring_engine import AXES, Scores


def performance_chart(scores: Scores, previous_scores: Optional[Scores] = None, chart_type: str = "personal") -> None:
    geometry = project(scores, previous_scores, ChartOptions(chart_type=chart_type))
    st.markdown(
        f'<div style="max-width:560px;margin:0 auto;">{render_svg(geometry)}</div>',
        unsafe_allow_html=True,
    )
    if previous_scores is not None:
        st.caption("Solid shape: current result. Dashed outline: previous result.")


def score_table(scores: Scores, previous_scores: Optional[Scores] = None) -> None:
    rows = []
    for axis in AXES:
        row = {"Axis": axis, "Score": scores.value(axis)}
        if previous_scores is not None:
            row["Previous"] = previous_scores.value(axis)
            row["Change"] = scores.value(axis) - previous_scores.value(axis)
        rows.append(row)
    st.dataframe(pd.DataFrame(rows), use_container_width=False, hide_index=True)
