#!/usr/bin/env python3
"""AI-written insights for participants and administrators."""

from __future__ import annotations

import json
from typing import Mapping

from openai import OpenAI

from scoring_engine import DIRECT_AXES, Scores

MODEL = "gpt-4.1-mini"


def _ask(api_key: str, prompt: str) -> str:
    client = OpenAI(api_key=api_key)
    response = client.responses.create(model=MODEL, input=prompt)
    return response.output_text


def _score_lines(scores: Scores) -> str:
    lines = [f"- {axis}: {scores.value(axis):g}" for axis in DIRECT_AXES]
    lines.append(f"- Adventure: {scores.adventure:.1f}")
    return "\n".join(lines)


def get_insights(api_key: str, scores: Scores) -> str:
    prompt = f"""
You are a Conscious Human Performance strategist. A participant scored (out of 7):
{_score_lines(scores)}

Write a short, encouraging summary of their current state, name the one or two
lowest areas, and give two or three practical tips for each. Use markdown.
"""
    return _ask(api_key, prompt)


def generate_admin_trend_analysis(api_key: str, metrics) -> str:
    ranked = sorted(metrics.question_stats, key=lambda stat: stat.percentage_true, reverse=True)
    top = [f'"{stat.question_text}" ({stat.percentage_true}% yes)' for stat in ranked[:3]]
    bottom = [f'"{stat.question_text}" ({stat.percentage_true}% yes)' for stat in ranked[-3:]]
    prompt = f"""
You are a data analyst for the Conscious Human Performance programme.
Total submissions: {metrics.total_submissions}
Average scores (out of 7): {json.dumps(metrics.average_scores)}
Most confident answers: {"; ".join(top) or "n/a"}
Least confident answers: {"; ".join(bottom) or "n/a"}

Give administrators a concise executive summary: strongest quadrant, the bottleneck,
what the weakest questions say about the audience, and two initiatives to address it.
Use markdown.
"""
    return _ask(api_key, prompt)


def generate_individual_admin_report(api_key: str, submission: Mapping[str, object]) -> str:
    profile = submission.get("user_profile") or {}
    name = profile.get("name", "Unknown") if isinstance(profile, Mapping) else "Unknown"
    prompt = f"""
You are reviewing one Conscious Human Performance assessment for internal use.
Participant: {name}
Scores: {json.dumps(submission.get("scores") or {})}

Classify the profile as High Performer, Balanced or At Risk, point out one score
discrepancy that suggests burnout risk, and recommend a coaching approach.
Keep it short.
"""
    return _ask(api_key, prompt)


def generate_report_summary(api_key: str, date_range: str, metrics) -> str:
    prompt = f"""
Write a formal report summary for the Conscious Human Performance platform.
Date range: {date_range}
Total submissions: {metrics.total_submissions}
Completion rate: {metrics.completion_rate}%
Average scores: {json.dumps(metrics.average_scores)}

Give three bullet points on the key performance indicators for the period.
"""
    return _ask(api_key, prompt)
