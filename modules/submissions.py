#!/usr/bin/env python3
"""Assessment submissions stored in Supabase, plus dashboard aggregates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from scoring_engine import AXES, Scores, Section

logger = logging.getLogger(__name__)

SUBMISSIONS_TABLE = "submissions"
CSV_COLUMNS = ["ID", "Name", "Email", "Date"] + AXES


class SubmissionStoreError(RuntimeError):
    pass


@dataclass
class QuestionStat:
    question_text: str
    percentage_true: float
    category: str


@dataclass
class DashboardMetrics:
    total_submissions: int = 0
    average_scores: Dict[str, float] = field(default_factory=lambda: {axis: 0.0 for axis in AXES})
    completion_rate: float = 0.0
    submissions_by_day: List[Dict[str, object]] = field(default_factory=list)
    question_stats: List[QuestionStat] = field(default_factory=list)


def user_id_for(email: str) -> str:
    return "user_" + re.sub(r"[^a-zA-Z0-9]", "", email)


def build_submission(
    user: Mapping[str, str],
    scores: Scores,
    answers: Mapping[str, Sequence[bool]],
    assessment_type: str = "personal",
    completion_time_seconds: int = 0,
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    email = str(user.get("email", "")).strip().lower()
    profile = {
        "id": user_id_for(email),
        "name": str(user.get("name", "")).strip(),
        "email": email,
        "occupation": str(user.get("occupation", "")).strip(),
        "company_name": str(user.get("company_name", "")).strip(),
        "role": "user",
        "created_at": timestamp,
    }
    return {
        "user_id": profile["id"],
        "user_email": email,
        "user_profile": profile,
        "created_at": timestamp,
        "assessment_type": assessment_type,
        "scores": scores.to_dict(),
        "answers": {key: [bool(flag) for flag in flags] for key, flags in answers.items()},
        "metadata": {
            "device": "Web",
            "location": "Online",
            "completion_time_seconds": int(completion_time_seconds),
        },
    }


def submit_assessment(
    supabase,
    user: Mapping[str, str],
    scores: Scores,
    answers: Mapping[str, Sequence[bool]],
    assessment_type: str = "personal",
    completion_time_seconds: int = 0,
) -> str:
    if supabase is None:
        raise SubmissionStoreError("Database not connected. Results were not saved.")
    record = build_submission(user, scores, answers, assessment_type, completion_time_seconds)
    response = supabase.table(SUBMISSIONS_TABLE).insert(record).execute()
    rows = response.data or []
    submission_id = str(rows[0].get("id", "")) if rows else ""
    logger.info("Stored %s submission %s", assessment_type, submission_id or "<no id>")
    return submission_id


def get_previous_submission(supabase, email: str) -> Optional[Dict[str, object]]:
    """Most recent stored submission for ``email``.

    Called before the new submission is written, so the latest row is the
    previous attempt.
    """
    history = fetch_submissions_by_email(supabase, email)
    return history[0] if history else None


def fetch_submissions(supabase) -> List[Dict[str, object]]:
    if supabase is None:
        return []
    try:
        response = supabase.table(SUBMISSIONS_TABLE).select("*").order("created_at", desc=True).execute()
    except Exception:
        logger.exception("Error fetching submissions")
        return []
    return list(response.data or [])


def fetch_submissions_by_email(supabase, email: str) -> List[Dict[str, object]]:
    if supabase is None or not email:
        return []
    try:
        response = (
            supabase.table(SUBMISSIONS_TABLE)
            .select("*")
            .eq("user_email", email.strip().lower())
            .order("created_at", desc=True)
            .execute()
        )
    except Exception:
        logger.exception("Error fetching submissions for %s", email)
        return []
    return list(response.data or [])


def fetch_submission_by_id(supabase, submission_id: str) -> Optional[Dict[str, object]]:
    if supabase is None or not submission_id:
        return None
    try:
        response = supabase.table(SUBMISSIONS_TABLE).select("*").eq("id", submission_id).limit(1).execute()
    except Exception:
        logger.exception("Error fetching submission %s", submission_id)
        return None
    rows = response.data or []
    return rows[0] if rows else None


def delete_submission(supabase, submission_id: str) -> None:
    if supabase is None:
        raise SubmissionStoreError("Database not connected.")
    supabase.table(SUBMISSIONS_TABLE).delete().eq("id", submission_id).execute()
    logger.info("Deleted submission %s", submission_id)


def save_ai_summary(supabase, submission_id: str, summary: str) -> None:
    if supabase is None:
        raise SubmissionStoreError("Database not connected.")
    supabase.table(SUBMISSIONS_TABLE).update({"ai_summary": summary}).eq("id", submission_id).execute()


def submission_scores(submission: Mapping[str, object]) -> Scores:
    raw = submission.get("scores")
    return Scores.from_dict(raw if isinstance(raw, Mapping) else None)


def submission_profile(submission: Mapping[str, object]) -> Dict[str, str]:
    raw = submission.get("user_profile")
    profile = raw if isinstance(raw, Mapping) else {}
    return {
        "name": str(profile.get("name") or "Unknown"),
        "email": str(profile.get("email") or submission.get("user_email") or "Unknown"),
        "occupation": str(profile.get("occupation") or ""),
    }


def submission_answers(submission: Mapping[str, object]) -> Mapping[str, Sequence[bool]]:
    raw = submission.get("answers")
    return raw if isinstance(raw, Mapping) else {}


def _is_complete(answers: Mapping[str, Sequence[bool]], catalogue: Sequence[Section]) -> bool:
    for section in catalogue:
        flags = answers.get(section.id)
        if not isinstance(flags, (list, tuple)) or len(flags) < len(section.questions):
            return False
    return True


def compute_dashboard_metrics(
    submissions: Sequence[Mapping[str, object]],
    catalogue: Sequence[Section],
) -> DashboardMetrics:
    if not submissions:
        return DashboardMetrics()

    total = len(submissions)
    scores_df = pd.DataFrame([submission_scores(sub).to_dict() for sub in submissions], columns=AXES)
    average_scores = {axis: round(float(value), 1) for axis, value in scores_df.mean().items()}

    completed = sum(1 for sub in submissions if _is_complete(submission_answers(sub), catalogue))
    completion_rate = round(completed / total * 100, 1)

    days = pd.Series([str(sub.get("created_at") or "")[:10] for sub in submissions])
    days = days[days != ""]
    day_counts = days.value_counts().sort_index().tail(30)
    submissions_by_day = [{"date": date, "count": int(count)} for date, count in day_counts.items()]

    # Keyed by question text; duplicate texts across sections share a row.
    aggregation: Dict[str, Dict[str, object]] = {}
    for section in catalogue:
        for question in section.questions:
            aggregation[question.text] = {"true": 0, "total": 0, "category": section.title}
    for sub in submissions:
        answers = submission_answers(sub)
        for section in catalogue:
            flags = answers.get(section.id)
            if not isinstance(flags, (list, tuple)):
                continue
            for idx, question in enumerate(section.questions):
                stats = aggregation[question.text]
                stats["total"] += 1
                if idx < len(flags) and flags[idx] is True:
                    stats["true"] += 1

    question_stats = [
        QuestionStat(
            question_text=text,
            percentage_true=round(stats["true"] / stats["total"] * 100, 1) if stats["total"] else 0.0,
            category=str(stats["category"]),
        )
        for text, stats in aggregation.items()
    ]

    return DashboardMetrics(
        total_submissions=total,
        average_scores=average_scores,
        completion_rate=completion_rate,
        submissions_by_day=submissions_by_day,
        question_stats=question_stats,
    )


def submissions_to_frame(submissions: Sequence[Mapping[str, object]]) -> pd.DataFrame:
    rows = []
    for sub in submissions:
        profile = submission_profile(sub)
        row = {
            "ID": str(sub.get("id") or ""),
            "Name": profile["name"],
            "Email": profile["email"],
            "Date": str(sub.get("created_at") or "")[:10],
        }
        row.update(submission_scores(sub).to_dict())
        rows.append(row)
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def submissions_to_csv(submissions: Sequence[Mapping[str, object]]) -> str:
    return submissions_to_frame(submissions).to_csv(index=False)
