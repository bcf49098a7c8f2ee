#!/usr/bin/env python3
"""Question catalogue: built-in sections and the live copy kept in Supabase."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Dict, List, Optional, Sequence

from scoring_engine import Section, catalogue_from_records, catalogue_to_records

logger = logging.getLogger(__name__)

CONFIG_TABLE = "app_config"
CONFIG_KEY = "assessment_questions"


class CatalogueStoreError(RuntimeError):
    pass


PERSONAL_QUESTIONS: List[Dict[str, object]] = [
    {
        "id": "A",
        "category": "CONSCIOUSNESS",
        "title": "Energy",
        "questions": [
            "I wake up most days feeling rested and ready.",
            "I have enough energy to finish the day without crashing.",
            "I know which activities drain me and which restore me.",
            "I take deliberate breaks to recharge during the day.",
            "My energy stays steady without relying on caffeine or sugar.",
            "I protect time for rest even when I am busy.",
            "People describe me as someone who brings energy into a room.",
        ],
    },
    {
        "id": "B",
        "category": "CONSCIOUSNESS",
        "title": "Awareness",
        "questions": [
            "I notice my emotions as they arise rather than after the fact.",
            "I have a regular practice of reflection, journaling or meditation.",
            "I can name the beliefs that drive my biggest decisions.",
            "I catch myself before reacting when I feel triggered.",
            "I regularly ask for honest feedback about how I show up.",
            "I understand the patterns that hold me back.",
            "I make decisions from clarity rather than fear.",
        ],
    },
    {
        "id": "C",
        "category": "CONNECTION",
        "title": "Love",
        "questions": [
            "I feel deeply connected to my partner or closest person.",
            "I express appreciation to the people I love every week.",
            "I can be fully myself in my closest relationships.",
            "I resolve conflict with loved ones openly and quickly.",
            "I give the people I love my undivided attention.",
            "I treat myself with the same kindness I offer others.",
            "My close relationships leave me feeling supported.",
        ],
    },
    {
        "id": "D",
        "category": "CONNECTION",
        "title": "Tribe",
        "questions": [
            "I am part of a community that shares my values.",
            "I have friends who challenge me to grow.",
            "I regularly spend time with people who inspire me.",
            "I have someone to call when things go wrong.",
            "I contribute to the groups I belong to.",
            "I feel a sense of belonging where I live or work.",
            "I actively invest in new, meaningful relationships.",
        ],
    },
    {
        "id": "E",
        "category": "CONTRIBUTION",
        "title": "Career",
        "questions": [
            "My work feels meaningful to me.",
            "I use my strongest skills most days.",
            "I have a clear picture of where my career is heading.",
            "I am learning and growing in my role.",
            "I feel recognised for the value I create.",
            "My work aligns with my personal values.",
            "I would choose this work again if I started over.",
        ],
    },
    {
        "id": "F",
        "category": "CONTRIBUTION",
        "title": "Abundance",
        "questions": [
            "I feel financially secure today.",
            "I have a plan for my long-term financial goals.",
            "I spend money in line with what I value most.",
            "I have savings set aside for the unexpected.",
            "I give generously of my time or money.",
            "I believe there is enough opportunity for me to thrive.",
            "Money is rarely a source of stress in my life.",
        ],
    },
    {
        "id": "G",
        "category": "COMMITMENT",
        "title": "Fitness",
        "questions": [
            "I move my body with intention at least four days a week.",
            "I include strength training in my routine.",
            "I can climb several flights of stairs without difficulty.",
            "I stretch or work on mobility regularly.",
            "I enjoy the physical activities I do.",
            "I track my progress toward a fitness goal.",
            "I feel strong and capable in my body.",
        ],
    },
    {
        "id": "H",
        "category": "COMMITMENT",
        "title": "Health",
        "questions": [
            "I sleep seven or more hours most nights.",
            "I eat mostly whole, nourishing food.",
            "I drink enough water throughout the day.",
            "I keep up with regular health check-ups.",
            "I manage stress before it affects my body.",
            "I limit alcohol and other substances.",
            "I rarely get sick.",
        ],
    },
    {
        "id": "I",
        "category": "ADVENTURE",
        "title": "Adventure: Exploration",
        "questions": [
            "I have travelled somewhere new in the past year.",
            "I regularly try activities I have never done before.",
            "I spend time in nature for the sake of it.",
            "I say yes to unexpected invitations.",
            "I have a list of experiences I am actively working through.",
            "I seek out people with perspectives unlike mine.",
            "My life has room for spontaneity.",
        ],
    },
    {
        "id": "J",
        "category": "ADVENTURE",
        "title": "Adventure: Play",
        "questions": [
            "I make time for hobbies purely for enjoyment.",
            "I laugh often during a typical week.",
            "I take on challenges that scare me a little.",
            "I plan fun into my calendar the way I plan work.",
            "I feel a sense of wonder about the world.",
            "I celebrate my wins, big and small.",
            "I look forward to what the next year holds.",
        ],
    },
]

CORPORATE_QUESTIONS: List[Dict[str, object]] = [
    {
        "id": "A",
        "category": "CONSCIOUSNESS",
        "title": "Energy",
        "questions": [
            "Our people end most weeks with energy to spare.",
            "Meetings leave the team more focused than before.",
            "Workloads are sustainable through peak periods.",
            "Leaders model taking breaks and time off.",
            "Burnout is discussed openly and acted on.",
            "The office or remote setup supports focused work.",
            "People describe the atmosphere as positive.",
        ],
    },
    {
        "id": "B",
        "category": "CONSCIOUSNESS",
        "title": "Awareness",
        "questions": [
            "Leaders seek feedback on their own impact.",
            "The team reviews what went wrong without blame.",
            "Our values are known and referenced in decisions.",
            "We measure employee sentiment regularly.",
            "Managers notice early signs of disengagement.",
            "Strategy is communicated clearly to every level.",
            "We act on what engagement surveys tell us.",
        ],
    },
    {
        "id": "C",
        "category": "CONNECTION",
        "title": "Culture",
        "questions": [
            "People feel safe to speak up.",
            "Good work is recognised publicly.",
            "Colleagues treat each other with respect.",
            "Conflict is addressed early and directly.",
            "New hires feel welcome within their first week.",
            "Diversity of thought is valued.",
            "People would recommend us as a place to work.",
        ],
    },
    {
        "id": "D",
        "category": "CONNECTION",
        "title": "Tribe",
        "questions": [
            "Teams collaborate well across departments.",
            "People have a trusted colleague to turn to.",
            "We celebrate milestones together.",
            "Remote and on-site staff feel equally included.",
            "Mentoring happens formally or informally.",
            "Teams share knowledge freely.",
            "People feel proud to be part of the organisation.",
        ],
    },
    {
        "id": "E",
        "category": "CONTRIBUTION",
        "title": "Engagement",
        "questions": [
            "People understand how their work affects results.",
            "Roles and responsibilities are clear.",
            "Employees have growth paths they believe in.",
            "Training budgets are used and valued.",
            "People take initiative without being asked.",
            "Turnover is lower than our industry average.",
            "Top performers choose to stay.",
        ],
    },
    {
        "id": "F",
        "category": "CONTRIBUTION",
        "title": "Performance",
        "questions": [
            "Goals are set and reviewed on a regular cadence.",
            "Teams hit most of their quarterly targets.",
            "Compensation is seen as fair.",
            "Resources match the goals we set.",
            "Underperformance is addressed constructively.",
            "Decisions are made quickly at the right level.",
            "We invest in tools that make people productive.",
        ],
    },
    {
        "id": "G",
        "category": "COMMITMENT",
        "title": "Wellness",
        "questions": [
            "We offer programmes that support physical activity.",
            "People use their full leave allowance.",
            "Flexible working is available and respected.",
            "Workspaces encourage movement during the day.",
            "Leaders talk about wellbeing as a priority.",
            "Wellness benefits are widely used.",
            "People feel physically well at work.",
        ],
    },
    {
        "id": "H",
        "category": "COMMITMENT",
        "title": "Health",
        "questions": [
            "Sick leave is used without stigma.",
            "Mental health support is easy to access.",
            "After-hours messages are the exception.",
            "Workplace stress is monitored.",
            "Healthy food options are available.",
            "Managers are trained to spot wellbeing concerns.",
            "Absence rates are stable or falling.",
        ],
    },
    {
        "id": "I",
        "category": "ADVENTURE",
        "title": "Adventure: Innovation",
        "questions": [
            "People have time to experiment with new ideas.",
            "Failed experiments are treated as learning.",
            "We launched something new in the past year.",
            "Ideas from any level can reach leadership.",
            "We study what other industries do well.",
            "Cross-functional projects are encouraged.",
            "The organisation adapts quickly to change.",
        ],
    },
    {
        "id": "J",
        "category": "ADVENTURE",
        "title": "Adventure: Play",
        "questions": [
            "Teams have fun together regularly.",
            "Offsites or team events are well attended.",
            "Humour is part of everyday work.",
            "People take on stretch assignments willingly.",
            "Wins are celebrated in memorable ways.",
            "The team looks forward to the year ahead.",
            "People bring curiosity to their work.",
        ],
    },
]

DEFAULT_SECTIONS: List[Section] = catalogue_from_records(PERSONAL_QUESTIONS)
CORPORATE_SECTIONS: List[Section] = catalogue_from_records(CORPORATE_QUESTIONS)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_questions(supabase) -> List[Section]:
    if supabase is None:
        return DEFAULT_SECTIONS

    try:
        response = supabase.table(CONFIG_TABLE).select("*").eq("key", CONFIG_KEY).execute()
    except Exception:
        logger.exception("Error fetching custom questions")
        return DEFAULT_SECTIONS

    rows = response.data or []
    if rows:
        sections = rows[0].get("sections")
        if isinstance(sections, list):
            catalogue = catalogue_from_records(sections)
            if catalogue:
                return catalogue
        logger.warning("Stored question catalogue is malformed; using defaults")
    return DEFAULT_SECTIONS


def save_questions(supabase, catalogue: Sequence[Section]) -> None:
    if supabase is None:
        raise CatalogueStoreError("Database not connected. Configure SUPABASE_URL and SUPABASE_KEY.")
    supabase.table(CONFIG_TABLE).upsert(
        {
            "key": CONFIG_KEY,
            "sections": catalogue_to_records(catalogue),
            "updated_at": _now_iso(),
        },
        on_conflict="key",
    ).execute()
    logger.info("Saved question catalogue with %d sections", len(catalogue))


def reset_questions_to_default(supabase) -> List[Section]:
    if supabase is None:
        raise CatalogueStoreError("Database not connected.")
    save_questions(supabase, DEFAULT_SECTIONS)
    return DEFAULT_SECTIONS


def sections_for(assessment_type: str, live_catalogue: Optional[Sequence[Section]] = None) -> List[Section]:
    if assessment_type == "corporate":
        return CORPORATE_SECTIONS
    return list(live_catalogue) if live_catalogue else DEFAULT_SECTIONS
