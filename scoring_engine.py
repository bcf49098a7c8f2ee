#!/usr/bin/env python3
"""Pure questionnaire scoring logic shared by the assessment and admin pages.

A catalogue is an ordered list of sections, each a group of yes/no questions
tagged with a short id. ``compute_scores`` turns a catalogue plus a map of
boolean answers into the nine-axis ``Scores`` record.

Every function here is total: missing sections count as all-false, answer
lists longer or shorter than their section are truncated to the shorter of
the two, and section ids that are not in the axis table are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

DIRECT_AXES = [
    "Energy",
    "Awareness",
    "Love",
    "Tribe",
    "Career",
    "Abundance",
    "Fitness",
    "Health",
]

DERIVED_AXIS = "Adventure"

AXES = DIRECT_AXES + [DERIVED_AXIS]

Answers = Dict[str, List[bool]]


@dataclass(frozen=True)
class DirectAxis:
    name: str


@dataclass(frozen=True)
class DerivedComponent:
    slot: int


AxisTarget = Union[DirectAxis, DerivedComponent]

AXIS_TABLE: Dict[str, AxisTarget] = {
    "A": DirectAxis("Energy"),
    "B": DirectAxis("Awareness"),
    "C": DirectAxis("Love"),
    "D": DirectAxis("Tribe"),
    "E": DirectAxis("Career"),
    "F": DirectAxis("Abundance"),
    "G": DirectAxis("Fitness"),
    "H": DirectAxis("Health"),
    "I": DerivedComponent(0),
    "J": DerivedComponent(1),
}

DERIVED_SLOTS = 2


@dataclass(frozen=True)
class Question:
    text: str


@dataclass(frozen=True)
class Section:
    id: str
    category: str
    title: str
    questions: Tuple[Question, ...] = ()


@dataclass(frozen=True)
class Scores:
    energy: float = 0
    awareness: float = 0
    love: float = 0
    tribe: float = 0
    career: float = 0
    abundance: float = 0
    fitness: float = 0
    health: float = 0
    adventure: float = 0

    def value(self, axis: str) -> float:
        return getattr(self, axis.lower())

    def to_dict(self) -> Dict[str, float]:
        """Display-keyed shape stored verbatim by the submission store."""
        return {axis: self.value(axis) for axis in AXES}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "Scores":
        values: Dict[str, float] = {}
        for axis in AXES:
            raw = (data or {}).get(axis)
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raw = 0
            values[axis.lower()] = raw
        return cls(**values)


def section_flags(section: Section, answers: Mapping[str, Sequence[bool]]) -> List[object]:
    """Stored flags for ``section``; anything that is not a list counts as unanswered."""
    flags = answers.get(section.id)
    if not isinstance(flags, (list, tuple)):
        return []
    return list(flags)


def section_yes_count(section: Section, answers: Mapping[str, Sequence[bool]]) -> int:
    flags = section_flags(section, answers)
    return sum(1 for flag in flags[: len(section.questions)] if flag is True)


def compute_scores(
    catalogue: Iterable[Section],
    answers: Mapping[str, Sequence[bool]],
    axis_table: Mapping[str, AxisTarget] = AXIS_TABLE,
) -> Scores:
    direct: Dict[str, float] = {axis: 0 for axis in DIRECT_AXES}
    derived: List[int] = [0] * DERIVED_SLOTS

    for section in catalogue:
        target = axis_table.get(section.id)
        if target is None:
            continue
        count = section_yes_count(section, answers)
        if isinstance(target, DirectAxis):
            if target.name in direct:
                direct[target.name] = count
        elif 0 <= target.slot < DERIVED_SLOTS:
            derived[target.slot] = count

    direct[DERIVED_AXIS] = sum(derived) / DERIVED_SLOTS
    return Scores(**{axis.lower(): value for axis, value in direct.items()})


def empty_answers(catalogue: Iterable[Section]) -> Answers:
    return {section.id: [False] * len(section.questions) for section in catalogue}


def set_answer(answers: Mapping[str, Sequence[bool]], section_id: str, index: int, value: bool) -> Answers:
    """Return a copy of ``answers`` with one flag changed.

    A list shorter than ``index`` is padded with ``False`` first; negative
    indexes leave the answers untouched.
    """
    updated: Answers = {key: list(flags) for key, flags in answers.items()}
    if index < 0:
        return updated
    flags = updated.setdefault(section_id, [])
    if len(flags) <= index:
        flags.extend([False] * (index + 1 - len(flags)))
    flags[index] = bool(value)
    return updated


def _question_from_record(raw: object) -> Optional[Question]:
    if isinstance(raw, str):
        text = raw.strip()
    elif isinstance(raw, Mapping):
        text = str(raw.get("text") or "").strip()
    else:
        return None
    return Question(text) if text else None


def catalogue_from_records(records: Iterable[object]) -> List[Section]:
    """Build sections from the persisted ``{id, category, title, questions}`` shape.

    Entries that are not mappings or have no id are skipped, as are blank
    questions. Nothing here raises on odd payloads.
    """
    catalogue: List[Section] = []
    for record in records or []:
        if not isinstance(record, Mapping):
            continue
        section_id = str(record.get("id") or "").strip()
        if not section_id:
            continue
        raw_questions = record.get("questions")
        if not isinstance(raw_questions, (list, tuple)):
            raw_questions = []
        questions = tuple(q for q in (_question_from_record(raw) for raw in raw_questions) if q is not None)
        catalogue.append(
            Section(
                id=section_id,
                category=str(record.get("category") or ""),
                title=str(record.get("title") or section_id),
                questions=questions,
            )
        )
    return catalogue


def catalogue_to_records(catalogue: Iterable[Section]) -> List[Dict[str, object]]:
    return [
        {
            "id": section.id,
            "category": section.category,
            "title": section.title,
            "questions": [{"text": q.text} for q in section.questions],
        }
        for section in catalogue
    ]
