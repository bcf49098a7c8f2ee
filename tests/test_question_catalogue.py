"""Tests for the question catalogue service."""

from __future__ import annotations

import pytest

from modules.question_catalogue import (
    CONFIG_KEY,
    CONFIG_TABLE,
    CORPORATE_SECTIONS,
    DEFAULT_SECTIONS,
    CatalogueStoreError,
    get_questions,
    reset_questions_to_default,
    save_questions,
    sections_for,
)
from scoring_engine import AXIS_TABLE, Question, Section, compute_scores


def _stored(sections):
    return {CONFIG_TABLE: [{"key": CONFIG_KEY, "sections": sections}]}


@pytest.mark.parametrize("catalogue", [DEFAULT_SECTIONS, CORPORATE_SECTIONS])
def test_builtin_catalogues_cover_every_section(catalogue):
    assert [s.id for s in catalogue] == list("ABCDEFGHIJ")
    assert sorted(AXIS_TABLE) == [s.id for s in catalogue]
    for section in catalogue:
        assert len(section.questions) == 7
    texts = [q.text for s in catalogue for q in s.questions]
    assert len(texts) == len(set(texts))


def test_all_yes_on_defaults_scores_seven_everywhere():
    answers = {s.id: [True] * len(s.questions) for s in DEFAULT_SECTIONS}
    scores = compute_scores(DEFAULT_SECTIONS, answers)
    assert set(scores.to_dict().values()) == {7}


def test_corporate_titles():
    titles = {s.id: s.title for s in CORPORATE_SECTIONS}
    assert titles["C"] == "Culture"
    assert titles["E"] == "Engagement"
    assert titles["F"] == "Performance"
    assert titles["G"] == "Wellness"


def test_get_questions_without_client():
    assert get_questions(None) == DEFAULT_SECTIONS


def test_get_questions_without_stored_row(supabase):
    assert get_questions(supabase) == DEFAULT_SECTIONS
    table, action, _, filters = supabase.calls[0]
    assert (table, action) == (CONFIG_TABLE, "select")
    assert filters == [("key", CONFIG_KEY)]


def test_get_questions_reads_stored_catalogue(make_supabase):
    client = make_supabase(_stored([{"id": "A", "category": "CONSCIOUSNESS", "title": "Vitality", "questions": ["One", "Two"]}]))
    catalogue = get_questions(client)
    assert catalogue == [Section("A", "CONSCIOUSNESS", "Vitality", (Question("One"), Question("Two")))]


@pytest.mark.parametrize("payload", [None, "broken", {"A": []}, [], ["junk"]])
def test_get_questions_falls_back_on_malformed_payload(make_supabase, payload):
    assert get_questions(make_supabase(_stored(payload))) == DEFAULT_SECTIONS


def test_get_questions_falls_back_when_query_fails(broken_supabase, caplog):
    assert get_questions(broken_supabase) == DEFAULT_SECTIONS
    assert "Error fetching custom questions" in caplog.text


def test_save_questions_upserts_single_row(supabase):
    edited = [Section("A", "CONSCIOUSNESS", "Energy", (Question("Only one"),))]
    save_questions(supabase, edited)
    save_questions(supabase, edited)

    rows = supabase.tables[CONFIG_TABLE]
    assert len(rows) == 1
    assert rows[0]["key"] == CONFIG_KEY
    assert rows[0]["sections"][0]["questions"] == [{"text": "Only one"}]
    assert "updated_at" in rows[0]
    assert get_questions(supabase) == edited


def test_save_questions_requires_client():
    with pytest.raises(CatalogueStoreError):
        save_questions(None, DEFAULT_SECTIONS)


def test_save_questions_propagates_store_errors(broken_supabase):
    with pytest.raises(RuntimeError):
        save_questions(broken_supabase, DEFAULT_SECTIONS)


def test_reset_restores_defaults(make_supabase):
    client = make_supabase(_stored([{"id": "A", "title": "Custom", "questions": ["x"]}]))
    assert reset_questions_to_default(client) == DEFAULT_SECTIONS
    assert get_questions(client) == DEFAULT_SECTIONS

    with pytest.raises(CatalogueStoreError):
        reset_questions_to_default(None)


def test_sections_for():
    custom = [Section("A", "CONSCIOUSNESS", "Energy", (Question("q"),))]
    assert sections_for("corporate", custom) == CORPORATE_SECTIONS
    assert sections_for("personal", custom) == custom
    assert sections_for("personal") == DEFAULT_SECTIONS
    assert sections_for("personal", []) == DEFAULT_SECTIONS
