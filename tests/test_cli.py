"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

import cli
from studycards.store import SqlAlchemyProgressStore

runner = CliRunner()


@pytest.fixture
def cli_store(monkeypatch, session_factory):
    store = SqlAlchemyProgressStore(session_factory)
    monkeypatch.setattr(cli, "get_store", lambda: store)
    return store


@pytest.fixture
def cards_file(tmp_path):
    path = tmp_path / "cards.json"
    path.write_text(json.dumps([
        {"id": "c1", "question": "What is a cell?", "answer": "The unit of life", "difficulty": 1},
        {"id": "c2", "question": "What is DNA?", "answer": "Genetic material", "difficulty": 2},
    ]))
    return path


@pytest.fixture
def imported(cli_store, cards_file):
    result = runner.invoke(cli.app, ["import-cards", str(cards_file), "--course", "bio101"])
    assert result.exit_code == 0, result.output
    return cli_store


def test_import_cards(imported):
    assert sorted(card.id for card in imported.get_course_cards("bio101")) == ["c1", "c2"]


def test_import_rejects_invalid_cards(cli_store, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"id": "c1", "question": "Q", "answer": "A", "difficulty": 9}]))

    result = runner.invoke(cli.app, ["import-cards", str(path), "--course", "bio101"])

    assert result.exit_code == 1
    assert cli_store.get_course_cards("bio101") == []


def test_import_rejects_non_utf8_file(cli_store, tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b"\xff\xfe\x00")

    result = runner.invoke(cli.app, ["import-cards", str(path), "--course", "bio101"])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert cli_store.get_course_cards("bio101") == []


def test_review_correct(imported):
    result = runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--correct", "--date", "2026-03-10"])

    assert result.exit_code == 0, result.output
    assert "Next review: 2026-03-11 (in 1 days)" in result.output
    assert imported.get_progress("u1", "c1").repetitions == 1


def test_review_with_quality(imported):
    result = runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c2", "--quality", "1", "--date", "2026-03-10"])

    assert result.exit_code == 0, result.output
    assert "Quality: 1/5" in result.output
    assert imported.get_progress("u1", "c2").ease_factor == pytest.approx(1.96)


def test_review_rejects_out_of_range_quality(imported):
    result = runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--quality", "8"])

    assert result.exit_code == 1
    assert "between 0 and 5" in result.output
    assert imported.get_progress("u1", "c1") is None


def test_review_rejects_unknown_card(imported):
    result = runner.invoke(cli.app, ["review", "--user", "u1", "--card", "zz9", "--correct"])

    assert result.exit_code == 1
    assert "Unknown card" in result.output
    assert imported.get_progress("u1", "zz9") is None


def test_review_requires_exactly_one_outcome(imported):
    result = runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--correct", "--incorrect"])

    assert result.exit_code == 1


def test_review_rejects_bad_date(imported):
    result = runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--correct", "--date", "10/03/2026"])

    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_due_lists_cards(imported):
    runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--correct", "--date", "2026-03-10"])

    same_day = runner.invoke(cli.app, ["due", "--user", "u1", "--course", "bio101", "--date", "2026-03-10"])
    assert same_day.exit_code == 0, same_day.output
    assert "c2" in same_day.output
    assert "c1" not in same_day.output

    later = runner.invoke(cli.app, ["due", "--user", "u1", "--course", "bio101", "--date", "2026-03-14"])
    assert "c1" in later.output
    assert "New" in later.output


def test_due_when_nothing_is_due(imported):
    for card in ("c1", "c2"):
        runner.invoke(cli.app, ["review", "--user", "u1", "--card", card, "--correct", "--date", "2026-03-10"])

    result = runner.invoke(cli.app, ["due", "--user", "u1", "--course", "bio101", "--date", "2026-03-10"])

    assert result.exit_code == 0
    assert "No cards due" in result.output


def test_stats(imported):
    runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--incorrect", "--date", "2026-03-10"])

    result = runner.invoke(cli.app, ["stats", "--user", "u1", "--course", "bio101", "--date", "2026-03-10"])

    assert result.exit_code == 0, result.output
    assert "Total cards: 2" in result.output
    assert "Reviewed: 1" in result.output
    assert "Mastered: 0" in result.output
    assert "Due now: 1" in result.output


def test_reset_progress(imported):
    runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--correct", "--date", "2026-03-10"])

    result = runner.invoke(cli.app, ["reset-progress", "--user", "u1", "--card", "c1", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Progress reset" in result.output
    assert imported.get_progress("u1", "c1") is None


def test_reset_progress_can_be_cancelled(imported):
    runner.invoke(cli.app, ["review", "--user", "u1", "--card", "c1", "--correct", "--date", "2026-03-10"])

    result = runner.invoke(cli.app, ["reset-progress", "--user", "u1", "--card", "c1"], input="n\n")

    assert "Cancelled" in result.output
    assert imported.get_progress("u1", "c1") is not None
