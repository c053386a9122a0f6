"""Tests for the review grader."""

from studycards.grader import grade, quality_for


def test_correct_swipe_is_good_not_perfect():
    assert grade(True) == 4


def test_incorrect_swipe_fails_without_blackout():
    assert grade(False) == 2


def test_explicit_quality_bypasses_grader():
    assert quality_for(5) == 5
    assert quality_for(0) == 0


def test_binary_outcomes_use_grader():
    assert quality_for(True) == 4
    assert quality_for(False) == 2


def test_out_of_range_quality_is_not_clamped():
    assert quality_for(9) == 9
