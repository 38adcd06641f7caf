"""
Tests that live and offline scoring agree.

A paper test transcribed afterwards must score exactly like a live attempt
with the same per-group counts.
"""

import pytest

from jlpt_toolkit.builder import build_test_snapshot
from jlpt_toolkit.core.models import GroupTally, Level, SectionType, UserAnswerInput
from jlpt_toolkit.scoring import (
    IssueCode,
    ScoringInputError,
    count_correct_answers,
    score_attempt,
    score_offline_result,
)


COUNTS = {
    "N5": {
        "vocabulary": {1: 10, 2: 6, 3: 8, 4: 4},
        "grammar_reading": {1: 14, 2: 4, 3: 4, 4: 2, 5: 1, 6: 1},
        "listening": {1: 4, 2: 4, 3: 3, 4: 2},
    },
    "N3": {
        "vocabulary": {1: 5, 2: 4, 3: 6, 4: 2, 5: 3},
        "grammar_reading": {1: 9, 2: 3, 3: 2, 4: 2, 5: 3, 6: 1, 7: 2},
        "listening": {1: 3, 2: 4, 3: 2, 4: 6},
    },
}


def _tallies(counts_by_section):
    return [
        GroupTally(section, number, correct)
        for section, counts in counts_by_section.items()
        for number, correct in counts.items()
    ]


class TestOfflineParity:
    """Tests for score_offline_result() against score_attempt()."""

    @pytest.mark.parametrize("level", ["N5", "N3"])
    def test_offline_when_same_counts_then_identical_result(self, level):
        live = score_attempt(level, COUNTS[level])
        offline = score_offline_result(level, _tallies(COUNTS[level]))
        assert offline == live

    def test_offline_when_n5_grammar_38_then_45_6(self):
        verdict = score_offline_result("N5", _tallies(COUNTS["N5"]))
        assert verdict.section_result("grammar_reading").normalized_score == 45.6
        assert verdict.total_score == 126.14
        assert verdict.overall_passed

    def test_offline_when_rows_invalid_then_all_issues_reported(self):
        tallies = _tallies(COUNTS["N5"])
        tallies.append(GroupTally("vocabulary", 9, 1))
        tallies[0] = GroupTally("vocabulary", 1, 15)

        with pytest.raises(ScoringInputError) as exc:
            score_offline_result("N5", tallies)

        codes = [i.code for i in exc.value.issues]
        assert IssueCode.UNKNOWN_GROUP in codes
        assert IssueCode.COUNT_EXCEEDS_QUESTIONS in codes


class TestLiveAttemptFlow:
    """End-to-end: snapshot, answers, grading, verdict."""

    def test_flow_when_answers_graded_then_verdict_from_counts(self, section_ids):
        # Arrange
        level = Level.N5
        snapshot = build_test_snapshot(
            level,
            section_ids(level, "vocabulary", "v"),
            section_ids(level, "grammar_reading", "g"),
            section_ids(level, "listening", "l"),
            "flow-seed",
        )
        answer_key = {qid: 1 for _, layout in snapshot.items() for m in layout for qid in m.question_ids}

        # Every question of the first group in each section answered correctly
        counts = {}
        for section, layout in snapshot.items():
            answers = [UserAnswerInput(qid, 1) for qid in layout[0].question_ids]
            counts[section] = count_correct_answers(layout, answers, answer_key)

        # Act
        verdict = score_attempt(level, counts)

        # Assert
        assert counts[SectionType.VOCABULARY] == {1: 12, 2: 0, 3: 0, 4: 0}
        vocab = verdict.section_result("vocabulary")
        assert vocab.normalized_score == pytest.approx(12 / 35 * 60, abs=0.005)
        assert verdict.level is Level.N5
