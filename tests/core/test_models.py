"""
Unit Tests for Core Models

Tests for enums, QuestionGroupInfo, snapshot models, answers and results.
"""

import pytest

from jlpt_toolkit.core.models import (
    FailureKind,
    FailureReason,
    GroupTally,
    Level,
    MondaiQuestions,
    MondaiScore,
    PassFailResult,
    QuestionGroupInfo,
    QuestionSnapshot,
    SectionType,
    UserAnswerInput,
)


class TestEnums:
    """Tests for Level and SectionType."""

    def test_level_when_iterated_then_most_advanced_first(self):
        assert [lvl.value for lvl in Level] == ["N1", "N2", "N3", "N4", "N5"]

    def test_level_when_built_from_string_then_matches_enum(self):
        assert Level("N3") is Level.N3
        assert str(Level.N3) == "N3"

    def test_section_when_display_name_then_human_readable(self):
        assert SectionType.VOCABULARY.display_name == "Vocabulary"
        assert SectionType.GRAMMAR_READING.display_name == "Grammar/Reading"
        assert SectionType.LISTENING.display_name == "Listening"

    def test_section_when_unknown_value_then_raises_error(self):
        with pytest.raises(ValueError):
            SectionType("kanji")


class TestQuestionGroupInfo:
    """Tests for QuestionGroupInfo dataclass."""

    def test_init_when_valid_values_then_creates_group(self):
        g = QuestionGroupInfo(number=2, weight=2.5, question_count=6)
        assert g.max_score == 15.0

    @pytest.mark.parametrize("number,weight,count", [(0, 1, 5), (1, 0, 5), (1, 1, 0), (1, -1, 5)])
    def test_init_when_non_positive_field_then_raises_error(self, number, weight, count):
        with pytest.raises(ValueError, match="must be positive"):
            QuestionGroupInfo(number=number, weight=weight, question_count=count)

    def test_init_when_frozen_then_immutable(self):
        g = QuestionGroupInfo(1, 1, 12)
        with pytest.raises(AttributeError):
            g.weight = 2  # type: ignore


class TestSnapshotModels:
    """Tests for MondaiQuestions and QuestionSnapshot."""

    def test_mondai_when_list_given_then_stored_as_tuple(self):
        m = MondaiQuestions(1, ["a", "b"])
        assert m.question_ids == ("a", "b")
        assert len(m) == 2
        assert "a" in m

    def test_mondai_when_to_dict_then_uses_persisted_keys(self):
        m = MondaiQuestions(3, ("x",))
        assert m.to_dict() == {"mondaiNumber": 3, "questionIds": ["x"]}
        assert MondaiQuestions.from_dict(m.to_dict()) == m

    def test_snapshot_when_section_accessed_by_string_then_returns_layout(self):
        vocab = (MondaiQuestions(1, ("a",)),)
        snap = QuestionSnapshot(vocabulary=vocab, grammar_reading=(), listening=())
        assert snap.section("vocabulary") == vocab
        assert snap.question_count == 1

    def test_snapshot_when_from_dict_missing_section_then_empty_layout(self):
        snap = QuestionSnapshot.from_dict({"vocabulary": [{"mondaiNumber": 1, "questionIds": ["a"]}]})
        assert snap.listening == ()
        assert snap.vocabulary[0].question_ids == ("a",)


class TestAnswers:
    """Tests for UserAnswerInput and GroupTally."""

    def test_answer_when_none_then_unanswered(self):
        assert not UserAnswerInput("q1").is_answered

    @pytest.mark.parametrize("choice", [0, 5])
    def test_answer_when_choice_out_of_range_then_raises_error(self, choice):
        with pytest.raises(ValueError, match="1-4"):
            UserAnswerInput("q1", choice)

    def test_tally_when_section_string_then_coerced_to_enum(self):
        t = GroupTally("listening", 2, 4, 6)
        assert t.section is SectionType.LISTENING


class TestResults:
    """Tests for result models."""

    def test_mondai_score_when_ratio_then_unweighted_fraction(self):
        s = MondaiScore(group_number=1, correct_count=3, total_count=4, weighted_score=9, max_weighted_score=12)
        assert s.ratio == 0.75

    def test_pass_fail_when_reasons_present_then_failed_sections_collected(self):
        reason = FailureReason(
            kind=FailureKind.COMBINED,
            sections=(SectionType.VOCABULARY, SectionType.GRAMMAR_READING),
            score=30, required=38, scale_max=120, message="combined",
        )
        result = PassFailResult(
            level=Level.N5, overall_passed=False, total_score=90, max_total_score=180,
            section_results=(), failure_reasons=(reason,),
        )
        assert result.failed_sections() == {SectionType.VOCABULARY, SectionType.GRAMMAR_READING}
        assert result.failure_messages == ["combined"]
        assert result.section_result("listening") is None
