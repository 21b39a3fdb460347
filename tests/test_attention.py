# ABOUTME: Tests the attention rule chain for individual students.
# ABOUTME: Covers rule priority, pass-mark streaks, inactivity boundary, and incompleteness.

from datetime import date, datetime, timedelta

from src.common.config import AttentionConfig
from src.progress.attention import (
    BELOW_PASS,
    INACTIVE,
    INCOMPLETE,
    REASON_ORDER,
    REGRESSING,
    determine_attention,
    evaluate_student,
)

COHORT_DATE = date(2024, 3, 31)


def _days_before(days: int) -> date:
    return COHORT_DATE - timedelta(days=days)


def _run(history_most_recent_first):
    latest = history_most_recent_first[0]
    previous = history_most_recent_first[1] if len(history_most_recent_first) > 1 else None
    return determine_attention(latest, previous, history_most_recent_first, COHORT_DATE)


def test_regressing_on_ten_point_drop(make_score):
    history = [make_score("u1", _days_before(1), 200), make_score("u1", _days_before(20), 210)]
    flag = _run(history)
    assert flag.reason == REGRESSING
    assert "200" in flag.detail
    assert "10" in flag.detail


def test_nine_point_drop_is_not_regressing(make_score):
    history = [make_score("u1", _days_before(1), 201), make_score("u1", _days_before(20), 210)]
    assert _run(history) is None


def test_regressing_wins_over_below_pass_and_inactivity(make_score):
    history = [make_score("u1", _days_before(40), 185), make_score("u1", _days_before(50), 199)]
    flag = _run(history)
    assert flag.reason == REGRESSING


def test_below_pass_streak_of_two(make_score):
    history = [make_score("u1", _days_before(2), 190), make_score("u1", _days_before(9), 195)]
    flag = _run(history)
    assert flag.reason == BELOW_PASS
    assert "190" in flag.detail
    assert "200" in flag.detail


def test_single_low_exam_is_not_flagged(make_score):
    history = [make_score("u1", _days_before(2), 170, included_count=1)]
    assert _run(history) is None


def test_below_pass_needs_both_recent_exams_below(make_score):
    history = [make_score("u1", _days_before(2), 195), make_score("u1", _days_before(9), 202)]
    assert _run(history) is None


def test_zero_overall_is_not_below_pass(make_score):
    history = [
        make_score("u1", _days_before(2), 0, included_count=0),
        make_score("u1", _days_before(9), 0, included_count=0),
    ]
    flag = _run(history)
    assert flag.reason == INCOMPLETE
    assert "Only 0 of 5" in flag.detail


def test_inactivity_boundary_is_strict(make_score):
    exactly = [make_score("u1", _days_before(28), 210)]
    assert _run(exactly) is None

    older = [make_score("u1", _days_before(29), 210)]
    flag = _run(older)
    assert flag.reason == INACTIVE
    assert flag.detail == "No scores logged in 4+ weeks"


def test_inactive_wins_over_incomplete(make_score):
    history = [
        make_score("u1", _days_before(35), 205, included_count=2),
        make_score("u1", _days_before(60), 206, included_count=1),
    ]
    assert _run(history).reason == INACTIVE


def test_incomplete_when_two_recent_exams_lack_skills(make_score):
    history = [
        make_score("u1", _days_before(3), 205, included_count=2),
        make_score("u1", _days_before(10), 206, included_count=1),
    ]
    flag = _run(history)
    assert flag.reason == INCOMPLETE
    assert flag.detail == "Only 2 of 5 skills in recent exams"


def test_incomplete_needs_two_entries(make_score):
    history = [make_score("u1", _days_before(3), 205, included_count=1)]
    assert _run(history) is None


def test_on_track_student_has_no_flag(make_score):
    history = [make_score("u1", _days_before(3), 214), make_score("u1", _days_before(10), 208)]
    assert _run(history) is None


def test_datetime_inputs_are_compared_as_dates(make_score):
    history = [make_score("u1", datetime(2024, 3, 3, 23, 59), 210)]
    flag = determine_attention(history[0], None, history, datetime(2024, 3, 31, 8, 0))
    assert flag is None


def test_evaluate_student_orders_history(make_score):
    # Given out of order: the newest exam (190) follows a 205, so this is a drop of 15.
    history = [
        make_score("u1", _days_before(30), 180),
        make_score("u1", _days_before(1), 190),
        make_score("u1", _days_before(10), 205),
    ]
    flag = evaluate_student(history, COHORT_DATE)
    assert flag.reason == REGRESSING
    assert "15" in flag.detail


def test_evaluate_student_empty_history():
    assert evaluate_student([], COHORT_DATE) is None


def test_config_thresholds_are_respected(make_score):
    history = [make_score("u1", _days_before(1), 204), make_score("u1", _days_before(8), 210)]
    assert evaluate_student(history, COHORT_DATE) is None
    flag = evaluate_student(history, COHORT_DATE, AttentionConfig(regression_drop=5))
    assert flag.reason == REGRESSING


def test_reason_order_is_total_and_severity_ranked():
    ordered = sorted(REASON_ORDER, key=REASON_ORDER.get)
    assert ordered == [REGRESSING, BELOW_PASS, INACTIVE, INCOMPLETE]
