# ABOUTME: Tests per-student progress summaries between consecutive exams.
# ABOUTME: Ensures deltas, strongest skill, and focus area follow the latest exam.

from datetime import date

from src.progress.trends import overall_delta, skill_deltas, skill_spotlight, summarize_student


def test_skill_deltas_only_cover_latest_skills():
    deltas = skill_deltas({"reading": 210, "writing": 200}, {"reading": 200, "speaking": 190})
    assert deltas == {"reading": 10, "writing": None}


def test_skill_deltas_without_previous_exam():
    assert skill_deltas({"listening": 185}) == {"listening": None}


def test_skill_spotlight_picks_extremes_in_display_order():
    spotlight = skill_spotlight({"speaking": 210, "reading": 210, "writing": 190, "listening": 190})
    assert spotlight.strongest == "reading"
    assert spotlight.strongest_score == 210
    assert spotlight.weakest == "listening"
    assert spotlight.weakest_score == 190


def test_skill_spotlight_empty():
    assert skill_spotlight({}) is None


def test_summarize_student(make_score):
    history = [
        make_score("u1", date(2024, 2, 1), 205, scale_scores={"reading": 210, "writing": 200}),
        make_score("other", date(2024, 2, 15), 180),
        make_score("u1", date(2024, 1, 1), 195, scale_scores={"reading": 190, "writing": 200}),
    ]
    progress = summarize_student("u1", history)

    assert [score.overall for score in progress.history] == [195, 205]
    assert progress.latest.overall == 205
    assert progress.previous.overall == 195
    assert progress.overall_delta == 10
    assert progress.skill_deltas == {"reading": 20, "writing": 0}
    assert progress.spotlight.strongest == "reading"
    assert progress.spotlight.weakest == "writing"


def test_summarize_student_without_scores():
    progress = summarize_student("ghost", [])
    assert progress.latest is None
    assert progress.overall_delta is None
    assert progress.skill_deltas == {}
    assert progress.spotlight is None


def test_overall_delta_requires_both_scores(make_score):
    latest = make_score("u1", date(2024, 2, 1), 205)
    assert overall_delta(latest, None) is None
    assert overall_delta(latest, make_score("u1", date(2024, 1, 1), 215)) == -10


def test_skill_spotlight_all_equal_skills():
    spotlight = skill_spotlight({"reading": 220, "writing": 220, "speaking": 220})
    assert spotlight.strongest == "reading"
    assert spotlight.weakest == "speaking"
