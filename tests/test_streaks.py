"""
Tests for streak calculation.

Covers the today/yesterday anchor, gap detection, the longest-run scan,
duplicate and "not done" logs, and the configurable grace days.
"""
from __future__ import annotations

from datetime import date, timedelta

from app.services.streaks import (
    compute_streak,
    completed_days,
    current_streak,
    longest_streak,
)
from conftest import TODAY, make_log, run_of_logs

YESTERDAY = TODAY - timedelta(days=1)


class TestCurrentStreak:
    def test_no_logs(self):
        result = compute_streak([], today=TODAY)
        assert (result.current, result.longest) == (0, 0)

    def test_single_log_today(self):
        result = compute_streak([make_log("h1", TODAY)], today=TODAY)
        assert (result.current, result.longest) == (1, 1)

    def test_run_ending_today(self):
        result = compute_streak(run_of_logs("h1", TODAY, 7), today=TODAY)
        assert result.current == 7

    def test_run_ending_yesterday_is_still_alive(self):
        result = compute_streak(run_of_logs("h1", YESTERDAY, 5), today=TODAY)
        assert (result.current, result.longest) == (5, 5)

    def test_run_ending_two_days_ago_is_dead(self):
        result = compute_streak(run_of_logs("h1", TODAY - timedelta(days=2), 5), today=TODAY)
        assert result.current == 0
        assert result.longest == 5

    def test_gap_stops_the_walk(self):
        logs = [
            make_log("h1", TODAY),
            make_log("h1", YESTERDAY),
            make_log("h1", TODAY - timedelta(days=3)),
            make_log("h1", TODAY - timedelta(days=4)),
        ]
        assert compute_streak(logs, today=TODAY).current == 2

    def test_not_done_log_breaks_streak(self):
        logs = [
            make_log("h1", TODAY),
            make_log("h1", YESTERDAY, completed=False),
            make_log("h1", TODAY - timedelta(days=2)),
        ]
        assert compute_streak(logs, today=TODAY).current == 1

    def test_future_logs_ignored_for_current(self):
        logs = run_of_logs("h1", TODAY, 3) + [make_log("h1", TODAY + timedelta(days=5))]
        assert compute_streak(logs, today=TODAY).current == 3


class TestLongestStreak:
    def test_picks_longest_of_several_runs(self):
        logs = (
            run_of_logs("h1", date(2024, 1, 3), 3)
            + run_of_logs("h1", date(2024, 1, 16), 7)
            + run_of_logs("h1", date(2024, 1, 23), 4)
        )
        result = compute_streak(logs, today=TODAY)
        assert result.longest == 7
        assert result.current == 0

    def test_gap_scenario(self):
        logs = [make_log("h1", d) for d in ("2024-01-01", "2024-01-02", "2024-01-05")]
        assert compute_streak(logs, today=TODAY).longest == 2

    def test_current_run_can_be_longest(self):
        logs = run_of_logs("h1", date(2024, 1, 2), 2) + run_of_logs("h1", TODAY, 14)
        result = compute_streak(logs, today=TODAY)
        assert result.current == result.longest == 14

    def test_longest_never_below_current(self):
        logs = run_of_logs("h1", YESTERDAY, 3) + run_of_logs("h1", TODAY - timedelta(days=10), 2)
        result = compute_streak(logs, today=TODAY)
        assert result.longest >= result.current == 3


class TestDuplicatesAndOverrides:
    def test_duplicate_dates_count_once(self):
        logs = run_of_logs("h1", TODAY, 3) + run_of_logs("h1", TODAY, 3)
        result = compute_streak(logs, today=TODAY)
        assert (result.current, result.longest) == (3, 3)

    def test_completed_days_resolves_overrides(self):
        logs = [make_log("h1", TODAY), make_log("h1", TODAY, completed=False)]
        assert completed_days(logs) == []


class TestGraceDays:
    def test_one_missed_day_tolerated(self):
        days = [TODAY - timedelta(days=4), TODAY - timedelta(days=3), YESTERDAY, TODAY]
        assert current_streak(days, TODAY, grace_days=0) == 2
        assert current_streak(days, TODAY, grace_days=1) == 4

    def test_anchor_extends_with_grace(self):
        days = [TODAY - timedelta(days=3), TODAY - timedelta(days=2)]
        assert current_streak(days, TODAY, grace_days=0) == 0
        assert current_streak(days, TODAY, grace_days=1) == 2

    def test_longest_with_grace(self):
        days = [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 6)]
        assert longest_streak(days, grace_days=0) == 1
        assert longest_streak(days, grace_days=1) == 2
        assert longest_streak(days, grace_days=2) == 3

    def test_negative_grace_behaves_like_zero(self):
        logs = run_of_logs("h1", YESTERDAY, 2)
        assert compute_streak(logs, today=TODAY, grace_days=-3).current == 2


class TestProperties:
    def test_idempotent(self):
        logs = run_of_logs("h1", YESTERDAY, 4) + [make_log("h1", date(2024, 2, 1))]
        assert compute_streak(logs, today=TODAY) == compute_streak(logs, today=TODAY)

    def test_logging_today_extends_live_streak_by_one(self):
        logs = run_of_logs("h1", YESTERDAY, 4)
        before = compute_streak(logs, today=TODAY).current
        after = compute_streak(logs + [make_log("h1", TODAY)], today=TODAY).current
        assert after == before + 1

    def test_log_before_earliest_gap_does_not_change_current(self):
        logs = run_of_logs("h1", TODAY, 3) + [make_log("h1", TODAY - timedelta(days=6))]
        before = compute_streak(logs, today=TODAY).current
        after = compute_streak(logs + [make_log("h1", TODAY - timedelta(days=9))], today=TODAY).current
        assert before == after == 3
