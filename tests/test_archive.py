"""Tests for week archival."""
import datetime

from choreboard.domain.archive import archive_week, build_week_summary, week_label
from choreboard.schemas.board import Child, WeeklyArchive

TODAY = datetime.date(2026, 10, 19)


class TestArchiveWeek:
    def test_archive_with_activity(self):
        child = Child(id="alex", name="Alex", chores={"catA": 3, "catB": 2}, total_earnings=10)

        [result] = archive_week([child], TODAY)

        assert result.chores == {}
        assert result.total_earnings == 12
        assert result.archive == [WeeklyArchive(week_of="October 19, 2026", total_chores=5, earnings=2)]

    def test_archive_without_activity(self):
        previous = WeeklyArchive(week_of="October 12, 2026", total_chores=6, earnings=2)
        child = Child(id="lea", name="Lea", chores={}, total_earnings=10, archive=[previous])

        [result] = archive_week([child], TODAY)

        assert result.chores == {}
        assert result.total_earnings == 10
        assert result.archive == [previous]

    def test_activity_without_reward_is_still_archived(self):
        child = Child(id="tom", name="Tom", chores={"catA": 1})

        [result] = archive_week([child], TODAY)

        assert result.archive[0].total_chores == 1
        assert result.archive[0].earnings == 0
        assert result.total_earnings == 0

    def test_new_entry_is_prepended(self):
        previous = WeeklyArchive(week_of="October 12, 2026", total_chores=6, earnings=2)
        child = Child(
            id="c", name="C", chores={"a": 4, "b": 3, "c": 3}, total_earnings=2, archive=[previous]
        )

        [result] = archive_week([child], TODAY)

        assert result.archive[0].earnings == 5
        assert result.archive[1] == previous
        assert result.total_earnings == 7

    def test_non_numeric_total_counts_as_zero(self):
        child = Child.model_validate(
            {"id": "c", "name": "C", "chores": {"a": 3, "b": 2}, "totalEarnings": "lots"}
        )

        [result] = archive_week([child], TODAY)

        assert result.total_earnings == 2

    def test_children_are_independent(self):
        busy = Child(id="busy", name="Busy", chores={"a": 3, "b": 2})
        idle = Child(id="idle", name="Idle", total_earnings=1)

        busy_after, idle_after = archive_week([busy, idle], TODAY)

        assert busy_after.total_earnings == 2
        assert idle_after.total_earnings == 1
        assert idle_after.archive == []

    def test_input_is_untouched(self):
        child = Child(id="c", name="C", chores={"a": 3})
        archive_week([child], TODAY)
        assert child.chores == {"a": 3}

    def test_stored_counts_are_whole_numbers(self):
        child = Child.model_validate(
            {"id": "c", "name": "C", "chores": {"a": 3.9, "b": 2, "c": True, "d": "4", "e": 0.5, "f": float("inf")}}
        )

        assert child.chores == {"a": 3, "b": 2}


class TestWeekSummary:
    def test_summary_matches_archive(self):
        child = Child(id="alex", name="Alex", chores={"catA": 3, "catB": 2}, total_earnings=10)

        [summary] = build_week_summary([child])

        assert summary == {
            "child_id": "alex",
            "name": "Alex",
            "total_chores": 5,
            "earnings": 2,
            "new_total_earnings": 12,
        }
        assert child.chores == {"catA": 3, "catB": 2}

    def test_week_label(self):
        assert week_label(datetime.date(2026, 3, 5)) == "March 5, 2026"
