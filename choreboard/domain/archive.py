"""
Week archival.
Credits each child's weekly reward to their running total, records the week
in their archive when they did anything, and clears the counts.
"""
import datetime
from typing import Dict, List, Optional, Sequence

from choreboard.domain.rewards import calculate_weekly_earnings, total_chores
from choreboard.schemas.board import Child, WeeklyArchive, as_number


def week_label(day: datetime.date) -> str:
    """Human-readable archive label, e.g. 'October 19, 2026'."""
    return f"{day:%B} {day.day}, {day.year}"


def archive_child(child: Child, today: datetime.date) -> Child:
    weekly_earnings = calculate_weekly_earnings(child.chores)
    chore_count = total_chores(child.chores)

    archive = list(child.archive)
    if chore_count > 0:
        entry = WeeklyArchive(week_of=week_label(today), total_chores=chore_count, earnings=weekly_earnings)
        archive = [entry] + archive

    return child.model_copy(
        update={
            "chores": {},
            "total_earnings": as_number(child.total_earnings) + weekly_earnings,
            "archive": archive,
        }
    )


def archive_week(children: Sequence[Child], today: Optional[datetime.date] = None) -> List[Child]:
    """
    Close the week for every child.

    Args:
        children: Current roster
        today: Date used for the archive label (defaults to today)

    Returns:
        New roster; the input is left untouched
    """
    day = today or datetime.date.today()
    return [archive_child(child, day) for child in children]


def build_week_summary(children: Sequence[Child]) -> List[Dict]:
    """
    Preview of what finalizing the week would credit, per child.
    Nothing is modified.
    """
    summary = []
    for child in children:
        weekly_earnings = calculate_weekly_earnings(child.chores)
        summary.append(
            {
                "child_id": child.id,
                "name": child.name,
                "total_chores": total_chores(child.chores),
                "earnings": weekly_earnings,
                "new_total_earnings": as_number(child.total_earnings) + weekly_earnings,
            }
        )
    return summary
