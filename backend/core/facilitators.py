"""
facilitators.py — Facilitator (subject teacher) performance metrics.

Each (facilitator, subject) pairing is scored from the grades its students
earned:

    performance % = (1 - total grade value / (students x 9)) x 100

9 is the worst grade value, so the figure measures distance from an
all-F9 class. A class of all A1s therefore scores 88.89%, not 100%.
The percentage is then graded on its own fixed scale (see
grading.PERFORMANCE_GRADE_BANDS).
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from core.grading import GRADE_LETTERS, get_performance_grade

logger = logging.getLogger(__name__)

WORST_GRADE_VALUE = 9


def _new_entry(facilitator: str, subject: str) -> Dict[str, Any]:
    return {
        "facilitator_name": facilitator,
        "subject": subject,
        "student_count": 0,
        "grade_counts": {g: 0 for g in GRADE_LETTERS},
        "total_grade_value": 0,
    }


def _round_2dp(value: float) -> float:
    # Exact ties such as 78.125 round up.
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _finalize(entry: Dict[str, Any]) -> Dict[str, Any]:
    count = entry["student_count"]
    total = entry["total_grade_value"]
    expected = count * WORST_GRADE_VALUE

    average = total / count if count > 0 else 0
    percentage = (1 - total / expected) * 100 if expected > 0 else 0

    return {
        **entry,
        "average_grade_value": average,
        "performance_percentage": _round_2dp(percentage),
        # Graded on the unrounded figure.
        "performance_grade": get_performance_grade(percentage),
    }


def compute_facilitator_stats(processed: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    One record per distinct (facilitator, subject) pair, best first.

    Rank is irrelevant here, so ranked or unranked input gives the same
    result.
    """
    groups: Dict[tuple, Dict[str, Any]] = {}

    for student in processed:
        for sub in student.get("subjects", []):
            key = (sub["facilitator"], sub["subject"])
            entry = groups.get(key)
            if entry is None:
                entry = groups[key] = _new_entry(*key)
            entry["student_count"] += 1
            entry["grade_counts"][sub["grade"]] = entry["grade_counts"].get(sub["grade"], 0) + 1
            entry["total_grade_value"] += sub["grade_value"]

    logger.debug("Aggregated %d facilitator/subject pairs", len(groups))
    stats = [_finalize(e) for e in groups.values()]
    stats.sort(key=lambda s: s["performance_percentage"], reverse=True)
    return stats
