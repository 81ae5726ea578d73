"""
results.py — Whole-cohort result computation and the master broad-sheet.

analyze_cohort is the unit the front-end recomputes whenever a score,
facilitator assignment or subject list changes:

    statistics -> grading/aggregation -> ranking -> facilitator stats
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from core.aggregation import process_students
from core.facilitators import compute_facilitator_stats
from core.ranking import class_average_aggregate, rank_students
from core.statistics import compute_class_statistics
from core.subjects import DEFAULT_FACILITATORS

logger = logging.getLogger(__name__)


def analyze_cohort(
    students: List[Dict[str, Any]],
    subject_list: List[str],
    facilitator_map: Optional[Dict[str, str]] = None,
    remark_labels: Optional[Dict[str, str]] = None,
    staff_list: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Compute statistics, ranked students and facilitator stats in one pass.

    Without a facilitator map the school's default subject assignments
    are used; pass {} to rely on the staff roster alone.
    """
    if facilitator_map is None:
        facilitator_map = DEFAULT_FACILITATORS

    stats = compute_class_statistics(students, subject_list)
    processed = process_students(
        stats, students, facilitator_map, subject_list, remark_labels, staff_list
    )
    ranked = rank_students(processed)
    facilitator_stats = compute_facilitator_stats(ranked)

    logger.debug(
        "Cohort analysed: %d students, %d subjects, %d facilitator pairs",
        len(ranked), len(subject_list), len(facilitator_stats),
    )
    return {
        "statistics": stats,
        "students": ranked,
        "class_average_aggregate": class_average_aggregate(ranked),
        "facilitator_stats": facilitator_stats,
    }


def broadsheet_columns(subject_list: List[str]) -> List[str]:
    cols = ["rank", "id", "name"]
    for subject in subject_list:
        cols += [subject, f"{subject} grade"]
    cols += ["total_score", "best_six_aggregate", "category"]
    return cols


def build_broadsheet(ranked: List[Dict[str, Any]], subject_list: List[str]) -> pd.DataFrame:
    """
    Master broad-sheet: one row per student in class order.

    Each subject contributes a score column and a grade column.
    """
    rows = []
    for student in ranked:
        by_subject = {s["subject"]: s for s in student.get("subjects", [])}
        row = {
            "rank": student.get("rank"),
            "id": student.get("id"),
            "name": student.get("name"),
        }
        for subject in subject_list:
            computed = by_subject.get(subject)
            row[subject] = computed["score"] if computed else 0
            row[f"{subject} grade"] = computed["grade"] if computed else None
        row["total_score"] = student.get("total_score")
        row["best_six_aggregate"] = student.get("best_six_aggregate")
        row["category"] = student.get("category")
        rows.append(row)

    return pd.DataFrame(rows, columns=broadsheet_columns(subject_list))
