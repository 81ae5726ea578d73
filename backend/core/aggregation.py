"""
aggregation.py — Per-student grading and best-six aggregation.

For every student:
- grade each subject against the class statistics
- pick the best 4 core and best 2 elective grades
- sum their grade values into the best-six aggregate (6 best, 54 worst)
- derive the performance category, overall remark and recommendation

Output is unranked; see ranking.rank_students.
"""

import logging
from typing import Any, Dict, List, Optional

from core.grading import (
    generate_subject_remark,
    get_category,
    get_grade_from_z_score,
    z_score,
)
from core.statistics import student_score
from core.subjects import is_core_subject, resolve_facilitator

logger = logging.getLogger(__name__)

BEST_CORE_COUNT = 4
BEST_ELECTIVE_COUNT = 2
WEAK_GRADE_VALUE = 7
PRAISE_AGGREGATE = 15

DEFAULT_RECOMMENDATION = (
    "Encouraged to maintain focus on core subjects. "
    "Recommended to attend extra classes for weak areas identified above. "
    "Parents are advised to supervise evening studies."
)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _selection_key(subject: Dict[str, Any]):
    # Best grade first; within a grade band the higher raw score wins.
    return (subject["grade_value"], -subject["score"])


# ── Remarks ─────────────────────────────────────────────────────────

def weakness_text(computed: List[Dict[str, Any]]) -> str:
    """Sentence naming every subject graded D7 or worse, or '' if none."""
    weak = [s["subject"] for s in computed if s["grade_value"] >= WEAK_GRADE_VALUE]
    if not weak:
        return ""
    return f"Needs urgent improvement in: {', '.join(weak)}."


def facilitator_notes(subject_remarks: Optional[Dict[str, str]]) -> str:
    notes = [
        f"{subject}: {text}"
        for subject, text in (subject_remarks or {}).items()
        if _has_text(text)
    ]
    if not notes:
        return ""
    return f" [Facilitator Notes: {'; '.join(notes)}]"


def performance_summary(category: str, aggregate: int) -> str:
    closing = (
        "Keep up the excellent work!"
        if aggregate <= PRAISE_AGGREGATE
        else "More effort required to improve aggregate."
    )
    return f"Overall performance is {category}. {closing}"


def synthesize_remark(
    student: Dict[str, Any],
    computed: List[Dict[str, Any]],
    category: str,
    aggregate: int,
) -> tuple[str, str]:
    """
    Build the overall remark for a report card.

    Returns (overall_remark, weakness_analysis). A non-empty final remark
    on the student replaces the generated text entirely.
    """
    weakness = weakness_text(computed)

    if _has_text(student.get("final_remark")):
        return student["final_remark"], weakness

    if not weakness:
        # min() keeps the first of equally low scores, in subject order.
        lowest = min(computed, key=lambda s: s["score"])["subject"] if computed else "N/A"
        weakness = f"Lowest performance in {lowest}."

    notes = facilitator_notes(student.get("subject_remarks"))
    if _has_text(student.get("overall_remark")):
        summary = student["overall_remark"]
    else:
        summary = performance_summary(category, aggregate)

    return f"{weakness}{notes}\n\n{summary}", weakness


# ── Pipeline ────────────────────────────────────────────────────────

def compute_subjects(
    student: Dict[str, Any],
    stats: Dict[str, Dict[str, float]],
    subject_list: List[str],
    facilitator_map: Optional[Dict[str, str]] = None,
    remark_labels: Optional[Dict[str, str]] = None,
    staff_list: Optional[List[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """Grade every subject in the list for one student."""
    means = stats.get("subject_means", {})
    std_devs = stats.get("subject_std_devs", {})

    computed = []
    for subject in subject_list:
        score = student_score(student, subject)
        mean = means.get(subject, 0.0)
        std = std_devs.get(subject, 0.0)
        grade = get_grade_from_z_score(score, mean, std, remark_labels)
        computed.append({
            "subject": subject,
            "score": score,
            "grade": grade["grade"],
            "grade_value": grade["value"],
            "grade_remark": grade["category"],
            "remark": generate_subject_remark(score),
            "facilitator": resolve_facilitator(subject, facilitator_map, staff_list),
            "z_score": z_score(score, mean, std),
        })
    return computed


def select_best_six(computed: List[Dict[str, Any]]) -> tuple[list, list]:
    """Best 4 core and best 2 elective subjects; short pools are not padded."""
    cores = sorted((s for s in computed if is_core_subject(s["subject"])), key=_selection_key)
    electives = sorted((s for s in computed if not is_core_subject(s["subject"])), key=_selection_key)
    return cores[:BEST_CORE_COUNT], electives[:BEST_ELECTIVE_COUNT]


def process_student(
    student: Dict[str, Any],
    stats: Dict[str, Dict[str, float]],
    facilitator_map: Optional[Dict[str, str]],
    subject_list: List[str],
    remark_labels: Optional[Dict[str, str]] = None,
    staff_list: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    computed = compute_subjects(
        student, stats, subject_list, facilitator_map, remark_labels, staff_list
    )
    total_score = sum(s["score"] for s in computed)

    best_cores, best_electives = select_best_six(computed)
    aggregate = sum(s["grade_value"] for s in best_cores + best_electives)
    category = get_category(aggregate)

    overall_remark, weakness = synthesize_remark(student, computed, category, aggregate)
    recommendation = (
        student["recommendation"]
        if _has_text(student.get("recommendation"))
        else DEFAULT_RECOMMENDATION
    )

    return {
        "id": student.get("id"),
        "name": student.get("name"),
        "subjects": computed,
        "total_score": total_score,
        "best_six_aggregate": aggregate,
        "best_core_subjects": best_cores,
        "best_elective_subjects": best_electives,
        "category": category,
        "weakness_analysis": weakness,
        "overall_remark": overall_remark,
        "recommendation": recommendation,
        "attendance": student.get("attendance") or "0",
        "rank": None,
    }


def process_students(
    stats: Dict[str, Dict[str, float]],
    students: List[Dict[str, Any]],
    facilitator_map: Optional[Dict[str, str]],
    subject_list: List[str],
    remark_labels: Optional[Dict[str, str]] = None,
    staff_list: Optional[List[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """Process every student in input order. Ranks are left unset."""
    logger.debug("Processing %d students over %d subjects", len(students), len(subject_list))
    return [
        process_student(s, stats, facilitator_map, subject_list, remark_labels, staff_list)
        for s in students
    ]
