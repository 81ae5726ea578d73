"""
Results routes — grading, ranking and facilitator analysis endpoints.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import numpy as np
from fastapi import APIRouter, HTTPException

from core.grading import get_grade_scale
from core.results import analyze_cohort, build_broadsheet
from core.statistics import compute_class_statistics
from core.subjects import (
    CORE_SUBJECTS,
    DEPARTMENTS,
    compose_exam_score,
    get_subjects_for_department,
)

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = os.getenv("DEFAULT_DEPARTMENT", "Junior High School")


def _sanitize(obj):
    """Recursively coerce numpy/pandas scalars to JSON-safe Python types."""
    if isinstance(obj, dict):
        return {k: _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (np.floating, float)):
        v = float(obj)
        return None if (np.isnan(v) or np.isinf(v)) else v
    return obj


def _students_from_payload(payload: dict) -> List[Dict[str, Any]]:
    """Extract the student list from a request payload."""
    students = payload.get("students")
    if not students:
        logger.warning("Rejected request without students")
        raise HTTPException(400, "No students provided.")
    if not isinstance(students, list) or not all(isinstance(s, dict) for s in students):
        raise HTTPException(400, "'students' must be a list of objects.")
    for student in students:
        for key in ("scores", "subject_remarks"):
            if student.get(key) is not None and not isinstance(student[key], dict):
                logger.warning("Rejected student %r with malformed %r", student.get("id"), key)
                raise HTTPException(400, f"Student '{student.get('id')}': '{key}' must be an object.")
    return students


def _subjects_from_payload(payload: dict) -> List[str]:
    """Explicit subject list, or the department's catalogue."""
    subjects = payload.get("subjects")
    if subjects is None:
        department = payload.get("department") or DEFAULT_DEPARTMENT
        return get_subjects_for_department(department, payload.get("custom_subjects"))
    if not isinstance(subjects, list) or not all(isinstance(s, str) for s in subjects):
        raise HTTPException(400, "'subjects' must be a list of subject names.")
    return subjects


def _optional_mapping(payload: dict, key: str) -> Optional[Dict[str, Any]]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise HTTPException(400, f"'{key}' must be an object.")
    return value


def _staff_from_payload(payload: dict) -> List[Dict[str, Any]]:
    staff = payload.get("staff_list") or []
    if not isinstance(staff, list) or not all(isinstance(s, dict) for s in staff):
        raise HTTPException(400, "'staff_list' must be a list of objects.")
    return staff


def _analyze(payload: dict) -> Dict[str, Any]:
    students = _students_from_payload(payload)
    subjects = _subjects_from_payload(payload)
    logger.info("Analysing %d students across %d subjects", len(students), len(subjects))
    result = analyze_cohort(
        students,
        subjects,
        facilitator_map=_optional_mapping(payload, "facilitator_map"),
        remark_labels=_optional_mapping(payload, "remark_labels"),
        staff_list=_staff_from_payload(payload),
    )
    result["subjects"] = subjects
    return result


@router.post("/statistics")
async def statistics(payload: dict):
    """Per-subject mean and population standard deviation."""
    students = _students_from_payload(payload)
    subjects = _subjects_from_payload(payload)
    return _sanitize(compute_class_statistics(students, subjects))


@router.post("/process")
async def process(payload: dict):
    """Grade, aggregate and rank a class; includes facilitator stats."""
    return _sanitize(_analyze(payload))


@router.post("/facilitators")
async def facilitators(payload: dict):
    """Facilitator performance per (facilitator, subject) pair, best first."""
    result = _analyze(payload)
    return _sanitize({"facilitator_stats": result["facilitator_stats"]})


@router.post("/broadsheet")
async def broadsheet(payload: dict):
    """Master broad-sheet rows in class order."""
    result = _analyze(payload)
    df = build_broadsheet(result["students"], result["subjects"])
    return _sanitize({
        "columns": [str(c) for c in df.columns],
        "records": df.to_dict(orient="records"),
        "class_average_aggregate": result["class_average_aggregate"],
    })


@router.post("/compose-score")
async def compose_score(payload: dict):
    """Combine section A and section B marks into an exam total."""
    subject = payload.get("subject")
    if not subject:
        raise HTTPException(400, "Provide 'subject'.")
    return compose_exam_score(
        payload.get("section_a"),
        payload.get("section_b"),
        subject,
        payload.get("department") or DEFAULT_DEPARTMENT,
    )


@router.get("/grade-scale")
async def grade_scale():
    """Nine-point grade legend with z-score thresholds."""
    return {"grade_scale": get_grade_scale()}


@router.get("/subjects/{department}")
async def subjects(department: str):
    """Subject catalogue for a department."""
    if department not in DEPARTMENTS:
        raise HTTPException(404, f"Unknown department '{department}'. Available: {DEPARTMENTS}")
    return {
        "department": department,
        "subjects": get_subjects_for_department(department),
        "core_subjects": sorted(CORE_SUBJECTS),
    }
