"""
statistics.py — Cohort-level descriptive statistics.

Computes one mean and one population standard deviation per subject.
These feed the norm-referenced grade classifier, so grades are always
relative to whichever students are in the cohort passed in.
"""

import logging
from typing import Any, Dict, Iterable, List

import numpy as np

logger = logging.getLogger(__name__)


def _safe_float(val) -> float:
    """Convert to float, treating missing or non-numeric values as 0."""
    try:
        v = float(val)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if np.isnan(v) or np.isinf(v) else v


def student_score(student: Dict[str, Any], subject: str):
    """Raw score for a subject; absent or blank entries count as 0."""
    value = (student.get("scores") or {}).get(subject)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return _safe_float(value)


def mean_and_std(values: Iterable[float]) -> tuple[float, float]:
    """Arithmetic mean and population (ddof=0) standard deviation."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0, 0.0
    return float(arr.mean()), float(arr.std(ddof=0))


def compute_class_statistics(
    students: List[Dict[str, Any]], subject_list: List[str]
) -> Dict[str, Dict[str, float]]:
    """
    Per-subject mean and standard deviation across the cohort.

    Every student contributes to every subject; a missing score is a 0.
    An empty cohort yields 0 for both figures.
    """
    subject_means: Dict[str, float] = {}
    subject_std_devs: Dict[str, float] = {}

    for subject in subject_list:
        mean, std = mean_and_std(student_score(s, subject) for s in students)
        subject_means[subject] = mean
        subject_std_devs[subject] = std
        if std == 0:
            logger.debug("Subject %r has no spread across %d students", subject, len(students))

    return {"subject_means": subject_means, "subject_std_devs": subject_std_devs}
