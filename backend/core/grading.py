"""
grading.py — Norm-referenced 9-point grading helpers.

Grades are assigned from a score's deviation from the subject mean,
measured in population standard deviations of the current cohort:

  A1 B2 B3 C4 C5 C6 D7 E8 F9   (value 1 = best, 9 = worst)

Also holds the fixed score-bracket remarks, the aggregate category bands
and the facilitator performance-grade table. The last two are separate
scales and must not be mixed up with the z-score bands.
"""

import math
from typing import Any, Dict, List, Optional

from scipy import stats as sp_stats


# Z-score bands (min z, grade, value), ordered best to worst.
# F9 catches everything below the E8 threshold.
GRADE_BANDS = [
    (1.645, "A1", 1),
    (1.036, "B2", 2),
    (0.524, "B3", 3),
    (0.0, "C4", 4),
    (-0.524, "C5", 5),
    (-1.036, "C6", 6),
    (-1.645, "D7", 7),
    (-2.326, "E8", 8),
]
FALLBACK_GRADE = ("F9", 9)
ZERO_SPREAD_GRADE = ("C4", 4)

GRADE_LETTERS = [g for _, g, _ in GRADE_BANDS] + [FALLBACK_GRADE[0]]

DEFAULT_GRADING_REMARKS: Dict[str, str] = {
    "A1": "Excellent",
    "B2": "Very Good",
    "B3": "Good",
    "C4": "Credit",
    "C5": "Credit",
    "C6": "Credit",
    "D7": "Pass",
    "E8": "Pass",
    "F9": "Fail",
}

# Descriptive remark per raw-score bracket, ordered high to low.
SUBJECT_REMARKS = [
    (90, "Outstanding mastery of subject concepts."),
    (80, "Excellent performance, shows great potential."),
    (70, "Very Good. Consistent effort displayed."),
    (60, "Good. Capable of achieving higher grades."),
    (55, "Credit. Satisfactory understanding shown."),
    (50, "Pass. Needs more dedication to studies."),
    (40, "Weak Pass. Remedial support recommended."),
]
FAILURE_REMARK = "Critical Failure. Immediate intervention required."

# Best-six aggregate (max aggregate, category). Lower aggregate is better.
CATEGORY_BANDS = [
    (10, "Distinction"),
    (20, "Merit"),
    (36, "Pass"),
]
FAILING_CATEGORY = "Fail"

# Facilitator performance percentage (min %, grade), ordered high to low.
PERFORMANCE_GRADE_BANDS = [
    (80.0, "A1"),
    (70.0, "B2"),
    (60.0, "B3"),
    (50.0, "C4"),
    (45.0, "C5"),
    (40.0, "C6"),
    (35.0, "D7"),
    (30.0, "E8"),
]
FAILING_PERFORMANCE_GRADE = "F9"


def _label_for(grade: str, remark_labels: Optional[Dict[str, str]]) -> str:
    """Caller label for a grade, falling back to the built-in default."""
    if remark_labels and remark_labels.get(grade):
        return remark_labels[grade]
    return DEFAULT_GRADING_REMARKS[grade]


def get_grade_from_z_score(
    score: float,
    mean: float,
    std_dev: float,
    remark_labels: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Classify a score against its subject mean and standard deviation.

    A zero spread means the cohort cannot be discriminated, so every
    score lands on C4. Band boundaries belong to the better grade.
    """
    if std_dev == 0:
        grade, value = ZERO_SPREAD_GRADE
        return {"grade": grade, "value": value, "category": _label_for(grade, remark_labels)}

    diff = score - mean
    for min_z, grade, value in GRADE_BANDS:
        if diff >= min_z * std_dev:
            return {"grade": grade, "value": value, "category": _label_for(grade, remark_labels)}

    grade, value = FALLBACK_GRADE
    return {"grade": grade, "value": value, "category": _label_for(grade, remark_labels)}


def z_score(score: float, mean: float, std_dev: float) -> float:
    """Signed distance from the mean in standard deviations; 0 when there is no spread."""
    if std_dev == 0:
        return 0.0
    return (score - mean) / std_dev


def generate_subject_remark(score: float) -> str:
    """Fixed descriptive sentence for a raw score; no cohort dependency."""
    for min_score, remark in SUBJECT_REMARKS:
        if score >= min_score:
            return remark
    return FAILURE_REMARK


def get_category(aggregate: float) -> str:
    """Performance category for a best-six aggregate."""
    for max_aggregate, category in CATEGORY_BANDS:
        if aggregate <= max_aggregate:
            return category
    return FAILING_CATEGORY


def get_performance_grade(percentage: float) -> str:
    """Letter grade for a facilitator performance percentage."""
    for min_pct, grade in PERFORMANCE_GRADE_BANDS:
        if percentage >= min_pct:
            return grade
    return FAILING_PERFORMANCE_GRADE


def get_grade_scale(remark_labels: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
    """
    Full grade scale for legend/reference.

    `expected_share` is the percentage of a normally distributed cohort
    that would fall inside each band.
    """
    scale = []
    upper = math.inf
    bands = GRADE_BANDS + [(-math.inf, FALLBACK_GRADE[0], FALLBACK_GRADE[1])]
    for min_z, grade, value in bands:
        share = sp_stats.norm.cdf(upper) - sp_stats.norm.cdf(min_z)
        scale.append({
            "grade": grade,
            "value": value,
            "min_z": None if math.isinf(min_z) else min_z,
            "max_z": None if math.isinf(upper) else upper,
            "label": _label_for(grade, remark_labels),
            "expected_share": round(float(share) * 100, 2),
        })
        upper = min_z
    return scale
