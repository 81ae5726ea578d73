"""
subjects.py — Subject catalogues, core/elective partition and facilitators.

The core-subject set is fixed: it decides which pool a subject competes
in for the best-six aggregate, regardless of department.
"""

import math
from typing import Any, Dict, List, Optional


JHS_SUBJECTS = [
    "English Language",
    "Mathematics",
    "Science",
    "Social Studies",
    "Career Technology",
    "Creative Arts and Designing",
    "Ghana Language (Twi)",
    "Religious and Moral Education",
    "Computing",
    "French",
]

BASIC_SUBJECTS = [
    "English Language",
    "Mathematics",
    "Science",
    "History",
    "Physical Education",
    "Creativity",
    "Ghana Language (Twi)",
    "Religious and Moral Education",
    "I.C.T",
    "French",
]

EARLY_CHILDHOOD_SUBJECTS = [
    "LANGUAGE AND LITERACY",
    "NUMERACY",
    "CREATIVE ACTIVITIES",
    "OUR WORLD OUR PEOPLE",
]

CORE_SUBJECTS = frozenset([
    "Mathematics",
    "English Language",
    "Social Studies",
    "Science",
    "History",
])

JUNIOR_HIGH = "Junior High School"
BASIC_DEPARTMENTS = {"Lower Basic School", "Upper Basic School"}
EARLY_CHILDHOOD_DEPARTMENTS = {"Daycare", "Nursery", "Kindergarten"}
DEPARTMENTS = sorted(EARLY_CHILDHOOD_DEPARTMENTS) + sorted(BASIC_DEPARTMENTS) + [JUNIOR_HIGH]

UNASSIGNED_FACILITATOR = "TBA"

DEFAULT_FACILITATORS: Dict[str, str] = {
    "Science": "SIR JOSHUA",
    "Computing": "SIR ISAAC",
    "I.C.T": "SIR ISAAC",
    "Mathematics": "SIR SAMMY",
    "Religious and Moral Education": "MADAM JANE",
    "Creative Arts and Designing": "MADAM NORTEY",
    "Creative Arts": "MADAM NORTEY",
    "Creativity": "MADAM NORTEY",
    "CREATIVE ACTIVITIES": "MADAM NORTEY",
    "French": "SIR CHARLES",
    "Social Studies": "SIR ASHMIE",
    "History": "SIR ASHMIE",
    "English Language": "MADAM NANCY",
    "LANGUAGE AND LITERACY": "MADAM NANCY",
    "Ghana Language (Twi)": "MADAM RITA",
    "Career Technology": "SIR JOSHUA",
    "Physical Education": "SIR JOSHUA",
    "OUR WORLD OUR PEOPLE": "MADAM JANE",
    "NUMERACY": "SIR SAMMY",
}

# Section score caps used when composing an exam total.
SECTION_A_MAX = 40
SECTION_B_MAX = 60
SCIENCE_SECTION_B_MAX = 100
SCIENCE_SCALE_DIVISOR = 1.4
SINGLE_SCORE_MAX = 100


def is_core_subject(subject: str) -> bool:
    return subject in CORE_SUBJECTS


def is_early_childhood(department: Optional[str]) -> bool:
    return department in EARLY_CHILDHOOD_DEPARTMENTS


def get_subjects_for_department(
    department: Optional[str], custom_subjects: Optional[List[str]] = None
) -> List[str]:
    """Subject list for a department, with any custom subjects appended."""
    if department in EARLY_CHILDHOOD_DEPARTMENTS:
        subjects = list(EARLY_CHILDHOOD_SUBJECTS)
    elif department in BASIC_DEPARTMENTS:
        subjects = list(BASIC_SUBJECTS)
    else:
        # Unknown departments get the JHS list.
        subjects = list(JHS_SUBJECTS)

    for subject in custom_subjects or []:
        if subject and subject not in subjects:
            subjects.append(subject)
    return subjects


def resolve_facilitator(
    subject: str,
    facilitator_map: Optional[Dict[str, str]] = None,
    staff_list: Optional[List[Dict[str, Any]]] = None,
) -> str:
    """
    Name of the facilitator teaching `subject`.

    The staff roster is scanned in order and the first member listing the
    subject wins; the plain subject map is only a fallback.
    """
    for staff in staff_list or []:
        if subject in (staff.get("subjects") or []):
            return staff.get("name") or UNASSIGNED_FACILITATOR
    return (facilitator_map or {}).get(subject) or UNASSIGNED_FACILITATOR


def _clamp(value, upper: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(v):
        return 0.0
    return max(0.0, min(float(upper), v))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compose_exam_score(
    section_a, section_b, subject: str, department: Optional[str] = None
) -> Dict[str, Any]:
    """
    Combine section A (objective) and section B (theory) marks into a total.

    JHS Science carries a section B out of 100 and the sum is scaled back
    to 100 by dividing by 1.4. Early-childhood classes enter a single
    score, carried in section B.
    """
    if is_early_childhood(department):
        single = _clamp(section_b, SINGLE_SCORE_MAX)
        return {"section_a": 0, "section_b": single, "total": single}

    scaled_science = subject == "Science" and department == JUNIOR_HIGH
    a = _clamp(section_a, SECTION_A_MAX)
    b = _clamp(section_b, SCIENCE_SECTION_B_MAX if scaled_science else SECTION_B_MAX)

    raw_total = a + b
    if scaled_science:
        total = _round_half_up(raw_total / SCIENCE_SCALE_DIVISOR)
    else:
        total = _round_half_up(raw_total)
    return {"section_a": a, "section_b": b, "total": total}
