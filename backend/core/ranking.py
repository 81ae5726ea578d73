"""
ranking.py — Class positions from best-six aggregates.
"""

from typing import Any, Dict, List


def _rank_key(student: Dict[str, Any]):
    # Lower aggregate first, then higher raw total.
    return (student["best_six_aggregate"], -student["total_score"])


def rank_students(processed: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Sort processed students into class order and number them 1..N.

    Ranks are positional: students tied on both aggregate and total still
    get consecutive ranks, in their original relative order.
    """
    ordered = sorted(processed, key=_rank_key)
    return [dict(student, rank=i + 1) for i, student in enumerate(ordered)]


def class_average_aggregate(processed: List[Dict[str, Any]]) -> float:
    if not processed:
        return 0.0
    return sum(s["best_six_aggregate"] for s in processed) / len(processed)
