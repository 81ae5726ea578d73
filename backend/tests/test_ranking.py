"""
Tests for core/ranking.py — positional class ranking.
"""

import os
import sys
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.ranking import class_average_aggregate, rank_students


def _student(sid, aggregate, total):
    return {"id": sid, "best_six_aggregate": aggregate, "total_score": total, "rank": None}


class TestRankStudents:

    def test_aggregate_then_total(self):
        ranked = rank_students([
            _student("a", 12, 300),
            _student("b", 10, 250),
            _student("c", 12, 310),
        ])
        assert [s["id"] for s in ranked] == ["b", "c", "a"]
        assert [s["rank"] for s in ranked] == [1, 2, 3]

    def test_full_ties_get_consecutive_ranks(self):
        ranked = rank_students([
            _student("a", 12, 300),
            _student("b", 10, 250),
            _student("c", 12, 300),
            _student("d", 12, 320),
        ])
        ranks = {s["id"]: s["rank"] for s in ranked}
        assert ranks == {"b": 1, "d": 2, "a": 3, "c": 4}

    def test_input_is_not_mutated(self):
        students = [_student("a", 20, 100), _student("b", 10, 100)]
        rank_students(students)
        assert [s["rank"] for s in students] == [None, None]
        assert [s["id"] for s in students] == ["a", "b"]

    def test_empty(self):
        assert rank_students([]) == []


class TestClassAverageAggregate:

    def test_mean(self):
        assert class_average_aggregate([_student("a", 10, 0), _student("b", 21, 0)]) == pytest.approx(15.5)

    def test_empty(self):
        assert class_average_aggregate([]) == 0
