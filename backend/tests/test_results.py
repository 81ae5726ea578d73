"""
Tests for core/results.py — end-to-end cohort analysis and broad-sheet.
"""

import os
import sys
import pandas as pd
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.results import analyze_cohort, broadsheet_columns, build_broadsheet

SUBJECTS = ["Mathematics", "English Language", "Science"]


@pytest.fixture
def cohort():
    return [
        {"id": "A", "name": "Ama", "scores": {"Mathematics": 90, "English Language": 60, "Science": 70}},
        {"id": "B", "name": "Kofi", "scores": {"Mathematics": 80, "English Language": 70, "Science": 80}},
        {"id": "C", "name": "Esi", "scores": {"Mathematics": 70, "English Language": 80, "Science": 60}},
        {"id": "D", "name": "Yaw", "scores": {"Mathematics": 60, "English Language": 90, "Science": 90}},
    ]


class TestAnalyzeCohort:

    def test_statistics(self, cohort):
        result = analyze_cohort(cohort, SUBJECTS)
        assert result["statistics"]["subject_means"] == {s: 75 for s in SUBJECTS}
        assert result["statistics"]["subject_std_devs"]["Mathematics"] == pytest.approx(11.1803, abs=1e-4)

    def test_class_order(self, cohort):
        result = analyze_cohort(cohort, SUBJECTS)
        assert [s["id"] for s in result["students"]] == ["D", "B", "A", "C"]
        assert [s["rank"] for s in result["students"]] == [1, 2, 3, 4]
        assert [s["best_six_aggregate"] for s in result["students"]] == [11, 13, 14, 16]

    def test_class_average_aggregate(self, cohort):
        assert analyze_cohort(cohort, SUBJECTS)["class_average_aggregate"] == pytest.approx(13.5)

    def test_facilitator_stats(self, cohort):
        result = analyze_cohort(cohort, SUBJECTS, facilitator_map={"Mathematics": "SIR SAMMY"})
        stats = result["facilitator_stats"]
        assert {(s["facilitator_name"], s["subject"]) for s in stats} == {
            ("SIR SAMMY", "Mathematics"), ("TBA", "English Language"), ("TBA", "Science"),
        }
        for s in stats:
            # Grade values 2 + 4 + 5 + 7 in every subject.
            assert s["total_grade_value"] == 18
            assert s["performance_percentage"] == 50.0
            assert s["performance_grade"] == "C4"

    def test_default_facilitators_without_map(self, cohort):
        students = analyze_cohort(cohort, SUBJECTS)["students"]
        names = {s["subject"]: s["facilitator"] for s in students[0]["subjects"]}
        assert names == {"Mathematics": "SIR SAMMY", "English Language": "MADAM NANCY", "Science": "SIR JOSHUA"}

    def test_empty_map_disables_defaults(self, cohort):
        students = analyze_cohort(cohort, SUBJECTS, facilitator_map={})["students"]
        assert {s["facilitator"] for s in students[0]["subjects"]} == {"TBA"}

    def test_empty_cohort(self):
        result = analyze_cohort([], SUBJECTS)
        assert result["students"] == []
        assert result["facilitator_stats"] == []
        assert result["class_average_aggregate"] == 0


class TestBuildBroadsheet:

    def test_rows_in_class_order(self, cohort):
        ranked = analyze_cohort(cohort, SUBJECTS)["students"]
        df = build_broadsheet(ranked, SUBJECTS)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == broadsheet_columns(SUBJECTS)
        assert df["name"].tolist() == ["Yaw", "Kofi", "Ama", "Esi"]
        assert df["rank"].tolist() == [1, 2, 3, 4]

    def test_subject_columns(self, cohort):
        ranked = analyze_cohort(cohort, SUBJECTS)["students"]
        df = build_broadsheet(ranked, SUBJECTS)
        top = df.iloc[0]
        assert top["Mathematics"] == 60
        assert top["Mathematics grade"] == "D7"
        assert top["English Language grade"] == "B2"
        assert top["total_score"] == 240
        assert top["category"] == "Merit"

    def test_empty(self):
        df = build_broadsheet([], SUBJECTS)
        assert df.empty
        assert list(df.columns) == broadsheet_columns(SUBJECTS)
