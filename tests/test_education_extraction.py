"""
Tests for education entry extraction.

Degree lines open entries; institution, grade and year lines that follow
fill in whatever the degree line did not carry.
"""

from app.core.education_parser import EducationExtractor
from app.core.schemas import EducationEntry


def test_single_line_degree_with_grade_below():
    text = "B.Tech in Computer Science, XYZ Institute of Technology, 2020\nCGPA: 8.5/10"
    assert EducationExtractor().extract(text) == [
        EducationEntry(
            qualification="B.Tech",
            field_of_study="Computer Science",
            institution="XYZ Institute of Technology",
            graduation_year="2020",
            grade_or_gpa="8.5/10",
        )
    ]


def test_multi_line_entries():
    text = "\n".join([
        "Master of Science in Data Science",
        "Stanford University",
        "2022",
        "Bachelor of Engineering (Mechanical)",
        "ABC College",
        "2016 - 2020",
        "Percentage: 82%",
    ])
    entries = EducationExtractor().extract(text)
    assert len(entries) == 2

    masters, bachelors = entries
    assert masters.qualification == "Master's"
    assert masters.field_of_study == "Data Science"
    assert masters.institution == "Stanford University"
    assert masters.graduation_year == "2022"

    assert bachelors.qualification == "Bachelor's"
    assert bachelors.field_of_study == "Mechanical"
    assert bachelors.institution == "ABC College"
    assert bachelors.graduation_year == "2020"
    assert bachelors.grade_or_gpa == "82%"


def test_last_year_on_degree_line_wins():
    entries = EducationExtractor().extract("MBA, Delhi University, 2018 - 2020")
    assert entries[0].qualification == "MBA"
    assert entries[0].graduation_year == "2020"
    assert entries[0].institution == "Delhi University"


def test_degree_from_institution():
    entries = EducationExtractor().extract("Diploma from National Academy of Arts")
    assert entries[0].qualification == "Diploma"
    assert entries[0].institution == "National Academy of Arts"


def test_lines_before_first_degree_are_ignored():
    text = "Stanford University\nPhD in Physics\n2021"
    entries = EducationExtractor().extract(text)
    assert len(entries) == 1
    assert entries[0].qualification == "PhD"
    assert entries[0].institution == ""


def test_no_degree_no_entries():
    assert EducationExtractor().extract("Python, Docker\nSenior Developer at Acme") == []
