"""Comprehensive tests for skills extraction."""

from app.core.config import EngineConfig
from app.core.skills_extractor import SkillsExtractor


def test_skills_in_order_of_appearance():
    skills = SkillsExtractor().extract("Python, JavaScript, Java and Docker")
    assert skills == ["Python", "JavaScript", "Java", "Docker"]


def test_java_not_matched_inside_javascript():
    assert SkillsExtractor().extract("JavaScript only") == ["JavaScript"]


def test_punctuated_names():
    skills = SkillsExtractor().extract("C++, C#, Node.js and CI/CD pipelines")
    assert skills == ["C++", "C#", "Node.js", "CI/CD"]


def test_canonical_casing_and_dedup():
    skills = SkillsExtractor().extract("python, PYTHON, mongodb, Python")
    assert skills == ["Python", "MongoDB"]


def test_short_ambiguous_names_are_case_sensitive():
    assert SkillsExtractor().extract("Ready to go the extra mile") == []
    assert SkillsExtractor().extract("Services written in Go") == ["Go"]


def test_aliases_map_to_canonical_name():
    assert SkillsExtractor().extract("Deployed on k8s with postgres") == ["Kubernetes", "PostgreSQL"]


def test_sql_not_matched_inside_mysql():
    assert SkillsExtractor().extract("MySQL") == ["MySQL"]


def test_longer_name_wins_at_same_offset():
    skills = SkillsExtractor().extract("React Native apps")
    assert skills[0] == "React Native"


def test_custom_dictionary():
    cfg = EngineConfig(skills={"tools": ["Terraform", "Ansible"]}, skill_aliases={})
    assert SkillsExtractor(cfg).extract("Ansible then Terraform, then Python") == ["Ansible", "Terraform"]


def test_empty_text():
    assert SkillsExtractor().extract("") == []
