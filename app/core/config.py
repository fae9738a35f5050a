"""
Engine configuration: keyword dictionaries, regex tables and layout thresholds.

Everything the heuristics match against lives here so deployments can tune it
(and tests can use tiny fixtures) without touching extractor code. The
defaults mirror the dictionaries the résumé form has always shipped with.
"""

import json
from pathlib import Path
from typing import Dict, List, Union

from pydantic import BaseModel, Field


class DegreePattern(BaseModel):
    label: str = Field(..., description="Canonical qualification label")
    pattern: str = Field(..., description="Case-insensitive regex")


# Order matters: the first section whose keywords match a header wins, so the
# broad experience keywords ("work", "professional") are checked last.
DEFAULT_SECTION_KEYWORDS: Dict[str, List[str]] = {
    "summary": ["summary", "objective"],
    "education": ["education", "academic", "qualification"],
    "skills": ["skills", "technologies", "competencies"],
    "projects": ["projects", "portfolio"],
    "certifications": ["certifications", "certificates", "credentials", "licenses"],
    "achievements": ["achievements", "awards", "honors"],
    "experience": ["experience", "work", "employment", "career", "professional"],
}

DEFAULT_DEGREE_PATTERNS: List[DegreePattern] = [
    DegreePattern(label="Bachelor's", pattern=r"\bbachelor(?:'s|s)?\b"),
    DegreePattern(label="Master's", pattern=r"\bmaster(?:'s|s)?\b"),
    DegreePattern(label="B.Tech", pattern=r"\bb\.?\s?tech\b"),
    DegreePattern(label="M.Tech", pattern=r"\bm\.?\s?tech\b"),
    DegreePattern(label="B.Sc", pattern=r"\bb\.?\s?sc\b"),
    DegreePattern(label="M.Sc", pattern=r"\bm\.?\s?sc\b"),
    DegreePattern(label="MBA", pattern=r"\bm\.?\s?b\.?\s?a\b"),
    DegreePattern(label="PhD", pattern=r"\bph\.?\s?d\b|\bdoctor(?:ate| of philosophy)\b"),
    DegreePattern(label="Diploma", pattern=r"\bdiploma\b"),
]

DEFAULT_SKILLS: Dict[str, List[str]] = {
    "languages": [
        "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "PHP", "Ruby",
        "Go", "Rust", "Swift", "Kotlin",
    ],
    "frameworks": [
        "React", "Angular", "Vue", "Node.js", "Express", "Django", "Flask", "Spring",
        "HTML5", "CSS3", "HTML", "CSS", "Sass", "Bootstrap", "Tailwind", "GraphQL", "REST",
    ],
    "databases": ["MySQL", "PostgreSQL", "MongoDB", "Redis", "SQLite", "Oracle", "DynamoDB"],
    "cloud_devops": [
        "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Jenkins", "Git", "Linux", "CI/CD", "Jira",
    ],
    "mobile": ["React Native", "Flutter", "Android", "iOS"],
    "data_analytics": [
        "SQL", "Excel", "Power BI", "Tableau", "Pandas", "NumPy", "Machine Learning", "Data Science",
    ],
    "design": ["Figma", "Photoshop", "UI/UX"],
    "soft_skills": ["Agile", "Scrum", "Leadership", "Communication", "Teamwork", "Problem Solving"],
}

DEFAULT_SKILL_ALIASES: Dict[str, List[str]] = {
    "Node.js": ["nodejs"],
    "PostgreSQL": ["postgres"],
    "Kubernetes": ["k8s"],
    "React": ["reactjs", "react.js"],
    "Vue": ["vuejs", "vue.js"],
}

DEFAULT_PHONE_PATTERNS: List[str] = [
    # Indian mobile
    r"(?<![\d+])(?:\+91[\s-]?)?[6-9]\d{9}(?!\d)",
    # North American
    r"(?<![\d+])(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)",
    # Labelled numbers
    r"(?:phone|mobile|tel|contact)[\s:.]*(?P<number>\+?\d{1,3}[\s\-()]?\d{3,4}[\s\-()]?\d{3,4}[\s-]?\d{3,4})",
    # Generic international
    r"(?<!\d)\+?\d{1,3}[\s\-()]?\d{3,4}[\s\-()]?\d{3,4}[\s-]?\d{3,4}(?!\d)",
]

DEFAULT_KNOWN_CITIES: List[str] = [
    "Mumbai", "Delhi", "Bangalore", "Bengaluru", "Chennai", "Hyderabad", "Pune", "Kolkata",
    "Ahmedabad", "Jaipur", "Lucknow", "Noida", "Gurgaon", "New York", "San Francisco",
    "Seattle", "Austin", "Chicago", "Boston", "London", "Toronto", "Sydney", "Singapore",
    "Berlin", "Dubai",
]

DEFAULT_EXPERIENCE_LEVELS: Dict[str, List[str]] = {
    # Checked in this order; first keyword hit wins.
    "lead": ["lead", "principal", "head", "director", "manager", "architect", "vp"],
    "senior": ["senior", "sr", "staff"],
    "entry": ["intern", "trainee", "junior", "jr", "graduate", "fresher", "entry", "apprentice"],
    "mid": ["mid", "associate", "ii", "intermediate"],
}


class EngineConfig(BaseModel):
    """Injectable dictionaries and thresholds for the extraction engine."""

    # Section segmentation
    section_keywords: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_SECTION_KEYWORDS.items()})
    header_max_length: int = 30
    header_max_words: int = 3

    # Layout reconstruction
    line_break_ratio: float = 1.5
    paragraph_break_ratio: float = 3.0
    column_gap: float = 5.0
    default_run_height: float = 12.0
    sort_y_tolerance: float = 1.0

    # Table detection
    table_row_tolerance: float = 5.0
    table_cell_gap: float = 12.0
    table_min_rows: int = 3
    table_min_columns: int = 2

    # Field extractors
    name_scan_lines: int = 5
    name_boilerplate_words: List[str] = Field(default_factory=lambda: [
        "resume", "cv", "curriculum", "vitae", "linkedin", "github", "portfolio",
        "address", "phone", "email",
    ])
    name_title_prefixes: List[str] = Field(default_factory=lambda: ["mr", "ms", "mrs", "dr"])
    name_domains: List[str] = Field(default_factory=lambda: ["com", "org", "net", "edu", "in", "io"])
    phone_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_PHONE_PATTERNS))
    phone_min_digits: int = 10
    phone_max_digits: int = 15
    location_scan_lines: int = 10
    location_keywords: List[str] = Field(default_factory=lambda: [
        "address", "location", "based in", "lives in", "residing in",
    ])
    known_cities: List[str] = Field(default_factory=lambda: list(DEFAULT_KNOWN_CITIES))
    skills: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_SKILLS.items()})
    skill_aliases: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_SKILL_ALIASES.items()})
    # Names that double as everyday words only match with their exact casing
    case_sensitive_skills: List[str] = Field(default_factory=lambda: ["Go", "R", "REST", "Express", "Spring", "Swift", "Excel"])
    degree_patterns: List[DegreePattern] = Field(default_factory=lambda: list(DEFAULT_DEGREE_PATTERNS))
    institution_keywords: List[str] = Field(default_factory=lambda: [
        "university", "college", "institute", "school", "academy",
    ])
    grade_keywords: List[str] = Field(default_factory=lambda: ["cgpa", "gpa", "percentage"])
    experience_levels: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_EXPERIENCE_LEVELS.items()})
    description_min_length: int = 20
    certification_vendors: List[str] = Field(default_factory=lambda: ["AWS", "Microsoft", "Google", "Cisco", "Oracle"])

    # Validator
    min_text_length: int = 100
    garbled_ratio: float = 0.1
    contact_keywords: List[str] = Field(default_factory=lambda: ["email", "phone", "contact"])
    experience_keywords: List[str] = Field(default_factory=lambda: ["experience", "work", "job", "position"])

    def all_skills(self) -> List[str]:
        """Flatten the skill dictionary, keeping category order."""
        out: List[str] = []
        for names in self.skills.values():
            for name in names:
                if name not in out:
                    out.append(name)
        return out


def load_engine_config(path: Union[str, Path]) -> EngineConfig:
    """Load a JSON override file. Keys not present keep their defaults."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    return EngineConfig.model_validate(data)
