"""
Keyword lists used by the CV field extractors.

Kept as data so callers (and tests) can swap in their own lists.
"""

from dataclasses import dataclass, field
from typing import Dict, List


KNOWN_SKILLS = [
    "React", "TypeScript", "JavaScript", "Node.js", "NodeJs", "Python", "Java",
    "C++", "C#", "Go", "Rust", "Swift", "Kotlin", "Ruby", "PHP", "SQL", "MySQL",
    "PostgreSQL", "MongoDB", "Redis", "Docker", "Kubernetes", "AWS", "Azure",
    "GCP", "Firebase", "Git", "GraphQL", "REST", "HTML", "CSS", "SASS", "LESS",
    "Tailwind", "Bootstrap", "Material UI", "Next.js", "Vue.js", "Angular",
    "Svelte", "Express", "Django", "Flask", "Spring", "Laravel", "Rails",
    "Flutter", "React Native", "TDD", "CI/CD", "Agile", "Scrum", "Figma",
    "Photoshop", "Machine Learning", "AI", "Data Science", "DevOps",
    "Microservices", "REST API", "ESS", "jQuery", "Yelp API", "Spotify API",
    "OAuth", "EmailJS", "Front-end", "Back-end", "Full-stack",
    "Agile software development", "Test driven development",
    "Code structure and architecture", "Front-end and back-end web",
]

# Spelling variants reported under their canonical name
SKILL_ALIASES = {
    "NodeJs": "Node.js",
}

JOB_TITLES = [
    "Software Engineer", "Frontend Developer", "Backend Developer",
    "Full Stack Developer", "Web Developer", "Mobile Developer",
    "Data Scientist", "Data Engineer", "DevOps Engineer", "Cloud Engineer",
    "Machine Learning Engineer", "QA Engineer", "Product Manager",
    "UX Designer", "UI Designer", "Technical Support", "System Administrator",
    "Database Administrator", "Network Engineer", "Security Engineer",
    "Solutions Architect", "Technical Lead", "Engineering Manager",
    "Junior Web Developer", "Senior Developer", "Technical Support Assistant",
]

# Words counted inside an employment history section
ROLE_KEYWORDS = [
    "developer", "engineer", "assistant", "manager", "lead", "designer", "analyst",
]

SUMMARY_HEADERS = ["summary", "profile", "about", "objective"]

# Section words that end a summary paragraph
SUMMARY_TERMINATORS = ["employment", "experience", "education", "skills"]

# Section words that end an employment history section
EMPLOYMENT_TERMINATORS = ["education", "certif", "project"]


@dataclass
class Vocabulary:
    """Bundle of keyword lists consulted by the extractors."""

    skills: List[str] = field(default_factory=lambda: list(KNOWN_SKILLS))
    skill_aliases: Dict[str, str] = field(default_factory=lambda: dict(SKILL_ALIASES))
    job_titles: List[str] = field(default_factory=lambda: list(JOB_TITLES))
    role_keywords: List[str] = field(default_factory=lambda: list(ROLE_KEYWORDS))
    summary_headers: List[str] = field(default_factory=lambda: list(SUMMARY_HEADERS))
    summary_terminators: List[str] = field(
        default_factory=lambda: list(SUMMARY_TERMINATORS)
    )
    employment_terminators: List[str] = field(
        default_factory=lambda: list(EMPLOYMENT_TERMINATORS)
    )


DEFAULT_VOCABULARY = Vocabulary()
