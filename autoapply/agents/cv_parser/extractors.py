"""
CV Field Extractors

One function per profile attribute. Each takes plain CV text and returns
the best guess for that attribute, or an empty value when nothing matches.
None of them raise on odd input: a CV we cannot read well still produces
a profile the user can correct.
"""

import re
from typing import List, Optional

from autoapply.agents.cv_parser.vocabulary import Vocabulary, DEFAULT_VOCABULARY


EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# Country code, optional area code in brackets, then two digit groups.
# Separators may be spaces, dots or dashes (covers UAE +971 numbers).
# Never matches a slice of a longer digit run.
PHONE_PATTERN = re.compile(
    r"(?<!\d)(?:\+?\d{1,3}[\s.-]?)?\(?\d{2,4}\)?[\s.-]?\d{3,4}[\s.-]?\d{3,4}(?!\d)"
)

NAME_LINE_PATTERN = re.compile(r"[A-Za-z\s'-]{2,30}")

YEARS_PATTERN = re.compile(r"(\d+)\+?\s*years?\s*(?:of\s*)?experience", re.IGNORECASE)

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15
NAME_SCAN_LINES = 5
NAME_MAX_LINE_LENGTH = 40
NAME_MAX_WORDS = 4
TITLE_SCAN_LINES = 10


def _lines(text: str) -> List[str]:
    """Non-empty, trimmed lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def _alternation(words: List[str]) -> str:
    return "|".join(re.escape(w) for w in words)


def extract_email(text: Optional[str]) -> str:
    """First email address in the text."""
    match = EMAIL_PATTERN.search(text or "")
    return match.group(0) if match else ""


def extract_phone(text: Optional[str]) -> str:
    """First phone-like number with a plausible digit count."""
    for match in PHONE_PATTERN.finditer(text or ""):
        candidate = match.group(0)
        digits = re.sub(r"\D", "", candidate)
        if PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
            return candidate.strip()
    return ""


def extract_name(text: Optional[str]) -> str:
    """
    Guess the candidate's name from the top of the CV.

    Names are often split over two lines ("JANE" / "DOE"), so short
    name-like lines are joined until there are at least two words.
    Lines with emails, long digit runs (phones, postcodes) or that are
    too long to be a name are skipped.
    """
    parts: List[str] = []

    for line in _lines(text or "")[:NAME_SCAN_LINES]:
        if "@" in line or re.search(r"\d{5,}", line) or len(line) > NAME_MAX_LINE_LENGTH:
            continue
        if NAME_LINE_PATTERN.fullmatch(line) and len(line.split()) <= NAME_MAX_WORDS:
            parts.append(line)
            if len(" ".join(parts).split()) >= 2:
                break

    return re.sub(r"\s+", " ", " ".join(parts)).strip()


def extract_skills(text: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                   limit: int = 20) -> List[str]:
    """
    Known skills mentioned anywhere in the text.

    Matching is a case-insensitive substring test, so results follow
    vocabulary order rather than the order they appear in the CV.
    """
    text_lower = (text or "").lower()
    found: List[str] = []

    for skill in vocabulary.skills:
        if skill.lower() not in text_lower:
            continue
        canonical = vocabulary.skill_aliases.get(skill, skill)
        if canonical not in found:
            found.append(canonical)

    return found[:limit]


def extract_job_title(text: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """Current job title, preferring titles near the top of the CV."""
    text = text or ""

    for line in _lines(text)[:TITLE_SCAN_LINES]:
        line_lower = line.lower()
        for title in vocabulary.job_titles:
            if title.lower() in line_lower:
                return title

    text_lower = text.lower()
    for title in vocabulary.job_titles:
        if title.lower() in text_lower:
            return title

    return ""


def extract_experience(text: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """
    Experience level as "<N> years" or "<N>+ roles".

    An explicit "5+ years of experience" wins. Otherwise role words
    inside the employment history section are counted.
    """
    text = text or ""

    match = YEARS_PATTERN.search(text)
    if match:
        return f"{match.group(1)} years"

    if not vocabulary.role_keywords:
        return ""

    endings = [re.escape(w) for w in vocabulary.employment_terminators] + [r"\Z"]
    section_pattern = rf"employment\s*history(.*?)(?:{'|'.join(endings)})"
    section = re.search(section_pattern, text, re.IGNORECASE | re.DOTALL)
    if section:
        roles = re.findall(_alternation(vocabulary.role_keywords), section.group(1), re.IGNORECASE)
        if roles:
            return f"{len(roles)}+ roles"

    return ""


def extract_summary(text: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                    max_chars: int = 300) -> str:
    """Paragraph under a Summary/Profile/About/Objective heading."""
    if not vocabulary.summary_headers:
        return ""

    headers = _alternation(vocabulary.summary_headers)
    endings = [r"\n\s*\n"] + [re.escape(w) for w in vocabulary.summary_terminators]
    pattern = rf"(?:{headers})\s*\n+(.*?)(?:{'|'.join(endings)})"

    match = re.search(pattern, text or "", re.IGNORECASE | re.DOTALL)
    if not match:
        return ""

    summary = re.sub(r"\s+", " ", match.group(1).strip())
    if len(summary) > max_chars:
        return summary[:max_chars] + "..."
    return summary
