"""
Test the CV field extractors.

Run with: python -m pytest autoapply/tests/test_extractors.py -v
"""

import logging

from autoapply.agents.cv_parser.vocabulary import Vocabulary
from autoapply.agents.cv_parser.extractors import (
    extract_email, extract_phone, extract_name, extract_skills,
    extract_job_title, extract_experience, extract_summary
)

logger = logging.getLogger(__name__)


SAMPLE_CV = """JANE
DOE
Junior Web Developer
jane.doe@example.com | +971 50 123 4567
Dubai, UAE

Profile
Motivated web developer with a passion for building accessible
interfaces using React and TypeScript.

Employment History
Junior Web Developer, Acme LLC
Technical Support Assistant, Beta Co

Education
BSc Computer Science

Skills
React, TypeScript, NodeJs, Git, Agile
"""


# ============================================================================
# Email
# ============================================================================

def test_email_found():
    assert extract_email(SAMPLE_CV) == "jane.doe@example.com"


def test_email_returned_unchanged():
    assert extract_email("Contact: first.last+jobs@mail.example.ae today") == "first.last+jobs@mail.example.ae"


def test_email_missing():
    assert extract_email("No address here, just jane at example dot com") == ""
    assert extract_email("") == ""
    assert extract_email(None) == ""


# ============================================================================
# Phone
# ============================================================================

def test_phone_uae_number():
    assert extract_phone(SAMPLE_CV) == "+971 50 123 4567"


def test_phone_with_brackets_and_dashes():
    assert extract_phone("Tel: (04) 555-1234") == "(04) 555-1234"


def test_phone_rejects_short_digit_runs():
    # 6 digits after stripping
    assert extract_phone("Ref 12 3456") == ""


def test_phone_rejects_long_digit_runs():
    assert extract_phone("Account 1234567890123456789") == ""


def test_phone_empty_input():
    assert extract_phone("") == ""


# ============================================================================
# Name
# ============================================================================

def test_name_split_over_two_lines():
    assert extract_name(SAMPLE_CV) == "JANE DOE"


def test_name_on_one_line():
    assert extract_name("Mary-Jane O'Neil\nmary@example.com") == "Mary-Jane O'Neil"


def test_name_skips_contact_lines():
    text = "mary@example.com\n+971501234567\nMary Smith\nData Analyst"
    assert extract_name(text) == "Mary Smith"


def test_name_only_first_five_lines():
    text = "a@b.com\n1234567\nx@y.com\n99999 street\nfoo@bar.org\nJohn Smith"
    assert extract_name(text) == ""


def test_name_rejects_long_lines():
    assert extract_name("This line is clearly far too long to be anyone's name at all") == ""


# ============================================================================
# Skills
# ============================================================================

def test_skills_canonicalises_nodejs():
    skills = extract_skills(SAMPLE_CV)

    assert "Node.js" in skills
    assert "NodeJs" not in skills
    assert len(skills) == len(set(skills))


def test_skills_follow_vocabulary_order():
    skills = extract_skills(SAMPLE_CV)
    found = [s for s in skills if s in ("React", "TypeScript", "Node.js", "Git", "Agile")]

    assert found == ["React", "TypeScript", "Node.js", "Git", "Agile"]


def test_skills_both_spellings_yield_one_entry():
    skills = extract_skills("Node.js and NodeJs", Vocabulary(skills=["Node.js", "NodeJs"]))
    assert skills == ["Node.js"]


def test_skills_capped():
    vocab = Vocabulary(skills=[f"skill{i:02d}" for i in range(30)])
    text = " ".join(vocab.skills)

    skills = extract_skills(text, vocab)
    assert len(skills) == 20
    assert skills[0] == "skill00"


def test_skills_custom_vocabulary():
    vocab = Vocabulary(skills=["Cobol", "Fortran"], skill_aliases={})
    assert extract_skills("Twenty years of FORTRAN and cobol", vocab) == ["Cobol", "Fortran"]


# ============================================================================
# Job Title
# ============================================================================

def test_job_title_vocabulary_order_breaks_ties():
    # "Web Developer" is listed before "Junior Web Developer"
    assert extract_job_title(SAMPLE_CV) == "Web Developer"


def test_job_title_prefers_top_lines():
    lines = ["Sam Lee", "Data Scientist"] + ["filler"] * 12 + ["Product Manager"]
    assert extract_job_title("\n".join(lines)) == "Data Scientist"


def test_job_title_falls_back_to_full_text():
    lines = ["filler"] * 12 + ["Worked as a QA Engineer for years"]
    assert extract_job_title("\n".join(lines)) == "QA Engineer"


def test_job_title_missing():
    assert extract_job_title("Chef and baker") == ""


# ============================================================================
# Experience
# ============================================================================

def test_experience_years():
    assert extract_experience("Over 7+ years of experience in retail") == "7 years"
    assert extract_experience("3 Years Experience") == "3 years"


def test_experience_counts_roles():
    assert extract_experience(SAMPLE_CV) == "2+ roles"


def test_experience_section_runs_to_end():
    text = "Employment history\nLead Designer\nSenior Analyst"
    assert extract_experience(text) == "3+ roles"


def test_experience_missing():
    assert extract_experience("Employment History\nBaker\nEducation") == ""
    assert extract_experience("") == ""


# ============================================================================
# Summary
# ============================================================================

def test_summary_paragraph():
    assert extract_summary(SAMPLE_CV) == (
        "Motivated web developer with a passion for building accessible "
        "interfaces using React and TypeScript."
    )


def test_summary_stops_at_section_word():
    text = "Summary\nFriendly engineer. Skills include Python."
    assert extract_summary(text) == "Friendly engineer."


def test_summary_truncated():
    text = "Objective\n" + "word " * 200 + "\n\nEducation"
    summary = extract_summary(text)

    logger.info(f"Summary length: {len(summary)}")
    assert len(summary) == 303
    assert summary.endswith("...")


def test_summary_missing():
    assert extract_summary("Nothing to see here") == ""


# ============================================================================
# Idempotence
# ============================================================================

def test_extraction_is_repeatable():
    first = (extract_name(SAMPLE_CV), extract_skills(SAMPLE_CV), extract_summary(SAMPLE_CV))
    second = (extract_name(SAMPLE_CV), extract_skills(SAMPLE_CV), extract_summary(SAMPLE_CV))
    assert first == second
