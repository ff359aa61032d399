"""
Application Email Composer

Builds the email sent to an employer for one job:
- guesses a careers@ address from the employer's website or name
- renders the candidate profile as an HTML application letter
- attaches the CV when one was uploaded
"""

import re
import html
import base64
import binascii
from typing import Optional, List
from urllib.parse import urlparse

from autoapply.core.schemas import Attachment, CandidateProfile, JobListing
from autoapply.services.mailer import OutgoingEmail


def derive_employer_email(employer_name: Optional[str],
                          employer_website: Optional[str] = None) -> Optional[str]:
    """
    Guess a careers mailbox for an employer.

    The address is never verified; it is a best-effort guess. Returns
    None when neither the website nor the name gives a usable domain.
    """
    website = (employer_website or "").strip()
    if website:
        url = website if website.startswith("http") else f"https://{website}"
        try:
            host = urlparse(url).hostname
        except ValueError:
            host = None
        # urlparse keeps spaces inside the host
        if host and not re.search(r"\s", host):
            if host.startswith("www."):
                host = host[len("www."):]
            return f"careers@{host}"

    clean_name = re.sub(r"[^a-z0-9\s]", "", (employer_name or "").lower())
    clean_name = re.sub(r"\s+", "", clean_name)
    if len(clean_name) > 2:
        return f"careers@{clean_name}.com"

    return None


def default_attachment_name(profile: CandidateProfile) -> str:
    stem = re.sub(r"\s+", "_", profile.name)
    return f"{stem}_CV.pdf"


def attachment_from_profile(profile: CandidateProfile) -> Optional[Attachment]:
    """
    Rebuild the uploaded CV carried on the profile, if any.

    Raises:
        ValueError: the base64 payload is corrupt
    """
    if not profile.cv_file_base64:
        return None
    try:
        content = base64.b64decode(profile.cv_file_base64, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid CV attachment: {e}") from e
    return Attachment(
        filename=profile.cv_file_name or default_attachment_name(profile),
        content=content
    )


def build_subject(job: JobListing, profile: CandidateProfile) -> str:
    return f"Job Application: {job.job_title} - {profile.name}"


# Inline styles for the letter
_LABEL_CELL = ("padding: 8px 12px; background: #f8f9fa; border: 1px solid #e5e7eb; "
               "font-weight: bold; width: 140px;")
_VALUE_CELL = "padding: 8px 12px; border: 1px solid #e5e7eb;"
_SKILL_TAG = ("display: inline-block; background: #eef2ff; color: #3b6cf5; padding: 4px 10px; "
              "border-radius: 12px; margin: 2px 4px 2px 0; font-size: 13px;")


def build_email_html(profile: CandidateProfile, job_title: str, employer_name: str) -> str:
    """Render the application letter. Optional rows and sections are omitted when empty."""
    e = html.escape
    name = e(profile.name)

    rows = [("Full Name", profile.name), ("Email", profile.email)]
    if profile.phone:
        rows.append(("Phone", profile.phone))
    if profile.experience:
        rows.append(("Experience", profile.experience))
    rows.append(("Target Role", profile.job_title))

    table_rows = "\n".join(
        f'<tr><td style="{_LABEL_CELL}">{label}</td><td style="{_VALUE_CELL}">{e(value)}</td></tr>'
        for label, value in rows
    )

    summary_block = (
        f"<p><strong>Professional Summary:</strong><br/>{e(profile.summary)}</p>"
        if profile.summary else ""
    )

    skills_block = ""
    if profile.skills:
        tags = "".join(f'<span style="{_SKILL_TAG}">{e(s)}</span>' for s in profile.skills)
        skills_block = f"<p><strong>Key Skills:</strong></p>\n<p>{tags}</p>"

    contact = [e(profile.email)]
    if profile.phone:
        contact.append(e(profile.phone))
    contact_lines = "<br/>".join(contact)

    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; color: #1a1a2e;">
  <h2 style="color: #3b6cf5; margin-bottom: 4px;">Job Application: {e(job_title)}</h2>
  <p style="color: #666; margin-top: 0;">via AutoApply UAE</p>
  <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 20px 0;" />

  <p>Dear Hiring Team at <strong>{e(employer_name)}</strong>,</p>

  <p>I am writing to express my strong interest in the <strong>{e(job_title)}</strong> position.
  Please find my CV attached for your review.</p>

  {summary_block}

  <table style="width: 100%; border-collapse: collapse; margin: 16px 0;">
{table_rows}
  </table>

  {skills_block}

  <p>I look forward to hearing from you regarding this opportunity.
  I am available for an interview at your earliest convenience.</p>

  <p>Best regards,<br/><strong>{name}</strong><br/>
  {contact_lines}</p>

  <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 20px 0;" />
  <p style="font-size: 11px; color: #999;">
    This application was sent via AutoApply UAE - Automated Job Application Platform
  </p>
</div>
"""


def compose_application(job: JobListing, profile: CandidateProfile, to_address: str,
                        from_address: str,
                        attachment: Optional[Attachment] = None) -> OutgoingEmail:
    """Build the outgoing email for one job."""
    attachments: List[Attachment] = [attachment] if attachment is not None else []

    return OutgoingEmail(
        from_address=from_address,
        to=to_address,
        reply_to=profile.email,
        subject=build_subject(job, profile),
        html=build_email_html(profile, job.job_title, job.employer_name),
        attachments=attachments
    )
