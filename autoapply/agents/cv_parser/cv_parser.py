"""
CV Parser

Turns an uploaded CV into a CandidateProfile:
1. Document decoding - PDF (PyPDF2), DOCX (python-docx) or plain text
2. Field extraction - one heuristic extractor per profile field
3. Profile assembly - extractor outputs combined into one record

Extraction is pure and never fails; only decoding can raise.
"""

import io
import base64
import logging
from typing import Optional, Tuple

from autoapply.core.config import ParserSettings, get_settings
from autoapply.core.errors import DocumentDecodeError
from autoapply.core.schemas import CandidateProfile
from autoapply.agents.cv_parser.vocabulary import Vocabulary, DEFAULT_VOCABULARY
from autoapply.agents.cv_parser.extractors import (
    extract_email, extract_phone, extract_name, extract_skills,
    extract_job_title, extract_experience, extract_summary
)

logger = logging.getLogger(__name__)


class CVParser:
    """Decodes CV documents and extracts profile fields from them."""

    TEXT_EXTENSIONS = ("txt", "md")
    DOCUMENT_EXTENSIONS = ("pdf", "docx")
    PDF_MAGIC = b"%PDF"

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                 parser_settings: Optional[ParserSettings] = None):
        """
        Initialize the parser.

        Args:
            vocabulary: Keyword lists for skills, titles and sections
            parser_settings: Output limits; defaults to application settings
        """
        self.vocabulary = vocabulary
        self.settings = parser_settings or get_settings().parser

    # =========================================================================
    # Document Decoding
    # =========================================================================

    def extract_text(self, content: bytes, filename: str) -> str:
        """
        Extract plain text from an uploaded CV file.

        The filename extension picks the decoder. Files whose extension is
        missing or unknown are still read as PDF when they start with the
        PDF header.

        Raises:
            DocumentDecodeError: unsupported type or unreadable document
        """
        ext = (filename or "").lower().rsplit(".", 1)[-1]
        if ext not in self.TEXT_EXTENSIONS + self.DOCUMENT_EXTENSIONS \
                and (content or b"").startswith(self.PDF_MAGIC):
            ext = "pdf"

        if ext in self.TEXT_EXTENSIONS:
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DocumentDecodeError(f"Text file is not valid UTF-8: {e}") from e

        if ext == "pdf":
            try:
                from PyPDF2 import PdfReader
                reader = PdfReader(io.BytesIO(content))
                text = ""
                for page in reader.pages:
                    text += (page.extract_text() or "") + "\n"
                return text
            except Exception as e:
                logger.error(f"PDF extraction error: {e}")
                raise DocumentDecodeError(
                    "Failed to parse CV. Please ensure the file is a valid PDF."
                ) from e

        if ext == "docx":
            try:
                from docx import Document
                doc = Document(io.BytesIO(content))
                text = ""
                for para in doc.paragraphs:
                    text += para.text + "\n"
                return text
            except Exception as e:
                logger.error(f"DOCX extraction error: {e}")
                raise DocumentDecodeError(
                    "Failed to parse CV. Please ensure the file is a valid DOCX."
                ) from e

        raise DocumentDecodeError(f"Unsupported file type: {ext}")

    # =========================================================================
    # Profile Assembly
    # =========================================================================

    def parse_text(self, text: str) -> CandidateProfile:
        """Run every extractor over the text and build a profile."""
        return CandidateProfile(
            name=extract_name(text),
            email=extract_email(text),
            phone=extract_phone(text),
            skills=extract_skills(text, self.vocabulary, limit=self.settings.max_skills),
            job_title=extract_job_title(text, self.vocabulary),
            experience=extract_experience(text, self.vocabulary),
            summary=extract_summary(
                text, self.vocabulary, max_chars=self.settings.summary_max_chars
            )
        )

    def parse_document(self, content: bytes, filename: str) -> Tuple[CandidateProfile, str]:
        """
        Decode a CV and extract its profile.

        The original file is attached to the profile so the apply step
        can send it along with each application.

        Returns:
            (profile, decoded text)
        """
        text = self.extract_text(content, filename)
        profile = self.parse_text(text)

        profile = profile.copy(update={
            "cv_file_base64": base64.b64encode(content).decode("ascii"),
            "cv_file_name": filename
        })

        logger.info(
            f"Parsed CV {filename}: name={profile.name!r}, "
            f"{len(profile.skills)} skills, title={profile.job_title!r}"
        )
        return profile, text
