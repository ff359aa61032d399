"""
Pydantic schemas for data validation and API responses.

These schemas ensure:
1. Uploaded CV data and apply requests are validated
2. Job listings from the search API keep their opaque extra fields
3. API responses are consistent
"""

from typing import Optional, List, Sequence
from enum import Enum
from pydantic import BaseModel, Field, validator


# ============================================================================
# Enums
# ============================================================================

class DispatchStatus(str, Enum):
    """Outcome of a single application email."""

    SENT = "sent"
    FAILED = "failed"


# ============================================================================
# Candidate Profile (extracted from CV)
# ============================================================================

class CandidateProfile(BaseModel):
    """Profile fields extracted from an uploaded CV.

    Every field defaults to empty so a CV with no matches still yields
    a usable profile. The wire form uses camelCase aliases.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    skills: List[str] = Field(default_factory=list)
    job_title: str = Field(default="", alias="jobTitle")
    experience: str = ""
    summary: str = ""

    # Original upload, carried so the apply step can attach it
    cv_file_base64: Optional[str] = Field(default=None, alias="cvFileBase64")
    cv_file_name: Optional[str] = Field(default=None, alias="cvFileName")

    class Config:
        populate_by_name = True


# ============================================================================
# Job Data Schemas
# ============================================================================

class JobListing(BaseModel):
    """A job returned by the listing API.

    Only the fields the dispatcher reads are declared; everything else
    the API returns is kept as-is.
    """

    job_id: str = ""
    job_title: str = ""
    employer_name: str = ""
    employer_website: Optional[str] = None
    job_apply_link: str = ""

    @validator("job_id", "job_title", "employer_name", "job_apply_link", pre=True)
    def _none_as_empty(cls, v):
        # The listing API sends null for fields it does not know
        return "" if v is None else str(v)

    class Config:
        extra = "allow"
        frozen = True


class Attachment(BaseModel):
    """A file attached to an outgoing email."""

    filename: str
    content: bytes


# ============================================================================
# Dispatch Schemas
# ============================================================================

class SendOutcome(BaseModel):
    """Reply from an email transport: either a message id or an error."""

    message_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DispatchResult(BaseModel):
    """Outcome of one application email."""

    job_id: str
    job_title: str
    employer_name: str
    apply_link: str
    sent_to: str
    status: DispatchStatus
    message: str
    email_id: Optional[str] = None

    class Config:
        frozen = True


class DispatchSummary(BaseModel):
    """Aggregate counts over a batch of dispatch results."""

    total: int
    successful: int
    failed: int
    applicant: str

    @classmethod
    def from_results(cls, results: Sequence[DispatchResult],
                     applicant: str) -> "DispatchSummary":
        successful = sum(1 for r in results if r.status == DispatchStatus.SENT)
        failed = sum(1 for r in results if r.status == DispatchStatus.FAILED)
        return cls(
            total=len(results),
            successful=successful,
            failed=failed,
            applicant=applicant
        )


class DispatchReport(BaseModel):
    """Summary plus per-job results, in job order."""

    summary: DispatchSummary
    results: List[DispatchResult]


# ============================================================================
# API Request Schemas
# ============================================================================

class ApplyRequest(BaseModel):
    """Body of an apply request."""

    jobs: Optional[List[JobListing]] = None
    cv_profile: Optional[CandidateProfile] = Field(default=None, alias="cvProfile")

    class Config:
        populate_by_name = True
