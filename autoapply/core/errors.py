"""
Exceptions raised across AutoApply.

Only request-level failures are exceptions. Extraction misses and
per-job send failures are turned into data by the components that
hit them.
"""

from typing import Optional


class AutoApplyError(Exception):
    """Base class for all AutoApply errors."""


class DocumentDecodeError(AutoApplyError):
    """The uploaded CV could not be turned into text."""


class ConfigurationError(AutoApplyError):
    """A collaborator is missing credentials or settings."""


class DispatchRejected(AutoApplyError, ValueError):
    """A dispatch request was missing its jobs or profile."""


class ListingSourceError(AutoApplyError):
    """The job listing API failed or returned a non-success status."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API error: {status_code}")
