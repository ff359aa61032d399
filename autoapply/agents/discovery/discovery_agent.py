"""
Discovery Agent

Finds UAE job listings through the JSearch API on RapidAPI.

Every query is scoped to the UAE (country code and an "in UAE" suffix)
and fetches a single page of results per call.
"""

import logging
from typing import List, Optional

import requests

from autoapply.core.schemas import CandidateProfile, JobListing
from autoapply.core.config import JobSearchSettings, get_settings
from autoapply.core.errors import ConfigurationError, ListingSourceError

logger = logging.getLogger(__name__)


def build_search_query(query: Optional[str], profile: Optional[CandidateProfile] = None) -> str:
    """
    Pick the search text for a job search.

    A typed query wins; otherwise the profile's job title, then its
    first three skills.
    """
    if query:
        return query
    if profile is not None and profile.job_title:
        return profile.job_title
    if profile is not None and profile.skills:
        return ", ".join(profile.skills[:3])
    return "jobs"


class JSearchClient:
    """
    Client for the JSearch job listing API.

    API: https://jsearch.p.rapidapi.com/search
    """

    def __init__(self, search_settings: Optional[JobSearchSettings] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            search_settings: API credentials and defaults
            session: Optional requests session (shared connection pool)

        Raises:
            ConfigurationError: no RapidAPI key configured
        """
        self.settings = search_settings or get_settings().job_search
        if not self.settings.rapidapi_key:
            raise ConfigurationError("API key not configured")

        self.session = session or requests.Session()
        self.api_url = f"https://{self.settings.api_host}/search"

    def _build_params(self, query: str, page: int, employment_type: Optional[str],
                      date_posted: Optional[str]) -> dict:
        params = {
            "query": f"{query} {self.settings.location_suffix}".strip(),
            "page": str(page),
            "num_pages": "1",
            "date_posted": date_posted or "all",
            "country": self.settings.country,
        }
        if employment_type:
            params["employment_types"] = employment_type
        return params

    def search(self, query: Optional[str], page: int = 1,
               employment_type: Optional[str] = None,
               date_posted: Optional[str] = "all") -> List[JobListing]:
        """
        Search for jobs.

        Args:
            query: Free text such as a job title; defaults to the configured query
            page: 1-based result page
            employment_type: JSearch filter, e.g. FULLTIME or CONTRACTOR
            date_posted: all, today, 3days, week or month

        Returns:
            Job listings in the order the API returned them

        Raises:
            ListingSourceError: the API failed, could not be reached, or
                answered with a body that is not a listing page
        """
        query = query or self.settings.default_query
        params = self._build_params(query, page, employment_type, date_posted)
        headers = {
            "x-rapidapi-key": self.settings.rapidapi_key,
            "x-rapidapi-host": self.settings.api_host,
        }

        logger.info(f"JSearch: query={params['query']!r}, page={page}")

        try:
            response = self.session.get(
                self.api_url,
                params=params,
                headers=headers,
                timeout=self.settings.timeout
            )
        except requests.RequestException as e:
            logger.error(f"JSearch: Request failed - {e}")
            raise ListingSourceError(502, str(e)) from e

        if not response.ok:
            logger.error(f"JSearch API error: {response.status_code} {response.text[:200]}")
            raise ListingSourceError(response.status_code, response.text)

        try:
            data = response.json()
            jobs = [JobListing(**job_data) for job_data in data.get("data") or []]
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"JSearch: Unreadable response - {e}")
            raise ListingSourceError(502, f"Unreadable response: {e}") from e

        logger.info(f"JSearch: Found {len(jobs)} jobs")
        return jobs
