"""
Test UAE job search.

Run with: python -m pytest autoapply/tests/test_discovery.py -v
"""

import pytest
import requests

from autoapply.core.config import JobSearchSettings
from autoapply.core.errors import ConfigurationError, ListingSourceError
from autoapply.core.schemas import CandidateProfile
from autoapply.agents.discovery.discovery_agent import JSearchClient, build_search_query


class FakeResponse:
    def __init__(self, status_code: int, body=None, text: str = ""):
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeSession:
    def __init__(self, response=None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


SETTINGS = JobSearchSettings(rapidapi_key="test-key")

LISTING = {
    "job_id": "abc123",
    "job_title": "Frontend Developer",
    "employer_name": "Acme",
    "employer_website": None,
    "job_apply_link": "https://acme.com/jobs/1",
    "job_city": "Dubai",
    "job_is_remote": False,
}


# ============================================================================
# Search Query
# ============================================================================

def test_typed_query_wins():
    profile = CandidateProfile(job_title="Data Analyst")
    assert build_search_query("nurse", profile) == "nurse"


def test_query_from_job_title():
    assert build_search_query("", CandidateProfile(job_title="Data Analyst")) == "Data Analyst"


def test_query_from_skills():
    profile = CandidateProfile(skills=["Python", "SQL", "Excel", "Tableau"])
    assert build_search_query(None, profile) == "Python, SQL, Excel"


def test_query_default():
    assert build_search_query(None, CandidateProfile()) == "jobs"
    assert build_search_query(None) == "jobs"


# ============================================================================
# JSearch Client
# ============================================================================

def test_missing_key():
    with pytest.raises(ConfigurationError):
        JSearchClient(JobSearchSettings(rapidapi_key=None), session=FakeSession())


def test_search_params():
    session = FakeSession(FakeResponse(200, {"data": [LISTING]}))
    client = JSearchClient(SETTINGS, session=session)

    client.search("web developer", page=2, employment_type="FULLTIME", date_posted="week")

    url, kwargs = session.calls[0]
    assert url == "https://jsearch.p.rapidapi.com/search"
    assert kwargs["params"] == {
        "query": "web developer in UAE",
        "page": "2",
        "num_pages": "1",
        "date_posted": "week",
        "country": "ae",
        "employment_types": "FULLTIME",
    }
    assert kwargs["headers"]["x-rapidapi-key"] == "test-key"
    assert kwargs["headers"]["x-rapidapi-host"] == "jsearch.p.rapidapi.com"


def test_search_defaults():
    session = FakeSession(FakeResponse(200, {"data": []}))
    JSearchClient(SETTINGS, session=session).search(None)

    params = session.calls[0][1]["params"]
    assert params["query"] == "software developer in UAE"
    assert params["page"] == "1"
    assert params["date_posted"] == "all"
    assert "employment_types" not in params


def test_search_results_keep_extra_fields():
    session = FakeSession(FakeResponse(200, {"data": [LISTING]}))
    jobs = JSearchClient(SETTINGS, session=session).search("developer")

    assert len(jobs) == 1
    job = jobs[0]
    assert job.job_id == "abc123"
    assert job.employer_website is None
    assert job.dict()["job_city"] == "Dubai"


def test_search_null_data():
    session = FakeSession(FakeResponse(200, {"status": "OK", "data": None}))
    assert JSearchClient(SETTINGS, session=session).search("developer") == []


def test_search_api_error():
    session = FakeSession(FakeResponse(429, text="Too many requests"))

    with pytest.raises(ListingSourceError) as exc_info:
        JSearchClient(SETTINGS, session=session).search("developer")

    assert exc_info.value.status_code == 429
    assert str(exc_info.value) == "API error: 429"


def test_search_unreachable():
    session = FakeSession(error=requests.Timeout("timed out"))

    with pytest.raises(ListingSourceError) as exc_info:
        JSearchClient(SETTINGS, session=session).search("developer")

    assert exc_info.value.status_code == 502


def test_search_non_json_body():
    session = FakeSession(FakeResponse(200, text="<html>maintenance</html>"))

    with pytest.raises(ListingSourceError) as exc_info:
        JSearchClient(SETTINGS, session=session).search("developer")

    assert exc_info.value.status_code == 502


def test_search_unexpected_json_shape():
    for body in (["not", "an", "object"], {"data": ["not a listing"]}, {"data": 42}):
        session = FakeSession(FakeResponse(200, body))

        with pytest.raises(ListingSourceError) as exc_info:
            JSearchClient(SETTINGS, session=session).search("developer")

        assert exc_info.value.status_code == 502
