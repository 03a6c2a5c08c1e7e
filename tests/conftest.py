"""
Pytest configuration and shared fixtures.
"""

import pytest
import requests
from typing import Any, Dict, List

from careersarthi.logger import get_logger, reset_logger
from careersarthi.models import JobPosting


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with console output off."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Returns queued responses (or raises queued exceptions) per URL."""

    def __init__(self, routes: Dict[str, List[Any]]):
        self.routes = {k: list(v) for k, v in routes.items()}
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        queue = self.routes.get(url)
        if not queue:
            raise requests.exceptions.ConnectionError(f"no route for {url}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_session_factory():
    return FakeSession


@pytest.fixture
def fake_response_factory():
    return FakeResponse


@pytest.fixture
def adzuna_result() -> Dict[str, Any]:
    """One entry of an Adzuna search ``results`` array."""
    return {
        "title": "Senior <strong>Software Engineer</strong>",
        "company": {"display_name": "Acme Corp"},
        "location": {"area": ["UK", "London"], "display_name": "London"},
        "description": "We build with <b>React</b> and TypeScript. Software engineer wanted.",
        "redirect_url": "https://www.adzuna.co.uk/jobs/details/12345?se=abc",
    }


@pytest.fixture
def matching_posting() -> JobPosting:
    return JobPosting(
        title="Senior Software Engineer",
        company_name="Acme Corp",
        location="London",
        description="The software engineer on this team uses React and TypeScript daily.",
        url="https://example.com/jobs/1",
    )


@pytest.fixture
def unrelated_posting() -> JobPosting:
    return JobPosting(
        title="Marketing Manager",
        company_name="Beta Ltd",
        location="Remote",
        description="No tech skills required",
        url="https://example.com/jobs/2",
    )
