"""
Adzuna job-search client.

Queries every configured country endpoint for a job title and concatenates
the postings. A country that fails (HTTP error, timeout, bad payload) is
logged and skipped; the rest of the search carries on.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

import requests

from .config import AdzunaConfig
from .logger import StructuredLogger, get_logger
from .models import JobPosting
from .normalize import strip_html
from .retry import RetryError, TransientHTTPError, exponential_backoff, should_retry_http_status


class SearchError(Exception):
    """Raised when one country endpoint cannot be searched."""

    def __init__(self, message: str, country: str = ""):
        self.country = country
        super().__init__(message)


RETRYABLE = (
    requests.exceptions.Timeout,
    requests.exceptions.ConnectionError,
    TransientHTTPError,
)


class AdzunaClient:
    def __init__(
        self,
        config: AdzunaConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or get_logger()
        self._get = exponential_backoff(
            max_retries=config.max_retries,
            base_delay=config.retry_delay,
            exceptions=RETRYABLE,
            on_retry=self._on_retry,
        )(self._get_once)

    def country_url(self, country: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{country}/search/1"

    def _params(self, what: str) -> Dict[str, Any]:
        return {
            "app_id": self.config.app_id,
            "app_key": self.config.api_key,
            "results_per_page": self.config.results_per_page,
            "what": what,
            "content-type": "application/json",
        }

    def _on_retry(self, attempt: int, exc: Exception, delay: float):
        self.logger.warning(
            "Retrying job search request",
            attempt=attempt,
            delay=delay,
            error=str(exc),
        )

    def _get_once(self, url: str, params: Dict[str, Any]):
        self.logger.record_api_call()
        resp = self.session.get(url, params=params, timeout=self.config.timeout)
        if should_retry_http_status(resp.status_code):
            raise TransientHTTPError(resp.status_code, url)
        return resp

    def search_country(self, country: str, what: str) -> List[JobPosting]:
        """Fetch the first result page for one country.

        Raises:
            SearchError: On HTTP errors, exhausted retries or an unusable payload
        """
        url = self.country_url(country)
        self.logger.record_fetch_attempt(country)
        self.logger.debug("Searching country", country=country, what=what)
        try:
            resp = self._get(url, self._params(what))
            resp.raise_for_status()
        except RetryError as e:
            self.logger.record_fetch_failure(country, type(e.__cause__).__name__)
            raise SearchError(f"Search in '{country}' gave up after retries: {e.__cause__}", country) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "HTTPError"
            self.logger.record_fetch_failure(country, f"HTTPError_{status}")
            raise SearchError(f"Search in '{country}' failed ({status})", country) from e
        except requests.exceptions.RequestException as e:
            self.logger.record_fetch_failure(country, "RequestException")
            raise SearchError(f"Search in '{country}' request error: {e}", country) from e

        try:
            data = resp.json()
        except ValueError as e:
            self.logger.record_fetch_failure(country, "InvalidJSON")
            raise SearchError(f"Search in '{country}' returned invalid JSON", country) from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            self.logger.record_fetch_failure(country, "UnexpectedPayload")
            raise SearchError(f"Search in '{country}' returned no results array", country)

        postings = [self._to_posting(r) for r in results if isinstance(r, dict)]
        self.logger.record_fetch_success(country, len(postings))
        self.logger.info(f"Found {len(postings)} jobs", country=country)
        return postings

    def _to_posting(self, result: Dict[str, Any]) -> JobPosting:
        posting = JobPosting.from_adzuna(result)
        return replace(
            posting,
            title=strip_html(posting.title),
            description=strip_html(posting.description),
        )

    def search(self, what: str) -> List[JobPosting]:
        """Search all configured countries, in order, skipping failures."""
        postings: List[JobPosting] = []
        for country in self.config.countries:
            try:
                postings.extend(self.search_country(country, what))
            except SearchError as e:
                self.logger.warning("Skipping country after failed search", country=country, error=str(e))
                continue
        self.logger.info(
            f"Total jobs found across all countries: {len(postings)}",
            countries=len(self.config.countries),
        )
        return postings
