"""
Tests for the multi-country Adzuna search client.
"""

import pytest
import requests

from careersarthi.adzuna import AdzunaClient, SearchError
from careersarthi.config import AdzunaConfig

GB = "https://api.adzuna.com/v1/api/jobs/gb/search/1"
US = "https://api.adzuna.com/v1/api/jobs/us/search/1"


@pytest.fixture
def config():
    return AdzunaConfig(
        app_id="id",
        api_key="key",
        countries=("gb", "us"),
        max_retries=2,
        retry_delay=0,
    )


def results(*titles):
    return {"results": [{"title": t, "company": {"display_name": "Acme"}} for t in titles]}


class TestSearchCountry:

    def test_request_params(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({GB: [fake_response_factory(200, results("Engineer"))]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        client.search_country("gb", "Software Engineer")

        call = session.calls[0]
        assert call["url"] == GB
        assert call["params"]["what"] == "Software Engineer"
        assert call["params"]["app_id"] == "id"
        assert call["params"]["app_key"] == "key"
        assert call["params"]["results_per_page"] == 20
        assert call["timeout"] == config.timeout

    def test_strips_markup(self, config, fake_session_factory, fake_response_factory, adzuna_result, quiet_logger):
        session = fake_session_factory({GB: [fake_response_factory(200, {"results": [adzuna_result]})]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        [posting] = client.search_country("gb", "Software Engineer")

        assert posting.title == "Senior Software Engineer"
        assert posting.description == "We build with React and TypeScript. Software engineer wanted."
        assert posting.location == "UK, London"

    def test_http_error_raises_search_error(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({GB: [fake_response_factory(401)]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        with pytest.raises(SearchError) as exc:
            client.search_country("gb", "x")

        assert exc.value.country == "gb"
        assert quiet_logger.metrics["errors_by_type"]["HTTPError_401"] == 1
        assert len(session.calls) == 1  # 4xx is not retried

    def test_transient_status_retried(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({GB: [
            fake_response_factory(503),
            fake_response_factory(200, results("Engineer")),
        ]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        postings = client.search_country("gb", "x")

        assert [p.title for p in postings] == ["Engineer"]
        assert len(session.calls) == 2
        assert quiet_logger.metrics["api_calls"] == 2

    def test_retries_exhausted(self, config, fake_session_factory, quiet_logger):
        session = fake_session_factory({GB: [requests.exceptions.Timeout("read timed out")]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        with pytest.raises(SearchError, match="gave up"):
            client.search_country("gb", "x")

        assert len(session.calls) == config.max_retries + 1
        assert quiet_logger.metrics["errors_by_type"]["Timeout"] == 1

    def test_invalid_json(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({GB: [fake_response_factory(200, None)]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        with pytest.raises(SearchError, match="invalid JSON"):
            client.search_country("gb", "x")

    def test_missing_results_array(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({GB: [fake_response_factory(200, {"count": 0})]})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        with pytest.raises(SearchError):
            client.search_country("gb", "x")


class TestSearch:

    def test_concatenates_in_country_order(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({
            GB: [fake_response_factory(200, results("gb-1", "gb-2"))],
            US: [fake_response_factory(200, results("us-1"))],
        })
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        postings = client.search("Engineer")

        assert [p.title for p in postings] == ["gb-1", "gb-2", "us-1"]
        assert quiet_logger.metrics["postings_received"] == 3

    def test_failed_country_skipped(self, config, fake_session_factory, fake_response_factory, quiet_logger):
        session = fake_session_factory({
            GB: [fake_response_factory(500)],
            US: [fake_response_factory(200, results("us-1"))],
        })
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        postings = client.search("Engineer")

        assert [p.title for p in postings] == ["us-1"]
        metrics = quiet_logger.get_metrics()
        assert metrics["fetches_failed"] == 1
        assert metrics["fetches_successful"] == 1
        assert metrics["country_success_rate"]["gb"]["success_rate"] == 0.0

    def test_all_countries_failing_gives_empty_list(self, config, fake_session_factory, quiet_logger):
        session = fake_session_factory({})
        client = AdzunaClient(config, session=session, logger=quiet_logger)

        assert client.search("Engineer") == []
