"""Tests for the search-provider step. No network: requests/DDGS are faked."""

import pytest
import requests

from agents import web_search
from config import Settings
from errors import SearchError


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeDDGS:
    results = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def text(self, query, max_results=10):
        return self.results[:max_results]


class TestSerpApi:
    def test_maps_organic_results_in_order(self, monkeypatch) -> None:
        captured = {}

        def fake_get(url, params=None, timeout=None):
            captured.update(url=url, params=params, timeout=timeout)
            return FakeResponse({"organic_results": [
                {"snippet": "A", "link": "http://a", "title": "ignored"},
                {"link": "http://no-snippet"},
                {"snippet": "C", "link": "http://c"},
            ]})

        monkeypatch.setattr(web_search.requests, "get", fake_get)
        hits = web_search.search_web(" cats ", Settings(serpapi_key="k", request_timeout=3))

        assert hits == [
            {"snippet": "A", "link": "http://a"},
            {"snippet": "", "link": "http://no-snippet"},
            {"snippet": "C", "link": "http://c"},
        ]
        assert captured["url"] == web_search.SERPAPI_URL
        assert captured["params"] == {"engine": "google", "q": "cats", "api_key": "k"}
        assert captured["timeout"] == 3

    def test_missing_organic_results(self, monkeypatch) -> None:
        monkeypatch.setattr(web_search.requests, "get", lambda *a, **k: FakeResponse({}))
        assert web_search.search_web("q", Settings(serpapi_key="k")) == []

    def test_http_error_becomes_search_error(self, monkeypatch) -> None:
        monkeypatch.setattr(web_search.requests, "get", lambda *a, **k: FakeResponse({}, status_code=401))
        with pytest.raises(SearchError, match="Failed to perform search"):
            web_search.search_web("q", Settings(serpapi_key="bad"))


class TestDuckDuckGo:
    def test_used_without_serpapi_key(self, monkeypatch) -> None:
        FakeDDGS.results = [
            {"title": "t1", "href": "http://one", "body": "first"},
            {"title": "t2", "href": "http://two", "body": "second"},
        ]
        monkeypatch.setattr(web_search, "DDGS", FakeDDGS)

        hits = web_search.search_web("q", Settings(max_results=1))
        assert hits == [{"snippet": "first", "link": "http://one"}]

    def test_provider_error_becomes_search_error(self, monkeypatch) -> None:
        class Broken(FakeDDGS):
            def text(self, query, max_results=10):
                raise RuntimeError("rate limited")

        monkeypatch.setattr(web_search, "DDGS", Broken)
        with pytest.raises(SearchError, match="rate limited"):
            web_search.search_web("q", Settings())


def test_empty_query_rejected() -> None:
    with pytest.raises(ValueError):
        web_search.search_web("  ", Settings())
