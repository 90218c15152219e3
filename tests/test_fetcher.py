"""
Tests for the page fetcher and HTTP session factory.
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from cache_warmer.config import POOL_MAXSIZE, USER_AGENT, CrawlSettings
from cache_warmer.core.fetcher import Fetcher
from cache_warmer.session import build_session, session_for


def _response(status: int, text: str = "", reason: str = "OK") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    resp.reason = reason
    return resp


class TestFetcher(unittest.TestCase):
    def _make_fetcher(self, bypass_key: str = "Abc123XyZ0", timeout: float = 100):
        session = build_session()
        return Fetcher(session, bypass_key, timeout=timeout), session

    def test_success_returns_body(self):
        fetcher, session = self._make_fetcher()
        with patch.object(session, "get", return_value=_response(200, "<html></html>")):
            result = fetcher.fetch("http://site.test/")
        self.assertTrue(result.ok)
        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.body, "<html></html>")
        self.assertIsNone(result.error)
        self.assertGreaterEqual(result.elapsed, 0.0)

    def test_bypass_key_appended_to_user_agent(self):
        fetcher, session = self._make_fetcher(bypass_key="K3y")
        with patch.object(session, "get", return_value=_response(200)) as get:
            fetcher.fetch("http://site.test/")
        headers = get.call_args.kwargs["headers"]
        self.assertEqual(headers["User-Agent"], f"{USER_AGENT} K3y")

    def test_timeout_passed_to_request(self):
        fetcher, session = self._make_fetcher(timeout=7)
        with patch.object(session, "get", return_value=_response(200)) as get:
            fetcher.fetch("http://site.test/")
        self.assertEqual(get.call_args.kwargs["timeout"], 7)
        self.assertTrue(get.call_args.kwargs["allow_redirects"])

    def test_custom_session_user_agent_kept(self):
        session = MagicMock()
        session.headers = {"User-Agent": "Custom/2.0"}
        fetcher = Fetcher(session, "tok")
        self.assertEqual(fetcher.user_agent, "Custom/2.0 tok")

    def test_non_200_is_not_ok(self):
        fetcher, session = self._make_fetcher()
        with patch.object(session, "get", return_value=_response(404, "missing", "Not Found")):
            result = fetcher.fetch("http://site.test/missing")
        self.assertFalse(result.ok)
        self.assertEqual(result.status_code, 404)
        self.assertEqual(result.reason, "Not Found")
        self.assertIsNone(result.body)

    def test_redirect_status_other_than_200_is_not_ok(self):
        fetcher, session = self._make_fetcher()
        with patch.object(session, "get", return_value=_response(204, "", "No Content")):
            result = fetcher.fetch("http://site.test/empty")
        self.assertFalse(result.ok)

    def test_transport_failure_becomes_result(self):
        fetcher, session = self._make_fetcher()
        with patch.object(
            session, "get",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            result = fetcher.fetch("http://site.test/")
        self.assertFalse(result.ok)
        self.assertEqual(result.status_code, 0)
        self.assertIn("connection refused", result.error)

    def test_timeout_becomes_result(self):
        fetcher, session = self._make_fetcher()
        with patch.object(session, "get", side_effect=requests.Timeout("read timed out")):
            result = fetcher.fetch("http://site.test/slow")
        self.assertFalse(result.ok)
        self.assertIn("read timed out", result.error)


class TestBuildSession(unittest.TestCase):
    def test_retries_disabled(self):
        session = build_session()
        adapter = session.get_adapter("http://site.test/")
        self.assertEqual(adapter.max_retries.total, 0)

    def test_verify_flag(self):
        self.assertFalse(build_session(verify_ssl=False).verify)

    def test_default_user_agent(self):
        self.assertEqual(build_session().headers["User-Agent"], USER_AGENT)

    def test_pool_size(self):
        adapter = build_session(pool_maxsize=5).get_adapter("https://site.test/")
        self.assertEqual(adapter._pool_maxsize, 5)
        self.assertEqual(adapter._pool_connections, 5)


class TestSessionFor(unittest.TestCase):
    def test_pool_grows_with_workers(self):
        settings = CrawlSettings(bypass_key="k", max_workers=POOL_MAXSIZE + 16)
        adapter = session_for(settings).get_adapter("http://site.test/")
        self.assertEqual(adapter._pool_maxsize, POOL_MAXSIZE + 16)

    def test_pool_never_below_default(self):
        settings = CrawlSettings(bypass_key="k", max_workers=2)
        adapter = session_for(settings).get_adapter("http://site.test/")
        self.assertEqual(adapter._pool_maxsize, POOL_MAXSIZE)

    def test_verify_flag_from_settings(self):
        settings = CrawlSettings(bypass_key="k", max_workers=2, verify_ssl=False)
        self.assertFalse(session_for(settings).verify)


if __name__ == "__main__":
    unittest.main()
