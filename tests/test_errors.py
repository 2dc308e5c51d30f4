import os
import sys
import unittest

import httpx

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from core.errors import describe_error
from utils.retry_http import NetworkFailure, TransportError

URL = "http://coverartarchive.org/release/abc/front"


def status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL)
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("failed", request=request, response=response)


class TestDescribeError(unittest.TestCase):

    def test_status_error(self):
        self.assertEqual(
            describe_error(status_error(503)),
            f"HTTP 503 Service Unavailable for {URL}",
        )

    def test_transport_error_outcome(self):
        error = status_error(418)
        outcome = TransportError(
            status_code=418,
            headers=error.response.headers,
            url=URL,
            error=error,
        )
        self.assertTrue(describe_error(outcome).startswith("HTTP 418"))

    def test_timeout(self):
        error = httpx.ReadTimeout("timed out", request=httpx.Request("GET", URL))
        self.assertEqual(describe_error(error), f"Request timed out: {URL}")

    def test_network_failure_outcome(self):
        error = httpx.ConnectError("connection refused", request=httpx.Request("GET", URL))
        self.assertEqual(
            describe_error(NetworkFailure(cause=error)),
            f"Network error (ConnectError): connection refused for {URL}",
        )

    def test_network_error_without_request(self):
        error = httpx.ConnectError("connection refused")
        self.assertIn("<unknown url>", describe_error(error))

    def test_plain_exception(self):
        self.assertEqual(describe_error(ValueError("bad value")), "bad value")

    def test_empty_exception_uses_class_name(self):
        self.assertEqual(describe_error(KeyError()), "KeyError")


if __name__ == "__main__":
    unittest.main()
