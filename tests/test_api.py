import os
import sys
import unittest
from unittest.mock import AsyncMock, patch

import httpx
from fastapi.testclient import TestClient

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from api.main import create_app
from core.config import Config
from utils.retry_http import RetryingClient

IMAGE_URL = "http://archive.org/download/mbid-abc/front.jpg"


def fake_archive(request: httpx.Request) -> httpx.Response:
    if "/release/found/" in request.url.path:
        return httpx.Response(307, headers={"location": IMAGE_URL})
    return httpx.Response(404)


@patch.object(Config, "COVER_ART_BASE_URL", "http://coverartarchive.org")
class TestCoverArtAPI(unittest.TestCase):

    def setUp(self):
        self.requests = []

        def handler(request):
            self.requests.append(request)
            return fake_archive(request)

        app = create_app(
            client_factory=lambda: RetryingClient(
                transport=httpx.MockTransport(handler),
                sleep=AsyncMock(),
            )
        )
        self.client = TestClient(app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_health(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok"})

    def test_front_cover_found(self):
        r = self.client.get("/api/release/found/front")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {
            "album_id": "found",
            "url": IMAGE_URL,
            "found": True,
        })
        self.assertEqual(
            str(self.requests[0].url),
            "http://coverartarchive.org/release/found/front",
        )

    def test_front_cover_missing(self):
        r = self.client.get("/api/release/missing/front")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {
            "album_id": "missing",
            "url": None,
            "found": False,
        })

    def test_config(self):
        r = self.client.get("/api/config")

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["cover_art_base_url"], "http://coverartarchive.org")
        self.assertEqual(body["max_retries"], Config.MAX_RETRIES)


if __name__ == "__main__":
    unittest.main()
