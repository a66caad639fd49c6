import os
import tempfile
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from image_translator.config import Settings
from image_translator.main import create_app


CREDS = {"ALIBABA_CLOUD_ACCESS_KEY_ID": "id", "ALIBABA_CLOUD_ACCESS_KEY_SECRET": "secret"}


def _health(settings):
    return TestClient(create_app(settings=settings, watch_config=False)).get("/health")


class TestHealthController(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_degraded_without_credentials(self):
        with tempfile.TemporaryDirectory() as tmp:
            r = _health(Settings(raw={"storage": {"upload_dir": tmp}}))

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["status"], "degraded")
        self.assertFalse(body["checks"]["credentials"]["access_key_id"])
        self.assertTrue(body["checks"]["storage"]["writable"])

    @patch.dict(os.environ, CREDS, clear=True)
    def test_missing_upload_dir_is_ok_when_creatable(self):
        with tempfile.TemporaryDirectory() as tmp:
            upload_dir = os.path.join(tmp, "uploads")
            r = _health(Settings(raw={"storage": {"upload_dir": upload_dir}}))
            self.assertFalse(os.path.exists(upload_dir))

        body = r.json()
        self.assertEqual(body["status"], "ok")
        self.assertFalse(body["checks"]["storage"]["exists"])
        self.assertTrue(body["checks"]["storage"]["writable"])

    @patch.dict(os.environ, CREDS, clear=True)
    def test_upload_dir_blocked_by_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = os.path.join(tmp, "uploads")
            with open(blocker, "w") as fh:
                fh.write("")
            r = _health(Settings(raw={"storage": {"upload_dir": blocker}}))

        body = r.json()
        self.assertEqual(body["status"], "degraded")
        self.assertFalse(body["checks"]["storage"]["writable"])

    @patch.dict(os.environ, CREDS, clear=True)
    def test_reports_translation_client_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            settings = Settings(raw={"storage": {"upload_dir": tmp}, "translation": {"max_attempts": 5}})
            r = _health(settings)

        translation = r.json()["checks"]["translation"]
        self.assertEqual(translation["endpoint"], "mt.cn-hangzhou.aliyuncs.com")
        self.assertEqual(translation["connect_timeout_ms"], 15000)
        self.assertEqual(translation["read_timeout_ms"], 30000)
        self.assertEqual(translation["max_attempts"], 5)


if __name__ == "__main__":
    unittest.main()
