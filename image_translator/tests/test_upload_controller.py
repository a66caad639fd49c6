import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from image_translator.config import Settings
from image_translator.main import create_app


PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class TestUploadController(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.upload_dir = os.path.join(self._tmp.name, "uploads")
        settings = Settings(raw={"storage": {"upload_dir": self.upload_dir}})
        self.client = TestClient(create_app(settings=settings, watch_config=False))

    def tearDown(self):
        self._tmp.cleanup()

    def test_upload_returns_records_in_order(self):
        files = [
            ("images", ("a.png", PNG_HEADER + b"1", "image/png")),
            ("images", ("a.png", PNG_HEADER + b"2", "image/png")),
            ("images", ("c.jpg", b"\xff\xd8\xff", "image/jpeg")),
        ]
        r = self.client.post("/api/upload", files=files)

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertTrue(body["success"])
        self.assertEqual([f["name"] for f in body["files"]], ["a.png", "a.png", "c.jpg"])
        paths = [f["path"] for f in body["files"]]
        self.assertEqual(len(set(paths)), 3)
        for path in paths:
            self.assertTrue(path)
            self.assertTrue(os.path.isfile(path))
            self.assertEqual(os.path.dirname(path), self.upload_dir)

    def test_upload_dir_created_then_reused(self):
        self.assertFalse(os.path.exists(self.upload_dir))
        r = self.client.post("/api/upload", files=[("images", ("a.png", PNG_HEADER, "image/png"))])
        self.assertEqual(r.status_code, 200)
        self.assertTrue(os.path.isdir(self.upload_dir))

        marker = os.path.join(self.upload_dir, "marker")
        with open(marker, "w") as fh:
            fh.write("x")
        r = self.client.post("/api/upload", files=[("images", ("b.png", PNG_HEADER, "image/png"))])
        self.assertEqual(r.status_code, 200)
        self.assertTrue(os.path.isfile(marker))
        self.assertEqual(len(os.listdir(self.upload_dir)), 3)

    def test_no_images_parts(self):
        r = self.client.post("/api/upload", files=[("note", ("note.txt", b"x", "text/plain"))])

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"success": True, "files": []})
        self.assertFalse(os.path.exists(self.upload_dir))

    def test_filesystem_failure_returns_500(self):
        blocker = os.path.join(self._tmp.name, "blocker")
        with open(blocker, "w") as fh:
            fh.write("")
        settings = Settings(raw={"storage": {"upload_dir": blocker}})
        client = TestClient(create_app(settings=settings, watch_config=False))

        r = client.post("/api/upload", files=[("images", ("a.png", PNG_HEADER, "image/png"))])

        self.assertEqual(r.status_code, 500)
        body = r.json()
        self.assertFalse(body["success"])
        self.assertTrue(body["error"])


if __name__ == "__main__":
    unittest.main()
