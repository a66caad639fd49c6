import base64
import os
import tempfile
import unittest
from unittest.mock import MagicMock

from image_translator.models import TranslateRequest
from image_translator.services.alimt_client_service import AlimtClient
from image_translator.services.translation_service import translate_image


class TestTranslationService(unittest.TestCase):

    def test_translate_image_sends_base64(self):
        mock_client = MagicMock(spec=AlimtClient)
        mock_client.translate_image.return_value = {"body": {"Code": 200}}

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "img.png")
            with open(path, "wb") as f:
                f.write(b"image-bytes")
            req = TranslateRequest(imagePath=path, sourceLanguage="zh", targetLanguage="en")

            result = translate_image(req, client=mock_client)

        self.assertEqual(result, {"body": {"Code": 200}})
        mock_client.translate_image.assert_called_once()
        args, kwargs = mock_client.translate_image.call_args
        self.assertEqual(base64.b64decode(args[0]), b"image-bytes")
        self.assertEqual(kwargs, {"source_language": "zh", "target_language": "en"})

    def test_missing_file_raises_before_client(self):
        mock_client = MagicMock(spec=AlimtClient)
        req = TranslateRequest(imagePath="/nonexistent/img.png", sourceLanguage="zh", targetLanguage="en")

        with self.assertRaises(FileNotFoundError):
            translate_image(req, client=mock_client)
        mock_client.translate_image.assert_not_called()


if __name__ == "__main__":
    unittest.main()
