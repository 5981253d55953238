"""Tests for bannergen/rendering/image_loader.py"""

from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
import requests
from PIL import Image

from bannergen.common.errors import ImageLoadFailure
from bannergen.rendering import ImageLoader


def _image_bytes(mode="RGB", size=(40, 30), color="blue", fmt="PNG"):
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, fmt)
    return buffer.getvalue()


def _response(content=b"", status=200):
    response = MagicMock()
    response.status_code = status
    response.content = content
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    return response


class TestImageLoader:
    def setup_method(self):
        self.loader = ImageLoader(timeout=5)

    def teardown_method(self):
        self.loader.close()

    def test_loads_png(self):
        with patch.object(self.loader.session, "get", return_value=_response(_image_bytes())) as mock_get:
            loaded = self.loader.load("https://img.example.com/a.png")

        assert loaded.is_placeholder is False
        assert loaded.image.size == (40, 30)
        assert loaded.image.mode == "RGB"
        mock_get.assert_called_once_with("https://img.example.com/a.png", timeout=5)

    def test_transparency_flattened_onto_white(self):
        content = _image_bytes(mode="RGBA", color=(0, 0, 0, 0))
        with patch.object(self.loader.session, "get", return_value=_response(content)):
            loaded = self.loader.load("https://img.example.com/t.png")

        assert loaded.image.getpixel((0, 0)) == (255, 255, 255)

    def test_http_error_gives_placeholder(self):
        with patch.object(self.loader.session, "get", return_value=_response(status=404)):
            loaded = self.loader.load("https://img.example.com/missing.jpg")

        assert loaded.is_placeholder is True
        assert isinstance(loaded.error, ImageLoadFailure)
        assert loaded.error.url == "https://img.example.com/missing.jpg"

    def test_timeout_gives_placeholder(self):
        with patch.object(self.loader.session, "get", side_effect=requests.exceptions.Timeout("slow")):
            loaded = self.loader.load("https://img.example.com/slow.jpg")

        assert loaded.is_placeholder is True
        assert isinstance(loaded.error.cause, requests.exceptions.Timeout)

    def test_corrupt_bytes_give_placeholder(self):
        with patch.object(self.loader.session, "get", return_value=_response(b"<html>not an image</html>")):
            loaded = self.loader.load("https://img.example.com/corrupt.jpg")

        assert loaded.is_placeholder is True

    def test_empty_url_does_not_request(self):
        with patch.object(self.loader.session, "get") as mock_get:
            loaded = self.loader.load("")

        assert loaded.is_placeholder is True
        mock_get.assert_not_called()

    def test_from_settings(self):
        loader = ImageLoader.from_settings({"images": {"timeout": 7}})
        try:
            assert loader.timeout == 7
        finally:
            loader.close()


def test_image_load_failure_message():
    error = ImageLoadFailure("https://x.example.com/a.jpg", OSError("cannot identify image file"))
    assert "https://x.example.com/a.jpg" in str(error)
    assert "cannot identify image file" in str(error)


@pytest.mark.parametrize("mode", ["L", "P", "CMYK"])
def test_other_modes_convert_to_rgb(mode):
    loader = ImageLoader()
    fmt = "JPEG" if mode == "CMYK" else "PNG"
    try:
        with patch.object(loader.session, "get", return_value=_response(_image_bytes(mode=mode, color=0, fmt=fmt))):
            loaded = loader.load("https://img.example.com/x")
    finally:
        loader.close()
    assert loaded.image.mode == "RGB"
