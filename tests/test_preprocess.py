import pytest
import numpy as np
from PIL import Image
import tempfile
import os

from trimosaic.canvas import Canvas
from trimosaic.errors import DecodeFailureError
from trimosaic.geometry import Color
from trimosaic.preprocess import load_target, make_proxy, proxy_dimensions


class TestLoadTarget:
    """Test cases for reading target images."""

    def create_test_image(self, size=(30, 20), color=(255, 0, 0), mode='RGB'):
        """Create a test image."""
        return Image.new(mode, size, color)

    def test_load_png(self):
        """Test loading an RGB PNG."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'target.png')
            self.create_test_image().save(path)

            canvas = load_target(path)

        assert canvas.size == (30, 20)
        assert canvas.get(5, 5) == Color(255, 0, 0, 255)

    def test_alpha_dropped(self):
        """Test that transparent sources load as opaque."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'target.png')
            self.create_test_image(color=(0, 255, 0, 10), mode='RGBA').save(path)

            canvas = load_target(path)

        assert np.all(canvas.pixels[:, :, 3] == 255)

    def test_missing_file(self):
        """Test that a missing file raises DecodeFailureError."""
        with pytest.raises(DecodeFailureError):
            load_target('/nonexistent/image.png')

    def test_oversized_image(self, monkeypatch):
        """Test that images over the pixel limit raise DecodeFailureError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'large.png')
            self.create_test_image(size=(100, 100)).save(path)

            monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 10)
            with pytest.raises(DecodeFailureError):
                load_target(path)

    def test_not_an_image(self):
        """Test that a non-image file raises DecodeFailureError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'test.png')
            with open(path, 'w') as f:
                f.write('not an image')

            with pytest.raises(DecodeFailureError):
                load_target(path)


class TestProxy:
    """Test cases for the evaluation proxy."""

    def test_disabled(self):
        """Test that proxy_size 0 disables the proxy."""
        assert make_proxy(Canvas.new(10, 10), 0) is None

    def test_same_size(self):
        """Test that a proxy matching the image is skipped."""
        assert make_proxy(Canvas.new(16, 16), 16) is None

    def test_downscale(self):
        """Test the proxy dimensions of a non-square image."""
        target = Canvas.new(40, 20)
        target.fill(Color(9, 8, 7, 255))
        proxy = make_proxy(target, 10)
        assert proxy.size == (10, 10)
        assert proxy.get(3, 3) == Color(9, 8, 7, 255)

    def test_upscale_warns(self):
        """Test that a proxy larger than the image warns."""
        with pytest.warns(UserWarning):
            assert proxy_dimensions(Canvas.new(4, 4), 8) == (8, 8)
