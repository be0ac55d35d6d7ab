from __future__ import annotations

import numpy as np
import pytest
import tifffile
from PIL import Image

from pointmatch.core.image_loader import ImageLoader


@pytest.fixture
def loader() -> ImageLoader:
    return ImageLoader()


def test_png_is_loaded_as_rgba(loader, tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (20, 10), (255, 0, 0)).save(path)
    image = loader.load_image(str(path))
    assert image.shape == (10, 20, 4)
    assert tuple(image[0, 0]) == (255, 0, 0, 255)


def test_grayscale_png_gets_three_channels_and_alpha(loader, tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (8, 6), 128).save(path)
    image = loader.load_image(str(path))
    assert image.shape == (6, 8, 4)
    assert tuple(image[0, 0]) == (128, 128, 128, 255)


def test_sixteen_bit_tiff_is_rescaled(loader, tmp_path):
    path = tmp_path / "ramp.tif"
    data = np.arange(12, dtype=np.uint16).reshape(3, 4) * 1000
    tifffile.imwrite(str(path), data)
    image = loader.load_image(str(path))
    assert image.dtype == np.uint8
    assert image.shape == (3, 4, 4)
    assert image[0, 0, 0] == 0
    assert image[-1, -1, 0] == 255


def test_image_size(loader, tmp_path):
    path = tmp_path / "size.jpg"
    Image.new("RGB", (33, 17)).save(path)
    assert loader.get_image_size(str(path)) == (33, 17)


def test_missing_file(loader, tmp_path):
    with pytest.raises(FileNotFoundError):
        loader.load_image(str(tmp_path / "nope.png"))


def test_unsupported_extension(loader, tmp_path):
    path = tmp_path / "notes.gif"
    path.write_bytes(b"GIF89a")
    with pytest.raises(ValueError):
        loader.load_image(str(path))


def test_corrupt_file_raises_runtime_error(loader, tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not a png at all")
    with pytest.raises(RuntimeError):
        loader.load_image(str(path))
