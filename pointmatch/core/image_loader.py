"""
Image loading for the two editor slots
"""

import logging
import os
from typing import Tuple

import cv2
import numpy as np
import tifffile
from PIL import Image

from ..config import SUPPORTED_IMAGE_FORMATS, TIFF_FORMATS


class ImageLoader:
    """Loads images as RGBA arrays and reports their natural size"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.supported_formats = set(SUPPORTED_IMAGE_FORMATS)

    def _check_path(self, file_path: str) -> str:
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Image file not found: {file_path}")

        file_ext = os.path.splitext(file_path)[1].lower()
        if file_ext not in self.supported_formats:
            raise ValueError(f"Unsupported file format: {file_ext}")
        return file_ext

    def load_image(self, file_path: str) -> np.ndarray:
        """
        Load image from file path

        Args:
            file_path: Path to image file

        Returns:
            Image data as an RGBA uint8 numpy array
        """
        file_ext = self._check_path(file_path)

        try:
            if file_ext in TIFF_FORMATS:
                image_array = self._load_tiff_image(file_path)
            else:
                image_array = self._load_standard_image(file_path)
        except (OSError, ValueError, cv2.error) as e:
            self.logger.warning(f"Primary decoder failed for {file_path}: {e}, falling back to PIL")
            try:
                image_array = self._load_pil_image(file_path)
            except OSError as pil_error:
                raise RuntimeError(f"Failed to load image {file_path}: {pil_error}") from pil_error

        self.logger.info(f"Loaded {os.path.basename(file_path)} "
                         f"({image_array.shape[1]} x {image_array.shape[0]})")
        return image_array

    def _load_tiff_image(self, file_path: str) -> np.ndarray:
        """Load TIFF image with tifffile"""
        image_array = tifffile.imread(file_path)
        if image_array.ndim == 3 and image_array.shape[0] in (3, 4) and image_array.shape[2] not in (3, 4):
            # Planar (channels first) layout
            image_array = np.moveaxis(image_array, 0, -1)
        return self._to_rgba(image_array)

    def _load_standard_image(self, file_path: str) -> np.ndarray:
        """Load standard image formats using OpenCV"""
        image_array = cv2.imread(file_path, cv2.IMREAD_UNCHANGED)

        if image_array is None:
            raise ValueError(f"Could not load image: {file_path}")

        if len(image_array.shape) == 3:
            if image_array.shape[2] == 3:
                image_array = cv2.cvtColor(image_array, cv2.COLOR_BGR2RGB)
            elif image_array.shape[2] == 4:
                image_array = cv2.cvtColor(image_array, cv2.COLOR_BGRA2RGBA)

        return self._to_rgba(image_array)

    def _load_pil_image(self, file_path: str) -> np.ndarray:
        """Load any format Pillow understands"""
        with Image.open(file_path) as image:
            return np.array(image.convert('RGBA'))

    def _to_rgba(self, image_array: np.ndarray) -> np.ndarray:
        """Bring grayscale, RGB and RGBA arrays to RGBA uint8"""
        if image_array.dtype != np.uint8:
            # Rescale 16-bit and float data for display
            image_array = cv2.normalize(image_array, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

        if len(image_array.shape) == 2:
            rgb = np.stack([image_array] * 3, axis=2)
            alpha = np.full(image_array.shape, 255, dtype=np.uint8)
            return np.dstack([rgb, alpha])

        if len(image_array.shape) == 3:
            if image_array.shape[2] == 3:
                alpha = np.full(image_array.shape[:2], 255, dtype=np.uint8)
                return np.dstack([image_array, alpha])
            if image_array.shape[2] == 4:
                return image_array

        raise ValueError(f"Unsupported image shape: {image_array.shape}")

    def get_image_size(self, file_path: str) -> Tuple[int, int]:
        """Natural (width, height) of an image file"""
        self._check_path(file_path)
        try:
            with Image.open(file_path) as image:
                return image.size
        except OSError as e:
            raise RuntimeError(f"Could not read size of {file_path}: {e}") from e
