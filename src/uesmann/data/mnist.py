"""
UESMANN - MNIST Loader
======================
Reads labelled image data in the IDX format used by MNIST: a label file
(magic 2049) and an image file (magic 2051), both big-endian.
"""

from pathlib import Path
from typing import List, Union

import numpy as np

from ..errors import LoadError
from ..utils import get_logger

logger = get_logger(__name__)

LABEL_MAGIC = 2049
IMAGE_MAGIC = 2051
MAX_COUNT = 100000
MAX_DIMENSION = 128

PathLike = Union[str, Path]


def _read_header(f, n_words: int, path: PathLike) -> List[int]:
    raw = f.read(4 * n_words)
    if len(raw) != 4 * n_words:
        raise LoadError(f"Truncated header in {path}")
    return [int(v) for v in np.frombuffer(raw, dtype=">u4")]


class MNIST:
    """
    Labels and images loaded from a pair of IDX files.

    Args:
        label_file: path of the label file
        image_file: path of the image file
        start: index of the first image to load
        length: number of images to load (0 means all from start)
    """

    def __init__(self, label_file: PathLike, image_file: PathLike, start: int = 0, length: int = 0):
        self.labels = self._load_labels(label_file, start, length)
        self.count = len(self.labels)
        self.images = self._load_images(image_file, start, self.count)
        self.max_label = int(self.labels.max()) if self.count else 0
        logger.info(
            f"Loaded {self.count} images of {self.rows}x{self.cols} "
            f"from {image_file}, max label {self.max_label}"
        )

    def _load_labels(self, path: PathLike, start: int, length: int) -> np.ndarray:
        try:
            with open(path, "rb") as f:
                magic, total = _read_header(f, 2, path)
                if magic != LABEL_MAGIC:
                    raise LoadError(f"Bad magic number in label file {path}: {magic:#x}")
                if total > MAX_COUNT:
                    raise LoadError(f"Unfeasibly large count in label file {path}: {total}")
                if not length:
                    length = total - start
                if start < 0 or length < 0 or start + length > total:
                    raise LoadError(
                        f"Range [{start}, {start + length}) requested, only {total} in {path}"
                    )
                self._file_count = int(total)
                f.seek(start, 1)
                raw = f.read(length)
        except OSError as e:
            raise LoadError(f"Cannot open label file {path}: {e}") from e

        if len(raw) != length:
            raise LoadError(f"Not enough items in label file {path}: {len(raw)}")
        return np.frombuffer(raw, dtype=np.uint8).copy()

    def _load_images(self, path: PathLike, start: int, length: int) -> np.ndarray:
        try:
            with open(path, "rb") as f:
                magic, total = _read_header(f, 2, path)
                if magic != IMAGE_MAGIC:
                    raise LoadError(f"Bad magic number in image file {path}: {magic:#x}")
                if total != self._file_count:
                    raise LoadError(
                        f"Image file count does not agree with label file count: {total} != {self._file_count}"
                    )
                rows, cols = _read_header(f, 2, path)
                if rows > MAX_DIMENSION or cols > MAX_DIMENSION:
                    raise LoadError(f"Bad dimensions in image file {path}: {rows}x{cols}")
                self.rows = int(rows)
                self.cols = int(cols)
                size = self.rows * self.cols
                f.seek(start * size, 1)
                raw = f.read(length * size)
        except OSError as e:
            raise LoadError(f"Cannot open image file {path}: {e}") from e

        if len(raw) != length * size:
            raise LoadError(f"Wrong amount of pixels in image file {path}: {len(raw)}")
        return np.frombuffer(raw, dtype=np.uint8).reshape(length, self.rows, self.cols).copy()

    def get_label(self, n: int) -> int:
        return int(self.labels[n])

    def get_image(self, n: int) -> np.ndarray:
        """The image as a (rows, cols) array of bytes."""
        return self.images[n]

    def get_pixel(self, n: int, x: int, y: int) -> int:
        return int(self.images[n, y, x])

    def dump(self, n: int) -> str:
        """Coarse text rendering of an image, for eyeballing the data."""
        lines = [f"Label: {self.get_label(n)}"]
        for row in self.images[n]:
            lines.append("".join(
                str(min(9, v // 25)) if v // 25 else "." for v in row.tolist()
            ))
        return "\n".join(lines)
