"""Height maps from point lists (.mod1 files) or grey-scale images."""

from __future__ import annotations

import logging
import math
import os
from typing import List, Sequence, Tuple, Union

HEIGHT_COEFF = 20.0
INVERT = False
IDW_POWER = 4.0

Point = Tuple[int, int, int]
PathLike = Union[str, "os.PathLike[str]"]

log = logging.getLogger(__name__)


class _LineScanner:
    """Reads characters and integers the way a whitespace-skipping stream does."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def _skip_space(self) -> None:
        while self.pos < len(self.line) and self.line[self.pos].isspace():
            self.pos += 1

    def char(self):
        self._skip_space()
        if self.pos >= len(self.line):
            return None
        ch = self.line[self.pos]
        self.pos += 1
        return ch

    def integer(self):
        self._skip_space()
        start = self.pos
        if self.pos < len(self.line) and self.line[self.pos] in "+-":
            self.pos += 1
        digits_start = self.pos
        while self.pos < len(self.line) and self.line[self.pos].isdigit():
            self.pos += 1
        if self.pos == digits_start:
            self.pos = start
            return None
        return int(self.line[start:self.pos])


def parse_mod(text: str) -> List[Point]:
    """Parse '(x,y,z)' triples of non-negative integers, any number per line."""
    points: List[Point] = []
    for line in text.splitlines():
        scanner = _LineScanner(line)
        while True:
            opening = scanner.char()
            if opening is None:
                break
            if opening != "(":
                raise ValueError("Invalid file content: expected '('")
            x = scanner.integer()
            comma1 = scanner.char() if x is not None else None
            y = scanner.integer() if comma1 is not None else None
            comma2 = scanner.char() if y is not None else None
            z = scanner.integer() if comma2 is not None else None
            if z is None or comma1 != "," or comma2 != ",":
                raise ValueError("Invalid file content: expected 'x,y,z'")
            if scanner.char() != ")":
                raise ValueError("Invalid file content: expected ')'")
            if x < 0 or y < 0 or z < 0:
                raise ValueError(
                    "Invalid file content: x,y and z must be positive"
                )
            points.append((x, y, z))
    return points


def map_ratio(points: Sequence[Point], size: int) -> float:
    """Scale factor from the extent the points imply to the target map size."""
    largest_x = largest_y = 0
    smallest_x = smallest_y = -1
    for x, y, _ in points:
        if smallest_x == -1:
            smallest_x = x
        if smallest_y == -1:
            smallest_y = y
        if x > largest_x:
            largest_x = x
        elif x < smallest_x:
            smallest_x = x
        if y > largest_y:
            largest_y = y
        elif y < smallest_y:
            smallest_y = y
    implied = max(smallest_x + largest_x, smallest_y + largest_y)
    if implied == 0:
        raise ValueError("Points do not span any area")
    return size / implied


def normalize_points(points: Sequence[Point], size: int) -> List[Point]:
    """Scale all coordinates, height included, to fit a map of the given size."""
    if not points:
        return []
    ratio = map_ratio(points, size)
    return [(int(x * ratio), int(y * ratio), int(z * ratio)) for x, y, z in points]


def idw_interpolation(
    points: Sequence[Point], x: int, y: int, power: float = IDW_POWER
) -> float:
    """Inverse distance weighted height at (x, y)."""
    if not points:
        return 0.0
    result = 0.0
    weight_sum = 0.0
    for px, py, pz in points:
        dx = x - px
        dy = y - py
        dist_squared = float(dx * dx + dy * dy)
        if dist_squared == 0:
            return float(pz)
        weight = 1.0 / math.pow(dist_squared, power / 2.0)
        result += pz * weight
        weight_sum += weight
    if weight_sum == 0:
        return 0.0
    return result / weight_sum


def height_map_from_points(points: Sequence[Point], size: int) -> List[float]:
    """Row-major size*size map interpolated from points, with a zero border."""
    log.debug("Real points: %s", list(points))
    known = normalize_points(points, size)
    log.debug("Resized points: %s", known)
    known.extend(
        (x, y, 0)
        for x in range(size)
        for y in range(size)
        if x == 0 or y == 0 or x == size - 1 or y == size - 1
    )
    return [
        idw_interpolation(known, x, y, IDW_POWER)
        for y in range(size)
        for x in range(size)
    ]


def height_map_from_image(path: PathLike, size: int) -> List[float]:
    """Sample a grey-scale image on a size*size grid, column by column."""
    from PIL import Image, UnidentifiedImageError

    path = os.fspath(path)
    if not os.path.isfile(path):
        raise ValueError("Invalid filepath")
    try:
        with Image.open(path) as image:
            grey = image.convert("L")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError("Failed to open image file") from exc

    width, height = grey.size
    data = grey.tobytes()
    heights: List[float] = []
    for x in range(size):
        x_img = int(x / size * width)
        for y in range(size):
            y_img = int(y / size * height)
            value = data[y_img * width + x_img] * HEIGHT_COEFF / 255.0
            heights.append(HEIGHT_COEFF - value if INVERT else value)
    return heights


def load_height_map(path: PathLike, size: int) -> List[float]:
    """Build a height map from a .mod1 point file or, for other extensions, an image."""
    if size < 0:
        raise ValueError("Invalid arguments: size must be positive")
    path = os.fspath(path)
    dot = path.rfind(".")
    if dot == -1:
        raise ValueError("Invalid filepath extension")
    if path[dot:] == ".mod1":
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise ValueError("Invalid filepath") from exc
        return height_map_from_points(parse_mod(text), size)
    return height_map_from_image(path, size)