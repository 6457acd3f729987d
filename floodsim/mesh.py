"""Vertex data for drawing the ground and water surfaces as triangle lists."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from floodsim.cell import Cell

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

GROUND_COLOR: Vec3 = (0.97, 0.88, 0.69)


def _normalized(x: float, y: float, z: float) -> Vec3:
    length = math.sqrt(x * x + y * y + z * z)
    return (x / length, y / length, z / length)


WATER_COLOR: Vec3 = _normalized(34.0, 197.0, 255.0)
WATER_EDGE_COLOR: Vec3 = tuple(c * 0.8 for c in WATER_COLOR)  # type: ignore[assignment]

GROUND_STRIDE = 9  # position xyz, colour rgb, normal xyz
WATER_STRIDE = 5  # static: position xy, colour rgb; dynamic: z, depth, normal xyz


class MeshBuilder:
    """Builds flat float lists for a square grid of the given size.

    Each grid quad becomes two triangles: SW -> SE -> NE and NE -> NW -> SW.
    """

    def __init__(self, size: int) -> None:
        self.size = size

    def index(self, x: int, y: int) -> int:
        return x + y * self.size

    def _quads(self) -> Iterable[Tuple[int, int]]:
        for y in range(self.size - 1):
            for x in range(self.size - 1):
                yield x, y

    def _quad_corners(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Corner coordinates of one quad in triangle order."""
        sw, se, ne, nw = (x, y), (x + 1, y), (x + 1, y + 1), (x, y + 1)
        return [sw, se, ne, ne, nw, sw]

    def ground_vertices(self, cells: Sequence[Cell]) -> List[float]:
        """Position, colour and ground normal for every ground triangle vertex."""
        vertices: List[float] = []
        for x, y in self._quads():
            for cx, cy in self._quad_corners(x, y):
                cell = cells[self.index(cx, cy)]
                vertices.extend((float(cx), float(cy), cell.ground))
                vertices.extend(GROUND_COLOR)
                vertices.extend(cell.ground_normal)
        return vertices

    def water_static_vertices(self) -> List[float]:
        """Horizontal position and colour of the water surface and its side walls."""
        vertices: List[float] = []
        for x, y in self._quads():
            for cx, cy in self._quad_corners(x, y):
                vertices.extend((float(cx), float(cy)))
                vertices.extend(WATER_COLOR)

        last = self.size - 1
        for wall in (
            self._edge_x(0),
            self._edge_x(last),
            self._edge_y(0),
            self._edge_y(last),
        ):
            for a, b in wall:
                for cx, cy in (a, b, b, b, a, a):
                    vertices.extend((float(cx), float(cy)))
                    vertices.extend(WATER_EDGE_COLOR)
        return vertices

    def water_dynamic_vertices(self, cells: Sequence[Cell]) -> List[float]:
        """Surface height, water depth and normal matching water_static_vertices."""
        vertices: List[float] = []
        for x, y in self._quads():
            for cx, cy in self._quad_corners(x, y):
                cell = cells[self.index(cx, cy)]
                vertices.append(cell.water_vertex_height())
                vertices.append(cell.water)
                vertices.extend(cell.normal)

        last = self.size - 1
        for wall in (
            self._edge_x(0),
            self._edge_x(last),
            self._edge_y(0),
            self._edge_y(last),
        ):
            for a, b in wall:
                first = cells[self.index(*a)]
                second = cells[self.index(*b)]
                vertices.extend(self._wall_bottom(first))
                vertices.extend(self._wall_bottom(second))
                vertices.extend(self._wall_top(second))
                vertices.extend(self._wall_top(second))
                vertices.extend(self._wall_top(first))
                vertices.extend(self._wall_bottom(first))
        return vertices

    def vertex_count(self) -> int:
        """Number of vertices drawn for the ground mesh."""
        return (self.size - 1) * (self.size - 1) * 6 + self.size * 4 * 6

    def _edge_x(self, y: int) -> Iterable[Tuple[Tuple[int, int], Tuple[int, int]]]:
        for x in range(self.size - 1):
            yield (x, y), (x + 1, y)

    def _edge_y(self, x: int) -> Iterable[Tuple[Tuple[int, int], Tuple[int, int]]]:
        for y in range(self.size - 1):
            yield (x, y), (x, y + 1)

    @staticmethod
    def _wall_bottom(cell: Cell) -> Tuple[float, ...]:
        return (cell.ground, 1.0, *cell.normal)

    @staticmethod
    def _wall_top(cell: Cell) -> Tuple[float, ...]:
        return (
            max(cell.water_vertex_height(), cell.ground),
            cell.water,
            *cell.normal,
        )