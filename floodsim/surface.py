"""A rectangular grid of linked water cells."""

from __future__ import annotations

import math
import random
import sys
from typing import Iterable, List, Optional, TextIO

from floodsim.cell import WAVE_SPEED, Cell


class WaterSurface:
    """Grid of cells stored row by row, with y growing to the north."""

    def __init__(self, size_x: int, size_y: int) -> None:
        self.size_x = size_x
        self.size_y = size_y
        self.cells: List[Cell] = [Cell() for _ in range(size_x * size_y)]
        self.rng = random.Random()
        for y in range(size_y):
            for x in range(size_x):
                self.cells[self.index(x, y)].link(
                    self.cells[self.index(x, y + 1)] if y < size_y - 1 else None,
                    self.cells[self.index(x + 1, y)] if x < size_x - 1 else None,
                    self.cells[self.index(x, y - 1)] if y > 0 else None,
                    self.cells[self.index(x - 1, y)] if x > 0 else None,
                )

    def index(self, x: int, y: int) -> int:
        return x + y * self.size_x

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size_x and 0 <= y < self.size_y

    def update(self) -> None:
        """Advance the simulation by one time step."""
        for i, cell in enumerate(self.cells):
            cell.update_velocity()
            cell.update_water_level()
            cell.update_normal()
            if cell.water < 0:
                y, x = divmod(i, self.size_x)
                self.check_underflow(x, y)

    def check_underflow(self, x: int, y: int) -> None:
        """Resolve negative water at (x, y) and spread the fix to its neighbours."""
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            if not self._inside(cx, cy):
                continue
            cell = self.cells[self.index(cx, cy)]
            if cell.water >= 0:
                continue
            cell.resolve_underflow()
            stack.extend(
                [(cx, cy + 1), (cx + 1, cy), (cx, cy - 1), (cx - 1, cy)]
            )

    def display_ascii(self, file: Optional[TextIO] = None) -> None:
        """Print water depth as a grey-scale block picture, north row first."""
        out = sys.stdout if file is None else file
        low, high = 0.0, 2.0
        delta = (high - low) / 24.0
        for y in range(self.size_y - 1, -1, -1):
            row = []
            for x in range(self.size_x):
                color = math.floor(self.cells[self.index(x, y)].water / delta)
                if color <= 0:
                    color = -36
                elif color > 23:
                    color = 23
                row.append(f"\033[48;5;{color + 232}m  \033[0m")
            out.write("".join(row) + "\n")
        out.write(f"Wave speed = {WAVE_SPEED:g}\n")

    def set_ground_level(self, x: int, y: int, height: float) -> None:
        if self._inside(x, y):
            self.cells[self.index(x, y)].ground = height

    def set_water_level(self, x: int, y: int, height: float) -> None:
        if self._inside(x, y):
            self.cells[self.index(x, y)].water = height

    def total_water_level(self) -> float:
        return sum(cell.water for cell in self.cells)

    def water_vertex_height(self, x: int, y: int) -> float:
        return self.cells[self.index(x, y)].water_vertex_height()

    def update_ground_normal(self) -> None:
        for cell in self.cells:
            cell.update_ground_normal()

    def load_ground_map(self, height_map: Iterable[float]) -> None:
        """Set ground levels row by row; a short map leaves the rest untouched."""
        for cell, height in zip(self.cells, height_map):
            cell.ground = height

    def reset_water(self) -> None:
        for cell in self.cells:
            cell.reset_water()

    def rise_water(self, intensity: float, threshold: float) -> None:
        """Add water to every cell whose ground is at or below the threshold."""
        if intensity <= 0:
            return
        for cell in self.cells:
            if cell.ground <= threshold:
                cell.add_water(intensity)

    def make_rain(self, rain_intensity: float, droplet_size: float) -> None:
        """Drop rain_intensity * cell-count droplets on random cells."""
        if rain_intensity <= 0 or droplet_size <= 0:
            return
        droplets = int(rain_intensity * self.size_x * self.size_y)
        for _ in range(droplets):
            x = self.rng.randrange(self.size_x)
            y = self.rng.randrange(self.size_y)
            self.cells[self.index(x, y)].add_water(droplet_size)

    def make_wave(self, intensity: float) -> None:
        """Add water along the southern edge."""
        if intensity <= 0:
            return
        for x in range(self.size_x):
            self.cells[self.index(x, 0)].add_water(intensity)

    def flush(self, north: bool, south: bool, east: bool, west: bool) -> None:
        """Drain the chosen borders."""
        edges = []
        if north:
            edges.extend(self.index(x, self.size_y - 1) for x in range(self.size_x))
        if south:
            edges.extend(self.index(x, 0) for x in range(self.size_x))
        if east:
            edges.extend(self.index(self.size_x - 1, y) for y in range(self.size_y))
        if west:
            edges.extend(self.index(0, y) for y in range(self.size_y))
        for i in edges:
            self.cells[i].reset_water()