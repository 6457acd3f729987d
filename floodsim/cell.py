"""A single column of the height-field water model."""

from __future__ import annotations

import math
from typing import Optional, Tuple

CELL_SIZE = 0.5  # metres
DELTA_TIME = 1.0 / 60.0  # seconds
HALF_LIFE = 2.0  # seconds
WAVE_SPEED = 10.0  # metres per second

PROPAGATION = (WAVE_SPEED * WAVE_SPEED) / (CELL_SIZE * CELL_SIZE)
DAMPENING = 0.5 ** (DELTA_TIME / HALF_LIFE)

WET_THRESHOLD = 0.001

Vec3 = Tuple[float, float, float]


def _normalize(x: float, y: float, z: float) -> Vec3:
    length = math.sqrt(x * x + y * y + z * z)
    return (x / length, y / length, z / length)


class Cell:
    """Water and ground level of one grid cell plus its flow velocities.

    A cell owns the velocity towards its north and east neighbours; the
    velocities towards south and west are owned by those neighbours.
    """

    __slots__ = (
        "water",
        "ground",
        "velocity_n",
        "velocity_e",
        "total_velocity",
        "normal",
        "ground_normal",
        "north",
        "east",
        "south",
        "west",
    )

    def __init__(self, water: float = 0.0, ground: float = 0.0) -> None:
        self.water = water
        self.ground = ground
        self.velocity_n = 0.0
        self.velocity_e = 0.0
        self.total_velocity = 0.0
        self.normal: Vec3 = (0.0, 0.0, 0.0)
        self.ground_normal: Vec3 = (0.0, 0.0, 0.0)
        self.north: Optional[Cell] = None
        self.east: Optional[Cell] = None
        self.south: Optional[Cell] = None
        self.west: Optional[Cell] = None

    def link(
        self,
        north: Optional[Cell],
        east: Optional[Cell],
        south: Optional[Cell],
        west: Optional[Cell],
    ) -> None:
        """Attach the four neighbouring cells; None marks a border."""
        self.north = north
        self.east = east
        self.south = south
        self.west = west

    def _neighbours(self):
        return (self.north, self.east, self.south, self.west)

    def acceleration(self, other_water: float, other_ground: float) -> float:
        """Velocity change caused by the height difference to a neighbour.

        The lower side is raised to the ground of the higher side, so water
        never flows up against a wall.
        """
        own_total = self.water + self.ground
        other_total = other_water + other_ground
        if other_total > own_total:
            other_height = other_total
            height = max(other_ground, own_total)
        else:
            height = own_total
            other_height = max(self.ground, other_total)
        return DELTA_TIME * PROPAGATION * (other_height - height)

    def update_velocity(self) -> None:
        if self.north is not None:
            self.velocity_n = DAMPENING * self.velocity_n + self.acceleration(
                self.north.water, self.north.ground
            )
        else:
            self.velocity_n = 0.0
        if self.east is not None:
            self.velocity_e = DAMPENING * self.velocity_e + self.acceleration(
                self.east.water, self.east.ground
            )
        else:
            self.velocity_e = 0.0
        self.calculate_total_velocity()

    def calculate_total_velocity(self) -> None:
        """Sum the inflow through all four faces."""
        total = self.velocity_n + self.velocity_e
        if self.south is not None:
            total -= self.south.velocity_n
        if self.west is not None:
            total -= self.west.velocity_e
        self.total_velocity = total

    def update_water_level(self) -> None:
        self.water += DELTA_TIME * self.total_velocity

    def resolve_underflow(self) -> None:
        """Take a negative water level back from the neighbours it drained into."""
        if self.water >= 0:
            return

        outflows = []
        if self.velocity_n < 0:
            outflows.append(self.north)
        if self.velocity_e < 0:
            outflows.append(self.east)
        if self.south is not None and self.south.velocity_n > 0:
            outflows.append(self.south)
        if self.west is not None and self.west.velocity_e > 0:
            outflows.append(self.west)

        if outflows:
            share = self.water / len(outflows)
            for neighbour in outflows:
                neighbour.water += share

        self.velocity_n = 0.0
        self.velocity_e = 0.0
        if self.south is not None:
            self.south.velocity_n = 0.0
        if self.west is not None:
            self.west.velocity_e = 0.0
        self.water = 0.0

    def _total_of(self, neighbour: Optional[Cell]) -> float:
        return self.total_level() if neighbour is None else neighbour.total_level()

    def _ground_of(self, neighbour: Optional[Cell]) -> float:
        return self.ground if neighbour is None else neighbour.ground

    def update_normal(self) -> None:
        nx = self._total_of(self.west) - self._total_of(self.east)
        ny = self._total_of(self.south) - self._total_of(self.north)
        self.normal = _normalize(nx, ny, 2.0)

    def update_ground_normal(self) -> None:
        nx = self._ground_of(self.west) - self._ground_of(self.east)
        ny = self._ground_of(self.south) - self._ground_of(self.north)
        self.ground_normal = _normalize(nx, ny, 2.0)

    def reset_water(self) -> None:
        self.water = 0.0
        self.velocity_n = 0.0
        self.velocity_e = 0.0

    def add_water(self, intensity: float) -> None:
        self.water = max(self.water + intensity, 0.0)

    def add_velocity(self, north: float, east: float, south: float, west: float) -> None:
        self.velocity_n += north
        self.velocity_e += east
        if self.south is not None:
            self.south.velocity_n += south
        if self.west is not None:
            self.west.velocity_e += west

    def water_vertex_height(self) -> float:
        """Surface height for drawing; dry cells take the mean of wet neighbours."""
        if self.water > WET_THRESHOLD:
            return self.ground + self.water
        wet = [
            n.water + n.ground
            for n in self._neighbours()
            if n is not None and n.water > WET_THRESHOLD
        ]
        return sum(wet) / len(wet) if wet else 0.0

    def total_level(self) -> float:
        return self.water + self.ground

    def velocity_s(self) -> float:
        return self.south.velocity_n if self.south is not None else 0.0

    def velocity_w(self) -> float:
        return self.west.velocity_e if self.west is not None else 0.0