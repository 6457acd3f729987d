"""Headless driver: input handling, water controls and the frame loop."""

from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional, Sequence, TextIO, Tuple

from floodsim.camera import Camera, InputState
from floodsim.mapgen import load_height_map
from floodsim.surface import WaterSurface

DEFAULT_SIZE = 400
TARGET_ASPECT = 4.0 / 3.0
MAX_INTENSITY = 20

RISE_STEP = 0.0015
RISE_THRESHOLD = 0.1
RAIN_STEP = 0.000025
RAIN_DROPLET_SIZE = 1.5
WAVE_STEP = 0.3

_HELD_KEYS = {
    "w": "forward",
    "s": "backward",
    "a": "left",
    "d": "right",
    "e": "up",
    "q": "down",
    "up": "pitch_up",
    "down": "pitch_down",
    "left": "yaw_left",
    "right": "yaw_right",
    "=": "plus",
    "-": "minus",
    "1": "rise_mode",
    "2": "rain_mode",
    "3": "wave_mode",
}


def controls_text() -> str:
    """Help text listing the keyboard controls."""
    return (
        "Controls:\n"
        "\t WASD\t\t-> camera movement\n"
        "\t ArrowKeys\t-> camera angle\n"
        "\t 1 + scroll\t-> change water rise intensity\n"
        "\t 1 + ['+' or '-']\n"
        "\t 2 + scroll\t-> change rain intensity\n"
        "\t 2 + ['+' or '-']\n"
        "\t 3 + scroll\t-> create wave\n"
        "\t 3 + ['+' or '-']\n"
        "\t 4\t\t\t-> flush N and W side\n"
        "\t Spacebar\t-> pause simulation\n"
        "\t Delete\t\t-> reset simuation\n"
    )


def fit_viewport(width: int, height: int) -> Tuple[int, int, int, int]:
    """Centred 4:3 viewport (x, y, width, height) covering a window."""
    if height != 0 and width / height < TARGET_ASPECT:
        view_height = height
        view_width = int(height * TARGET_ASPECT)
    else:
        view_width = width
        view_height = int(width / TARGET_ASPECT)
    return (
        int((width - view_width) / 2),
        int((height - view_height) / 2),
        view_width,
        view_height,
    )


def _clamp(value: int) -> int:
    return max(0, min(value, MAX_INTENSITY))


class _FrameCounter:
    """Reports the number of frames completed in each wall-clock second."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.count = 0
        self.start = 0.0

    def tick(self) -> None:
        if self.count == 0:
            self.start = time.time()
        self.count += 1
        now = time.time()
        if now - self.start >= 1:
            self.stream.write(f"{self.count}FPS\n")
            self.count = 0
            self.start = now


class Simulation:
    """Owns the water surface, the camera and the current input state."""

    def __init__(self) -> None:
        self.surface: Optional[WaterSurface] = None
        self.camera = Camera()
        self.input = InputState()
        self.rain_intensity = 0
        self.rise_intensity = 0
        self.wave_intensity = 0
        self.stream: TextIO = sys.stdout

    def initialize_water_surface(self, height_map: Sequence[float], size: int) -> None:
        """Create a size*size surface and lay the height map on it row by row."""
        if len(height_map) > size * size:
            raise ValueError("heightMap is larger than expected")
        self.surface = WaterSurface(size, size)
        for i, height in enumerate(height_map):
            y, x = divmod(i, size)
            self.surface.set_ground_level(x, y, height)
        self.surface.update_ground_normal()

    def initialize_camera(self, size: int) -> None:
        """Place the camera outside the south-west corner looking across the map."""
        self.camera.pos_x = int(-size / 8)
        self.camera.pos_y = int(-size / 8)
        self.camera.pos_z = int((size + size) / 8)
        self.camera.pitch = -35.0
        self.camera.yaw = 45.0

    def handle_key(self, key: str, pressed: bool) -> None:
        """Apply a key press or release; unknown keys are ignored."""
        key = key.lower()
        attribute = _HELD_KEYS.get(key)
        if attribute is not None:
            setattr(self.input, attribute, pressed)
            return
        if not pressed:
            return
        if key == "delete":
            self.input.reset_water = True
        elif key == "space":
            self.input.pause = not self.input.pause
        elif key == "4":
            self.input.flush_mode = not self.input.flush_mode
            self.stream.write(f"Flush = {int(self.input.flush_mode)}\n")

    def handle_scroll(self, offset: float) -> None:
        self.input.scroll = int(offset)

    def _require_surface(self) -> WaterSurface:
        if self.surface is None:
            raise RuntimeError("water surface is not initialized")
        return self.surface

    def water_control(self) -> None:
        """Adjust intensities from input and feed water sources for one frame."""
        surface = self._require_surface()
        state = self.input

        if state.scroll:
            if state.rise_mode:
                self.rise_intensity = _clamp(self.rise_intensity + state.scroll)
                self.stream.write(f"rise intensity = {self.rise_intensity}\n")
            if state.rain_mode:
                self.rain_intensity = _clamp(self.rain_intensity + state.scroll)
                self.stream.write(f"rain intensity = {self.rain_intensity}\n")
            if state.wave_mode:
                self.wave_intensity = _clamp(self.wave_intensity + state.scroll)
                self.stream.write(f"wave intensity = {self.wave_intensity}\n")

        for held, delta in ((state.plus, 1), (state.minus, -1)):
            if not held:
                continue
            if state.rise_mode:
                self.rise_intensity = _clamp(self.rise_intensity + delta)
            elif state.rain_mode:
                self.rain_intensity = _clamp(self.rain_intensity + delta)
            elif state.wave_mode:
                self.wave_intensity = _clamp(self.wave_intensity + delta)

        if state.reset_water:
            surface.reset_water()
            self.rise_intensity = 0
            self.rain_intensity = 0
            self.wave_intensity = 0
            state.reset_water = False

        if self.rise_intensity:
            surface.rise_water(self.rise_intensity * RISE_STEP, RISE_THRESHOLD)
        if self.rain_intensity:
            surface.make_rain(self.rain_intensity * RAIN_STEP, RAIN_DROPLET_SIZE)
        if self.wave_intensity:
            surface.make_wave(self.wave_intensity * WAVE_STEP)
        if state.flush_mode:
            surface.flush(True, False, True, False)

    def step(self) -> None:
        """Advance one frame: move the camera and, unless paused, the water."""
        surface = self._require_surface()
        self.camera.update(self.input)
        if not self.input.pause:
            self.water_control()
            surface.update()
        self.input.scroll = 0

    def run(
        self,
        height_map: Sequence[float],
        size: int,
        frames: Optional[int] = None,
        stream: Optional[TextIO] = None,
    ) -> WaterSurface:
        """Set up the scene and run frames steps, or until interrupted if None."""
        if size < 0:
            raise ValueError("invalid size")
        if stream is not None:
            self.stream = stream
        self.initialize_water_surface(height_map, size)
        self.initialize_camera(size)
        self.stream.write(controls_text())

        counter = _FrameCounter(self.stream)
        done = 0
        while frames is None or done < frames:
            self.step()
            counter.tick()
            done += 1
        return self._require_surface()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="floodsim", description="Water flow simulation")
    parser.add_argument("map", nargs="?", help=".mod1 point file or grey-scale image")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="grid size")
    parser.add_argument("--frames", type=int, default=None, help="frames to simulate")
    parser.add_argument("--ascii", action="store_true", help="print the water at the end")
    args = parser.parse_args(argv)

    simulation = Simulation()
    try:
        height_map: List[float] = []
        if args.map is not None:
            height_map = load_height_map(args.map, args.size)
        surface = simulation.run(height_map, args.size, args.frames)
    except KeyboardInterrupt:
        return 0
    except (ValueError, RuntimeError, OSError) as exc:
        print(exc)
        return 1
    if args.ascii:
        surface.display_ascii()
    return 0


if __name__ == "__main__":
    sys.exit(main())