"""Free-flying camera driven by the current keyboard state."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

CAMERA_MOV_SPEED = 0.8
CAMERA_ROT_SPEED = 0.8
PITCH_LIMIT = 89.0


@dataclass
class InputState:
    """Keys currently held plus the simulation toggles."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    yaw_left: bool = False
    yaw_right: bool = False
    pitch_up: bool = False
    pitch_down: bool = False
    plus: bool = False
    minus: bool = False

    pause: bool = False
    rain_mode: bool = False
    rise_mode: bool = False
    wave_mode: bool = False
    flush_mode: bool = False

    scroll: int = 0

    reset_water: bool = False


@dataclass
class Camera:
    """Position in world units, yaw and pitch in degrees; z points up."""

    pos_x: float = 0.0
    pos_y: float = 0.0
    pos_z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0

    def update(self, state: InputState) -> None:
        """Move and turn the camera by one frame's worth of input."""
        yaw_rad = math.radians(self.yaw)
        forward_x, forward_y = math.cos(yaw_rad), math.sin(yaw_rad)
        right_x, right_y = -math.sin(yaw_rad), math.cos(yaw_rad)

        if state.forward:
            self.pos_x += forward_x * CAMERA_MOV_SPEED
            self.pos_y += forward_y * CAMERA_MOV_SPEED
        if state.backward:
            self.pos_x -= forward_x * CAMERA_MOV_SPEED
            self.pos_y -= forward_y * CAMERA_MOV_SPEED
        if state.left:
            self.pos_x += right_x * CAMERA_MOV_SPEED
            self.pos_y += right_y * CAMERA_MOV_SPEED
        if state.right:
            self.pos_x -= right_x * CAMERA_MOV_SPEED
            self.pos_y -= right_y * CAMERA_MOV_SPEED
        if state.up:
            self.pos_z += CAMERA_MOV_SPEED
        if state.down:
            self.pos_z -= CAMERA_MOV_SPEED

        if state.yaw_left:
            self.yaw += CAMERA_ROT_SPEED
        if state.yaw_right:
            self.yaw -= CAMERA_ROT_SPEED
        if state.pitch_up:
            self.pitch += CAMERA_ROT_SPEED
        if state.pitch_down:
            self.pitch -= CAMERA_ROT_SPEED

        self.pitch = min(max(self.pitch, -PITCH_LIMIT), PITCH_LIMIT)

        if self.yaw > 360.0:
            self.yaw -= 360.0
        if self.yaw < 0.0:
            self.yaw += 360.0

    def look_direction(self) -> Tuple[float, float, float]:
        """Unit vector the camera looks along."""
        yaw_rad = math.radians(self.yaw)
        pitch_rad = math.radians(self.pitch)
        return (
            math.cos(pitch_rad) * math.cos(yaw_rad),
            math.cos(pitch_rad) * math.sin(yaw_rad),
            math.sin(pitch_rad),
        )