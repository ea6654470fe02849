"""
physics_core.py: Deterministic flyer kinematics.

World coordinates are y-up: gravity is negative and a flap pushes the
flyer toward larger y. Rotation is cosmetic and derived from velocity.
"""

import math
from typing import Optional

from .data_models import Flyer, GameConfig


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def shortest_arc(from_angle: float, to_angle: float) -> float:
    """Signed angle in [-pi, pi] that turns from_angle onto to_angle."""
    delta = to_angle - from_angle
    return math.atan2(math.sin(delta), math.cos(delta))


class PhysicsBody:
    """
    Kinematic integrator for the flyer.
    Holds no per-flyer state of its own; every call mutates the given Flyer.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    @property
    def spawn_pose(self) -> tuple[float, float]:
        return (self.config.screen_width / 4, self.config.screen_height / 2)

    def create_flyer(self) -> Flyer:
        x, y = self.spawn_pose
        cfg = self.config
        return Flyer(x=x, y=y, width=cfg.flyer_size, height=cfg.flyer_size,
                     radius=cfg.flyer_radius)

    def respawn(self, flyer: Flyer):
        """Puts the flyer back at its spawn pose, at rest and frozen."""
        flyer.x, flyer.y = self.spawn_pose
        flyer.vx = 0.0
        flyer.vy = 0.0
        flyer.rotation = 0.0
        flyer.dynamic = False

    def apply_impulse(self, flyer: Flyer, force: Optional[float] = None) -> bool:
        """
        Replaces the vertical velocity with the upward impulse.
        Ignored while the flyer is already rising at max velocity, so
        repeated flaps never stack. Returns True if the impulse applied.
        """
        if flyer.vy >= self.config.max_velocity:
            return False
        force = self.config.impulse_force if force is None else force
        flyer.vy = 0.0
        flyer.vy += force
        return True

    def clamp_velocity(self, flyer: Flyer):
        limit = self.config.max_velocity
        flyer.vy = clamp(flyer.vy, -limit, limit)

    def integrate(self, flyer: Flyer, dt: float):
        """Advances a dynamic flyer by dt seconds."""
        if not flyer.dynamic:
            return
        if dt <= 0:
            self.clamp_to_screen(flyer)
            return
        cfg = self.config

        flyer.vy += cfg.gravity * dt
        flyer.vy *= max(0.0, 1.0 - cfg.linear_damping * dt)
        self.clamp_velocity(flyer)

        flyer.x += flyer.vx * dt
        flyer.y += flyer.vy * dt

        self.clamp_to_screen(flyer)
        self.ease_rotation(flyer, dt)

    def clamp_to_screen(self, flyer: Flyer):
        """Pins the flyer under the ceiling. No bounce."""
        if flyer.y > self.config.screen_height:
            flyer.y = self.config.screen_height
            flyer.vy = 0.0

    def is_below_screen(self, flyer: Flyer) -> bool:
        return flyer.y < -flyer.height

    def target_rotation(self, vy: float) -> float:
        cfg = self.config
        return clamp(vy * cfg.rotation_scale, cfg.min_rotation, cfg.max_rotation)

    def ease_rotation(self, flyer: Flyer, dt: float):
        """Turns a dt/duration share of the way toward the target angle."""
        target = self.target_rotation(flyer.vy)
        duration = self.config.rotation_duration
        if duration <= 0 or dt >= duration:
            flyer.rotation = target
            return
        flyer.rotation += shortest_arc(flyer.rotation, target) * (dt / duration)
