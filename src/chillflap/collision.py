"""
collision.py: Shape tests and the per-tick contact scan.
"""

from typing import Iterable

from .data_models import ContactEvent, ContactKind, Flyer, Obstacle, ScoreTrigger


def circle_vs_aabb(circle_pos: tuple[float, float], radius: float,
                   aabb_pos: tuple[float, float], half_extents: tuple[float, float]) -> bool:
    """Overlap test between a circle and an axis-aligned box. Touching is not overlap."""
    closest = tuple(
        max(aabb_pos[i] - half_extents[i], min(circle_pos[i], aabb_pos[i] + half_extents[i]))
        for i in range(2)
    )
    dist_sq = sum((circle_pos[i] - closest[i]) ** 2 for i in range(2))
    if dist_sq == 0.0:
        # Center inside the box
        return True
    return dist_sq < radius * radius


class CollisionDetector:
    """Enumerates flyer x trigger and flyer x obstacle pairs."""

    def overlaps(self, flyer: Flyer, entity) -> bool:
        return circle_vs_aabb(flyer.position, flyer.radius, entity.position, entity.half_extents)

    def check_contacts(self, flyer: Flyer, obstacles: Iterable[Obstacle],
                       triggers: Iterable[ScoreTrigger]) -> list[ContactEvent]:
        """
        Returns every contact this tick, score contacts first, so a gap
        cleared on the same frame as a crash still counts.
        """
        events = [
            ContactEvent(ContactKind.SCORE, trigger.id)
            for trigger in triggers if self.overlaps(flyer, trigger)
        ]
        events.extend(
            ContactEvent(ContactKind.LETHAL, obstacle.id)
            for obstacle in obstacles if self.overlaps(flyer, obstacle)
        )
        return events
