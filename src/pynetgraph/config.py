"""
Tunable parameters of the network layout heuristics.

Every magic number used by the placement and arrangement passes lives here,
with the defaults the layout has always used.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


# Default heuristic values
DEFAULT_DISTANCE = 250.0
STEP_LENGTH = 50.0
MAX_ITERATIONS = 200
GROUP_SIZE = 6
RING_ANGLE_STEP = 60.0
ANGLE_SNAP_THRESHOLD = 5.0
ANGLE_SNAP_NUDGE = 45.0
TWO_NEIGHBOR_ANGLE_REDUCTION = 45.0
BACKOFF_STEPS = 4
SINGLE_BACKOFF_STEPS = 6
JITTER_STEPS = 2.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Parameters for placing vertices and arranging components.

    Attributes:
        base_distance: Distance between a vertex and its parent, scaled up for
            vertices with more than three neighbors
        step_length: Length of one inward translation while collapsing
        max_iterations: Maximum number of collapse steps per component
        group_size: Number of components sharing one ring
        ring_angle_step: Angle between consecutive components of a ring
        angle_snap_threshold: Angular distance (degrees) under which a placed
            cycle neighbor is considered to lie on the parent's direction
        angle_snap_nudge: Rotation applied to the parent's cursor in that case
        two_neighbor_angle_reduction: Reduction of the angular step of
            vertices with exactly two neighbors
        backoff_steps: Steps undone after a multi-vertex component collides
        single_backoff_steps: Steps undone after a single vertex enters the
            bounding box of the other components
        jitter_steps: Bound, in step lengths, of the random offset given to
            single vertices
        seed: Seed of the jitter generator (None for a fresh one)
        reject_self_loops: Raise on A -> A links instead of dropping them
        warn_on_overlap: Emit an OverlapWarning when collapsing leaves a
            component overlapping another
    """
    base_distance: float = DEFAULT_DISTANCE
    step_length: float = STEP_LENGTH
    max_iterations: int = MAX_ITERATIONS
    group_size: int = GROUP_SIZE
    ring_angle_step: float = RING_ANGLE_STEP
    angle_snap_threshold: float = ANGLE_SNAP_THRESHOLD
    angle_snap_nudge: float = ANGLE_SNAP_NUDGE
    two_neighbor_angle_reduction: float = TWO_NEIGHBOR_ANGLE_REDUCTION
    backoff_steps: int = BACKOFF_STEPS
    single_backoff_steps: int = SINGLE_BACKOFF_STEPS
    jitter_steps: float = JITTER_STEPS
    seed: Optional[int] = None
    reject_self_loops: bool = False
    warn_on_overlap: bool = True

    def __post_init__(self) -> None:
        if self.base_distance <= 0:
            raise ValueError(f"base_distance must be positive, got {self.base_distance}")
        if self.step_length <= 0:
            raise ValueError(f"step_length must be positive, got {self.step_length}")
        if self.group_size <= 0:
            raise ValueError(f"group_size must be positive, got {self.group_size}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must not be negative, got {self.max_iterations}")
        if self.backoff_steps < 0 or self.single_backoff_steps < 0:
            raise ValueError("back-off steps must not be negative")
        if self.jitter_steps < 0:
            raise ValueError(f"jitter_steps must not be negative, got {self.jitter_steps}")

    def replace(self, **changes: Any) -> LayoutConfig:
        """Return a copy with the given fields changed."""
        return replace(self, **changes)
