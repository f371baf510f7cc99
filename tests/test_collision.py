"""Tests for collection-level collision checks."""

import numpy as np
import pytest

from avoidscape.obstacles.collision import (
    check_collision,
    colliding_indices,
    pick_obstacle,
)
from avoidscape.obstacles.obstacle import Obstacle
from avoidscape.obstacles.obstaclescape import Obstaclescape
from avoidscape.obstacles.shapes import BoxShape


@pytest.fixture
def overlapping(box_palette):
    """Two overlapping boxes centered at x = 0 and x = 1."""
    return Obstaclescape(
        [
            Obstacle(BoxShape(x=0.0, y=0.0, half_width=1.0, half_height=1.0), box_palette),
            Obstacle(BoxShape(x=1.0, y=0.0, half_width=1.0, half_height=1.0), box_palette),
        ]
    )


class TestCollisionChecks:
    """Tests for check_collision, pick_obstacle and colliding_indices."""

    def test_no_collision(self, overlapping):
        """States far from every obstacle do not collide."""
        state = np.array([5.0, 0.0, 0.0, 0.0])
        assert not check_collision(overlapping, state)
        assert pick_obstacle(overlapping, state) is None
        assert colliding_indices(overlapping, state) == []

    def test_pick_first(self, overlapping):
        """Picking returns the first containing obstacle."""
        state = np.array([0.5, 0.0, 0.0, 0.0])
        assert check_collision(overlapping, state)
        assert pick_obstacle(overlapping, state) == 0
        assert colliding_indices(overlapping, state) == [0, 1]

    def test_destroyed_do_not_collide(self, overlapping):
        """Destroyed obstacles no longer collide."""
        state = np.array([0.5, 0.0, 0.0, 0.0])
        overlapping.mark_destroyed(0)
        assert pick_obstacle(overlapping, state) == 1
        overlapping.mark_destroyed(1)
        assert not check_collision(overlapping, state)

    def test_undetected_still_collide(self, overlapping):
        """Physical collision ignores whether the agent knows about it."""
        state = np.array([0.5, 0.0, 0.0, 0.0])
        overlapping.mark_undetected(0)
        overlapping.mark_undetected(1)
        assert check_collision(overlapping, state)
        assert pick_obstacle(overlapping, state) == 0

    def test_does_not_query_palette(self, overlapping, box_palette):
        """Collision checks never query the palette."""
        check_collision(overlapping, np.array([0.5, 0.0, 0.0, 0.0]))
        assert box_palette.queries == []
