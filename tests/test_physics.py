"""
PhysicsEngine tests — step order, speed cap, friction, wall bounce, capture.
"""

import math
from dataclasses import replace

import pytest
from pygame.math import Vector2 as Vec2

from shared.game_config import DESKTOP
from client.game_entities import DragGesture, Phase, SimulationState
from client.game_world import PhysicsEngine

BOUNDS = (800, 600)


def make_state(ball=(400.0, 300.0), vel=(0.0, 0.0), hole=(700.0, 100.0)):
    s = SimulationState.fresh(DESKTOP, hole_pos=hole)
    s.ball.pos = Vec2(ball)
    s.ball.vel = Vec2(vel)
    return s


@pytest.fixture
def engine():
    return PhysicsEngine(DESKTOP)


class TestIntegration:

    def test_position_then_friction(self, engine):
        s = make_state(vel=(4.0, -2.0))
        engine.step(s, BOUNDS)
        assert s.ball.pos.x == pytest.approx(404.0)
        assert s.ball.pos.y == pytest.approx(298.0)
        assert s.ball.vel.x == pytest.approx(4.0 * 0.95)
        assert s.ball.vel.y == pytest.approx(-2.0 * 0.95)

    def test_speed_clamped_before_move(self, engine):
        s = make_state(vel=(30.0, 40.0))
        engine.step(s, BOUNDS)
        # clamped to (9, 12) then moved, then friction
        assert s.ball.pos.x == pytest.approx(409.0)
        assert s.ball.pos.y == pytest.approx(312.0)
        assert s.ball.vel.length() == pytest.approx(15.0 * 0.95)

    def test_speed_never_exceeds_cap(self, engine):
        s = make_state(vel=(500.0, -500.0))
        for _ in range(200):
            before = Vec2(s.ball.vel)
            engine.step(s, BOUNDS)
            # post-friction speed is at most the cap times friction
            assert s.ball.vel.length() <= 15.0 * 0.95 + 1e-9, f"speed {s.ball.vel.length()} from {before}"

    def test_friction_decays_to_rest(self, engine):
        s = make_state(vel=(3.0, 0.0))
        for _ in range(200):
            engine.step(s, BOUNDS)
        assert s.ball.vel.length_squared() < DESKTOP.stop_speed_sq


class TestWallBounce:

    def test_low_x_edge_without_friction(self):
        engine = PhysicsEngine(replace(DESKTOP, friction=1.0))
        s = make_state(ball=(10.0 - 0.5, 300.0), vel=(-3.0, 0.0))
        engine.step(s, BOUNDS)
        assert s.ball.pos.x == pytest.approx(10.0)
        assert s.ball.vel.x == pytest.approx(-0.8 * -3.0)

    def test_low_x_edge_with_default_friction(self, engine):
        s = make_state(ball=(10.0 - 0.5, 300.0), vel=(-3.0, 0.0))
        engine.step(s, BOUNDS)
        assert s.ball.pos.x == 10.0
        assert s.ball.vel.x == pytest.approx(-0.8 * 0.95 * -3.0)

    @pytest.mark.parametrize("ball, vel, axis, edge", [
        ((795.0, 300.0), (6.0, 0.0), "x", 790.0),
        ((400.0, 12.0), (0.0, -6.0), "y", 10.0),
        ((400.0, 588.0), (0.0, 6.0), "y", 590.0),
    ])
    def test_other_edges(self, engine, ball, vel, axis, edge):
        s = make_state(ball=ball, vel=vel)
        v_in = getattr(Vec2(vel), axis)
        engine.step(s, BOUNDS)
        assert getattr(s.ball.pos, axis) == edge
        assert getattr(s.ball.vel, axis) == pytest.approx(-0.8 * 0.95 * v_in)

    def test_corner_reflects_both_axes(self, engine):
        s = make_state(ball=(12.0, 12.0), vel=(-5.0, -5.0))
        engine.step(s, BOUNDS)
        assert s.ball.pos == Vec2(10.0, 10.0)
        assert s.ball.vel.x > 0 and s.ball.vel.y > 0

    def test_uses_given_bounds(self, engine):
        s = make_state(ball=(480.0, 300.0), vel=(15.0, 0.0))
        engine.step(s, (500, 600))
        assert s.ball.pos.x == 490.0


class TestHoleAttraction:

    def test_constant_pull_toward_hole(self, engine):
        s = make_state(ball=(420.0, 300.0), hole=(400.0, 300.0))
        engine.step(s, BOUNDS)
        assert s.ball.pos.x == pytest.approx(419.5)
        assert s.ball.vel.x == pytest.approx(-0.5 * 0.95)
        assert s.phase is Phase.IDLE

    def test_pull_independent_of_distance(self, engine):
        near = make_state(ball=(410.0, 300.0), hole=(400.0, 300.0), vel=(3.0, 0.0))
        far = make_state(ball=(428.0, 300.0), hole=(400.0, 300.0), vel=(3.0, 0.0))
        engine.step(near, BOUNDS)
        engine.step(far, BOUNDS)
        assert near.ball.vel.x == pytest.approx(far.ball.vel.x)

    def test_no_pull_outside_sink_distance(self, engine):
        s = make_state(ball=(431.0, 300.0), hole=(400.0, 300.0))
        engine.step(s, BOUNDS)
        assert s.ball.vel == Vec2(0, 0)
        assert s.ball.pos == Vec2(431.0, 300.0)

    def test_ball_on_hole_center_gets_no_nan(self, engine):
        """Direction to the hole is a zero vector; pull contributes nothing."""
        s = make_state(ball=(400.0, 300.0), hole=(400.0, 300.0), vel=(2.0, 0.0))
        engine.step(s, BOUNDS)
        assert all(math.isfinite(c) for c in (*s.ball.pos, *s.ball.vel))
        assert s.ball.pos == Vec2(402.0, 300.0)
        assert s.phase is Phase.IDLE


class TestCapture:

    def test_slow_ball_near_hole_wins(self, engine):
        s = make_state(ball=(404.0, 300.0), hole=(400.0, 300.0), vel=(math.sqrt(0.5), 0.0))
        assert engine.step(s, BOUNDS)
        assert s.won
        assert s.ball.pos == s.hole.pos
        assert s.ball.pos is not s.hole.pos
        assert s.ball.vel == Vec2(0, 0)

    def test_pull_slows_outgoing_ball_enough_to_capture(self, engine):
        """Entry speed^2 1.44, after the pull (0.7, 0) -> 0.49: captured."""
        s = make_state(ball=(404.0, 300.0), hole=(400.0, 300.0), vel=(1.2, 0.0))
        assert engine.step(s, BOUNDS)
        assert s.won
        assert s.ball.pos == s.hole.pos

    def test_pull_speeds_incoming_ball_past_capture(self, engine):
        """Entry speed^2 0.81, after the pull (-1.4, 0) -> 1.96: rolls on."""
        s = make_state(ball=(404.0, 300.0), hole=(400.0, 300.0), vel=(-0.9, 0.0))
        assert not engine.step(s, BOUNDS)
        assert not s.won
        assert s.ball.pos.x == pytest.approx(402.6)
        assert s.ball.vel.x == pytest.approx(-1.4 * 0.95)

    def test_slow_incoming_ball_captured(self, engine):
        s = make_state(ball=(404.0, 300.0), hole=(400.0, 300.0), vel=(-0.3, 0.0))
        assert engine.step(s, BOUNDS)
        assert s.won

    def test_fast_ball_passes_over(self, engine):
        s = make_state(ball=(404.0, 300.0), hole=(400.0, 300.0), vel=(-6.0, 0.0))
        assert not engine.step(s, BOUNDS)
        assert not s.won

    def test_slow_ball_outside_snap_radius(self, engine):
        s = make_state(ball=(406.0, 300.0), hole=(400.0, 300.0))
        assert not engine.step(s, BOUNDS)
        assert not s.won

    def test_pulled_in_eventually(self, engine):
        s = make_state(ball=(425.0, 300.0), hole=(400.0, 300.0))
        for _ in range(600):
            if engine.step(s, BOUNDS):
                break
        assert s.won

    def test_frozen_after_win(self, engine):
        s = make_state(ball=(400.0, 300.0), hole=(400.0, 300.0))
        engine.step(s, BOUNDS)
        assert s.won
        s.ball.vel = Vec2(5.0, 5.0)
        assert not engine.step(s, BOUNDS)
        assert s.ball.pos == Vec2(400.0, 300.0)
        assert s.ball.vel == Vec2(5.0, 5.0)

    def test_win_clears_gesture(self, engine):
        s = make_state(ball=(402.0, 300.0), hole=(400.0, 300.0))
        s.round.phase = Phase.AIMING
        s.gesture = DragGesture(Vec2(402, 300), Vec2(402, 300))
        engine.step(s, BOUNDS)
        assert s.won
        assert s.gesture is None
