# client/game_world.py
import random
from typing import Any, Callable, Dict, Optional, Tuple

from pygame.math import Vector2 as Vec2

from shared.game_config import GolfConfig, CFG
from shared.geometry import PointLike, clamp_length, ratio, safe_normalize, vec
from client.game_entities import DragGesture, Phase, SimulationState

Bounds = Tuple[float, float]


# ---------------- Input -> shot ----------------
class InteractionController:
    """
    Turns pointer press/drag/release into a shot.

    idle --press on a stopped ball--> aiming --release--> idle (+1 stroke)
    Nothing is accepted while the round is won.
    """

    def __init__(self, cfg: GolfConfig = CFG):
        self.cfg = cfg

    def can_grab(self, state: SimulationState, pos: PointLike) -> bool:
        if state.phase is not Phase.IDLE:
            return False
        if state.ball.speed_sq() >= self.cfg.stop_speed_sq:
            return False
        return state.ball.pos.distance_to(vec(pos)) < self.cfg.grab_tolerance

    def on_pointer_down(self, state: SimulationState, pos: PointLike) -> bool:
        if not self.can_grab(state, pos):
            return False
        p = vec(pos)
        state.gesture = DragGesture(anchor=p, current=Vec2(p))
        state.round.phase = Phase.AIMING
        return True

    def on_pointer_move(self, state: SimulationState, pos: PointLike):
        if state.gesture is not None:
            state.gesture.current = vec(pos)

    def on_pointer_up(self, state: SimulationState, pos: PointLike) -> Optional[Vec2]:
        """Commit the shot. Returns the velocity added, or None if not aiming.

        A release always counts as a stroke, zero-length drags included.
        """
        g = state.gesture
        if g is None:
            return None

        shot = g.shot_vector(vec(pos))
        power = self.power_for(shot)
        impulse = shot * self.cfg.impulse_scale * power

        # additive: residual velocity compounds with the new shot
        state.ball.vel += impulse

        state.gesture = None
        state.round.phase = Phase.IDLE
        state.round.strokes += 1
        return impulse

    def power_for(self, shot: Vec2) -> float:
        return ratio(shot.length(), self.cfg.max_drag)

    def current_power(self, state: SimulationState, pos: Optional[PointLike] = None) -> Optional[float]:
        g = state.gesture
        if g is None:
            return None
        return self.power_for(g.shot_vector(None if pos is None else vec(pos)))


# ---------------- Per-tick physics ----------------
class PhysicsEngine:
    def __init__(self, cfg: GolfConfig = CFG):
        self.cfg = cfg

    def step(self, state: SimulationState, bounds: Bounds) -> bool:
        """Advance one fixed tick. Returns True on the tick the ball is sunk."""
        if state.won:
            return False

        cfg = self.cfg
        ball, hole = state.ball, state.hole

        dist = ball.pos.distance_to(hole.pos)

        # 1. hole attraction (constant magnitude)
        if dist < cfg.sink_distance:
            ball.vel += safe_normalize(hole.pos - ball.pos) * cfg.sink_pull

            # 2. capture, judged on the velocity after the pull
            if dist < cfg.win_snap_distance and ball.vel.length_squared() < cfg.win_speed_sq:
                self._sink(state)
                return True

        # 3. hard speed cap
        ball.vel = clamp_length(ball.vel, cfg.max_velocity)

        # 4. integrate
        ball.pos += ball.vel

        # 5. friction
        ball.vel *= cfg.friction

        # 6. walls
        self.collide_walls(state, bounds)
        return False

    def collide_walls(self, state: SimulationState, bounds: Bounds):
        ball = state.ball
        w, h = bounds
        e = self.cfg.wall_restitution
        r = ball.r

        if ball.pos.x < r:
            ball.pos.x = r
            ball.vel.x *= -e
        elif ball.pos.x > w - r:
            ball.pos.x = w - r
            ball.vel.x *= -e

        if ball.pos.y < r:
            ball.pos.y = r
            ball.vel.y *= -e
        elif ball.pos.y > h - r:
            ball.pos.y = h - r
            ball.vel.y *= -e

    @staticmethod
    def _sink(state: SimulationState):
        state.round.phase = Phase.WON
        state.ball.pos = Vec2(state.hole.pos)
        state.ball.vel = Vec2(0, 0)
        state.gesture = None


# ---------------- Round start / reset ----------------
class RoundLifecycle:
    def __init__(self, cfg: GolfConfig = CFG, rng: Optional[random.Random] = None):
        self.cfg = cfg
        self.rng = rng or random.Random()

    def _inset(self, bounds: Bounds) -> Tuple[float, float, float, float]:
        w, h = bounds
        m = self.cfg.hole_margin
        x0, x1, y0, y1 = m, w - m, m, h - m
        if x1 < x0 or y1 < y0:
            raise ValueError(f"playfield {w}x{h} too small for hole margin {m}")
        return x0, x1, y0, y1

    def check_placeable(self, bounds: Bounds):
        """Raise ValueError if no hole position can satisfy the constraints."""
        x0, x1, y0, y1 = self._inset(bounds)
        start = vec(self.cfg.start_pos)
        farthest = max(start.distance_to((x, y)) for x in (x0, x1) for y in (y0, y1))
        if farthest <= self.cfg.min_hole_distance:
            raise ValueError(
                f"no hole position in {bounds[0]}x{bounds[1]} is "
                f"{self.cfg.min_hole_distance} away from start {self.cfg.start_pos}"
            )

    def place_hole(self, bounds: Bounds) -> Vec2:
        self.check_placeable(bounds)
        x0, x1, y0, y1 = self._inset(bounds)
        start = vec(self.cfg.start_pos)
        min_d = self.cfg.min_hole_distance

        # rejection sampling: uniform in the inset rect, retry while too close
        while True:
            p = Vec2(self.rng.uniform(x0, x1), self.rng.uniform(y0, y1))
            if p.distance_to(start) >= min_d:
                return p

    def start_round(self, state: SimulationState, bounds: Bounds) -> SimulationState:
        # hole first so a bad playfield leaves the state untouched
        state.hole.pos = self.place_hole(bounds)
        state.hole.r = self.cfg.hole_r

        state.ball.pos = vec(self.cfg.start_pos)
        state.ball.vel = Vec2(0, 0)
        state.ball.r = self.cfg.ball_r

        state.round.strokes = 0
        state.round.phase = Phase.IDLE
        state.gesture = None
        return state

    reset = start_round


# ---------------- World ----------------
class GolfWorld:
    """
    One hole, played forever: generate, sink, reset.

    Per tick the owner feeds pointer events first, then calls tick();
    velocity added by a release is seen by the same tick's clamp and
    integration. `bounds` is queried on every tick and every reset, so a
    resizable/fullscreen surface can change size between them.
    """

    def __init__(self, bounds: Callable[[], Bounds], cfg: GolfConfig = CFG,
                 rng: Optional[random.Random] = None):
        self.cfg = cfg
        self.bounds = bounds

        self.controller = InteractionController(cfg)
        self.physics = PhysicsEngine(cfg)
        self.lifecycle = RoundLifecycle(cfg, rng)

        self.state = SimulationState.fresh(cfg)
        self.ticks: int = 0
        self.reset()

    # ---------------- Lifecycle ----------------
    def reset(self):
        self.lifecycle.reset(self.state, self.bounds())
        self.ticks = 0
        h = self.state.hole.pos
        print(f"[game] new hole at ({h.x:.0f}, {h.y:.0f})")

    # ---------------- Input ----------------
    def on_pointer_down(self, pos) -> bool:
        return self.controller.on_pointer_down(self.state, pos)

    def on_pointer_move(self, pos):
        self.controller.on_pointer_move(self.state, pos)

    def on_pointer_up(self, pos) -> Optional[Vec2]:
        return self.controller.on_pointer_up(self.state, pos)

    def current_power(self, pos=None) -> Optional[float]:
        return self.controller.current_power(self.state, pos)

    # ---------------- Simulation ----------------
    def tick(self) -> bool:
        sunk = self.physics.step(self.state, self.bounds())
        self.ticks += 1
        if sunk:
            print(f"[game] sunk in {self.state.round.strokes} stroke(s)")
        return sunk

    @property
    def won(self) -> bool:
        return self.state.won

    @property
    def strokes(self) -> int:
        return self.state.round.strokes

    def ball_stopped(self) -> bool:
        return self.state.ball.speed_sq() < self.cfg.stop_speed_sq

    # ---------------- Read-only view ----------------
    def snapshot(self) -> Dict[str, Any]:
        s = self.state
        g = s.gesture
        return {
            "ball": (float(s.ball.pos.x), float(s.ball.pos.y)),
            "ball_vel": (float(s.ball.vel.x), float(s.ball.vel.y)),
            "ball_r": float(s.ball.r),
            "hole": (float(s.hole.pos.x), float(s.hole.pos.y)),
            "hole_r": float(s.hole.r),
            "phase": s.phase.value,
            "dragging": s.dragging,
            "anchor": None if g is None else (float(g.anchor.x), float(g.anchor.y)),
            "pointer": None if g is None else (float(g.current.x), float(g.current.y)),
            "power": self.current_power(),
            "strokes": int(s.round.strokes),
            "won": s.won,
            "tick": self.ticks,
        }
