# client/game_entities.py
import enum
from dataclasses import dataclass, field
from typing import Optional

import pygame

from shared.game_config import GolfConfig
from shared.geometry import vec

Vec2 = pygame.math.Vector2


class Phase(enum.Enum):
    IDLE = "idle"        # free to aim once the ball has stopped
    AIMING = "aiming"    # drag gesture in progress
    WON = "won"          # ball captured; frozen until reset


@dataclass
class Ball:
    pos: Vec2
    vel: Vec2
    r: float

    def speed_sq(self) -> float:
        return self.vel.length_squared()


@dataclass
class Hole:
    pos: Vec2
    r: float                  # visual radius; capture uses the config distances


@dataclass
class DragGesture:
    anchor: Vec2              # pointer position at press time
    current: Vec2             # last known pointer position

    def shot_vector(self, pointer: Optional[Vec2] = None) -> Vec2:
        # slingshot: pulling back launches forward
        end = self.current if pointer is None else pointer
        return self.anchor - end


@dataclass
class RoundState:
    strokes: int = 0
    phase: Phase = Phase.IDLE

    @property
    def won(self) -> bool:
        return self.phase is Phase.WON


@dataclass
class SimulationState:
    """Everything one round mutates. Passed explicitly to the controller,
    the physics step and the lifecycle; nothing lives in module globals."""
    ball: Ball
    hole: Hole
    round: RoundState = field(default_factory=RoundState)
    gesture: Optional[DragGesture] = None

    @classmethod
    def fresh(cls, cfg: GolfConfig, hole_pos=(0.0, 0.0)) -> "SimulationState":
        return cls(
            ball=Ball(vec(cfg.start_pos), Vec2(0, 0), cfg.ball_r),
            hole=Hole(vec(hole_pos), cfg.hole_r),
        )

    @property
    def phase(self) -> Phase:
        return self.round.phase

    @property
    def won(self) -> bool:
        return self.round.won

    @property
    def dragging(self) -> bool:
        return self.gesture is not None
