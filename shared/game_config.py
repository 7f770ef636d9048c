# shared/game_config.py
from dataclasses import dataclass
from typing import Dict, Tuple

@dataclass(frozen=True)
class GolfConfig:
    name: str = "desktop"

    start_pos: Tuple[float, float] = (100.0, 500.0)

    ball_r: float = 10.0
    hole_r: float = 15.0            # visual only

    # hole attraction / capture
    sink_distance: float = 30.0
    sink_pull: float = 0.5          # constant pull per tick, not inverse-square
    win_snap_distance: float = 5.0
    win_speed_sq: float = 1.0

    # input
    stop_speed_sq: float = 0.1      # ball counts as stopped below this
    grab_factor: float = 2.0        # grab tolerance = grab_factor * ball_r
    max_drag: float = 200.0         # pixels for full power
    impulse_scale: float = 0.15     # velocity per pixel of drag at full power

    # integration (per tick, no dt scaling)
    max_velocity: float = 15.0
    friction: float = 0.95
    wall_restitution: float = 0.8

    # hole placement
    hole_margin: float = 50.0
    min_hole_distance: float = 300.0

    fullscreen: bool = False

    @property
    def grab_tolerance(self) -> float:
        return self.grab_factor * self.ball_r

    def validate(self) -> "GolfConfig":
        """Raise ValueError on a parameter set the simulation can't run with."""
        for f in ("ball_r", "hole_r", "sink_distance", "sink_pull", "win_snap_distance",
                  "win_speed_sq", "stop_speed_sq", "grab_factor", "impulse_scale",
                  "max_drag", "max_velocity", "min_hole_distance"):
            if getattr(self, f) <= 0:
                raise ValueError(f"{self.name}: {f} must be > 0")
        if self.hole_margin < 0:
            raise ValueError(f"{self.name}: hole_margin must be >= 0")
        if not 0.0 < self.friction <= 1.0:
            raise ValueError(f"{self.name}: friction must be in (0, 1]")
        if not 0.0 < self.wall_restitution <= 1.0:
            raise ValueError(f"{self.name}: wall_restitution must be in (0, 1]")
        if self.win_snap_distance >= self.sink_distance:
            raise ValueError(f"{self.name}: win_snap_distance must be < sink_distance")
        return self

# Desktop build: fixed 800x600 window.
DESKTOP = GolfConfig()

# Mobile build: fullscreen, bounds come from the live surface; bigger
# ball and capture radii for finger input.
MOBILE = GolfConfig(
    name="mobile",
    ball_r=20.0,
    hole_r=30.0,
    sink_distance=60.0,
    sink_pull=0.5,
    win_snap_distance=10.0,
    grab_factor=2.5,
    max_drag=300.0,
    hole_margin=80.0,
    min_hole_distance=400.0,
    fullscreen=True,
)

VARIANTS: Dict[str, GolfConfig] = {c.name: c for c in (DESKTOP, MOBILE)}

def get_variant(name: str) -> GolfConfig:
    key = (name or "").strip().lower()
    if key not in VARIANTS:
        raise ValueError(f"unknown variant {name!r} (expected one of: {', '.join(sorted(VARIANTS))})")
    return VARIANTS[key].validate()

CFG = DESKTOP
