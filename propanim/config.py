"""Timeline configuration - playback defaults applied at construction."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from .core.easing import Easing

# Loop policies
LOOP_INFINITE = -1
LOOP_FOREVER = 0   # keep advancing past the end, finished tracks are dropped
LOOP_ONCE = 1


@dataclass(frozen=True)
class TimelineConfig:
    """Configuration for a Timeline.

    This is a frozen dataclass so a config can be shared between timelines
    without one of them changing the others.
    """

    # Playback
    loop_mode: int = LOOP_INFINITE
    autoplay: bool = True

    # Recording tracks
    default_sample_rate: float = 0.1

    # Authoring
    default_easing: str = "Linear.EaseNone"
    default_follow_axis: str = "x"

    def __post_init__(self):
        if self.loop_mode < LOOP_INFINITE:
            raise ValueError(f"loop_mode must be >= -1, got {self.loop_mode}")
        if not self.default_sample_rate > 0:
            raise ValueError(f"default_sample_rate must be positive, got {self.default_sample_rate}")
        # Fail early on unknown easing names
        Easing.parse(self.default_easing)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimelineConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


DEFAULT_CONFIG = TimelineConfig()


__all__ = [
    "LOOP_INFINITE",
    "LOOP_FOREVER",
    "LOOP_ONCE",
    "TimelineConfig",
    "DEFAULT_CONFIG",
]
