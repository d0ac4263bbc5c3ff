"""Track base class shared by keyframe and recording tracks."""

from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..core.targets import as_target


class TrackType(Enum):
    """Track variants."""
    KEYFRAME = "keyframe"
    NUMBER = "number"
    POSITION = "position"


class Track:
    """
    Named, independently timed unit bound to one target.

    Subclasses provide ``end_time``, ``restart`` and ``to_dict``.
    """

    type: TrackType = None

    def __init__(self, name: str, target: Any = None, timeline=None, target_name: Optional[str] = None):
        self.name = name
        self.target_name = target_name or name
        self.target = as_target(target) if target is not None else None
        self.timeline = timeline
        self.on_update_callback: Optional[Callable] = None

    @property
    def end_time(self) -> float:
        return 0.0

    @property
    def followable(self) -> bool:
        """Whether keyframe properties can follow this track's samples."""
        return False

    def on_update(self, callback: Callable) -> "Track":
        """Register a callback invoked with each entry this track writes."""
        self.on_update_callback = callback
        return self

    def evaluate(self, time: float) -> bool:
        """Write this tick's values; True when a key reached full progress."""
        return False

    def restart(self) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.name, "type": self.type.value, "target_name": self.target_name}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, end_time={self.end_time})"


__all__ = ["Track", "TrackType"]
