"""
Keyframe entries - the atomic timed segment the engine evaluates.

One entry moves one property of one target from the value it holds when
the entry starts to an authored end value.
"""

import numbers
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .easing import Easing, LINEAR, resolve_easing
from .exceptions import AnimationValueError

Number = Union[int, float]

# A numeral followed by a two-letter unit, e.g. "12px", "-1.5em"
_UNIT_VALUE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([A-Za-z%]{2})\s*$")


def split_unit(value: Any) -> Tuple[float, Optional[str]]:
    """
    Split a property value into its numeral and unit suffix.

    Returns:
        (number, unit) where unit is None for plain numbers

    Raises:
        AnimationValueError: If the value cannot be interpolated
    """
    if isinstance(value, bool):
        raise AnimationValueError("Boolean values cannot be interpolated", {"value": value})
    if isinstance(value, numbers.Real):
        return value, None
    if isinstance(value, str):
        match = _UNIT_VALUE.match(value)
        if match:
            return float(match.group(1)), match.group(2)
        try:
            return float(value), None
        except ValueError:
            pass
    raise AnimationValueError(f"Cannot interpolate value {value!r}", {"type": type(value).__name__})


def join_unit(value: Number, unit: Optional[str]) -> Union[Number, str]:
    """Reattach a unit suffix; integral floats are written without '.0'."""
    if not unit:
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{unit}"


class KeyState(Enum):
    """Lifecycle phase of a keyframe entry."""
    PENDING = "pending"
    ACTIVE = "active"
    DONE = "done"


@dataclass(eq=False)
class KeyframeEntry:
    """
    Single timed value transition for one property.

    Entries are compared by identity, so two keys with equal fields stay
    distinct in track lists.

    Attributes:
        property_name: Name of the animated property on the target
        start_time: Absolute start on the owning track's clock (seconds)
        end_time: Absolute end (seconds)
        end_value: Authored value reached at end_time
        start_value: Captured from the target when the entry starts
        easing: Resolved easing reference
        target: Non-owning target handle (get/set by property name)
        parent: Owning track or anim, used for update callbacks only
        unit: Two-letter suffix reattached on write-back, e.g. "px"
    """
    property_name: str
    start_time: float
    end_time: float
    end_value: Number
    start_value: Optional[Number] = None
    easing: Easing = LINEAR
    target: Any = field(default=None, repr=False, compare=False)
    parent: Any = field(default=None, repr=False, compare=False)
    unit: Optional[str] = None
    has_started: bool = False
    has_ended: bool = False
    follow_key: bool = False
    on_start: Optional[Callable[[], None]] = field(default=None, repr=False, compare=False)
    on_end: Optional[Callable[[], None]] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        self.easing = resolve_easing(self.easing)
        end_value, end_unit = split_unit(self.end_value)
        self.end_value = end_value
        if self.unit is None:
            self.unit = end_unit

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def state(self) -> KeyState:
        if self.has_ended:
            return KeyState.DONE
        if self.has_started:
            return KeyState.ACTIVE
        return KeyState.PENDING

    def progress(self, time: float) -> float:
        """Normalized progress at ``time``; duration-zero entries are complete."""
        duration = self.duration
        if not duration:
            return 1.0
        return max(0.0, min((time - self.start_time) / duration, 1.0))

    def restart(self) -> None:
        self.has_started = False
        self.has_ended = False

    def capture_start(self) -> None:
        """Read the live target value as the start of the transition."""
        start_value, unit = split_unit(self.target.get(self.property_name))
        self.start_value = start_value
        if unit:
            self.unit = unit

    def value_at(self, progress: float) -> Number:
        eased = self.easing(progress)
        return self.start_value + (self.end_value - self.start_value) * eased

    def evaluate(self, time: float) -> Optional[float]:
        """
        Advance this entry to ``time`` and write the value to the target.

        Returns:
            The progress used, or None if the entry is pending or done
        """
        if time < self.start_time or self.has_ended:
            return None

        if not self.has_started:
            self.capture_start()
            self.has_started = True
            if self.on_start:
                self.on_start()

        progress = self.progress(time)
        self.target.set(self.property_name, join_unit(self.value_at(progress), self.unit))

        callback = getattr(self.parent, "on_update_callback", None)
        if callback:
            callback(self)

        if time >= self.end_time:
            self.has_ended = True
            if self.on_end:
                self.on_end()

        return progress

    def copy(self, **changes) -> "KeyframeEntry":
        """Copy by value, sharing target and parent."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict (no target or parent)."""
        return {
            "property_name": self.property_name,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "start_value": self.start_value,
            "end_value": self.end_value,
            "easing": str(self.easing),
            "unit": self.unit,
            "follow_key": self.follow_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], target: Any = None, parent: Any = None) -> "KeyframeEntry":
        """Create from dict, binding to a live target."""
        return cls(
            property_name=data["property_name"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            end_value=data["end_value"],
            start_value=data.get("start_value"),
            easing=data.get("easing"),
            unit=data.get("unit"),
            follow_key=data.get("follow_key", False),
            target=target,
            parent=parent,
        )


__all__ = [
    "KeyState",
    "KeyframeEntry",
    "split_unit",
    "join_unit",
]
