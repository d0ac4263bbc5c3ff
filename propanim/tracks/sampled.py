"""
Recording tracks - sample a live value into arrays on a fixed cadence.

NumberTrack stores one scalar per sample, PositionTrack stores three
parallel x/y/z component arrays. Either can be followed by keyframe
properties (see ``KeyframeTrack.follow``).
"""

import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..core.exceptions import AnimationValueError
from ..core.logging_config import get_logger
from ..core.targets import CallableSource, PropertyTarget, as_target
from .base import Track, TrackType

logger = get_logger(__name__)

AXES = ("x", "y", "z")

# Absorbs float drift when next_tick accumulates sample_rate steps
_INDEX_EPSILON = 1e-9


def _as_source(source: Any):
    if callable(source) and not isinstance(source, (Mapping, PropertyTarget, type)):
        return CallableSource(source)
    return as_target(source)


def _put(series: List[float], index: int, value: float) -> None:
    """Overwrite ``series[index]`` or extend up to it, holding the last sample across gaps."""
    if index < len(series):
        series[index] = value
        return
    filler = series[-1] if series else value
    series.extend([filler] * (index - len(series)))
    series.append(value)


class SampledTrack(Track):
    """
    Base for tracks that record a live source.

    Args:
        name: Track id
        source: Object read on every sample (dict, object, get/set target or callable)
        sample_rate: Seconds between samples
        input_property: Property read from the source
        target_name: Name used to re-resolve the source after loading
        recording: Whether samples are taken while the timeline plays
    """

    default_input_property: Optional[str] = None

    def __init__(
        self,
        name: str,
        source: Any,
        sample_rate: float,
        input_property: Optional[str] = None,
        target_name: Optional[str] = None,
        recording: bool = True,
        timeline=None,
    ):
        super().__init__(name, timeline=timeline, target_name=target_name)
        sample_rate = float(sample_rate)
        if not sample_rate > 0:
            raise AnimationValueError(
                "sample_rate must be positive", {"track": name, "sample_rate": sample_rate}
            )
        self.target = _as_source(source) if source is not None else None
        self.sample_rate = sample_rate
        self.input_property = input_property or self.default_input_property
        self.recording = recording
        self.next_tick = 0.0

    @property
    def source(self):
        return self.target

    @property
    def followable(self) -> bool:
        return True

    @property
    def sample_count(self) -> int:
        raise NotImplementedError

    @property
    def end_time(self) -> float:
        # A live recording never bounds playback
        if self.recording:
            return 0.0
        return self.sample_count * self.sample_rate

    def sample_index(self, tick: float) -> int:
        return int(math.floor(tick / self.sample_rate + _INDEX_EPSILON))

    def start_recording(self) -> None:
        logger.debug(f"Recording started on {self.name}")
        self.recording = True
        self.next_tick = 0.0

    def stop_recording(self) -> None:
        logger.debug(f"Recording stopped on {self.name} ({self.sample_count} samples)")
        self.recording = False

    def restart(self) -> None:
        self.next_tick = 0.0

    def record(self, time: float, end_time: float) -> int:
        """
        Take one sample for the current tick.

        The cursor wraps to 0 once it passes the timeline end so recording
        restarts together with looping.

        Returns:
            Index the sample was stored at
        """
        if self.next_tick > end_time:
            self.next_tick = 0.0

        while self.next_tick < time:
            self.next_tick += self.sample_rate

        index = self.sample_index(self.next_tick)
        self._store(index, self.get_target_value())
        return index

    def get_target_value(self):
        raise NotImplementedError

    def samples(self, axis: Optional[str] = None) -> np.ndarray:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def _store(self, index: int, value) -> None:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "input_property": self.input_property,
            "sample_rate": self.sample_rate,
            "recording": self.recording,
        })
        return data


class NumberTrack(SampledTrack):
    """Records a scalar per sample."""

    type = TrackType.NUMBER
    default_input_property = "value"

    def __init__(self, *args, data: Optional[Sequence[float]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[float] = [float(v) for v in data] if data is not None else []

    @property
    def sample_count(self) -> int:
        return len(self.data)

    def get_target_value(self) -> float:
        """Read the live value from the bound source."""
        return float(self.target.get(self.input_property))

    def samples(self, axis: Optional[str] = None) -> np.ndarray:
        return np.asarray(self.data, dtype=np.float64)

    def clear(self) -> None:
        self.data = []
        self.next_tick = 0.0

    def _store(self, index: int, value: float) -> None:
        _put(self.data, index, value)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["data"] = list(self.data)
        return data


class PositionTrack(SampledTrack):
    """Records x/y/z components per sample into parallel arrays."""

    type = TrackType.POSITION

    def __init__(self, *args, data: Optional[Dict[str, Sequence[float]]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        data = data or {}
        self.data: Dict[str, List[float]] = {
            axis: [float(v) for v in data.get(axis, [])] for axis in AXES
        }

    @property
    def sample_count(self) -> int:
        return max(len(values) for values in self.data.values())

    def get_target_value(self) -> List[float]:
        """
        Read the live position.

        With an ``input_property`` the source value must be an (x, y, z)
        sequence; otherwise the x, y and z properties are read one by one.
        """
        if self.input_property is not None or isinstance(self.target, CallableSource):
            value = self.target.get(self.input_property)
            if len(value) != 3:
                raise AnimationValueError(
                    "Position sources must provide three components",
                    {"track": self.name, "value": value},
                )
            return [float(v) for v in value]
        return [float(self.target.get(axis)) for axis in AXES]

    def samples(self, axis: Optional[str] = None) -> np.ndarray:
        axis = axis or "x"
        if axis not in self.data:
            raise AnimationValueError(f"Unknown axis '{axis}'", {"track": self.name, "axes": AXES})
        return np.asarray(self.data[axis], dtype=np.float64)

    def clear(self) -> None:
        self.data = {axis: [] for axis in AXES}
        self.next_tick = 0.0

    def _store(self, index: int, value: List[float]) -> None:
        for axis, component in zip(AXES, value):
            _put(self.data[axis], index, component)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["data"] = {axis: list(values) for axis, values in self.data.items()}
        return data


__all__ = [
    "AXES",
    "SampledTrack",
    "NumberTrack",
    "PositionTrack",
]
