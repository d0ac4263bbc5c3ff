"""
Keyframe tracks - authored keyframes per property, optionally following
another track's recorded samples.

Follow keys are derived on demand: changing a binding, its follow type or
axis rebuilds them, but new samples recorded by the followed track are not
picked up until ``rebuild_follow_keys`` is called again.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional

import numpy as np

from ..core.easing import LINEAR
from ..core.exceptions import FollowTrackError
from ..core.keyframe import KeyframeEntry
from ..core.logging_config import get_logger
from .base import Track, TrackType
from .sampled import AXES, SampledTrack

logger = get_logger(__name__)


class FollowType(Enum):
    """How a property derives its keys from a followed track."""
    IGNORE_KEYS = "ignoreKeys"   # One key per sample, authored keys ignored
    USE_VALUES = "useValues"     # Authored timing, values taken from samples


@dataclass
class PropertyKeys:
    """
    Keys of one animated property.

    Attributes:
        keys: Authored entries sorted by start_time
        following: Whether follow_keys replace keys during playback
        follow_track: Followed recording track (relation only)
        follow_type: Derivation algorithm
        follow_axis: Component read from a followed PositionTrack
        follow_keys: Derived entries, never hand-authored
    """
    keys: List[KeyframeEntry] = field(default_factory=list)
    following: bool = False
    follow_track: Optional[SampledTrack] = field(default=None, repr=False)
    follow_type: Optional[FollowType] = None
    follow_axis: str = "x"
    follow_keys: List[KeyframeEntry] = field(default_factory=list)

    def active_keys(self) -> List[KeyframeEntry]:
        return self.follow_keys if self.following else self.keys

    def sort(self) -> None:
        self.keys.sort(key=lambda k: k.start_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keys": [key.to_dict() for key in self.keys],
            "following": self.following,
            "follow_track": self.follow_track.name if self.follow_track is not None else None,
            "follow_type": self.follow_type.value if self.follow_type else None,
            "follow_axis": self.follow_axis,
            "follow_keys": [key.to_dict() for key in self.follow_keys],
        }


class KeyframeTrack(Track):
    """
    Stores keyframes per property of one target.

    Usage:
        track = KeyframeTrack("box", box)
        track.keyframe({"x": 100, "opacity": 0.5}, duration=2.0)
        track.keyframe({"x": 0}, duration=1.0, easing="Quadratic.EaseOut")
    """

    type = TrackType.KEYFRAME

    def __init__(self, name: str, target: Any, timeline=None, target_name: Optional[str] = None):
        super().__init__(name, target, timeline, target_name)
        self.keys_map: Dict[str, PropertyKeys] = {}
        self.default_easing = LINEAR
        self.default_follow_axis = "x"

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------

    @property
    def properties(self) -> List[str]:
        return list(self.keys_map)

    @property
    def authored_end(self) -> float:
        """End of the last authored key, where ``keyframe`` appends."""
        return max(
            (key.end_time for pk in self.keys_map.values() for key in pk.keys),
            default=0.0,
        )

    def property_keys(self, property_name: str) -> PropertyKeys:
        if property_name not in self.keys_map:
            self.keys_map[property_name] = PropertyKeys(follow_axis=self.default_follow_axis)
        return self.keys_map[property_name]

    def keyframe(self, properties: Mapping[str, Any], duration: float, easing=None) -> "KeyframeTrack":
        """
        Append one key per property after the last authored key.

        Returns self for chaining.
        """
        start = self.authored_end
        for property_name, end_value in properties.items():
            self.add_key(property_name, start, start + duration, end_value, easing)
        return self

    def add_key(self, property_name: str, start_time: float, end_time: float,
                end_value: Any, easing=None) -> KeyframeEntry:
        """Add a key at absolute times, keeping the property's keys sorted."""
        entry = KeyframeEntry(
            property_name=property_name,
            start_time=start_time,
            end_time=end_time,
            end_value=end_value,
            easing=easing or self.default_easing,
            target=self.target,
            parent=self,
        )
        pk = self.property_keys(property_name)
        pk.keys.append(entry)
        pk.sort()
        return entry

    def remove_key(self, property_name: str, entry: KeyframeEntry) -> None:
        self.keys_map[property_name].keys.remove(entry)

    def active_keys(self, property_name: str) -> List[KeyframeEntry]:
        """Keys evaluated for a property: follow keys while following."""
        return self.keys_map[property_name].active_keys()

    def iter_active_keys(self) -> Iterator[KeyframeEntry]:
        for pk in self.keys_map.values():
            yield from pk.active_keys()

    @property
    def end_time(self) -> float:
        return max((key.end_time for key in self.iter_active_keys()), default=0.0)

    # ------------------------------------------------------------------
    # Following
    # ------------------------------------------------------------------

    def follow(self, property_name: str, track: SampledTrack,
               follow_type: FollowType = FollowType.IGNORE_KEYS,
               axis: Optional[str] = None) -> "KeyframeTrack":
        """Bind a property to a recording track and derive its follow keys."""
        if track is None or not track.followable:
            raise FollowTrackError(
                f"Track {getattr(track, 'name', track)!r} cannot be followed",
                track_name=getattr(track, "name", None),
            )
        pk = self.property_keys(property_name)
        pk.following = True
        pk.follow_track = track
        pk.follow_type = FollowType(follow_type)
        if axis is not None:
            pk.follow_axis = self._check_axis(axis)
        self.rebuild_follow_keys(property_name)
        return self

    def unfollow(self, property_name: str) -> None:
        """Drop the binding; authored keys become active again."""
        pk = self.keys_map[property_name]
        pk.following = False
        pk.follow_track = None
        pk.follow_type = None
        pk.follow_keys = []

    def set_follow_type(self, property_name: str, follow_type: FollowType) -> None:
        self.keys_map[property_name].follow_type = FollowType(follow_type)
        self.rebuild_follow_keys(property_name)

    def set_follow_axis(self, property_name: str, axis: str) -> None:
        self.keys_map[property_name].follow_axis = self._check_axis(axis)
        self.rebuild_follow_keys(property_name)

    def rebuild_follow_keys(self, property_name: Optional[str] = None) -> None:
        """
        Re-derive follow keys from the followed tracks' current samples.

        Args:
            property_name: Only rebuild this property (default: all following)

        Raises:
            FollowTrackError: If a followed track was removed from the timeline
        """
        names = [property_name] if property_name else list(self.keys_map)
        for name in names:
            pk = self.keys_map[name]
            if not pk.following:
                continue
            self._check_follow_track(name, pk)
            if pk.follow_type == FollowType.USE_VALUES:
                pk.follow_keys = self._derive_use_values(pk)
            else:
                pk.follow_type = FollowType.IGNORE_KEYS
                pk.follow_keys = self._derive_ignore_keys(name, pk)
            logger.debug(
                f"{self.name}.{name} follows {pk.follow_track.name} "
                f"({pk.follow_type.value}): {len(pk.follow_keys)} keys"
            )

    def _check_axis(self, axis: str) -> str:
        if axis not in AXES:
            raise ValueError(f"axis must be one of {AXES}, got {axis!r}")
        return axis

    def _check_follow_track(self, property_name: str, pk: PropertyKeys) -> None:
        track = pk.follow_track
        if track is None:
            raise FollowTrackError(
                f"{self.name}.{property_name} is following without a track",
            )
        if self.timeline is not None and track not in self.timeline.tracks:
            raise FollowTrackError(
                f"{self.name}.{property_name} follows a track that is no longer on the timeline",
                track_name=track.name,
            )

    def _derive_ignore_keys(self, property_name: str, pk: PropertyKeys) -> List[KeyframeEntry]:
        """One linear key per sample, chained from 0 with the sample period as duration."""
        track = pk.follow_track
        data = track.samples(pk.follow_axis)
        duration = track.sample_rate
        last = len(data) - 1

        keys = []
        for index, start_value in enumerate(data):
            end_value = data[index + 1] if index < last else data[last]
            keys.append(KeyframeEntry(
                property_name=property_name,
                start_time=index * duration,
                end_time=(index + 1) * duration,
                start_value=float(start_value),
                end_value=float(end_value),
                easing=LINEAR,
                target=self.target,
                parent=self,
                follow_key=True,
            ))
        return keys

    def _derive_use_values(self, pk: PropertyKeys) -> List[KeyframeEntry]:
        """Copy authored keys and replace their values with the nearest samples."""
        copies = [key.copy(follow_key=True, has_started=False, has_ended=False) for key in pk.keys]
        data = pk.follow_track.samples(pk.follow_axis)
        if not len(data) or not copies:
            if not len(data):
                logger.warning(f"{self.name}: followed track {pk.follow_track.name} has no samples")
            return copies

        # index = round(time * sample_rate), halves rounded up
        rate = pk.follow_track.sample_rate
        starts = np.array([key.start_time for key in copies]) * rate
        ends = np.array([key.end_time for key in copies]) * rate
        start_idx = np.clip(np.floor(starts + 0.5), 0, len(data) - 1).astype(int)
        end_idx = np.clip(np.floor(ends + 0.5), 0, len(data) - 1).astype(int)

        for key, si, ei in zip(copies, start_idx, end_idx):
            key.start_value = float(data[si])
            key.end_value = float(data[ei])
        return copies

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def evaluate(self, time: float) -> bool:
        """
        Evaluate every active key at ``time``.

        Returns:
            True if any key reached full progress this tick
        """
        completed = False
        for key in list(self.iter_active_keys()):
            progress = key.evaluate(time)
            if progress == 1.0:
                completed = True
        return completed

    def restart(self) -> None:
        """Clear lifecycle flags on authored and follow keys."""
        for pk in self.keys_map.values():
            for key in pk.keys:
                key.restart()
            for key in pk.follow_keys:
                key.restart()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def rebuild_property(self, property_name: str, data: Mapping[str, Any]) -> PropertyKeys:
        """
        Rebuild a property from its persisted form.

        Keys are rebound to this track's target with cleared flags. The
        follow binding keeps only its settings; ``follow_track`` is linked
        by the loader once every track exists.
        """
        follow_type = data.get("follow_type")
        pk = PropertyKeys(
            keys=[KeyframeEntry.from_dict(k, self.target, self) for k in data.get("keys", [])],
            following=bool(data.get("following", False)),
            follow_type=FollowType(follow_type) if follow_type else None,
            follow_axis=data.get("follow_axis") or "x",
            follow_keys=[KeyframeEntry.from_dict(k, self.target, self) for k in data.get("follow_keys", [])],
        )
        pk.sort()
        self.keys_map[property_name] = pk
        return pk

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["keys_map"] = {name: pk.to_dict() for name, pk in self.keys_map.items()}
        return data


__all__ = [
    "FollowType",
    "PropertyKeys",
    "KeyframeTrack",
]
