"""
Track descriptors - persistable form of timeline tracks.

Descriptors hold plain JSON data only: no timeline, parent or target
references. Loading validates every descriptor before any track is built,
then rebinds each track to a live object through a caller supplied
resolver.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator

from .core.easing import Easing
from .core.exceptions import AnimationError, MalformedDescriptorError, UnresolvedTargetError
from .core.keyframe import split_unit
from .core.logging_config import get_logger, log_performance
from .tracks import FollowType, KeyframeTrack, NumberTrack, PositionTrack, Track

logger = get_logger(__name__)

Resolver = Union[Callable[[str], Any], Mapping[str, Any]]


# =============================================================================
# Descriptor models
# =============================================================================

class KeyDescriptor(BaseModel):
    """One persisted keyframe entry."""

    property_name: str
    start_time: float = Field(ge=0)
    end_time: float = Field(ge=0)
    start_value: Optional[float] = None
    end_value: Union[float, str]
    easing: str = "Linear.EaseNone"
    unit: Optional[str] = None
    follow_key: bool = False

    @field_validator("easing", mode="before")
    @classmethod
    def default_easing(cls, value):
        return value or "Linear.EaseNone"

    @model_validator(mode="after")
    def check_key(self):
        if self.end_time < self.start_time:
            raise ValueError(f"end_time {self.end_time} is before start_time {self.start_time}")
        try:
            Easing.parse(self.easing)
            split_unit(self.end_value)
        except AnimationError as exc:
            raise ValueError(str(exc)) from exc
        return self


class PropertyDescriptor(BaseModel):
    """Persisted keys of one property plus its follow binding."""

    keys: List[KeyDescriptor] = Field(default_factory=list)
    following: bool = False
    follow_track: Optional[str] = None
    follow_type: Optional[FollowType] = None
    follow_axis: Literal["x", "y", "z"] = "x"
    follow_keys: List[KeyDescriptor] = Field(default_factory=list)


class KeyframeTrackDescriptor(BaseModel):
    type: Literal["keyframe"]
    id: str
    target_name: Optional[str] = None
    keys_map: Dict[str, PropertyDescriptor] = Field(default_factory=dict)


class NumberTrackDescriptor(BaseModel):
    type: Literal["number"]
    id: str
    target_name: Optional[str] = None
    input_property: Optional[str] = None
    sample_rate: float = Field(gt=0)
    recording: bool = False
    data: List[float] = Field(default_factory=list)


class PositionData(BaseModel):
    x: List[float] = Field(default_factory=list)
    y: List[float] = Field(default_factory=list)
    z: List[float] = Field(default_factory=list)


class PositionTrackDescriptor(BaseModel):
    type: Literal["position"]
    id: str
    target_name: Optional[str] = None
    input_property: Optional[str] = None
    sample_rate: float = Field(gt=0)
    recording: bool = False
    data: PositionData = Field(default_factory=PositionData)


TrackDescriptor = Annotated[
    Union[KeyframeTrackDescriptor, NumberTrackDescriptor, PositionTrackDescriptor],
    Field(discriminator="type"),
]

_DESCRIPTORS = TypeAdapter(List[TrackDescriptor])


@dataclass
class LoadReport:
    """Outcome of a descriptor load."""
    tracks: List[Track] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)

    @property
    def loaded(self) -> List[str]:
        return [track.name for track in self.tracks]

    @property
    def ok(self) -> bool:
        return not self.skipped


# =============================================================================
# Export
# =============================================================================

def to_track_descriptors(tracks: Sequence[Track]) -> List[Dict[str, Any]]:
    """Convert tracks to JSON-safe descriptors."""
    return [track.to_dict() for track in tracks]


# =============================================================================
# Import
# =============================================================================

def validate_descriptors(descriptors: Any) -> List[BaseModel]:
    """
    Validate raw descriptors.

    Raises:
        MalformedDescriptorError: If any descriptor is structurally invalid
    """
    try:
        models = _DESCRIPTORS.validate_python(descriptors)
    except ValidationError as exc:
        raise MalformedDescriptorError(
            "Invalid track descriptors",
            {"errors": exc.error_count(), "first": exc.errors()[0]["msg"]},
        ) from exc

    names = [model.id for model in models]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise MalformedDescriptorError("Duplicate track ids", {"ids": duplicates})
    return models


def _resolve(resolver: Resolver, name: str) -> Any:
    try:
        if isinstance(resolver, Mapping):
            target = resolver[name]
        else:
            target = resolver(name)
    except LookupError as exc:
        raise UnresolvedTargetError(f"Target '{name}' not found", target_name=name) from exc
    if target is None:
        raise UnresolvedTargetError(f"Target '{name}' not found", target_name=name)
    return target


def _build_track(model: BaseModel, target: Any) -> Track:
    target_name = model.target_name or model.id

    if model.type == "keyframe":
        track = KeyframeTrack(model.id, target, target_name=target_name)
        for property_name, prop in model.keys_map.items():
            track.rebuild_property(property_name, prop.model_dump(mode="json"))
        return track

    cls = NumberTrack if model.type == "number" else PositionTrack
    data = model.data if model.type == "number" else model.data.model_dump()
    return cls(
        model.id,
        target,
        model.sample_rate,
        input_property=model.input_property,
        target_name=target_name,
        recording=model.recording,
        data=data,
    )


def _link_follow_tracks(models: List[BaseModel], tracks: Dict[str, Track]) -> None:
    for model in models:
        if model.type != "keyframe" or model.id not in tracks:
            continue
        track = tracks[model.id]
        for property_name, prop in model.keys_map.items():
            if not prop.follow_track:
                continue
            followed = tracks.get(prop.follow_track)
            if followed is None or not followed.followable:
                # Persisted follow keys stay usable; rebuilding raises FollowTrackError
                logger.warning(
                    f"{model.id}.{property_name}: followed track '{prop.follow_track}' "
                    f"was not loaded"
                )
                continue
            track.keys_map[property_name].follow_track = followed


@log_performance
def from_track_descriptors(descriptors: Any, resolver: Resolver) -> LoadReport:
    """
    Rebuild tracks from descriptors.

    Args:
        descriptors: List of descriptor dicts (as produced by to_track_descriptors)
        resolver: Callable or mapping returning the live object for a target name

    Returns:
        LoadReport with the built tracks and the skipped ones

    Raises:
        MalformedDescriptorError: Before anything is built, if the data is invalid
    """
    models = validate_descriptors(descriptors)
    report = LoadReport()
    built: Dict[str, Track] = {}

    for model in models:
        target_name = model.target_name or model.id
        try:
            target = _resolve(resolver, target_name)
        except UnresolvedTargetError as exc:
            logger.warning(f"Skipping track '{model.id}': {exc}")
            report.skipped[model.id] = str(exc)
            continue
        track = _build_track(model, target)
        built[model.id] = track
        report.tracks.append(track)

    _link_follow_tracks(models, built)
    logger.debug(f"Loaded {len(report.tracks)} tracks, skipped {len(report.skipped)}")
    return report


__all__ = [
    "KeyDescriptor",
    "PropertyDescriptor",
    "KeyframeTrackDescriptor",
    "NumberTrackDescriptor",
    "PositionTrackDescriptor",
    "TrackDescriptor",
    "LoadReport",
    "Resolver",
    "to_track_descriptors",
    "validate_descriptors",
    "from_track_descriptors",
]
