"""
Property animation engine.

Time-driven keyframe playback over arbitrary target objects, with loop
policies, easing, recording tracks and keyframes that follow recorded data.

Usage:
    from propanim import Timeline

    box = {"x": 0, "left": "0px"}
    timeline = Timeline()
    timeline.loop(1)

    track = timeline.create_keyframe_track("box", box)
    track.keyframe({"x": 100, "left": 200}, duration=2.0, easing="Quadratic.EaseInOut")

    # Drive it from your frame loop
    while timeline.playing:
        timeline.update(1 / 60)

    # Persist and restore
    data = timeline.to_track_descriptors()
    timeline.from_track_descriptors(data, {"box": box})
"""

from .core import (
    # Easing
    Easing,
    LINEAR,
    BEZIER_PRESETS,
    EASING_FUNCTIONS,
    bezier_easing,
    ease,
    get_easing_function,
    list_easings,
    resolve_easing,
    # Keyframe
    KeyState,
    KeyframeEntry,
    split_unit,
    join_unit,
    # Targets
    PropertyTarget,
    MappingTarget,
    AttributeTarget,
    CallableSource,
    as_target,
    # Events
    EventEmitter,
    # Exceptions
    AnimationError,
    EasingLookupError,
    FollowTrackError,
    UnresolvedTargetError,
    MalformedDescriptorError,
    AnimationValueError,
    # Logging
    get_logger,
    setup_logging,
    log_performance,
    LogContext,
)

from .tracks import (
    Track,
    TrackType,
    FollowType,
    PropertyKeys,
    KeyframeTrack,
    SampledTrack,
    NumberTrack,
    PositionTrack,
)

from .anim import Anim, AnimGroup

from .config import (
    LOOP_INFINITE,
    LOOP_FOREVER,
    LOOP_ONCE,
    TimelineConfig,
    DEFAULT_CONFIG,
)

from .serialization import (
    LoadReport,
    to_track_descriptors,
    from_track_descriptors,
    validate_descriptors,
)

from .timeline import PlaybackState, Timeline

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core - Easing
    "Easing",
    "LINEAR",
    "BEZIER_PRESETS",
    "EASING_FUNCTIONS",
    "bezier_easing",
    "ease",
    "get_easing_function",
    "list_easings",
    "resolve_easing",
    # Core - Keyframe
    "KeyState",
    "KeyframeEntry",
    "split_unit",
    "join_unit",
    # Core - Targets
    "PropertyTarget",
    "MappingTarget",
    "AttributeTarget",
    "CallableSource",
    "as_target",
    # Core - Events
    "EventEmitter",
    # Core - Exceptions
    "AnimationError",
    "EasingLookupError",
    "FollowTrackError",
    "UnresolvedTargetError",
    "MalformedDescriptorError",
    "AnimationValueError",
    # Core - Logging
    "get_logger",
    "setup_logging",
    "log_performance",
    "LogContext",
    # Tracks
    "Track",
    "TrackType",
    "FollowType",
    "PropertyKeys",
    "KeyframeTrack",
    "SampledTrack",
    "NumberTrack",
    "PositionTrack",
    # Anim
    "Anim",
    "AnimGroup",
    # Config
    "LOOP_INFINITE",
    "LOOP_FOREVER",
    "LOOP_ONCE",
    "TimelineConfig",
    "DEFAULT_CONFIG",
    # Serialization
    "LoadReport",
    "to_track_descriptors",
    "from_track_descriptors",
    "validate_descriptors",
    # Timeline
    "PlaybackState",
    "Timeline",
]
