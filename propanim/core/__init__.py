"""
Core engine components - easing, keyframe entries, targets and errors.
"""

from .easing import (
    Easing,
    LINEAR,
    BEZIER_PRESETS,
    EASING_FUNCTIONS,
    bezier_easing,
    ease,
    get_easing_function,
    list_easings,
    resolve_easing,
)

from .keyframe import (
    KeyState,
    KeyframeEntry,
    split_unit,
    join_unit,
)

from .targets import (
    PropertyTarget,
    MappingTarget,
    AttributeTarget,
    CallableSource,
    as_target,
)

from .events import EventEmitter

from .exceptions import (
    AnimationError,
    EasingLookupError,
    FollowTrackError,
    UnresolvedTargetError,
    MalformedDescriptorError,
    AnimationValueError,
)

from .logging_config import (
    get_logger,
    setup_logging,
    log_performance,
    LogContext,
)

__all__ = [
    # Easing
    "Easing",
    "LINEAR",
    "BEZIER_PRESETS",
    "EASING_FUNCTIONS",
    "bezier_easing",
    "ease",
    "get_easing_function",
    "list_easings",
    "resolve_easing",
    # Keyframe
    "KeyState",
    "KeyframeEntry",
    "split_unit",
    "join_unit",
    # Targets
    "PropertyTarget",
    "MappingTarget",
    "AttributeTarget",
    "CallableSource",
    "as_target",
    # Events
    "EventEmitter",
    # Exceptions
    "AnimationError",
    "EasingLookupError",
    "FollowTrackError",
    "UnresolvedTargetError",
    "MalformedDescriptorError",
    "AnimationValueError",
    # Logging
    "get_logger",
    "setup_logging",
    "log_performance",
    "LogContext",
]
