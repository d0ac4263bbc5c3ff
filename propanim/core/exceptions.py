"""
Exception hierarchy for the animation engine.

Every error carries a message and a ``details`` dict for diagnostics.
"""

from typing import Any, Dict, Optional


class AnimationError(Exception):
    """Base class for engine errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class EasingLookupError(AnimationError, LookupError):
    """Unknown easing family or variant."""


class FollowTrackError(AnimationError, LookupError):
    """A follow binding references a track that is missing or cannot be followed."""

    def __init__(self, message: str, track_name=None, **kwargs):
        details = kwargs.copy()
        if track_name:
            details["track"] = track_name
        super().__init__(message, details)


class UnresolvedTargetError(AnimationError):
    """A persisted track names a target that the resolver could not find."""

    def __init__(self, message: str, target_name=None, **kwargs):
        details = kwargs.copy()
        if target_name:
            details["target"] = target_name
        super().__init__(message, details)


class MalformedDescriptorError(AnimationError, ValueError):
    """Persisted track data is structurally invalid; the whole load is aborted."""


class AnimationValueError(AnimationError, ValueError):
    """A target property holds a value that cannot be interpolated."""


__all__ = [
    "AnimationError",
    "EasingLookupError",
    "FollowTrackError",
    "UnresolvedTargetError",
    "MalformedDescriptorError",
    "AnimationValueError",
]
