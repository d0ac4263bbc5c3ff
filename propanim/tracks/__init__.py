"""
Track variants - keyframe playback and sample recording.
"""

from .base import Track, TrackType
from .keyframe import FollowType, PropertyKeys, KeyframeTrack
from .sampled import AXES, SampledTrack, NumberTrack, PositionTrack

__all__ = [
    "Track",
    "TrackType",
    "FollowType",
    "PropertyKeys",
    "KeyframeTrack",
    "AXES",
    "SampledTrack",
    "NumberTrack",
    "PositionTrack",
]
