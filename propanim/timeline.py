"""
Timeline - global clock and per-tick evaluation of tracks.

An external driver calls ``update(delta_time)`` once per frame. The
timeline advances its clock, applies the loop policy, then writes the
interpolated values of every active keyframe onto its targets and takes
samples for recording tracks.

Usage:
    timeline = Timeline()
    box = {"x": 0}
    timeline.create_keyframe_track("box", box).keyframe({"x": 100}, duration=2.0)

    while timeline.playing:
        timeline.update(1 / 60)
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .anim import Anim
from .config import DEFAULT_CONFIG, LOOP_FOREVER, LOOP_INFINITE, TimelineConfig
from .core.easing import Easing
from .core.events import EventEmitter
from .core.exceptions import MalformedDescriptorError
from .core.keyframe import KeyframeEntry
from .core.logging_config import get_logger
from .serialization import LoadReport, Resolver, from_track_descriptors, to_track_descriptors
from .tracks import KeyframeTrack, NumberTrack, PositionTrack, Track

logger = get_logger(__name__)


class PlaybackState(Enum):
    """Observable playback state."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class Timeline(EventEmitter):
    """
    Clock, loop policy and track collection.

    Events:
        "update": emitted at the start of every ``update`` call
        "loop": emitted with the loop count when playback wraps to 0
        "complete": emitted when a finite loop policy stops playback
        "track:added" / "track:removed": emitted with the track

    Attributes:
        time: Playback position in seconds
        total_time: Elapsed playing time, never reset by looping
        playing: Whether update advances the clock
        loop_mode: -1 infinite, 0 forever without looping, n >= 1 play n times
        loop_count: Completions so far
        tracks: Ordered track collection
        anims: Entries registered by fluent ``Anim`` builders
        end_time: Cached end of the longest track
    """

    def __init__(self, name: str = "Global", config: Optional[TimelineConfig] = None):
        super().__init__()
        self.config = config or DEFAULT_CONFIG
        self.name = name
        self.tracks: List[Track] = []
        self.anims: List[KeyframeEntry] = []
        self.time = 0.0
        self.total_time = 0.0
        self.loop_count = 0
        self.loop_mode = self.config.loop_mode
        self.playing = self.config.autoplay
        self.end_time = 0.0

    # ------------------------------------------------------------------
    # Playback control
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        if self.playing:
            return PlaybackState.PLAYING
        if self.time == 0:
            return PlaybackState.STOPPED
        return PlaybackState.PAUSED

    def loop(self, n: int) -> "Timeline":
        """
        Set the loop policy.

        -1 loops forever, 0 keeps time running past the end without looping
        (finished tracks are discarded), 1 plays once, n > 1 plays n times.
        """
        if n < LOOP_INFINITE:
            raise ValueError(f"loop mode must be >= -1, got {n}")
        self.loop_mode = n
        return self

    def play(self) -> None:
        if self.time > self.end_time:
            self.time = 0.0
            self.loop_count = 0
            self.restart_tracks()
        logger.debug(f"{self.name}: play at {self.time:.3f}s")
        self.playing = True

    def pause(self) -> None:
        logger.debug(f"{self.name}: pause at {self.time:.3f}s")
        self.playing = False

    def stop(self) -> None:
        logger.debug(f"{self.name}: stop")
        self.playing = False
        self.time = 0.0
        self.loop_count = 0
        self.restart_tracks()

    def update(self, delta_time: float) -> None:
        """Advance the clock by ``delta_time`` seconds and apply values."""
        # Observers redraw even while paused
        self.emit("update")

        if self.playing:
            self.total_time += delta_time
            self.time += delta_time

        if self.playing and self.loop_mode != LOOP_FOREVER:
            animation_end = self.find_animation_end()

            if self.time > animation_end:
                self.loop_count += 1

                # loop(n) plays n times in total, so loop(1) stops after the first pass
                if self.loop_mode == LOOP_INFINITE or self.loop_count < self.loop_mode:
                    logger.debug(f"{self.name}: loop {self.loop_count} at {self.time:.3f}s")
                    self.time = 0.0
                    self.restart_tracks()
                    self.emit("loop", self.loop_count)
                else:
                    logger.debug(f"{self.name}: finished after {self.loop_count} plays")
                    self.playing = False
                    self.emit("complete")

        self.apply_values()

    def find_animation_end(self) -> float:
        """Longest end time across tracks and anims; also refreshes ``end_time``."""
        end_time = max((track.end_time for track in self.tracks), default=0.0)
        end_time = max([end_time] + [entry.end_time for entry in self.anims])
        self.end_time = end_time
        return end_time

    def restart_tracks(self) -> None:
        """Clear every lifecycle flag and reset recording cursors."""
        for track in self.tracks:
            track.restart()
        for entry in self.anims:
            entry.restart()

    def apply_values(self) -> None:
        """Evaluate every track at the current time."""
        if not self.playing:
            return

        finished = []
        for track in self.tracks:
            if getattr(track, "recording", False):
                track.record(self.time, self.end_time)

            if track.evaluate(self.time) and self.loop_mode == LOOP_FOREVER:
                finished.append(track)

        for entry in self.anims:
            entry.evaluate(self.time)

        # Compact once evaluation is done
        if finished:
            self.tracks[:] = [track for track in self.tracks if track not in finished]
            for track in finished:
                logger.debug(f"{self.name}: discarded finished track {track.name}")
                track.timeline = None
                self.emit("track:removed", track)

    # ------------------------------------------------------------------
    # Track collection
    # ------------------------------------------------------------------

    def add_track(self, track: Track) -> Track:
        track.timeline = self
        self.tracks.append(track)
        self.emit("track:added", track)
        return track

    def remove_track(self, track: Track) -> None:
        self.tracks.remove(track)
        track.timeline = None
        self.emit("track:removed", track)

    def get_track(self, name: str) -> Track:
        """Find a track by name; raises KeyError if absent."""
        for track in self.tracks:
            if track.name == name:
                return track
        raise KeyError(name)

    def create_keyframe_track(self, name: str, target: Any, target_name: Optional[str] = None) -> KeyframeTrack:
        track = KeyframeTrack(name, target, target_name=target_name)
        track.default_easing = Easing.parse(self.config.default_easing)
        track.default_follow_axis = self.config.default_follow_axis
        return self.add_track(track)

    def create_number_track(
        self,
        name: str,
        source: Any,
        sample_rate: Optional[float] = None,
        input_property: Optional[str] = None,
        target_name: Optional[str] = None,
    ) -> NumberTrack:
        track = NumberTrack(
            name,
            source,
            sample_rate or self.config.default_sample_rate,
            input_property=input_property,
            target_name=target_name,
        )
        return self.add_track(track)

    def create_position_track(
        self,
        name: str,
        source: Any,
        sample_rate: Optional[float] = None,
        input_property: Optional[str] = None,
        target_name: Optional[str] = None,
    ) -> PositionTrack:
        track = PositionTrack(
            name,
            source,
            sample_rate or self.config.default_sample_rate,
            input_property=input_property,
            target_name=target_name,
        )
        return self.add_track(track)

    def animate(self, name: str, target: Any) -> Anim:
        """Start a fluent animation chain on ``target``."""
        return Anim(name, target, self)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_track_descriptors(self) -> List[Dict[str, Any]]:
        return to_track_descriptors(self.tracks)

    def from_track_descriptors(self, descriptors: Any, resolver: Resolver, append: bool = False) -> LoadReport:
        """
        Replace (or extend) the tracks from descriptors.

        Invalid data raises MalformedDescriptorError and leaves the timeline
        untouched; tracks whose target cannot be resolved are skipped.
        """
        report = from_track_descriptors(descriptors, resolver)
        if not append:
            for track in list(self.tracks):
                self.remove_track(track)
        for track in report.tracks:
            self.add_track(track)
        self.find_animation_end()
        return report

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_track_descriptors(), indent=indent)

    def load_json(self, text: str, resolver: Resolver, append: bool = False) -> LoadReport:
        try:
            descriptors = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedDescriptorError("Track data is not valid JSON", {"error": str(exc)}) from exc
        return self.from_track_descriptors(descriptors, resolver, append=append)

    def save(self, path: Union[str, Path]) -> None:
        """Save track descriptors to a JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            f.write(self.to_json())

    def load(self, path: Union[str, Path], resolver: Resolver, append: bool = False) -> LoadReport:
        """Load track descriptors from a JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            return self.load_json(f.read(), resolver, append=append)

    def __repr__(self) -> str:
        return (
            f"Timeline(name={self.name!r}, time={self.time:.3f}, state={self.state.value}, "
            f"tracks={len(self.tracks)})"
        )


__all__ = [
    "PlaybackState",
    "Timeline",
]
