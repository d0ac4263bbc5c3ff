"""
Unit Tests for Timeline playback

Run with: pytest tests/test_timeline.py -v
"""

import numpy as np
import pytest

from propanim import (
    LOOP_FOREVER,
    NumberTrack,
    PlaybackState,
    Timeline,
    TimelineConfig,
)


def tick(timeline, delta, count=1):
    for _ in range(count):
        timeline.update(delta)


class TestPlayback:
    """Tests for the clock and playback state."""

    def test_defaults(self, timeline):
        assert timeline.playing
        assert timeline.loop_mode == -1
        assert timeline.state == PlaybackState.PLAYING

    def test_interpolates_track(self, timeline, box):
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)

        timeline.update(1.0)

        assert box["x"] == pytest.approx(50)

    def test_numpy_scalar_property(self, timeline):
        box = {"x": np.int64(0)}
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)

        timeline.update(1.0)

        assert box["x"] == pytest.approx(50)

    def test_unit_property(self, timeline, box):
        timeline.create_keyframe_track("box", box).keyframe({"left": 100}, 2.0)

        values = []
        for _ in range(4):
            timeline.update(0.5)
            values.append(box["left"])

        assert values == ["25px", "50px", "75px", "100px"]

    def test_pause_keeps_time(self, timeline, box):
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)
        timeline.update(0.5)
        timeline.pause()
        timeline.update(0.5)

        assert timeline.time == pytest.approx(0.5)
        assert timeline.state == PlaybackState.PAUSED
        assert box["x"] == pytest.approx(25)

    def test_update_event_while_paused(self, timeline):
        calls = []
        timeline.on("update", lambda: calls.append(1))
        timeline.pause()
        timeline.update(0.1)

        assert calls == [1]
        assert timeline.time == 0.0

    def test_stop_resets(self, timeline, box):
        track = timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)
        recorder = timeline.create_number_track("level", {"value": 1.0}, 0.5)
        timeline.update(1.0)

        timeline.stop()

        assert timeline.time == 0.0
        assert timeline.state == PlaybackState.STOPPED
        assert recorder.next_tick == 0.0
        assert not any(k.has_started for k in track.iter_active_keys())

    def test_autoplay_disabled(self, box):
        timeline = Timeline(config=TimelineConfig(autoplay=False))
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)
        timeline.update(1.0)

        assert timeline.time == 0.0
        assert box["x"] == 0

        timeline.play()
        timeline.update(1.0)
        assert box["x"] == pytest.approx(50)

    def test_find_animation_end(self, timeline, box):
        timeline.create_keyframe_track("a", box).keyframe({"x": 1}, 1.0)
        timeline.create_keyframe_track("b", box).keyframe({"y": 1}, 3.0)

        assert timeline.find_animation_end() == pytest.approx(3.0)
        assert timeline.end_time == pytest.approx(3.0)

    def test_restart_tracks_idempotent(self, timeline, box):
        track = timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)
        timeline.update(1.0)

        timeline.restart_tracks()
        first = [k.state for k in track.iter_active_keys()]
        timeline.restart_tracks()

        assert [k.state for k in track.iter_active_keys()] == first


class TestLooping:
    """Tests for loop policies."""

    def test_play_once(self, timeline, box):
        completed = []
        timeline.on("complete", lambda: completed.append(timeline.time))
        timeline.loop(1)
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 1.0)

        tick(timeline, 0.6, 2)

        assert not timeline.playing
        assert timeline.loop_count == 1
        assert timeline.time == pytest.approx(1.2)
        assert completed == [pytest.approx(1.2)]

    def test_play_once_finishes_at_end_value(self, timeline, box):
        timeline.loop(1)
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 1.0)

        tick(timeline, 0.5, 2)
        assert box["x"] == pytest.approx(100)
        timeline.update(0.5)

        assert not timeline.playing
        assert box["x"] == pytest.approx(100)

    def test_play_n_times(self, timeline, box):
        loops, completed = [], []
        timeline.on("loop", loops.append)
        timeline.on("complete", lambda: completed.append(1))
        timeline.loop(2)
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 1.0)

        timeline.update(1.5)
        assert timeline.playing
        assert timeline.time == 0.0
        assert loops == [1]

        timeline.update(1.5)
        assert not timeline.playing
        assert timeline.loop_count == 2
        assert completed == [1]

    def test_infinite_loop(self, timeline, box):
        timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 2.0)

        tick(timeline, 1.0, 2)
        assert timeline.time == pytest.approx(2.0)

        timeline.update(1.0)
        assert timeline.time == 0.0
        assert timeline.loop_count == 1
        assert timeline.total_time == pytest.approx(3.0)
        assert timeline.playing

    def test_loop_restarts_keys(self, timeline, box):
        track = timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 1.0)
        timeline.update(1.0)
        assert all(k.has_ended for k in track.iter_active_keys())

        timeline.update(0.5)

        # wrapped to 0 and started again with the live value
        assert timeline.time == 0.0
        assert all(k.has_started and not k.has_ended for k in track.iter_active_keys())

    def test_play_after_complete_restarts(self, timeline, box):
        timeline.loop(1)
        track = timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 1.0)
        tick(timeline, 0.6, 2)

        timeline.play()

        assert timeline.playing
        assert timeline.time == 0.0
        assert timeline.loop_count == 0
        assert not any(k.has_started for k in track.iter_active_keys())

    def test_invalid_loop_mode(self, timeline):
        with pytest.raises(ValueError):
            timeline.loop(-2)

    def test_config_loop_mode(self):
        timeline = Timeline(config=TimelineConfig(loop_mode=3))

        assert timeline.loop_mode == 3


class TestForeverMode:
    """loop(0): time keeps running and finished tracks are discarded."""

    def test_finished_track_is_discarded(self, timeline, box):
        removed = []
        timeline.on("track:removed", removed.append)
        timeline.loop(LOOP_FOREVER)
        track = timeline.create_keyframe_track("box", box).keyframe({"x": 100}, 3.0)

        tick(timeline, 1.0, 3)

        assert track not in timeline.tracks
        assert removed == [track]
        assert box["x"] == pytest.approx(100)
        assert timeline.total_time == pytest.approx(3.0)

        timeline.update(1.0)
        assert timeline.total_time == pytest.approx(4.0)
        assert timeline.time == pytest.approx(4.0)
        assert timeline.playing

    def test_other_tracks_still_evaluated(self, timeline):
        first, second = {"x": 0}, {"x": 0}
        timeline.loop(LOOP_FOREVER)
        timeline.create_keyframe_track("first", first).keyframe({"x": 10}, 1.0)
        timeline.create_keyframe_track("second", second).keyframe({"x": 10}, 2.0)

        timeline.update(1.0)

        assert [t.name for t in timeline.tracks] == ["second"]
        assert second["x"] == pytest.approx(5)


class TestTrackCollection:
    """Tests for adding, finding and removing tracks."""

    def test_add_and_get(self, timeline, box):
        added = []
        timeline.on("track:added", added.append)
        track = timeline.create_keyframe_track("box", box)

        assert timeline.get_track("box") is track
        assert track.timeline is timeline
        assert added == [track]

    def test_get_missing(self, timeline):
        with pytest.raises(KeyError):
            timeline.get_track("nope")

    def test_remove_track(self, timeline, box):
        track = timeline.create_keyframe_track("box", box)
        timeline.remove_track(track)

        assert timeline.tracks == []
        assert track.timeline is None

    def test_config_defaults_applied(self, box):
        config = TimelineConfig(default_sample_rate=0.2, default_easing="Sinusoidal.EaseOut")
        timeline = Timeline(config=config)

        recorder = timeline.create_number_track("level", {"value": 0})
        entry = timeline.create_keyframe_track("box", box).add_key("x", 0.0, 1.0, 5)

        assert recorder.sample_rate == pytest.approx(0.2)
        assert str(entry.easing) == "Sinusoidal.EaseOut"


class TestRecordingPlayback:
    """Recording tracks sample while the timeline plays."""

    def test_samples_each_tick(self, timeline, box):
        source = {"value": 0.0}
        timeline.create_keyframe_track("box", box).keyframe({"x": 1}, 1.0)
        recorder = timeline.create_number_track("level", source, 0.25)

        for step in range(1, 5):
            source["value"] = step * 2.5
            timeline.update(0.25)

        assert recorder.data[1:] == [2.5, 5.0, 7.5, 10.0]

    def test_follow_recorded_track(self, timeline, box):
        recorder = NumberTrack("level", {"value": 0.0}, 0.5, recording=False, data=[0.0, 10.0, 20.0])
        timeline.add_track(recorder)
        track = timeline.create_keyframe_track("box", box)
        track.follow("x", recorder)

        timeline.update(0.75)

        assert timeline.end_time == pytest.approx(1.5)
        assert box["x"] == pytest.approx(15.0)


class TestConfig:
    """Tests for TimelineConfig validation."""

    def test_rejects_bad_loop_mode(self):
        with pytest.raises(ValueError):
            TimelineConfig(loop_mode=-3)

    def test_rejects_bad_sample_rate(self):
        with pytest.raises(ValueError):
            TimelineConfig(default_sample_rate=0)

    def test_rejects_unknown_easing(self):
        with pytest.raises(LookupError):
            TimelineConfig(default_easing="Wobbly.EaseIn")

    def test_from_dict_ignores_unknown_keys(self):
        config = TimelineConfig.from_dict({"loop_mode": 2, "theme": "dark"})

        assert config.loop_mode == 2
        assert config.to_dict()["autoplay"] is True
