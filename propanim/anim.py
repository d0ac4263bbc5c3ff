"""
Fluent animation builder.

Chains sequential property groups on one target:

    timeline.animate("box", box) \\
        .to(properties={"x": 100}, duration=1.0).on_end(lambda: print("moved")) \\
        .to(0.25, {"opacity": 0}, duration=0.5, easing="Quadratic.EaseOut")

Each group's entries are registered in ``Timeline.anims`` and evaluated by
``Timeline.update`` after the tracks.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from .core.keyframe import KeyframeEntry
from .core.targets import as_target


@dataclass
class AnimGroup:
    """
    Entries started together by one ``Anim.to`` call.

    ``on_start`` fires when the first entry starts and ``on_end`` when the
    last one ends, each at most once per pass of the timeline.
    """
    entries: List[KeyframeEntry] = field(default_factory=list)
    on_start_callback: Optional[Callable[[], None]] = None
    on_end_callback: Optional[Callable[[], None]] = None

    @property
    def has_started(self) -> bool:
        return any(entry.has_started for entry in self.entries)

    @property
    def has_ended(self) -> bool:
        return bool(self.entries) and all(entry.has_ended for entry in self.entries)

    def _entry_started(self) -> None:
        started = sum(entry.has_started for entry in self.entries)
        if started == 1 and self.on_start_callback:
            self.on_start_callback()

    def _entry_ended(self) -> None:
        if self.has_ended and self.on_end_callback:
            self.on_end_callback()


class Anim:
    """
    Builder for sequential animations of one target.

    Args:
        name: Label of the animated target
        target: Object to animate (dict, object or get/set target)
        timeline: Timeline the entries are registered on
    """

    def __init__(self, name: str, target: Any, timeline):
        self.name = name
        self.target = as_target(target)
        self.timeline = timeline
        self.end_time = 0.0
        self.anim_groups: List[AnimGroup] = []
        self.on_update_callback: Optional[Callable] = None

    def to(
        self,
        delay: float = 0.0,
        properties: Optional[Mapping[str, Any]] = None,
        duration: float = 1.0,
        easing=None,
    ) -> "Anim":
        """
        Append a group animating ``properties`` after the previous group.

        Start is ``timeline.time + delay`` plus the builder's current end, so
        a chain built mid-playback starts relative to the playhead.
        """
        start = self.timeline.time + delay + self.end_time
        group = AnimGroup()

        for property_name, end_value in (properties or {}).items():
            entry = KeyframeEntry(
                property_name=property_name,
                start_time=start,
                end_time=start + duration,
                end_value=end_value,
                easing=easing,
                target=self.target,
                parent=self,
                on_start=group._entry_started,
                on_end=group._entry_ended,
            )
            group.entries.append(entry)
            self.timeline.anims.append(entry)

        self.anim_groups.append(group)
        self.end_time += delay + duration
        return self

    def on_start(self, callback: Callable[[], None]) -> "Anim":
        """Call ``callback`` once when the last added group starts."""
        if self.anim_groups:
            self.anim_groups[-1].on_start_callback = callback
        return self

    def on_end(self, callback: Callable[[], None]) -> "Anim":
        """Call ``callback`` once when the last added group ends."""
        if self.anim_groups:
            self.anim_groups[-1].on_end_callback = callback
        return self

    def on_update(self, callback: Callable[[], None]) -> "Anim":
        """Call ``callback`` after every value this builder writes."""
        self.on_update_callback = lambda entry: callback()
        return self

    @property
    def entries(self) -> List[KeyframeEntry]:
        return [entry for group in self.anim_groups for entry in group.entries]


__all__ = ["Anim", "AnimGroup"]
