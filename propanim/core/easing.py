"""
Easing functions addressed by a two-part name (family, variant).

Classic Penner curves (Quadratic.EaseIn, Bounce.EaseOut, ...) plus the
CSS-style cubic bezier presets under the ``Bezier`` family.
"""

import functools
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .exceptions import EasingLookupError

EasingFunction = Callable[[float], float]


def cubic_bezier_point(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Calculate point on cubic bezier curve at parameter t."""
    mt = 1 - t
    return mt*mt*mt*p0 + 3*mt*mt*t*p1 + 3*mt*t*t*p2 + t*t*t*p3


def bezier_easing(x1: float, y1: float, x2: float, y2: float, t: float) -> float:
    """
    CSS-style cubic bezier easing.

    Control points: (0,0), (x1,y1), (x2,y2), (1,1)

    Args:
        x1, y1: First control point
        x2, y2: Second control point
        t: Normalized progress 0-1

    Returns:
        Eased progress
    """
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0

    # Binary search for the curve parameter whose x matches t
    low, high = 0.0, 1.0
    for _ in range(20):
        mid = (low + high) / 2
        x = cubic_bezier_point(mid, 0, x1, x2, 1)
        if x < t:
            low = mid
        else:
            high = mid

    param = (low + high) / 2
    return cubic_bezier_point(param, 0, y1, y2, 1)


# ============================================================================
# PENNER EASINGS
# ============================================================================

def linear(t: float) -> float:
    return t


def _power_in(power: int) -> EasingFunction:
    def ease_in(t: float) -> float:
        return t ** power
    return ease_in


def _power_out(power: int) -> EasingFunction:
    def ease_out(t: float) -> float:
        return 1 - (1 - t) ** power
    return ease_out


def _power_in_out(power: int) -> EasingFunction:
    def ease_in_out(t: float) -> float:
        if t < 0.5:
            return (2 ** (power - 1)) * t ** power
        return 1 - ((-2 * t + 2) ** power) / 2
    return ease_in_out


def sine_in(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def sine_out(t: float) -> float:
    return math.sin(t * math.pi / 2)


def sine_in_out(t: float) -> float:
    return 0.5 * (1 - math.cos(math.pi * t))


def expo_in(t: float) -> float:
    return 0.0 if t == 0 else 2 ** (10 * (t - 1))


def expo_out(t: float) -> float:
    return 1.0 if t == 1 else 1 - 2 ** (-10 * t)


def expo_in_out(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    if t < 0.5:
        return 2 ** (20 * t - 10) / 2
    return (2 - 2 ** (-20 * t + 10)) / 2


def circ_in(t: float) -> float:
    return 1 - math.sqrt(1 - t * t)


def circ_out(t: float) -> float:
    return math.sqrt(1 - (t - 1) ** 2)


def circ_in_out(t: float) -> float:
    if t < 0.5:
        return (1 - math.sqrt(1 - (2 * t) ** 2)) / 2
    return (math.sqrt(1 - (-2 * t + 2) ** 2) + 1) / 2


_ELASTIC_PERIOD = 0.4
_ELASTIC_SHIFT = _ELASTIC_PERIOD / 4


def elastic_in(t: float) -> float:
    if t in (0, 1):
        return float(t)
    t -= 1
    return -(2 ** (10 * t)) * math.sin((t - _ELASTIC_SHIFT) * 2 * math.pi / _ELASTIC_PERIOD)


def elastic_out(t: float) -> float:
    if t in (0, 1):
        return float(t)
    return 2 ** (-10 * t) * math.sin((t - _ELASTIC_SHIFT) * 2 * math.pi / _ELASTIC_PERIOD) + 1


def elastic_in_out(t: float) -> float:
    if t < 0.5:
        return elastic_in(2 * t) / 2
    return elastic_out(2 * t - 1) / 2 + 0.5


_BACK_OVERSHOOT = 1.70158


def back_in(t: float) -> float:
    s = _BACK_OVERSHOOT
    return t * t * ((s + 1) * t - s)


def back_out(t: float) -> float:
    s = _BACK_OVERSHOOT
    t -= 1
    return t * t * ((s + 1) * t + s) + 1


def back_in_out(t: float) -> float:
    s = _BACK_OVERSHOOT * 1.525
    t *= 2
    if t < 1:
        return 0.5 * (t * t * ((s + 1) * t - s))
    t -= 2
    return 0.5 * (t * t * ((s + 1) * t + s) + 2)


def bounce_out(t: float) -> float:
    if t < 1 / 2.75:
        return 7.5625 * t * t
    if t < 2 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


def bounce_in(t: float) -> float:
    return 1 - bounce_out(1 - t)


def bounce_in_out(t: float) -> float:
    if t < 0.5:
        return bounce_in(t * 2) * 0.5
    return bounce_out(t * 2 - 1) * 0.5 + 0.5


# ============================================================================
# BEZIER PRESETS (CSS)
# Format: (x1, y1, x2, y2) control points
# ============================================================================

BEZIER_PRESETS: Dict[str, Tuple[float, float, float, float]] = {
    "linear": (0.0, 0.0, 1.0, 1.0),

    # Standard CSS easings
    "ease": (0.25, 0.1, 0.25, 1.0),
    "easeIn": (0.42, 0.0, 1.0, 1.0),
    "easeOut": (0.0, 0.0, 0.58, 1.0),
    "easeInOut": (0.42, 0.0, 0.58, 1.0),

    # Back (overshoot)
    "easeInBack": (0.36, 0.0, 0.66, -0.56),
    "easeOutBack": (0.34, 1.56, 0.64, 1.0),
    "easeInOutBack": (0.68, -0.6, 0.32, 1.6),

    "snap": (0.0, 1.0, 0.0, 1.0),
    "anticipate": (0.38, -0.4, 0.88, 1.0),
    "overshoot": (0.25, 0.0, 0.0, 1.4),
}


EASING_FUNCTIONS: Dict[str, Dict[str, EasingFunction]] = {
    "Linear": {"EaseNone": linear},
    "Quadratic": {"EaseIn": _power_in(2), "EaseOut": _power_out(2), "EaseInOut": _power_in_out(2)},
    "Cubic": {"EaseIn": _power_in(3), "EaseOut": _power_out(3), "EaseInOut": _power_in_out(3)},
    "Quartic": {"EaseIn": _power_in(4), "EaseOut": _power_out(4), "EaseInOut": _power_in_out(4)},
    "Quintic": {"EaseIn": _power_in(5), "EaseOut": _power_out(5), "EaseInOut": _power_in_out(5)},
    "Sinusoidal": {"EaseIn": sine_in, "EaseOut": sine_out, "EaseInOut": sine_in_out},
    "Exponential": {"EaseIn": expo_in, "EaseOut": expo_out, "EaseInOut": expo_in_out},
    "Circular": {"EaseIn": circ_in, "EaseOut": circ_out, "EaseInOut": circ_in_out},
    "Elastic": {"EaseIn": elastic_in, "EaseOut": elastic_out, "EaseInOut": elastic_in_out},
    "Back": {"EaseIn": back_in, "EaseOut": back_out, "EaseInOut": back_in_out},
    "Bounce": {"EaseIn": bounce_in, "EaseOut": bounce_out, "EaseInOut": bounce_in_out},
    "Bezier": {
        name: functools.partial(bezier_easing, *points)
        for name, points in BEZIER_PRESETS.items()
    },
}


def get_easing_function(family: str, variant: str) -> EasingFunction:
    """
    Look up the function for a (family, variant) pair.

    Raises:
        EasingLookupError: If either part is unknown
    """
    variants = EASING_FUNCTIONS.get(family)
    if variants is None:
        raise EasingLookupError(
            f"Unknown easing family '{family}'",
            {"family": family, "known": sorted(EASING_FUNCTIONS)},
        )
    func = variants.get(variant)
    if func is None:
        raise EasingLookupError(
            f"Unknown easing variant '{family}.{variant}'",
            {"family": family, "variant": variant, "known": sorted(variants)},
        )
    return func


def ease(family: str, variant: str, t: float) -> float:
    """Apply the named easing to normalized progress t."""
    return get_easing_function(family, variant)(t)


@dataclass(frozen=True)
class Easing:
    """
    Resolved reference to one easing curve.

    The pair is validated when the reference is built, so evaluation never
    re-parses names.
    """
    family: str = "Linear"
    variant: str = "EaseNone"

    def __post_init__(self):
        object.__setattr__(self, "_func", get_easing_function(self.family, self.variant))

    def __call__(self, t: float) -> float:
        return self._func(t)

    def __str__(self) -> str:
        return f"{self.family}.{self.variant}"

    @classmethod
    def parse(cls, name: str) -> "Easing":
        """Build from a dotted name such as ``"Quadratic.EaseIn"``."""
        family, sep, variant = name.partition(".")
        if not sep:
            raise EasingLookupError(
                f"Easing name '{name}' must look like 'Family.Variant'",
                {"name": name},
            )
        return cls(family, variant)


LINEAR = Easing()


def resolve_easing(easing) -> Easing:
    """Coerce None, a dotted name, or an Easing into an Easing."""
    if easing is None:
        return LINEAR
    if isinstance(easing, Easing):
        return easing
    if isinstance(easing, str):
        return Easing.parse(easing)
    if isinstance(easing, tuple) and len(easing) == 2:
        return Easing(*easing)
    raise EasingLookupError(f"Cannot resolve easing from {easing!r}", {"easing": repr(easing)})


def list_easings() -> List[str]:
    """Get every available easing as a dotted name."""
    return sorted(
        f"{family}.{variant}"
        for family, variants in EASING_FUNCTIONS.items()
        for variant in variants
    )


__all__ = [
    "Easing",
    "EasingFunction",
    "LINEAR",
    "BEZIER_PRESETS",
    "EASING_FUNCTIONS",
    "bezier_easing",
    "ease",
    "get_easing_function",
    "list_easings",
    "resolve_easing",
]
