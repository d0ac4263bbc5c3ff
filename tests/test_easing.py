"""
Unit Tests for Easing

Run with: pytest tests/test_easing.py -v
"""

import pytest

from propanim import (
    LINEAR,
    Easing,
    EasingLookupError,
    bezier_easing,
    ease,
    get_easing_function,
    list_easings,
    resolve_easing,
)


class TestEasingFunctions:
    """Tests for individual easing curves."""

    @pytest.mark.parametrize("name", list_easings())
    def test_endpoints(self, name):
        """Every curve starts at 0 and lands on 1."""
        easing = Easing.parse(name)
        assert easing(0.0) == pytest.approx(0.0, abs=1e-6)
        assert easing(1.0) == pytest.approx(1.0, abs=1e-6)

    def test_linear_identity(self):
        for t in (0.0, 0.25, 0.5, 0.75, 1.0):
            assert LINEAR(t) == pytest.approx(t)

    def test_quadratic(self):
        assert ease("Quadratic", "EaseIn", 0.5) == pytest.approx(0.25)
        assert ease("Quadratic", "EaseOut", 0.5) == pytest.approx(0.75)
        assert ease("Quadratic", "EaseInOut", 0.25) == pytest.approx(0.125)

    def test_cubic_out(self):
        assert ease("Cubic", "EaseOut", 0.5) == pytest.approx(0.875)

    def test_in_out_symmetry(self):
        """EaseInOut curves pass through the midpoint."""
        for family in ("Quadratic", "Cubic", "Sinusoidal", "Circular", "Bounce"):
            assert ease(family, "EaseInOut", 0.5) == pytest.approx(0.5, abs=1e-6)

    def test_back_overshoots(self):
        """Back easing dips below 0 before rising."""
        assert ease("Back", "EaseIn", 0.2) < 0

    def test_bezier_linear_preset(self):
        for t in (0.1, 0.5, 0.9):
            assert ease("Bezier", "linear", t) == pytest.approx(t, abs=1e-4)

    def test_bezier_clamps_outside_range(self):
        assert bezier_easing(0.42, 0.0, 0.58, 1.0, -0.5) == 0.0
        assert bezier_easing(0.42, 0.0, 0.58, 1.0, 1.5) == 1.0


class TestEasingLookup:
    """Tests for (family, variant) resolution."""

    def test_unknown_family(self):
        with pytest.raises(EasingLookupError):
            get_easing_function("Wobbly", "EaseIn")

    def test_unknown_variant(self):
        with pytest.raises(EasingLookupError) as exc_info:
            get_easing_function("Quadratic", "EaseSideways")
        assert exc_info.value.details["variant"] == "EaseSideways"

    def test_lookup_error_is_lookup_error(self):
        with pytest.raises(LookupError):
            Easing("Nope", "EaseIn")

    def test_parse_round_trip(self):
        easing = Easing.parse("Elastic.EaseOut")
        assert easing == Easing("Elastic", "EaseOut")
        assert str(easing) == "Elastic.EaseOut"

    def test_parse_requires_dot(self):
        with pytest.raises(EasingLookupError):
            Easing.parse("Linear")

    def test_easing_is_frozen(self):
        with pytest.raises(AttributeError):
            LINEAR.family = "Cubic"

    def test_resolve_easing(self):
        assert resolve_easing(None) is LINEAR
        assert resolve_easing("Cubic.EaseIn") == Easing("Cubic", "EaseIn")
        assert resolve_easing(("Back", "EaseOut")) == Easing("Back", "EaseOut")
        easing = Easing("Quartic", "EaseIn")
        assert resolve_easing(easing) is easing

    def test_resolve_rejects_other_types(self):
        with pytest.raises(EasingLookupError):
            resolve_easing(42)

    def test_list_easings(self):
        names = list_easings()
        assert "Linear.EaseNone" in names
        assert "Bounce.EaseInOut" in names
        assert "Bezier.easeInOut" in names
        assert names == sorted(names)
