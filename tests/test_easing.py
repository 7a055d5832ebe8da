"""Tests for easing functions and modifiers."""

import math

import pytest

from motionfx import easing


class TestBasicCurves:
    @pytest.mark.parametrize(
        "fn",
        [easing.linear, easing.ease, easing.quad, easing.cubic, easing.sin, easing.circle, easing.exp],
    )
    def test_endpoints(self, fn):
        assert fn(0) == pytest.approx(0, abs=1e-3)
        assert fn(1) == pytest.approx(1)

    def test_linear_identity(self):
        assert easing.linear(0.3) == 0.3

    def test_ease_first_half_is_quadratic(self):
        assert easing.ease(0.25) == pytest.approx(0.25)
        assert easing.ease(0.4) == pytest.approx(0.64)

    def test_poly(self):
        assert easing.poly(4)(0.5) == pytest.approx(0.0625)

    def test_exp_zero_is_exact(self):
        assert easing.exp(0) == 0

    def test_circle_outside_domain_does_not_raise(self):
        assert easing.circle(1.01) == 1

    def test_bounce(self):
        assert easing.bounce(0.4) == pytest.approx(0.4)


class TestFactories:
    def test_back_starts_slow(self):
        assert easing.back()(0.1) < 0.1
        assert easing.back(0)(0.5) == pytest.approx(0.25)

    def test_elastic_at_end(self):
        fn = easing.elastic()
        assert fn(1) == pytest.approx(math.sin(-0.2 * math.pi))

    def test_steps_floor(self):
        fn = easing.steps(4)
        assert [fn(t) for t in (0, 0.2, 0.49, 0.5, 0.99, 1)] == [0, 0, 0.25, 0.5, 0.75, 1]

    def test_steps_round_half_up(self):
        fn = easing.steps(4, round_=True)
        assert fn(0.125) == 0.25
        assert fn(0.1) == 0.0

    def test_bezier_direct_polynomial(self):
        fn = easing.bezier(0.1, 0.2, 0.3, 0.4).factory()
        x = 0.5
        expected = 0.125 * 0.1 + 3 * 0.25 * 0.5 * 0.3 + 3 * 0.5 * 0.25 * 0.2 + 0.125 * 0.4
        assert fn(x) == pytest.approx(expected)
        assert fn(0) == pytest.approx(0.1)
        assert fn(1) == pytest.approx(0.4)

    def test_bezier_factory_matches_fn(self):
        assert easing.bezier(0, 0, 1, 1).factory()(0.3) == easing.bezier_fn(0, 0, 1, 1)(0.3)


class TestModifiers:
    def test_in_is_identity(self):
        assert easing.in_(easing.quad) is easing.quad

    def test_out_mirrors(self):
        fn = easing.out(easing.quad)
        assert fn(0.5) == pytest.approx(0.75)
        assert fn(0) == 0
        assert fn(1) == 1

    def test_in_out_symmetric(self):
        fn = easing.in_out(easing.cubic)
        assert fn(0.5) == pytest.approx(0.5)
        for t in (0.1, 0.2, 0.3, 0.4):
            assert fn(t) + fn(1 - t) == pytest.approx(1)

    def test_in_out_first_half(self):
        fn = easing.in_out(easing.quad)
        assert fn(0.25) == pytest.approx(0.125)
