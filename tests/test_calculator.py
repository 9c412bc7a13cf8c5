"""Tests for per-parameter scoring."""

import pytest

from cci_calculator.scoring import raw_percentage, score_parameter, weighted_score

from conftest import make_param


class TestScoreParameter:
    def test_higher_is_better(self):
        p = make_param(numerator=80, denominator=100, weightage=10)
        assert score_parameter(p) == pytest.approx(80.0)
        assert weighted_score(p) == pytest.approx(8.0)

    def test_lower_is_better(self):
        p = make_param(numerator=5, denominator=100, weightage=10, target=0)
        assert score_parameter(p) == pytest.approx(95.0)
        assert weighted_score(p) == pytest.approx(9.5)

    def test_capped_at_100(self):
        p = make_param(numerator=150, denominator=100)
        assert score_parameter(p) == 100.0
        assert raw_percentage(p) == pytest.approx(150.0)

    def test_lower_is_better_floored_at_0(self):
        p = make_param(numerator=150, denominator=100, target=0)
        assert score_parameter(p) == 0.0

    @pytest.mark.parametrize("target", [100, 0])
    def test_zero_denominator_scores_zero(self, target):
        p = make_param(numerator=5, denominator=0, target=target)
        assert score_parameter(p) == 0.0
        assert weighted_score(p) == 0.0

    def test_negative_denominator_scores_zero(self):
        p = make_param(numerator=5, denominator=-10, target=0)
        assert score_parameter(p) == 0.0

    def test_negative_numerator_clamped(self):
        p = make_param(numerator=-10, denominator=100)
        assert score_parameter(p) == 0.0

    def test_non_zero_target_treated_as_higher_is_better(self):
        p = make_param(numerator=30, denominator=100, target=50)
        assert score_parameter(p) == pytest.approx(30.0)


class TestMonotonicity:
    def test_higher_is_better_non_decreasing(self):
        scores = [score_parameter(make_param(numerator=n, denominator=50)) for n in range(0, 80, 5)]
        assert scores == sorted(scores)

    def test_lower_is_better_non_increasing(self):
        scores = [
            score_parameter(make_param(numerator=n, denominator=50, target=0))
            for n in range(0, 80, 5)
        ]
        assert scores == sorted(scores, reverse=True)

    def test_weighted_never_exceeds_weightage(self):
        for n in (0, 25, 100, 400):
            p = make_param(numerator=n, denominator=100, weightage=7)
            assert 0 <= weighted_score(p) <= 7
