"""Tests for category grouping and re-normalised category scores."""

import pytest

from cci_calculator.config import UNCATEGORIZED
from cci_calculator.scoring import category_scores, group_by_category, main_category_scores
from cci_calculator.scoring.frameworks import main_category, sub_category

from conftest import make_param


def test_category_name_split():
    assert main_category("Protect: Data Security") == "Protect"
    assert sub_category("Protect: Data Security") == "Data Security"
    assert main_category("Misc") == "Misc"
    assert sub_category("Misc") == ""


class TestCategoryScores:
    def test_renormalised_score(self):
        params = [
            make_param("PR.DS.1", 100, 100, weightage=4, category="Protect: Data Security"),
            make_param("PR.DS.2", 50, 100, weightage=2, category="Protect: Data Security"),
        ]
        (cs,) = category_scores(params)
        assert cs.weighted_score == pytest.approx(5.0)
        assert cs.total_weightage == 6
        assert cs.score == pytest.approx(83.333, abs=1e-3)
        assert cs.parameter_count == 2
        assert cs.maturity_level == "Optimal"

    def test_unequal_weights(self):
        params = [
            make_param("X.1", 50, 100, weightage=10, category="X"),
            make_param("X.2", 100, 100, weightage=20, category="X"),
        ]
        (cs,) = category_scores(params)
        assert cs.score == pytest.approx(83.33, abs=0.01)

    def test_zero_weight_category_scores_zero(self):
        params = [make_param("PR.DS.1", 10, 10, weightage=0, category="Protect: Data Security")]
        (cs,) = category_scores(params)
        assert cs.score == 0.0

    def test_main_category_rollup(self):
        params = [
            make_param("PR.DS.1", 100, 100, weightage=5, category="Protect: Data Security"),
            make_param("PR.AT.1", 0, 100, weightage=5, category="Protect: Awareness and Training"),
            make_param("DE.CM.1", 100, 100, weightage=5, category="Detect: Continuous Monitoring"),
        ]
        mains = main_category_scores(params)
        assert [m.category for m in mains] == ["Protect", "Detect"]
        assert mains[0].score == pytest.approx(50.0)
        assert mains[1].score == pytest.approx(100.0)


class TestGroupOrdering:
    def test_canonical_order(self):
        params = [
            make_param("RC.RP.1", category="Recover: Recovery Planning"),
            make_param("GV.RR.1", category="Governance: Roles and Responsibilities"),
            make_param("PR.DS.1", category="Protect: Data Security"),
            make_param("PR.AT.1", category="Protect: Awareness and Training"),
        ]
        assert list(group_by_category(params)) == [
            "Governance: Roles and Responsibilities",
            "Protect: Awareness and Training",
            "Protect: Data Security",
            "Recover: Recovery Planning",
        ]

    def test_missing_category_is_uncategorized(self):
        params = [
            make_param("X.1", category=""),
            make_param("GV.RR.1", category="Governance: Roles and Responsibilities"),
        ]
        groups = group_by_category(params)
        assert list(groups) == ["Governance: Roles and Responsibilities", UNCATEGORIZED]

    def test_unknown_categories_last_in_first_seen_order(self):
        params = [
            make_param("Z.1", category="Zeta: Things"),
            make_param("X.1", category=""),
            make_param("A.1", category="Alpha: Stuff"),
            make_param("DE.CM.1", category="Detect: Continuous Monitoring"),
        ]
        assert list(group_by_category(params)) == [
            "Detect: Continuous Monitoring",
            UNCATEGORIZED,
            "Zeta: Things",
            "Alpha: Stuff",
        ]

    def test_unlisted_sub_category_stays_with_its_function(self):
        params = [
            make_param("PR.KC.1", category="Protect: Key Custody"),
            make_param("DE.CM.1", category="Detect: Continuous Monitoring"),
            make_param("PR.DS.1", category="Protect: Data Security"),
        ]
        assert list(group_by_category(params)) == [
            "Protect: Data Security",
            "Protect: Key Custody",
            "Detect: Continuous Monitoring",
        ]

    def test_every_parameter_in_exactly_one_group(self, catalogue):
        groups = group_by_category(catalogue)
        grouped = [p.measure_id for params in groups.values() for p in params]
        assert sorted(grouped) == sorted(p.measure_id for p in catalogue)
