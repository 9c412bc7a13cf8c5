"""Pytest configuration and fixtures."""

import pytest

from cci_calculator.annexure import AnnexureKForm
from cci_calculator.parameters import default_parameters, generate_sample_data
from cci_calculator.scoring import Parameter, compute_result


def make_param(
    measure_id="PR.AA.1",
    numerator=0,
    denominator=0,
    weightage=10,
    target=100,
    category="Protect: Identity Management, Authentication, and Access Control",
    pid=1,
):
    return Parameter(
        id=pid,
        measure_id=measure_id,
        title=f"Parameter {measure_id}",
        numerator=numerator,
        denominator=denominator,
        weightage=weightage,
        target=target,
        framework_category=category,
    )


@pytest.fixture
def catalogue():
    """The 23 default parameters with zeroed values."""
    return default_parameters()


@pytest.fixture
def sample_parameters():
    return generate_sample_data(seed=42)


@pytest.fixture
def sample_result(sample_parameters):
    return compute_result(sample_parameters, "Acme Securities", "2025-03-31")


@pytest.fixture
def valid_form():
    return AnnexureKForm(
        organization="Acme Securities",
        entity_type="Stock Broker",
        entity_category="Major",
        rationale="Qualified RE based on client count and trading volume",
        period="April 2024 - March 2025",
        signatory_name="A. Kumar",
        designation="MD",
    )
