"""
Pytest fixtures for the SFM designer test suite.
"""

import pytest
from app import create_app

from data.solutions import get_solution
from sfm.configuration import Configuration
from sfm.engine import LayoutRequest


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def default_request():
    """One measurement, shared reference, nuA = 1 GHz, fM = 10 kHz, 1 m."""
    return LayoutRequest(
        configuration=Configuration.SHARED_REFERENCE,
        num_measurements=1,
        axis_separation=1.0,
        solution_index=0,
        nu_a=1.0e9,
        f_m=10.0e3,
    )


@pytest.fixture
def golomb_three():
    """The [0, 1, 3] placement."""
    return get_solution(3, 0)
