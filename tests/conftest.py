"""
Pytest fixtures for the gravity forward model test suite.
"""

import pytest
from app import create_app

from gravity.cuboid import Cuboid
from gravity.sphere import Sphere


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
def concrete_block():
    """10 m concrete cube, top face 0.5 m below the origin."""
    return Cuboid(
        x_length=10.0, y_length=10.0, z_length=10.0,
        x_centroid=0.0, y_centroid=0.0, z_centroid=-5.5,
        density=2000.0,
    )


@pytest.fixture
def soil_void():
    """1 m radius void centred 1 m below the origin."""
    return Sphere(x_centroid=0.0, y_centroid=0.0, z_centroid=-1.0,
                  radius=1.0, density=-1800.0)
