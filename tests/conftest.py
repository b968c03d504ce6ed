"""
Pytest configuration and shared fixtures
"""
import os
import sys
import pytest
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def app_config():
    """Fixture providing test configuration"""
    from config import TestingConfig
    return TestingConfig


@pytest.fixture
def test_env_vars():
    """Fixture providing test environment variables"""
    original_env = os.environ.copy()

    os.environ['FLASK_ENV'] = 'testing'
    os.environ['SECRET_KEY'] = 'a9f3c1e07b5d4e2f8c6a1b3d5e7f9012a4c6e8f0b2d4'

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def app():
    """Flask app on a fresh in-memory database"""
    from app_init import create_app
    app = create_app('testing')
    yield app


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Session bound to the app's in-memory database, rolled back after the test"""
    from database.connection import get_session_factory
    session = get_session_factory()()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def pricing_config():
    """Rate table from the base configuration"""
    from config import Config
    from planning_types import PricingConfig
    return PricingConfig.from_dict(Config.PRICING)


@pytest.fixture
def standard_pallet():
    from planning_types import PalletSpec
    return PalletSpec.standard(1.5)


@pytest.fixture
def euro_pallet():
    from planning_types import PalletSpec
    return PalletSpec.euro(1.5)


@pytest.fixture
def implicit_zone_floor():
    """
    20 x 10 x 8 m floor with no declared zones

    Derived storage zone is 9 x 12 m; usable height 6.6 m.
    """
    from planning_types import FloorPlan
    return FloorPlan(
        length=20,
        width=10,
        height=8,
        wall_clearance=0.5,
        sprinkler_clearance=0.9,
        safety_clearance=0.5,
        loading_zone_depth=3,
        dock_zone_depth=4,
        name='Ground',
    )


@pytest.fixture
def declared_zone_floor():
    """Large floor with one 8 x 12 m storage zone and a dock zone, stacking fixed at 2"""
    from planning_types import FloorPlan, FloorZone
    return FloorPlan(
        length=40,
        width=30,
        height=10,
        stacking_override=2,
        zones=(
            FloorZone('storage', 0, 0, 8, 12),
            FloorZone('dock', 10, 0, 20, 5),
        ),
        name='Mezzanine',
        floor_level=2,
    )


@pytest.fixture
def sample_floor_body():
    """Floor body as sent by the floor planner UI"""
    return {
        'name': 'Ground',
        'floorLevel': 1,
        'lengthM': 20,
        'widthM': 10,
        'heightM': 8,
        'wallClearanceM': 0.5,
        'sprinklerClearanceM': 0.9,
        'safetyClearanceM': 0.5,
        'loadingZoneDepthM': 3,
        'dockZoneDepthM': 4,
        'zones': [],
    }


@pytest.fixture
def scenario_a_floor():
    """20 x 10 x 8 m floor with 2.5 m loading and 4.5 m dock depths, no zones"""
    from planning_types import FloorPlan
    return FloorPlan(
        length=20,
        width=10,
        height=8,
        wall_clearance=0.5,
        sprinkler_clearance=0.9,
        safety_clearance=0.5,
        loading_zone_depth=2.5,
        dock_zone_depth=4.5,
    )


@pytest.fixture
def scenario_b_floor():
    """12 x 8 x 6 m floor with one 8 m wide x 12 m deep storage zone, two layers"""
    from planning_types import FloorPlan, FloorZone
    return FloorPlan(
        length=12,
        width=8,
        height=6,
        stacking_override=2,
        zones=(FloorZone('storage', 0, 0, 8, 12),),
    )
