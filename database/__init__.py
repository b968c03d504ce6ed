"""
Database package for the warehouse planner.
Provides SQLAlchemy models, connection management, and session handling.
"""

from database.connection import (
    Base,
    init_engine,
    get_engine,
    get_db_session,
    init_db,
    check_db_connection
)

from database.models import (
    WarehouseFloor,
    WarehouseFloorZone,
    Booking,
    WarehousePricing,
    MembershipSetting
)

__all__ = [
    # Connection
    'Base',
    'init_engine',
    'get_engine',
    'get_db_session',
    'init_db',
    'check_db_connection',
    # Models
    'WarehouseFloor',
    'WarehouseFloorZone',
    'Booking',
    'WarehousePricing',
    'MembershipSetting'
]
