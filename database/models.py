"""
SQLAlchemy models for the warehouse planner.
Defines floor layouts and their zones, the bookings that feed availability
and cumulative volume discounts, and the stored rates that override the
static pricing table.
"""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime, Date, JSON,
    ForeignKey, Index, CheckConstraint, UniqueConstraint
)
from sqlalchemy.orm import relationship
from database.connection import Base


def generate_uuid():
    """Generate a new UUID."""
    return str(uuid.uuid4())


# =============================================================================
# FLOOR LAYOUT
# =============================================================================

class WarehouseFloor(Base):
    """One storage floor of a warehouse, with clearances and pallet defaults."""
    __tablename__ = 'warehouse_floors'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    warehouse_id = Column(String(36), nullable=False)
    name = Column(String(200), nullable=False)
    floor_level = Column(Integer, nullable=False, default=1)
    total_sq_ft = Column(Integer)
    length_m = Column(Float, nullable=False)
    width_m = Column(Float, nullable=False)
    height_m = Column(Float, nullable=False)
    wall_clearance_m = Column(Float, nullable=False, default=0.5)
    sprinkler_clearance_m = Column(Float, nullable=False, default=0.9)
    safety_clearance_m = Column(Float, nullable=False, default=0.5)
    main_aisle_m = Column(Float, nullable=False, default=3.5)
    side_aisle_m = Column(Float, nullable=False, default=2.5)
    pedestrian_aisle_m = Column(Float, nullable=False, default=1.0)
    loading_zone_depth_m = Column(Float, nullable=False, default=3.0)
    dock_zone_depth_m = Column(Float, nullable=False, default=4.5)
    standard_pallet_height_m = Column(Float, nullable=False, default=1.5)
    euro_pallet_height_m = Column(Float, nullable=False, default=1.5)
    custom_pallet_length_cm = Column(Integer, nullable=False, default=100)
    custom_pallet_width_cm = Column(Integer, nullable=False, default=100)
    custom_pallet_height_cm = Column(Integer, nullable=False, default=150)
    stacking_override = Column(Integer, nullable=True)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    zones = relationship(
        "WarehouseFloorZone",
        back_populates="floor",
        cascade="all, delete-orphan",
        order_by="WarehouseFloorZone.position"
    )

    __table_args__ = (
        Index('ix_warehouse_floors_warehouse', 'warehouse_id'),
        CheckConstraint('stacking_override IS NULL OR stacking_override > 0',
                        name='ck_warehouse_floors_stacking_override'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'warehouse_id': self.warehouse_id,
            'name': self.name,
            'floor_level': self.floor_level,
            'total_sq_ft': self.total_sq_ft,
            'length_m': self.length_m,
            'width_m': self.width_m,
            'height_m': self.height_m,
            'wall_clearance_m': self.wall_clearance_m,
            'sprinkler_clearance_m': self.sprinkler_clearance_m,
            'safety_clearance_m': self.safety_clearance_m,
            'main_aisle_m': self.main_aisle_m,
            'side_aisle_m': self.side_aisle_m,
            'pedestrian_aisle_m': self.pedestrian_aisle_m,
            'loading_zone_depth_m': self.loading_zone_depth_m,
            'dock_zone_depth_m': self.dock_zone_depth_m,
            'standard_pallet_height_m': self.standard_pallet_height_m,
            'euro_pallet_height_m': self.euro_pallet_height_m,
            'custom_pallet_length_cm': self.custom_pallet_length_cm,
            'custom_pallet_width_cm': self.custom_pallet_width_cm,
            'custom_pallet_height_cm': self.custom_pallet_height_cm,
            'stacking_override': self.stacking_override,
            'zones': [zone.to_dict() for zone in self.zones if zone.status],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }


class WarehouseFloorZone(Base):
    """Rectangular zone drawn on a floor (storage, loading, dock, aisle...)."""
    __tablename__ = 'warehouse_floor_zones'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    floor_id = Column(String(36), ForeignKey('warehouse_floors.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    zone_type = Column(String(50), nullable=False)
    x_m = Column(Float, nullable=False, default=0)
    y_m = Column(Float, nullable=False, default=0)
    width_m = Column(Float, nullable=False)
    height_m = Column(Float, nullable=False)
    rotation_deg = Column(Float, nullable=False, default=0)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    floor = relationship("WarehouseFloor", back_populates="zones")

    __table_args__ = (
        Index('ix_warehouse_floor_zones_floor', 'floor_id'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'zone_type': self.zone_type,
            'x_m': self.x_m,
            'y_m': self.y_m,
            'width_m': self.width_m,
            'height_m': self.height_m,
            'rotation_deg': self.rotation_deg
        }


# =============================================================================
# BOOKINGS
# =============================================================================

class Booking(Base):
    """Pallet or area-rental booking held against a warehouse."""
    __tablename__ = 'bookings'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    warehouse_id = Column(String(36), nullable=False)
    customer_id = Column(String(36), nullable=False)
    booking_type = Column(String(20), nullable=False)  # pallet, area-rental
    booking_status = Column(String(30), nullable=False, default='pending')
    pallet_count = Column(Integer)
    area_sq_ft = Column(Float)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    total_amount = Column(Float)
    status = Column(Boolean, nullable=False, default=True)  # soft delete flag
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('ix_bookings_warehouse', 'warehouse_id'),
        Index('ix_bookings_customer', 'customer_id'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'warehouse_id': self.warehouse_id,
            'customer_id': self.customer_id,
            'booking_type': self.booking_type,
            'booking_status': self.booking_status,
            'pallet_count': self.pallet_count,
            'area_sq_ft': self.area_sq_ft,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'total_amount': self.total_amount,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }


# =============================================================================
# PRICING OVERRIDES
# =============================================================================

class WarehousePricing(Base):
    """Owner-set rate for one booking kind at one warehouse."""
    __tablename__ = 'warehouse_pricing'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    warehouse_id = Column(String(36), nullable=False)
    pricing_type = Column(String(20), nullable=False)  # pallet, area
    base_price = Column(Float, nullable=False)
    unit = Column(String(40), nullable=False)  # per_pallet_per_month, per_sqft_per_month, per_sqft_per_year
    min_quantity = Column(Integer)
    max_quantity = Column(Integer)
    volume_discounts = Column(JSON)  # {"<pallet threshold>": percent}
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('warehouse_id', 'pricing_type', name='uq_warehouse_pricing_type'),
        CheckConstraint("pricing_type IN ('pallet', 'area')", name='ck_warehouse_pricing_type'),
        Index('ix_warehouse_pricing_warehouse', 'warehouse_id'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'warehouse_id': self.warehouse_id,
            'pricing_type': self.pricing_type,
            'base_price': self.base_price,
            'unit': self.unit,
            'min_quantity': self.min_quantity,
            'max_quantity': self.max_quantity,
            'volume_discounts': self.volume_discounts,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }


class MembershipSetting(Base):
    """Discount and spend threshold for one membership tier."""
    __tablename__ = 'membership_settings'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tier_name = Column(String(50), nullable=False, unique=True)
    program_enabled = Column(Boolean, nullable=False, default=True)
    min_spend = Column(Float, nullable=False, default=0)
    discount_percent = Column(Float, nullable=False, default=0)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'tier_name': self.tier_name,
            'program_enabled': self.program_enabled,
            'min_spend': self.min_spend,
            'discount_percent': self.discount_percent,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
