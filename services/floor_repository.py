"""
Floor Repository - Database access layer for warehouse floor layouts.

Floors are stored as rows but handed out as immutable FloorPlan values so the
capacity calculator never sees a live ORM object.
"""

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from database.models import WarehouseFloor, WarehouseFloorZone
from planning_types import FloorPlan, FloorZone

logger = logging.getLogger(__name__)


def floor_plan_from_record(record: WarehouseFloor) -> FloorPlan:
    """Materialise a stored floor (and its active zones) as a FloorPlan"""
    return FloorPlan(
        length=record.length_m,
        width=record.width_m,
        height=record.height_m,
        wall_clearance=record.wall_clearance_m,
        sprinkler_clearance=record.sprinkler_clearance_m,
        safety_clearance=record.safety_clearance_m,
        loading_zone_depth=record.loading_zone_depth_m,
        dock_zone_depth=record.dock_zone_depth_m,
        main_aisle=record.main_aisle_m,
        side_aisle=record.side_aisle_m,
        pedestrian_aisle=record.pedestrian_aisle_m,
        stacking_override=record.stacking_override,
        zones=tuple(
            FloorZone(
                zone_type=zone.zone_type,
                x=zone.x_m,
                y=zone.y_m,
                width=zone.width_m,
                height=zone.height_m,
                rotation_deg=zone.rotation_deg,
            )
            for zone in record.zones if zone.status
        ),
        name=record.name,
        floor_level=record.floor_level,
        standard_pallet_height=record.standard_pallet_height_m,
        euro_pallet_height=record.euro_pallet_height_m,
        custom_pallet_length_cm=record.custom_pallet_length_cm,
        custom_pallet_width_cm=record.custom_pallet_width_cm,
        custom_pallet_height_cm=record.custom_pallet_height_cm,
    )


class FloorRepository:
    """Repository for warehouse floor database operations."""

    def __init__(self, session: Session):
        self.session = session

    def _query_floors(self, warehouse_id: str):
        return self.session.query(WarehouseFloor).filter(
            WarehouseFloor.warehouse_id == warehouse_id,
            WarehouseFloor.status == True  # noqa: E712
        ).order_by(WarehouseFloor.floor_level, WarehouseFloor.name)

    def list_floors(self, warehouse_id: str) -> List[Dict]:
        """List a warehouse's floors as API dictionaries."""
        return [floor.to_dict() for floor in self._query_floors(warehouse_id).all()]

    def list_floor_plans(self, warehouse_id: str) -> List[FloorPlan]:
        """List a warehouse's floors as FloorPlan values, lowest level first."""
        return [floor_plan_from_record(floor) for floor in self._query_floors(warehouse_id).all()]

    def get_floor_plan(self, floor_id: str) -> Optional[FloorPlan]:
        """Get one floor by ID."""
        floor = self.session.query(WarehouseFloor).filter(
            WarehouseFloor.id == floor_id,
            WarehouseFloor.status == True  # noqa: E712
        ).first()
        return floor_plan_from_record(floor) if floor else None

    def replace_floors(self, warehouse_id: str, floors: Iterable[FloorPlan]) -> List[Dict]:
        """
        Replace every floor of a warehouse.

        Existing floors (and, by cascade, their zones) are deleted first, then
        the given floors are inserted in order.
        """
        removed = 0
        for existing in self.session.query(WarehouseFloor).filter(
                WarehouseFloor.warehouse_id == warehouse_id).all():
            self.session.delete(existing)
            removed += 1
        self.session.flush()

        created = []
        for index, plan in enumerate(floors):
            record = WarehouseFloor(
                warehouse_id=warehouse_id,
                name=plan.name or f"Floor {plan.floor_level}",
                floor_level=plan.floor_level,
                total_sq_ft=plan.total_sq_ft,
                length_m=plan.length,
                width_m=plan.width,
                height_m=plan.height,
                wall_clearance_m=plan.wall_clearance,
                sprinkler_clearance_m=plan.sprinkler_clearance,
                safety_clearance_m=plan.safety_clearance,
                loading_zone_depth_m=plan.loading_zone_depth,
                dock_zone_depth_m=plan.dock_zone_depth,
                main_aisle_m=plan.main_aisle,
                side_aisle_m=plan.side_aisle,
                pedestrian_aisle_m=plan.pedestrian_aisle,
                standard_pallet_height_m=plan.standard_pallet_height,
                euro_pallet_height_m=plan.euro_pallet_height,
                custom_pallet_length_cm=round(plan.custom_pallet_length_cm),
                custom_pallet_width_cm=round(plan.custom_pallet_width_cm),
                custom_pallet_height_cm=round(plan.custom_pallet_height_cm),
                stacking_override=plan.stacking_override,
            )
            record.zones = [
                WarehouseFloorZone(
                    position=position,
                    zone_type=zone.zone_type,
                    x_m=zone.x,
                    y_m=zone.y,
                    width_m=zone.width,
                    height_m=zone.height,
                    rotation_deg=zone.rotation_deg,
                )
                for position, zone in enumerate(plan.zones)
            ]
            self.session.add(record)
            created.append(record)

        self.session.flush()
        logger.info(
            f"Replaced floors for warehouse {warehouse_id}: "
            f"removed {removed}, created {len(created)}"
        )
        return [record.to_dict() for record in created]
