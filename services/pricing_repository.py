"""
Pricing Repository - stored rate overrides layered over the static rate table.

A warehouse owner may set their own pallet or area rate (warehouse_pricing),
and membership tiers may be managed in the database (membership_settings).
Anything not stored falls back to the rate table built from app config.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from database.models import MembershipSetting, WarehousePricing
from planning_types import MembershipDiscount, PricingConfig

logger = logging.getLogger(__name__)

PALLET_PRICING = 'pallet'
AREA_PRICING = 'area'


def annual_area_rate(record: WarehousePricing) -> float:
    """Per-square-foot yearly rate for a stored area price"""
    if 'per_year' in (record.unit or ''):
        return record.base_price
    # per_sqft_per_month, and anything unrecognised, is a monthly rate
    return record.base_price * 12


class PricingRepository:
    """Repository for stored pricing overrides."""

    def __init__(self, session: Session):
        self.session = session

    def get_warehouse_pricing(self, warehouse_id: str, pricing_type: str) -> Optional[WarehousePricing]:
        """Active owner-set rate for one booking kind, or None."""
        return self.session.query(WarehousePricing).filter(
            WarehousePricing.warehouse_id == warehouse_id,
            WarehousePricing.pricing_type == pricing_type,
            WarehousePricing.status == True  # noqa: E712
        ).first()

    def get_membership_discounts(self) -> Optional[Tuple[MembershipDiscount, ...]]:
        """
        Membership discounts managed in the database.

        Returns None when no tiers are stored. A disabled program yields an
        empty tuple, so every tier gets no discount.
        """
        settings = self.session.query(MembershipSetting).filter(
            MembershipSetting.status == True  # noqa: E712
        ).order_by(MembershipSetting.min_spend).all()

        if not settings:
            return None

        return tuple(
            MembershipDiscount(setting.tier_name.lower(), setting.discount_percent)
            for setting in settings if setting.program_enabled
        )

    def get_pricing_config(self, warehouse_id: Optional[str], fallback: PricingConfig) -> PricingConfig:
        """
        Rate table for quoting a booking at a warehouse.

        Args:
            warehouse_id: Warehouse being booked; None uses only the stored
                membership tiers
            fallback: Static rate table from app config

        Returns:
            PricingConfig with stored overrides applied, or ``fallback``
            unchanged when nothing is stored
        """
        changes: Dict[str, Any] = {}

        if warehouse_id:
            pallet = self.get_warehouse_pricing(warehouse_id, PALLET_PRICING)
            if pallet is not None:
                # Owner rates are all-in storage; there is no separate pallet-in fee
                changes['storage_per_pallet_per_month'] = pallet.base_price
                changes['pallet_in'] = 0.0
                if pallet.volume_discounts:
                    changes['volume_discounts'] = pallet.volume_discounts

            area = self.get_warehouse_pricing(warehouse_id, AREA_PRICING)
            if area is not None:
                changes['area_rental_per_sq_ft_per_year'] = annual_area_rate(area)
                changes['area_rental_min_sq_ft'] = area.min_quantity or fallback.area_rental_min_sq_ft

        memberships = self.get_membership_discounts()
        if memberships is not None:
            changes['membership_discounts'] = memberships

        if not changes:
            return fallback

        logger.debug(f"Pricing overrides for warehouse {warehouse_id}: {sorted(changes)}")
        return replace(fallback, **changes)
