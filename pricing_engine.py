"""
Booking Pricing Engine

Prices the two booking kinds offered by a warehouse:
- Pallet bookings: pallet-in fee + monthly storage, volume discount, then
  membership discount on the volume-discounted amount
- Area rentals: annual per-square-foot rent, membership discount only

Unlike capacity planning, pricing rejects malformed input outright. A quote
must never silently under- or over-charge.
"""

import logging
import math
from typing import Optional

from planning_types import (
    DEFAULT_MEMBERSHIP_TIER,
    BookingType,
    BreakdownLine,
    PricingCalculationInput,
    PricingCalculationResult,
    PricingConfig,
)

logger = logging.getLogger(__name__)


class PricingError(ValueError):
    """Raised when a pricing request violates a precondition"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


def find_volume_discount_percent(cumulative_pallets: int, config: PricingConfig) -> float:
    """
    Volume discount for a cumulative pallet count

    Tiers are walked from the highest threshold down; the first one met wins.
    Tiers never stack.
    """
    for tier in config.volume_discounts:
        if cumulative_pallets >= tier.pallet_threshold:
            return tier.discount_percent
    return 0.0


def find_membership_discount_percent(tier: Optional[str], config: PricingConfig) -> float:
    """Membership discount for a tier; unknown tiers get no discount"""
    tier = (tier or DEFAULT_MEMBERSHIP_TIER).lower()
    for membership in config.membership_discounts:
        if membership.tier == tier:
            return membership.discount_percent
    return 0.0


def _resolve_months(months) -> int:
    if months is None:
        return 1
    if isinstance(months, bool) or not isinstance(months, (int, float)) or months < 1:
        raise PricingError("Booking duration must be at least 1 month", field='months')
    if isinstance(months, float) and not months.is_integer():
        raise PricingError("Booking duration must be a whole number of months", field='months')
    return int(months)


def _is_positive_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value > 0
    except OverflowError:
        return False


def _require_finite_amount(amount: float, field: str):
    if not math.isfinite(amount):
        raise PricingError("Booking is too large to price", field=field)


def _finish(base_amount: float, volume_discount: float, volume_percent: float,
            membership_discount: float, membership_percent: float,
            breakdown) -> PricingCalculationResult:
    total_discount = volume_discount + membership_discount
    total_discount_percent = (total_discount / base_amount) * 100 if base_amount > 0 else 0.0
    final_amount = max(0.0, base_amount - volume_discount - membership_discount)

    return PricingCalculationResult(
        base_amount=base_amount,
        volume_discount=volume_discount,
        volume_discount_percent=volume_percent,
        membership_discount=membership_discount,
        membership_discount_percent=membership_percent,
        subtotal=base_amount,
        total_discount=total_discount,
        total_discount_percent=total_discount_percent,
        final_amount=final_amount,
        breakdown=tuple(breakdown),
    )


def calculate_pallet_pricing(pricing_input: PricingCalculationInput,
                             config: PricingConfig) -> PricingCalculationResult:
    """
    Price a pallet booking

    Args:
        pricing_input: Booking request; pallet_count is required
        config: Rate table

    Returns:
        PricingCalculationResult with "Pallet In" and "Storage" lines

    Raises:
        PricingError: Wrong booking type, a missing, non-positive, fractional or
            non-finite pallet count, or a duration under one month
    """
    if pricing_input.booking_type is not BookingType.PALLET:
        raise PricingError("Pallet pricing requires a pallet booking", field='booking_type')
    if not _is_positive_number(pricing_input.pallet_count):
        raise PricingError("Pallet count is required for pallet bookings", field='pallet_count')
    if isinstance(pricing_input.pallet_count, float) and not pricing_input.pallet_count.is_integer():
        raise PricingError("Pallet count must be a whole number", field='pallet_count')

    pallet_count = int(pricing_input.pallet_count)
    months = _resolve_months(pricing_input.months)

    pallet_in_cost = pallet_count * config.pallet_in
    storage_unit_price = config.storage_per_pallet_per_month * months
    storage_cost = pallet_count * storage_unit_price
    base_amount = pallet_in_cost + storage_cost
    _require_finite_amount(base_amount, 'pallet_count')

    cumulative = (pricing_input.existing_pallet_count or 0) + pallet_count
    volume_percent = find_volume_discount_percent(cumulative, config)
    volume_discount = base_amount * volume_percent / 100

    # Membership applies to the amount left after the volume discount
    membership_percent = find_membership_discount_percent(pricing_input.membership_tier, config)
    membership_discount = (base_amount - volume_discount) * membership_percent / 100

    breakdown = [
        BreakdownLine('Pallet In', pallet_count, config.pallet_in, pallet_in_cost),
        BreakdownLine(
            f"Storage ({months} month{'s' if months > 1 else ''})",
            pallet_count,
            storage_unit_price,
            storage_cost,
        ),
    ]

    result = _finish(base_amount, volume_discount, volume_percent,
                     membership_discount, membership_percent, breakdown)
    logger.debug(
        f"Pallet pricing: {pallet_count} pallets x {months} month(s), cumulative {cumulative}, "
        f"volume {volume_percent}%, membership {membership_percent}% -> {result.final_amount:.2f}"
    )
    return result


def calculate_area_rental_pricing(pricing_input: PricingCalculationInput,
                                  config: PricingConfig) -> PricingCalculationResult:
    """
    Price an annual area rental

    Area rentals get no volume discount; the membership discount applies to
    the undiscounted base.

    Raises:
        PricingError: Wrong booking type, a missing, non-positive or non-finite
            area, or an area below the configured minimum
    """
    if pricing_input.booking_type is not BookingType.AREA_RENTAL:
        raise PricingError("Area rental pricing requires an area-rental booking", field='booking_type')
    if not _is_positive_number(pricing_input.area_sq_ft):
        raise PricingError("Area square footage is required for area rental bookings", field='area_sq_ft')

    area = pricing_input.area_sq_ft
    if area < config.area_rental_min_sq_ft:
        raise PricingError(
            f"Minimum area rental is {config.area_rental_min_sq_ft:g} sq ft",
            field='area_sq_ft'
        )

    base_amount = area * config.area_rental_per_sq_ft_per_year
    _require_finite_amount(base_amount, 'area_sq_ft')

    membership_percent = find_membership_discount_percent(pricing_input.membership_tier, config)
    membership_discount = base_amount * membership_percent / 100

    breakdown = [
        BreakdownLine('Area Rental (annual)', area, config.area_rental_per_sq_ft_per_year, base_amount),
    ]

    result = _finish(base_amount, 0.0, 0.0, membership_discount, membership_percent, breakdown)
    logger.debug(
        f"Area rental pricing: {area:g} sq ft, membership {membership_percent}% "
        f"-> {result.final_amount:.2f}"
    )
    return result


def calculate_pricing(pricing_input: PricingCalculationInput,
                      config: PricingConfig) -> PricingCalculationResult:
    """Price either booking kind"""
    if pricing_input.booking_type is BookingType.PALLET:
        return calculate_pallet_pricing(pricing_input, config)
    return calculate_area_rental_pricing(pricing_input, config)


def calculate_total_price(pricing_input: PricingCalculationInput, config: PricingConfig) -> float:
    """Final amount owed for either booking kind"""
    return calculate_pricing(pricing_input, config).final_amount
