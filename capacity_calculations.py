"""
Floor Capacity Calculations Module

Answers "how many pallets of a given footprint and height can this floor hold":
- Storage zone resolution (declared zones, or one zone derived from clearances)
- Footprint packing per zone, both axis-aligned orientations
- Stack height from clearance-adjusted ceiling height
- Total pallet capacity per pallet type

Degenerate geometry never raises. It simply yields zero capacity, so an
operator can save an under-specified floor and see "0" instead of an error.
"""

import logging
import math
from typing import Iterable, List, Tuple

from planning_types import CapacityResult, FloorPlan, PalletSpec

logger = logging.getLogger(__name__)


class CapacityCalculator:
    """Rectangle-packing capacity estimate for a warehouse floor"""

    # Absorbs binary rounding in divisions such as 12 / 0.8
    FIT_TOLERANCE = 1e-9

    # Layers assumed to fit when clearances leave no usable height.
    # Kept for compatibility with existing floor reports.
    MIN_STACK_COUNT = 1

    def resolve_storage_zones(self, floor: FloorPlan) -> List[Tuple[float, float]]:
        """
        Determine the rectangles that take part in capacity math

        Args:
            floor: Floor plan

        Returns:
            List of (zone_width, zone_height) tuples. Declared storage zones if
            any exist, otherwise a single zone derived from the floor outline
            minus wall clearances and the loading/dock depths. Empty when the
            derived zone has no positive area.
        """
        declared = floor.storage_zones
        if declared:
            return [(zone.width, zone.height) for zone in declared]

        zone_width = floor.width - 2 * floor.wall_clearance
        zone_length = (floor.length - 2 * floor.wall_clearance
                       - floor.loading_zone_depth - floor.dock_zone_depth)

        if zone_width <= 0 or zone_length <= 0:
            logger.debug(
                f"No usable storage area on floor '{floor.name}' "
                f"({zone_width:.2f} x {zone_length:.2f} m after clearances)"
            )
            return []

        return [(zone_width, zone_length)]

    def _fit(self, span: float, size: float) -> int:
        """Whole items of `size` that fit along `span`; 0 for non-finite input"""
        if not (math.isfinite(span) and math.isfinite(size)):
            return 0
        if span <= 0 or size <= 0:
            return 0
        ratio = span / size
        if not math.isfinite(ratio):
            return 0
        return int(math.floor(ratio + self.FIT_TOLERANCE))

    def calculate_footprint_count(self, zones: Iterable[Tuple[float, float]], pallet: PalletSpec) -> int:
        """
        Count pallet footprints across all storage zones

        Each zone tries both axis-aligned orientations and keeps the better
        one. Pallets are not mixed across orientations inside a zone.

        Args:
            zones: (width, height) rectangles from resolve_storage_zones
            pallet: Pallet geometry

        Returns:
            Total footprint count summed over zones
        """
        if pallet.length <= 0 or pallet.width <= 0:
            return 0

        total = 0
        for zone_width, zone_height in zones:
            lengthwise = self._fit(zone_width, pallet.length) * self._fit(zone_height, pallet.width)
            crosswise = self._fit(zone_width, pallet.width) * self._fit(zone_height, pallet.length)
            total += max(lengthwise, crosswise)
        return total

    def calculate_stack_count(self, floor: FloorPlan, pallet: PalletSpec) -> int:
        """
        Number of pallet layers that fit vertically

        Args:
            floor: Floor plan (height, clearances, optional stacking override)
            pallet: Pallet geometry

        Returns:
            The stacking override when it is a positive integer, otherwise
            floor(usable height / pallet height) with a floor of one layer.
            Non-finite heights also fall back to one layer.
        """
        override = floor.stacking_override
        if override is not None and override > 0:
            return override

        usable_height = floor.height - floor.safety_clearance - floor.sprinkler_clearance
        if not math.isfinite(usable_height) or usable_height <= 0 or pallet.height <= 0:
            return self.MIN_STACK_COUNT

        return max(self.MIN_STACK_COUNT, self._fit(usable_height, pallet.height))

    def calculate(self, floor: FloorPlan, pallets: Iterable[PalletSpec]) -> List[CapacityResult]:
        """
        Compute capacity for each requested pallet type

        Args:
            floor: Floor plan
            pallets: Pallet specs, one result is produced per entry

        Returns:
            List of CapacityResult in the same order as `pallets`
        """
        zones = self.resolve_storage_zones(floor)
        results = []

        for pallet in pallets:
            footprint = self.calculate_footprint_count(zones, pallet)
            stack = self.calculate_stack_count(floor, pallet)
            result = CapacityResult(
                pallet_type=pallet.pallet_type,
                footprint_count=footprint,
                stack_count=stack,
            )
            logger.debug(
                f"Capacity for {pallet.pallet_type} on '{floor.name}': "
                f"{footprint} x {stack} = {result.max_pallets}"
            )
            results.append(result)

        return results


_calculator = CapacityCalculator()


def calculate_floor_capacity(floor: FloorPlan, pallets: Iterable[PalletSpec]) -> List[CapacityResult]:
    """Capacity of `floor` for every pallet in `pallets`"""
    return _calculator.calculate(floor, pallets)


def calculate_default_capacity(floor: FloorPlan) -> List[CapacityResult]:
    """Capacity for the standard, euro and custom pallets configured on the floor"""
    return _calculator.calculate(floor, floor.default_pallet_specs())
