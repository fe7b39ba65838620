"""Reference constants for part generation and hardware costing.

This module provides:
- Reference unit costs for hardware, shared by the declarative and legacy
  accessory paths
- Legacy hardware heuristics (per-door and per-shelf counts)
- Fixed gaps and setbacks used by the category templates
"""

from __future__ import annotations

from dataclasses import dataclass

from cabinet_engine.domain.value_objects import AccessoryType


# Reference unit costs per accessory type.
DEFAULT_HARDWARE_COSTS: dict[AccessoryType, float] = {
    AccessoryType.HINGE: 2.50,
    AccessoryType.HANDLE: 3.75,
    AccessoryType.SHELF_PIN: 0.15,
    AccessoryType.DRAWER_SLIDE: 8.99,  # per pair
    AccessoryType.CONNECTOR: 0.45,
    AccessoryType.OTHER: 0.0,
}


@dataclass(frozen=True)
class LegacyHardwareLine:
    """Name and description of a hardware line emitted by the legacy path."""

    accessory_type: AccessoryType
    name: str
    notes: str


# Emission order of the legacy hardware lines.
LEGACY_HARDWARE_LINES: tuple[LegacyHardwareLine, ...] = (
    LegacyHardwareLine(AccessoryType.HINGE, "Concealed Hinges", "Concealed cabinet hinges"),
    LegacyHardwareLine(AccessoryType.HANDLE, "Cabinet Handles", "Cabinet door handles"),
    LegacyHardwareLine(AccessoryType.SHELF_PIN, "Shelf Support Pins", "Shelf support pins"),
    LegacyHardwareLine(AccessoryType.DRAWER_SLIDE, "Drawer Slides", "Drawer slides (pairs)"),
)

HINGES_PER_DOOR = 2
HANDLES_PER_DOOR = 1
SHELF_PINS_PER_SHELF = 4

# --- Template geometry (mm) ---

DOOR_GAP = 10.0  # total clearance across a door opening
DOUBLE_DOOR_GAP = 5.0  # per door when the opening is split in two
SHELF_SETBACK = 20.0  # shelves sit back from the front edge

# Width from which a template switches to a pair of doors.
TWO_DOOR_THRESHOLDS = {
    "base": 600.0,
    "wall": 500.0,
    "tall": 600.0,
    "generic": 600.0,
}

SHELVES_PER_TEMPLATE = {
    "base": 1,
    "wall": 2,
    "tall": 5,
    "generic": 1,
}
