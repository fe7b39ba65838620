"""Value objects for the cabinet engine domain.

All lengths are millimetres. Every class here is immutable and validates
itself on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MaterialType(str, Enum):
    """Catalog material categories."""

    PANEL = "panel"
    EDGE_BANDING = "edge_banding"
    BACK_PANEL = "back_panel"
    HARDWARE = "hardware"


class GrainDirection(str, Enum):
    """Wood grain orientation recorded on a generated part.

    Informational only: the cutting-stock packer does not rotate parts,
    so grain never changes a placement.

    Attributes:
        WITH_GRAIN: Grain runs along the part's height.
        AGAINST_GRAIN: Grain runs along the part's width.
        NO_GRAIN: No grain constraint (MDF, backs, hardware).
    """

    WITH_GRAIN = "with_grain"
    AGAINST_GRAIN = "against_grain"
    NO_GRAIN = "no_grain"


class PartKind(str, Enum):
    """Part type tags emitted by the category templates and hardware costing.

    Declarative part types carry their own free-form tag, so
    ``GeneratedPart.part_type`` is a plain string rather than this enum.
    """

    SIDE_PANEL = "side_panel"
    HORIZONTAL_PANEL = "horizontal_panel"
    BACK_PANEL = "back_panel"
    SHELF = "shelf"
    DOOR = "door"
    HARDWARE = "hardware"


class AccessoryType(str, Enum):
    """Accessory/hardware categories."""

    HINGE = "hinge"
    HANDLE = "handle"
    DRAWER_SLIDE = "drawer_slide"
    SHELF_PIN = "shelf_pin"
    CONNECTOR = "connector"
    OTHER = "other"


class CabinetTemplate(str, Enum):
    """Fallback construction template selected from a model's category.

    Attributes:
        BASE: Floor cabinet, one shelf, two doors from 600mm.
        WALL: Upper cabinet, two shelves, two doors from 500mm.
        TALL: Full-height cabinet, five shelves, middle divider, upper and
            lower doors.
        GENERIC: Anything else; same layout as BASE.
    """

    BASE = "base"
    WALL = "wall"
    TALL = "tall"
    GENERIC = "generic"

    @classmethod
    def from_category(cls, category_name: str | None) -> "CabinetTemplate":
        """Resolve a template from a category name.

        Substring match checked in priority order Base, Wall, Tall, so a
        category called "Tall Wall Units" resolves to WALL.
        """
        name = category_name or ""
        if "Base" in name:
            return cls.BASE
        if "Wall" in name:
            return cls.WALL
        if "Tall" in name:
            return cls.TALL
        return cls.GENERIC


@dataclass(frozen=True)
class EdgeBanding:
    """Which edges of a part receive edge banding.

    Top and bottom edges run along the part width, left and right edges
    along the part height.
    """

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def none(cls) -> "EdgeBanding":
        return cls()

    @classmethod
    def all_edges(cls) -> "EdgeBanding":
        return cls(top=True, bottom=True, left=True, right=True)

    @property
    def any(self) -> bool:
        """True if at least one edge is banded."""
        return self.top or self.bottom or self.left or self.right

    def length_m(self, width: float, height: float) -> float:
        """Banded edge length in metres for a part of the given size."""
        length = 0.0
        if self.top:
            length += width / 1000
        if self.bottom:
            length += width / 1000
        if self.left:
            length += height / 1000
        if self.right:
            length += height / 1000
        return length


@dataclass(frozen=True)
class CabinetDimensions:
    """Chosen outer dimensions of a cabinet in millimetres."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.depth <= 0:
            raise ValueError("All dimensions must be positive")


@dataclass(frozen=True)
class SheetSize:
    """Stock sheet size in millimetres."""

    width: float = 2440.0
    height: float = 1220.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class HardwareOverrides:
    """Caller overrides for hardware counts and count variables.

    ``hinges``, ``handles``, ``shelf_pins`` and ``drawer_slides`` replace
    the legacy hardware heuristics. ``door_count``, ``drawer_count`` and
    ``shelf_count`` replace the defaults in the formula variable context.
    A value of ``None`` means "use the default".
    """

    hinges: int | None = None
    handles: int | None = None
    shelf_pins: int | None = None
    drawer_slides: int | None = None
    door_count: int | None = None
    drawer_count: int | None = None
    shelf_count: int | None = None

    def __post_init__(self) -> None:
        for name in (
            "hinges",
            "handles",
            "shelf_pins",
            "drawer_slides",
            "door_count",
            "drawer_count",
            "shelf_count",
        ):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")
