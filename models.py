"""Data models for LGA features and their rendered map output."""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Optional

from config import (
    OUTLINE_COLOR,
    OUTLINE_WEIGHT,
    OUTLINE_OPACITY,
    FILL_OPACITY,
)


@dataclass(frozen=True)
class Feature:
    """A Local Government Area and its precomputed housing target figures.

    Values are kept exactly as they appear in the GeoJSON properties; they
    are only coerced to numbers when formatted for display.
    """

    LGA: Optional[str] = None
    Curr: Any = None
    Add: Any = None
    PcInc: Any = None
    ReqYearly: Any = None
    HistYearly: Any = None
    MultiNeed: Any = None
    Shortfall: Any = None
    Cat: Any = None
    geometry: Optional[dict] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_geojson(cls, feature: dict) -> "Feature":
        props = feature.get("properties") or {}
        return cls(
            LGA=props.get("LGA"),
            Curr=props.get("Curr"),
            Add=props.get("Add"),
            PcInc=props.get("PcInc"),
            ReqYearly=props.get("ReqYearly"),
            HistYearly=props.get("HistYearly"),
            MultiNeed=props.get("MultiNeed"),
            Shortfall=props.get("Shortfall"),
            Cat=props.get("Cat"),
            geometry=feature.get("geometry"),
        )

    def properties(self) -> dict:
        props = asdict(self)
        props.pop("geometry")
        return props


@dataclass(frozen=True)
class Style:
    """Path style for one choropleth polygon."""

    fill_color: str
    outline_color: str = OUTLINE_COLOR
    outline_weight: float = OUTLINE_WEIGHT
    outline_opacity: float = OUTLINE_OPACITY
    fill_opacity: float = FILL_OPACITY
    interactive: bool = True

    def to_leaflet(self) -> dict:
        return {
            "color": self.outline_color,
            "weight": self.outline_weight,
            "opacity": self.outline_opacity,
            "fillOpacity": self.fill_opacity,
            "fillColor": self.fill_color,
            "interactive": self.interactive,
        }


class InteractionKind(str, Enum):
    HOVER = "mouseover"
    CLICK = "click"


@dataclass(frozen=True)
class RenderInstruction:
    """Popup content produced for one interaction on one feature."""

    lga: Optional[str]
    kind: InteractionKind
    html: str
