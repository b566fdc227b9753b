"""Dataset loading and the per-feature handlers behind the map page."""

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field

from config import (
    AERIAL_ATTRIBUTION,
    AERIAL_FILTER,
    AERIAL_TILES_URL,
    HTTP_TIMEOUT_S,
    LABEL_MAX_ZOOM,
    LABEL_MIN_ZOOM,
    LABEL_TILES_URLS,
    MAP_CENTER,
    MAP_ZOOM,
    MULTI_NEED_DECIMALS,
    NO_DATA_COLOR,
    USER_AGENT,
)
from models import Feature, InteractionKind, RenderInstruction, Style
from styler import (
    FormatError,
    category_phrase,
    click_detail,
    hover_summary,
    number_property,
    round_to,
    style_for,
)

logger = logging.getLogger(__name__)


class DataFetchError(Exception):
    """The GeoJSON dataset could not be retrieved or parsed."""


def _read_source(source: str) -> str:
    if source.startswith(("http://", "https://")):
        logger.info("Downloading %s", source)
        req = urllib.request.Request(source, headers={"User-Agent": USER_AGENT})
        with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_S) as resp:
            return resp.read().decode("utf-8")
    with open(source, encoding="utf-8") as f:
        return f.read()


def load_dataset(source: str) -> list[Feature]:
    """Load LGA features from a GeoJSON FeatureCollection (path or URL)."""
    try:
        data = json.loads(_read_source(source))
    except (OSError, urllib.error.URLError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DataFetchError(f"Could not load {source}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise DataFetchError(f"{source} is not a GeoJSON FeatureCollection")

    for i, f in enumerate(data["features"]):
        if not isinstance(f, dict) or not isinstance(f.get("properties"), (dict, type(None))):
            raise DataFetchError(f"{source}: feature {i} is not a GeoJSON Feature with a properties object")

    features = [Feature.from_geojson(f) for f in data["features"]]
    logger.info("GeoJSON data loaded: %d features from %s", len(features), source)
    return features


@dataclass(frozen=True)
class SurfaceOptions:
    """Where the map opens and which tiles it draws."""

    center: tuple = MAP_CENTER
    zoom: int = MAP_ZOOM
    aerial_url: str = AERIAL_TILES_URL
    aerial_attribution: str = AERIAL_ATTRIBUTION
    aerial_filter: str = AERIAL_FILTER
    label_urls: list = field(default_factory=lambda: list(LABEL_TILES_URLS))
    label_min_zoom: int = LABEL_MIN_ZOOM
    label_max_zoom: int = LABEL_MAX_ZOOM


class MapSession:
    """One map display: the loaded dataset plus the surface it is drawn on.

    A session built with ``features=None`` has no choropleth layer, which is
    how a failed dataset load is shown.
    """

    def __init__(self, features: list[Feature] | None, surface: SurfaceOptions | None = None):
        self.features = tuple(features) if features is not None else None
        self.surface = surface or SurfaceOptions()

    @classmethod
    def from_source(cls, source: str, surface: SurfaceOptions | None = None) -> "MapSession":
        return cls(load_dataset(source), surface)

    @classmethod
    def empty(cls, surface: SurfaceOptions | None = None) -> "MapSession":
        return cls(None, surface)

    @property
    def has_layer(self) -> bool:
        return self.features is not None

    def style(self, feature: Feature) -> Style:
        return style_for(feature)

    def handle(self, feature: Feature, kind: InteractionKind) -> RenderInstruction:
        if kind is InteractionKind.HOVER:
            content = hover_summary(feature)
        elif kind is InteractionKind.CLICK:
            content = click_detail(feature)
        else:
            raise ValueError(f"Unknown interaction: {kind!r}")
        return RenderInstruction(lga=feature.LGA, kind=kind, html=content)

    def _render_feature(self, feature: Feature) -> dict:
        props = feature.properties()
        try:
            props["style"] = self.style(feature).to_leaflet()
            props["popups"] = {
                kind.value: self.handle(feature, kind).html for kind in InteractionKind
            }
        except FormatError as e:
            logger.warning("Rendering %s without data: %s", feature.LGA, e)
            props["style"] = Style(fill_color=NO_DATA_COLOR).to_leaflet()
            props["popups"] = {}
        return {"type": "Feature", "geometry": feature.geometry, "properties": props}

    def layer(self) -> dict | None:
        """FeatureCollection with each feature's style and popups attached."""
        if not self.has_layer:
            return None
        return {
            "type": "FeatureCollection",
            "features": [self._render_feature(f) for f in self.features],
        }

    def summary(self) -> list[dict]:
        """One row per feature for export; malformed features are skipped."""
        rows = []
        for feature in self.features or ():
            try:
                multi_need = round_to(number_property(feature, "MultiNeed"), MULTI_NEED_DECIMALS)
                shortfall = number_property(feature, "Shortfall")
                style = self.style(feature)
            except FormatError as e:
                logger.warning("Skipping %s in summary: %s", feature.LGA, e)
                continue
            rows.append(
                {
                    "LGA": feature.LGA,
                    "Cat": feature.Cat,
                    "category": category_phrase(feature.Cat),
                    "MultiNeed": multi_need,
                    "fill_color": style.fill_color,
                    "shortfall_pct": round_to(shortfall * 100, 0),
                }
            )
        return rows
