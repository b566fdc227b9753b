"""Configuration constants for the Victorian housing targets map."""

# Input
DATA_SOURCE = "DataWebMerc.geojson"
HTTP_TIMEOUT_S = 30
USER_AGENT = "housing-targets-map/1.0"

# Map view (Melbourne CBD)
MAP_CENTER = (-37.8136, 144.9631)
MAP_ZOOM = 10

# Tiles (Esri / ArcGIS Online)
AERIAL_TILES_URL = (
    "https://services.arcgisonline.com/arcgis/rest/services/"
    "World_Imagery/MapServer/tile/{z}/{y}/{x}"
)
AERIAL_ATTRIBUTION = "&copy; Esri &amp; the GIS User Community"
AERIAL_FILTER = "brightness(0.86) saturate(0) contrast(0.73)"
LABEL_TILES_URLS = [
    "https://services.arcgisonline.com/arcgis/rest/services/"
    "Reference/World_Boundaries_and_Places/MapServer/tile/{z}/{y}/{x}",
    "https://services.arcgisonline.com/arcgis/rest/services/"
    "Reference/World_Transportation/MapServer/tile/{z}/{y}/{x}",
]
LABEL_MIN_ZOOM = 14
LABEL_MAX_ZOOM = 19

# Choropleth scale: MultiNeed breaks and ColorBrewer RdBu (9 classes),
# reversed so low MultiNeed gets the blue end
MULTI_NEED_BREAKS = [0, 1.0642, 1.1628, 1.3778, 1.5574, 1.6431, 1.8035, 2.1022, 2.4018, 10]
MULTI_NEED_COLORS = [
    "#2166ac",
    "#4393c3",
    "#92c5de",
    "#d1e5f0",
    "#f7f7f7",
    "#fddbc7",
    "#f4a582",
    "#d6604d",
    "#b2182b",
]
MULTI_NEED_DECIMALS = 3

# Feature style
OUTLINE_COLOR = "white"
OUTLINE_WEIGHT = 2
OUTLINE_OPACITY = 1
FILL_OPACITY = 0.35
NO_DATA_COLOR = "#9ca3af"

# Tracking category (Cat) -> phrase, best to worst
CATEGORY_PHRASES = {
    1: "doing great, and are likely to meet their",
    2: "on track to achieve their",
    3: "tracking a bit below their",
    4: "well below their",
    5: "a very long way from their",
}

TARGET_YEAR = 2051

# Snapshot
PAGE_LOAD_TIMEOUT_MS = 60000
LAYER_WAIT_MS = 15000
VIEWPORT = {"width": 1280, "height": 900}

# Output
OUTPUT_DIR = "output"
HTML_FILENAME = "map.html"
SUMMARY_FILENAME = "lga_summary.csv"
SNAPSHOT_FILENAME = "map.png"
