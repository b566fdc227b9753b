"""Generate the interactive Leaflet map of LGA housing target progress."""

import html
import json
import logging
import os

from config import TARGET_YEAR
from session import MapSession
from styler import legend_entries

logger = logging.getLogger(__name__)

ABOUT_HTML = """\
<div style="max-width: 300px;">
  <p>This is a quick and dirty visualisation of how councils are tracking in relation to the __YEAR__ housing targets released by the Victorian Government in June 2024.</p>
  <p>__YEAR__ housing target data from <a href="https://engage.vic.gov.au/project/shape-our-victoria/page/housing-targets-2051" target="_blank">here</a>.</p>
  <p>Historical dwelling approval data, from 2014-2024, is from the ABS (using NDA's as a measure of new dwelling construction [yes I know that's not a perfect way of measuring new construction]).</p>
  <p>Not associated with the Victorian Government or any Local Government.</p>
  <button onclick="closeAboutPopup()">Back to the map</button>
</div>"""

HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>Victorian Housing Targets __YEAR__</title>
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css"/>
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<style>
* { box-sizing: border-box; margin: 0; padding: 0; }
html, body, #map { height: 100%; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }

/* ── Popups ── */
.custom-popup .leaflet-popup-content-wrapper {
  border-radius: 10px; box-shadow: 0 4px 12px rgba(0,0,0,0.15);
}
.custom-popup .leaflet-popup-content { font-size: 13px; line-height: 1.45; max-width: 320px; }
.custom-popup p { margin: 6px 0; }
.popup-header {
  font-size: 15px; font-weight: 700; color: #111;
  padding-bottom: 6px; border-bottom: 1px solid #f3f4f6; margin-bottom: 4px;
}
.centered-text { text-align: center; }
.dynamic-attribute { font-weight: 700; color: #111; }

/* ── About control ── */
#about-button {
  color: white; background-color: black; font-size: 16px; font-weight: bold;
  display: block; padding: 5px; text-align: center; width: auto; text-decoration: none;
}

/* ── Legend ── */
#legend {
  position: absolute; bottom: 30px; right: 10px; z-index: 1000;
  background: rgba(255,255,255,0.95); padding: 12px 16px; border-radius: 10px;
  font-size: 12px; box-shadow: 0 2px 8px rgba(0,0,0,0.15);
}
#legend h4 {
  margin: 0 0 8px; font-size: 11px; text-transform: uppercase;
  letter-spacing: 0.05em; color: #6b7280;
}
.legend-row { display: flex; align-items: center; gap: 8px; padding: 1px 0; color: #374151; }
.legend-swatch {
  width: 14px; height: 14px; border-radius: 3px; flex-shrink: 0;
  border: 1px solid rgba(0,0,0,0.1);
}
</style>
</head>
<body>

<div id="map"></div>

<div id="legend">
  <h4>Required vs historical build rate</h4>
__LEGEND_ROWS__
</div>

<script>
// ── Data ────────────────────────────────────────────────
var layerData = __LAYER_DATA__;
var surface = __SURFACE__;
var aboutContent = __ABOUT_CONTENT__;

// ── Map ─────────────────────────────────────────────────
var map = L.map('map').setView(surface.center, surface.zoom);

// Aerial basemap, greyed out so the choropleth reads on top of it
var aerial = L.tileLayer(surface.aerialUrl, {
  attribution: surface.aerialAttribution
}).addTo(map);
aerial.getContainer().style.filter = surface.aerialFilter;

// Road and place labels at high zoom only
surface.labelUrls.forEach(function(url) {
  L.tileLayer(url, {
    minZoom: surface.labelMinZoom,
    maxZoom: surface.labelMaxZoom
  }).addTo(map);
});

// ── About popup ─────────────────────────────────────────
function closeAboutPopup() {
  map.closePopup();
}

function openAboutPopup() {
  L.popup({closeOnClick: false})
    .setLatLng(map.getCenter())
    .setContent(aboutContent)
    .openOn(map);
}

var aboutButton = L.control({position: 'topright'});
aboutButton.onAdd = function() {
  var div = L.DomUtil.create('div', 'leaflet-bar leaflet-control leaflet-control-custom');
  div.innerHTML = '<a href="#" id="about-button">About</a>';
  div.style.cursor = 'pointer';
  L.DomEvent.on(div, 'click', function(e) {
    L.DomEvent.preventDefault(e);
    openAboutPopup();
  });
  return div;
};
aboutButton.addTo(map);

// ── Choropleth ──────────────────────────────────────────
if (layerData) {
  L.geoJSON(layerData, {
    style: function(feature) {
      return feature.properties.style;
    },
    onEachFeature: function(feature, layer) {
      var popups = feature.properties.popups;
      if (popups.mouseover) {
        layer.on('mouseover', function() {
          layer.bindPopup(popups.mouseover, {className: 'custom-popup', autoPan: false}).openPopup();
        });
      }
      if (popups.click) {
        layer.on('click', function() {
          layer.bindPopup(popups.click, {className: 'custom-popup'}).openPopup();
        });
      }
    }
  }).addTo(map);
} else {
  console.error('Error loading GeoJSON data: no choropleth layer available');
}
</script>
</body>
</html>"""


def _legend_rows() -> str:
    rows = []
    for label, color in legend_entries():
        rows.append(
            f'  <div class="legend-row"><span class="legend-swatch" '
            f'style="background:{color}"></span>{html.escape(label)}</div>'
        )
    return "\n".join(rows)


def _surface(session: MapSession) -> dict:
    s = session.surface
    return {
        "center": list(s.center),
        "zoom": s.zoom,
        "aerialUrl": s.aerial_url,
        "aerialAttribution": s.aerial_attribution,
        "aerialFilter": s.aerial_filter,
        "labelUrls": list(s.label_urls),
        "labelMinZoom": s.label_min_zoom,
        "labelMaxZoom": s.label_max_zoom,
    }


def _script_json(value) -> str:
    # Keep "</script>" inside popup text from closing the script block
    return json.dumps(value).replace("</", "<\\/")


def generate_html(session: MapSession) -> str:
    """Generate the complete interactive HTML map."""
    about = ABOUT_HTML.replace("__YEAR__", str(TARGET_YEAR))
    return (
        HTML_TEMPLATE.replace("__YEAR__", str(TARGET_YEAR))
        .replace("__LEGEND_ROWS__", _legend_rows())
        .replace("__SURFACE__", _script_json(_surface(session)))
        .replace("__ABOUT_CONTENT__", _script_json(about))
        .replace("__LAYER_DATA__", _script_json(session.layer()))
    )


def write_html(session: MapSession, path: str) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(generate_html(session))
    logger.info("Map saved to %s", path)
    return path
