"""
Interop Module

Cross-language stop of the tour: Python builds a Leaflet.js map through
folium and hands an embedded JavaScript block to the browser side.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import folium
from branca.element import MacroElement
from jinja2 import Template

from langtour.config import MAP_TILES, MAP_ZOOM


logger = logging.getLogger(__name__)

# '{map}' is replaced with the JavaScript variable of the Leaflet map
EMBEDDED_SCRIPT = """
{map}.on('click', function(e) {
    L.popup()
        .setLatLng(e.latlng)
        .setContent('Lat: ' + e.latlng.lat.toFixed(4) + '<br>Lon: ' + e.latlng.lng.toFixed(4))
        .openOn({map});
});
"""


@dataclass(frozen=True)
class Place:
    name: str
    lat: float
    lon: float
    note: str = ''


class EmbeddedScript(MacroElement):
    """Raw JavaScript rendered after the parent map has been created."""

    _template = Template("""
        {% macro script(this, kwargs) %}
        {{ this.source }}
        {% endmacro %}
    """)

    def __init__(self, source: str):
        super().__init__()
        self._name = 'EmbeddedScript'
        self.source = source


def _check_place(place: Place) -> None:
    if not -90 <= place.lat <= 90:
        raise ValueError(f"Latitude out of range for {place.name!r}: {place.lat}")
    if not -180 <= place.lon <= 180:
        raise ValueError(f"Longitude out of range for {place.name!r}: {place.lon}")


def build_map(
    places: Sequence[Place],
    center: Optional[Tuple[float, float]] = None,
    zoom_start: int = MAP_ZOOM,
    tiles: str = MAP_TILES
) -> folium.Map:
    """
    Folium map with one marker per place.

    Parameters
    ----------
    places : sequence of Place
        Locations to mark
    center : tuple, optional
        (lat, lon) to centre on; defaults to the mean of the places
    zoom_start : int
        Initial zoom level
    tiles : str
        Folium tile set name

    Returns
    -------
    folium.Map
        Map with a 'Places' layer and a layer control
    """
    if not places:
        raise ValueError("No places supplied for mapping.")
    for place in places:
        _check_place(place)

    if center is None:
        center = (
            sum(p.lat for p in places) / len(places),
            sum(p.lon for p in places) / len(places),
        )

    m = folium.Map(location=list(center), zoom_start=zoom_start, tiles=tiles)

    fg = folium.FeatureGroup(name='Places')
    for place in places:
        popup_html = f"<b>{place.name}</b>"
        if place.note:
            popup_html += f"<br>{place.note}"
        folium.Marker(
            location=[place.lat, place.lon],
            popup=popup_html,
            tooltip=place.name
        ).add_to(fg)
    fg.add_to(m)

    folium.LayerControl(collapsed=False).add_to(m)
    return m


def embed_script(m: folium.Map, source: str = EMBEDDED_SCRIPT) -> EmbeddedScript:
    """Attach JavaScript ``source`` to the map, substituting its variable name for '{map}'."""
    element = EmbeddedScript(source.replace('{map}', m.get_name()))
    m.add_child(element)
    return element


def render_map(
    places: Sequence[Place],
    output_path: Union[str, Path],
    script: Optional[str] = EMBEDDED_SCRIPT,
    **map_kwargs
) -> Path:
    """
    Build the map, embed the script and save standalone HTML.

    Returns
    -------
    Path
        Path of the saved HTML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    m = build_map(places, **map_kwargs)
    if script:
        embed_script(m, script)
    m.save(str(output_path))

    logger.info("Interactive map with %d place(s) saved to %s", len(places), output_path)
    return output_path
