"""Map link builders for the report."""
from urllib.parse import quote, urlencode

from balloon_tracker.config import MAPBOX_STATIC_URL, OSM_MAP_URL


class MapService:
    """Builds interactive map links and Mapbox static image URLs."""

    def __init__(self, access_token: str, width: int, height: int, zoom: float):
        self.access_token = access_token
        self.width = width
        self.height = height
        self.zoom = zoom

    @staticmethod
    def get_map_link(latitude: float, longitude: float) -> str:
        """OpenStreetMap link with a marker at the point."""
        return f"{OSM_MAP_URL}?{urlencode({'mlat': latitude, 'mlon': longitude})}"

    def get_map_image_url(self, latitude: float, longitude: float) -> str:
        """Static map image centred on the point, with a GeoJSON marker overlay."""
        geojson = '{"type":"Point","coordinates":[%s,%s]}' % (longitude, latitude)
        overlay = f"geojson({quote(geojson, safe='')})"
        position = f"{longitude},{latitude},{self.zoom:g}"
        size = f"{self.width}x{self.height}"
        query = urlencode({"access_token": self.access_token})
        return f"{MAPBOX_STATIC_URL}/{overlay}/{position}/{size}?{query}"
