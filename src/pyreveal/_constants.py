"""Internal constants shared across the library."""

GEOLOCATION_URL = "https://ipapi.co/json/"
USER_AGENT = "pyreveal/0.1 (+aiohttp)"

#: Mean Earth radius used by the haversine formula, in kilometres.
EARTH_RADIUS_KM = 6371.0

#: Fixed owner location (Delhi, India) as ``(latitude, longitude)``.
OWNER_COORDINATE: tuple[float, float] = (28.7041, 77.1025)

# ------------------------------------------------------------------
# Reveal timing (seconds)
# ------------------------------------------------------------------

FIT_PADDING_PX = 50
FIT_DURATION_S = 2.0
LINE_STEPS = 30
LINE_INTERVAL_S = 0.02
DISTANCE_DELAY_S = 0.3

# ------------------------------------------------------------------
# Layer names used on the viewport
# ------------------------------------------------------------------

LAYER_LOADING = "loading"
LAYER_VISITOR = "visitor-marker"
LAYER_OWNER = "owner-marker"
LAYER_LINE = "connecting-line"
LAYER_DISTANCE = "distance-box"
