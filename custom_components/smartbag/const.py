DOMAIN = "smartbag"
VERSION = "0.3.0"

# Device address used when the config flow is left at its default
DEFAULT_HOST = "192.168.4.1"
DEFAULT_ENTRY_NAME = "Smartbag Tracker"

LOCATION_PATH = "/location"
BUZZER_PATH = "/buzzer"

# Update intervals (seconds)
POLL_INTERVAL = 15           # location poll cadence
REQUEST_TIMEOUT = 3          # applies to both the location GET and the buzzer POST

# Jitter suppression: a new fix must move more than this (decimal degrees) on
# either axis before it replaces the stored position.
# (0.0001° latitude ≈ 11 m, well inside consumer GPS noise)
POSITION_THRESHOLD = 0.0001

# Camera targets
DEFAULT_LATITUDE = 26.0924       # Reynosa, Tamaulipas
DEFAULT_LONGITUDE = -98.2770
PREVIEW_ZOOM = 12.0
DEVICE_ZOOM = 15.0

STATUS_PREVIEW = "Preview: default view, waiting for GPS signal..."
STATUS_FIX = "GPS fix - Lat {lat:.5f}, Lon {lon:.5f}"
MARKER_TITLE_PREVIEW = "Default view (preview)"
MARKER_TITLE_FIX = "GPS location"
