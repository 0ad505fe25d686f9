"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_FULL_DAY_HOURS = 8
DEFAULT_HALF_DAY_HOURS = 4
DEFAULT_CHECK_OUT_TIME = "18:00"
DEFAULT_TIMEZONE = "UTC"

# Minutes charged per break for the context switch around it.
DEFAULT_TRANSITION_BUFFER_MINUTES = 5

FULL_DAY_FACTOR = 0.9
HALF_DAY_FACTOR = 0.5

EARTH_RADIUS_METERS = 6371000

GEOFENCE_EXIT_SUFFIX = " (Auto-checkout: Left office area)"
GEOFENCE_EXIT_OVERTIME_REASON = "User left office geofence area"
AUTO_CORRECTED_SUFFIX = " (Auto-corrected)"
AUTO_CORRECTED_REMARK = " | Auto-corrected: Past day incomplete."
CORRECTION_PREFIX = "Corrected: "
