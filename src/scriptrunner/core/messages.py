"""User-facing strings."""

SCRIPT_PAUSED = "Script paused"
SCREEN_TURNED_OFF = "Screen turned off"
CAPTURE_UNAVAILABLE = "Screen capture could not be prepared"
