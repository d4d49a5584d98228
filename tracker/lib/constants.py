"""Shared constants for the tracker."""

DEFAULT_DB_PATH = "./data/db.json"
DEFAULT_CONFIG_FILE = "tracker.env"

# Prefix for environment variables that override tracker.env
ENV_PREFIX = "TRACKER_"

# Column widths (characters) for list tables and detail tables
LIST_COLUMNS = (11, 32, 17)
DETAIL_COLUMNS = (5, 12, 27, 13)
