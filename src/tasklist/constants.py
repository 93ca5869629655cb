"""Shared constants for tasklist."""

# Persisted layout. TASKS_KEY must stay stable across releases.
TASKS_KEY = "tasks"
DEFAULTS_FILENAME = "defaults.json"
STORAGE_FORMAT_VERSION = 1

# Row glyphs
COMPLETED_GLYPH = "●"
OPEN_GLYPH = "○"
