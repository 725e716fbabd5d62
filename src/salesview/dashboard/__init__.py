"""Dashboard API -- JSON state and action routes for a renderer."""
