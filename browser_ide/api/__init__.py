"""HTTP routes of the dashboard server."""
