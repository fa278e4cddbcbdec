"""URL helpers — query parsing and path resolution."""
