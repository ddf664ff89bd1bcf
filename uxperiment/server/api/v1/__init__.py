"""Version 1 of the UXperiment HTTP API."""
