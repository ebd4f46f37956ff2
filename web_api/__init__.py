"""HTTP API for the resource viewer."""
