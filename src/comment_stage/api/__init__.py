"""HTTP API for Comment Stage."""
