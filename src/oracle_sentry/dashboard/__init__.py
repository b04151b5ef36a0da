"""Read-only status API for a running monitor."""
