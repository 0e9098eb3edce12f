"""Persistence infrastructure: engine/session helpers and repositories."""
