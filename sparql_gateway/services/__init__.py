"""Endpoint registry and query gateway services."""
