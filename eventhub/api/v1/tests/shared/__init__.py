"""Shared schemas, cache helpers and utilities for test endpoints."""
