"""Adapters to third-party optimization frameworks."""
