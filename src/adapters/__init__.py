"""Adapters for external services creatives are published to."""
