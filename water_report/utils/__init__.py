"""Shared helpers: logging, text acquisition and record merging."""
