"""Shared utilities: errors, logging, time helpers."""
