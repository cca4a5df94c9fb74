"""HTTP API for the ioc-tracker service."""
