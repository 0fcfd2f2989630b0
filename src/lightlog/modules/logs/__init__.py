"""Logs module - event validation and ingestion."""
