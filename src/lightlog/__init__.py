"""Light Logger gateway: multi-tenant log ingestion with schema validation."""

__version__ = "0.1.0"
