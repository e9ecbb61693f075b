"""State legislature data backend: ingestion jobs and read-only query API."""

__version__ = "0.1.0"
