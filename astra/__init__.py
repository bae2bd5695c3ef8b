"""Astra Intelligence document ingestion service."""
