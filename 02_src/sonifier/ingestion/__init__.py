"""Ingestion module."""

from .service import IIngestionService, IngestionService, decode_body

__all__ = ["IIngestionService", "IngestionService", "decode_body"]
