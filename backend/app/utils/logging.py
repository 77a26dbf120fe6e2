"""Structured logging for query resolution."""

import logging
from typing import Any

from backend.app.models.query import ExtractedFields

logger = logging.getLogger(__name__)


class StructuredQueryLogger:
    """Structured logger for query resolution."""

    def log_resolution(
        self,
        fields: ExtractedFields,
        tier: str,
        result_count: int,
        tiers_tried: int,
        latency_ms: float,
    ) -> None:
        """Log the tier that answered a query with structured data."""
        log_data: dict[str, Any] = {
            "subject": fields.subject,
            "regulation": fields.regulation,
            "year": fields.year,
            "tier": tier,
            "result_count": result_count,
            "tiers_tried": tiers_tried,
            "latency_ms": round(latency_ms, 2),
        }

        log_msg = f"Query resolved: tier={tier} results={result_count}"
        logger.info(log_msg, extra={"structured": log_data})

    def log_catalog_error(self, fields: ExtractedFields, tier: str, error: Exception) -> None:
        """Log a catalog failure; the error itself is re-raised by the caller."""
        log_data: dict[str, Any] = {
            "subject": fields.subject,
            "regulation": fields.regulation,
            "year": fields.year,
            "tier": tier,
            "error_reason": type(error).__name__,
        }

        logger.warning(f"Catalog failure on tier={tier}", extra={"structured": log_data})
