"""Match resolver - run planned tiers against the catalog and shape the envelope."""

import time
from collections.abc import Sequence

from backend.app.db.repositories import CatalogError, CatalogRepository
from backend.app.models.common import MatchKind
from backend.app.models.query import (
    ExtractedFields,
    QueryTier,
    ResolutionEnvelope,
    TierResult,
)
from backend.app.query.extractor import extract
from backend.app.query.planner import (
    DEFAULT_RELAXED_LIMIT,
    DEFAULT_SAMPLE_LIMIT,
    DEFAULT_SUBJECT_LIMIT,
    plan,
)
from backend.app.utils.logging import StructuredQueryLogger
from backend.app.utils.metrics import PrometheusQueryMetrics

_query_logger = StructuredQueryLogger()
_metrics = PrometheusQueryMetrics()


async def execute_tier(tier: QueryTier, catalog: CatalogRepository) -> TierResult:
    """Run a single tier against the catalog.

    Raises:
        CatalogError: If the catalog fails; any other catalog exception is
            wrapped so callers only handle one failure type
    """
    try:
        documents = await catalog.find_documents(tier.filter, tier.limit, tier.sort)
    except CatalogError:
        raise
    except Exception as e:
        raise CatalogError(f"catalog lookup failed: {type(e).__name__}") from e

    return TierResult(kind=tier.kind, documents=documents, hint=tier.hint)


def build_envelope(result: TierResult, fields: ExtractedFields | None = None) -> ResolutionEnvelope:
    """Shape the envelope for the tier that ended resolution.

    Only the strict tier reports ``found=True``; every other tier carries
    its hint as the message.
    """
    if result.kind is MatchKind.exact:
        return ResolutionEnvelope(
            found=True,
            documents=result.documents,
            tier=result.kind,
            parsed=fields,
        )

    return ResolutionEnvelope(
        found=False,
        message=result.hint,
        documents=result.documents,
        tier=result.kind,
        parsed=fields,
    )


async def resolve(
    tiers: Sequence[QueryTier],
    catalog: CatalogRepository,
    fields: ExtractedFields | None = None,
) -> ResolutionEnvelope:
    """Evaluate tiers in order and stop at the first non-empty result.

    The sample tier ends resolution even when it is empty. Catalog failures
    are not retried.

    Args:
        tiers: Planner output; must end with a sample tier
        catalog: Document catalog
        fields: Extracted fields, echoed back in the envelope

    Returns:
        Envelope for the first tier with results, or for the sample tier

    Raises:
        CatalogError: If any lookup fails
        ValueError: If ``tiers`` is empty
    """
    if not tiers:
        raise ValueError("tier list must not be empty")

    log_fields = fields or ExtractedFields()
    started = time.perf_counter()
    result: TierResult | None = None
    tiers_tried = 0

    for tier in tiers:
        tiers_tried += 1
        try:
            result = await execute_tier(tier, catalog)
        except CatalogError as e:
            _metrics.inc_catalog_error()
            _query_logger.log_catalog_error(log_fields, tier.kind.value, e)
            raise

        if result.documents or tier.kind is MatchKind.sample:
            break

    # Loop always assigns at least once since tiers is non-empty
    assert result is not None

    latency_ms = (time.perf_counter() - started) * 1000
    _metrics.record_resolution(result.kind.value, latency_ms)
    _query_logger.log_resolution(
        log_fields, result.kind.value, len(result.documents), tiers_tried, latency_ms
    )

    return build_envelope(result, fields)


async def resolve_text(
    text: str,
    catalog: CatalogRepository,
    *,
    relaxed_limit: int = DEFAULT_RELAXED_LIMIT,
    subject_limit: int = DEFAULT_SUBJECT_LIMIT,
    sample_limit: int = DEFAULT_SAMPLE_LIMIT,
) -> ResolutionEnvelope:
    """Extract, plan and resolve a free-text request in one call."""
    fields = extract(text)
    tiers = plan(
        fields,
        relaxed_limit=relaxed_limit,
        subject_limit=subject_limit,
        sample_limit=sample_limit,
    )
    return await resolve(tiers, catalog, fields)
