"""Query planner - turn extracted fields into an ordered list of lookup tiers."""

from backend.app.models.common import MatchKind, MatchMode, SortOrder
from backend.app.models.query import (
    EXACT_HINT,
    RELAXED_HINT,
    SAMPLE_HINT,
    SUBJECT_HINT_TEMPLATE,
    UNPARSED_HINT,
    CatalogFilter,
    ExtractedFields,
    FieldCondition,
    QueryTier,
)

DEFAULT_RELAXED_LIMIT = 6
DEFAULT_SUBJECT_LIMIT = 6
DEFAULT_SAMPLE_LIMIT = 8


def _conditions(fields: ExtractedFields, year_mode: MatchMode) -> tuple[FieldCondition, ...]:
    conditions: list[FieldCondition] = []
    if fields.subject:
        conditions.append(FieldCondition(field="subject", value=fields.subject))
    if fields.regulation:
        conditions.append(FieldCondition(field="regulation", value=fields.regulation))
    if fields.year:
        conditions.append(FieldCondition(field="year", value=fields.year, mode=year_mode))
    return tuple(conditions)


def sample_tier(hint: str = SAMPLE_HINT, limit: int = DEFAULT_SAMPLE_LIMIT) -> QueryTier:
    """Unfiltered tier returning the most recent uploads."""
    return QueryTier(
        kind=MatchKind.sample,
        limit=limit,
        sort=SortOrder.newest_first,
        hint=hint,
    )


def plan(
    fields: ExtractedFields,
    *,
    relaxed_limit: int = DEFAULT_RELAXED_LIMIT,
    subject_limit: int = DEFAULT_SUBJECT_LIMIT,
    sample_limit: int = DEFAULT_SAMPLE_LIMIT,
) -> list[QueryTier]:
    """Build the tier sequence for a set of extracted fields.

    Order: strict (all fields, substring) -> relaxed (year exact, capped) ->
    subject-only (only with a subject, capped) -> sample (always last).
    With no fields at all the plan is a single sample tier carrying the
    "could not parse" hint.

    Args:
        fields: Output of the extractor
        relaxed_limit: Cap for the relaxed tier
        subject_limit: Cap for the subject-only tier
        sample_limit: Cap for the sample tier

    Returns:
        Tiers in evaluation order
    """
    if fields.is_empty:
        return [sample_tier(UNPARSED_HINT, sample_limit)]

    tiers = [
        QueryTier(
            kind=MatchKind.exact,
            filter=CatalogFilter(conditions=_conditions(fields, MatchMode.contains)),
            hint=EXACT_HINT,
        ),
        QueryTier(
            kind=MatchKind.relaxed,
            filter=CatalogFilter(conditions=_conditions(fields, MatchMode.equals)),
            limit=relaxed_limit,
            hint=RELAXED_HINT,
        ),
    ]

    if fields.subject:
        tiers.append(
            QueryTier(
                kind=MatchKind.subject_only,
                filter=CatalogFilter(
                    conditions=(FieldCondition(field="subject", value=fields.subject),)
                ),
                limit=subject_limit,
                hint=SUBJECT_HINT_TEMPLATE.format(subject=fields.subject),
            )
        )

    tiers.append(sample_tier(SAMPLE_HINT, sample_limit))
    return tiers
