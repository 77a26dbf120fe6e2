"""Query resolution models - extracted fields, tiers and the response envelope."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.models.common import (
    REGULATION_PATTERN,
    YEAR_VALUES,
    MatchKind,
    MatchMode,
    SortOrder,
)
from backend.app.models.documents import PdfDocument

CatalogField = Literal["subject", "regulation", "year"]

EXACT_HINT = "exact match"
RELAXED_HINT = "no exact match, similar documents"
SUBJECT_HINT_TEMPLATE = "found for subject {subject}"
SAMPLE_HINT = "no matches, here are some available documents"
UNPARSED_HINT = "could not parse — showing available documents."


class ExtractedFields(BaseModel):
    """Structured fields pulled out of a free-text request.

    All fields are optional. A field that is present is already normalized:
    subject is capitalized, regulation is "R" + digits, year is "1".."4".
    """

    model_config = ConfigDict(frozen=True)

    subject: str | None = None
    regulation: str | None = None
    year: str | None = None

    @field_validator("regulation")
    @classmethod
    def validate_regulation(cls, v: str | None) -> str | None:
        """Ensure regulation looks like R23 / R123."""
        if v is not None and not REGULATION_PATTERN.match(v):
            raise ValueError("regulation must be 'R' followed by 2-3 digits")
        return v

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: str | None) -> str | None:
        """Ensure year is a single digit 1-4."""
        if v is not None and v not in YEAR_VALUES:
            raise ValueError("year must be one of 1, 2, 3, 4")
        return v

    @property
    def is_empty(self) -> bool:
        """True when nothing was extracted."""
        return not (self.subject or self.regulation or self.year)


class FieldCondition(BaseModel):
    """Single field predicate applied by the catalog."""

    model_config = ConfigDict(frozen=True)

    field: CatalogField
    value: str = Field(..., min_length=1)
    mode: MatchMode = MatchMode.contains


class CatalogFilter(BaseModel):
    """Conjunction of field conditions. No conditions matches every document."""

    model_config = ConfigDict(frozen=True)

    conditions: tuple[FieldCondition, ...] = ()

    def matches(self, document: PdfDocument) -> bool:
        """Evaluate the filter against a document in memory."""
        for condition in self.conditions:
            actual = getattr(document, condition.field) or ""
            if condition.mode is MatchMode.equals:
                if actual != condition.value:
                    return False
            elif condition.value.lower() not in actual.lower():
                return False
        return True


class QueryTier(BaseModel):
    """One lookup attempt: filter + limit + sort, plus the hint shown on a hit."""

    model_config = ConfigDict(frozen=True)

    kind: MatchKind
    filter: CatalogFilter = Field(default_factory=CatalogFilter)
    limit: int | None = Field(None, gt=0)
    sort: SortOrder = SortOrder.unsorted
    hint: str


class TierResult(BaseModel):
    """Outcome of executing one tier."""

    kind: MatchKind
    documents: list[PdfDocument] = Field(default_factory=list)
    hint: str


class ResolutionEnvelope(BaseModel):
    """Response returned by the resolution engine.

    ``success`` is False only on internal failure; "no match" is a
    successful resolution with ``found`` False.
    """

    success: bool = True
    found: bool = False
    message: str | None = None
    documents: list[PdfDocument] = Field(default_factory=list)
    tier: MatchKind | None = None
    parsed: ExtractedFields | None = None
    error: str | None = None
