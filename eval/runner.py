"""Eval runner - loads query scenarios and evaluates extraction and resolution.

Run with: python -m eval.runner
"""

import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import yaml

from backend.app.db.inmemory import InMemoryCatalogRepository
from backend.app.models.documents import NewPdfDocument
from backend.app.models.query import ResolutionEnvelope
from backend.app.query.extractor import extract
from backend.app.query.resolver import resolve_text

SCENARIOS_PATH = Path(__file__).resolve().parent / "scenarios.yaml"


def load_scenarios(path: Path = SCENARIOS_PATH) -> dict[str, Any]:
    """Load scenarios from YAML."""
    with open(path, encoding="utf-8") as f:
        result: dict[str, Any] = yaml.safe_load(f)
        return result


async def build_catalog(entries: list[dict[str, Any]]) -> InMemoryCatalogRepository:
    """Build an in-memory catalog; each entry is one minute newer than the last."""
    catalog = InMemoryCatalogRepository()
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for offset, entry in enumerate(entries):
        await catalog.add_document(
            NewPdfDocument(**entry), uploaded_at=base + timedelta(minutes=offset)
        )
    return catalog


def evaluate_scenario(
    text: str, expect: dict[str, Any], envelope: ResolutionEnvelope
) -> tuple[int, int]:
    """Check one scenario; return (passed, total)."""
    checks: list[tuple[str, bool]] = []

    fields = extract(text)
    for name, expected in expect.get("fields", {}).items():
        actual = getattr(fields, name)
        checks.append((f"{name} == {expected!r} (got {actual!r})", actual == expected))

    tier = envelope.tier.value if envelope.tier else None
    checks.append((f"tier == {expect['tier']!r} (got {tier!r})", tier == expect["tier"]))
    checks.append(
        (f"found == {expect['found']} (got {envelope.found})", envelope.found == expect["found"])
    )

    if "count" in expect:
        count = len(envelope.documents)
        checks.append((f"count == {expect['count']} (got {count})", count == expect["count"]))
    if "message" in expect:
        checks.append(
            (f"message == {expect['message']!r}", envelope.message == expect["message"])
        )

    passed = 0
    for description, ok in checks:
        if ok:
            passed += 1
            print(f"  ✓ PASS: {description}")
        else:
            print(f"  ✗ FAIL: {description}")

    return passed, len(checks)


async def run(data: dict[str, Any]) -> int:
    """Run every scenario against the fixture catalog."""
    catalog = await build_catalog(data["catalog"])

    total_passed = 0
    total_checks = 0

    for scenario in data["scenarios"]:
        print(f"\n=== Scenario: {scenario['scenario_id']} ===")
        print(f"Description: {scenario['description']}")

        envelope = await resolve_text(scenario["text"], catalog)
        passed, total = evaluate_scenario(scenario["text"], scenario["expect"], envelope)
        total_passed += passed
        total_checks += total

        print(f"Result: {passed}/{total} checks passed")

    print("\n=== Summary ===")
    print(f"Total: {total_passed}/{total_checks} checks passed")

    return 0 if total_passed == total_checks else 1


def main() -> int:
    """Run eval scenarios."""
    return asyncio.run(run(load_scenarios()))


if __name__ == "__main__":
    sys.exit(main())
