"""Prompt assembly for the daily analysis narrative."""

from __future__ import annotations

from wildlife_insight.domain.aggregate import PeriodAggregate

SYSTEM_INSTRUCTION = (
    "You are an expert analyst for wildlife hazard management at airports. "
    "Analyse the data and provide detailed insights into trends, risks and "
    "recommendations. Use concrete numbers and percentages. Be specific to {airport}."
)

_INSTRUCTIONS = """ANALYSE THIS DATA AND PROVIDE:
  1. OCCURRENCE TRENDS - How is animal activity changing over time?
  2. SEASONAL PATTERNS - Which species are most active in which periods?
  3. RISK ASSESSMENT - What are the key risks to flight safety?
  4. RECOMMENDATIONS - What should be done to reduce the risk?
  5. PREDICTIONS - What should be expected in the coming period?

  Be specific to {airport} and its coastal Mediterranean climate."""


def system_instruction(airport: str) -> str:
    return SYSTEM_INSTRUCTION.format(airport=airport)


def _period_block(aggregate: PeriodAggregate) -> str:
    lines = [
        f"=== PERIOD: {aggregate.label.upper()} ===",
        f"Wildlife sightings: {len(aggregate.sightings)}",
        f"Hazard reports: {len(aggregate.hazards)}",
        f"Tasks: {len(aggregate.tasks)}",
        "",
    ]
    if aggregate.sightings:
        species = ", ".join(f"{name} ({count})" for name, count in aggregate.top_species())
        severities = ", ".join(
            f"{level}: {count}" for level, count in aggregate.severity_frequency.items()
        )
        lines.append(f"Most frequent species: {species}")
        lines.append(f"Severity levels: {severities}")
    return "\n".join(lines) + "\n\n"


def build_analysis_prompt(aggregates: list[PeriodAggregate], airport: str) -> str:
    """Serialise every period's statistics, in order, plus the analysis request."""
    parts = [f"DAILY REPORT - DATA ANALYSIS {airport.upper()}\n\n"]
    parts.extend(_period_block(agg) for agg in aggregates)
    parts.append(_INSTRUCTIONS.format(airport=airport))
    return "".join(parts)
