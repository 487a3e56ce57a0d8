"""Well-known validation patterns and the hints shown when they fail."""

from __future__ import annotations

from typing import Dict, List, NamedTuple


class PatternInfo(NamedTuple):
    description: str
    examples: List[str]


EMAIL = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
URL = r"^https?://[^\s]+$"
IPV4 = r"^(\d{1,3}\.){3}\d{1,3}$"
SEMVER = r"^\d+\.\d+\.\d+$"
UUID = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

COMMON_PATTERNS: Dict[str, PatternInfo] = {
    EMAIL: PatternInfo("Valid email address", ["user@example.com", "alice.smith@company.org"]),
    URL: PatternInfo("Valid HTTP or HTTPS URL", ["https://example.com", "http://localhost:3000"]),
    IPV4: PatternInfo("Valid IPv4 address", ["192.168.1.1", "10.0.0.1"]),
    SEMVER: PatternInfo("Semantic version (major.minor.patch)", ["1.0.0", "2.1.3"]),
    UUID: PatternInfo("Valid UUID identifier", ["550e8400-e29b-41d4-a716-446655440000"]),
}


def hint_for_pattern(pattern: str) -> str:
    """Return a one-line hint for a pattern, e.g. for a re-prompt."""
    info = COMMON_PATTERNS.get(pattern)
    if info is None:
        return f"must match pattern {pattern}"
    return f"{info.description}, e.g. {info.examples[0]}"
