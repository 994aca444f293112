from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIMIT = "100"
MAX_INT64 = 2**63 - 1


def parse_limit(raw: str | None) -> int:
    """Parse the ``limit`` query value.

    Non-numeric input becomes 0 (no rows) instead of an error; negative
    values are clamped to 0 and oversized ones to the largest 64-bit integer.
    """
    try:
        value = int((raw if raw is not None else DEFAULT_LIMIT).strip())
    except ValueError:
        return 0
    return min(max(value, 0), MAX_INT64)


@dataclass(frozen=True)
class TaskFilters:
    status: str | None = None
    priority: str | None = None
    limit: int = int(DEFAULT_LIMIT)

    @classmethod
    def from_query(
        cls,
        status: str | None = None,
        priority: str | None = None,
        limit: str | None = None,
    ) -> TaskFilters:
        return cls(
            status=status or None,
            priority=priority or None,
            limit=parse_limit(limit),
        )
