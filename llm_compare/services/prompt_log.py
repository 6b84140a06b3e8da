"""
Prompt Log
==========
In-memory history of prompt outcomes for comparing providers.
"""

from collections import deque
from decimal import Decimal

from llm_compare.schemas.gateway import PromptLogEntry, ProviderStats

SNIPPET_LENGTH = 80


class PromptLogger:
    """Bounded, newest-first log of prompt outcomes. Nothing is persisted."""

    def __init__(self, max_entries: int = 500):
        self._entries: deque[PromptLogEntry] = deque(maxlen=max_entries)

    def log_prompt(self, entry: PromptLogEntry) -> None:
        self._entries.appendleft(entry)

    def get_history(self, limit: int | None = None) -> list[PromptLogEntry]:
        """Return entries newest first, optionally capped at ``limit``."""
        entries = list(self._entries)
        if limit is not None:
            entries = entries[:limit]
        return entries

    def clear(self) -> None:
        self._entries.clear()

    def provider_stats(self) -> dict[str, ProviderStats]:
        """Aggregate count, success rate, tokens, cost and latency per provider."""
        totals: dict[str, dict] = {}

        for entry in self._entries:
            stats = totals.setdefault(
                entry.provider,
                {
                    "count": 0,
                    "success_count": 0,
                    "total_tokens": 0,
                    "total_cost": Decimal("0"),
                    "total_latency_ms": 0,
                },
            )
            stats["count"] += 1
            stats["total_tokens"] += entry.tokens
            stats["total_cost"] += entry.cost
            stats["total_latency_ms"] += entry.latency_ms
            if entry.status == "success":
                stats["success_count"] += 1

        return {
            provider: ProviderStats(
                provider=provider,
                count=stats["count"],
                success_count=stats["success_count"],
                success_rate=round(stats["success_count"] / stats["count"] * 100, 1),
                total_tokens=stats["total_tokens"],
                total_cost=stats["total_cost"],
                avg_latency_ms=stats["total_latency_ms"] // stats["count"],
            )
            for provider, stats in totals.items()
        }

    def __len__(self) -> int:
        return len(self._entries)


def make_snippet(prompt: str) -> str:
    """Leading characters of a prompt, for display in the history."""
    return prompt[:SNIPPET_LENGTH]
