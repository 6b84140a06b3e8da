"""
Prometheus Metrics
==================
Per-provider call, token, cost and latency metrics exposed on ``/metrics``.
"""

from prometheus_client import Counter, Histogram

PROVIDER_CALLS = Counter(
    "llm_compare_provider_calls_total",
    "Provider calls by outcome",
    ["provider", "status"],
)

PROVIDER_TOKENS = Counter(
    "llm_compare_provider_tokens_total",
    "Tokens reported or estimated per provider",
    ["provider"],
)

PROVIDER_COST = Counter(
    "llm_compare_provider_cost_usd_total",
    "Estimated spend in USD per provider",
    ["provider"],
)

PROVIDER_LATENCY = Histogram(
    "llm_compare_provider_latency_seconds",
    "Provider call latency",
    ["provider"],
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

PROMPT_TRUNCATIONS = Counter(
    "llm_compare_prompt_truncations_total",
    "Prompts shortened to fit a provider context window",
    ["provider"],
)
