"""
Hackathon source adapters.

Each source implements:
- fetch_events() -> list[Event] (may raise)
- fetch() -> AdapterResult (never raises, bounded by the source timeout)

New sources are added by subclassing SourceAdapter and registering the class
in SOURCE_REGISTRY.
"""

from typing import Any, Optional

from .base import MAX_EVENTS, SourceAdapter
from .devfolio import DevfolioAdapter
from .devpost import DevpostAdapter
from .dorahacks import DorahacksAdapter
from .hackerearth import HackerEarthAdapter
from .mlh import MLHAdapter
from .transport import DEFAULT_USER_AGENT, FetchTransport, TransportError
from .unstop import UnstopAdapter


# Registration order is the output order of the aggregator
SOURCE_REGISTRY: dict[str, type[SourceAdapter]] = {
    "devpost": DevpostAdapter,
    "unstop": UnstopAdapter,
    "dorahacks": DorahacksAdapter,
    "devfolio": DevfolioAdapter,
    "hackerearth": HackerEarthAdapter,
    "mlh": MLHAdapter,
}


def build_adapters(
    config: dict[str, Any],
    transport: Optional[FetchTransport] = None,
    only: Optional[list[str]] = None,
) -> list[SourceAdapter]:
    """
    Instantiate enabled adapters in registry order.

    Args:
        config: Validated config (see config.get_default_config)
        transport: Shared transport; built from config["transport"] if omitted
        only: Restrict to these source names (still in registry order)

    Returns:
        List of adapters ready for the aggregator
    """
    if transport is None:
        transport_cfg = config.get("transport", {})
        transport = FetchTransport(
            timeout=transport_cfg.get("timeout_seconds", 30.0),
            render_timeout=transport_cfg.get("render_timeout_seconds", 45.0),
            user_agent=transport_cfg.get("user_agent") or DEFAULT_USER_AGENT,
        )

    max_events = config.get("max_events_per_source", MAX_EVENTS)
    sources_cfg = config.get("sources", {})
    adapters: list[SourceAdapter] = []

    for name, adapter_cls in SOURCE_REGISTRY.items():
        source_cfg = sources_cfg.get(name, {})
        if only is not None and name not in only:
            continue
        if only is None and not source_cfg.get("enabled", True):
            continue

        kwargs: dict[str, Any] = {
            "transport": transport,
            "max_events": max_events,
            "timeout": source_cfg.get("timeout_seconds", 30.0),
        }
        if adapter_cls is MLHAdapter:
            kwargs["season"] = source_cfg.get("season")
        adapters.append(adapter_cls(**kwargs))

    return adapters


__all__ = [
    "SourceAdapter",
    "FetchTransport",
    "TransportError",
    "DevpostAdapter",
    "UnstopAdapter",
    "DorahacksAdapter",
    "DevfolioAdapter",
    "HackerEarthAdapter",
    "MLHAdapter",
    "SOURCE_REGISTRY",
    "build_adapters",
]
