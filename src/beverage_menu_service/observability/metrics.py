"""Custom metrics for the beverage menu service."""

from opentelemetry import metrics

from beverage_menu_service.observability.config import SERVICE_NAME

meter = metrics.get_meter(SERVICE_NAME)

menu_load_counter = meter.create_counter(
    name="menu_load_total",
    description="Menu loads by data source (live, cached, unavailable)",
    unit="1",
)

cache_write_counter = meter.create_counter(
    name="offline_cache_write_total",
    description="Offline cache writes by persistence outcome",
    unit="1",
)

source_fetch_duration_histogram = meter.create_histogram(
    name="beverage_source_fetch_duration_seconds",
    description="Duration of beverage collection fetches from the hosted backend",
    unit="s",
)

flavor_match_histogram = meter.create_histogram(
    name="flavor_filter_match_count",
    description="Number of wines left after applying active flavor filters",
    unit="1",
)


def record_menu_load(source: str) -> None:
    """Record a menu load.

    Args:
        source: Where the menu came from ("live", "cached", "unavailable")
    """
    menu_load_counter.add(1, {"source": source})


def record_cache_write(persisted: bool) -> None:
    """Record an offline cache write.

    Args:
        persisted: Whether the snapshot reached durable storage
    """
    cache_write_counter.add(1, {"persisted": persisted})


def record_source_fetch(duration_seconds: float, success: bool) -> None:
    """Record a fetch of the beverage collections.

    Args:
        duration_seconds: Duration in seconds
        success: Whether every collection was fetched
    """
    source_fetch_duration_histogram.record(duration_seconds, {"success": success})


def record_flavor_matches(match_count: int) -> None:
    """Record how many wines matched narrowed flavor filters."""
    flavor_match_histogram.record(match_count)
