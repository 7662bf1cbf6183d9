from cardvault.engine.aggregator import aggregate
from cardvault.engine.themes import derive_collection_counters
from cardvault.engine.valuation import extended_value, safe_average, safe_percentage, unit_value
from cardvault.engine.variant_pricing import resolve_price

__all__ = [
    "aggregate",
    "derive_collection_counters",
    "extended_value",
    "resolve_price",
    "safe_average",
    "safe_percentage",
    "unit_value",
]
