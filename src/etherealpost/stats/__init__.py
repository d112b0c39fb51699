"""Statistical helpers for auction prices."""

from .prices import (
    FIRST_STANDARD_DEV_PERCENTILE,
    MINIMUM_PRICES_PERCENTILE,
    market_price,
    mean,
    median,
    normalize_from_std_dev,
    normalized_market_price,
    normalized_market_price_with_qty,
    percentile_index,
    round_half_up,
    std_dev,
    std_dev_amount_qty,
)

__all__ = [
    "FIRST_STANDARD_DEV_PERCENTILE",
    "MINIMUM_PRICES_PERCENTILE",
    "market_price",
    "mean",
    "median",
    "normalize_from_std_dev",
    "normalized_market_price",
    "normalized_market_price_with_qty",
    "percentile_index",
    "round_half_up",
    "std_dev",
    "std_dev_amount_qty",
]
