"""Price statistics for Auction House snapshots.

All prices are integer copper amounts. Averages are rounded half away
from zero so results match the in-game money display.

"Market Price" is the price you would expect to pay for a normal
quantity of an item at the moment a scan took place. Two flavours are
provided:

- ``market_price``: mean of the bottom 15.87% of listings (15.87 is the
  percentile one standard deviation below the mean of a normal curve).
- ``normalized_market_price``: mean of the bottom 15%-30% of listings
  with outliers beyond 1.5 standard deviations thrown away. This is
  close to how Trade Skill Master computes "Market Value".

The ``*_with_qty`` variants take ``(price, quantity)`` pairs and count
every unit of a stack independently, without expanding the stacks.
"""

from __future__ import annotations

import bisect
import itertools
import math
from collections.abc import Iterable, Sequence

FIRST_STANDARD_DEV_PERCENTILE = 15.87
MINIMUM_PRICES_PERCENTILE = 15.0

# A price more than 20% above the previously included one ends the window.
MAX_STEP_VARIANCE = 1.2
NORMALIZATION_STD_DEVS = 1.5

PricePair = tuple[int, int]


def round_half_up(value: float) -> int:
    """Round a non-negative float half away from zero."""
    return int(math.floor(value + 0.5))


def percentile_index(percentile: float, length: int) -> int:
    """Highest index to include when slicing out ``percentile`` of ``length`` items.

    For 35 elements and the 50th percentile the result is 16 (the 17th
    element).

    Raises:
        ValueError: If ``percentile`` is negative or ``length`` is 0.
    """
    if math.floor(percentile) < 0:
        raise ValueError("Cannot calculate a percentile < 0")
    if length <= 0:
        raise ValueError("Cannot calculate the percentile index of an empty array")

    index = math.floor((percentile / 100.0) * length)
    if index == 0:
        return 0
    return index - 1


def mean(numbers: Sequence[int]) -> float:
    """Arithmetic mean of ``numbers``."""
    if not numbers:
        raise ValueError("Cannot calculate the mean of an empty array")
    return sum(numbers) / len(numbers)


def median(numbers: Sequence[int]) -> int:
    """Median of ``numbers``; the upper middle element for even lengths."""
    if not numbers:
        raise ValueError("Cannot calculate the median of an empty array")
    ordered = sorted(numbers)
    return ordered[len(ordered) // 2]


def std_dev(numbers: Sequence[int], is_population: bool = True) -> float | None:
    """Standard deviation of ``numbers``.

    Returns None for fewer than two numbers, since a standard deviation
    cannot be calculated from a single data point.
    """
    length = len(numbers)
    if length < 2:
        return None

    avg = mean(numbers)
    total = sum((n - avg) ** 2 for n in numbers)

    if is_population:
        return math.sqrt(total / length)
    return math.sqrt(total / (length - 1))


def market_price(prices: Sequence[int]) -> int | None:
    """Mean of the lowest 15.87% of ``prices``.

    Suppose ``5 @ 6.00g``, ``10 @ 5.00g``, ``15 @ 5.45g`` and ``1 @ 4.00g``
    are listed. Of the 31 units, ``floor(31 * 0.1587) = 4`` are taken,
    giving ``4.75g``.

    Returns None for no prices and the price itself for a single price.
    """
    if not prices:
        return None
    if len(prices) == 1:
        return prices[0]

    p_index = percentile_index(FIRST_STANDARD_DEV_PERCENTILE, len(prices))
    considered = sorted(prices)[: p_index + 1]
    return round_half_up(sum(considered) / len(considered))


def normalize_from_std_dev(prices: Sequence[int], std_devs: float) -> list[int]:
    """Keep only prices within ``std_devs`` population standard deviations of the mean.

    ``prices`` must hold at least two values.
    """
    deviation = std_dev(prices, True)
    if deviation is None:
        raise ValueError("Cannot normalize fewer than two prices")
    avg = mean(prices)
    target = std_devs * abs(deviation)
    low, high = avg - target, avg + target
    return [p for p in sorted(prices) if low <= p <= high]


def normalized_market_price(prices: Iterable[int]) -> int | None:
    """Outlier-resistant market price of individual unit prices.

    Consider ``3 @ 1g, 1 @ 4g, 10 @ 5g, 15 @ 5.45g, 5 @ 6g, 2 @ 15g``
    (36 units). The bottom 15% is the first 5 units. The window then
    grows towards 30% (10 units) while each next price stays within 20%
    of the previous one, giving ``[1, 1, 1, 4, 5, 5, 5, 5, 5, 5]``. Mean
    3.7 and standard deviation ~1.79 keep ``[1.91, 5.49]``, which leaves
    ``[4, 5, 5, 5, 5, 5, 5]`` and a market price of ``4.86g``.

    Returns None for no prices and the price itself for a single price.
    """
    return normalized_market_price_with_qty((p, 1) for p in prices)


def normalized_market_price_with_qty(pairs: Iterable[PricePair]) -> int | None:
    """``normalized_market_price`` over ``(price, quantity)`` pairs."""
    ordered = _sorted_pairs(pairs)
    units = _total_units(ordered)
    if units == 0:
        return None
    if units == 1:
        return ordered[0][0]

    p0_index = percentile_index(MINIMUM_PRICES_PERCENTILE, units)
    p1_index = percentile_index(MINIMUM_PRICES_PERCENTILE * 2, units)
    cumulative = list(itertools.accumulate(qty for _, qty in ordered))

    target_index = p0_index
    if p1_index > p0_index:
        last_price = ordered[bisect.bisect_right(cumulative, p0_index)][0]
        i = p0_index + 1
        while i <= p1_index:
            pos = bisect.bisect_right(cumulative, i)
            price = ordered[pos][0]
            if price >= last_price * MAX_STEP_VARIANCE:
                break
            # every remaining unit of this stack has the same price
            run_end = min(cumulative[pos] - 1, p1_index)
            target_index = run_end
            last_price = price
            i = run_end + 1

    considered = _truncate_units(ordered, target_index + 1)
    if target_index + 1 < 2:
        return round_half_up(_weighted_mean(considered))

    filtered = _normalize_pairs_from_std_dev(considered, NORMALIZATION_STD_DEVS)
    return round_half_up(_weighted_mean(filtered))


def std_dev_amount_qty(
    pairs: Iterable[PricePair], is_population: bool = True
) -> float | None:
    """Standard deviation over ``(price, quantity)`` pairs, unit by unit."""
    ordered = _sorted_pairs(pairs)
    units = _total_units(ordered)
    if units < 2:
        return None

    avg = _weighted_mean(ordered)
    total = sum(qty * (price - avg) ** 2 for price, qty in ordered)

    if is_population:
        return math.sqrt(total / units)
    return math.sqrt(total / (units - 1))


def _sorted_pairs(pairs: Iterable[PricePair]) -> list[PricePair]:
    return sorted((int(price), int(qty)) for price, qty in pairs if qty > 0)


def _total_units(pairs: Sequence[PricePair]) -> int:
    return sum(qty for _, qty in pairs)


def _weighted_mean(pairs: Sequence[PricePair]) -> float:
    return sum(price * qty for price, qty in pairs) / _total_units(pairs)


def _truncate_units(pairs: Sequence[PricePair], count: int) -> list[PricePair]:
    """The first ``count`` units of sorted ``pairs``."""
    result: list[PricePair] = []
    remaining = count
    for price, qty in pairs:
        if remaining <= 0:
            break
        take = min(qty, remaining)
        result.append((price, take))
        remaining -= take
    return result


def _normalize_pairs_from_std_dev(
    pairs: Sequence[PricePair], std_devs: float
) -> list[PricePair]:
    deviation = std_dev_amount_qty(pairs, True)
    if deviation is None:
        raise ValueError("Cannot normalize fewer than two units")
    avg = _weighted_mean(pairs)
    target = std_devs * abs(deviation)
    low, high = avg - target, avg + target
    return [(price, qty) for price, qty in pairs if low <= price <= high]
