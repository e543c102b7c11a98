"""
Valuation engine: pure functions from positions and quotes to valuations.

No I/O and no hidden state. Inputs are never mutated and identical inputs
always produce identical outputs. Values are plain floats, unrounded;
rounding for display happens at the API boundary.
"""

import math
from collections import defaultdict
from datetime import date
from typing import Mapping, Sequence

from fintrack.core.exceptions import InvalidPositionError
from fintrack.domain.models import Position
from fintrack.domain.views import (
    AllocationItem,
    PortfolioValuation,
    PositionValuation,
    Quote,
    ValuePoint,
)


def _percent(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100


def validate_position(position: Position) -> None:
    """Raise InvalidPositionError unless shares and purchase price are finite and positive."""
    if not math.isfinite(position.shares) or position.shares <= 0:
        raise InvalidPositionError(position.position_id, f"shares must be positive, got {position.shares}")
    if not math.isfinite(position.purchase_price) or position.purchase_price <= 0:
        raise InvalidPositionError(
            position.position_id,
            f"purchase price must be positive, got {position.purchase_price}",
        )


def _usable_price(quote: Quote | None) -> float | None:
    if quote is None:
        return None
    if not math.isfinite(quote.price) or quote.price < 0:
        return None
    return quote.price


def valuate(
    positions: Sequence[Position],
    quotes: Mapping[str, Quote],
) -> PortfolioValuation:
    """
    Value each position at its current quote and aggregate.

    A position without a usable quote is valued at its purchase price and
    flagged with price_is_stale. Positions sharing a symbol are valued and
    allocated independently, one row each, in input order.

    Raises:
        InvalidPositionError: a position has non-positive shares or purchase price.
    """
    for position in positions:
        validate_position(position)

    rows = []
    for position in positions:
        price = _usable_price(quotes.get(position.symbol))
        stale = price is None
        current_price = position.purchase_price if stale else price
        cost_basis = position.shares * position.purchase_price
        current_value = position.shares * current_price
        rows.append((position, current_price, current_value, cost_basis, stale))

    total_value = math.fsum(row[2] for row in rows)
    total_cost_basis = math.fsum(row[3] for row in rows)
    total_gain_loss = total_value - total_cost_basis

    per_position = tuple(
        PositionValuation(
            position_id=position.position_id,
            symbol=position.symbol,
            shares=position.shares,
            current_price=current_price,
            current_value=current_value,
            cost_basis=cost_basis,
            gain_loss=current_value - cost_basis,
            gain_loss_percent=_percent(current_value - cost_basis, cost_basis),
            allocation_percent=_percent(current_value, total_value),
            price_is_stale=stale,
        )
        for position, current_price, current_value, cost_basis, stale in rows
    )

    return PortfolioValuation(
        total_value=total_value,
        total_cost_basis=total_cost_basis,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=_percent(total_gain_loss, total_cost_basis),
        per_position=per_position,
    )


def allocation_by_symbol(valuation: PortfolioValuation) -> list[AllocationItem]:
    """
    Group a row-level valuation by symbol for allocation charts.

    This is a read-only view over valuate() output; the row-level
    allocation percentages are summed, not recomputed. Largest holding first.
    """
    values: dict[str, float] = defaultdict(float)
    percents: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for row in valuation.per_position:
        values[row.symbol] += row.current_value
        percents[row.symbol] += row.allocation_percent
        counts[row.symbol] += 1

    items = [
        AllocationItem(
            symbol=symbol,
            current_value=values[symbol],
            allocation_percent=percents[symbol],
            position_count=counts[symbol],
        )
        for symbol in values
    ]
    items.sort(key=lambda item: (-item.current_value, item.symbol))
    return items


def value_series(
    positions: Sequence[Position],
    closes: Mapping[str, Mapping[date, float]],
) -> list[ValuePoint]:
    """
    Portfolio market value and cost basis over time.

    `closes` maps symbol -> {date: close}. The series covers every date
    present in `closes` on or after the earliest purchase date. On each date
    a position counts only once purchased; it is priced at the latest close
    on or before that date, or at its purchase price if no close exists yet.
    """
    for position in positions:
        validate_position(position)
    if not positions:
        return []

    start = min(p.purchase_date for p in positions)
    dates = sorted({d for series in closes.values() for d in series if d >= start})

    sorted_closes = {symbol: sorted(series.items()) for symbol, series in closes.items()}
    cursor: dict[str, int] = defaultdict(int)
    last_close: dict[str, float] = {}

    points = []
    for day in dates:
        for symbol, series in sorted_closes.items():
            i = cursor[symbol]
            while i < len(series) and series[i][0] <= day:
                last_close[symbol] = series[i][1]
                i += 1
            cursor[symbol] = i

        held = [p for p in positions if p.purchase_date <= day]
        market_value = math.fsum(
            p.shares * last_close.get(p.symbol, p.purchase_price) for p in held
        )
        cost_basis = math.fsum(p.shares * p.purchase_price for p in held)
        points.append(ValuePoint(date=day, market_value=market_value, cost_basis=cost_basis))
    return points
