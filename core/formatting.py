from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any


def ensure_utc_aware(dt: datetime | None) -> datetime | None:
    """
    Ensures tz-aware UTC.
    - naive => UTC (SQLite returns naive datetimes)
    - aware => UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def iso_utc(dt: datetime | None) -> str | None:
    dt = ensure_utc_aware(dt)
    return dt.isoformat() if dt else None


def to_decimal(value: Any) -> Decimal:
    """
    Exact decimal from int/float/str (floats go through str() so 0.1 stays 0.1).
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"not a number: {value!r}") from exc


def fmt_num(value: Any, decimals: int = 2) -> str:
    q = Decimal("1") if decimals == 0 else Decimal("1." + ("0" * decimals))
    num = to_decimal(value)
    # quantize needs every integer digit plus `decimals` within the precision
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, num.adjusted() + decimals + 2)
        num = num.quantize(q, rounding=ROUND_HALF_UP)
    return f"{num:.{decimals}f}"


def fmt_percent(value: Any, decimals: int = 2) -> str:
    return f"{fmt_num(value, decimals)}%"


def fmt_money(value: Any, currency: str, decimals: int = 2) -> str:
    return f"{fmt_num(value, decimals)} {currency}".strip()
