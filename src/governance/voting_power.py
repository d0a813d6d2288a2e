"""
VotingPowerModel — Конверсия заблокированных токенов в voting power

Voting escrow: governance-токен, заблокированный на срок, даёт
time-weighted voting power ("escrow balance"), линейный по сроку блокировки.

ФОРМУЛА:
    duration <= 0               → 0
    duration >= MAX_LOCK_DAYS   → locked_amount
    иначе                       → locked_amount * duration // MAX_LOCK_DAYS

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вычисление только в целых числах (усечение к нулю), без float
2. escrow_balance <= locked_amount
3. Срок ограничивается моделью, а не вызывающим кодом
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field

from src.core.domain.amounts import FixedPointAmount


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальный срок блокировки (4 года)
MAX_LOCK_DAYS: Final[int] = 1460


# =============================================================================
# LOCK PERIODS
# =============================================================================


class LockPeriod(str, Enum):
    """Предустановленные сроки блокировки для калькулятора."""

    WEEK = "WEEK"
    MONTH = "MONTH"
    THREE_MONTHS = "3MONTH"
    SIX_MONTHS = "6MONTH"
    YEAR = "YEAR"
    TWO_YEARS = "2YEAR"

    @property
    def days(self) -> int:
        return _LOCK_PERIOD_DAYS[self]

    @property
    def label(self) -> str:
        return _LOCK_PERIOD_LABELS[self]


_LOCK_PERIOD_DAYS: Final[dict[LockPeriod, int]] = {
    LockPeriod.WEEK: 7,
    LockPeriod.MONTH: 30,
    LockPeriod.THREE_MONTHS: 90,
    LockPeriod.SIX_MONTHS: 180,
    LockPeriod.YEAR: 365,
    LockPeriod.TWO_YEARS: 730,
}

_LOCK_PERIOD_LABELS: Final[dict[LockPeriod, str]] = {
    LockPeriod.WEEK: "1 WEEK",
    LockPeriod.MONTH: "1 MONTH",
    LockPeriod.THREE_MONTHS: "3 MONTHS",
    LockPeriod.SIX_MONTHS: "6 MONTHS",
    LockPeriod.YEAR: "1 YEAR",
    LockPeriod.TWO_YEARS: "2 YEARS",
}


# =============================================================================
# ESCROW BALANCE
# =============================================================================


def compute_escrow_balance(
    locked_amount: FixedPointAmount,
    duration_days: int,
    max_lock_days: int = MAX_LOCK_DAYS,
) -> FixedPointAmount:
    """
    Voting power для заблокированного количества.

    Args:
        locked_amount: Заблокированный governance-токен (>= 0)
        duration_days: Срок блокировки в днях (ограничивается [0, max_lock_days])
        max_lock_days: Срок, дающий полную voting power

    Returns:
        Escrow balance в масштабе locked_amount

    Raises:
        ValueError: Если max_lock_days <= 0 или duration_days не int

    Examples:
        >>> amount = FixedPointAmount(raw=1000, decimals=0)
        >>> compute_escrow_balance(amount, 365).raw
        250
    """
    if isinstance(duration_days, bool) or not isinstance(duration_days, int):
        raise ValueError(f"duration_days must be int, got {duration_days!r}")
    if max_lock_days <= 0:
        raise ValueError(f"max_lock_days must be positive, got {max_lock_days}")

    if duration_days <= 0:
        return FixedPointAmount.zero(locked_amount.decimals)
    if duration_days >= max_lock_days:
        return locked_amount

    return locked_amount.mul_div(duration_days, max_lock_days)


class LockPosition(BaseModel):
    """
    Гипотетическая блокировка governance-токена.

    Immutable модель (frozen=True).
    """

    amount: FixedPointAmount = Field(..., description="Заблокированный governance-токен")
    duration_days: int = Field(..., strict=True, description="Срок блокировки в днях")

    model_config = {"frozen": True}

    @classmethod
    def for_period(cls, amount: FixedPointAmount, period: LockPeriod) -> "LockPosition":
        return cls(amount=amount, duration_days=period.days)

    def escrow_balance(self, max_lock_days: int = MAX_LOCK_DAYS) -> FixedPointAmount:
        """Voting power этой блокировки (см. compute_escrow_balance)."""
        return compute_escrow_balance(self.amount, self.duration_days, max_lock_days)
