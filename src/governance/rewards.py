"""
RewardProjector — Проекция базовой и boosted доходности gauge

ФОРМУЛЫ:
    reward_value = pool_reward_for_duration * reward_token_price
    pool_value   = pool_size * price_per_share * asset_price
    r            = reward_value / pool_value          (за наблюдаемый период)

    COMPOUND: base_apy = ((1 + r) ** periods_per_year - 1) * 100
    SIMPLE:   base_apy = r * periods_per_year * 100

    FULL_RATE:   boosted_apy = base_apy * boost,        total = boosted_apy
    EXCESS_ONLY: boosted_apy = base_apy * (boost - 1),  total = base_apy + boosted_apy

Два строго разделённых домена:
- ledger-домен: FixedPointAmount и точные Fraction
- display-домен: float проценты, получаемые только на последнем шаге

Значения из display-домена никогда не возвращаются в ledger-домен.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Final, Optional

from src.core.domain.amounts import FixedPointAmount

from .boost import BoostMultiplier
from .voting_power import MAX_LOCK_DAYS


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# pool_reward_for_duration наблюдается за неделю
REWARD_PERIODS_PER_YEAR_DEFAULT: Final[int] = 52

PERCENT: Final[int] = 100


# =============================================================================
# CONFIG
# =============================================================================


class BoostApplication(str, Enum):
    """
    К какой части доходности применяется boost.

    FULL_RATE — boost масштабирует всю базовую ставку;
    EXCESS_ONLY — boosted_apy показывает только прирост сверх базовой ставки.
    """

    FULL_RATE = "FULL_RATE"
    EXCESS_ONLY = "EXCESS_ONLY"


class Annualization(str, Enum):
    """Способ приведения ставки за период к годовой."""

    COMPOUND = "COMPOUND"
    SIMPLE = "SIMPLE"


@dataclass(frozen=True)
class RewardsConfig:
    """Конфигурация проекции доходности."""

    boost_application: BoostApplication = BoostApplication.FULL_RATE
    annualization: Annualization = Annualization.COMPOUND
    reward_periods_per_year: int = REWARD_PERIODS_PER_YEAR_DEFAULT

    # Срок, дающий полную voting power
    max_lock_days: int = MAX_LOCK_DAYS

    def __post_init__(self):
        if self.reward_periods_per_year <= 0:
            raise ValueError(
                f"reward_periods_per_year must be positive, got {self.reward_periods_per_year}"
            )
        if self.max_lock_days <= 0:
            raise ValueError(f"max_lock_days must be positive, got {self.max_lock_days}")


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class RewardsProjection:
    """Проекция доходности (пересчитывается по запросу, не сохраняется)."""

    base_apy: float  # %
    boosted_apy: Optional[float]  # %, None если boost не вычислим
    boost_multiplier: BoostMultiplier
    total_apy: float  # %

    def display(self, places: int = 2) -> dict[str, str]:
        """Строки для отображения ("12.34%", "---" для undefined)."""

        def pct(value: Optional[float]) -> str:
            return "---" if value is None else f"{value:.{places}f}%"

        return {
            "total_apy": pct(self.total_apy),
            "base_rewards": pct(self.base_apy),
            "boosted_rewards": pct(self.boosted_apy),
            "rewards_booster": self.boost_multiplier.display(places),
        }


# =============================================================================
# BASE REWARDS
# =============================================================================


def _exact_price(price: Decimal | int, name: str) -> Fraction:
    if isinstance(price, bool) or not isinstance(price, (Decimal, int)):
        raise ValueError(f"{name} must be Decimal or int, got {type(price).__name__}")
    if isinstance(price, Decimal) and not price.is_finite():
        raise ValueError(f"{name} must be finite, got {price}")
    if price < 0:
        raise ValueError(f"{name} must be non-negative, got {price}")
    return Fraction(price)


def compute_base_rewards(
    pool_size: FixedPointAmount,
    pool_reward_for_duration: FixedPointAmount,
    price_per_share: FixedPointAmount,
    asset_price: Decimal | int,
    reward_token_price: Decimal | int,
    config: RewardsConfig | None = None,
) -> float:
    """
    Базовая годовая доходность gauge в процентах.

    Args:
        pool_size: Застейканные vault shares
        pool_reward_for_duration: Эмиссия reward-токена за период
        price_per_share: Underlying-актив за одну share
        asset_price: Цена underlying-актива (разрешённая)
        reward_token_price: Цена reward-токена (разрешённая)
        config: Конфигурация (default: RewardsConfig())

    Returns:
        base_apy в процентах; 0.0 для пустого пула при любых остальных входах

    Raises:
        ValueError: Если пул не пуст, а цены отрицательные, NaN/Inf или не Decimal/int
    """
    config = config or RewardsConfig()
    if pool_size.is_zero():
        return 0.0

    asset = _exact_price(asset_price, "asset_price")
    reward_price = _exact_price(reward_token_price, "reward_token_price")

    pool_value = pool_size.to_fraction() * price_per_share.to_fraction() * asset
    reward_value = pool_reward_for_duration.to_fraction() * reward_price

    if pool_value == 0 or reward_value == 0:
        return 0.0

    rate = reward_value / pool_value
    periods = config.reward_periods_per_year

    if config.annualization == Annualization.COMPOUND:
        annual = (1 + rate) ** periods - 1
    else:
        annual = rate * periods

    try:
        return float(annual * PERCENT)
    except OverflowError:
        # Вырожденный пул (пыль при большой эмиссии)
        return math.inf


# =============================================================================
# BOOSTED REWARDS
# =============================================================================


def compute_boosted_rewards(
    base_apy: float,
    boost_multiplier: BoostMultiplier,
    config: RewardsConfig | None = None,
) -> Optional[float]:
    """
    Boosted доходность в процентах.

    Undefined boost пропагируется как None, а не как base_apy * 0.

    Args:
        base_apy: Базовая доходность (%)
        boost_multiplier: Множитель boost
        config: Определяет BoostApplication

    Returns:
        boosted_apy (%) или None
    """
    config = config or RewardsConfig()
    if boost_multiplier.ratio is None:
        return None

    multiplier = float(boost_multiplier.ratio)
    if config.boost_application == BoostApplication.EXCESS_ONLY:
        return base_apy * (multiplier - 1.0)
    return base_apy * multiplier


def compute_total_apy(
    base_apy: float,
    boosted_apy: Optional[float],
    config: RewardsConfig | None = None,
) -> float:
    """
    Итоговая доходность (%).

    Без вычислимого boost итог равен базовой доходности.
    """
    config = config or RewardsConfig()
    if boosted_apy is None:
        return base_apy
    if config.boost_application == BoostApplication.EXCESS_ONLY:
        return base_apy + boosted_apy
    return boosted_apy


def project_rewards(
    base_apy: float,
    boost_multiplier: BoostMultiplier,
    config: RewardsConfig | None = None,
) -> RewardsProjection:
    """Сборка RewardsProjection из базовой доходности и множителя."""
    boosted = compute_boosted_rewards(base_apy, boost_multiplier, config)
    return RewardsProjection(
        base_apy=base_apy,
        boosted_apy=boosted,
        boost_multiplier=boost_multiplier,
        total_apy=compute_total_apy(base_apy, boosted, config),
    )
