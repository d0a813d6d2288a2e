"""
BoostCalculator — Множитель boost для staking gauge

Формула boost gauge (CurveDAO LiquidityGauge._update_liquidity_limit),
применённая к гипотетическому стейку пользователя:

    l = gauge_balance                      (стейк пользователя)
    L = pool_liquidity + l                 (пул после стейка)
    share = ve_token_amount / total_ve_token

    lim         = l * 40/100 + L * share * 60/100
    lim         = min(lim, l)
    noboost_lim = l * 40/100

    others          = working_supply - working_balance
    boosted_share   = lim / (others + lim)
    baseline_share  = noboost_lim / (others + noboost_lim)

    boost = clamp(boosted_share / baseline_share, MIN_BOOST, MAX_BOOST)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. boost ∈ [1.0, 2.5] при gauge_balance > 0 и pool_liquidity > 0
2. Пустой пул или нулевой стейк → BoostMultiplier.undefined() (не 0, не 1.0)
3. Монотонность: не убывает по ve_token_amount, не возрастает по total_ve_token
4. Вычисления в точных рациональных числах; float только для отображения
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Final, Optional

from src.core.domain.amounts import FixedPointAmount


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Доля стейка, засчитываемая без voting power (%)
TOKENLESS_PRODUCTION: Final[int] = 40

MIN_BOOST: Final[Fraction] = Fraction(1)
MAX_BOOST: Final[Fraction] = Fraction(100, TOKENLESS_PRODUCTION)  # 2.5


# =============================================================================
# BOOST MULTIPLIER
# =============================================================================


@dataclass(frozen=True)
class BoostMultiplier:
    """
    Множитель boost или явный sentinel "не вычислим".

    ratio is None означает, что boost неприменим (пустой пул / нет стейка);
    отображается отдельно от реального 1.0.
    """

    ratio: Optional[Fraction]

    @classmethod
    def undefined(cls) -> "BoostMultiplier":
        return cls(ratio=None)

    @property
    def is_defined(self) -> bool:
        return self.ratio is not None

    def as_float(self) -> Optional[float]:
        """Значение для отображения (None для undefined)."""
        return None if self.ratio is None else float(self.ratio)

    def display(self, places: int = 2) -> str:
        if self.ratio is None:
            return "---"
        return f"{float(self.ratio):.{places}f}"


# =============================================================================
# COMPUTATION
# =============================================================================


def voting_share(ve_token_amount: FixedPointAmount, total_ve_token: FixedPointAmount) -> Fraction:
    """
    Доля пользователя в общей voting power, ограниченная [0, 1].

    Если общий veToken supply пуст, любая положительная блокировка
    получает всю voting power.

    Raises:
        ScaleMismatch: Если масштабы различаются
    """
    ve_token_amount.require_same_scale(total_ve_token)
    if ve_token_amount.is_zero():
        return Fraction(0)
    if total_ve_token.is_zero():
        return Fraction(1)
    return min(Fraction(ve_token_amount.raw, total_ve_token.raw), Fraction(1))


def compute_boost_multiplier(
    gauge_balance: FixedPointAmount,
    pool_liquidity: FixedPointAmount,
    ve_token_amount: FixedPointAmount,
    total_ve_token: FixedPointAmount,
    working_balance: FixedPointAmount,
    working_supply: FixedPointAmount,
) -> BoostMultiplier:
    """
    Множитель boost для гипотетического стейка.

    Args:
        gauge_balance: Стейк пользователя (масштаб staking-токена)
        pool_liquidity: Текущая ликвидность пула без стейка пользователя
        ve_token_amount: Voting power пользователя (escrow balance)
        total_ve_token: Общий veToken supply
        working_balance: Текущий working balance пользователя (boost-accounting)
        working_supply: Текущий working supply gauge (boost-accounting)

    Returns:
        BoostMultiplier в [MIN_BOOST, MAX_BOOST] или undefined

    Raises:
        ScaleMismatch: Если масштабы парных величин различаются
        ValueError: Если working_balance > working_supply
    """
    gauge_balance.require_same_scale(pool_liquidity)
    working_balance.require_same_scale(working_supply)
    if working_balance > working_supply:
        raise ValueError(
            f"working_balance {working_balance} exceeds working_supply {working_supply}"
        )

    if pool_liquidity.is_zero() or gauge_balance.is_zero():
        return BoostMultiplier.undefined()

    share = voting_share(ve_token_amount, total_ve_token)

    # Общий масштаб: повышение масштаба точное
    scale = max(gauge_balance.decimals, working_supply.decimals)
    stake = gauge_balance.rescale(scale).raw
    liquidity = pool_liquidity.rescale(scale).raw + stake
    others = working_supply.rescale(scale).raw - working_balance.rescale(scale).raw

    baseline = Fraction(stake * TOKENLESS_PRODUCTION, 100)
    boosted = baseline + liquidity * share * Fraction(100 - TOKENLESS_PRODUCTION, 100)
    boosted = min(boosted, Fraction(stake))

    boosted_share = boosted / (others + boosted)
    baseline_share = baseline / (others + baseline)

    ratio = boosted_share / baseline_share
    return BoostMultiplier(ratio=min(MAX_BOOST, max(MIN_BOOST, ratio)))
