"""
RewardsCalculator — Калькулятор boosted доходности staking gauge

Связывает pipeline:
    ввод пользователя → LockPosition → escrow balance → boost → доходность

Порядок:
1. Котировки должны быть разрешены (иначе UnresolvedPriceError)
2. Парсинг строкового ввода в FixedPointAmount (ошибки ввода возвращаются
   в CalculatorOutcome по полям, без подстановки placeholder-значений)
3. Escrow balance по сроку блокировки
4. Boost multiplier для стейка относительно пула
5. Базовая доходность для пула после стейка (pool + stake)
6. Boosted и итоговая доходность
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from src.core.domain.amounts import FixedPointAmount, ParseResult, parse_units
from src.core.domain.gauge_state import GaugeState
from src.core.domain.prices import PriceQuote
from src.core.logging import get_logger

from .boost import compute_boost_multiplier
from .rewards import RewardsConfig, RewardsProjection, compute_base_rewards, project_rewards
from .voting_power import LockPeriod, LockPosition

logger = get_logger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnresolvedPriceError(ValueError):
    """Калькулятор вызван с котировкой, которая ещё загружается."""


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class CalculatorOutcome:
    """Результат калькулятора."""

    projection: Optional[RewardsProjection]

    # Ошибки парсинга по полям ввода ("stake", "pool_size", "locked")
    input_errors: Mapping[str, ParseResult] = field(default_factory=dict)

    # Диагностика
    escrow_balance: Optional[FixedPointAmount] = None

    @property
    def ok(self) -> bool:
        return self.projection is not None


# =============================================================================
# CALCULATOR
# =============================================================================


class RewardsCalculator:
    """Калькулятор проекции доходности для гипотетического стейка и блокировки."""

    def __init__(self, config: RewardsConfig | None = None):
        """
        Args:
            config: конфигурация проекции (опционально, используется default)
        """
        self.config = config or RewardsConfig()

    @staticmethod
    def max_stake(gauge_state: GaugeState) -> FixedPointAmount:
        """Максимальный стейк: незастейканные shares пользователя."""
        return gauge_state.unstaked_balance

    def evaluate(
        self,
        gauge_state: GaugeState,
        stake_input: str,
        locked_input: str,
        lock_period: LockPeriod,
        total_ve_token: FixedPointAmount,
        price_per_share: FixedPointAmount,
        asset_price: PriceQuote,
        reward_token_price: PriceQuote,
        pool_size_input: str | None = None,
    ) -> CalculatorOutcome:
        """Проекция доходности для пользовательского ввода.

        Args:
            gauge_state: снапшот gauge
            stake_input: стейк пользователя (десятичная строка, shares)
            locked_input: блокируемый governance-токен (десятичная строка)
            lock_period: срок блокировки
            total_ve_token: общий veToken supply
            price_per_share: underlying-актив за одну share
            asset_price: котировка underlying-актива
            reward_token_price: котировка reward-токена
            pool_size_input: переопределение размера пула (пусто → gauge_state.pool_size)

        Returns:
            CalculatorOutcome с проекцией или ошибками ввода

        Raises:
            UnresolvedPriceError: если котировка не разрешена
        """
        for quote in (asset_price, reward_token_price):
            if not quote.resolved:
                raise UnresolvedPriceError(f"Price for {quote.symbol} is still loading")

        staking_decimals = gauge_state.staking_decimals
        parsed = {
            "stake": parse_units(stake_input, staking_decimals),
            "locked": parse_units(locked_input, total_ve_token.decimals),
        }
        if pool_size_input is not None and pool_size_input.strip():
            parsed["pool_size"] = parse_units(pool_size_input, staking_decimals)

        errors = {name: result for name, result in parsed.items() if not result.ok}
        if errors:
            logger.warning(
                "Rejected calculator input: %s",
                ", ".join(f"{name}={r.text!r} ({r.status.value})" for name, r in errors.items()),
            )
            return CalculatorOutcome(projection=None, input_errors=errors)

        stake = parsed["stake"].unwrap()
        pool_size = (
            parsed["pool_size"].unwrap() if "pool_size" in parsed else gauge_state.pool_size
        )
        lock = LockPosition.for_period(parsed["locked"].unwrap(), lock_period)
        escrow = lock.escrow_balance(self.config.max_lock_days)

        boost = compute_boost_multiplier(
            gauge_balance=stake,
            pool_liquidity=pool_size,
            ve_token_amount=escrow,
            total_ve_token=total_ve_token,
            working_balance=gauge_state.working_balance,
            working_supply=gauge_state.working_supply,
        )
        base_apy = compute_base_rewards(
            pool_size=pool_size + stake,
            pool_reward_for_duration=gauge_state.pool_reward_for_duration,
            price_per_share=price_per_share,
            asset_price=asset_price.price,
            reward_token_price=reward_token_price.price,
            config=self.config,
        )
        projection = project_rewards(base_apy, boost, self.config)

        logger.debug(
            "Projection: base=%.4f%% boosted=%s boost=%s escrow=%s",
            projection.base_apy,
            projection.boosted_apy,
            boost.display(4),
            escrow,
        )
        return CalculatorOutcome(projection=projection, escrow_balance=escrow)
