"""
GaugeState — Снапшот состояния staking gauge

Read-only снапшот, получаемый внешним GaugeDataSource на каждом цикле запроса.
Ядро никогда не изменяет его.

Масштабы:
- pool_size, unstaked_balance — масштаб staking-токена
- working_balance, working_supply — масштаб boost-accounting
- pool_reward_for_duration — масштаб reward-токена
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field, model_validator

from src.core.contracts import validate_gauge_state

from .amounts import FixedPointAmount


class GaugeState(BaseModel):
    """
    Снапшот gauge.

    Immutable модель (frozen=True).
    """

    working_balance: FixedPointAmount = Field(
        ..., description="Working balance пользователя (boost-accounting)"
    )
    working_supply: FixedPointAmount = Field(
        ..., description="Суммарный working supply gauge (boost-accounting)"
    )
    pool_size: FixedPointAmount = Field(..., description="Всего застейкано в gauge")
    pool_reward_for_duration: FixedPointAmount = Field(
        ..., description="Эмиссия reward-токена за наблюдаемый период (неделя)"
    )
    unstaked_balance: FixedPointAmount = Field(
        ..., description="Незастейканные vault shares пользователя"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_scales(self) -> "GaugeState":
        """Согласованность масштабов и working_balance <= working_supply."""
        self.working_balance.require_same_scale(self.working_supply)
        self.pool_size.require_same_scale(self.unstaked_balance)
        if self.working_balance > self.working_supply:
            raise ValueError(
                f"working_balance {self.working_balance} exceeds "
                f"working_supply {self.working_supply}"
            )
        return self

    @property
    def staking_decimals(self) -> int:
        return self.pool_size.decimals

    @property
    def working_decimals(self) -> int:
        return self.working_supply.decimals

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        staking_decimals: int,
        working_decimals: int,
        reward_decimals: int,
    ) -> "GaugeState":
        """
        Построение снапшота из сырого ответа gauge (uint256 как строки/int).

        Args:
            payload: {"workingBalances", "workingSupply", "poolSize",
                      "poolRewardForDuration", "unstakedBalance"}
            staking_decimals: Масштаб staking-токена (vault shares)
            working_decimals: Масштаб boost-accounting
            reward_decimals: Масштаб reward-токена

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
        """
        validate_gauge_state(dict(payload))

        def amount(key: str, decimals: int) -> FixedPointAmount:
            return FixedPointAmount(raw=int(payload[key]), decimals=decimals)

        return cls(
            working_balance=amount("workingBalances", working_decimals),
            working_supply=amount("workingSupply", working_decimals),
            pool_size=amount("poolSize", staking_decimals),
            pool_reward_for_duration=amount("poolRewardForDuration", reward_decimals),
            unstaked_balance=amount("unstakedBalance", staking_decimals),
        )
