"""
VaultAccountRecord — Снапшот позиции аккаунта в одной версии vault

Одна запись на пару (vault_id, version) с историей on-chain.
Отсутствие записи означает "нет позиции в этой версии" — не ошибка.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .amounts import FixedPointAmount


# =============================================================================
# ENUMS
# =============================================================================


class VaultVersion(str, Enum):
    """
    Закрытое множество поддерживаемых версий контрактов vault.

    Добавление версии — изменение этого enum, а не строкового ключа.
    """

    V1 = "v1"
    V2 = "v2"
    EARN = "earn"


# =============================================================================
# MODELS
# =============================================================================


class _VaultTotals(BaseModel):
    """Общие поля: три количества в масштабе underlying-актива vault."""

    vault_id: str = Field(..., min_length=1, description="Идентификатор vault (например, 'rETH-THETA')")
    total_deposits: FixedPointAmount = Field(..., description="Суммарные депозиты")
    total_yield_earned: FixedPointAmount = Field(..., description="Суммарная доходность")
    total_balance: FixedPointAmount = Field(..., description="Текущий баланс")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_same_scale(self):
        """Все три количества в одном масштабе underlying-актива."""
        self.total_deposits.require_same_scale(self.total_yield_earned)
        self.total_deposits.require_same_scale(self.total_balance)
        return self

    @property
    def decimals(self) -> int:
        return self.total_deposits.decimals


class VaultAccountRecord(_VaultTotals):
    """Позиция аккаунта в конкретной версии vault."""

    version: VaultVersion = Field(..., description="Версия контракта")


class AggregatedVaultAccount(_VaultTotals):
    """Сумма позиций аккаунта по всем версиям vault, где есть данные."""

    versions: tuple[VaultVersion, ...] = Field(
        ..., min_length=1, description="Версии, внёсшие вклад в сумму"
    )
