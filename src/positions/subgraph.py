"""
Subgraph responses → VaultAccountRecord

Ответ subgraph для одной версии содержит сущности vaultAccount под ключами
вида "vaultAccount_<vault_id без дефисов>", BigInt значения — строки.
Отсутствие ответа версии или ключа vault означает отсутствие позиции.
"""

from typing import Any, Mapping, Optional

from src.core.contracts import validate_vault_account
from src.core.domain.amounts import FixedPointAmount
from src.core.domain.vault_account import VaultAccountRecord, VaultVersion
from src.core.logging import get_logger

from .aggregator import SUPPORTED_VERSIONS

logger = get_logger(__name__)


def vault_account_key(vault_id: str) -> str:
    """Ключ сущности в ответе subgraph ("rETH-THETA" → "vaultAccount_rETHTHETA")."""
    return f"vaultAccount_{vault_id.replace('-', '')}"


def parse_vault_account(
    payload: Mapping[str, Any],
    vault_id: str,
    version: VaultVersion,
    decimals: int,
) -> VaultAccountRecord:
    """
    Запись из сырой сущности vaultAccount.

    Raises:
        jsonschema.ValidationError: Если payload не соответствует контракту
    """
    validate_vault_account(dict(payload))

    def amount(key: str) -> FixedPointAmount:
        return FixedPointAmount(raw=int(payload[key]), decimals=decimals)

    return VaultAccountRecord(
        vault_id=vault_id,
        version=version,
        total_deposits=amount("totalDeposits"),
        total_yield_earned=amount("totalYieldEarned"),
        total_balance=amount("totalBalance"),
    )


def resolve_vault_accounts_response(
    responses: Mapping[VaultVersion, Optional[Mapping[str, Any]]],
    decimals_by_vault: Mapping[str, int],
) -> dict[VaultVersion, dict[str, Optional[VaultAccountRecord]]]:
    """
    Разбор ответов subgraph для всех поддерживаемых версий.

    Args:
        responses: VaultVersion → ответ subgraph (None если запрос не выполнялся)
        decimals_by_vault: vault_id → масштаб underlying-актива

    Returns:
        VaultVersion → (vault_id → запись или None) для каждой версии
    """
    resolved: dict[VaultVersion, dict[str, Optional[VaultAccountRecord]]] = {}
    for version in SUPPORTED_VERSIONS:
        response = responses.get(version)
        accounts: dict[str, Optional[VaultAccountRecord]] = {}
        for vault_id, decimals in decimals_by_vault.items():
            payload = response.get(vault_account_key(vault_id)) if response else None
            accounts[vault_id] = (
                parse_vault_account(payload, vault_id, version, decimals) if payload else None
            )
        present = sum(1 for record in accounts.values() if record is not None)
        logger.debug("Resolved %d vault accounts for %s", present, version.value)
        resolved[version] = accounts
    return resolved
