"""
PositionAggregator — Слияние позиций аккаунта по версиям vault

Один логический vault может иметь позиции в нескольких версиях контракта
(v1, v2, earn). Агрегатор складывает их в один точный итог.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Перебирается закрытое множество VaultVersion, а не ключи входного dict
2. Отсутствующая запись = нет вклада (не ошибка)
3. Нет ни одной записи → None
4. Точное целочисленное сложение; разные масштабы → ScaleMismatch
5. Результат не зависит от порядка перебора версий
"""

from typing import Final, Iterable, Mapping, Optional, Sequence

from src.core.domain.vault_account import (
    AggregatedVaultAccount,
    VaultAccountRecord,
    VaultVersion,
)


# Канонический порядок поддерживаемых версий
SUPPORTED_VERSIONS: Final[tuple[VaultVersion, ...]] = tuple(VaultVersion)

RecordsByVersion = Mapping[VaultVersion, Optional[VaultAccountRecord]]


def _check_version_keys(records_by_version: RecordsByVersion) -> None:
    unknown = [key for key in records_by_version if key not in SUPPORTED_VERSIONS]
    if unknown:
        raise ValueError(f"Unsupported vault versions: {unknown}")


def _check_order(version_order: Sequence[VaultVersion]) -> None:
    if sorted(version_order) != sorted(SUPPORTED_VERSIONS):
        raise ValueError(
            f"version_order must be a permutation of {[v.value for v in SUPPORTED_VERSIONS]}, "
            f"got {list(version_order)}"
        )


def merge_across_versions(
    records_by_version: RecordsByVersion,
    version_order: Sequence[VaultVersion] = SUPPORTED_VERSIONS,
) -> Optional[AggregatedVaultAccount]:
    """
    Сумма позиций одного vault по всем версиям с данными.

    Args:
        records_by_version: VaultVersion → запись или None (отсутствующий ключ = None)
        version_order: Порядок перебора (перестановка SUPPORTED_VERSIONS)

    Returns:
        AggregatedVaultAccount или None, если ни в одной версии нет данных

    Raises:
        ScaleMismatch: Если масштабы записей различаются
        ValueError: Неизвестная версия, запись не своей версии или другого vault
    """
    _check_version_keys(records_by_version)
    _check_order(version_order)

    merged: Optional[AggregatedVaultAccount] = None
    for version in version_order:
        record = records_by_version.get(version)
        if record is None:
            continue
        if record.version != version:
            raise ValueError(
                f"Record for {record.vault_id} has version {record.version.value}, "
                f"stored under {version.value}"
            )

        if merged is None:
            merged = AggregatedVaultAccount(
                vault_id=record.vault_id,
                total_deposits=record.total_deposits,
                total_yield_earned=record.total_yield_earned,
                total_balance=record.total_balance,
                versions=(version,),
            )
            continue

        if record.vault_id != merged.vault_id:
            raise ValueError(
                f"Cannot merge vault {record.vault_id} into {merged.vault_id}"
            )
        merged = AggregatedVaultAccount(
            vault_id=merged.vault_id,
            total_deposits=merged.total_deposits + record.total_deposits,
            total_yield_earned=merged.total_yield_earned + record.total_yield_earned,
            total_balance=merged.total_balance + record.total_balance,
            versions=tuple(v for v in SUPPORTED_VERSIONS if v in merged.versions or v == version),
        )

    return merged


def merge_vault_accounts(
    accounts_by_version: Mapping[VaultVersion, Mapping[str, Optional[VaultAccountRecord]]],
    vault_ids: Iterable[str],
) -> dict[str, Optional[AggregatedVaultAccount]]:
    """
    Агрегация по версиям для каждого vault.

    Args:
        accounts_by_version: VaultVersion → (vault_id → запись или None)
        vault_ids: Идентификаторы vault

    Returns:
        vault_id → AggregatedVaultAccount или None
    """
    _check_version_keys(accounts_by_version)
    return {
        vault_id: merge_across_versions(
            {
                version: accounts_by_version.get(version, {}).get(vault_id)
                for version in SUPPORTED_VERSIONS
            }
        )
        for vault_id in vault_ids
    }
