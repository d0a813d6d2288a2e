"""
Тесты для разбора ответов subgraph и сбора записей по версиям

Покрывает:
- Ключи сущностей vaultAccount
- Отсутствующие ответы / ключи → None
- Async-сбор записей по всем версиям
"""

import asyncio
from typing import Optional

import pytest
from jsonschema import ValidationError

from src.core.domain import FixedPointAmount, VaultAccountRecord, VaultVersion
from src.positions import (
    SUPPORTED_VERSIONS,
    fetch_records_by_version,
    merge_across_versions,
    merge_vault_accounts,
    parse_vault_account,
    resolve_vault_accounts_response,
    vault_account_key,
)


def entity(deposits: str, yield_earned: str = "0", balance: str = "0") -> dict:
    return {
        "totalDeposits": deposits,
        "totalYieldEarned": yield_earned,
        "totalBalance": balance,
    }


class TestVaultAccountKey:
    """Ключ сущности в ответе."""

    @pytest.mark.parametrize(
        "vault_id,key",
        [
            ("rETH-THETA", "vaultAccount_rETHTHETA"),
            ("rUSDC-ETH-P-THETA", "vaultAccount_rUSDCETHPTHETA"),
            ("rEARN", "vaultAccount_rEARN"),
        ],
    )
    def test_dashes_removed(self, vault_id: str, key: str) -> None:
        assert vault_account_key(vault_id) == key


class TestParseVaultAccount:
    """Сырая сущность → VaultAccountRecord."""

    def test_parse(self) -> None:
        record = parse_vault_account(
            entity("100000000", "2500000", "102500000"), "rUSDC-ETH-P-THETA", VaultVersion.V2, 6
        )
        assert record.version == VaultVersion.V2
        assert record.total_deposits == FixedPointAmount.from_units(100, 6)
        assert record.total_balance.format() == "102.5"

    def test_exact_bigint(self) -> None:
        raw = "1234567890123456789012345678901234567890"
        record = parse_vault_account(entity(raw), "rETH-THETA", VaultVersion.V1, 18)
        assert record.total_deposits.raw == int(raw)

    def test_contract_violation(self) -> None:
        with pytest.raises(ValidationError):
            parse_vault_account({"totalDeposits": "1"}, "rETH-THETA", VaultVersion.V1, 18)


class TestResolveVaultAccountsResponse:
    """Разбор ответов всех версий."""

    decimals = {"rETH-THETA": 18, "rBTC-THETA": 8}

    def test_resolve_and_merge(self) -> None:
        responses = {
            VaultVersion.V1: {vault_account_key("rETH-THETA"): entity("100")},
            VaultVersion.V2: {
                vault_account_key("rETH-THETA"): entity("50"),
                vault_account_key("rBTC-THETA"): entity("7"),
            },
            VaultVersion.EARN: None,
        }
        resolved = resolve_vault_accounts_response(responses, self.decimals)

        assert set(resolved) == set(SUPPORTED_VERSIONS)
        assert resolved[VaultVersion.V1]["rBTC-THETA"] is None
        assert all(record is None for record in resolved[VaultVersion.EARN].values())

        merged = merge_vault_accounts(resolved, self.decimals)
        assert merged["rETH-THETA"].total_deposits.raw == 150
        assert merged["rETH-THETA"].versions == (VaultVersion.V1, VaultVersion.V2)
        assert merged["rBTC-THETA"].total_deposits.decimals == 8

    def test_missing_version_response(self) -> None:
        resolved = resolve_vault_accounts_response({}, self.decimals)
        merged = merge_vault_accounts(resolved, self.decimals)
        assert merged == {"rETH-THETA": None, "rBTC-THETA": None}

    def test_null_entity_is_absent(self) -> None:
        responses = {VaultVersion.V1: {vault_account_key("rETH-THETA"): None}}
        resolved = resolve_vault_accounts_response(responses, {"rETH-THETA": 18})
        assert resolved[VaultVersion.V1]["rETH-THETA"] is None


# =============================================================================
# COLLECTOR
# =============================================================================


class FakeVaultAccountSource:
    """In-memory VaultAccountSource."""

    def __init__(self, records: dict[VaultVersion, VaultAccountRecord]):
        self.records = records
        self.calls: list[tuple[str, VaultVersion]] = []

    async def fetch_account_record(
        self, vault_id: str, version: VaultVersion
    ) -> Optional[VaultAccountRecord]:
        self.calls.append((vault_id, version))
        await asyncio.sleep(0)
        record = self.records.get(version)
        return record if record is not None and record.vault_id == vault_id else None


class FailingVaultAccountSource:
    async def fetch_account_record(self, vault_id: str, version: VaultVersion):
        raise ConnectionError("subgraph unavailable")


def record(version: VaultVersion, deposits: int) -> VaultAccountRecord:
    return VaultAccountRecord(
        vault_id="rETH-THETA",
        version=version,
        total_deposits=FixedPointAmount(raw=deposits, decimals=18),
        total_yield_earned=FixedPointAmount(raw=0, decimals=18),
        total_balance=FixedPointAmount(raw=deposits, decimals=18),
    )


class TestFetchRecordsByVersion:
    """Сбор записей на async-границе."""

    def test_queries_every_version(self) -> None:
        source = FakeVaultAccountSource(
            {VaultVersion.V1: record(VaultVersion.V1, 100), VaultVersion.V2: record(VaultVersion.V2, 50)}
        )
        records = asyncio.run(fetch_records_by_version(source, "rETH-THETA"))

        assert sorted(source.calls) == sorted(("rETH-THETA", v) for v in SUPPORTED_VERSIONS)
        assert records[VaultVersion.EARN] is None
        assert merge_across_versions(records).total_deposits.raw == 150

    def test_unknown_vault(self) -> None:
        source = FakeVaultAccountSource({VaultVersion.V1: record(VaultVersion.V1, 100)})
        records = asyncio.run(fetch_records_by_version(source, "rBTC-THETA"))
        assert merge_across_versions(records) is None

    def test_source_errors_propagate(self) -> None:
        with pytest.raises(ConnectionError):
            asyncio.run(fetch_records_by_version(FailingVaultAccountSource(), "rETH-THETA"))
