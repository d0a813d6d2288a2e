"""
Collector — сбор записей аккаунта по версиям на async-границе

Один запрос к VaultAccountSource на каждую поддерживаемую версию;
результат — готовый вход для merge_across_versions.
"""

import asyncio
from typing import Optional

from src.core.domain.vault_account import VaultAccountRecord, VaultVersion
from src.core.logging import get_logger
from src.core.sources import VaultAccountSource

from .aggregator import SUPPORTED_VERSIONS

logger = get_logger(__name__)


async def fetch_records_by_version(
    source: VaultAccountSource,
    vault_id: str,
) -> dict[VaultVersion, Optional[VaultAccountRecord]]:
    """
    Записи vault для всех поддерживаемых версий.

    Ошибки источника не перехватываются: повторы — ответственность
    слоя синхронизации.
    """
    records = await asyncio.gather(
        *(source.fetch_account_record(vault_id, version) for version in SUPPORTED_VERSIONS)
    )
    result = dict(zip(SUPPORTED_VERSIONS, records))
    missing = [version.value for version, record in result.items() if record is None]
    if missing:
        logger.debug("No %s records for versions %s", vault_id, missing)
    return result
