"""
External Sources — контракты внешних коллабораторов

Ядро никогда не обращается к ним само: слой синхронизации вызывает
источники, дожидается разрешённых значений и передаёт их в чистые функции.
"""

from typing import Optional, Protocol

from src.core.domain.amounts import FixedPointAmount
from src.core.domain.gauge_state import GaugeState
from src.core.domain.prices import PriceQuote
from src.core.domain.vault_account import VaultAccountRecord, VaultVersion


class PriceSource(Protocol):
    def get_price(self, token_symbol: str) -> PriceQuote: ...


class GaugeDataSource(Protocol):
    async def fetch_gauge_state(self, gauge_id: str) -> GaugeState: ...


class VotingEscrowSource(Protocol):
    async def fetch_total_locked_supply(self) -> FixedPointAmount: ...


class VaultAccountSource(Protocol):
    async def fetch_account_record(
        self, vault_id: str, version: VaultVersion
    ) -> Optional[VaultAccountRecord]: ...
