"""
Domain models and value objects.

Contains fundamental domain entities like FixedPointAmount, GaugeState,
VaultAccountRecord, PriceQuote.
"""

from src.core.domain.amounts import (
    MAX_DECIMALS,
    UINT256_MAX,
    FixedPointAmount,
    ParseOverflow,
    ParseResult,
    ParseStatus,
    ScaleMismatch,
    format_units,
    parse_units,
)
from src.core.domain.gauge_state import GaugeState
from src.core.domain.prices import PriceQuote
from src.core.domain.tokens import (
    GOVERNANCE_TOKEN,
    GOVERNANCE_TOKEN_DECIMALS,
    Token,
    token_decimals,
    token_display,
)
from src.core.domain.vault_account import (
    AggregatedVaultAccount,
    VaultAccountRecord,
    VaultVersion,
)

__all__ = [
    # Amounts
    "MAX_DECIMALS",
    "UINT256_MAX",
    "FixedPointAmount",
    "ParseOverflow",
    "ParseResult",
    "ParseStatus",
    "ScaleMismatch",
    "format_units",
    "parse_units",
    # Tokens
    "GOVERNANCE_TOKEN",
    "GOVERNANCE_TOKEN_DECIMALS",
    "Token",
    "token_decimals",
    "token_display",
    # Snapshots
    "GaugeState",
    "PriceQuote",
    # Vault accounts
    "AggregatedVaultAccount",
    "VaultAccountRecord",
    "VaultVersion",
]
