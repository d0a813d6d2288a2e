"""
Vault positions across contract versions.
"""

from src.positions.aggregator import (
    SUPPORTED_VERSIONS,
    merge_across_versions,
    merge_vault_accounts,
)
from src.positions.collector import fetch_records_by_version
from src.positions.subgraph import (
    parse_vault_account,
    resolve_vault_accounts_response,
    vault_account_key,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "merge_across_versions",
    "merge_vault_accounts",
    "fetch_records_by_version",
    "parse_vault_account",
    "resolve_vault_accounts_response",
    "vault_account_key",
]
