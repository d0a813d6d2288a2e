"""
Contract Validation Module

Проверка payload внешних источников (gauge, subgraph, PriceSource)
против JSON Schema контрактов.
"""

from .validators import (
    CONTRACTS,
    GAUGE_STATE,
    PRICE_QUOTE,
    UINT256_FORMAT,
    VAULT_ACCOUNT,
    ContractValidator,
    SchemaLoader,
    get_contract_validator,
    is_uint256,
    validate_gauge_state,
    validate_price_quote,
    validate_vault_account,
)

__all__ = [
    # Contracts
    "CONTRACTS",
    "GAUGE_STATE",
    "VAULT_ACCOUNT",
    "PRICE_QUOTE",
    "UINT256_FORMAT",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "get_contract_validator",
    "is_uint256",
    "validate_gauge_state",
    "validate_vault_account",
    "validate_price_quote",
]
