"""
Tokens — Масштабы ERC20 токенов платформы

Единственный источник decimals для токенов: USDC/yvUSDC = 6, WBTC = 8,
остальные ERC20 = 18.
"""

from enum import Enum
from typing import Final


class Token(str, Enum):
    """ERC20 токены, используемые vault'ами и governance."""

    WETH = "weth"
    USDC = "usdc"
    WBTC = "wbtc"
    YVUSDC = "yvusdc"
    STETH = "steth"
    WSTETH = "wsteth"
    LDO = "ldo"
    AAVE = "aave"
    RBN = "rbn"
    VERBN = "verbn"
    WAVAX = "wavax"
    PERP = "perp"


# Governance token (RBN) и его escrow-версия (veRBN)
GOVERNANCE_TOKEN: Final[Token] = Token.RBN
GOVERNANCE_TOKEN_DECIMALS: Final[int] = 18

DEFAULT_TOKEN_DECIMALS: Final[int] = 18

_TOKEN_DECIMALS: Final[dict[Token, int]] = {
    Token.USDC: 6,
    Token.YVUSDC: 6,
    Token.WBTC: 8,
}

_TOKEN_DISPLAY: Final[dict[Token, str]] = {
    Token.YVUSDC: "yvUSDC",
    Token.STETH: "stETH",
    Token.VERBN: "veRBN",
}


def token_decimals(token: Token | str) -> int:
    """
    Масштаб токена.

    Args:
        token: Token или его строковый идентификатор ("usdc")

    Raises:
        ValueError: Если токен неизвестен
    """
    return _TOKEN_DECIMALS.get(Token(token), DEFAULT_TOKEN_DECIMALS)


def token_display(token: Token | str) -> str:
    """Отображаемое имя токена ("yvUSDC", "WETH")."""
    token = Token(token)
    return _TOKEN_DISPLAY.get(token, token.value.upper())
