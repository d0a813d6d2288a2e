"""
PriceQuote — Котировка токена от внешнего PriceSource

Ядро потребляет только разрешённые котировки (resolved=True);
"loading" состояние обрабатывается слоем синхронизации.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.contracts import validate_price_quote


class PriceQuote(BaseModel):
    """
    Котировка токена в quote-валюте (USD).

    Immutable модель (frozen=True).
    """

    symbol: str = Field(..., min_length=1, description="Символ токена (например, 'RBN')")
    price: Decimal = Field(..., ge=0, allow_inf_nan=False, description="Цена в quote-валюте")
    resolved: bool = Field(..., description="False пока источник цены загружается")

    model_config = {"frozen": True}

    @classmethod
    def loading(cls, symbol: str) -> "PriceQuote":
        """Неразрешённая котировка (цена ещё загружается)."""
        return cls(symbol=symbol, price=Decimal(0), resolved=False)

    @classmethod
    def from_payload(cls, payload: dict) -> "PriceQuote":
        """
        Котировка из сырого ответа PriceSource.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
        """
        validate_price_quote(payload)
        # str() сохраняет десятичное представление float без двоичного шума
        return cls(
            symbol=payload["symbol"],
            price=Decimal(str(payload["price"])),
            resolved=payload["resolved"],
        )
