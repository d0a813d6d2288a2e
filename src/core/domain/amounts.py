"""
FixedPointAmount — Точное представление количества токена

Количество токена хранится как целое число минимальных единиц (raw)
вместе с масштабом (decimals), например USDC = 6, WBTC = 8, ERC20 = 18.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вся денежная арифметика выполняется в целых числах (без float)
2. Сложение и сравнение (включая ==) разрешены только при совпадении масштабов
   (ScaleMismatch — ошибка программирования, не данных)
3. Граница uint256 проверяется на входе (parse_units, контракты payload),
   а не в самом типе: сложение точное и тотальное
4. Парсинг пользовательского ввода возвращает явный ParseResult
   (OK / OVERFLOW / INVALID) — никаких подстановок MAX_SAFE_INTEGER
5. format(parse(x)) == x для всех значений в допустимом диапазоне
"""

import re
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Final, Optional

from pydantic import BaseModel, Field


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальное значение on-chain количества (uint256)
UINT256_MAX: Final[int] = 2**256 - 1

# Максимальный масштаб: 10**77 < 2**256 < 10**78
MAX_DECIMALS: Final[int] = 77

# Десятичная строка: целая часть и/или дробная часть, без знака и экспоненты
_DECIMAL_RE: Final = re.compile(r"^(?P<int>[0-9]*)(?:\.(?P<frac>[0-9]*))?$")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ScaleMismatch(ValueError):
    """
    Арифметика между количествами с разным масштабом.

    Нарушение предусловия: указывает на ошибку конфигурации vault/version
    выше по стеку. Никогда не приводится молча.
    """

    def __init__(self, left: int, right: int, operation: str = "combine"):
        super().__init__(
            f"Cannot {operation} amounts with different scales: "
            f"decimals={left} vs decimals={right}"
        )
        self.left = left
        self.right = right


class ParseOverflow(ValueError):
    """Пользовательский ввод вне диапазона uint256 (см. ParseResult.unwrap)."""


# =============================================================================
# FIXED POINT AMOUNT
# =============================================================================


class FixedPointAmount(BaseModel):
    """
    Количество токена в минимальных единицах с фиксированным масштабом.

    Immutable модель (frozen=True). Арифметика создаёт новые экземпляры.

    Examples:
        >>> FixedPointAmount(raw=1_500_000, decimals=6).format()
        '1.5'
    """

    raw: int = Field(..., ge=0, strict=True, description="Минимальные единицы")
    decimals: int = Field(
        ..., ge=0, le=MAX_DECIMALS, strict=True, description="Масштаб (число дробных знаков)"
    )

    model_config = {"frozen": True}

    @classmethod
    def zero(cls, decimals: int) -> "FixedPointAmount":
        """Нулевое количество заданного масштаба."""
        return cls(raw=0, decimals=decimals)

    @classmethod
    def from_units(cls, whole: int, decimals: int) -> "FixedPointAmount":
        """
        Количество из целого числа токенов (1 токен = 10**decimals raw).

        Args:
            whole: Целое число токенов (>= 0)
            decimals: Масштаб токена
        """
        return cls(raw=whole * 10**decimals, decimals=decimals)

    # -------------------------------------------------------------------------
    # Масштаб
    # -------------------------------------------------------------------------

    @property
    def unit(self) -> int:
        """Число raw-единиц в одном токене."""
        return 10**self.decimals

    def require_same_scale(self, other: "FixedPointAmount", operation: str = "combine") -> None:
        """
        Проверка совпадения масштабов.

        Raises:
            ScaleMismatch: Если масштабы различаются
            TypeError: Если other не FixedPointAmount
        """
        if not isinstance(other, FixedPointAmount):
            raise TypeError(f"Expected FixedPointAmount, got {type(other).__name__}")
        if self.decimals != other.decimals:
            raise ScaleMismatch(self.decimals, other.decimals, operation)

    def rescale(self, decimals: int) -> "FixedPointAmount":
        """
        Перевод в другой масштаб.

        Увеличение масштаба точное; уменьшение усекает к нулю.
        """
        if decimals == self.decimals:
            return self
        if decimals > self.decimals:
            return FixedPointAmount(
                raw=self.raw * 10 ** (decimals - self.decimals), decimals=decimals
            )
        return FixedPointAmount(
            raw=self.raw // 10 ** (self.decimals - decimals), decimals=decimals
        )

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: "FixedPointAmount") -> "FixedPointAmount":
        self.require_same_scale(other, "add")
        return FixedPointAmount(raw=self.raw + other.raw, decimals=self.decimals)

    def mul_div(self, numerator: int, denominator: int) -> "FixedPointAmount":
        """
        self * numerator / denominator в целых числах с усечением к нулю.

        Args:
            numerator: Множитель (>= 0)
            denominator: Делитель (> 0)

        Raises:
            ValueError: Если numerator < 0 или denominator <= 0
        """
        if numerator < 0:
            raise ValueError(f"numerator must be non-negative, got {numerator}")
        if denominator <= 0:
            raise ValueError(f"denominator must be positive, got {denominator}")
        return FixedPointAmount(raw=self.raw * numerator // denominator, decimals=self.decimals)

    def is_zero(self) -> bool:
        return self.raw == 0

    def to_fraction(self) -> Fraction:
        """Точное значение в токенах (для перехода в display-домен)."""
        return Fraction(self.raw, self.unit)

    # -------------------------------------------------------------------------
    # Сравнение (только одинаковый масштаб)
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPointAmount):
            return NotImplemented
        self.require_same_scale(other, "compare")
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash((self.raw, self.decimals))

    def __lt__(self, other: "FixedPointAmount") -> bool:
        self.require_same_scale(other, "compare")
        return self.raw < other.raw

    def __le__(self, other: "FixedPointAmount") -> bool:
        self.require_same_scale(other, "compare")
        return self.raw <= other.raw

    def __gt__(self, other: "FixedPointAmount") -> bool:
        self.require_same_scale(other, "compare")
        return self.raw > other.raw

    def __ge__(self, other: "FixedPointAmount") -> bool:
        self.require_same_scale(other, "compare")
        return self.raw >= other.raw

    # -------------------------------------------------------------------------
    # Отображение
    # -------------------------------------------------------------------------

    def format(self) -> str:
        """
        Десятичное представление (аналог formatUnits).

        Хвостовые нули дробной части отбрасываются, но остаётся хотя бы
        одна цифра: 1.0, 0.5, 0.000001.
        """
        whole, frac = divmod(self.raw, self.unit)
        if self.decimals == 0:
            return f"{whole}.0"
        frac_text = str(frac).rjust(self.decimals, "0").rstrip("0") or "0"
        return f"{whole}.{frac_text}"

    def __str__(self) -> str:
        return self.format()


# =============================================================================
# ПАРСИНГ ПОЛЬЗОВАТЕЛЬСКОГО ВВОДА
# =============================================================================


class ParseStatus(str, Enum):
    """Результат парсинга десятичной строки."""

    OK = "OK"
    OVERFLOW = "OVERFLOW"  # значение больше UINT256_MAX
    INVALID = "INVALID"  # не число или лишние значащие дробные знаки


@dataclass(frozen=True)
class ParseResult:
    """
    Явный результат парсинга (success / overflow / invalid).

    Политика реакции на OVERFLOW (отклонить ввод, clamp с предупреждением)
    остаётся за вызывающим кодом.
    """

    status: ParseStatus
    text: str
    decimals: int
    amount: Optional[FixedPointAmount] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == ParseStatus.OK

    def unwrap(self) -> FixedPointAmount:
        """
        Значение при успехе.

        Raises:
            ParseOverflow: Если status == OVERFLOW
            ValueError: Если status == INVALID
        """
        if self.status == ParseStatus.OVERFLOW:
            raise ParseOverflow(f"{self.text!r} exceeds uint256 at decimals={self.decimals}")
        if self.status == ParseStatus.INVALID:
            raise ValueError(f"Invalid amount {self.text!r}: {self.reason}")
        if self.amount is None:
            raise ValueError(f"ParseResult for {self.text!r} has no amount")
        return self.amount


def parse_units(text: str, decimals: int) -> ParseResult:
    """
    Конверсия десятичной строки в FixedPointAmount (аналог parseUnits).

    Пустая строка трактуется как 0 (пустое поле ввода).

    Args:
        text: Десятичная строка ("1.5", ".5", "100", "1.")
        decimals: Масштаб токена

    Returns:
        ParseResult со статусом OK / OVERFLOW / INVALID

    Examples:
        >>> parse_units("1.5", 6).amount.raw
        1500000
        >>> parse_units("1.0000001", 6).status
        <ParseStatus.INVALID: 'INVALID'>
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}], got {decimals}")

    stripped = text.strip()
    if stripped == "":
        return ParseResult(ParseStatus.OK, text, decimals, FixedPointAmount.zero(decimals))

    match = _DECIMAL_RE.match(stripped)
    if match is None or stripped == ".":
        return ParseResult(ParseStatus.INVALID, text, decimals, reason="not a decimal number")

    int_part = match.group("int") or "0"
    frac_part = match.group("frac") or ""

    # Лишние дробные знаки допустимы только если это нули
    if len(frac_part) > decimals:
        if frac_part[decimals:].strip("0"):
            return ParseResult(
                ParseStatus.INVALID,
                text,
                decimals,
                reason=f"more than {decimals} fractional digits",
            )
        frac_part = frac_part[:decimals]

    raw = int(int_part) * 10**decimals + int(frac_part.ljust(decimals, "0") or "0")
    if raw > UINT256_MAX:
        return ParseResult(ParseStatus.OVERFLOW, text, decimals, reason="exceeds uint256")

    return ParseResult(
        ParseStatus.OK, text, decimals, FixedPointAmount(raw=raw, decimals=decimals)
    )


def format_units(amount: FixedPointAmount) -> str:
    """Десятичное представление количества (см. FixedPointAmount.format)."""
    return amount.format()
