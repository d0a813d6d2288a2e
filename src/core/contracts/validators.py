"""
Payload Contracts — проверка сырых данных внешних источников

Gauge, subgraph и PriceSource отдают JSON: uint256/BigInt как десятичные
строки или целые числа. Перед построением domain-моделей каждый payload
проверяется JSON Schema контрактом из contracts/schema/.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Граница uint256 — часть контракта (format "uint256"), а не только
   шаблон длины строки: значение > 2**256 - 1 отклоняется здесь,
   а не падает позже в pydantic
2. Один скомпилированный валидатор на контракт (кэш на уровне модуля)
3. Нарушение контракта — jsonschema.ValidationError с путём поля

Контракты:
- gauge_state (снапшот liquidity gauge)
- vault_account (сущность vaultAccount из subgraph)
- price_quote (котировка PriceSource)
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator, List, Mapping, Optional

import jsonschema
from jsonschema import Draft202012Validator, FormatChecker
from jsonschema.exceptions import best_match

from src.core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

GAUGE_STATE: Final[str] = "gauge_state"
VAULT_ACCOUNT: Final[str] = "vault_account"
PRICE_QUOTE: Final[str] = "price_quote"

CONTRACTS: Final[tuple[str, ...]] = (GAUGE_STATE, VAULT_ACCOUNT, PRICE_QUOTE)

UINT256_FORMAT: Final[str] = "uint256"

# Дублирует amounts.UINT256_MAX: domain-пакет импортирует контракты
_UINT256_MAX: Final[int] = 2**256 - 1

_DEFAULT_SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# FORMAT CHECKER
# =============================================================================

_FORMAT_CHECKER = FormatChecker(formats=())


@_FORMAT_CHECKER.checks(UINT256_FORMAT)
def is_uint256(instance: object) -> bool:
    """
    Значение помещается в uint256.

    Форма (цифры, тип) проверяется остальной схемой; здесь только диапазон.
    """
    if isinstance(instance, bool):
        return True
    if isinstance(instance, int):
        return 0 <= instance <= _UINT256_MAX
    if isinstance(instance, str) and instance.isascii() and instance.isdigit():
        return int(instance) <= _UINT256_MAX
    return True


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema контрактов.

    По умолчанию читает contracts/schema/ в корне проекта.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы контракта.

        Args:
            schema_name: Имя контракта без расширения (например, 'gauge_state')

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема невалидна или её title не совпадает с именем
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e
        if schema.get("title") != schema_name:
            raise ValueError(
                f"Schema {schema_path.name} declares title {schema.get('title')!r}"
            )

        self._schemas[schema_name] = schema
        return schema


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class ContractValidator:
    """Скомпилированный валидатор одного контракта (с проверкой uint256)."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or SchemaLoader()).load_schema(schema_name)
        self._validator = Draft202012Validator(self.schema, format_checker=_FORMAT_CHECKER)

    def validate(self, payload: Mapping[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое (наиболее релевантное) нарушение
        """
        error = best_match(self._validator.iter_errors(payload))
        if error is not None:
            logger.warning(
                "Rejected %s payload at %s: %s", self.schema_name, error.json_path, error.message
            )
            raise error

    def is_valid(self, payload: Mapping[str, Any]) -> bool:
        return self._validator.is_valid(payload)

    def iter_errors(self, payload: Mapping[str, Any]) -> Iterator[jsonschema.ValidationError]:
        """Все нарушения в порядке пути поля."""
        return iter(sorted(self._validator.iter_errors(payload), key=lambda e: e.json_path))

    def describe_errors(self, payload: Mapping[str, Any]) -> List[str]:
        """Нарушения в виде "$.poolSize: ..." (для диагностики источника)."""
        return [f"{error.json_path}: {error.message}" for error in self.iter_errors(payload)]


# Кэш валидаторов по имени контракта
_VALIDATORS: Dict[str, ContractValidator] = {}


def get_contract_validator(schema_name: str) -> ContractValidator:
    """
    Общий экземпляр валидатора контракта.

    Raises:
        ValueError: Если контракт неизвестен
    """
    if schema_name not in CONTRACTS:
        raise ValueError(f"Unknown contract {schema_name!r}, expected one of {CONTRACTS}")
    validator = _VALIDATORS.get(schema_name)
    if validator is None:
        validator = _VALIDATORS[schema_name] = ContractValidator(schema_name)
    return validator


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_gauge_state(payload: Mapping[str, Any]) -> None:
    """Raises: jsonschema.ValidationError при нарушении контракта gauge_state."""
    get_contract_validator(GAUGE_STATE).validate(payload)


def validate_vault_account(payload: Mapping[str, Any]) -> None:
    """Raises: jsonschema.ValidationError при нарушении контракта vault_account."""
    get_contract_validator(VAULT_ACCOUNT).validate(payload)


def validate_price_quote(payload: Mapping[str, Any]) -> None:
    """Raises: jsonschema.ValidationError при нарушении контракта price_quote."""
    get_contract_validator(PRICE_QUOTE).validate(payload)
