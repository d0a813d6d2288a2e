"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Интеграция с Pydantic моделями (from_payload)
"""

from decimal import Decimal

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.core.contracts import (
    GAUGE_STATE,
    PRICE_QUOTE,
    VAULT_ACCOUNT,
    SchemaLoader,
    get_contract_validator,
    is_uint256,
    validate_gauge_state,
    validate_price_quote,
    validate_vault_account,
)
from src.core.domain import UINT256_MAX, FixedPointAmount, GaugeState, PriceQuote, VaultVersion
from src.positions import parse_vault_account


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_gauge_state():
    """Валидный снапшот gauge (USDC vault shares, 18-decimal boost accounting)."""
    return {
        "workingBalances": "0",
        "workingSupply": "400000000000000000000",
        "poolSize": "900000000",
        "poolRewardForDuration": "10000000000000000000",
        "unstakedBalance": 50_000_000,
    }


@pytest.fixture
def valid_vault_account():
    return {
        "totalDeposits": "100000000000000000000",
        "totalYieldEarned": "1500000000000000000",
        "totalBalance": "101500000000000000000",
        "vault": {"symbol": "rETH-THETA"},
    }


@pytest.fixture
def valid_price_quote():
    return {"symbol": "RBN", "price": 0.85, "resolved": True}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-валидация схем."""

    @pytest.mark.parametrize("name", ["gauge_state", "vault_account", "price_quote"])
    def test_schemas_load(self, name: str) -> None:
        schema = SchemaLoader().load_schema(name)
        assert schema["title"] == name

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("gauge_state") is loader.load_schema("gauge_state")

    def test_validator_shared_per_contract(self) -> None:
        assert get_contract_validator(GAUGE_STATE) is get_contract_validator(GAUGE_STATE)
        assert get_contract_validator(GAUGE_STATE) is not get_contract_validator(VAULT_ACCOUNT)

    def test_unknown_contract(self) -> None:
        with pytest.raises(ValueError, match="Unknown contract"):
            get_contract_validator("market_state")


class TestUint256Format:
    """Проверка диапазона uint256."""

    @pytest.mark.parametrize("value", [0, "0", UINT256_MAX, str(UINT256_MAX)])
    def test_in_range(self, value) -> None:
        assert is_uint256(value)

    @pytest.mark.parametrize("value", [-1, UINT256_MAX + 1, str(UINT256_MAX + 1), "9" * 78])
    def test_out_of_range(self, value) -> None:
        assert not is_uint256(value)


# =============================================================================
# GAUGE STATE
# =============================================================================


class TestGaugeStateContract:
    """gauge_state.json."""

    def test_valid(self, valid_gauge_state) -> None:
        validate_gauge_state(valid_gauge_state)
        assert get_contract_validator(GAUGE_STATE).is_valid(valid_gauge_state)

    @pytest.mark.parametrize(
        "key",
        ["workingBalances", "workingSupply", "poolSize", "poolRewardForDuration", "unstakedBalance"],
    )
    def test_missing_required(self, valid_gauge_state, key: str) -> None:
        del valid_gauge_state[key]
        with pytest.raises(ValidationError):
            validate_gauge_state(valid_gauge_state)

    @pytest.mark.parametrize("value", ["-1", "1.5", "0x10", "", -1, 1.5, None, "1" * 79])
    def test_invalid_uint256(self, valid_gauge_state, value) -> None:
        valid_gauge_state["poolSize"] = value
        with pytest.raises(ValidationError):
            validate_gauge_state(valid_gauge_state)

    def test_iter_errors_reports_all(self) -> None:
        errors = list(get_contract_validator(GAUGE_STATE).iter_errors({}))
        assert len(errors) == 5
        assert any("workingBalances" in error.message for error in errors)

    def test_uint256_max_accepted(self, valid_gauge_state) -> None:
        valid_gauge_state["poolSize"] = str(UINT256_MAX)
        valid_gauge_state["unstakedBalance"] = UINT256_MAX
        validate_gauge_state(valid_gauge_state)

    @pytest.mark.parametrize("value", ["9" * 78, str(UINT256_MAX + 1), UINT256_MAX + 1])
    def test_above_uint256_rejected(self, valid_gauge_state, value) -> None:
        """78 цифр проходят шаблон, но не диапазон uint256."""
        valid_gauge_state["poolSize"] = value
        with pytest.raises(ValidationError):
            validate_gauge_state(valid_gauge_state)

    def test_describe_errors(self, valid_gauge_state) -> None:
        valid_gauge_state["poolSize"] = "9" * 78
        messages = get_contract_validator(GAUGE_STATE).describe_errors(valid_gauge_state)
        assert len(messages) == 1
        assert messages[0].startswith("$.poolSize")


# =============================================================================
# VAULT ACCOUNT
# =============================================================================


class TestVaultAccountContract:
    """vault_account.json."""

    def test_valid(self, valid_vault_account) -> None:
        validate_vault_account(valid_vault_account)

    def test_vault_optional(self, valid_vault_account) -> None:
        del valid_vault_account["vault"]
        assert get_contract_validator(VAULT_ACCOUNT).is_valid(valid_vault_account)

    def test_missing_total_balance(self, valid_vault_account) -> None:
        del valid_vault_account["totalBalance"]
        with pytest.raises(ValidationError):
            validate_vault_account(valid_vault_account)

    def test_empty_vault_symbol(self, valid_vault_account) -> None:
        valid_vault_account["vault"]["symbol"] = ""
        with pytest.raises(ValidationError):
            validate_vault_account(valid_vault_account)

    def test_parse_above_uint256_is_contract_violation(self, valid_vault_account) -> None:
        valid_vault_account["totalBalance"] = str(UINT256_MAX + 1)
        with pytest.raises(ValidationError):
            parse_vault_account(valid_vault_account, "rETH-THETA", VaultVersion.V1, 18)


# =============================================================================
# PRICE QUOTE
# =============================================================================


class TestPriceQuoteContract:
    """price_quote.json."""

    def test_valid(self, valid_price_quote) -> None:
        validate_price_quote(valid_price_quote)

    def test_decimal_string_price(self, valid_price_quote) -> None:
        valid_price_quote["price"] = "1234.5678"
        assert get_contract_validator(PRICE_QUOTE).is_valid(valid_price_quote)

    @pytest.mark.parametrize("price", [-0.01, "abc", "-1", None])
    def test_invalid_price(self, valid_price_quote, price) -> None:
        valid_price_quote["price"] = price
        with pytest.raises(ValidationError):
            validate_price_quote(valid_price_quote)

    def test_resolved_must_be_bool(self, valid_price_quote) -> None:
        valid_price_quote["resolved"] = "yes"
        with pytest.raises(ValidationError):
            validate_price_quote(valid_price_quote)


# =============================================================================
# INTEGRATION WITH PYDANTIC MODELS
# =============================================================================


class TestGaugeStateModel:
    """GaugeState.from_payload и валидация модели."""

    def test_from_payload(self, valid_gauge_state) -> None:
        state = GaugeState.from_payload(
            valid_gauge_state, staking_decimals=6, working_decimals=18, reward_decimals=18
        )
        assert state.pool_size == FixedPointAmount.from_units(900, 6)
        assert state.unstaked_balance == FixedPointAmount.from_units(50, 6)
        assert state.working_supply == FixedPointAmount.from_units(400, 18)
        assert state.pool_reward_for_duration == FixedPointAmount.from_units(10, 18)
        assert state.staking_decimals == 6
        assert state.working_decimals == 18

    def test_from_payload_rejects_bad_contract(self, valid_gauge_state) -> None:
        valid_gauge_state["workingSupply"] = "-5"
        with pytest.raises(ValidationError):
            GaugeState.from_payload(
                valid_gauge_state, staking_decimals=6, working_decimals=18, reward_decimals=18
            )

    def test_from_payload_above_uint256_is_contract_violation(self, valid_gauge_state) -> None:
        valid_gauge_state["poolSize"] = "9" * 78
        with pytest.raises(ValidationError):
            GaugeState.from_payload(
                valid_gauge_state, staking_decimals=6, working_decimals=18, reward_decimals=18
            )

    def test_working_balance_above_supply(self) -> None:
        with pytest.raises(PydanticValidationError):
            GaugeState(
                working_balance=FixedPointAmount(raw=5, decimals=18),
                working_supply=FixedPointAmount(raw=4, decimals=18),
                pool_size=FixedPointAmount(raw=0, decimals=6),
                pool_reward_for_duration=FixedPointAmount(raw=0, decimals=18),
                unstaked_balance=FixedPointAmount(raw=0, decimals=6),
            )

    def test_scale_mismatch(self) -> None:
        with pytest.raises(PydanticValidationError, match="different scales"):
            GaugeState(
                working_balance=FixedPointAmount(raw=0, decimals=18),
                working_supply=FixedPointAmount(raw=4, decimals=18),
                pool_size=FixedPointAmount(raw=0, decimals=6),
                pool_reward_for_duration=FixedPointAmount(raw=0, decimals=18),
                unstaked_balance=FixedPointAmount(raw=0, decimals=18),
            )

    def test_immutable(self, valid_gauge_state) -> None:
        state = GaugeState.from_payload(
            valid_gauge_state, staking_decimals=6, working_decimals=18, reward_decimals=18
        )
        with pytest.raises(PydanticValidationError):
            state.pool_size = FixedPointAmount(raw=1, decimals=6)  # type: ignore


class TestPriceQuoteModel:
    """PriceQuote.from_payload."""

    def test_float_price_kept_decimal(self, valid_price_quote) -> None:
        quote = PriceQuote.from_payload(valid_price_quote)
        assert quote.price == Decimal("0.85")
        assert quote.resolved

    def test_string_price(self) -> None:
        quote = PriceQuote.from_payload({"symbol": "WETH", "price": "3120.25", "resolved": True})
        assert quote.price == Decimal("3120.25")

    def test_loading(self) -> None:
        quote = PriceQuote.loading("AAVE")
        assert not quote.resolved
        assert quote.price == 0

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            PriceQuote(symbol="RBN", price=Decimal("-1"), resolved=True)
