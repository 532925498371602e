"""Tests for scamintel.payment_extractor."""
import pytest

from scamintel.payment_extractor import (
    PaymentIdExtractor,
    is_valid_bitcoin_address,
    is_valid_upi,
)


@pytest.fixture
def payments() -> PaymentIdExtractor:
    return PaymentIdExtractor()


def systems(result):
    return [p.payment_system for p in result]


def test_upi_with_known_provider(payments: PaymentIdExtractor) -> None:
    result = payments.extract("Send money to user@paytm", "hi")

    assert len(result) == 1
    assert result[0].value == "user@paytm"
    assert result[0].payment_system == "UPI"
    assert result[0].metadata["paymentSystem"] == "UPI"
    assert result[0].confidence == pytest.approx(0.85)


def test_upi_with_unknown_provider_is_rejected(payments: PaymentIdExtractor) -> None:
    assert payments.extract("Send money to user@unknownprovider", "en") == []


def test_upi_auto_detects_language(payments: PaymentIdExtractor) -> None:
    result = payments.extract("Send to user@paytm for payment")
    assert systems(result) == ["UPI"]


def test_email_address_is_not_upi(payments: PaymentIdExtractor) -> None:
    assert payments.extract("Write to john@example.com", "en") == []


def test_bitcoin_address(payments: PaymentIdExtractor) -> None:
    result = payments.extract("Send BTC to 1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa now", "en")
    assert systems(result) == ["Bitcoin"]
    assert result[0].validated is True
    assert result[0].confidence == pytest.approx(0.8)


def test_ethereum_address(payments: PaymentIdExtractor) -> None:
    address = "0x52908400098527886E0F7030069857D2E4169EE7"
    result = payments.extract(f"ETH wallet: {address}", "en")
    assert systems(result) == ["Ethereum"]
    assert result[0].value == address


def test_paypal_id_requires_context(payments: PaymentIdExtractor) -> None:
    with_context = payments.extract("PayPal transaction 8AB12345CD6789012 is on hold", "en")
    without_context = payments.extract("Reference 8AB12345CD6789012 is on hold", "en")

    assert systems(with_context) == ["PayPal"]
    assert with_context[0].confidence == pytest.approx(0.7)
    assert without_context == []


@pytest.mark.parametrize(
    "text, expected_value",
    [
        ("Alipay: user@example.com", "user@example.com"),
        ("Alipay: 13800138000", "13800138000"),
        ("支付宝：13800138000", "13800138000"),
    ],
)
def test_alipay_in_chinese(payments: PaymentIdExtractor, text: str, expected_value: str) -> None:
    result = payments.extract(text, "zh")
    assert systems(result) == ["Alipay"]
    assert result[0].value == expected_value


@pytest.mark.parametrize(
    "text, expected_system, expected_value",
    [
        ("请转账到alipay:13800138000谢谢", "Alipay", "13800138000"),
        ("支付宝user@example.com谢谢", "Alipay", "user@example.com"),
        ("加我微信wxid_abc123谢谢", "WeChat Pay", "wxid_abc123"),
    ],
)
def test_ids_running_into_chinese_text(
    payments: PaymentIdExtractor, text: str, expected_system: str, expected_value: str
) -> None:
    result = payments.extract(text, "zh")
    assert [(p.payment_system, p.value) for p in result] == [(expected_system, expected_value)]


@pytest.mark.parametrize(
    "text, language",
    [
        ("Alipay: １３８００１３８０００", "zh"),
        ("PIX: ١١٩٨٧٦٥٤٣٢١", "pt"),
    ],
)
def test_non_ascii_digits_are_not_ids(payments: PaymentIdExtractor, text: str, language: str) -> None:
    assert payments.extract(text, language) == []


@pytest.mark.parametrize("text", ["微信: wechat_user123", "WeChat: wechat_user123"])
def test_wechat_pay_in_chinese(payments: PaymentIdExtractor, text: str) -> None:
    result = payments.extract(text, "zh")
    assert systems(result) == ["WeChat Pay"]
    assert result[0].value == "wechat_user123"


@pytest.mark.parametrize(
    "text",
    [
        "Chave PIX: user@example.com",
        "PIX: 11987654321",
        "Chave PIX: 12345678901234",
        "PIX: 123e4567-e89b-12d3-a456-426614174000",
    ],
)
def test_pix_in_portuguese(payments: PaymentIdExtractor, text: str) -> None:
    assert systems(payments.extract(text, "pt")) == ["PIX"]


@pytest.mark.parametrize(
    "text, language",
    [
        ("Référence SEPA: RF18539007547034", "fr"),
        ("SEPA Referenz: rf18539007547034", "de"),
        ("Referencia SEPA: RF18539007547034", "es"),
        ("Riferimento SEPA: RF18539007547034", "it"),
    ],
)
def test_sepa_reference_in_european_languages(payments: PaymentIdExtractor, text: str, language: str) -> None:
    result = payments.extract(text, language)
    assert systems(result) == ["SEPA"]
    assert result[0].value == "RF18539007547034"


@pytest.mark.parametrize(
    "text, language",
    [
        ("Alipay: user@example.com", "en"),
        ("WeChat: wechat_user123", "pt"),
        ("PIX: 11987654321", "es"),
        ("SEPA: RF18539007547034", "pt"),
    ],
)
def test_regional_systems_are_gated_by_language(payments: PaymentIdExtractor, text: str, language: str) -> None:
    assert payments.extract(text, language) == []


def test_duplicates_keep_first_occurrence(payments: PaymentIdExtractor) -> None:
    result = payments.extract("Pay user@paytm or user@paytm today", "en")
    assert len(result) == 1


def test_validators() -> None:
    assert is_valid_upi("9876543210@ybl")
    assert is_valid_upi("someone@okhdfcbank")
    assert not is_valid_upi("someone@example")
    assert not is_valid_upi("no-at-sign")

    assert is_valid_bitcoin_address("3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy")
    assert is_valid_bitcoin_address("bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq")
    assert not is_valid_bitcoin_address("2J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy")
