"""Tests for scamintel.organization_extractor."""
import pytest

from scamintel.organization_extractor import OrganizationExtractor, score_impersonation_risk


@pytest.fixture
def orgs() -> OrganizationExtractor:
    return OrganizationExtractor()


def by_value(result, value):
    return next(o for o in result if o.value == value)


def test_known_brand_with_scam_context(orgs: OrganizationExtractor) -> None:
    text = "URGENT: Amazon security alert, verify your account now."
    amazon = by_value(orgs.extract(text), "Amazon")

    assert amazon.is_known_brand is True
    assert amazon.confidence == pytest.approx(0.95)
    # three indicators (capped at 0.7) plus the financial keyword "account"
    assert amazon.impersonation_risk == pytest.approx(0.85)
    assert amazon.potentially_fake is True
    assert amazon.metadata["potentiallyFake"] is True


def test_brand_match_is_case_insensitive_and_deduplicated(orgs: OrganizationExtractor) -> None:
    result = orgs.extract("paypal says hi. PayPal says bye.")
    assert [o.value for o in result] == ["paypal"]


def test_legal_suffix(orgs: OrganizationExtractor) -> None:
    acme = by_value(orgs.extract("Acme Widgets LLC sent you a refund."), "Acme Widgets LLC")
    assert acme.confidence == pytest.approx(0.85)
    assert acme.is_known_brand is False


def test_institutional_keyword(orgs: OrganizationExtractor) -> None:
    result = orgs.extract("First Fidelity Bank has frozen your funds")
    assert [(o.value, o.confidence) for o in result] == [("First Fidelity Bank", 0.75)]


def test_support_style_name_with_digit_is_suspicious(orgs: OrganizationExtractor) -> None:
    support = by_value(orgs.extract("Please call Paypa1 Support now"), "Paypa1 Support")
    assert support.confidence == pytest.approx(0.7)
    assert support.impersonation_risk == pytest.approx(0.2)


def test_quoted_names_need_two_words_or_two_capitals(orgs: OrganizationExtractor) -> None:
    result = orgs.extract('This is from "Global Relief Fund" and I said "Hello" to them')
    assert [o.value for o in result] == ["Global Relief Fund"]


def test_quoted_acronym_style_name(orgs: OrganizationExtractor) -> None:
    result = orgs.extract("The 'NetSecure' office called")
    assert [o.value for o in result] == ["NetSecure"]


def test_impersonation_risk_grows_with_indicators(orgs: OrganizationExtractor) -> None:
    calm = by_value(orgs.extract("Norton: urgent"), "Norton")
    alarmed = by_value(orgs.extract("Norton: urgent, verify now, act now"), "Norton")

    assert calm.impersonation_risk == pytest.approx(0.25)
    assert alarmed.impersonation_risk >= calm.impersonation_risk
    assert calm.potentially_fake is False


def test_risk_components() -> None:
    assert score_impersonation_risk("hello there", "Acme") == 0.0
    assert score_impersonation_risk("official notice", "Acme") == pytest.approx(0.2)
    assert score_impersonation_risk("send money", "Acme") == pytest.approx(0.15)
    # a digit and a disallowed character each add 0.2
    assert score_impersonation_risk("hello", "Acme1!") == pytest.approx(0.4)


def test_risk_is_capped_at_one() -> None:
    context = (
        "urgent final notice: verify now, act now, legal action, official "
        "government refund to your bank account"
    )
    assert score_impersonation_risk(context, "Pay#Pa1") == 1.0


def test_empty_input(orgs: OrganizationExtractor) -> None:
    assert orgs.extract("") == []


def test_brand_inside_chinese_text(orgs: OrganizationExtractor) -> None:
    result = orgs.extract("请联系Amazon客服")
    assert [(o.value, o.is_known_brand) for o in result] == [("Amazon", True)]


def test_brand_is_not_matched_inside_a_longer_word(orgs: OrganizationExtractor) -> None:
    assert orgs.extract("amazonian rainforest") == []
