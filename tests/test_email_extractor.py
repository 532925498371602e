"""Tests for scamintel.email_extractor."""
import pytest

from scamintel.email_extractor import EmailExtractor, is_valid_email


@pytest.fixture
def emails() -> EmailExtractor:
    return EmailExtractor()


def test_email_is_lower_cased_with_domain(emails: EmailExtractor) -> None:
    result = emails.extract("Contact John.Doe@Example.COM for help")

    assert len(result) == 1
    assert result[0].value == "john.doe@example.com"
    assert result[0].domain == "example.com"
    assert result[0].validated is True
    assert result[0].confidence == pytest.approx(0.95)


def test_malformed_local_part_gets_lower_confidence(emails: EmailExtractor) -> None:
    result = emails.extract("Reply to a..b@example.com")

    assert result[0].value == "a..b@example.com"
    assert result[0].validated is False
    assert result[0].confidence == pytest.approx(0.7)


def test_case_variants_are_deduplicated(emails: EmailExtractor) -> None:
    assert len(emails.extract("x@a.io and X@A.IO")) == 1


@pytest.mark.parametrize(
    "email, valid",
    [
        ("user@example.com", True),
        ("first.last+tag@mail.example.org", True),
        (".user@example.com", False),
        ("user.@example.com", False),
        ("user@-example.com", False),
        ("user@example", False),
    ],
)
def test_is_valid_email(email: str, valid: bool) -> None:
    assert is_valid_email(email) is valid


def test_empty_input(emails: EmailExtractor) -> None:
    assert emails.extract("") == []
