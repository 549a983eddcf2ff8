import pytest

from walkathon.donation import donation_message, parse_amount
from walkathon.errors import DonationError


@pytest.mark.parametrize(
    "raw,amount",
    [("25", 25.0), ("$25.50", 25.5), (" 1,000 ", 1000.0), (10, 10.0)],
)
def test_parse_amount(raw, amount):
    assert parse_amount(raw) == amount


@pytest.mark.parametrize("raw", ["", "ten", "nan", "inf"])
def test_parse_amount_rejects_garbage(raw):
    with pytest.raises(DonationError):
        parse_amount(raw)


def test_below_minimum_is_rejected(config):
    with pytest.raises(DonationError, match=r"\$1 minimum"):
        donation_message("0.50", config)


def test_message_points_to_organizers(config):
    message = donation_message("$1234.5", config)

    assert message.startswith("Thank you for your interest in donating $1,234.50!")
    assert "Payment processing is not yet configured" in message
    assert message.endswith("  Organizer One: (408) 555-0001")
