import math

from walkathon.errors import DonationError


def parse_amount(raw) -> float:
    """Parse a donation amount such as "25", "25.50", or "$25"."""
    text = str(raw).strip().lstrip("$").replace(",", "")
    try:
        amount = float(text)
    except ValueError:
        raise DonationError(f"Not a valid amount: {raw!r}")
    if not math.isfinite(amount):
        raise DonationError(f"Not a valid amount: {raw!r}")
    return amount


def donation_message(raw_amount, config) -> str:
    """
    Validate a pledged donation and return the message to show the donor.

    Card payments are not wired up, so the donor is pointed at the organizers.

    Args:
        raw_amount: Amount as typed by the donor.
        config (Config): Supplies the minimum amount and organizer contacts.

    Raises:
        DonationError: If the amount is unparseable or below the minimum.
    """
    amount = parse_amount(raw_amount)
    if amount < config.minimum_donation:
        raise DonationError(
            f"Please enter a valid donation amount (${config.minimum_donation:g} minimum)"
        )

    lines = [
        f"Thank you for your interest in donating ${amount:,.2f}!",
        "",
        "Payment processing is not yet configured. "
        "Please contact the organizers for donation options:",
    ]
    lines += [f"  {contact}" for contact in config.organizer_contacts]
    return "\n".join(lines)
