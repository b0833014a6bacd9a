"""
Confirmation email composition.

The body always thanks the attendee for registering. When an address was
supplied it adds a paragraph about sticker delivery, worded differently
depending on whether the address could be verified.
"""

from html import escape

from .ports import AddressVerificationResult, ConfirmationEmail

_INTRO = (
    "<p>Hey there,</p>"
    "<p>Thank you so much for registering to take part in {event}. "
    "We hope you will enjoy the event.</p>"
    "<p>Please feel free to share the event with your friends and colleagues "
    "so we can positively impact as many people as possible.</p>"
)

_VERIFIED = (
    "<p>We'll be sending out stickers closer to the event. We successfully "
    "verified your address so there shouldn't be any issues with getting "
    "them to you.</p>"
)

_UNVERIFIED = (
    "<p>We'll be sending out stickers closer to the event. Just to let you "
    "know - we struggled to verify your address. If {address} is correct, "
    "there shouldn't be a problem, but if it's incorrect please get in touch "
    "with us so we can amend it.</p>"
)

_OUTRO = (
    "<p>We'll send you a couple of important updates before the day.</p>"
    "<p>Much love</p>"
    "<p>The {event} team</p>"
)


def build_confirmation_email(
    event_name: str, address: AddressVerificationResult | None = None
) -> ConfirmationEmail:
    """
    Render the confirmation email for a new attendee.

    Args:
        event_name: Display name of the event
        address: Outcome of address verification, None if no address given

    Returns:
        ConfirmationEmail with subject and HTML body
    """
    event = escape(event_name)
    parts = [_INTRO.format(event=event)]

    if address is not None:
        if address.address_verified:
            parts.append(_VERIFIED)
        else:
            parts.append(_UNVERIFIED.format(address=escape(address.address)))

    parts.append(_OUTRO.format(event=event))
    return ConfirmationEmail(
        subject=f"Registration for {event_name}",
        html="\n".join(parts),
    )
