from __future__ import annotations
from email_validator import EmailNotValidError, validate_email

_GMAIL_DOMAINS = {"gmail.com", "googlemail.com"}
_PLUS_TAG_DOMAINS = {"outlook.com", "hotmail.com", "live.com", "icloud.com", "me.com"}
_DASH_TAG_DOMAINS = {"yahoo.com", "ymail.com", "rocketmail.com"}


def canonical_email(raw: str) -> str:
    """
    Check syntax and return the canonical lowercase form of an address.
    Provider sub-addresses are folded so one mailbox maps to one string,
    e.g. "Thabo.M+surveys@GoogleMail.com" -> "thabom@gmail.com".
    Raises EmailNotValidError.
    """
    info = validate_email(raw, check_deliverability=False)
    local, domain = info.normalized.rsplit("@", 1)
    local, domain = local.lower(), domain.lower()

    if domain in _GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in _PLUS_TAG_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in _DASH_TAG_DOMAINS:
        local = local.split("-", 1)[0]

    if not local:
        raise EmailNotValidError("The email address has no mailbox before the tag.")
    return f"{local}@{domain}"
