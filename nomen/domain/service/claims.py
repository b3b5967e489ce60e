"""Extraction of profile attributes from provider claims.

Providers name the same fact differently (``full_name`` vs ``name``,
``avatar_url`` vs ``picture``). Each attribute key has an ordered list of
claim names; the first present one wins.
"""

from collections.abc import Mapping
from typing import Any

from nomen.domain.value import AttributeKey

CLAIM_PRIORITY: dict[AttributeKey, tuple[str, ...]] = {
    AttributeKey.DISPLAY_NAME: ("full_name", "name", "display_name"),
    AttributeKey.PRIMARY_EMAIL: ("email",),
    AttributeKey.USERNAME: ("preferred_username", "user_name", "login"),
    AttributeKey.AVATAR_URL: ("avatar_url", "picture"),
}


def _present(value: Any) -> str | None:
    """Return the trimmed value, or None if it is null or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def extract_attribute(
    claims: Mapping[str, Any], attribute_key: AttributeKey
) -> str | None:
    """Pick the value for one attribute key.

    Args:
        claims: Claims bag from the provider
        attribute_key: Attribute to extract

    Returns:
        First present candidate, trimmed, or None
    """
    for claim_name in CLAIM_PRIORITY[attribute_key]:
        value = _present(claims.get(claim_name))
        if value is not None:
            return value
    return None


def extract_attributes(claims: Mapping[str, Any]) -> dict[AttributeKey, str]:
    """Pick values for every attribute key.

    Absent keys are left out entirely, so a refresh with fewer claims never
    blanks an existing attribute.

    Args:
        claims: Claims bag from the provider

    Returns:
        Mapping of present attribute keys to values
    """
    extracted: dict[AttributeKey, str] = {}
    for attribute_key in AttributeKey:
        value = extract_attribute(claims, attribute_key)
        if value is not None:
            extracted[attribute_key] = value
    return extracted
