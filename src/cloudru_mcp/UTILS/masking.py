"""
Utilities for showing credentials without revealing them.
"""

MASK = "***"


def mask_sensitive(value: str) -> str:
    """
    Masks the middle of a secret, keeping the first and last three characters.

    :param value: The secret.
    :return: "" for an empty value, "***" for values of four characters or
        fewer, otherwise ``value[:3] + "***" + value[-3:]``.
    """
    if not value:
        return ""
    if len(value) <= 4:
        return MASK
    return f"{value[:3]}{MASK}{value[-3:]}"
