"""Indicator type classifier.

Assigns one of the closed set of indicator types to a raw string using
shape and length rules, checked in strict order:

1. Dotted quad of 1-3 digit groups -> ipv4 (octet range is not checked)
2. Eight colon-separated groups of 1-4 hex digits -> ipv6 (full form only,
   "::" compression is not recognized)
3. Length 32 / 40 / 64 -> md5 / sha1 / sha256
4. Anything else -> ipv4

Example:
    classify(" 10.0.0.1 ")         # IndicatorType.IPV4
    classify("d41d8cd98f00b204e9800998ecf8427e")  # IndicatorType.MD5
"""
import re

from ioc_tracker.schemas.entries import Category, IndicatorType

IPV4_PATTERN = re.compile(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$")
IPV6_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}$")

HASH_LENGTHS: dict[int, IndicatorType] = {
    32: IndicatorType.MD5,
    40: IndicatorType.SHA1,
    64: IndicatorType.SHA256,
}

# Unrecognized values have always been stored as ipv4. Kept for
# compatibility with existing data; do not add more fallbacks here.
FALLBACK_TYPE = IndicatorType.IPV4


def classify(raw: str) -> IndicatorType:
    """Classify a raw indicator string. Never raises.

    Args:
        raw: Value as read from a spreadsheet cell or request body

    Returns:
        The matching IndicatorType, or FALLBACK_TYPE when nothing matches
    """
    value = str(raw).strip()

    if IPV4_PATTERN.fullmatch(value):
        return IndicatorType.IPV4
    if IPV6_PATTERN.fullmatch(value):
        return IndicatorType.IPV6

    return HASH_LENGTHS.get(len(value), FALLBACK_TYPE)


def category_for(indicator_type: IndicatorType) -> Category:
    """Return ``ip`` for address types and ``hash`` for everything else."""
    return indicator_type.category
