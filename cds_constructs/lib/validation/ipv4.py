import re

_OCTET = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]\d|\d)"

IPV4_PATTERN = re.compile(rf"{_OCTET}(?:\.{_OCTET}){{3}}")
"""Dotted quad, 0-255 per octet, no leading zeros. Source: https://github.com/sindresorhus/ip-regex"""


def check_ipv4(value: str) -> bool:
    """Check that the whole string is an IPv4 address (no subnet suffix)

    :param value: String to check
    :return: bool
    """
    return IPV4_PATTERN.fullmatch(value) is not None
