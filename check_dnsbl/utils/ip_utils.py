"""Address utilities for building DNSBL query names."""

import ipaddress


def is_valid_ipv4(address: str) -> bool:
    """Validate if string is a valid IPv4 address.

    Args:
        address: Address string to validate.

    Returns:
        bool: True if valid IPv4, False otherwise.

    Examples:
        >>> is_valid_ipv4("203.0.113.45")
        True
        >>> is_valid_ipv4("256.0.0.1")
        False
        >>> is_valid_ipv4("::1")
        False
    """
    try:
        addr = ipaddress.ip_address(address)
        return isinstance(addr, ipaddress.IPv4Address)
    except ValueError:
        return False


def reverse_address(address: str) -> str:
    """Reverse the dot-separated labels of an address.

    A dotted-quad such as 203.0.113.45 becomes 45.113.0.203. Anything else
    is reversed label-wise without validation, so a hostname fallback or an
    IPv6 literal passes through and simply fails to resolve later. Empty
    labels (a trailing dot on a fully-qualified name) are dropped.

    Args:
        address: Resolved address (normally IPv4 dotted-quad).

    Returns:
        str: Reversed address.

    Examples:
        >>> reverse_address("203.0.113.45")
        '45.113.0.203'
        >>> reverse_address("mail.example.org")
        'org.example.mail'
        >>> reverse_address("host.invalid.")
        'invalid.host'
    """
    labels = [label for label in address.split(".") if label]
    return ".".join(reversed(labels))


def build_query_name(address: str, server: str) -> str:
    """Build the list-server query name for an address.

    Args:
        address: Address to check.
        server: List server domain (e.g., "zen.spamhaus.org").

    Returns:
        str: Query name (e.g., "45.113.0.203.zen.spamhaus.org").

    Raises:
        ValueError: If server is empty.

    Examples:
        >>> build_query_name("203.0.113.45", "zen.spamhaus.org")
        '45.113.0.203.zen.spamhaus.org'
    """
    if not server:
        raise ValueError("List server domain cannot be empty")

    return f"{reverse_address(address)}.{server}"
