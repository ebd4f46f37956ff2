# core/resources/denylist.py
"""Hosts that refuse to be embedded or inject ads into embedded frames."""

from typing import Iterable


BLOCKED_HOSTS: frozenset[str] = frozenset(
    {
        "mediafire.com",
        "mega.nz",
        "mega.io",
        "4shared.com",
        "zippyshare.com",
        "rapidgator.net",
        "uploaded.net",
        "turbobit.net",
        "sendspace.com",
        "solidfiles.com",
        "uptobox.com",
        "wetransfer.com",
    }
)


def is_blocked_host(hostname: str | None, extra_hosts: Iterable[str] = ()) -> bool:
    """Check a hostname against the denylist.

    A host matches when it equals a denylisted entry or ends with it, so
    "www.mediafire.com" and "example-mediafire.com" both match "mediafire.com".
    """
    if not hostname:
        return False

    host = hostname.lower().rstrip(".")
    for blocked in (*BLOCKED_HOSTS, *extra_hosts):
        if host == blocked or host.endswith(blocked):
            return True
    return False
