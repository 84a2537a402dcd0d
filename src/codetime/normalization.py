"""Utilities to normalize submitted heartbeats before storage."""

from __future__ import annotations

import re
import uuid
from typing import Callable, Optional

from .dates import MAX_UNIX_MILLIS
from .errors import InvalidHeartbeatError
from .models import UNKNOWN, Heartbeat, RawHeartbeat

UNPARSED = "unknown"

_OS_NAMES: dict[str, str] = {
    "aix": "AIX",
    "android": "Android",
    "darwin": "macOS",
    "dragonfly": "DragonFly",
    "freebsd": "FreeBSD",
    "hurd": "Hurd",
    "illumos": "Illumos",
    "ios": "IOS",
    "js": "JavaScript",
    "linux": "Linux",
    "nacl": "NaCl",
    "netbsd": "NetBSD",
    "openbsd": "OpenBSD",
    "plan9": "Plan9",
    "solaris": "Solaris",
    "windows": "Windows",
    "zos": "Z/OS",
    "unknown": "Unknown",
}

_EDITOR_NAMES: dict[str, str] = {
    "vscode": "VS Code",
    "unknown": "Unknown",
}

# wakatime/<version> (<os>-<rest>) <client> <editor>/<version> [plugin/<version>]
_USER_AGENT_PATTERN = re.compile(
    r"^wakatime/\S+ \((?P<os>[^-()\s]+)-[^)]*\) \S+ (?P<editor>[^/\s]+)/\S+"
)


def parse_user_agent(user_agent: Optional[str]) -> Optional[tuple[str, str]]:
    """Return the raw ``(os, editor)`` tokens of a wakatime user agent, if it is one."""
    match = _USER_AGENT_PATTERN.match(user_agent or "")
    if match is None:
        return None
    return match.group("os"), match.group("editor")


def canonical_os(token: str) -> str:
    return _OS_NAMES.get(token.lower(), token)


def canonical_editor(token: str) -> str:
    return _EDITOR_NAMES.get(token.lower(), token)


def _or_unknown(value: Optional[str]) -> str:
    return value if value else UNKNOWN


def _new_id() -> str:
    return str(uuid.uuid4())


def normalize_heartbeat(
    raw: RawHeartbeat,
    *,
    id_factory: Optional[Callable[[], str]] = None,
) -> Heartbeat:
    """Validate a submitted heartbeat, fill defaults and canonicalize names."""
    if not raw.entity:
        raise InvalidHeartbeatError("entity is required")
    if raw.time is None:
        raise InvalidHeartbeatError("time is required")
    if isinstance(raw.time, bool) or not isinstance(raw.time, int) or raw.time < 0:
        raise InvalidHeartbeatError(f"time must be epoch milliseconds, got {raw.time!r}")
    if raw.time > MAX_UNIX_MILLIS:
        raise InvalidHeartbeatError(f"time {raw.time} is beyond year 9999")

    tokens = parse_user_agent(raw.user_agent)
    if tokens is None:
        os_name = editor_name = UNPARSED
    else:
        os_name, editor_name = canonical_os(tokens[0]), canonical_editor(tokens[1])

    return Heartbeat(
        id=(id_factory or _new_id)(),
        entity=raw.entity,
        project=_or_unknown(raw.project),
        language=_or_unknown(raw.language),
        branch=_or_unknown(raw.branch),
        os=os_name,
        editor=editor_name,
        time=raw.time,
    )
