"""Encode and decode notification deep links.

A deep link is a relative URL such as ``/?tab=tasks&taskId=42`` whose query
string carries a :class:`NavigationTarget`. Only the parameters listed in
``QUERY_PARAMETERS`` are meaningful; everything else is ignored when decoding.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any, Final
from urllib.parse import quote, unquote_plus

from notification_center.domain.entities import QUERY_PARAMETERS, NavigationTarget, Notification

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH: Final[str] = "/"

_ATTRIBUTE_BY_PARAMETER: Final[dict[str, str]] = {
    parameter: attribute for attribute, parameter in QUERY_PARAMETERS
}
_ABSOLUTE_URL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^[A-Za-z][A-Za-z0-9+.\-]*://[^/?#]+"
)
_STRAY_PERCENT_PATTERN: Final[re.Pattern[str]] = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_target(target: NavigationTarget, *, base_path: str = DEFAULT_BASE_PATH) -> str:
    """Return the action URL pointing at ``target``.

    Only non-empty fields are written, in the fixed ``QUERY_PARAMETERS`` order,
    with every reserved or non-ASCII character percent-encoded as UTF-8.
    """

    params = target.to_query_params()
    if not params:
        return base_path
    query = "&".join(
        f"{name}={quote(value, safe='', encoding='utf-8')}" for name, value in params.items()
    )
    return f"{base_path}?{query}"


def decode_action_url(action_url: Any) -> NavigationTarget:
    """Parse ``action_url`` back into a :class:`NavigationTarget`.

    Never raises: malformed URLs produce an empty target, which callers treat
    as non-navigable.
    """

    if not _looks_like_url(action_url):
        logger.debug("Ignoring malformed action URL %r", action_url)
        return NavigationTarget()

    without_fragment = action_url.split("#", 1)[0]
    _, separator, query = without_fragment.partition("?")
    if not separator:
        return NavigationTarget()
    if _STRAY_PERCENT_PATTERN.search(query):
        logger.debug("Action URL %r has invalid percent-escapes", action_url)
        return NavigationTarget()

    values: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        raw_name, _, raw_value = pair.partition("=")
        try:
            name = unquote_plus(raw_name, encoding="utf-8", errors="strict")
            value = unquote_plus(raw_value, encoding="utf-8", errors="strict")
        except UnicodeDecodeError:
            logger.debug("Action URL %r has undecodable escapes", action_url)
            return NavigationTarget()

        attribute = _ATTRIBUTE_BY_PARAMETER.get(name)
        if attribute is None or not value or attribute in values:
            continue
        values[attribute] = value

    return NavigationTarget(**values)


def resolve_notification_target(notification: Notification) -> NavigationTarget:
    """Return where a click on ``notification`` should navigate."""

    if not notification.action_url:
        return NavigationTarget()
    return decode_action_url(notification.action_url)


def _looks_like_url(candidate: Any) -> bool:
    if not isinstance(candidate, str) or not candidate:
        return False
    for character in candidate:
        if character.isspace() or unicodedata.category(character) == "Cc":
            return False
    if candidate.startswith(("/", "?")):
        return True
    return _ABSOLUTE_URL_PATTERN.match(candidate) is not None


__all__ = [
    "DEFAULT_BASE_PATH",
    "decode_action_url",
    "encode_target",
    "resolve_notification_target",
]
