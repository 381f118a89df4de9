"""Use cases translating notifications into dashboard navigation."""

from .deep_links import (
    DEFAULT_BASE_PATH,
    decode_action_url,
    encode_target,
    resolve_notification_target,
)

__all__ = [
    "DEFAULT_BASE_PATH",
    "decode_action_url",
    "encode_target",
    "resolve_notification_target",
]
