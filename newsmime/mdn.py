"""Message Disposition Notifications (RFC 2298), also known as return receipts."""

from __future__ import annotations

import base64
import enum
import logging
import socket
from collections.abc import Iterable

from newsmime.util import is_us_ascii

__all__ = [
    "DispositionType",
    "DispositionModifier",
    "ActionMode",
    "SendingMode",
    "encode_rfc2047_string",
    "disposition_notification_body_content",
    "description_for",
]

_log = logging.getLogger(__name__)

_PRODUCT = "newsmime 1.0"


class DispositionType(enum.Enum):
    """What happened to the message."""

    DISPLAYED = "displayed"
    READ = "displayed"
    DELETED = "deleted"
    DISPATCHED = "dispatched"
    FORWARDED = "dispatched"
    PROCESSED = "processed"
    DENIED = "denied"
    FAILED = "failed"


class DispositionModifier(enum.Enum):
    """Extra qualification of a disposition."""

    ERROR = "error"
    WARNING = "warning"
    SUPERSEDED = "superseded"
    EXPIRED = "expired"
    MAILBOX_TERMINATED = "mailbox-terminated"


class ActionMode(enum.Enum):
    """Whether the disposition came from the user or an automatic action."""

    MANUAL_ACTION = "manual-action"
    AUTOMATIC_ACTION = "automatic-action"


class SendingMode(enum.Enum):
    """Whether the notification was sent with explicit user consent."""

    SENT_MANUALLY = "MDN-sent-manually"
    SENT_AUTOMATICALLY = "MDN-sent-automatically"


_DESCRIPTIONS = {
    DispositionType.DISPLAYED: (
        'The message sent on ${date} to ${to} with subject "${subject}" has been '
        "displayed. This is no guarantee that the message has been read or understood."
    ),
    DispositionType.DELETED: (
        'The message sent on ${date} to ${to} with subject "${subject}" has been '
        'deleted unseen. This is no guarantee that the message will not be "undeleted" '
        "and nonetheless read later on."
    ),
    DispositionType.DISPATCHED: (
        'The message sent on ${date} to ${to} with subject "${subject}" has been '
        "dispatched. This is no guarantee that the message will not be read later on."
    ),
    DispositionType.PROCESSED: (
        'The message sent on ${date} to ${to} with subject "${subject}" has been '
        "processed by some automatic means."
    ),
    DispositionType.DENIED: (
        'The message sent on ${date} to ${to} with subject "${subject}" has been '
        "acted upon. The sender does not wish to disclose more details to you than that."
    ),
    DispositionType.FAILED: (
        "Generation of a Message Disposition Notification for the message sent on "
        '${date} to ${to} with subject "${subject}" failed. Reason is given in the '
        "Failure: header field below."
    ),
}


def _as_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def encode_rfc2047_string(text: str, charset: bytes | str = "utf-8") -> bytes:
    """Encode ``text`` for a header; plain US-ASCII text is left as it is."""
    if is_us_ascii(text):
        return text.encode("ascii")
    cs = charset.decode("ascii") if isinstance(charset, (bytes, bytearray)) else charset
    cs = cs or "utf-8"
    payload = base64.b64encode(text.encode(cs)).decode("ascii")
    return f"=?{cs}?B?{payload}?=".encode("ascii")


def _reporting_ua_field() -> bytes:
    try:
        host = socket.gethostname()[:255]
    except OSError:
        host = ""
    return f"Reporting-UA: {host}; {_PRODUCT}\n".encode("utf-8")


def _disposition_field(
    disposition: DispositionType,
    action_mode: ActionMode,
    sending_mode: SendingMode,
    modifiers: list[DispositionModifier],
) -> bytes:
    line = f"Disposition: {action_mode.value}/{sending_mode.value}; {disposition.value}"
    if modifiers:
        line += "/" + ",".join(m.value for m in modifiers)
    return (line + "\n").encode("ascii")


def disposition_notification_body_content(
    final_recipient: str,
    original_recipient: bytes | str,
    original_msg_id: bytes | str,
    disposition: DispositionType,
    action_mode: ActionMode,
    sending_mode: SendingMode,
    modifiers: Iterable[DispositionModifier] = (),
    special: str = "",
) -> bytes:
    """Return the body of a message/disposition-notification part."""
    modifiers = list(modifiers)
    spec = special[:-1] if special.endswith("\n") else special

    parts = [_reporting_ua_field()]
    if original_recipient:
        parts.append(b"Original-Recipient: " + _as_bytes(original_recipient) + b"\n")
    if final_recipient:
        parts.append(
            b"Final-Recipient: rfc822; " + encode_rfc2047_string(final_recipient) + b"\n"
        )
    if original_msg_id:
        parts.append(b"Original-Message-ID: " + _as_bytes(original_msg_id) + b"\n")
    parts.append(_disposition_field(disposition, action_mode, sending_mode, modifiers))

    if disposition is DispositionType.FAILED:
        parts.append(b"Failure: " + encode_rfc2047_string(spec) + b"\n")
    elif DispositionModifier.ERROR in modifiers:
        parts.append(b"Error: " + encode_rfc2047_string(spec) + b"\n")
    elif DispositionModifier.WARNING in modifiers:
        parts.append(b"Warning: " + encode_rfc2047_string(spec) + b"\n")

    return b"".join(parts)


def description_for(
    disposition: DispositionType, modifiers: Iterable[DispositionModifier] = ()
) -> str:
    """Return a human-readable description template for ``disposition``.

    The template holds ``${date}``, ``${to}`` and ``${subject}`` placeholders.
    An unknown disposition yields an empty string.
    """
    try:
        key = DispositionType(disposition)
    except ValueError:
        _log.warning("description_for(): no such disposition type: %r", disposition)
        return ""
    return _DESCRIPTIONS[key]