"""Address types: addr-spec, mailbox and address (RFC 2822, section 3.4)."""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass, field

from newsmime.util import is_atext, is_us_ascii

__all__ = ["AddrSpec", "Quoting", "Mailbox", "Address"]


def _from_ace(domain: str) -> str:
    """Decode an internationalised domain name for display, if it has one."""
    if "xn--" not in domain:
        return domain
    try:
        return domain.encode("ascii").decode("idna")
    except (UnicodeError, ValueError):
        return domain


def _addr_spec_as_string(spec: AddrSpec, pretty: bool) -> str:
    if spec.is_empty():
        return ""
    needs_quotes = False
    chars = []
    for ch in spec.local_part:
        if ch == "." or is_atext(ch):
            chars.append(ch)
            continue
        needs_quotes = True
        if ch in '\\"':
            chars.append("\\")
        chars.append(ch)
    result = "".join(chars)
    if needs_quotes:
        result = f'"{result}"'
    domain = _from_ace(spec.domain) if pretty else spec.domain
    return f"{result}@{domain}" if domain else result


def _add_quotes(text: str, force: bool) -> str:
    """Quote ``text`` as a quoted-string when needed or when forced."""
    needs_quotes = False
    chars = []
    for ch in text:
        if ch in '\\"':
            needs_quotes = True
            chars.append("\\")
        elif ch != " " and not is_atext(ch):
            needs_quotes = True
        chars.append(ch)
    escaped = "".join(chars)
    if needs_quotes or force:
        return f'"{escaped}"'
    return escaped


def _encode_word(text: str, charset: bytes | str) -> bytes:
    """Encode ``text`` as a single RFC 2047 base64 encoded-word."""
    cs = charset.decode("ascii") if isinstance(charset, (bytes, bytearray)) else charset
    cs = cs or "utf-8"
    payload = base64.b64encode(text.encode(cs)).decode("ascii")
    return f"=?{cs}?B?{payload}?=".encode("ascii")


@dataclass
class AddrSpec:
    """An addr-spec: local part and domain of an e-mail address."""

    local_part: str = ""
    domain: str = ""

    def as_string(self) -> str:
        """Return the address, quoting the local part where needed."""
        return _addr_spec_as_string(self, False)

    def as_pretty_string(self) -> str:
        """Like :meth:`as_string`, but with internationalised domains decoded."""
        return _addr_spec_as_string(self, True)

    def is_empty(self) -> bool:
        """Return True if both local part and domain are empty."""
        return not self.local_part and not self.domain


class Quoting(enum.Enum):
    """How display names are quoted."""

    NEVER = 0
    WHEN_NECESSARY = 1
    ALWAYS = 2


@dataclass
class Mailbox:
    """An (e-mail address, display name) pair."""

    name: str = ""
    addr_spec: AddrSpec = field(default_factory=AddrSpec)

    def address(self) -> bytes:
        """Return the address without angle brackets."""
        return _addr_spec_as_string(self.addr_spec, False).encode("latin-1", errors="replace")

    def has_address(self) -> bool:
        """Return True if this mailbox has an address."""
        return not self.addr_spec.is_empty()

    def has_name(self) -> bool:
        """Return True if this mailbox has a display name."""
        return bool(self.name)

    def pretty_address(self, quoting: Quoting = Quoting.NEVER) -> str:
        """Return the mailbox formatted for display."""
        if not self.has_name():
            return self.address().decode("latin-1")
        text = self.name
        if quoting is not Quoting.NEVER:
            text = _add_quotes(text, quoting is Quoting.ALWAYS)
        if self.has_address():
            text += f" <{self.address().decode('latin-1')}>"
        return text

    def as_7bit_string(self, charset: bytes | str = b"utf-8") -> bytes:
        """Return a 7-bit transport representation, encoding the name with ``charset``."""
        if not self.has_name():
            return self.address()
        if is_us_ascii(self.name):
            result = _add_quotes(self.name, False).encode("latin-1")
        else:
            result = _encode_word(self.name, charset)
        if self.has_address():
            result += b" <" + self.address() + b">"
        return result

    @staticmethod
    def list_to_unicode_string(mailboxes: list[Mailbox]) -> str:
        """Return the mailboxes as one comma-separated display string."""
        return ", ".join(mbox.pretty_address() for mbox in mailboxes)


@dataclass
class Address:
    """An address: either a single mailbox or a named group of mailboxes."""

    display_name: str = ""
    mailbox_list: list[Mailbox] = field(default_factory=list)