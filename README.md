# newsmime

Small helpers for Internet mail and Usenet news messages, using only the
standard library.

## Modules

### `newsmime.util`

- `crlf_to_lf(data)` and `lf_to_crlf(data)` convert line endings in
  `bytes`. `lf_to_crlf` leaves input alone when its first line break is
  already CRLF.
- `cached_charset(name)` returns the upper-cased charset name, the same
  object for every spelling of it.
- `is_us_ascii(text)` tells whether a string is plain US-ASCII.
- `is_atext(ch)` and `is_ttext(ch)` test RFC 2822 atext and RFC 2045
  token characters; they accept a one-character `str`, a one-byte
  `bytes` or an `int`.
- `ContentEncoding` lists the Content-Transfer-Encoding values, and
  `name_for_encoding(enc)` gives their names (`"7bit"`,
  `"quoted-printable"`, `"base64"`, ...).
- `unique_string()` and `multipart_boundary()` produce random
  identifiers; the boundary starts with `b"nextPart"`.

### `newsmime.types`

- `AddrSpec(local_part, domain)` with `as_string()`, `as_pretty_string()`
  (which decodes `xn--` domains for display) and `is_empty()`. The local
  part is quoted when it holds characters outside atext.
- `Mailbox(name, addr_spec)` with `address()`, `has_address()`,
  `has_name()`, `pretty_address(quoting)`, `as_7bit_string(charset)` and
  the static `Mailbox.list_to_unicode_string(mailboxes)`. A non-ASCII
  display name is written as a base64 RFC 2047 encoded-word by
  `as_7bit_string`.
- `Quoting` — `NEVER`, `WHEN_NECESSARY`, `ALWAYS` — controls quoting of
  display names in `pretty_address`.
- `Address(display_name, mailbox_list)` holds a mailbox or a named group.

### `newsmime.mdn`

Message disposition notifications (return receipts):

- `disposition_notification_body_content(final_recipient,
  original_recipient, original_msg_id, disposition, action_mode,
  sending_mode, modifiers=(), special="")` builds the body of a
  `message/disposition-notification` part: `Reporting-UA` (with the local
  host name), the recipient and message-id fields when given,
  `Disposition`, and a `Failure`, `Error` or `Warning` field carrying
  `special` where the disposition or modifiers call for it.
- `description_for(disposition)` returns a description template with
  `${date}`, `${to}` and `${subject}` placeholders.
- `encode_rfc2047_string(text, charset)` leaves US-ASCII text as it is
  and otherwise returns one base64 encoded-word.
- Enumerations: `DispositionType`, `DispositionModifier`, `ActionMode`,
  `SendingMode`.

### `newsmime.parsers`

- `MultiPart(src, boundary).parse()` splits a multipart body; results
  are in `parts`, `preamble` and `epilogue`.
- `UUEncoded(src, head).parse()` and `YENCEncoded(src).parse()` find
  binaries embedded in plain news articles. Results are in `bins`,
  `filenames`, `mime_types` (guessed from the file name) and `text` (the
  surrounding article text); `part_nr`, `total_nr` and `is_partial()`
  describe articles that carry one piece of a larger set. For uuencoded
  pieces the part numbers are read from an `n/m` in the `Subject:` line
  of `head`. yEnc data is decoded; uuencoded data is returned as found.

## Installation

```
pip install .
```

## Examples

```python
from newsmime.util import lf_to_crlf, multipart_boundary
from newsmime.types import AddrSpec, Mailbox, Quoting

assert lf_to_crlf(b"a\nb\n") == b"a\r\nb\r\n"
boundary = multipart_boundary()  # b"nextPart..."

mailbox = Mailbox(name="Doe, Jane", addr_spec=AddrSpec("jane", "example.com"))
print(mailbox.pretty_address(Quoting.WHEN_NECESSARY))
# "Doe, Jane" <jane@example.com>
```

```python
from newsmime.mdn import (
    ActionMode,
    DispositionType,
    SendingMode,
    disposition_notification_body_content,
)

body = disposition_notification_body_content(
    "jane@example.com",
    b"",
    b"<1234@example.com>",
    DispositionType.DISPLAYED,
    ActionMode.MANUAL_ACTION,
    SendingMode.SENT_MANUALLY,
)
```

```python
from newsmime.parsers import MultiPart

parser = MultiPart(b"--xyz\nfirst\n--xyz\nsecond\n--xyz--\n", b"xyz")
if parser.parse():
    print(parser.parts)  # [b'first', b'second']
```

## What it does not do

There is no message object, header classes or MIME content tree, and no
parser that reads addresses or headers from text: `Mailbox` and
`AddrSpec` are built from their parts. RFC 2047 support covers encoding
only, always as base64, with no decoding. There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```