"""Parsers for multipart bodies and for uuencoded or yEnc-encoded articles."""

from __future__ import annotations

import mimetypes
import re

__all__ = ["MultiPart", "NonMimeParser", "UUEncoded", "YENCEncoded"]

_PART_NUMBERS = re.compile(rb"[0-9]+/[0-9]+")
_INTEGER = re.compile(rb"\s*[+-]?[0-9]+\s*")
_DEFAULT_MIME_TYPE = b"application/octet-stream"


def _mid(data: bytes, pos: int, length: int) -> bytes:
    """Return ``length`` bytes from ``pos``; a negative length means "to the end"."""
    if length < 0:
        return data[pos:]
    return data[pos : pos + length]


def _to_int(data: bytes) -> int:
    """Parse a decimal integer the lenient way header values are read; 0 on failure."""
    if not _INTEGER.fullmatch(data):
        return 0
    value = int(data)
    if not -(2**31) <= value < 2**31:
        return 0
    return value


def _mime_type_for(file_name: bytes) -> bytes:
    guessed, _ = mimetypes.guess_type(file_name.decode("utf-8", errors="replace"), strict=False)
    return guessed.encode("ascii") if guessed else _DEFAULT_MIME_TYPE


def _extract_header(head: bytes, name: bytes) -> bytes | None:
    """Return the unfolded value of header ``name`` in ``head``, or None if absent."""
    prefix = name.lower() + b":"
    lines = head.split(b"\n")
    for index, line in enumerate(lines):
        if not line.lower().startswith(prefix):
            continue
        value = [line[len(prefix) :].rstrip(b"\r")]
        for continuation in lines[index + 1 :]:
            if not continuation[:1] in (b" ", b"\t"):
                break
            value.append(continuation.rstrip(b"\r"))
        return b"".join(value).strip()
    return None


class MultiPart:
    """Splits the body of a multipart entity at its boundary lines."""

    def __init__(self, src: bytes, boundary: bytes) -> None:
        self.src = bytes(src)
        self.boundary = bytes(boundary)
        self.parts: list[bytes] = []
        self.preamble = b""
        self.epilogue = b""

    def parse(self) -> bool:
        """Split the source; return True if at least one part was found."""
        src = self.src
        delimiter = b"--" + self.boundary
        blen = len(delimiter)
        self.parts = []
        pos1 = 0
        pos2 = 0

        # Find the first boundary that starts a line.
        while True:
            pos1 = src.find(delimiter, pos1)
            if pos1 == -1 or pos1 == 0 or src[pos1 - 1 : pos1] == b"\n":
                break
            pos1 += blen

        if pos1 > -1:
            pos1 += blen
            if src[pos1 : pos1 + 2] == b"--":
                # The only boundary is the closing one: nothing to split.
                pos1 = -1
            elif pos1 - blen > 1:
                self.preamble = src[: pos1 - blen - 1]

        while pos1 > -1 and pos2 > -1:
            pos1 = src.find(b"\n", pos1)
            if pos1 == -1:
                break
            pos1 += 1
            pos2 = pos1
            while True:
                pos2 = src.find(delimiter, pos2)
                if pos2 == -1 or src[pos2 - 1 : pos2] == b"\n":
                    break
                pos2 += blen

            if pos2 == -1:
                self.parts.append(src[pos1:])
                break

            # The line break before a boundary belongs to the boundary.
            self.parts.append(_mid(src, pos1, pos2 - pos1 - 1))
            pos2 += blen
            if src[pos2 : pos2 + 2] == b"--":
                pos1 = src.find(b"\n", pos2 + 2)
                if pos1 > -1:
                    self.epilogue = src[pos1 + 1 :]
                break
            pos1 = pos2

        return bool(self.parts)


class NonMimeParser:
    """Common state of the parsers for binaries embedded in plain articles."""

    def __init__(self, src: bytes) -> None:
        self.src = bytes(src)
        self.bins: list[bytes] = []
        self.filenames: list[bytes] = []
        self.mime_types: list[bytes] = []
        self.text = b""
        self.part_nr = -1
        self.total_nr = -1

    def is_partial(self) -> bool:
        """Return True if the binary is one piece of a multi-article set."""
        return self.part_nr > -1 and self.total_nr > -1 and self.total_nr != 1


def _find_uuencode_begin(data: bytes, start: int) -> int:
    idx = start
    while True:
        idx = data.find(b"begin ", idx)
        if idx < 0 or idx + 9 >= len(data):
            return -1
        if data[idx + 6 : idx + 9].isdigit():
            return idx
        idx += 6


class UUEncoded(NonMimeParser):
    """Finds uuencoded binaries in an article body."""

    def __init__(self, src: bytes, head: bytes = b"") -> None:
        super().__init__(src)
        self.head = bytes(head)

    def parse(self) -> bool:
        """Extract the binaries; return True if any (or a partial one) was found."""
        src = self.src
        current = 0
        first_iteration = True

        while True:
            uu_start = current
            line_count = 0
            m_count = 0
            contains_begin = False
            contains_end = False

            begin_pos = _find_uuencode_begin(src, current)
            if begin_pos > -1 and (begin_pos == 0 or src[begin_pos - 1 : begin_pos] == b"\n"):
                contains_begin = True
                uu_start = src.find(b"\n", begin_pos)
                if uu_start == -1:
                    break
                uu_start += 1
            else:
                begin_pos = current

            end_pos = -1
            if contains_begin:
                end_pos = src.find(b"\nend", uu_start - 1 if uu_start > 0 else 0)
            if end_pos == -1:
                end_pos = len(src)
            else:
                contains_end = True

            if not ((contains_begin and contains_end) or first_iteration):
                break

            # Nearly every line of uuencoded data starts with 'M'.
            idx = uu_start
            while idx < end_pos:
                if src[idx] == 0x0A:
                    line_count += 1
                    if idx + 1 < end_pos and src[idx + 1] == 0x4D:
                        idx += 1
                        m_count += 1
                    if line_count - m_count > 10:
                        break
                idx += 1

            complete = contains_begin and contains_end
            if m_count == 0 or line_count - m_count > 10 or (not complete and m_count < 15):
                break

            subject = _extract_header(self.head, b"Subject")
            if not complete and subject is not None:
                match = _PART_NUMBERS.search(subject)
                if match is None:
                    break
                number, total = match.group(0).split(b"/", 1)
                self.part_nr = _to_int(number)
                self.total_nr = _to_int(total)

            if begin_pos > 0:
                self.text += src[current:begin_pos]

            if contains_begin:
                file_name = _mid(src, begin_pos + 10, uu_start - begin_pos - 11)
            else:
                file_name = b""
            self.filenames.append(file_name)
            self.bins.append(src[uu_start : end_pos + 1])
            self.mime_types.append(_mime_type_for(file_name))
            first_iteration = False

            following = src.find(b"\n", end_pos + 1)
            if following == -1:
                break
            current = following + 1

        if self.bins or self.is_partial():
            self.text += src[current:]
            return True
        return False


def _yenc_meta(meta: bytes, name: bytes) -> int | None:
    """Return the integer value of ``name=`` in a yEnc header line, or None."""
    pos = meta.find(name + b"=")
    if pos < 0:
        return None
    ends = [meta.find(sep, pos) for sep in (b" ", b"\r", b"\t", b"\n")]
    found = [e for e in ends if e >= 0]
    end = min(found) if found else -1
    if end < 0:
        return None
    start = meta.rfind(b"=", 0, end + 1) + 1
    if start < end and meta[start : start + 1].isdigit():
        return _to_int(meta[start:end])
    return None


class YENCEncoded(NonMimeParser):
    """Finds yEnc-encoded binaries in an article body."""

    def parse(self) -> bool:
        """Decode the binaries; return True if at least one was found."""
        src = self.src
        current = 0

        while True:
            begin_pos = src.find(b"=ybegin ", current)
            if not (begin_pos > -1 and (begin_pos == 0 or src[begin_pos - 1 : begin_pos] == b"\n")):
                break
            yenc_start = src.find(b"\n", begin_pos)
            if yenc_start == -1:
                break
            yenc_start += 1
            contains_part = src.startswith(b"=ypart", yenc_start)
            if contains_part:
                yenc_start = src.find(b"\n", yenc_start)
                if yenc_start == -1:
                    break
                yenc_start += 1

            # File names may hold any character up to the end of the line.
            meta = src[begin_pos:yenc_start]
            name_pos = meta.find(b"name=")
            if name_pos == -1:
                break
            eol = meta.find(b"\r", name_pos)
            if eol == -1:
                eol = meta.find(b"\n", name_pos)
            if eol == -1:
                break
            file_name = meta[name_pos + 5 : eol]

            line_size = _yenc_meta(meta, b"line")
            if line_size is None:
                break
            size = _yenc_meta(meta, b"size")
            if size is None:
                break

            if contains_part:
                part = _yenc_meta(meta, b"part")
                if part is None:
                    break
                self.part_nr = part
                part_begin = _yenc_meta(meta, b"begin")
                part_end = _yenc_meta(meta, b"end")
                if part_begin is None or part_end is None:
                    break
                total = _yenc_meta(meta, b"total")
                self.total_nr = total if total is not None else part + 1
                if size == part_end - part_begin + 1:
                    self.total_nr = 1
                else:
                    size = part_end - part_begin + 1

            binary = bytearray(max(size, 0))
            written = 0
            pos = yenc_start
            length = len(src)
            line_start = True
            line_length = 0
            contains_end = False
            while pos < length:
                ch = src[pos]
                if ch == 0x0D:
                    if line_length != line_size and written != size:
                        break
                    pos += 1
                elif ch == 0x0A:
                    line_start = True
                    line_length = 0
                    pos += 1
                else:
                    if ch == 0x3D:
                        if pos + 1 >= length:
                            break
                        ch = src[pos + 1]
                        if line_start and ch == 0x79:
                            contains_end = True
                            break
                        pos += 2
                        if written >= size:
                            break
                        binary[written] = (ch - 106) % 256
                    else:
                        if written >= size:
                            break
                        binary[written] = (ch - 42) % 256
                        pos += 1
                    written += 1
                    line_length += 1
                    line_start = False

            if not contains_end or written != size:
                break

            eol = src.find(b"\n", pos)
            if eol == -1:
                break
            if _yenc_meta(src[pos:eol], b"size") != size:
                break

            self.filenames.append(file_name)
            self.mime_types.append(_mime_type_for(file_name))
            self.bins.append(bytes(binary))

            if begin_pos > 0:
                self.text += src[current:begin_pos]
            current = eol + 1

        if self.bins:
            self.text += src[current:]
            return True
        return False