import binascii

import pytest

from newsmime.parsers import MultiPart, NonMimeParser, UUEncoded, YENCEncoded


# ---------------------------------------------------------------- multipart

MULTIPART = (
    b"preamble text\n"
    b"--XYZ\n"
    b"Content-Type: text/plain\n\nhello\n"
    b"--XYZ\n"
    b"\nworld\n"
    b"--XYZ--\n"
    b"epilogue\n"
)


def test_multipart_splits_parts():
    mp = MultiPart(MULTIPART, b"XYZ")
    assert mp.parse() is True
    assert mp.parts == [b"Content-Type: text/plain\n\nhello", b"\nworld"]


def test_multipart_preamble_and_epilogue():
    mp = MultiPart(MULTIPART, b"XYZ")
    mp.parse()
    assert mp.preamble == b"preamble text"
    assert mp.epilogue == b"epilogue\n"


def test_multipart_without_boundary():
    mp = MultiPart(b"just some text\nno parts here\n", b"XYZ")
    assert mp.parse() is False
    assert mp.parts == []


def test_multipart_only_closing_boundary():
    mp = MultiPart(b"--XYZ--\nrest\n", b"XYZ")
    assert mp.parse() is False
    assert mp.parts == []


def test_multipart_ignores_boundary_inside_line():
    src = b"text --XYZ inside\n--XYZ\nfirst\n--XYZ--\n"
    mp = MultiPart(src, b"XYZ")
    assert mp.parse() is True
    assert mp.parts == [b"first"]
    assert mp.preamble == b"text --XYZ inside"


def test_multipart_missing_closing_boundary_takes_rest():
    mp = MultiPart(b"--XYZ\nalpha\n--XYZ\nbeta\ngamma\n", b"XYZ")
    assert mp.parse() is True
    assert mp.parts == [b"alpha", b"beta\ngamma\n"]
    assert mp.epilogue == b""


# ---------------------------------------------------------------- uuencode

def _uu_lines(data):
    return b"".join(binascii.b2a_uu(data[i : i + 45]) for i in range(0, len(data), 45))


def _uu_decode(block):
    return b"".join(binascii.a2b_uu(line) for line in block.split(b"\n") if line)


PAYLOAD = bytes(range(135))


def _uu_article():
    return b"Some intro\nbegin 644 file.txt\n" + _uu_lines(PAYLOAD) + b"`\nend\ntrailer\n"


def test_uuencoded_full_binary_round_trip():
    parser = UUEncoded(_uu_article(), b"Subject: a file\n")
    assert parser.parse() is True
    assert len(parser.bins) == 1
    assert _uu_decode(parser.bins[0]) == PAYLOAD


def test_uuencoded_filename_and_mime_type():
    parser = UUEncoded(_uu_article())
    parser.parse()
    assert parser.filenames == [b"file.txt"]
    assert parser.mime_types == [b"text/plain"]
    assert parser.is_partial() is False


def test_uuencoded_text_around_binary():
    parser = UUEncoded(_uu_article())
    parser.parse()
    assert parser.text == b"Some intro\ntrailer\n"


def test_uuencoded_plain_text_is_rejected():
    parser = UUEncoded(b"hello\nthis is just text\nnothing encoded\n")
    assert parser.parse() is False
    assert parser.bins == []


def _split_article():
    return b"".join(b"M" + b"A" * 60 + b"\n" for _ in range(20))


def test_uuencoded_split_article_uses_subject_numbers():
    src = _split_article()
    parser = UUEncoded(src, b"Subject: archive.zip (3/7)\n")
    assert parser.parse() is True
    assert (parser.part_nr, parser.total_nr) == (3, 7)
    assert parser.is_partial() is True
    assert parser.filenames == [b""]
    assert parser.bins == [src]


def test_uuencoded_split_article_without_numbers_is_rejected():
    parser = UUEncoded(_split_article(), b"Subject: archive.zip\n")
    assert parser.parse() is False
    assert parser.is_partial() is False


# ---------------------------------------------------------------- yEnc

def _yenc_encode(data, line=128):
    out = bytearray()
    for start in range(0, len(data), line):
        for byte in data[start : start + line]:
            encoded = (byte + 42) % 256
            if encoded in (0, 10, 13, 61):
                out += bytes((61, (encoded + 64) % 256))
            else:
                out.append(encoded)
        out += b"\n"
    return bytes(out)


DATA = bytes(range(256))


def _yenc_article(size=256, end_size=256):
    return (
        b"hello\n"
        + f"=ybegin line=128 size={size} name=data.bin\n".encode()
        + _yenc_encode(DATA)
        + f"=yend size={end_size} crc32=0\n".encode()
        + b"bye\n"
    )


def test_yenc_decodes_binary():
    parser = YENCEncoded(_yenc_article())
    assert parser.parse() is True
    assert parser.bins == [DATA]
    assert parser.filenames == [b"data.bin"]


def test_yenc_text_around_binary():
    parser = YENCEncoded(_yenc_article())
    parser.parse()
    assert parser.text == b"hello\nbye\n"
    assert parser.is_partial() is False


def test_yenc_trailer_size_mismatch_rejected():
    parser = YENCEncoded(_yenc_article(end_size=255))
    assert parser.parse() is False
    assert parser.bins == []


def test_yenc_declared_size_larger_than_data_rejected():
    parser = YENCEncoded(_yenc_article(size=300, end_size=300))
    assert parser.parse() is False


def test_yenc_missing_name_rejected():
    src = b"=ybegin line=128 size=256\n" + _yenc_encode(DATA) + b"=yend size=256 crc32=0\n"
    assert YENCEncoded(src).parse() is False


def test_yenc_multipart_piece():
    src = (
        b"=ybegin part=2 total=5 line=128 size=1000 name=x.bin\n"
        b"=ypart begin=1 end=256\n"
        + _yenc_encode(DATA)
        + b"=yend size=256 part=2 crc32=0\n"
    )
    parser = YENCEncoded(src)
    assert parser.parse() is True
    assert parser.bins == [DATA]
    assert (parser.part_nr, parser.total_nr) == (2, 5)
    assert parser.is_partial() is True


def test_yenc_no_marker():
    parser = YENCEncoded(b"plain article body\n")
    assert parser.parse() is False
    assert parser.text == b""


@pytest.mark.parametrize(
    ("part_nr", "total_nr", "expected"),
    [(-1, -1, False), (1, 1, False), (2, 4, True), (3, -1, False)],
)
def test_non_mime_parser_is_partial(part_nr, total_nr, expected):
    parser = NonMimeParser(b"")
    parser.part_nr = part_nr
    parser.total_nr = total_nr
    assert parser.is_partial() is expected