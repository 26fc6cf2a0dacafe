"""Tests for the WebVTT to SRT converter."""

from pathlib import Path

import pysubs2
import pytest

from vtt2srt.subtitles.converter import (
    Timestamp,
    derive_srt_name,
    format_timestamp,
    parse_timestamp,
    rewrite_timing_line,
    strip_tags,
    transcode,
    vtt_to_srt,
)


def _cues(n: int) -> str:
    blocks = ["WEBVTT"]
    for i in range(n):
        blocks.append(f"00:00:{i:02d}.000 --> 00:00:{i:02d}.500\nLine {i}")
    return "\n\n".join(blocks) + "\n"


def test_voice_tag_and_settings_stripped():
    vtt = "WEBVTT\n\n00:00:01.000 --> 00:00:04.000 align:start\n<v Jane>Hello world</v>\n"
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:04,000\nHello world"


def test_transcode_is_vtt_to_srt():
    assert transcode is vtt_to_srt


def test_short_form_timestamps():
    vtt = "WEBVTT\n\n00:01.500 --> 00:03.250\nShort\n"
    assert vtt_to_srt(vtt) == "1\n00:01,500 --> 00:03,250\nShort"


def test_mixed_long_and_short_forms():
    assert rewrite_timing_line("00:01.500 --> 01:00:03.250") == "00:01,500 --> 01:00:03,250"
    assert rewrite_timing_line("01:00:01.500 --> 00:03.250") == "01:00:01,500 --> 00:03,250"


@pytest.mark.parametrize("n", [1, 3, 12])
def test_emits_one_record_per_cue(n):
    srt = vtt_to_srt(_cues(n))
    records = srt.split("\n\n")
    assert len(records) == n
    assert [r.split("\n")[0] for r in records] == [str(i) for i in range(1, n + 1)]
    assert [r.split("\n")[2] for r in records] == [f"Line {i}" for i in range(n)]


def test_header_and_notes_only_is_empty():
    vtt = "WEBVTT\n\nNOTE first comment\n\nNOTE\nsecond comment\nover two lines\n"
    assert vtt_to_srt(vtt) == ""


def test_empty_document():
    assert vtt_to_srt("") == ""
    assert vtt_to_srt("\n\n\n") == ""


def test_timing_only_cue_dropped_without_gap():
    vtt = (
        "WEBVTT\n\n"
        "00:00:01.000 --> 00:00:02.000\nFirst\n\n"
        "00:00:03.000 --> 00:00:04.000\n\n"
        "00:00:05.000 --> 00:00:06.000\nThird\n"
    )
    assert vtt_to_srt(vtt) == (
        "1\n00:00:01,000 --> 00:00:02,000\nFirst\n\n"
        "2\n00:00:05,000 --> 00:00:06,000\nThird"
    )


def test_block_without_arrow_dropped():
    vtt = (
        "WEBVTT\n\n"
        "STYLE\n::cue { color: red; }\n\n"
        "REGION\nid:fred width:40%\n\n"
        "00:00:01.000 --> 00:00:02.000\nKept\n"
    )
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:02,000\nKept"


def test_cue_identifier_before_timing_line_is_dropped():
    vtt = "WEBVTT\n\nintro-1\n00:00:01.000 --> 00:00:02.000\nHi\n"
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:02,000\nHi"


def test_missing_header_still_converts():
    vtt = "00:00:01.000 --> 00:00:02.000\nNo header\n"
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:02,000\nNo header"


@pytest.mark.parametrize(
    "document",
    [
        "WEBVTT\r\n\r\n00:00:01.000 --> 00:00:02.000\r\nOne\r\nTwo\r\n",
        "WEBVTT\r\r00:00:01.000 --> 00:00:02.000\rOne\rTwo\r",
        "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nOne\nTwo\n",
    ],
    ids=["crlf", "cr", "lf"],
)
def test_line_endings_normalized(document):
    assert vtt_to_srt(document) == "1\n00:00:01,000 --> 00:00:02,000\nOne\nTwo"


def test_byte_order_mark_before_header():
    vtt = "\ufeffWEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi\n"
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:02,000\nHi"


def test_tag_only_line_kept_as_empty_line():
    vtt = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n<i></i>\nAfter\n"
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:02,000\n\nAfter"


def test_already_srt_timestamps_unchanged():
    line = "00:00:01,000 --> 00:00:04,000"
    assert rewrite_timing_line(line) == line
    srt = vtt_to_srt(f"{line}\nText\n")
    assert srt == f"1\n{line}\nText"


def test_rewrite_is_idempotent():
    once = rewrite_timing_line("00:00:05.000 --> 00:00:10.000 align:start size:50%")
    assert once == "00:00:05,000 --> 00:00:10,000"
    assert rewrite_timing_line(once) == once


def test_unparseable_timestamps_kept_verbatim():
    assert rewrite_timing_line("soon --> later maybe") == "soon --> later maybe"
    assert rewrite_timing_line("00:00:01.000 -->") == "00:00:01,000 -->"


def test_arrow_without_spaces():
    assert rewrite_timing_line("00:00:01.000-->00:00:02.000") == "00:00:01,000 --> 00:00:02,000"


@pytest.mark.parametrize(
    "line,expected",
    [
        ("0:00:01.000 --> 0:00:02.000", "0:00:01,000 --> 0:00:02,000"),
        ("9:59:59.999 --> 10:00:00.000", "9:59:59,999 --> 10:00:00,000"),
        ("123:04:05.678 --> 123:04:06.000", "123:04:05,678 --> 123:04:06,000"),
        ("007:00:00.000 --> 007:00:01.000", "007:00:00,000 --> 007:00:01,000"),
    ],
    ids=["one-digit", "one-to-two-digit", "three-digit", "zero-padded"],
)
def test_hour_digits_preserved(line, expected):
    assert rewrite_timing_line(line) == expected


@pytest.mark.parametrize(
    "line,expected",
    [
        ("<v Jane>Hello</v>", "Hello"),
        ("<b>bold</b> and <i>italic</i>", "bold and italic"),
        ("<c.yellow.bg_blue>colour</c>", "colour"),
        ("<00:00:01.500>karaoke <00:00:02.000>words", "karaoke words"),
        ("<ruby>漢<rt>kan</rt></ruby>", "漢kan"),
        ("no markup at all", "no markup at all"),
        ("a < b but > c", "a  c"),
    ],
)
def test_strip_tags(line, expected):
    assert strip_tags(line) == expected


def test_text_whitespace_preserved():
    vtt = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n  indented <b>bold</b>  \nnext\n"
    assert vtt_to_srt(vtt) == "1\n00:00:01,000 --> 00:00:02,000\n  indented bold  \nnext"


@pytest.mark.parametrize(
    "token,expected",
    [
        ("00:00:01.000", Timestamp(0, 0, 1, 0)),
        ("123:04:05.678", Timestamp(123, 4, 5, 678, hour_width=3)),
        ("0:00:01.000", Timestamp(0, 0, 1, 0, hour_width=1)),
        ("01:02.003", Timestamp(None, 1, 2, 3)),
        ("00:00:01,000", Timestamp(0, 0, 1, 0)),
        ("00:01", None),
        ("1.000", None),
        ("00:00:01.0", None),
        ("aa:bb:cc.ddd", None),
    ],
)
def test_parse_timestamp(token, expected):
    assert parse_timestamp(token) == expected


def test_format_timestamp_keeps_shape():
    assert format_timestamp(Timestamp(1, 2, 3, 4)) == "01:02:03,004"
    assert format_timestamp(Timestamp(None, 2, 3, 4)) == "02:03,004"
    assert format_timestamp(Timestamp(5, 2, 3, 4, hour_width=1)) == "5:02:03,004"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("movie.vtt", "movie.srt"),
        ("movie.VTT", "movie.srt"),
        ("movie.Vtt", "movie.srt"),
        ("movie.en.vtt", "movie.en.srt"),
        ("movie.srt", "movie.srt"),
        ("movie.vtt.txt", "movie.vtt.txt"),
        ("vtt", "vtt"),
        ("", ""),
    ],
)
def test_derive_srt_name(name, expected):
    assert derive_srt_name(name) == expected


def test_sample_file(sample_vtt: Path, sample_srt: Path):
    output = vtt_to_srt(sample_vtt.read_text(encoding="utf-8"))
    assert output == sample_srt.read_text(encoding="utf-8").rstrip("\n")


def test_output_loads_with_pysubs2():
    """Converted output is readable by an independent SRT parser."""
    vtt = (
        "WEBVTT\n\n"
        "00:00:01.000 --> 00:00:04.000 align:start\n<v Jane>Hello world</v>\n\n"
        "00:00:04.500 --> 00:00:06.250\nSecond <i>cue</i>\n"
    )
    subs = pysubs2.SSAFile.from_string(vtt_to_srt(vtt), format_="srt")
    assert [e.plaintext for e in subs.events] == ["Hello world", "Second cue"]
    assert subs.events[0].start == 1000
    assert subs.events[1].end == 6250
