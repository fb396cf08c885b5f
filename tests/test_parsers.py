"""Tests for the frame based and SRT record parsers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from subconvert.errors import FrameFieldError, MissingTimingFieldError, SrtBlockError
from subconvert.srt import format_srt_subtitle, iter_blocks, parse_srt_block
from subconvert.txt import format_txt_subtitle, parse_txt_line
from subconvert.models import Subtitle
from subconvert.utils import frames_to_duration


def _ms(value: int) -> timedelta:
    return timedelta(milliseconds=value)


def test_parse_single_line() -> None:
    sub = parse_txt_line("{100}{150}First subtitle")
    assert sub.start == frames_to_duration(100)
    assert sub.end == frames_to_duration(150)
    assert sub.lines == ("First subtitle",)


def test_parse_splits_display_lines() -> None:
    sub = parse_txt_line("{500}{600}Line one|Line two|Line three")
    assert sub.lines == ("Line one", "Line two", "Line three")


@pytest.mark.parametrize(
    "payload, expected",
    [
        ("", ()),
        ("|||", ("", "", "", "")),
        ("a||b|", ("a", "", "b", "")),
        ("First line|Second | with pipe|Third", ("First line", "Second ", " with pipe", "Third")),
    ],
)
def test_parse_payload_edge_cases(payload: str, expected: tuple) -> None:
    assert parse_txt_line("{100}{200}" + payload).lines == expected


def test_parse_zero_and_large_frames() -> None:
    zero = parse_txt_line("{0}{0}Instant subtitle")
    assert zero.start == zero.end == timedelta(0)

    large = parse_txt_line("{100000}{200000}Large frame numbers")
    assert large.start == _ms(100000 * 1001 * 1000 // 24000)
    assert large.end == _ms(200000 * 1001 * 1000 // 24000)


def test_end_before_start_is_passed_through() -> None:
    sub = parse_txt_line("{200}{100}backwards")
    assert sub.end < sub.start


def test_braces_in_text_are_kept() -> None:
    assert parse_txt_line("{1}{2}a {b} c").lines == ("a {b} c",)


def test_invalid_start_frame() -> None:
    with pytest.raises(FrameFieldError, match="failed to parse start frame") as excinfo:
        parse_txt_line("{abc}{200}Invalid start")
    assert excinfo.value.field == "start"


def test_invalid_end_frame() -> None:
    with pytest.raises(FrameFieldError, match="failed to parse end frame") as excinfo:
        parse_txt_line("{100}{xyz}Invalid end")
    assert excinfo.value.field == "end"


@pytest.mark.parametrize("raw", ["{}{10}x", "{1_0}{20}x", "{1.5}{20}x", "{١٢}{20}x", "{ 100 }{150}x", "{100 }{150}x"])
def test_start_frame_must_be_plain_decimal(raw: str) -> None:
    with pytest.raises(FrameFieldError):
        parse_txt_line(raw)


def test_frame_too_large_for_a_duration() -> None:
    with pytest.raises(FrameFieldError, match="failed to parse start frame: frame number out of range") as excinfo:
        parse_txt_line("{3000000000000000}{3000000000000001}x")
    assert excinfo.value.field == "start"
    assert isinstance(excinfo.value.__cause__, OverflowError)

    with pytest.raises(FrameFieldError) as excinfo:
        parse_txt_line("{1}{-3000000000000000}x")
    assert excinfo.value.field == "end"


def test_signed_frames_are_accepted() -> None:
    sub = parse_txt_line("{+24}{-1}signed")
    assert sub.start == frames_to_duration(24)
    assert sub.end == _ms(-41)


@pytest.mark.parametrize(
    "line, field",
    [
        ("", "start"),
        ("no timing at all", "start"),
        ("{100 unterminated", "start"),
        ("{100}", "end"),
        ("{100}text only", "end"),
        ("{100}{200", "end"),
    ],
)
def test_missing_timing_field(line: str, field: str) -> None:
    with pytest.raises(MissingTimingFieldError) as excinfo:
        parse_txt_line(line)
    assert excinfo.value.field == field
    assert f"missing {field} timing field" in str(excinfo.value)


def test_format_txt_rejoins_lines() -> None:
    sub = Subtitle(frames_to_duration(500), frames_to_duration(600), ("First line", "Second line"))
    assert format_txt_subtitle(sub) == "{500}{600}First line|Second line\n"


def test_format_txt_empty_text() -> None:
    sub = Subtitle(frames_to_duration(100), frames_to_duration(150))
    assert format_txt_subtitle(sub) == "{100}{150}\n"


def test_srt_block_parse() -> None:
    sub = parse_srt_block(["105", "00:10:53,987 --> 00:10:58,658", "koniec ludzkiej historii", "osiągnięć naukowych!"])
    assert sub.start == timedelta(minutes=10, seconds=53, milliseconds=987)
    assert sub.end == timedelta(minutes=10, seconds=58, milliseconds=658)
    assert sub.lines == ("koniec ludzkiej historii", "osiągnięć naukowych!")


def test_srt_block_without_text() -> None:
    assert parse_srt_block(["1", "00:00:01,000 --> 00:00:02,000"]).lines == ()


@pytest.mark.parametrize(
    "block",
    [
        ["one", "00:00:01,000 --> 00:00:02,000"],
        ["1", "00:00:01,000 00:00:02,000"],
        ["1", "00:00:01 --> 00:00:02,000"],
    ],
)
def test_srt_block_errors(block: list) -> None:
    with pytest.raises(SrtBlockError):
        parse_srt_block(block)


def test_srt_block_timecode_too_large_for_a_duration() -> None:
    with pytest.raises(SrtBlockError, match="out of range for index 1") as excinfo:
        parse_srt_block(["1", "99999999999999:00:00,000 --> 99999999999999:00:01,000", "x"])
    assert isinstance(excinfo.value.__cause__, OverflowError)


def test_srt_block_missing_timing_line() -> None:
    with pytest.raises(MissingTimingFieldError):
        parse_srt_block(["1"])


def test_iter_blocks_skips_extra_blank_lines() -> None:
    lines = ["", "1", "a", "", "", "2", "b", "  ", "3"]
    assert list(iter_blocks(lines)) == [["1", "a"], ["2", "b"], ["3"]]


def test_format_srt_block() -> None:
    sub = Subtitle(_ms(5120), _ms(6840), ("Hello, World!",))
    assert format_srt_subtitle(sub, 1) == "1\n00:00:05,120 --> 00:00:06,840\nHello, World!\n\n"


def test_format_srt_uses_end_time() -> None:
    sub = Subtitle(_ms(10000), _ms(15000), ("First line", "Second line", "Third line"))
    assert format_srt_subtitle(sub, 7) == (
        "7\n00:00:10,000 --> 00:00:15,000\nFirst line\nSecond line\nThird line\n\n"
    )


def test_format_srt_without_lines() -> None:
    sub = Subtitle(_ms(0), _ms(1500))
    assert format_srt_subtitle(sub, 2) == "2\n00:00:00,000 --> 00:00:01,500\n\n"
