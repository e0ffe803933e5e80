from __future__ import annotations

import pytest

from flash_prompter.ui.formatters import (
    format_clock,
    format_px,
    format_wpm,
    line_gap,
    playback_state_label,
    render_progress_bar,
    render_status_line,
    scroll_target,
    spaced_text,
)


@pytest.mark.parametrize(
    ("progress", "max_scroll", "expected"),
    [
        (0.0, 100, 0),
        (0.5, 100, 50),
        (1.0, 100, 100),
        (1.5, 100, 100),
        (-0.2, 100, 0),
        (0.5, 0, 0),
    ],
)
def test_scroll_target(progress: float, max_scroll: float, expected: int) -> None:
    assert scroll_target(progress, max_scroll) == expected


def test_line_gap_from_pixel_sizes() -> None:
    assert line_gap(34, 48) == 0
    assert line_gap(20, 96) == 4
    assert line_gap(0, 48) == 0


def test_spaced_text_inserts_blank_rows() -> None:
    assert spaced_text("a\nb", 34, 48) == "a\nb"
    assert spaced_text("a\nb", 20, 60) == "a\n\n\nb"


def test_format_clock() -> None:
    assert format_clock(None) == "--:--"
    assert format_clock(-3) == "00:00"
    assert format_clock(65.9) == "01:05"
    assert format_clock(3725) == "01:02:05"


@pytest.mark.parametrize(
    ("playing", "progress", "expected"),
    [
        (True, 0.3, "PLAYING"),
        (False, 1.0, "DONE"),
        (False, 0.3, "PAUSED"),
        (False, 0.0, "READY"),
    ],
)
def test_playback_state_label(playing: bool, progress: float, expected: str) -> None:
    assert playback_state_label(is_playing=playing, progress=progress) == expected


def test_render_progress_bar() -> None:
    assert render_progress_bar(0, 0.5) == ""
    assert render_progress_bar(2, 1.0) == "=="
    assert render_progress_bar(6, 0.5) == "[==--]"
    assert render_progress_bar(6, 3.0) == "[====]"


def test_render_status_line() -> None:
    line = render_status_line(
        is_playing=True,
        progress=0.5,
        elapsed_seconds=5.0,
        total_seconds=10.0,
        words_per_minute=60,
    )
    assert line == "[ PLAYING ]  50%  00:05 / 00:10  60 WPM"


def test_render_status_line_appends_bar_in_spare_width() -> None:
    base = "[ PAUSED  ]  50%  00:05 / 00:10  60 WPM"
    line = render_status_line(
        is_playing=False,
        progress=0.5,
        elapsed_seconds=5.0,
        total_seconds=10.0,
        words_per_minute=60,
        width=len(base) + 8,
    )
    assert line == base + "  [==--]"


def test_render_status_line_skips_bar_when_narrow() -> None:
    line = render_status_line(
        is_playing=False,
        progress=0.0,
        elapsed_seconds=0.0,
        total_seconds=10.0,
        words_per_minute=60,
        width=20,
    )
    assert line.endswith("60 WPM")


def test_setting_labels() -> None:
    assert format_wpm(65) == "65 WPM"
    assert format_px(34) == "34px"
    assert format_px(72.5) == "72.5px"
