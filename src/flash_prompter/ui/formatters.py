from __future__ import annotations

from typing import Optional


def scroll_target(progress: float, max_scroll: float) -> int:
    """Return the scroll offset for a progress ratio."""
    if max_scroll <= 0:
        return 0
    ratio = max(0.0, min(1.0, progress))
    return int(round(max_scroll * ratio))


def line_gap(font_size: float, line_height: float) -> int:
    """Blank rows between text lines for a pixel line height."""
    if font_size <= 0:
        return 0
    return max(0, int(round(line_height / font_size)) - 1)


def spaced_text(content: str, font_size: float, line_height: float) -> str:
    gap = line_gap(font_size, line_height)
    if not gap:
        return content
    return ("\n" * (gap + 1)).join(content.splitlines())


def format_clock(seconds: Optional[float]) -> str:
    if seconds is None:
        return "--:--"
    total_seconds = max(0, int(seconds))
    minutes, secs = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def playback_state_label(*, is_playing: bool, progress: float) -> str:
    if is_playing:
        return "PLAYING"
    if progress >= 1.0:
        return "DONE"
    if progress > 0.0:
        return "PAUSED"
    return "READY"


def render_progress_bar(width: int, ratio: float) -> str:
    if width <= 0:
        return ""
    if width < 3:
        return "=" * width if ratio >= 1.0 else "-" * width
    inner = width - 2
    filled = int(max(0.0, min(1.0, ratio)) * inner)
    return "[" + "=" * filled + "-" * (inner - filled) + "]"


def render_status_line(
    *,
    is_playing: bool,
    progress: float,
    elapsed_seconds: float,
    total_seconds: float,
    words_per_minute: float,
    width: int = 0,
) -> str:
    """Status text, followed by a progress bar filling any spare width."""
    label = playback_state_label(is_playing=is_playing, progress=progress)
    percent = int(max(0.0, min(1.0, progress)) * 100)
    line = (
        f"[ {label.ljust(7)} ] {percent:3d}%  "
        f"{format_clock(elapsed_seconds)} / {format_clock(total_seconds)}  "
        f"{format_wpm(words_per_minute)}"
    )
    bar_width = width - len(line) - 2
    if bar_width < 3:
        return line
    return f"{line}  {render_progress_bar(bar_width, progress)}"


def format_wpm(value: float) -> str:
    return f"{value:g} WPM"


def format_px(value: float) -> str:
    return f"{value:g}px"
