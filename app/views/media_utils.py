"""Formatting and geometry helpers shared by media widgets."""


def format_duration(milliseconds: int) -> str:
    """Format duration in milliseconds to MM:SS or HH:MM:SS.

    Args:
        milliseconds: Duration in milliseconds

    Returns:
        str: Formatted duration string
    """
    if milliseconds < 0:
        return "--:--"

    total_seconds = milliseconds // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    else:
        return f"{minutes:02d}:{seconds:02d}"


def visible_fraction(top: int, height: int, view_top: int, view_height: int) -> float:
    """Share (0.0-1.0) of a vertical span [top, top+height) inside the viewport span.

    Args:
        top: Widget top in viewport-content coordinates
        height: Widget height
        view_top: Scroll offset of the viewport
        view_height: Viewport height

    Returns:
        float: Fraction of the widget that is visible
    """
    if height <= 0 or view_height <= 0:
        return 0.0
    overlap = min(top + height, view_top + view_height) - max(top, view_top)
    if overlap <= 0:
        return 0.0
    return min(1.0, overlap / height)
