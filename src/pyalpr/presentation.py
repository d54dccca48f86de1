"""Pure formatting of scan state for an on-screen overlay.

Nothing here draws; hosts render the returned lines and colours.
"""

from __future__ import annotations

from dataclasses import dataclass

from pyalpr.models.result import ScanResult
from pyalpr.models.status import AlprStatus, DisplayColor

_STATUS_COLORS: dict[AlprStatus, DisplayColor] = {
    AlprStatus.CLEAN: DisplayColor.LIGHT_GREEN,
    AlprStatus.NO_REGISTRATION: DisplayColor.YELLOW,
    AlprStatus.EXPIRED_REGISTRATION: DisplayColor.YELLOW,
    AlprStatus.NO_INSURANCE: DisplayColor.YELLOW,
    AlprStatus.EXPIRED_INSURANCE: DisplayColor.YELLOW,
    AlprStatus.STOLEN: DisplayColor.RED,
    AlprStatus.WANTED: DisplayColor.RED,
    AlprStatus.SUSPENDED_LICENSE: DisplayColor.RED,
    AlprStatus.REVOKED_LICENSE: DisplayColor.RED,
    AlprStatus.MULTIPLE_HITS: DisplayColor.ORANGE,
    AlprStatus.INCARCERATED: DisplayColor.PURPLE,
}


def status_color(status: AlprStatus) -> DisplayColor:
    return _STATUS_COLORS.get(status, DisplayColor.WHITE)


@dataclass(frozen=True, slots=True)
class DisplayLine:
    text: str
    color: DisplayColor


def format_result(label: str, result: ScanResult | None) -> DisplayLine:
    """``"FRONT: ABC123 [12m] STOLEN"``, or ``"FRONT: ---"`` with no target."""
    if result is None:
        return DisplayLine(f"{label}: ---", DisplayColor.WHITE)
    text = f"{label}: {result.plate} [{round(result.distance)}m]"
    if result.alert:
        text = f"{text} {result.alert}"
    return DisplayLine(text, status_color(result.status))


def format_footer(toggle_key: str, enabled: bool) -> DisplayLine:
    if enabled:
        return DisplayLine(f"{toggle_key}: ACTIVE", DisplayColor.LIGHT_GREEN)
    return DisplayLine(f"{toggle_key}: OFF", DisplayColor.RED)


def overlay_lines(
    front: ScanResult | None,
    rear: ScanResult | None,
    *,
    toggle_key: str,
    enabled: bool,
) -> list[DisplayLine]:
    return [
        format_result("FRONT", front),
        format_result("REAR", rear),
        format_footer(toggle_key, enabled),
    ]
