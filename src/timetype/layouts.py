"""Clock text layouts and the ordered layout trial.

Layouts are ``strptime``/``strftime`` patterns. Their literal text is
what :class:`~timetype.errors.UnknownFormatError` reports, so the
constants below are part of the error contract.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from timetype.errors import UnknownFormatError

logger = logging.getLogger(__name__)

CLOCK_LAYOUT = "%H:%M:%S"
CLOCK_MICRO_LAYOUT = "%H:%M:%S.%f"

# Registry order is trial order and diagnostic order.
CLOCK_LAYOUTS: tuple[str, ...] = (CLOCK_LAYOUT, CLOCK_MICRO_LAYOUT)

JSON_LAYOUTS: tuple[str, ...] = (CLOCK_LAYOUT, CLOCK_MICRO_LAYOUT)
SCAN_LAYOUTS: tuple[str, ...] = (CLOCK_LAYOUT, CLOCK_MICRO_LAYOUT)

# Rendered by every encoder; the driver stores clocks in this form.
CLOCK_STORAGE_LAYOUT = CLOCK_MICRO_LAYOUT
CLOCK_DISPLAY_LAYOUT = CLOCK_LAYOUT


def parse_layouts(text: str, layouts: Sequence[str] = CLOCK_LAYOUTS) -> datetime:
    """Parse *text* with the first layout that accepts it.

    Returns a naive ``datetime`` (``strptime`` fills the date fields).
    Raises :class:`UnknownFormatError` holding every ``(layout, error)``
    pair when no layout matches.
    """
    errors: list[Exception] = []
    for layout in layouts:
        try:
            return datetime.strptime(text, layout)
        except ValueError as exc:
            errors.append(exc)

    logger.debug("No clock layout matched", extra={"value": text, "layouts": list(layouts)})
    raise UnknownFormatError(text, layouts, errors)
