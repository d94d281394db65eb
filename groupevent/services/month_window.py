#!/usr/bin/env python3
"""
Month Window Expansion
Grows the materialised month window as the calendar is scrolled toward either
edge, one fixed step at a time and at most one expansion in flight per edge.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from groupevent.models.calendar_models import DEFAULT_WINDOW, MonthWindow

TOP = 'top'
BOTTOM = 'bottom'


@dataclass(frozen=True)
class ScrollMetrics:
    """Scroll position of the calendar, in the consumer's units (pixels)."""
    offset: float  # distance scrolled from the top of the content
    viewport_height: float
    content_height: float

    @property
    def distance_from_top(self) -> float:
        return self.offset

    @property
    def distance_from_bottom(self) -> float:
        return self.content_height - (self.offset + self.viewport_height)


@dataclass(frozen=True)
class ExpansionDecision:
    """Outcome of one scroll event."""
    edge: Optional[str]  # TOP, BOTTOM, or None for no change
    window: MonthWindow
    previous_window: MonthWindow
    scroll_offset: float = 0.0  # offset at the time a top expansion was decided

    @property
    def expanded(self) -> bool:
        return self.edge is not None

    @property
    def added_offsets(self) -> range:
        """Month offsets materialised by this expansion."""
        if self.edge == TOP:
            return range(self.window.start, self.previous_window.start)
        if self.edge == BOTTOM:
            return range(self.previous_window.end, self.window.end)
        return range(0)


class MonthWindowExpander:
    """
    Decides when to widen the month window.

    An edge expands by `step` months when the scroll distance to that edge is
    below `threshold` and the window has not reached its bound. Once an edge
    has expanded it stays locked until `settle()` is called for it, so repeated
    scroll events fired before the new months are laid out change nothing.
    """

    def __init__(self, window: MonthWindow = DEFAULT_WINDOW, threshold: float = 1000.0,
                 step: int = 3, min_start: int = -50, max_end: int = 50):
        if step <= 0:
            raise ValueError(f"Expansion step must be positive, got {step}")
        self.window = window
        self.threshold = threshold
        self.step = step
        self.min_start = min_start
        self.max_end = max_end
        self._in_flight: Dict[str, bool] = {TOP: False, BOTTOM: False}
        self._pending_offset: Optional[float] = None

    def is_in_flight(self, edge: str) -> bool:
        return self._in_flight[edge]

    def on_scroll(self, metrics: ScrollMetrics) -> ExpansionDecision:
        """
        Handle one scroll event.

        Args:
            metrics: Current scroll position and content size

        Returns:
            ExpansionDecision; when an edge expanded, `window` is the new window
        """
        previous = self.window

        if (not self._in_flight[TOP]
                and metrics.distance_from_top < self.threshold
                and self.window.start > self.min_start):
            new_start = max(self.window.start - self.step, self.min_start)
            self.window = MonthWindow(new_start, self.window.end)
            self._in_flight[TOP] = True
            self._pending_offset = metrics.offset
            return ExpansionDecision(TOP, self.window, previous, scroll_offset=metrics.offset)

        if (not self._in_flight[BOTTOM]
                and metrics.distance_from_bottom < self.threshold
                and self.window.end < self.max_end):
            new_end = min(self.window.end + self.step, self.max_end)
            self.window = MonthWindow(self.window.start, new_end)
            self._in_flight[BOTTOM] = True
            return ExpansionDecision(BOTTOM, self.window, previous)

        return ExpansionDecision(None, self.window, previous)

    def settle(self, edge: str, added_height: float = 0.0) -> Optional[float]:
        """
        Mark an expansion as laid out and release the edge.

        Args:
            edge: TOP or BOTTOM
            added_height: Height of the months inserted above the viewport

        Returns:
            For TOP, the scroll offset that keeps the same content in view
            (offset at decision time + added_height); None otherwise or when
            nothing was pending.
        """
        if edge not in self._in_flight:
            raise ValueError(f"Unknown edge: {edge}")
        self._in_flight[edge] = False
        if edge != TOP or self._pending_offset is None:
            return None
        restored = self._pending_offset + added_height
        self._pending_offset = None
        return restored

    def reset(self, window: MonthWindow = DEFAULT_WINDOW) -> None:
        self.window = window
        self._in_flight = {TOP: False, BOTTOM: False}
        self._pending_offset = None
