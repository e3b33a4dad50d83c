"""Marker-delimited block scanner.

Lines starting with a marker open and close blocks alternately; there is
no nesting. The scanner is a small state machine driven by a transition
table keyed on (state, line-is-marker).
"""

import logging
from enum import Enum
from typing import Iterable, Iterator

from swagger_extract.parser.models import Block

logger = logging.getLogger(__name__)

FENCE = "```"
COMPONENT_MARKER = "$$$"


class ScanState(Enum):
    IDLE = "idle"
    CAPTURING_LABEL = "capturing_label"  # open line seen, no body line yet
    CAPTURING_BODY = "capturing_body"


class _Action(Enum):
    SKIP = "skip"
    OPEN = "open"
    APPEND = "append"
    CLOSE = "close"


TRANSITIONS: dict[tuple[ScanState, bool], tuple[ScanState, _Action]] = {
    (ScanState.IDLE, False): (ScanState.IDLE, _Action.SKIP),
    (ScanState.IDLE, True): (ScanState.CAPTURING_LABEL, _Action.OPEN),
    (ScanState.CAPTURING_LABEL, False): (ScanState.CAPTURING_BODY, _Action.APPEND),
    (ScanState.CAPTURING_LABEL, True): (ScanState.IDLE, _Action.CLOSE),
    (ScanState.CAPTURING_BODY, False): (ScanState.CAPTURING_BODY, _Action.APPEND),
    (ScanState.CAPTURING_BODY, True): (ScanState.IDLE, _Action.CLOSE),
}


class BlockScanner:
    """Feeds lines one at a time and reports each block as it closes."""

    def __init__(self, marker: str = FENCE):
        self.marker = marker
        self.state = ScanState.IDLE
        self._label = ""
        self._body: list[str] = []

    @property
    def in_scope(self) -> bool:
        return self.state is not ScanState.IDLE

    def feed(self, line: str) -> Block | None:
        """Advance by one line. Returns the block closed by this line, if any."""
        self.state, action = TRANSITIONS[(self.state, line.startswith(self.marker))]

        if action is _Action.OPEN:
            self._label = line.replace(self.marker, "", 1).strip()
            self._body = []
        elif action is _Action.APPEND:
            self._body.append(line + "\n")
        elif action is _Action.CLOSE:
            return Block(label=self._label, body="".join(self._body))
        return None

    def finish(self) -> None:
        """Apply the end-of-input rule: an unterminated block is dropped."""
        if self.in_scope:
            logger.debug(
                "Discarding unterminated %r block %r (%d lines)",
                self.marker, self._label, len(self._body),
            )
        self.state = ScanState.IDLE
        self._label = ""
        self._body = []


def scan_blocks(lines: Iterable[str], marker: str = FENCE) -> Iterator[Block]:
    """Yield every closed block in document order."""
    scanner = BlockScanner(marker)
    for line in lines:
        block = scanner.feed(line)
        if block is not None:
            yield block
    scanner.finish()
