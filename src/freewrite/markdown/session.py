"""Editor session: reentrancy state machine and configuration swaps.

Hosts route every text/selection notification and list keystroke through
an :class:`EditorSession`. While the host applies an edit the session
asked for (``self_edit``) or pushes externally changed text into the view
(``external_edit``), echoed notifications are suppressed instead of
triggering a recursive pass.
"""


import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum

from freewrite.config import DEFAULT_STYLE_CONFIG, StyleConfig
from freewrite.ranges import TextRange

from .compositor import Highlighter, HighlightResult
from .lists import EditBatch, continue_list, indent_lines

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    """Lifecycle states of an editor session."""

    IDLE = "idle"
    APPLYING_SELF_EDIT = "applying_self_edit"
    AWAITING_EXTERNAL_EDIT = "awaiting_external_edit"


class SessionStateError(RuntimeError):
    """Raised on a transition the session state machine does not allow."""


_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset(
        {SessionState.APPLYING_SELF_EDIT, SessionState.AWAITING_EXTERNAL_EDIT}
    ),
    SessionState.APPLYING_SELF_EDIT: frozenset({SessionState.IDLE}),
    SessionState.AWAITING_EXTERNAL_EDIT: frozenset({SessionState.IDLE}),
}


class EditorSession:
    """Per-editor state shared across highlight passes."""

    def __init__(
        self,
        config: StyleConfig = DEFAULT_STYLE_CONFIG,
        highlighter: Highlighter | None = None,
    ) -> None:
        """Start idle with an initial configuration."""
        self._config = config
        self._state = SessionState.IDLE
        self._pending_reset = False
        self._last_key: tuple[str, TextRange | None, StyleConfig] | None = None
        self._last_result: HighlightResult | None = None
        self.highlighter = highlighter or Highlighter()

    @property
    def state(self) -> SessionState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def config(self) -> StyleConfig:
        """Return the configuration the next pass will read."""
        return self._config

    def _transition(self, target: SessionState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise SessionStateError(
                f"Cannot move from {self._state.value} to {target.value}"
            )
        self._state = target

    @contextmanager
    def self_edit(self) -> Iterator[None]:
        """Mark the block where the host applies an edit this session requested."""
        self._transition(SessionState.APPLYING_SELF_EDIT)
        try:
            yield
        finally:
            self._transition(SessionState.IDLE)

    @contextmanager
    def external_edit(self) -> Iterator[None]:
        """Mark the block where the host replaces the text from outside."""
        self._transition(SessionState.AWAITING_EXTERNAL_EDIT)
        try:
            yield
        finally:
            self._transition(SessionState.IDLE)

    def update_config(self, config: StyleConfig) -> None:
        """Swap in a new configuration between passes.

        Leaving typewriter mode raises the pending-reset flag so the host can
        restore a normal scroll position.
        """
        if self._state is SessionState.APPLYING_SELF_EDIT:
            raise SessionStateError("Configuration cannot change while applying an edit")
        if self._config.typewriter_enabled and not config.typewriter_enabled:
            self._pending_reset = True
        self._config = config

    def take_pending_reset(self) -> bool:
        """Return and clear the typewriter-exit reset flag."""
        pending = self._pending_reset
        self._pending_reset = False
        return pending

    def highlight(self, text: str, selection: TextRange | None) -> HighlightResult:
        """Run a highlight pass, reusing the last result for identical input."""
        key = (text, selection, self._config)
        if self._last_key == key and self._last_result is not None:
            return self._last_result
        result = self.highlighter.highlight(text, selection, self._config)
        self._last_key = key
        self._last_result = result
        return result

    def on_text_changed(
        self, text: str, selection: TextRange | None
    ) -> HighlightResult | None:
        """Highlight after a user edit; ``None`` when the change is an echo."""
        if self._state is not SessionState.IDLE:
            logger.debug("Suppressed text change notification in state %s", self._state)
            return None
        return self.highlight(text, selection)

    def on_selection_changed(
        self, text: str, selection: TextRange | None
    ) -> HighlightResult | None:
        """Highlight after a caret move; ``None`` when the change is an echo."""
        if self._state is not SessionState.IDLE:
            logger.debug("Suppressed selection notification in state %s", self._state)
            return None
        return self.highlight(text, selection)

    def handle_newline(self, text: str, affected: TextRange) -> EditBatch | None:
        """Return list-continuation edits for a typed newline, if any."""
        if self._state is not SessionState.IDLE:
            return None
        return continue_list(text, affected)

    def handle_tab(
        self, text: str, selection: TextRange, outdent: bool = False
    ) -> EditBatch | None:
        """Return indentation edits for Tab / Shift-Tab, if any."""
        if self._state is not SessionState.IDLE:
            return None
        return indent_lines(text, selection, outdent)
