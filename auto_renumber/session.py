"""Live reaction to editor changes: one renumber/reorder pass at a time."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .changes import ChangeAccumulator, EditorLines, pending_lines
from .checkbox import CheckboxReorderer
from .config import RenumberConfig, normalize_config, validate_config
from .editor import Editor
from .exceptions import EditRejectedError
from .models import Position, ScopeBounds
from .renumberer import Renumberer

logger = logging.getLogger(__name__)


class RenumberSession:
    """Engine instance bound to one configuration.

    Reactions are serialized through an `asyncio.Lock`; `notify_change`
    defers a reaction by one loop tick so the host can settle its cursor, and
    coalesces notifications that arrive while one is already scheduled.
    A keystroke with a modifier (ctrl, meta, alt) makes the next reaction a
    no-op.

    Attributes:
        config: Normalized configuration in use.
    """

    def __init__(self, config: RenumberConfig | None = None):
        self._gate = asyncio.Lock()
        self._scheduled: asyncio.Task | None = None
        self._block_changes = False
        self._changes = ChangeAccumulator()
        self.reconfigure(config or RenumberConfig())

    def reconfigure(self, config: RenumberConfig) -> None:
        """Swap in a new configuration, rebuilding the engine components.

        Raises:
            ConfigError: If `config` is invalid.
        """
        validate_config(config)
        self.config = normalize_config(config)
        self._renumberer = Renumberer(self.config.numbering_strategy)
        self._reorderer = CheckboxReorderer(
            sort_to_bottom=self.config.sort_checkboxes_bottom,
            checkboxes_only=self.config.checkbox_scope_checkboxes_only,
        )

    @property
    def renumberer(self) -> Renumberer:
        return self._renumberer

    @property
    def reorderer(self) -> CheckboxReorderer:
        return self._reorderer

    @property
    def changes_blocked(self) -> bool:
        return self._block_changes

    def handle_keystroke(self, ctrl: bool = False, meta: bool = False, alt: bool = False) -> None:
        self._block_changes = ctrl or meta or alt

    def notify_change(self, editor: Editor) -> asyncio.Task | None:
        """Schedule a deferred reaction to an edit.

        Must be called from a running event loop.

        Returns:
            asyncio.Task | None: The scheduled reaction, or None when live
                updates are off or a reaction is already scheduled.
        """
        if not self.config.live_update:
            return None
        if self._scheduled is not None:
            logger.debug("Reaction already scheduled; coalescing change notification")
            return None
        self._scheduled = asyncio.get_running_loop().create_task(self._deferred_react(editor))
        return self._scheduled

    async def _deferred_react(self, editor: Editor) -> bool:
        try:
            await asyncio.sleep(0)
        finally:
            self._scheduled = None
        return await self.run_exclusive(self.react, editor)

    async def run_exclusive(self, action: Callable[..., bool], *args: object) -> bool:
        """Run `action` while holding the reaction gate."""
        async with self._gate:
            return action(*args)

    async def on_paste(self, editor: Editor, start: int, count: int) -> bool:
        """Renumber after the host inserted `count` pasted or dropped lines at `start`."""
        if not (self.config.live_update and self.config.smart_paste):
            return False
        return await self.run_exclusive(self.renumber_inserted, editor, start, count)

    def react(self, editor: Editor) -> bool:
        """React to an edit at the top line of the current selection.

        Runs the checkbox pass first (when enabled); if it moved a line, the
        moved range is renumbered in full, otherwise the edited line is
        renumbered locally. Everything is applied as one edit.

        Returns:
            bool: True when an edit was applied.
        """
        if self._block_changes:
            logger.debug("Skipping reaction after modifier keystroke")
            self._block_changes = False
            return False

        selection = editor.get_selection()
        line = selection.top_line
        lines = pending_lines(editor, self._changes)

        moved: ScopeBounds | None = None
        try:
            if self.config.live_checkbox_update:
                moved = self._reorderer.reorder(lines, line)

            if self.config.live_numbering_update:
                if moved is not None:
                    result = self._renumberer.renumber_range(lines, moved.start, moved.limit)
                else:
                    result = self._renumberer.renumber_from_line(lines, line, local_only=True)
                self._changes.extend(result.changes)

            applied = self._apply(editor)
        finally:
            # Pending writes never outlive the reaction, including when it raises.
            self._changes.clear()
        if applied and moved is not None:
            text = editor.get_line(line)
            editor.set_cursor(Position(line, min(selection.head.ch, len(text))))
        return applied

    def renumber_inserted(self, editor: Editor, start: int, count: int) -> bool:
        """Renumber every block touched by lines inserted at ``[start, start + count)``."""
        if not self.config.live_numbering_update:
            return False
        result = self._renumberer.renumber_range(EditorLines(editor), start, start + count)
        self._changes.extend(result.changes)
        return self._apply(editor)

    def renumber_at_cursor(self, editor: Editor) -> bool:
        """Renumber the whole block under the cursor."""
        line = editor.get_selection().top_line
        result = self._renumberer.renumber_block(EditorLines(editor), line)
        self._changes.extend(result.changes)
        return self._apply(editor)

    def renumber_document(self, editor: Editor) -> bool:
        """Renumber every numbered list in the document."""
        result = self._renumberer.renumber_all(EditorLines(editor))
        self._changes.extend(result.changes)
        return self._apply(editor)

    def _apply(self, editor: Editor) -> bool:
        try:
            return self._changes.apply(editor)
        except EditRejectedError as error:
            # The batch is already dropped; the next edit renumbers again.
            logger.warning("Host rejected renumbering edit: %s", error)
            return False
