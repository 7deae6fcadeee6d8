"""
Autosave Controller - debounced saving of an editable text field.

Each edit restarts a one-second timer; when the timer fires and the text
is not blank, the text is saved. Everything runs on one asyncio event loop,
so edits, timer expiry and save completion never overlap.

States:
    IDLE          nothing pending (initial, after a failed save, or blank text)
    PENDING_SAVE  a timer is armed
    SAVING        a save request is in flight
    SAVED         the last save succeeded and nothing new is pending

A failed save is reported through on_error and never retried; the next
edit arms a new timer. cancel() drops a pending timer (leaving a page),
and save_now() saves immediately for explicit "save and continue" actions.
Only the most recently issued save moves the state; an older request that
finishes late is logged and otherwise ignored.
"""
import asyncio
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Set

from knowyourself.client.api_client import JournalClient
from knowyourself.core.logging_config import LoggerMixin

DEFAULT_DELAY_SECONDS = 1.0


class SaveState(str, Enum):
    IDLE = "idle"
    PENDING_SAVE = "pending_save"
    SAVING = "saving"
    SAVED = "saved"


SaveFunc = Callable[[str], Awaitable[Any]]


class AutosaveController(LoggerMixin):
    """
    Debounces edits to one field and saves through an async callable.

    Example:
        >>> controller = AutosaveController(save=my_async_save)
        >>> controller.edit("I learned")
        >>> controller.edit("I learned to be patient.")
        >>> # one second later a single save of the latest text is issued
    """

    def __init__(
        self,
        save: SaveFunc,
        delay: float = DEFAULT_DELAY_SECONDS,
        on_error: Optional[Callable[[Exception], None]] = None,
        on_saved: Optional[Callable[[datetime], None]] = None,
        name: str = "field"
    ):
        self._save = save
        self.delay = delay
        self.on_error = on_error
        self.on_saved = on_saved
        self.name = name

        self.text = ""
        self.state = SaveState.IDLE
        self.last_saved_at: Optional[datetime] = None

        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        self._latest_save = 0

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def load(self, text: Optional[str]) -> None:
        """Set the initial text from the server without scheduling a save."""
        self.text = text or ""

    def edit(self, text: str) -> None:
        """Record a keystroke-level change and restart the debounce timer."""
        self.text = text
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._expire())
        self.state = SaveState.PENDING_SAVE

    def cancel(self) -> None:
        """Drop any pending timer, e.g. when the user leaves the page."""
        if self._cancel_timer():
            self.logger.debug(f"Autosave for {self.name} cancelled")
        if self.state == SaveState.PENDING_SAVE:
            self.state = SaveState.IDLE

    async def save_now(self, text: Optional[str] = None) -> bool:
        """
        Save immediately, skipping the debounce.

        A save already in flight is not awaited; both requests go out and
        the later response wins on the server.

        Returns:
            True if the save succeeded
        """
        if text is not None:
            self.text = text
        self._cancel_timer()
        return await self._run_save(self.text, self._issue_save())

    async def wait_for_saves(self) -> None:
        """Wait until every save issued so far has completed."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def _expire(self) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None

        if not self.text.strip():
            self.state = SaveState.IDLE
            return

        # Runs as its own task so later edits and cancel() never abort it
        task = asyncio.get_running_loop().create_task(self._run_save(self.text, self._issue_save()))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    def _issue_save(self) -> int:
        self._latest_save += 1
        return self._latest_save

    async def _run_save(self, text: str, seq: int) -> bool:
        self.state = SaveState.SAVING
        try:
            await self._save(text)
        except Exception as e:
            self.logger.warning(f"Autosave for {self.name} failed: {e}")
            if seq != self._latest_save:
                return False
            if not self.has_pending_timer:
                self.state = SaveState.IDLE
            if self.on_error is not None:
                self.on_error(e)
            return False

        # A newer save owns the state now
        if seq != self._latest_save:
            return True

        self.last_saved_at = datetime.now()
        if not self.has_pending_timer:
            self.state = SaveState.SAVED
        if self.on_saved is not None:
            self.on_saved(self.last_saved_at)
        return True

    def _cancel_timer(self) -> bool:
        if self.has_pending_timer:
            self._timer.cancel()
            self._timer = None
            return True
        self._timer = None
        return False


def reflection_autosave(
    client: JournalClient,
    question: dict,
    **kwargs: Any
) -> AutosaveController:
    """Autosave bound to the caller's reflection for one catalog question."""

    async def save(text: str) -> Any:
        return await asyncio.to_thread(client.save_reflection, question["id"], question["prompt"], text)

    return AutosaveController(save=save, name=f"question {question['id']}", **kwargs)


def final_learning_autosave(client: JournalClient, **kwargs: Any) -> AutosaveController:
    """Autosave bound to the caller's final learnings document."""

    async def save(text: str) -> Any:
        return await asyncio.to_thread(client.save_final_learnings, text)

    return AutosaveController(save=save, name="final learnings", **kwargs)
