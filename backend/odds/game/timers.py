from __future__ import annotations

import threading
from typing import Any, Callable, Protocol


class Scheduler(Protocol):
    """Runs background work. ``flask_socketio.SocketIO`` satisfies this."""

    def start_background_task(self, target: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        ...

    def sleep(self, seconds: float = 0) -> Any:
        ...


class RevealTimer:
    """Token for one pending result reveal.

    The background task holding the token checks it after its delay; a
    cancelled token never broadcasts.
    """

    def __init__(self, room_id: str, delay_sec: float) -> None:
        self.room_id = room_id
        self.delay_sec = delay_sec
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"<RevealTimer room={self.room_id} delay={self.delay_sec}s {state}>"
