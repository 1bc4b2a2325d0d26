from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, replace
from threading import RLock
from typing import Any

from ..realtime import events
from ..realtime.events import Notifier
from .exceptions import InvalidInput, InvalidState, NotAPlayer, PlayerNotFound, RoomNotFound
from .models import ROOM_CAPACITY, JoinResult, LeaveResult, Player, Room, SubmitResult
from .timers import RevealTimer, Scheduler


logger = logging.getLogger(__name__)


def new_player_id() -> str:
    return uuid.uuid4().hex[:8]


def validate_name(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInput("Name is required")
    return raw.strip()


def validate_player_id(raw: Any) -> str:
    if not raw or not isinstance(raw, str):
        raise InvalidInput("Player ID is required")
    return raw


def validate_number(raw: Any) -> int:
    # bool is an int subclass; JSON true must not count as 1.
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
        raise InvalidInput("Valid number is required")
    return raw


def room_public_state(room: Room) -> dict:
    return {
        "id": room.id,
        "players": [asdict(p) for p in room.players],
        "spectators": [asdict(p) for p in room.spectators],
        "status": room.status,
        "result": room.result,
    }


class RoomManager:
    """Owns the single shared room and serializes every change to it.

    Operations validate their input before touching the room, so a failed call
    leaves it exactly as it was. Events are published after the lock is
    released.
    """

    def __init__(
        self,
        notifier: Notifier,
        scheduler: Scheduler,
        room_id: str = "main-room",
        reveal_delay_sec: float = 5,
    ) -> None:
        self.notifier = notifier
        self.scheduler = scheduler
        self.room_id = room_id
        self.reveal_delay_sec = reveal_delay_sec
        self._lock = RLock()
        self._room: Room | None = None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _room_locked(self) -> Room:
        if self._room is None:
            self._room = Room(id=self.room_id)
            logger.info("Created room %s (capacity %d)", self.room_id, ROOM_CAPACITY)
        return self._room

    def _resolve_locked(self, room_id: str | None) -> Room:
        if room_id is not None and room_id != self.room_id:
            raise RoomNotFound(room_id)
        return self._room_locked()

    def find_or_create_room(self) -> dict:
        with self._lock:
            return room_public_state(self._room_locked())

    def get_state(self, room_id: str) -> dict:
        with self._lock:
            return room_public_state(self._resolve_locked(room_id))

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def join(self, name: Any) -> JoinResult:
        name = validate_name(name)

        with self._lock:
            room = self._room_locked()

            player_id = new_player_id()
            while room.has_member(player_id):
                player_id = new_player_id()
                logger.warning("Player id collision detected, regenerating: %s", player_id)

            player = Player(id=player_id, name=name)
            is_spectator = room.is_full()
            if is_spectator:
                room.spectators.append(player)
            else:
                room.players.append(player)

            logger.info(
                "%s joined room %s as %s (%s)",
                name,
                room.id,
                "spectator" if is_spectator else "player",
                player_id,
            )
            return JoinResult(player=replace(player), room=room_public_state(room), is_spectator=is_spectator)

    def leave(self, player_id: Any, room_id: str | None = None) -> LeaveResult:
        player_id = validate_player_id(player_id)

        with self._lock:
            room = self._resolve_locked(room_id)
            promoted: Player | None = None

            player = room.find_player(player_id)
            if player is not None:
                was_completed = room.status == "completed"
                room.players.remove(player)

                if room.spectators:
                    promoted = room.spectators.pop(0)
                    room.players.append(promoted)
                    logger.info("Promoted spectator %s to player in room %s", promoted.id, room.id)

                if not room.players:
                    self._reset_locked(room)
                elif was_completed:
                    # The finished game lost a participant; start a fresh round.
                    self._reset_locked(room)
                    for p in room.players:
                        p.number = None
            else:
                spectator = room.find_spectator(player_id)
                if spectator is None:
                    raise PlayerNotFound(player_id)
                room.spectators.remove(spectator)

            logger.info("Player %s left room %s", player_id, room.id)
            state = room_public_state(room)
            channel = events.room_channel(room.id)

        if promoted is not None:
            self._publish(channel, events.PLAYER_PROMOTED, {"playerId": promoted.id, "roomState": state})
        self._publish(channel, events.PLAYER_LEFT, {"playerId": player_id, "roomState": state})

        return LeaveResult(
            success=True,
            room=state,
            promoted=replace(promoted) if promoted is not None else None,
        )

    # ------------------------------------------------------------------
    # Game
    # ------------------------------------------------------------------

    def submit_number(self, player_id: Any, number: Any, room_id: str | None = None) -> SubmitResult:
        player_id = validate_player_id(player_id)
        number = validate_number(number)

        with self._lock:
            room = self._resolve_locked(room_id)

            player = room.find_player(player_id)
            if player is None:
                raise NotAPlayer(player_id)

            if room.status == "completed":
                raise InvalidState("Game already completed")

            player.number = number

            timer: RevealTimer | None = None
            completed = room.all_submitted()
            if completed:
                first, second = room.players
                room.status = "completed"
                room.result = "odds-met" if first.number == second.number else "odds-lost"
                timer = self._schedule_reveal_locked(room)
                logger.info("Room %s completed: %s", room.id, room.result)

            state = room_public_state(room)
            channel = events.room_channel(room.id)

        self._publish(channel, events.NUMBER_SUBMITTED, {"playerId": player_id, "roomState": state})
        if timer is not None:
            self._publish(channel, events.GAME_STARTING, {"timerDuration": self.reveal_delay_sec})
            self.scheduler.start_background_task(self._reveal_after_delay, timer)

        return SubmitResult(success=True, completed=completed, room=state)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset_locked(self, room: Room) -> None:
        room.status = "waiting"
        room.result = None
        self._cancel_reveal_locked(room)
        logger.info("Room %s reset to waiting", room.id)

    def _schedule_reveal_locked(self, room: Room) -> RevealTimer:
        self._cancel_reveal_locked(room)
        timer = RevealTimer(room.id, self.reveal_delay_sec)
        room.reveal_timer = timer
        logger.info("[timer-set] room=%s delay=%ss", room.id, timer.delay_sec)
        return timer

    def _cancel_reveal_locked(self, room: Room) -> None:
        if room.reveal_timer is not None:
            room.reveal_timer.cancel()
            logger.info("[timer-cancel] room=%s", room.id)
            room.reveal_timer = None

    def _reveal_after_delay(self, timer: RevealTimer) -> None:
        self.scheduler.sleep(timer.delay_sec)

        with self._lock:
            room = self._room
            if room is None or timer.cancelled or room.reveal_timer is not timer:
                logger.info("[timer-abort] room=%s reveal no longer pending", timer.room_id)
                return
            room.reveal_timer = None
            state = room_public_state(room)

        logger.info("[timer-fire] room=%s result=%s", timer.room_id, state["result"])
        self._publish(events.room_channel(timer.room_id), events.GAME_RESULT, {"roomState": state})

    def _publish(self, channel: str, event: str, payload: dict) -> None:
        try:
            self.notifier.publish(channel, event, payload)
        except Exception:
            # Delivery is best-effort; the room change already happened.
            logger.exception("Failed to publish %s on %s", event, channel)
