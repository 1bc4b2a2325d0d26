from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .timers import RevealTimer


RoomStatus = Literal["waiting", "playing", "completed"]
RoomResult = Literal["odds-met", "odds-lost"]

ROOM_CAPACITY = 2


@dataclass
class Player:
    id: str
    name: str
    number: int | None = None


@dataclass
class Room:
    id: str
    status: RoomStatus = "waiting"
    result: RoomResult | None = None
    players: list[Player] = field(default_factory=list)
    spectators: list[Player] = field(default_factory=list)
    # Pending delayed result broadcast, never serialized
    reveal_timer: RevealTimer | None = None

    def find_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def find_spectator(self, player_id: str) -> Player | None:
        for p in self.spectators:
            if p.id == player_id:
                return p
        return None

    def has_member(self, player_id: str) -> bool:
        return self.find_player(player_id) is not None or self.find_spectator(player_id) is not None

    def is_full(self) -> bool:
        return len(self.players) >= ROOM_CAPACITY

    def all_submitted(self) -> bool:
        return len(self.players) == ROOM_CAPACITY and all(p.number is not None for p in self.players)


@dataclass
class JoinResult:
    player: Player
    room: dict
    is_spectator: bool


@dataclass
class LeaveResult:
    success: bool
    room: dict
    promoted: Player | None = None


@dataclass
class SubmitResult:
    success: bool
    completed: bool
    room: dict
