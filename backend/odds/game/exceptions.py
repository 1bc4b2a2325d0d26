"""
Room errors.

Every failure raised by the room manager derives from ``OddsGameException`` so
the HTTP layer can translate them in one place.
"""


class OddsGameException(Exception):
    """Base class for all game errors."""

    status_code = 500
    code = "internal_error"


class InvalidInput(OddsGameException):
    """A required field is missing or malformed."""

    status_code = 400
    code = "invalid_input"


class RoomNotFound(OddsGameException):
    status_code = 404
    code = "room_not_found"

    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class PlayerNotFound(OddsGameException):
    status_code = 404
    code = "player_not_found"

    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found")


class NotAPlayer(OddsGameException):
    """The id belongs to a spectator or to nobody."""

    status_code = 404
    code = "not_a_player"

    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not an active player in this game")


class InvalidState(OddsGameException):
    """The room is not in a state that allows the operation."""

    status_code = 409
    code = "invalid_state"
