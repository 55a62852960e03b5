"""Table phase and seat enumerations."""

from enum import Enum, auto


class GamePhase(Enum):
    """
    Phases of a tracked hand.

    Flow: BETTING → PLAYING → FINISHED → BETTING
    """

    # Waiting for cards of a new hand
    BETTING = auto()

    # Cards are being entered
    PLAYING = auto()

    # Result declared and bankroll settled
    FINISHED = auto()

    def __str__(self) -> str:
        return self.name.title()


# Valid phase transitions
VALID_TRANSITIONS: dict[GamePhase, list[GamePhase]] = {
    GamePhase.BETTING: [GamePhase.BETTING, GamePhase.PLAYING],
    GamePhase.PLAYING: [GamePhase.BETTING, GamePhase.PLAYING, GamePhase.FINISHED],
    GamePhase.FINISHED: [GamePhase.BETTING],
}


def is_valid_transition(from_phase: GamePhase, to_phase: GamePhase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])


class Seat(Enum):
    """Where an entered card lands."""

    PLAYER = "player"
    DEALER_UP = "dealer-up"
    DEALER_DOWN = "dealer-down"
