import enum
from typing import Iterable, NamedTuple, Optional


class WinType(str, enum.Enum):
    STRAIGHT = "straight"
    RAMBOLITO = "rambolito"
    NONE = "none"


class MatchResult(NamedTuple):
    is_winning: bool
    win_type: WinType
    matched_number: Optional[str]


NO_MATCH = MatchResult(False, WinType.NONE, None)

RAMBOLITO_BET_TYPES = {"rambolito"}


def is_permutation(first: str, second: str) -> bool:
    # Multiset comparison: "112" vs "121" matches, "12" vs "123" never does
    if len(first) != len(second):
        return False
    return sorted(first) == sorted(second)


def is_rambolito(bet_type: Optional[str]) -> bool:
    return (bet_type or "").strip().lower() in RAMBOLITO_BET_TYPES


def evaluate_bet(combination: str, bet_type: Optional[str], winning_numbers: Iterable[str]) -> MatchResult:
    """
    Check one bet against every winning number of a draw.

    Winning numbers are checked in order and the first hit is reported.
    An exact string match is a straight win for any bet type; only bets
    typed rambolito also win on a reordering of the digits.
    """
    combo = str(combination)
    permutation_allowed = is_rambolito(bet_type)

    for winning_number in winning_numbers:
        winning_combo = str(winning_number)

        if combo == winning_combo:
            return MatchResult(True, WinType.STRAIGHT, winning_combo)

        if permutation_allowed and is_permutation(combo, winning_combo):
            return MatchResult(True, WinType.RAMBOLITO, winning_combo)

    return NO_MATCH
