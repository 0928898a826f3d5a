"""
Single elimination bracket generation for random draws.
"""
import itertools
import logging
import random
from typing import List, Dict, Optional, Sequence

from core.models import BYE, EMPTY, Filled, Match, Round, Slot

logger = logging.getLogger(__name__)


class BracketError(Exception):
    """Base class for bracket generation errors."""


class InvalidInputError(BracketError, TypeError):
    """Raised when the participant list is not a list of strings."""


class BracketConstructionError(BracketError):
    """Raised when a generated bracket breaks its own slot accounting."""


def calculate_total_rounds(num_participants: int) -> int:
    """Calculate the number of rounds (ceil(log2(n)), at least 1 for n >= 1)."""
    if num_participants <= 0:
        return 0
    if num_participants == 1:
        return 1
    return (num_participants - 1).bit_length()


def calculate_bracket_size(num_participants: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_participants <= 0:
        return 0
    if num_participants == 1:
        return 1
    return 2 ** calculate_total_rounds(num_participants)


def calculate_byes(num_participants: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_participants) - num_participants


def get_round_title(round_index: int, total_rounds: int) -> str:
    """Get the title of a round from its 0-based index."""
    if total_rounds <= 1 or round_index == total_rounds - 1:
        return "Final"
    elif round_index == total_rounds - 2:
        return "Semifinal"
    else:
        return f"Round {round_index + 1}"


def _validate_participants(participants) -> None:
    if not isinstance(participants, (list, tuple)):
        raise InvalidInputError(
            f"participants must be a list of names, got {type(participants).__name__}"
        )
    for index, name in enumerate(participants):
        if not isinstance(name, str):
            raise InvalidInputError(
                f"participant at position {index} must be a string, got {type(name).__name__}"
            )


def place_byes(num_matches: int, num_byes: int, rng: random.Random) -> List[List[Optional[Slot]]]:
    """
    Build first round slot pairs with byes spread over distinct matches.

    Returns a list of [top, bottom] pairs where bye positions hold BYE
    and open positions hold None.
    """
    if num_byes >= num_matches and num_matches > 0:
        raise BracketConstructionError(
            f"{num_byes} byes cannot be spread over {num_matches} matches"
        )
    pairs = [[None, None] for _ in range(num_matches)]
    for match_index in rng.sample(range(num_matches), num_byes):
        side = 0 if rng.random() < 0.5 else 1
        pairs[match_index][side] = BYE
    return pairs


def fill_slots(pairs: List[List[Optional[Slot]]], shuffled: Sequence[str]) -> None:
    """Fill open positions in match order, then slot order, with participants."""
    open_slots = [(i, side) for i, pair in enumerate(pairs) for side in (0, 1) if pair[side] is None]
    if len(open_slots) != len(shuffled):
        raise BracketConstructionError(
            f"{len(open_slots)} open slots for {len(shuffled)} participants"
        )
    for (match_index, side), name in zip(open_slots, shuffled):
        pairs[match_index][side] = Filled(name)


def build_placeholder_rounds(bracket_size: int, total_rounds: int, next_id) -> List[Round]:
    """Create rounds 2..N with empty (TBD) matches."""
    rounds = []
    for round_index in range(1, total_rounds):
        num_matches = bracket_size // 2 ** (round_index + 1)
        seeds = [Match(next(next_id), EMPTY, EMPTY) for _ in range(num_matches)]
        rounds.append(Round(get_round_title(round_index, total_rounds), seeds))
    return rounds


def _bye_winner(match: Match) -> Optional[str]:
    top, bottom = match.slots
    if top.is_bye and bottom.is_filled:
        return bottom.name
    if bottom.is_bye and top.is_filled:
        return top.name
    return None


def advance_bye_winners(rounds: List[Round]) -> int:
    """
    Move the only participant of each first round bye match into round 2.

    First round match i feeds round 2 match i // 2, top slot for even i and
    bottom slot for odd i. Returns the number of participants advanced.
    """
    if len(rounds) < 2:
        return 0
    next_round = rounds[1].seeds
    advanced = 0
    for index, match in enumerate(rounds[0].seeds):
        winner = _bye_winner(match)
        if winner is None:
            continue
        target = index // 2
        if target < len(next_round):
            next_round[target].slots[index % 2] = Filled(winner)
            advanced += 1
    return advanced


def generate_bracket(participants: Sequence[str], rng: Optional[random.Random] = None) -> List[Round]:
    """
    Draw a single elimination bracket from an unordered list of participants.

    Pairings are uniformly random, byes land in distinct first round matches
    and their recipients are already placed in round 2. Every call draws
    afresh; pass a seeded ``random.Random`` to reproduce a draw.

    Raises InvalidInputError if participants is not a list of strings.
    """
    _validate_participants(participants)
    num_participants = len(participants)

    if num_participants == 0:
        return []
    if num_participants == 1:
        return [Round(get_round_title(0, 1), [Match(1, Filled(participants[0]), EMPTY)])]

    if rng is None:
        rng = random.Random()

    total_rounds = calculate_total_rounds(num_participants)
    bracket_size = calculate_bracket_size(num_participants)
    num_byes = calculate_byes(num_participants)
    first_round_matches = bracket_size // 2
    logger.debug(
        "Drawing %d participants: bracket size %d, %d byes, %d rounds",
        num_participants, bracket_size, num_byes, total_rounds,
    )

    shuffled = list(participants)
    rng.shuffle(shuffled)

    pairs = place_byes(first_round_matches, num_byes, rng)
    fill_slots(pairs, shuffled)

    next_id = itertools.count(1)
    first_round = Round(
        get_round_title(0, total_rounds),
        [Match(next(next_id), top, bottom) for top, bottom in pairs],
    )
    rounds = [first_round] + build_placeholder_rounds(bracket_size, total_rounds, next_id)

    advance_bye_winners(rounds)
    return rounds


def validate_bracket(bracket: List[Round], participants: Sequence[str]) -> List[str]:
    """
    Check a drawn bracket against the structural rules of a knockout draw.

    Returns a list of problems; an empty list means the bracket is valid.
    """
    problems = []
    num_participants = len(participants)

    if num_participants == 0:
        if bracket:
            problems.append(f"Expected no rounds for no participants, got {len(bracket)}")
        return problems

    total_rounds = calculate_total_rounds(num_participants)
    bracket_size = calculate_bracket_size(num_participants)
    if len(bracket) != total_rounds:
        problems.append(f"Expected {total_rounds} rounds, got {len(bracket)}")
        return problems

    first_round = bracket[0].seeds
    expected_matches = max(bracket_size // 2, 1)
    if len(first_round) != expected_matches:
        problems.append(f"Expected {expected_matches} first round matches, got {len(first_round)}")

    expected_byes = calculate_byes(num_participants)
    actual_byes = sum(match.bye_count for match in first_round)
    if actual_byes != expected_byes:
        problems.append(f"Expected {expected_byes} byes, got {actual_byes}")
    for match in first_round:
        if match.bye_count > 1:
            problems.append(f"Match {match.id} has two byes")

    placed = sorted(name for match in first_round for name in match.names)
    if placed != sorted(participants):
        problems.append(f"First round participants {placed} do not match {sorted(participants)}")

    ids = [match.id for round_ in bracket for match in round_.seeds]
    if ids != list(range(1, len(ids) + 1)):
        problems.append(f"Match ids are not sequential: {ids}")

    for round_index, round_ in enumerate(bracket):
        expected_title = get_round_title(round_index, total_rounds)
        if round_.title != expected_title:
            problems.append(f"Round {round_index + 1} titled {round_.title!r}, expected {expected_title!r}")
        if round_index > 0:
            expected = bracket_size // 2 ** (round_index + 1)
            if len(round_.seeds) != expected:
                problems.append(f"{round_.title} has {len(round_.seeds)} matches, expected {expected}")

    if total_rounds >= 2:
        expected_second = {}
        for index, match in enumerate(first_round):
            winner = _bye_winner(match)
            if winner is not None:
                expected_second[(index // 2, index % 2)] = winner
        for match_index, match in enumerate(bracket[1].seeds):
            for side, slot in enumerate(match.slots):
                expected_name = expected_second.get((match_index, side))
                if expected_name is None:
                    if slot.is_filled or slot.is_bye:
                        problems.append(f"{bracket[1].title} match {match.id} side {side} should be TBD")
                elif slot != Filled(expected_name):
                    problems.append(
                        f"{bracket[1].title} match {match.id} side {side} should hold {expected_name!r}"
                    )
        for round_ in bracket[2:]:
            for match in round_.seeds:
                if any(slot.is_filled or slot.is_bye for slot in match.slots):
                    problems.append(f"{round_.title} match {match.id} should be TBD")

    return problems


def bracket_summary(bracket: List[Round]) -> Dict:
    """
    Get bracket statistics formatted for display.
    """
    if not bracket:
        return {
            'total_participants': 0,
            'bracket_size': 0,
            'byes': 0,
            'total_rounds': 0,
            'matches_per_round': {}
        }
    first_round = bracket[0].seeds
    total_participants = sum(len(match.names) for match in first_round)
    byes = sum(match.bye_count for match in first_round)
    return {
        'total_participants': total_participants,
        'bracket_size': calculate_bracket_size(total_participants),
        'byes': byes,
        'total_rounds': len(bracket),
        'matches_per_round': {round_.title: len(round_.seeds) for round_ in bracket}
    }
