"""
Command-line knockout draw.

Prints a freshly drawn bracket for a competition in the data file, or for
an ad-hoc participant list.
"""
import argparse
import json
import logging
import os
import random
import sys

from core.models import bracket_to_dict
from core.elimination import generate_bracket, validate_bracket, InvalidInputError
from core.registrations import (
    RegistrationDataError,
    load_competitions,
    find_competition,
    participants_for,
    load_participants_file,
)


def format_slot(slot):
    if slot.is_bye:
        return "BYE"
    if slot.is_filled:
        return slot.name
    return "TBD"


def format_bracket(bracket):
    """Render a bracket as plain text, one block per round."""
    lines = []
    for round_ in bracket:
        if lines:
            lines.append("")
        lines.append(f"# {round_.title}")
        for match in round_.seeds:
            top, bottom = match.slots
            lines.append(f"M{match.id}: {format_slot(top)} vs {format_slot(bottom)}")
    return "\n".join(lines)


def main(argv=None):
    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    parser = argparse.ArgumentParser(description='Draw a single elimination bracket')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--competition', type=int, help='Competition id in the data file')
    source.add_argument('--participants', help='YAML list or text file with one participant per line')
    parser.add_argument(
        '--data-file',
        default=os.path.join(base_dir, 'data', 'competitions.yaml'),
        help='Competitions YAML file (default: data/competitions.yaml)'
    )
    parser.add_argument('--json', action='store_true', help='Print the bracket as JSON')
    parser.add_argument('--seed', type=int, help='Seed for a reproducible draw')
    parser.add_argument('--check', action='store_true', help='Validate the drawn bracket')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.competition is not None:
            competition = find_competition(load_competitions(args.data_file), args.competition)
            if competition is None:
                print(f"Error: competition {args.competition} not found in {args.data_file}", file=sys.stderr)
                return 2
            participants = participants_for(competition)
        else:
            participants = load_participants_file(args.participants)
    except (OSError, RegistrationDataError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        bracket = generate_bracket(participants, rng)
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not bracket:
        print("No participants to draw.")
    elif args.json:
        print(json.dumps(bracket_to_dict(bracket), ensure_ascii=False, indent=2))
    else:
        print(format_bracket(bracket))

    if args.check:
        problems = validate_bracket(bracket, participants)
        for problem in problems:
            print(f"Invalid bracket: {problem}", file=sys.stderr)
        if problems:
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
