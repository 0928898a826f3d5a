"""
Competition and registration data for draws.
"""
import os
import logging
from typing import List, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Competitions in these states have a settled registration list.
DRAWABLE_STATUSES = ('approved', 'pending_score_review', 'completed')


class RegistrationDataError(ValueError):
    """Raised when the competitions file cannot be interpreted."""


def load_competitions(file_path: str) -> List[Dict]:
    """Load competitions (with their registrations) from YAML."""
    if not os.path.exists(file_path):
        logger.debug("Competitions file %s does not exist", file_path)
        return []
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except UnicodeDecodeError as e:
        raise RegistrationDataError(f"{file_path} is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise RegistrationDataError(f"Failed to parse {file_path}: {e}") from e

    if not data:
        return []
    if not isinstance(data, dict):
        raise RegistrationDataError(f"{file_path} must contain a 'competitions' list")
    competitions = data.get('competitions') or []
    if not isinstance(competitions, list):
        raise RegistrationDataError(f"{file_path} must contain a 'competitions' list")

    for competition in competitions:
        if not isinstance(competition, dict) or 'id' not in competition:
            raise RegistrationDataError(f"Every competition in {file_path} needs an id")
        registrations = competition.get('registrations') or []
        if not isinstance(registrations, list) or not all(isinstance(r, dict) for r in registrations):
            raise RegistrationDataError(
                f"Registrations of competition {competition['id']} in {file_path} must be a list of mappings"
            )
    return competitions


def drawable_competitions(competitions: List[Dict]) -> List[Dict]:
    return [c for c in competitions if c.get('status') in DRAWABLE_STATUSES]


def find_competition(competitions: List[Dict], competition_id) -> Optional[Dict]:
    for competition in competitions:
        if competition.get('id') == competition_id:
            return competition
    return None


def format_participant(registration: Dict) -> str:
    """Display name for a registration: class followed by student or team."""
    class_name = str(registration.get('class_name') or '').strip()
    entrant = registration.get('student_name') or registration.get('team_name') or ''
    return f"{class_name} {str(entrant).strip()}".strip()


def participants_for(competition: Dict) -> List[str]:
    """Participant display names for a competition, in registration order."""
    registrations = competition.get('registrations') or []
    return [format_participant(reg) for reg in registrations]


def load_participants_file(file_path: str) -> List[str]:
    """
    Load an ad-hoc participant list.

    Accepts a YAML list of names or a plain text file with one name per line.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise RegistrationDataError(f"{file_path} is not valid UTF-8: {e}") from e

    if file_path.endswith(('.yaml', '.yml')):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise RegistrationDataError(f"Failed to parse {file_path}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise RegistrationDataError(f"{file_path} must contain a list of names")
        names = []
        for name in data:
            if name is None:
                continue
            if not isinstance(name, (str, int, float)) or isinstance(name, bool):
                raise RegistrationDataError(f"{file_path} contains a non-name entry: {name!r}")
            if str(name).strip():
                names.append(str(name).strip())
        return names

    return [line.strip() for line in content.splitlines() if line.strip()]
