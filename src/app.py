"""
Flask web application for sports day knockout draws.
"""
import os
import logging
from filelock import FileLock
from flask import Flask, request, jsonify
from core.models import bracket_to_dict
from core.elimination import generate_bracket, bracket_summary, InvalidInputError
from core.registrations import (
    RegistrationDataError,
    load_competitions,
    drawable_competitions,
    find_competition,
    participants_for,
)

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('SPORTSDAY_DATA_DIR', os.path.join(BASE_DIR, 'data'))
COMPETITIONS_FILE = os.path.join(DATA_DIR, 'competitions.yaml')
LOCK_TIMEOUT_SECONDS = 10

if not app.debug:
    app.logger.setLevel(logging.INFO)


def _data_lock() -> FileLock:
    """Lock shared with writers of the data directory."""
    os.makedirs(DATA_DIR, exist_ok=True)
    return FileLock(os.path.join(DATA_DIR, '.lock'), timeout=LOCK_TIMEOUT_SECONDS)


def load_all_competitions() -> list:
    with _data_lock():
        return load_competitions(COMPETITIONS_FILE)


def competition_info(competition: dict) -> dict:
    return {
        'id': competition['id'],
        'name': competition.get('name', f"Competition {competition['id']}"),
        'status': competition.get('status'),
        'registrations': len(competition.get('registrations') or []),
    }


def draw_competition(competition: dict) -> dict:
    """Draw a fresh bracket for one competition."""
    participants = participants_for(competition)
    bracket = generate_bracket(participants)
    app.logger.info(f"Drew competition {competition['id']} with {len(participants)} participants")
    draw = {
        'competition': competition_info(competition),
        'bracket': bracket_to_dict(bracket),
        'summary': bracket_summary(bracket),
    }
    if not participants:
        draw['message'] = 'No registrations for this competition.'
    return draw


@app.errorhandler(InvalidInputError)
def handle_invalid_input(e):
    return jsonify({'error': str(e)}), 400


@app.errorhandler(RegistrationDataError)
def handle_registration_data_error(e):
    app.logger.error(f"Competition data unavailable: {e}")
    return jsonify({'error': 'Competition data is unreadable.'}), 500


@app.route('/api/competitions', methods=['GET'])
def api_competitions():
    """List competitions that can be drawn."""
    competitions = drawable_competitions(load_all_competitions())
    return jsonify({'competitions': [competition_info(c) for c in competitions]})


@app.route('/api/competitions/<int:competition_id>/bracket', methods=['GET'])
def api_competition_bracket(competition_id):
    """Draw a bracket for a single competition."""
    competitions = drawable_competitions(load_all_competitions())
    competition = find_competition(competitions, competition_id)
    if competition is None:
        app.logger.warning(f"Draw requested for unknown competition {competition_id}")
        return jsonify({'error': 'Competition not found.'}), 404
    return jsonify(draw_competition(competition))


@app.route('/api/draw', methods=['POST'])
def api_draw():
    """Draw brackets for several competitions, in the order selected."""
    payload = request.get_json(silent=True)
    competition_ids = payload.get('competition_ids') if isinstance(payload, dict) else None
    if not competition_ids or not isinstance(competition_ids, list):
        return jsonify({'error': 'Select at least one competition.'}), 400

    competitions = drawable_competitions(load_all_competitions())
    draws = []
    missing = []
    for competition_id in competition_ids:
        competition = find_competition(competitions, competition_id)
        if competition is None:
            missing.append(competition_id)
            continue
        draws.append(draw_competition(competition))

    if missing:
        return jsonify({'error': f'Competitions not found: {missing}'}), 404
    return jsonify({'draws': draws})


@app.route('/api/bracket', methods=['POST'])
def api_bracket():
    """Draw a bracket from a posted participant list."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or 'participants' not in payload:
        return jsonify({'error': 'Missing participants'}), 400
    bracket = generate_bracket(payload['participants'])
    return jsonify({
        'bracket': bracket_to_dict(bracket),
        'summary': bracket_summary(bracket),
    })


if __name__ == '__main__':
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
