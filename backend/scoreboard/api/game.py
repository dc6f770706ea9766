from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from scoreboard.models import GameType
from scoreboard.services.games import engine


game_api = Blueprint('game_api', __name__)


def _json_object():
    """Return the JSON body if it is an object, otherwise None."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


@game_api.route('', methods=['GET'])
@login_required
def get_current_game():
    state = engine.get_current_game(current_user.id)
    if state is None:
        return jsonify({'error': 'No active game found.'}), 404
    return jsonify(state.to_dict())


@game_api.route('/new', methods=['POST'])
@login_required
def start_new_game():
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    try:
        game_type = GameType.parse(data.get('gameType', GameType.Singles.name))
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    state = engine.start_new_game(current_user.id, game_type)
    return jsonify(state.to_dict())


@game_api.route('/score', methods=['PUT'])
@login_required
def update_score():
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    result = engine.update_score(current_user.id, data.get('team'), data.get('change'))
    if not result.ok:
        return jsonify({
            'error': result.error.message,
            'code': result.error.code,
            'kind': result.error.kind.value,
        }), 400
    return jsonify(result.state.to_dict())


@game_api.route('/stats', methods=['GET'])
@login_required
def get_stats():
    return jsonify(engine.get_stats(current_user.id).to_dict())


@game_api.route('/stats', methods=['DELETE'])
@login_required
def clear_stats():
    engine.clear_stats(current_user.id)
    return jsonify(engine.get_stats(current_user.id).to_dict())
