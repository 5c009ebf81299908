from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from ..auth import acting_user_id
from ..errors import InvalidRequest
from ..ratings import resolve_own_rating

bp = Blueprint('teams', __name__, url_prefix='/api/v1')


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest('Request body must be a JSON object')
    return data


def _require_int(data: dict, field: str) -> int:
    value = data.get(field)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequest(f"'{field}' must be an integer")
    return value


def _require_str(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(f"'{field}' is required")
    return value.strip()


# ==================== Team Roster ====================

@bp.route('/tournaments/<int:tournament_id>/teams', methods=['POST'])
def create_team(tournament_id):
    user_id = acting_user_id()
    name = _require_str(_json_body(), 'name')

    team = current_app.roster.create_team(tournament_id, name, user_id)
    return jsonify({
        'message': 'Team created',
        'team': team.to_dict(include_invite_code=True)
    }), 201


@bp.route('/tournaments/<int:tournament_id>/join', methods=['POST'])
def join_team(tournament_id):
    user_id = acting_user_id()
    invite_code = _require_str(_json_body(), 'invite_code')

    member = current_app.roster.join_via_invite_code(tournament_id, invite_code, user_id)
    return jsonify({
        'message': 'Joined team',
        'team_id': member.team_id,
        'member': member.to_dict()
    }), 201


@bp.route('/teams/<int:team_id>/members', methods=['POST'])
def add_player(team_id):
    captain_id = acting_user_id()
    new_player_id = _require_int(_json_body(), 'user_id')

    member = current_app.roster.add_player(team_id, captain_id, new_player_id)
    return jsonify({
        'message': 'Player added',
        'member': member.to_dict()
    }), 201


@bp.route('/teams/<int:team_id>/members/<int:player_id>', methods=['DELETE'])
def remove_player(team_id, player_id):
    captain_id = acting_user_id()

    current_app.roster.remove_player(team_id, captain_id, player_id)
    return jsonify({'message': 'Player removed'})


# ==================== Check-In ====================

@bp.route('/teams/<int:team_id>/check-in', methods=['POST'])
def check_in(team_id):
    user_id = acting_user_id()

    checked_in_time = current_app.check_in.check_in(team_id, user_id)
    return jsonify({
        'message': 'Checked in',
        'checked_in_time': checked_in_time.isoformat()
    })


@bp.route('/teams/<int:team_id>/check-out', methods=['POST'])
def check_out(team_id):
    user_id = acting_user_id()

    current_app.check_in.check_out(team_id, user_id)
    return jsonify({'message': 'Checked out'})


# ==================== Seeding ====================

@bp.route('/tournaments/<int:tournament_id>/seeds', methods=['PUT'])
def update_seeds(tournament_id):
    user_id = acting_user_id()
    seeds = _json_body().get('seeds')
    if not isinstance(seeds, list) or any(isinstance(s, bool) or not isinstance(s, int) for s in seeds):
        raise InvalidRequest("'seeds' must be a list of team ids")

    new_seeds = current_app.seeding.update_seeds(tournament_id, user_id, seeds)
    return jsonify({'message': 'Seeds updated', 'seeds': new_seeds})


# ==================== Lookup ====================

@bp.route('/organizations/<organization>/tournaments/<tournament>', methods=['GET'])
def get_tournament(organization, tournament):
    return jsonify(current_app.lookup.find_tournament_by_name_for_url(organization, tournament))


@bp.route('/organizations/<organization>/tournaments/<tournament>/invite-codes', methods=['GET'])
def get_tournament_invite_codes(organization, tournament):
    user_id = acting_user_id()
    return jsonify(current_app.lookup.find_tournament_with_invite_codes(organization, tournament, user_id))


@bp.route('/organizations/<organization>/tournaments/<tournament>/own-team', methods=['GET'])
def get_own_team(organization, tournament):
    user_id = acting_user_id()
    team = current_app.lookup.own_team_with_invite_code(organization, tournament, user_id)
    return jsonify(team.to_dict(include_invite_code=True))


@bp.route('/ratings/own', methods=['GET'])
def get_own_rating():
    user_id = current_user.id if current_user.is_authenticated else None
    own = resolve_own_rating(current_app.rating_source(), user_id)
    return jsonify({'own_rating': own})
