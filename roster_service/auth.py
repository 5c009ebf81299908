from flask import g
from flask_login import LoginManager, current_user

from .errors import NotAuthenticated
from .models import db, User

login_manager = LoginManager()

# Set by the authenticating gateway in front of this service
USER_ID_HEADER = 'X-User-Id'


@login_manager.user_loader
def load_user(user_id: str):
    return db.session.get(User, int(user_id))


@login_manager.request_loader
def load_user_from_request(req):
    raw = req.headers.get(USER_ID_HEADER)
    if not raw or not raw.isdigit():
        return None
    return db.session.get(User, int(raw))


def forget_request_user():
    """Drop the user Flask-Login cached on ``g`` so each request re-reads the header."""
    g.pop('_login_user', None)


def acting_user_id() -> int:
    """Id of the user the request acts for; NotAuthenticated if there is none."""
    if not current_user.is_authenticated:
        raise NotAuthenticated()
    return current_user.id
