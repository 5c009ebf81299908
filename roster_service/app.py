import os
import logging
from flask import Flask, jsonify
from flask_migrate import Migrate
from redis import RedisError

from shared.pubsub import PubSubClient

from .auth import forget_request_user, login_manager
from .check_in import CheckInEngine
from .clock import Clock
from .config import config
from .errors import RosterError
from .models import db
from .ratings import RedisRatingSource, no_ratings
from .seeding import SeedingEngine
from .team_roster import TeamRoster
from .tournament_lookup import TournamentLookup

migrate = Migrate()

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')


def create_app(config_name: str = None, clock: Clock = None, create_tables: bool = None) -> Flask:
    """
    Application factory for the roster service.
    ``create_tables`` overrides the config's CREATE_TABLES; migration runs pass False.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    logging.getLogger('roster_service').setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)
    login_manager.init_app(app)
    app.before_request(forget_request_user)

    publisher = None
    if app.config.get('REDIS_URL'):
        publisher = PubSubClient(app.config['REDIS_URL'])
    else:
        app.logger.info("REDIS_URL not set; roster events will not be published")

    # Initialize services
    clock = clock or Clock()
    app.publisher = publisher
    app.roster = TeamRoster(
        publisher=publisher,
        clock=clock,
        roster_max_size=app.config['ROSTER_MAX_SIZE']
    )
    app.check_in = CheckInEngine(
        publisher=publisher,
        clock=clock,
        closing_minutes_from_start=app.config['CHECK_IN_CLOSING_MINUTES_FROM_START'],
        grace_minutes=app.config['CHECK_IN_GRACE_MINUTES']
    )
    app.seeding = SeedingEngine(publisher=publisher, clock=clock)
    app.lookup = TournamentLookup()
    app.rating_source = RedisRatingSource(publisher.redis) if publisher else no_ratings

    if create_tables is None:
        create_tables = app.config['CREATE_TABLES']
    if create_tables:
        with app.app_context():
            db.create_all()

    register_error_handlers(app)
    register_health_route(app)

    from .routes import teams
    app.register_blueprint(teams.bp)

    return app


def register_error_handlers(app: Flask):

    @app.errorhandler(RosterError)
    def handle_roster_error(error: RosterError):
        if error.status_code >= 500:
            app.logger.error(f"{error.error}: {error.message}")
        return jsonify(error.to_dict()), error.status_code


def register_health_route(app: Flask):

    @app.route('/api/v1/health')
    def health_check():
        """Health check endpoint."""
        try:
            db.session.execute(db.text('SELECT 1'))
            db_ok = True
        except Exception as e:
            app.logger.error(f"Database health check failed: {e}")
            db_ok = False

        redis_state = 'disabled'
        if app.publisher is not None:
            try:
                app.publisher.ping()
                redis_state = 'connected'
            except RedisError as e:
                app.logger.error(f"Redis health check failed: {e}")
                redis_state = 'disconnected'

        healthy = db_ok and redis_state != 'disconnected'
        return jsonify({
            'status': 'healthy' if healthy else 'unhealthy',
            'redis': redis_state,
            'database': 'connected' if db_ok else 'disconnected'
        }), 200 if healthy else 503
