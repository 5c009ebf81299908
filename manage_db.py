#!/usr/bin/env python3
"""
Applies the Alembic migrations under migrations/ to DATABASE_URL.

Usage:
    python manage_db.py            # upgrade to the latest revision
    python manage_db.py <revision> # upgrade (or stay) at a given revision

Run during the build/deployment pipeline, before the service starts.
"""
import logging
import sys

from flask_migrate import upgrade

from roster_service.app import create_app

logger = logging.getLogger('manage_db')


def migrate_schema(revision: str = 'head'):
    # Tables come from the migrations only, never from create_all()
    app = create_app(create_tables=False)
    with app.app_context():
        logger.info(f"Upgrading {app.config['SQLALCHEMY_DATABASE_URI'].split('@')[-1]} to {revision}")
        upgrade(revision=revision)
    logger.info("Database migrations applied")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    migrate_schema(sys.argv[1] if len(sys.argv) > 1 else 'head')
