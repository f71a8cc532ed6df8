from flask import Flask, current_app
from werkzeug.exceptions import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from typing import Optional, Dict, Any

from .config.settings import env_config, load_settings, parse_api_keys
from .openapi_parts.document import DocumentError

load_dotenv()

def create_app(config: Optional[Dict[str, Any]] = None):
    app = Flask(__name__)
    # keep path order produced by the document pipeline in JSON responses
    app.json.sort_keys = False

    app.config.update(env_config())
    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    settings = load_settings(app.config)
    app.config['REGISTERED_API_KEYS'] = parse_api_keys(app.config['API_KEYS'])
    app.logger.setLevel(str(app.config['LOG_LEVEL']).upper())

    # Database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    session_factory = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    from .models.user import Base
    Base.metadata.create_all(db_engine)
    app.extensions['db_engine'] = db_engine
    app.extensions['db_session'] = session_factory

    @app.teardown_appcontext
    def remove_session(exc):  # type: ignore
        session_factory.remove()

    from .services.cache import MemoryCache
    app.extensions['swagger_settings'] = settings
    app.extensions['demo_cache'] = MemoryCache()

    from .routes.users import users_bp
    from .routes.demo import demo_bp
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(demo_bp, url_prefix='/api/demo')

    @app.route('/healthz')
    def health():
        """Service health."""
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        if isinstance(e, DocumentError):
            app.logger.error('API document could not be built: %s', e)
            return {
                'error': {
                    'status': 500,
                    'title': 'Invalid API Document',
                    'detail': str(e),
                }
            }, 500
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    if settings.ui_enable:
        from .routes.docs import docs_bp
        app.register_blueprint(docs_bp)

    app.logger.debug('swagger pipeline: grouping=%s sort=%s', settings.grouping_mode, settings.sort_endpoints)
    return app


def get_db():
    """Session bound to the database of the app handling the current request."""
    return current_app.extensions['db_session']()
