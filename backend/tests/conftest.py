import os, sys, pytest
# Ensure the backend directory is on path so 'template_api' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from template_api import create_app

API_KEY = 'test-api-key'

TEST_CONFIG = {
    'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
    'API_KEYS': API_KEY,
    'TESTING': True,
}


@pytest.fixture(scope='session')
def app_instance():
    app = create_app(dict(TEST_CONFIG))
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def api_headers():
    return {'X-API-Key': API_KEY}


@pytest.fixture()
def make_app():
    """Build an extra app with config overrides on top of the test defaults."""
    def factory(**overrides):
        cfg = dict(TEST_CONFIG)
        cfg.update(overrides)
        return create_app(cfg)
    return factory
