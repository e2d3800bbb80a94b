import pytest

from spgen.config import ServiceConfig
from spgen.server import create_app


@pytest.fixture
def app():
    app = create_app(ServiceConfig(host="127.0.0.1", port=0, max_length=128))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
