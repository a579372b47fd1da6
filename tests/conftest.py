import pytest

from api import create_app
from config import DEFAULT_PARAMS
from fire_calculator import FireInputs


@pytest.fixture
def default_inputs() -> FireInputs:
    return FireInputs.from_dict(DEFAULT_PARAMS)


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()
