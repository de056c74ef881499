import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import pytest
from fastapi.testclient import TestClient

import flock.main as main
from flock.config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def client():
    with TestClient(main.app) as c:
        yield c
