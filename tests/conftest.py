import json
import logging

import pytest


@pytest.fixture(autouse=True)
def clean_env_and_logging(monkeypatch, tmp_path):
    """
    Ensure tests don't leak env, logger state, or cached environment.
    """

    keys = [
        "TUNEBRIDGE_LOGS_DIR",
        "TUNEBRIDGE_AUTH_DIR",
        "TUNEBRIDGE_COMMAND",
        "TUNEBRIDGE_RUN_ID",
        "TUNEBRIDGE_VERBOSE",
        "TUNEBRIDGE_QUIET",
        "TUNEBRIDGE_REQUEST_TIMEOUT",
        "TUNEBRIDGE_INSERT_SLEEP_SEC",
        "PROJECT_KEYS_AND_CLIENTS",
        "CLIENT_ID",
        "CLIENT_SECRET",
        "REDIRECT_URI",
        "SPOTIFY_CLIENT_ID",
        "SPOTIFY_CLIENT_SECRET",
        "LOG_LEVEL",
        "LOG_RETENTION",
    ]
    for k in keys:
        monkeypatch.delenv(k, raising=False)

    # Never write into the working tree
    monkeypatch.setenv("TUNEBRIDGE_LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TUNEBRIDGE_AUTH_DIR", str(tmp_path / "auth"))

    from env import reset_env_caches
    import logger.state

    reset_env_caches()
    logger.state.reset()

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    yield

    reset_env_caches()


@pytest.fixture
def projects_env(monkeypatch):
    projects = [
        {
            "apiKey": f"key-{i}",
            "clientId": f"client-{i}",
            "clientSecret": f"secret-{i}",
            "redirectUri": "http://localhost:5001/oauth2callback",
        }
        for i in range(3)
    ]
    monkeypatch.setenv("PROJECT_KEYS_AND_CLIENTS", json.dumps(projects))
    return projects
