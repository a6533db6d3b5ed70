import json

import pytest

from env import ConfigError, get_env, mask_secret, reset_env_caches


def test_env_requires_projects():
    with pytest.raises(ConfigError):
        get_env()


def test_env_rejects_malformed_projects(monkeypatch):
    for raw in ("not json", "[]", json.dumps({"apiKey": "x"}), json.dumps([{"clientId": "c"}])):
        monkeypatch.setenv("PROJECT_KEYS_AND_CLIENTS", raw)
        reset_env_caches()
        with pytest.raises(ConfigError):
            get_env()


def test_env_parses_projects(projects_env):
    env = get_env()
    assert [p.search_api_key for p in env.projects] == ["key-0", "key-1", "key-2"]
    assert env.projects[1].oauth_client_id == "client-1"


def test_env_defaults(projects_env):
    env = get_env()
    assert env.verbose is False
    assert env.quiet is False
    assert env.request_timeout == 30
    assert env.insert_sleep_sec == 1.0


def test_env_accepts_verbose_flag(projects_env, monkeypatch):
    monkeypatch.setenv("TUNEBRIDGE_VERBOSE", "1")
    assert get_env().verbose is True


def test_env_is_cached_until_reset(projects_env, monkeypatch):
    first = get_env()
    monkeypatch.setenv("TUNEBRIDGE_REQUEST_TIMEOUT", "7")
    assert get_env() is first

    reset_env_caches()
    assert get_env().request_timeout == 7


def test_default_project_falls_back_to_first(projects_env):
    env = get_env()
    assert env.default_project == env.projects[0]


def test_default_project_uses_top_level_identity(projects_env, monkeypatch):
    monkeypatch.setenv("CLIENT_ID", "top-client")
    monkeypatch.setenv("CLIENT_SECRET", "top-secret")
    monkeypatch.setenv("REDIRECT_URI", "http://localhost:9000/cb")

    project = get_env().default_project
    assert project.oauth_client_id == "top-client"
    assert project.oauth_redirect_uri == "http://localhost:9000/cb"
    assert project.search_api_key == "key-0"


def test_as_dict_masks_secrets(projects_env, monkeypatch):
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "supersecretvalue")
    dumped = json.dumps(get_env().as_dict(), ensure_ascii=False)

    assert "supersecretvalue" not in dumped
    assert "secret-0" not in dumped


def test_mask_secret():
    assert mask_secret(None) == "<unset>"
    assert mask_secret("abc") == "***"
    assert mask_secret("abcdefgh").startswith("abcd")
    assert "efgh" not in mask_secret("abcdefgh")
