import pytest

from auth.store import MemoryRefreshTokenStore
from models import Project
from providers.youtube.api_manager import QuotaRotationManager

from helpers import make_projects


def test_empty_project_list_rejected():
    with pytest.raises(ValueError):
        QuotaRotationManager([], MemoryRefreshTokenStore())


def test_rotation_cycles_back_to_start():
    projects = make_projects(3)
    rotation = QuotaRotationManager(projects, MemoryRefreshTokenStore())

    assert rotation.current_key() == "key-0"
    for _ in range(3):
        rotation.rotate()
    assert rotation.current_index == 0
    assert rotation.current_key() == "key-0"


def test_rotation_rebuilds_client_with_project_identity_and_token():
    store = MemoryRefreshTokenStore({None: "rt-default", 1: "rt-1"})
    rotation = QuotaRotationManager(make_projects(3), store)

    assert rotation.current_client().refresh_token == "rt-default"
    assert rotation.token_slot() is None

    rotation.rotate()

    client = rotation.current_client()
    assert rotation.current_key() == "key-1"
    assert client.client_id == "client-1"
    assert client.client_secret == "secret-1"
    assert client.refresh_token == "rt-1"
    assert client.token is None
    assert rotation.token_slot() == 1


def test_rotation_to_project_without_token_leaves_client_unauthenticated():
    rotation = QuotaRotationManager(make_projects(2), MemoryRefreshTokenStore({None: "rt"}))
    rotation.rotate()
    assert rotation.current_client().refresh_token is None


def test_default_identity_falls_back_to_project_zero_token():
    store = MemoryRefreshTokenStore({0: "rt-0"})
    rotation = QuotaRotationManager(make_projects(2), store)
    assert rotation.current_client().refresh_token == "rt-0"


def test_separate_default_identity_does_not_borrow_project_zero_token():
    store = MemoryRefreshTokenStore({0: "rt-0"})
    default = Project("key-0", "top-client", "top-secret", "http://localhost/cb")
    rotation = QuotaRotationManager(make_projects(2), store, default_project=default)

    assert rotation.current_project() is default
    assert rotation.current_client().client_id == "top-client"
    assert rotation.current_client().refresh_token is None


def test_current_project_follows_rotation():
    projects = make_projects(2)
    rotation = QuotaRotationManager(projects, MemoryRefreshTokenStore())
    rotation.rotate()
    assert rotation.current_project() == projects[1]
