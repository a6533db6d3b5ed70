import json

from auth.store import FileRefreshTokenStore


def test_store_roundtrip_default_and_project(tmp_path):
    store = FileRefreshTokenStore()

    store.save(None, "rt-default")
    store.save(2, "rt-2")

    assert store.load(None) == "rt-default"
    assert store.load(2) == "rt-2"
    assert store.load(1) is None

    assert store.path_for(None).name == "refresh_token.json"
    assert store.path_for(2).name == "refresh_token_project_2.json"
    assert store.path_for(2).parent == (tmp_path / "auth").resolve()


def test_store_file_holds_json_string():
    store = FileRefreshTokenStore()
    store.save(0, "rt-0")
    assert json.loads(store.path_for(0).read_text(encoding="utf-8")) == "rt-0"


def test_store_ignores_malformed_files():
    store = FileRefreshTokenStore()

    store.path_for(0).write_text("{not json", encoding="utf-8")
    store.path_for(1).write_text(json.dumps({"token": "x"}), encoding="utf-8")

    assert store.load(0) is None
    assert store.load(1) is None
