from types import SimpleNamespace

import httplib2

from auth.errors import AuthFailed, AuthInvalid
from errors import InvalidInput, SourceReadError
from models import SourcePlaylist, Track
from runtime import Runtime
from service import (
    RunResult,
    authorization_url,
    convert,
    get_source_playlist,
    oauth_callback,
)

from helpers import DictDestination


class FakeSource:
    def __init__(self, playlist=None, error=None):
        self.playlist = playlist
        self.error = error

    def fetch_playlist(self, playlist_id):
        if self.error:
            raise self.error
        return self.playlist


class FakeOAuth:
    def __init__(self, error=None):
        self.error = error
        self.codes = []

    def authorization_url(self):
        return "https://accounts.google.com/o/oauth2/auth?access_type=offline"

    def handle_callback(self, code):
        self.codes.append(code)
        if not code:
            raise AuthInvalid("Missing authorization code")
        if self.error:
            raise self.error
        return SimpleNamespace(refresh_token="rt")


def _runtime(source=None, destination=None, oauth=None):
    return Runtime(
        rotation=None,
        tokens=None,
        source=source or FakeSource(),
        destination=destination or DictDestination({}),
        oauth=oauth or FakeOAuth(),
    )


def _payload(tracks, source="spotify", dest="youtube", name="Mix"):
    return {
        "sourcePlatform": source,
        "destinationPlatform": dest,
        "playlistData": {"name": name, "tracks": tracks},
    }


# ------------------------------------------------------------
# Source playlist
# ------------------------------------------------------------


def test_get_source_playlist_ok():
    playlist = SourcePlaylist("Road Trip", "", [Track("One", "A")])
    resp = get_source_playlist(_runtime(source=FakeSource(playlist)), "abc")

    assert resp.status == 200
    assert resp.body["name"] == "Road Trip"
    assert resp.body["tracks"] == [{"name": "One", "artist": "A", "album": ""}]


def test_get_source_playlist_missing_id_is_400():
    resp = get_source_playlist(_runtime(), "")
    assert resp.status == 400
    assert resp.result is RunResult.INVALID_INPUT


def test_get_source_playlist_invalid_input_is_400():
    resp = get_source_playlist(_runtime(source=FakeSource(error=InvalidInput("bad"))), "x")
    assert resp.status == 400


def test_get_source_playlist_read_failure_is_500():
    resp = get_source_playlist(_runtime(source=FakeSource(error=SourceReadError("boom"))), "x")
    assert resp.status == 500
    assert resp.body == {"error": "Failed to fetch the playlist."}


def test_get_source_playlist_auth_failure_is_500():
    resp = get_source_playlist(_runtime(source=FakeSource(error=AuthFailed("boom"))), "x")
    assert resp.status == 500
    assert resp.result is RunResult.FAILED


# ------------------------------------------------------------
# Conversion
# ------------------------------------------------------------


def test_convert_partial_success_reports_counts():
    dest = DictDestination({"One": "v1", "Three": "v3"})
    tracks = [
        {"name": "One", "artist": "A"},
        {"name": "Two", "artist": "B"},
        {"name": "Three", "artist": "C"},
    ]

    resp = convert(_runtime(destination=dest), _payload(tracks))

    assert resp.status == 200
    assert resp.body == {
        "playlistUrl": "https://example.invalid/playlist",
        "matched": 2,
        "skipped": 1,
    }
    assert dest.builds == [("Mix", ["v1", "v3"])]


def test_convert_unsupported_pair_is_400_and_does_no_work():
    dest = DictDestination({"One": "v1"})
    resp = convert(
        _runtime(destination=dest),
        _payload([{"name": "One", "artist": "A"}], source="youtube", dest="spotify"),
    )

    assert resp.status == 400
    assert resp.result is RunResult.INVALID_INPUT
    assert dest.builds == []


def test_convert_malformed_body_is_400():
    assert convert(_runtime(), None).status == 400
    assert convert(_runtime(), {"sourcePlatform": "spotify", "destinationPlatform": "youtube"}).status == 400
    bad_tracks = _payload("nope")
    assert convert(_runtime(), bad_tracks).status == 400


def test_convert_zero_matches_is_500_and_creates_nothing():
    dest = DictDestination({})
    resp = convert(_runtime(destination=dest), _payload([{"name": "One", "artist": "A"}]))

    assert resp.status == 500
    assert resp.result is RunResult.NO_MATCH
    assert resp.body == {"error": "An error occurred while converting the playlist."}
    assert dest.builds == []


def test_convert_invalid_tracks_are_skipped_not_rejected():
    dest = DictDestination({"One": "v1"})
    tracks = [{"name": "One", "artist": "A"}, {"artist": "B"}, "garbage"]

    resp = convert(_runtime(destination=dest), _payload(tracks))

    assert resp.status == 200
    assert resp.body["skipped"] == 2


def test_convert_auth_failure_is_500():
    class NoAuthDestination(DictDestination):
        def build(self, name, item_ids):
            raise AuthInvalid("no refresh token")

    resp = convert(
        _runtime(destination=NoAuthDestination({"One": "v1"})),
        _payload([{"name": "One", "artist": "A"}]),
    )
    assert resp.status == 500
    assert resp.result is RunResult.AUTH_INVALID
    assert resp.result.exit_code == 12


# ------------------------------------------------------------
# Authorization hand-off
# ------------------------------------------------------------


def test_authorization_url_is_redirect():
    resp = authorization_url(_runtime())
    assert resp.status == 302
    assert resp.location.startswith("https://accounts.google.com/")


def test_oauth_callback_success():
    oauth = FakeOAuth()
    resp = oauth_callback(_runtime(oauth=oauth), "code-123")

    assert resp.status == 200
    assert resp.body == "Authentication successful! You can close this window."
    assert oauth.codes == ["code-123"]


def test_oauth_callback_missing_code_is_400():
    resp = oauth_callback(_runtime(), None)
    assert resp.status == 400


def test_oauth_callback_exchange_failure_is_500():
    resp = oauth_callback(_runtime(oauth=FakeOAuth(error=AuthFailed("boom"))), "code")
    assert resp.status == 500
    assert resp.result is RunResult.FAILED


def test_convert_unexpected_failure_is_500_with_generic_message():
    class UnreachableDestination(DictDestination):
        def build(self, name, item_ids):
            raise httplib2.ServerNotFoundError("dns")

    resp = convert(
        _runtime(destination=UnreachableDestination({"One": "v1"})),
        _payload([{"name": "One", "artist": "A"}]),
    )

    assert resp.status == 500
    assert resp.result is RunResult.FAILED
    assert resp.body == {"error": "An error occurred while converting the playlist."}


def test_get_source_playlist_unexpected_failure_is_500():
    resp = get_source_playlist(
        _runtime(source=FakeSource(error=httplib2.ServerNotFoundError("dns"))), "abc"
    )
    assert resp.status == 500
    assert resp.body == {"error": "Failed to fetch the playlist."}
