import pytest
from spotipy.exceptions import SpotifyException

from errors import InvalidInput, SourceReadError
from providers.spotify.client import SpotifyPlaylistReader, extract_playlist_id

from helpers import FakeTokens


def _item(name, artists, album="Album"):
    return {
        "track": {
            "name": name,
            "artists": [{"name": a} for a in artists],
            "album": {"name": album},
        }
    }


class FakeSpotify:
    def __init__(self, pages, fail=False):
        self.pages = pages
        self.fail = fail
        self.next_calls = 0

    def playlist(self, playlist_id):
        if self.fail:
            raise SpotifyException(404, -1, "Not found")
        return {
            "name": "Road Trip",
            "description": "songs",
            "tracks": self.pages[0],
        }

    def next(self, page):
        self.next_calls += 1
        return self.pages[self.next_calls]


def _reader(sp):
    tokens_seen = []

    def factory(token):
        tokens_seen.append(token)
        return sp

    return SpotifyPlaylistReader(FakeTokens(), client_factory=factory), tokens_seen


def test_extract_playlist_id_accepts_id_uri_and_url():
    assert extract_playlist_id("37i9dQZF1DXcBWIGoYBM5M") == "37i9dQZF1DXcBWIGoYBM5M"
    assert extract_playlist_id("spotify:playlist:abc123") == "abc123"
    assert extract_playlist_id("https://open.spotify.com/playlist/abc123?si=x") == "abc123"
    assert extract_playlist_id("https://open.spotify.com/intl-de/playlist/abc123") == "abc123"


def test_extract_playlist_id_rejects_empty():
    with pytest.raises(InvalidInput):
        extract_playlist_id("  ")


def test_fetch_playlist_follows_pages_and_joins_artists():
    sp = FakeSpotify([
        {"items": [_item("One", ["A", "B"])], "next": "page-2"},
        {"items": [_item("Two", ["C"])], "next": None},
    ])
    reader, tokens_seen = _reader(sp)

    playlist = reader.fetch_playlist("https://open.spotify.com/playlist/abc123")

    assert tokens_seen == ["source-token"]
    assert playlist.name == "Road Trip"
    assert [(t.name, t.artist) for t in playlist.tracks] == [("One", "A, B"), ("Two", "C")]
    assert sp.next_calls == 1


def test_fetch_playlist_skips_removed_tracks():
    sp = FakeSpotify([
        {"items": [{"track": None}, _item("Kept", ["A"]), {"track": {"name": ""}}], "next": None},
    ])
    reader, _ = _reader(sp)

    assert [t.name for t in reader.fetch_playlist("abc").tracks] == ["Kept"]


def test_fetch_playlist_failure_is_source_read_error():
    reader, _ = _reader(FakeSpotify([], fail=True))
    with pytest.raises(SourceReadError):
        reader.fetch_playlist("abc")


def test_playlist_as_dict_shape():
    sp = FakeSpotify([{"items": [_item("One", ["A"])], "next": None}])
    reader, _ = _reader(sp)

    data = reader.fetch_playlist("abc").as_dict()
    assert data == {
        "name": "Road Trip",
        "description": "songs",
        "tracks": [{"name": "One", "artist": "A", "album": "Album"}],
    }
