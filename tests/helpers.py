"""Fakes shared by the test modules."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httplib2
import requests
from googleapiclient.errors import HttpError

from models import Project
from providers.base import DestinationProvider


def make_projects(n: int = 3) -> List[Project]:
    return [
        Project(
            search_api_key=f"key-{i}",
            oauth_client_id=f"client-{i}",
            oauth_client_secret=f"secret-{i}",
            oauth_redirect_uri="http://localhost:5001/oauth2callback",
        )
        for i in range(n)
    ]


def search_item(
    video_id: str,
    title: str,
    description: str = "",
    width: int = 120,
    height: int = 90,
) -> Dict[str, Any]:
    return {
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title,
            "description": description,
            "thumbnails": {"default": {"width": width, "height": height}},
        },
    }


QUOTA_PAYLOAD = {
    "error": {
        "code": 403,
        "message": "The request cannot be completed because you have exceeded your quota.",
        "errors": [{"reason": "quotaExceeded", "domain": "youtube.quota"}],
    }
}


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


@dataclass
class FakeSession:
    """Queue of responses for requests.Session.get/post; records every call."""

    responses: List[Any] = field(default_factory=list)
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def _next(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def get(self, url: str, params: Optional[dict] = None, timeout: Any = None) -> Any:
        return self._next(url=url, params=dict(params or {}), timeout=timeout)

    def post(self, url: str, data: Any = None, auth: Any = None, timeout: Any = None) -> Any:
        return self._next(url=url, data=data, auth=auth, timeout=timeout)


def http_error(status: int = 403, reason: str = "forbidden") -> HttpError:
    content = json.dumps(
        {"error": {"code": status, "message": reason, "errors": [{"reason": reason}]}}
    ).encode("utf-8")
    return HttpError(httplib2.Response({"status": str(status)}), content)


class _Call:
    def __init__(self, fn):
        self.fn = fn

    def execute(self):
        return self.fn()


class FakeYouTube:
    """Minimal playlists/playlistItems surface of the YouTube discovery client."""

    def __init__(
        self,
        playlist_id: str = "PL123",
        fail_create: bool = False,
        fail_videos=(),
        unreachable_videos=(),
    ):
        self.playlist_id = playlist_id
        self.fail_create = fail_create
        self.fail_videos = set(fail_videos)
        self.unreachable_videos = set(unreachable_videos)
        self.created: List[Dict[str, Any]] = []
        self.inserted: List[str] = []

    def playlists(self):
        return self

    def playlistItems(self):
        return _Items(self)

    def insert(self, part: str, body: Dict[str, Any]):
        def _op():
            if self.fail_create:
                raise http_error(403, "forbidden")
            self.created.append({"part": part, "body": body})
            return {"id": self.playlist_id}

        return _Call(_op)


class _Items:
    def __init__(self, yt: FakeYouTube):
        self.yt = yt

    def insert(self, part: str, body: Dict[str, Any]):
        video_id = body["snippet"]["resourceId"]["videoId"]

        def _op():
            if video_id in self.yt.fail_videos:
                raise http_error(404, "videoNotFound")
            if video_id in self.yt.unreachable_videos:
                raise httplib2.ServerNotFoundError("Unable to find the server")
            self.yt.inserted.append(video_id)
            return {"id": f"item-{video_id}"}

        return _Call(_op)


class FakeTokens:
    """Stands in for TokenLifecycleManager; counts destination checks."""

    def __init__(self):
        self.destination_checks = 0
        self.credentials = object()

    def ensure_destination_token(self):
        self.destination_checks += 1
        return self.credentials

    def ensure_source_token(self):
        return "source-token"


class DictDestination(DestinationProvider):
    """Destination whose matches come from a name → id mapping."""

    name = "fake"

    def __init__(self, matches: Dict[str, str]):
        self.matches = matches
        self.builds: List[tuple] = []

    def match(self, track):
        return self.matches.get(track.name)

    def build(self, name, item_ids):
        self.builds.append((name, list(item_ids)))
        return "https://example.invalid/playlist"
