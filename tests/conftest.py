import json

import pytest
import requests

from steam import COLLECTION_DETAILS, FILE_DETAILS


class FakeResponse:
    def __init__(self, payload=None, status_code=200, raw=None):
        self.status_code = status_code
        self._payload = payload
        if raw is not None:
            self.content = raw
        else:
            self.content = b"" if payload is None else json.dumps(payload).encode()

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Answers POSTs from a {url: response} table and records every call."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def post(self, url, data=None, timeout=None):
        self.calls.append((url, dict(data or {})))
        answer = self.routes[url]
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return answer(data)
        return answer


def collection_payload(*children):
    detail = {"publishedfileid": "1448345830", "result": 1}
    if children:
        detail["children"] = [{"publishedfileid": c, "sortorder": i, "filetype": 0} for i, c in enumerate(children)]
    return {"response": {"result": 1, "resultcount": 1, "collectiondetails": [detail]}}


def details_payload(*items):
    """items are (id, title, size) tuples; title None means hidden."""
    out = []
    for file_id, title, size in items:
        d = {"publishedfileid": file_id, "result": 1}
        if title is not None:
            d["title"] = title
            d["file_size"] = size
        else:
            d["result"] = 9
        out.append(d)
    return {"response": {"result": 1, "resultcount": len(out), "publishedfiledetails": out}}


@pytest.fixture
def fake_session():
    def make(collection=None, details=None):
        return FakeSession({COLLECTION_DETAILS: collection, FILE_DETAILS: details})
    return make
