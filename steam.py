# steam.py
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

import requests

from config import TIMEOUT, USER_AGENT


COLLECTION_DETAILS = "https://api.steampowered.com/ISteamRemoteStorage/GetCollectionDetails/v1/"
FILE_DETAILS = "https://api.steampowered.com/ISteamRemoteStorage/GetPublishedFileDetails/v1/"

T = TypeVar("T")


def _session() -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": USER_AGENT})
    return s

_SESSION = _session()


class ApiError(Enum):
    NETWORK = "network"
    MALFORMED = "malformed"
    UNAVAILABLE = "unavailable"


@dataclass
class ApiResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ApiError] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError, detail: str = "") -> "ApiResult[T]":
        return cls(error=error, detail=detail)


@dataclass
class Resolution:
    object_id: str
    items: List[str] = field(default_factory=list)
    is_collection: bool = False


def _post(session: Optional[requests.Session], url: str, data: dict) -> dict:
    """POST a form and decode the JSON body; transport problems raise RequestException."""
    resp = (session or _SESSION).post(url, data=data, timeout=TIMEOUT)
    resp.raise_for_status()
    if not resp.content:
        raise requests.RequestException(f"empty response from {url}")
    return resp.json()


def resolve_collection(object_id: str, session: Optional[requests.Session] = None) -> ApiResult[Resolution]:
    """
    Expand a Workshop object into item ids.

    A collection yields its children; anything else (including an unknown id)
    yields the id itself.
    """
    data = {"collectioncount": 1, "publishedfileids[0]": object_id}
    try:
        payload = _post(session, COLLECTION_DETAILS, data)
    except ValueError as e:
        # requests raises a JSONDecodeError that is also a RequestException
        return ApiResult.failure(ApiError.MALFORMED, f"invalid JSON: {e}")
    except requests.RequestException as e:
        return ApiResult.failure(ApiError.NETWORK, str(e))

    try:
        details = payload["response"]["collectiondetails"][0]
        children = details.get("children")
        if children:
            items = [str(c["publishedfileid"]) for c in children if "publishedfileid" in c]
            return ApiResult.success(Resolution(object_id, items, is_collection=True))
        return ApiResult.success(Resolution(object_id, [object_id]))
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        return ApiResult.failure(ApiError.MALFORMED, f"unexpected collection response: {e!r}")


def fetch_file_details(ids: List[str], session: Optional[requests.Session] = None) -> ApiResult[List[dict]]:
    """Fetch title/file_size metadata for all ids in a single request."""
    if not ids:
        return ApiResult.success([])

    data = {"itemcount": len(ids)}
    for idx, file_id in enumerate(ids):
        data[f"publishedfileids[{idx}]"] = file_id

    try:
        payload = _post(session, FILE_DETAILS, data)
    except ValueError as e:
        # requests raises a JSONDecodeError that is also a RequestException
        return ApiResult.failure(ApiError.MALFORMED, f"invalid JSON: {e}")
    except requests.RequestException as e:
        return ApiResult.failure(ApiError.NETWORK, str(e))

    try:
        response = payload["response"]
        if "publishedfiledetails" not in response:
            return ApiResult.failure(ApiError.UNAVAILABLE)
        details = response["publishedfiledetails"]
        if not isinstance(details, list) or not all(isinstance(d, dict) for d in details):
            raise TypeError("publishedfiledetails is not a list of objects")
        return ApiResult.success(details)
    except (KeyError, TypeError) as e:
        return ApiResult.failure(ApiError.MALFORMED, f"unexpected details response: {e!r}")


if __name__ == "__main__":
    import sys
    if len(sys.argv) < 2:
        sys.exit("Usage: python steam.py <workshop id>")
    result = resolve_collection(sys.argv[1])
    if not result.ok:
        sys.exit(f"{result.error.value}: {result.detail}")
    details = fetch_file_details(result.value.items)
    print(json.dumps(details.value if details.ok else details.detail, indent=2, ensure_ascii=False))
