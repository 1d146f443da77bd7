# report.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

import requests

from sizes import format_size
from steam import ApiResult, fetch_file_details


HIDDEN = "ERROR -> OBJECT IS HIDDEN OR UNAVAILABLE"


class SortOrder(str, Enum):
    NONE = "none"
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, text: Optional[str]) -> "SortOrder":
        """Blank means API order; raises ValueError for anything else unknown."""
        s = (text or "").strip().upper()
        if s in ("", "NONE"):
            return cls.NONE
        return cls(s)


@dataclass
class ItemRecord:
    file_id: str
    title: Optional[str] = None
    size: int = 0

    @property
    def available(self) -> bool:
        return self.title is not None


@dataclass
class Aggregate:
    lines: List[str] = field(default_factory=list)
    total: int = 0


def parse_size(value) -> int:
    try:
        size = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return max(size, 0)


def dedupe(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


def to_record(detail: dict) -> ItemRecord:
    title = detail.get("title")
    return ItemRecord(
        file_id=str(detail.get("publishedfileid", "?")),
        title=None if title is None else str(title),
        size=parse_size(detail.get("file_size")) if title is not None else 0,
    )


def sort_records(records: List[ItemRecord], order: SortOrder) -> List[ItemRecord]:
    if order is SortOrder.NONE:
        return list(records)
    return sorted(records, key=lambda r: r.size, reverse=order is SortOrder.DESC)


def render(records: List[ItemRecord], requested: int) -> Aggregate:
    out = Aggregate()
    for position, rec in enumerate(records, 1):
        prefix = f"({position}/{requested}) {rec.file_id:<10} :"
        if rec.available:
            out.lines.append(f"{prefix} {rec.title} [{format_size(rec.size)}]")
            out.total += rec.size
        else:
            out.lines.append(f"{prefix} {HIDDEN}")
    out.lines.append(f"Total size: {format_size(out.total)}.")
    return out


def aggregate(
    items: List[str],
    order: SortOrder = SortOrder.NONE,
    session: Optional[requests.Session] = None,
) -> ApiResult[Aggregate]:
    """Look up every item in one request and build the per-item report plus total."""
    result = fetch_file_details(items, session=session)
    if not result.ok:
        return ApiResult.failure(result.error, result.detail)
    records = [to_record(d) for d in result.value]
    return ApiResult.success(render(sort_records(records, order), len(items)))
