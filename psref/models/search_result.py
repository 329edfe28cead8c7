# psref/models/search_result.py

"""Keyword search hits and reading resources."""

from dataclasses import dataclass
from typing import Any

from psref.models import wire
from psref.models.catalog import PID


@dataclass
class SearchResult:
    """A product matched by keyword search."""

    pid: PID = 0
    name: str = ""
    models: int = 0  # number of models of this product that matched

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            pid=wire.get_pid(data, "ProductId"),
            name=wire.get_str(data, "ProductName"),
            models=wire.get_int(data, "ModelCount"),
        )


def decode_search_response(payload: Any) -> list[SearchResult]:
    """Unwrap the ``{"result": [...]}`` envelope of the search endpoint."""
    data = wire.require_object(payload, "search response")
    return wire.get_list(data, "result", SearchResult.from_dict)


@dataclass
class Book:
    """A resource for users to read."""

    title: str = ""
    url: str = ""
    geo: str = ""
    remark: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Book":
        return cls(
            title=wire.get_str(data, "BookTitle"),
            url=wire.get_str(data, "BookLink"),
            geo=wire.get_str(data, "Geo"),
            remark=wire.get_str(data, "Remark"),
        )
