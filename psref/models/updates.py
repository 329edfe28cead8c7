# psref/models/updates.py

"""Change feed snapshot returned by the updates endpoint."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from psref.models import wire
from psref.models.catalog import PID


@dataclass
class UpdatedProduct:
    """One entry of the change feed."""

    pid: PID = 0
    title: str = ""
    reason: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpdatedProduct":
        return cls(
            pid=wire.get_pid(data, "productId"),
            title=wire.get_str(data, "title"),
            reason=wire.get_str(data, "reason"),
        )


@dataclass
class Updates:
    """Current data version plus added, updated and withdrawn products.

    ``version`` and ``version_ts`` are not sent by the service; they are
    extracted from ``version_title`` after decoding.
    """

    version: int = 0
    version_ts: datetime | None = None
    version_title: str = ""
    new: list[UpdatedProduct] = field(
        default_factory=lambda: list[UpdatedProduct]()
    )
    updated: list[UpdatedProduct] = field(
        default_factory=lambda: list[UpdatedProduct]()
    )
    withdrawn: list[UpdatedProduct] = field(
        default_factory=lambda: list[UpdatedProduct]()
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Updates":
        return cls(
            version_title=wire.get_str(data, "LatestUpdateVersion"),
            new=wire.get_list(data, "New", UpdatedProduct.from_dict),
            updated=wire.get_list(data, "Updated", UpdatedProduct.from_dict),
            withdrawn=wire.get_list(
                data, "Withdrawn", UpdatedProduct.from_dict
            ),
        )
