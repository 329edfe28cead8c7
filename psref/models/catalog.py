# psref/models/catalog.py

"""Product classification tree: type → line → series → product."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from psref.models import wire

PID = int


@dataclass
class ProductShort:
    """Short product description listed under a series."""

    pid: PID = 0
    key: str = ""
    name: str = ""
    withdrawn_status: int = 0
    updated: date | None = None
    model_modified: date | None = None
    config_modified: date | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductShort":
        return cls(
            pid=wire.get_pid(data, "ProductId"),
            key=wire.get_str(data, "ProductKey"),
            name=wire.get_str(data, "ProductName"),
            withdrawn_status=wire.get_int(data, "P_WdStatus"),
            updated=wire.get_date(data, "LastUpdated"),
            model_modified=wire.get_date(data, "ModelModifyDateTime"),
            config_modified=wire.get_date(data, "ConfigModifyDateTime"),
        )


@dataclass
class Series:
    name: str = ""
    products: list[ProductShort] = field(
        default_factory=lambda: list[ProductShort]()
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Series":
        return cls(
            name=wire.get_str(data, "SeriesName"),
            products=wire.get_list(data, "Products", ProductShort.from_dict),
        )


@dataclass
class ProductLine:
    """A product line grouping several series."""

    name: str = ""
    image: str = ""
    series: list[Series] = field(default_factory=lambda: list[Series]())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductLine":
        return cls(
            name=wire.get_str(data, "ProductLineName"),
            image=wire.get_str(data, "ImageUrl"),
            series=wire.get_list(data, "Series", Series.from_dict),
        )


@dataclass
class ProductType:
    """Top-level product type grouping several product lines."""

    name: str = ""
    bg_color: str = ""
    lineup: list[ProductLine] = field(
        default_factory=lambda: list[ProductLine]()
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductType":
        return cls(
            name=wire.get_str(data, "ClassificationName"),
            bg_color=wire.get_str(data, "BackgroundColor"),
            lineup=wire.get_list(data, "ProductLine", ProductLine.from_dict),
        )

    @classmethod
    def from_withdrawn_dict(cls, data: dict[str, Any]) -> "ProductType":
        """Decode an entry of the withdrawn list.

        That endpoint names the type ``ProductType`` instead of
        ``ClassificationName`` and sends no background colour.
        """
        return cls(
            name=wire.get_str(data, "ProductType"),
            lineup=wire.get_list(data, "ProductLine", ProductLine.from_dict),
        )
