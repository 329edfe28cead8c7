# psref/models/product.py

"""Full product and model records."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from psref.models import wire
from psref.models.catalog import PID

ModelCode = str


@dataclass
class ModelInfo:
    """Basic model info used in a product's model list."""

    code: ModelCode = ""
    summary: str = ""
    updated: date | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModelInfo":
        return cls(
            code=wire.get_str(data, "ModelCode"),
            summary=wire.get_str(data, "Summary"),
            updated=wire.get_date(data, "Updated"),
        )


@dataclass
class Documentation:
    """Reference to a documentation resource."""

    pid: PID = 0
    title: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Documentation":
        return cls(
            pid=wire.get_pid(data, "ProductId"),
            title=wire.get_str(data, "DocTitle"),
            url=wire.get_str(data, "DocLink"),
        )


@dataclass
class KeyValue:
    """One name/value row of a model specification."""

    name: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeyValue":
        return cls(
            name=wire.get_str(data, "Name"),
            value=wire.get_str(data, "Value"),
        )


@dataclass
class Product:
    """Full product information, including the list of its models."""

    pid: PID = 0
    key: str = ""
    name: str = ""
    ref_url: str = ""
    withdrawn_status: int = 0
    spec_url: str = ""
    us_pdf: str = ""
    emea_pdf: str = ""
    ww_pdf: str = ""
    image: str = ""
    images: list[str] = field(default_factory=lambda: list[str]())
    models: list[ModelInfo] = field(
        default_factory=lambda: list[ModelInfo]()
    )
    docs: list[Documentation] = field(
        default_factory=lambda: list[Documentation]()
    )

    @staticmethod
    def _product_fields(data: dict[str, Any]) -> dict[str, Any]:
        return {
            "pid": wire.get_pid(data, "ProductId"),
            "key": wire.get_str(data, "ProductKey"),
            "name": wire.get_str(data, "Name"),
            "ref_url": wire.get_str(data, "ProductURL"),
            "withdrawn_status": wire.get_int(data, "P_WdStatus"),
            "spec_url": wire.get_str(data, "Spec"),
            "us_pdf": wire.get_str(data, "US_Pdf"),
            "emea_pdf": wire.get_str(data, "EMEA_Pdf"),
            "ww_pdf": wire.get_str(data, "WW_Pdf"),
            "image": wire.get_str(data, "ImageForShare"),
            "images": wire.get_str_list(data, "Images"),
            "models": wire.get_list(data, "Models", ModelInfo.from_dict),
            "docs": wire.get_list(
                data, "Documentations", Documentation.from_dict
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        return cls(**cls._product_fields(data))


@dataclass
class Model(Product):
    """A single model with its exact specification.

    The service fills only part of the product fields here.
    """

    model_withdrawn_status: int = 0
    model_url: str = ""
    detail: list[KeyValue] = field(default_factory=lambda: list[KeyValue]())
    code: ModelCode = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Model":
        return cls(
            **cls._product_fields(data),
            model_withdrawn_status=wire.get_int(data, "M_WdStatus"),
            model_url=wire.get_str(data, "ModelURL"),
            detail=wire.get_list(data, "Detail", KeyValue.from_dict),
            code=wire.get_str(data, "ModelCode"),
        )

    def detail_by_name(self, name: str) -> str:
        """Return the first specification value called *name*, or ""."""
        for kv in self.detail:
            if kv.name == name:
                return kv.value
        return ""
