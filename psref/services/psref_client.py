# psref/services/psref_client.py

"""Read-only client for the PSREF product catalog API."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar
from urllib.parse import quote

from psref.config.client_config import ClientConfig
from psref.config.settings import Settings
from psref.filters.normalizer import RecordNormalizer
from psref.filters.version_parser import VersionParser
from psref.models import wire
from psref.models.catalog import PID, ProductType
from psref.models.product import Model, ModelCode, Product
from psref.models.search_result import (
    Book,
    SearchResult,
    decode_search_response,
)
from psref.models.updates import Updates
from psref.services.resolver import resolve_model, resolve_product
from psref.transport.cancellation import CancelToken
from psref.transport.request_executor import RequestExecutor

logger = logging.getLogger("psref.client")

T = TypeVar("T")


def _list_of(
    decode: Callable[[dict[str, Any]], T], what: str
) -> Callable[[Any], list[T]]:
    def decode_list(payload: Any) -> list[T]:
        return [
            decode(wire.require_object(item, what))
            for item in wire.require_list(payload, what)
        ]

    return decode_list


def _object_of(
    decode: Callable[[dict[str, Any]], T], what: str
) -> Callable[[Any], T]:
    def decode_object(payload: Any) -> T:
        return decode(wire.require_object(payload, what))

    return decode_object


@dataclass
class ProductQuery:
    """Optional filters for the product detail endpoint.

    Empty strings and a zero page are not sent.
    """

    clsf: str = ""
    sc: str = ""
    qt: str = ""
    kw: str = ""
    page: int = 0

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.clsf:
            params["clsf"] = self.clsf
        if self.sc:
            params["sc"] = self.sc
        if self.qt:
            params["qt"] = self.qt
        if self.page:
            params["pagenumber"] = str(self.page)
        if self.kw:
            params["kw"] = self.kw
        return params


class PsrefClient:
    """Client for the PSREF API.

    By default requests are retried a few times and sent at a
    conservative rate; see :class:`ClientConfig` to change either.
    Every method takes an optional :class:`CancelToken` that bounds how
    long it may block.
    """

    def __init__(self, config: ClientConfig | None = None) -> None:
        self.config = config if config is not None else ClientConfig()
        self.executor = RequestExecutor(self.config)

    def products(self, cancel: CancelToken | None = None) -> list[ProductType]:
        """All active products, grouped by type, line and series."""
        types = self.executor.get(
            Settings.PRODUCTS_PATH,
            _list_of(ProductType.from_dict, "product types"),
            cancel=cancel,
        )
        return [RecordNormalizer.product_type(t) for t in types]

    def withdrawn_products(
        self, cancel: CancelToken | None = None
    ) -> list[ProductType]:
        """Like :meth:`products`, but lists discontinued products."""
        types = self.executor.get(
            Settings.WITHDRAWN_PRODUCTS_PATH,
            _list_of(ProductType.from_withdrawn_dict, "withdrawn products"),
            cancel=cancel,
        )
        return [RecordNormalizer.product_type(t) for t in types]

    def updates(self, cancel: CancelToken | None = None) -> Updates:
        """Current data version and the products it added, changed or withdrew."""
        updates = self.executor.get(
            Settings.UPDATES_PATH,
            _object_of(Updates.from_dict, "updates"),
            cancel=cancel,
        )
        return VersionParser.parse(updates)

    def product_by_id(
        self,
        pid: PID,
        query: ProductQuery | None = None,
        cancel: CancelToken | None = None,
    ) -> Product:
        """Product information, including the list of all its models."""
        product = self.executor.get(
            Settings.PRODUCT_PATH.format(pid=int(pid)),
            _object_of(Product.from_dict, "product"),
            params=(query or ProductQuery()).to_params(),
            cancel=cancel,
        )
        return RecordNormalizer.product(product)

    def product_by_model_code(
        self, code: ModelCode, cancel: CancelToken | None = None
    ) -> Product:
        """Product information, given the code of one of its models.

        Goes through the search API, which is considerably slower than
        :meth:`product_by_id`.
        """
        resolution = resolve_product(self.search, code, cancel)
        return self.product_by_id(resolution.pid, cancel=cancel)

    def model_by_id(
        self,
        pid: PID,
        code: ModelCode,
        cancel: CancelToken | None = None,
    ) -> Model:
        """Full information about one model of a product."""
        model = self.executor.get(
            Settings.MODEL_PATH.format(pid=int(pid), code=quote(code, safe="")),
            _object_of(Model.from_dict, "model"),
            cancel=cancel,
        )
        model.code = code
        return RecordNormalizer.model(model)

    def model_by_code(
        self, code: ModelCode, cancel: CancelToken | None = None
    ) -> Model:
        """Full model information, given only its code.

        Goes through the search API, which is considerably slower than
        :meth:`model_by_id`.
        """
        resolution = resolve_model(self.search, code, cancel)
        return self.model_by_id(resolution.pid, code, cancel=cancel)

    def books(self, cancel: CancelToken | None = None) -> list[Book]:
        """Resources for users to read."""
        books = self.executor.get(
            Settings.BOOKS_PATH,
            _list_of(Book.from_dict, "books"),
            cancel=cancel,
        )
        return [RecordNormalizer.book(b) for b in books]

    def search(
        self, keywords: str, cancel: CancelToken | None = None
    ) -> list[SearchResult]:
        """Search PSREF data using keywords."""
        results = self.executor.get(
            Settings.SEARCH_PATH,
            decode_search_response,
            params={"kw": keywords},
            cancel=cancel,
        )
        logger.debug("Search %r returned %d results", keywords, len(results))
        return results
