# psref/services/resolver.py

"""Resolve a model code to its product ID through keyword search."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from psref.errors import MultipleModelsError, MultipleProductsError, NotFoundError
from psref.models.catalog import PID
from psref.models.product import ModelCode
from psref.models.search_result import SearchResult
from psref.transport.cancellation import CancelToken

logger = logging.getLogger("psref.resolver")

SearchFunc = Callable[[str, CancelToken | None], list[SearchResult]]


@dataclass
class Resolution:
    """The single product a model code belongs to."""

    pid: PID
    model_count: int


def resolve_product(
    search: SearchFunc,
    code: ModelCode,
    cancel: CancelToken | None = None,
) -> Resolution:
    """Find the one product whose models match *code*.

    This costs a search request on top of the lookup itself; callers
    that already know the product ID should not use it.

    Raises:
        NotFoundError: the search returned nothing.
        MultipleProductsError: hits point at more than one product.
    """
    results = search(code, cancel)
    if not results:
        raise NotFoundError(f"model code {code!r}: no search results")

    pid = results[0].pid
    count = results[0].models
    for hit in results[1:]:
        if hit.pid != pid:
            logger.info(
                "Model code %s matched products %d and %d",
                code,
                pid,
                hit.pid,
            )
            raise MultipleProductsError()
        count += hit.models

    logger.debug(
        "Model code %s resolved to product %d (%d models)", code, pid, count
    )
    return Resolution(pid=pid, model_count=count)


def resolve_model(
    search: SearchFunc,
    code: ModelCode,
    cancel: CancelToken | None = None,
) -> Resolution:
    """Like :func:`resolve_product`, but the code must match one model.

    Raises:
        MultipleModelsError: the hits add up to more than one model.
    """
    resolution = resolve_product(search, code, cancel)
    if resolution.model_count > 1:
        logger.info(
            "Model code %s matched %d models", code, resolution.model_count
        )
        raise MultipleModelsError()
    return resolution
