# psref/filters/normalizer.py

"""URL repair applied to decoded records before they reach the caller."""

import logging
import re
from urllib.parse import unquote

from psref.models.catalog import ProductLine, ProductType
from psref.models.product import Model, Product
from psref.models.search_result import Book

logger = logging.getLogger("psref.filters")

_DOUBLE_ENCODED_PREFIX = "http%"

# A '%' not followed by two hex digits
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def normalize_url(url: str) -> str:
    """Turn the Windows-style separators the service emits into slashes."""
    return url.replace("\\", "/")


def unescape_image(url: str) -> str:
    """Percent-decode an image URL that arrived double-encoded.

    Only strings starting with ``http%`` are touched.  Malformed escapes
    or bytes that do not decode as UTF-8 leave the input unchanged.
    """
    if not url.startswith(_DOUBLE_ENCODED_PREFIX):
        return url
    if _BAD_ESCAPE_RE.search(url):
        logger.debug("Malformed escape in image URL kept as is: %s", url)
        return url
    try:
        return unquote(url, errors="strict")
    except UnicodeDecodeError:
        logger.debug("Undecodable image URL kept as is: %s", url)
        return url


class RecordNormalizer:
    """In-place URL repair for each record shape."""

    @staticmethod
    def product_line(line: ProductLine) -> ProductLine:
        line.image = normalize_url(line.image)
        return line

    @staticmethod
    def product_type(product_type: ProductType) -> ProductType:
        for line in product_type.lineup:
            RecordNormalizer.product_line(line)
        return product_type

    @staticmethod
    def product(product: Product) -> Product:
        """Repair every URL of a product (or model) record.

        The share image is unescaped before its separators are fixed.
        """
        product.image = normalize_url(unescape_image(product.image))
        product.ref_url = normalize_url(product.ref_url)
        product.spec_url = normalize_url(product.spec_url)
        product.us_pdf = normalize_url(product.us_pdf)
        product.emea_pdf = normalize_url(product.emea_pdf)
        product.ww_pdf = normalize_url(product.ww_pdf)
        product.images = [normalize_url(u) for u in product.images]
        for doc in product.docs:
            doc.url = normalize_url(doc.url)
        return product

    @staticmethod
    def model(model: Model) -> Model:
        RecordNormalizer.product(model)
        model.model_url = normalize_url(model.model_url)
        return model

    @staticmethod
    def book(book: Book) -> Book:
        book.url = normalize_url(book.url)
        return book
