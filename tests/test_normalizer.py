# tests/test_normalizer.py

"""Tests for URL repair and image unescaping."""

import unittest

from psref.filters.normalizer import (
    RecordNormalizer,
    normalize_url,
    unescape_image,
)
from psref.models.catalog import ProductLine, ProductType
from psref.models.product import Documentation, Model, Product
from psref.models.search_result import Book

ENCODED_IMAGE = (
    "http%3a%2f%2fpsref.lenovo.com%2fsyspool%2fSys%2fImage%2fLegion%2f"
    "Lenovo_Legion_5P_15IMH05H%2fCompressedimageForMobileShare%2f"
    "Lenovo_Legion_5P_15IMH05H_CT1_01.png"
)
DECODED_IMAGE = (
    "http://psref.lenovo.com/syspool/Sys/Image/Legion/"
    "Lenovo_Legion_5P_15IMH05H/CompressedimageForMobileShare/"
    "Lenovo_Legion_5P_15IMH05H_CT1_01.png"
)


class TestNormalizeUrl(unittest.TestCase):
    """Backslashes become slashes."""

    def test_replaces_every_backslash(self) -> None:
        self.assertEqual(
            normalize_url("https:\\\\host\\a\\b.pdf"),
            "https://host/a/b.pdf",
        )

    def test_idempotent(self) -> None:
        once = normalize_url("https://host\\a\\b")
        self.assertEqual(normalize_url(once), once)

    def test_leaves_clean_url_alone(self) -> None:
        self.assertEqual(normalize_url("https://host/a"), "https://host/a")
        self.assertEqual(normalize_url(""), "")


class TestUnescapeImage(unittest.TestCase):
    """Only http%-prefixed values are decoded."""

    def test_decodes_double_encoded(self) -> None:
        self.assertEqual(unescape_image(ENCODED_IMAGE), DECODED_IMAGE)

    def test_idempotent(self) -> None:
        once = unescape_image(ENCODED_IMAGE)
        self.assertEqual(unescape_image(once), once)

    def test_noop_without_prefix(self) -> None:
        for url in (
            "https%3a%2f%2fhost%2fimg.png",
            "https://host/a%20b.png",
            "",
        ):
            with self.subTest(url=url):
                self.assertEqual(unescape_image(url), url)

    def test_malformed_escape_unchanged(self) -> None:
        for url in (
            "http%3a%2f%2fhost%2fimg%zz.png",
            "http%3a%2f%2fhost%2fimg%",
            "http%",
        ):
            with self.subTest(url=url):
                self.assertEqual(unescape_image(url), url)

    def test_invalid_utf8_unchanged(self) -> None:
        url = "http%3a%2f%2fhost%2f%ff.png"
        self.assertEqual(unescape_image(url), url)


class TestRecordNormalizer(unittest.TestCase):
    """Every URL field of each record is repaired."""

    def test_product_fields(self) -> None:
        product = Product(
            ref_url="https://h\\p",
            spec_url="https://h\\s.pdf",
            us_pdf="https://h\\us.pdf",
            emea_pdf="https://h\\emea.pdf",
            ww_pdf="https://h\\ww.pdf",
            image=ENCODED_IMAGE,
            images=["https://h\\1.png", "https://h/2.png"],
            docs=[Documentation(url="https://h\\doc.pdf")],
        )
        RecordNormalizer.product(product)

        self.assertEqual(product.ref_url, "https://h/p")
        self.assertEqual(product.spec_url, "https://h/s.pdf")
        self.assertEqual(product.us_pdf, "https://h/us.pdf")
        self.assertEqual(product.emea_pdf, "https://h/emea.pdf")
        self.assertEqual(product.ww_pdf, "https://h/ww.pdf")
        self.assertEqual(product.image, DECODED_IMAGE)
        self.assertEqual(
            product.images, ["https://h/1.png", "https://h/2.png"]
        )
        self.assertEqual(product.docs[0].url, "https://h/doc.pdf")

    def test_unescaped_image_gets_path_repair(self) -> None:
        """Decoded backslashes (%5c) are repaired after unescaping."""
        product = Product(image="http%3a%2f%2fh%5cimg.png")
        RecordNormalizer.product(product)
        self.assertEqual(product.image, "http://h/img.png")

    def test_model_url(self) -> None:
        model = Model(model_url="https://h\\Detail\\X?M=1", ref_url="a\\b")
        RecordNormalizer.model(model)
        self.assertEqual(model.model_url, "https://h/Detail/X?M=1")
        self.assertEqual(model.ref_url, "a/b")

    def test_product_type_lines(self) -> None:
        ptype = ProductType(
            lineup=[ProductLine(image="h\\a.png"), ProductLine(image="")]
        )
        RecordNormalizer.product_type(ptype)
        self.assertEqual(
            [line.image for line in ptype.lineup], ["h/a.png", ""]
        )

    def test_book(self) -> None:
        book = RecordNormalizer.book(Book(url="https://h\\b.pdf"))
        self.assertEqual(book.url, "https://h/b.pdf")


if __name__ == "__main__":
    unittest.main()
