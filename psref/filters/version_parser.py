# psref/filters/version_parser.py

"""Structured data extracted from the free text of the change feed."""

import logging
import re
from datetime import datetime, timezone

from psref.models.updates import UpdatedProduct, Updates

logger = logging.getLogger("psref.filters")


class VersionParser:
    """Parse the version title and update reasons of an Updates snapshot.

    Extraction that finds nothing leaves the field at its zero value;
    none of these steps can fail the request.
    """

    _VERSION_RE = re.compile(r"Version (\d+)", re.ASCII)
    # e.g. " Jan.2, 2024"
    _VERSION_TS_RE = re.compile(r" (\w{3}\.\d{1,2}, \d{4})", re.ASCII)
    _VERSION_TS_FORMAT = "%b.%d, %Y"

    RECOGNIZED_REASONS: frozenset[str] = frozenset(
        {"new model added", "spec updated"}
    )

    @staticmethod
    def clean_title(title: str) -> str:
        """Drop the ``<b>``/``</b>`` wrapper and surrounding whitespace."""
        title = title.removeprefix("<b>").removesuffix("</b>")
        return title.strip()

    @classmethod
    def parse_version(cls, title: str) -> int:
        match = cls._VERSION_RE.search(title)
        if not match:
            return 0
        return int(match.group(1))

    @classmethod
    def parse_timestamp(cls, title: str) -> datetime | None:
        match = cls._VERSION_TS_RE.search(title)
        if not match:
            return None
        try:
            parsed = datetime.strptime(
                match.group(1), cls._VERSION_TS_FORMAT
            )
        except ValueError:
            logger.debug(
                "Unparseable version timestamp %r", match.group(1)
            )
            return None
        return parsed.replace(tzinfo=timezone.utc)

    @classmethod
    def split_update_reason(cls, entry: UpdatedProduct) -> UpdatedProduct:
        """Move a recognised trailing ``(reason)`` out of the title.

        ``"Widget X (new model added)"`` becomes title ``"Widget X"``
        with reason ``"new model added"``.  Any other parenthetical is
        left in place.
        """
        if not entry.title.endswith(")"):
            return entry
        body = entry.title[:-1]
        open_at = body.rfind("(")
        if open_at <= 0:
            return entry
        reason = body[open_at + 1:]
        if reason in cls.RECOGNIZED_REASONS:
            entry.title = entry.title[:open_at].strip()
            entry.reason = reason
        return entry

    @classmethod
    def parse(cls, updates: Updates) -> Updates:
        """Fill the derived fields of *updates* in place."""
        updates.version_title = cls.clean_title(updates.version_title)
        updates.version = cls.parse_version(updates.version_title)
        updates.version_ts = cls.parse_timestamp(updates.version_title)
        for entry in updates.updated:
            cls.split_update_reason(entry)
        return updates
