"""Terminal rendering of a single crate lookup."""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any

from .models import CrateDocument
from .timestamp import TimeFormat

logger = logging.getLogger(__name__)

LABEL_WIDTH = 16

FIELD_LABELS = {
    "name": "Crate:",
    "max_version": "Version:",
    "description": "Description:",
    "downloads": "Downloads:",
    "homepage": "Homepage:",
    "documentation": "Documentation:",
    "repository": "Repository:",
    "license": "License:",
    "keywords": "Keywords:",
    "created_at": "Created at:",
    "updated_at": "Updated at:",
    "last_updated": "Last updated:",
}

# Fields print_field accepts; downloads is the only one shown when empty.
PRINTABLE_FIELDS = ("repository", "documentation", "downloads", "homepage")

SUMMARY_FIELDS = (
    "name",
    "max_version",
    "description",
    "downloads",
    "homepage",
    "documentation",
    "repository",
)

VERSION_COLUMNS = (("VERSION", 10), ("RELEASE DATE", 22), ("DOWNLOADS", 11))


class Verbosity(Enum):
    COMPACT = "compact"
    VERBOSE = "verbose"

    @classmethod
    def of(cls, verbose: bool) -> "Verbosity":
        return cls.VERBOSE if verbose else cls.COMPACT


def labelled(field: str, value: Any) -> str:
    """Format one ``<label><value>`` line with the label left-aligned."""
    return f"{FIELD_LABELS[field]:<{LABEL_WIDTH}}{value}"


def keyword_list(keywords: tuple[str, ...] | list[str], verbosity: Verbosity) -> str:
    """Render keywords as a bracketed list of quoted strings."""
    if verbosity is Verbosity.VERBOSE:
        return json.dumps(list(keywords), ensure_ascii=False)
    return json.dumps(list(keywords), ensure_ascii=False, separators=(",", ":"))


def _columns(*values: Any) -> str:
    return "".join(f"{value!s:<{width}}" for value, (_, width) in zip(values, VERSION_COLUMNS))


class CrateView:
    """Formats the reportable aspects of one crate.

    The raw response is normalized exactly once, here. Every ``print_*``
    method writes to stdout and is backed by a method returning the lines,
    so output is the same on every call for the same document.
    """

    def __init__(self, data: Any, now: datetime | None = None):
        """Initialize the view.

        Args:
            data: Parsed crates.io response body
            now: Reference time for relative dates; defaults to the current time
        """
        self.document = CrateDocument.from_json(data)
        self.now = now

    @property
    def crate(self):
        return self.document.crate

    def summary_lines(self, verbose: bool = False) -> list[str]:
        """Lines of the crate summary block."""
        crate = self.crate
        lines = [labelled(field, getattr(crate, field)) for field in SUMMARY_FIELDS]

        if Verbosity.of(verbose) is Verbosity.VERBOSE:
            lines.extend(
                [
                    labelled("license", crate.license),
                    labelled("keywords", keyword_list(crate.keywords, Verbosity.VERBOSE)),
                    labelled("created_at", crate.created.render(TimeFormat.ABSOLUTE)),
                    labelled("updated_at", crate.updated.render(TimeFormat.ABSOLUTE)),
                ]
            )
        else:
            lines.append(
                labelled("last_updated", crate.updated.render(TimeFormat.RELATIVE, now=self.now))
            )

        return lines

    def field_line(self, which: str, verbose: bool = False) -> str | None:
        """The single line for one field, or None when there is nothing to show.

        Raises:
            ValueError: If ``which`` is not one of PRINTABLE_FIELDS
        """
        if which not in PRINTABLE_FIELDS:
            raise ValueError(f"Unknown field: {which}")

        if which == "downloads":
            value = str(self.crate.downloads)
        else:
            value = self.document.field(which)
            if not value:
                return None

        if Verbosity.of(verbose) is Verbosity.VERBOSE:
            return labelled(which, value)
        return value

    def version_lines(self, limit: int) -> list[str]:
        """Header, rows and overflow hint of the version history table."""
        if limit <= 0:
            return []

        lines = [_columns(*(title for title, _ in VERSION_COLUMNS)), ""]

        for version in self.document.versions[:limit]:
            row = _columns(version.num, version.released.render(TimeFormat.ABSOLUTE), version.downloads)
            if version.yanked:
                row += "(yanked)"
            lines.append(row)

        total = len(self.document.versions)
        if limit < total:
            lines.extend(["", f"... use -VV to show all {total} versions"])

        return lines

    def keywords_line(self, verbose: bool = False) -> str:
        keywords = [entry.keyword for entry in self.document.keywords]
        return keyword_list(keywords, Verbosity.of(verbose))

    def summary(self, verbose: bool = False) -> None:
        print("\n".join(self.summary_lines(verbose)))

    def print_field(self, which: str, verbose: bool = False) -> None:
        line = self.field_line(which, verbose)
        if line is None:
            logger.debug(f"No {which} recorded for crate {self.crate.name!r}")
            return
        print(line)

    def print_versions(self, limit: int, verbose: bool = False) -> None:
        # Verbose mode shows the same table for now
        lines = self.version_lines(limit)
        if lines:
            print("\n".join(lines))

    def print_keywords(self, verbose: bool = False) -> None:
        print(self.keywords_line(verbose))
