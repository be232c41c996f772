"""Selection and dispatch of the reports requested for each crate."""

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .crate_view import CrateView
from .registry_client import RegistryError, RegistryResponse

logger = logging.getLogger(__name__)

RECENT_VERSIONS = 5
ALL_VERSIONS = sys.maxsize


class Flag(Enum):
    """A single report the user can ask for."""

    REPOSITORY = "repository"
    DOCUMENTATION = "documentation"
    DOWNLOADS = "downloads"
    HOMEPAGE = "homepage"
    SUMMARY = "summary"


# Order in which field reports are printed, whatever order they were asked in.
FIELD_FLAGS = (Flag.REPOSITORY, Flag.DOCUMENTATION, Flag.DOWNLOADS, Flag.HOMEPAGE)

_DISPATCH: dict[Flag, Callable[[CrateView, bool], None]] = {
    Flag.REPOSITORY: lambda view, verbose: view.print_field("repository", verbose),
    Flag.DOCUMENTATION: lambda view, verbose: view.print_field("documentation", verbose),
    Flag.DOWNLOADS: lambda view, verbose: view.print_field("downloads", verbose),
    Flag.HOMEPAGE: lambda view, verbose: view.print_field("homepage", verbose),
    Flag.SUMMARY: lambda view, verbose: view.summary(verbose),
}


def versions_depth(count: int) -> int:
    """Map how often the versions flag was given to a history depth.

    Examples:
        >>> versions_depth(0)
        0
        >>> versions_depth(1)
        5
        >>> versions_depth(2) == ALL_VERSIONS
        True
    """
    if count <= 0:
        return 0
    if count == 1:
        return RECENT_VERSIONS
    return ALL_VERSIONS


@dataclass(frozen=True)
class ReportRequest:
    """What to show for every crate looked up in one invocation."""

    flags: tuple[Flag, ...] = (Flag.SUMMARY,)
    verbose: bool = False
    raw_json: bool = False
    versions: int = 0
    keywords: bool = False

    @classmethod
    def from_options(
        cls,
        repository: bool = False,
        documentation: bool = False,
        downloads: bool = False,
        homepage: bool = False,
        verbose: bool = False,
        raw_json: bool = False,
        versions: int = 0,
        keywords: bool = False,
    ) -> "ReportRequest":
        """Build a request from command-line switches.

        Args:
            repository: Report the repository URL
            documentation: Report the documentation URL
            downloads: Report the download count
            homepage: Report the home page URL
            verbose: Use labelled, more detailed output
            raw_json: Print the registry response instead of a report
            versions: How many times the versions switch was given
            keywords: Report the crate's keywords

        Returns:
            ReportRequest; with no field switch set, flags is (Flag.SUMMARY,)

        Raises:
            ValueError: If raw_json is combined with a field switch
        """
        selected = {
            Flag.REPOSITORY: repository,
            Flag.DOCUMENTATION: documentation,
            Flag.DOWNLOADS: downloads,
            Flag.HOMEPAGE: homepage,
        }
        flags = tuple(flag for flag in FIELD_FLAGS if selected[flag])

        if raw_json and flags:
            names = ", ".join(flag.value for flag in flags)
            raise ValueError(f"raw JSON output cannot be combined with: {names}")

        return cls(
            flags=flags or (Flag.SUMMARY,),
            verbose=verbose,
            raw_json=raw_json,
            versions=versions_depth(versions),
            keywords=keywords,
        )


class Reporter:
    """Renders one ReportRequest for each looked-up crate."""

    def __init__(self, request: ReportRequest):
        self.request = request

    def report(self, name: str, outcome: RegistryResponse | RegistryError) -> bool:
        """Report on one crate.

        Args:
            name: Crate name as requested
            outcome: The fetched response, or the error the fetch raised

        Returns:
            True if the crate was fetched, False on a transport failure
        """
        if isinstance(outcome, RegistryError):
            logger.debug(f"Lookup of {name!r} failed: {outcome!r}")
            print(f"network error: {outcome}", file=sys.stderr)
            return False

        if self.request.raw_json:
            self.report_json(outcome)
            return True

        try:
            data = outcome.json()
        except ValueError as e:
            logger.warning(f"Response for {name!r} is not valid JSON: {e}")
            return True

        view = CrateView(data)
        if self.request.versions > 0:
            view.print_versions(self.request.versions, self.request.verbose)
        elif self.request.keywords:
            view.print_keywords(self.request.verbose)
        else:
            self.report_crate(view)

        return True

    def report_json(self, response: RegistryResponse) -> None:
        if not self.request.verbose:
            print(response.text)
            return

        try:
            print(json.dumps(response.json(), indent=4, ensure_ascii=False))
        except ValueError as e:
            logger.warning(f"Cannot pretty-print response for {response.name!r}: {e}")

    def report_crate(self, view: CrateView) -> None:
        for flag in self.request.flags:
            _DISPATCH[flag](view, self.request.verbose)
