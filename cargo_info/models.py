"""Data models for crates.io package metadata."""

from dataclasses import dataclass
from typing import Any

from .timestamp import Timestamp

# Every crate field the reports read, and what it becomes when the
# registry leaves it out, sends null, or sends the wrong type.
CRATE_FIELD_DEFAULTS: dict[str, Any] = {
    "name": "",
    "max_version": "",
    "description": "",
    "documentation": "",
    "homepage": "",
    "repository": "",
    "license": "",
    "downloads": 0,
    "keywords": (),
    "created_at": "",
    "updated_at": "",
}

TEXT_FIELDS = ("description", "documentation", "homepage", "repository", "license")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _count(value: Any) -> int:
    """Coerce a JSON value to a non-negative integer, defaulting to zero."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float) and value.is_integer():
        return max(int(value), 0)
    return 0


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _objects(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _normalize(key: str, value: Any) -> Any:
    default = CRATE_FIELD_DEFAULTS[key]
    if isinstance(default, int):
        return _count(value)
    if isinstance(default, tuple):
        return _strings(value)
    return _text(value)


@dataclass(frozen=True)
class CrateRecord:
    """The registry's description of one crate."""

    name: str
    max_version: str
    description: str
    documentation: str
    homepage: str
    repository: str
    license: str
    downloads: int
    keywords: tuple[str, ...]
    created_at: str
    updated_at: str

    @classmethod
    def from_json(cls, data: Any) -> "CrateRecord":
        """Create a CrateRecord from the ``crate`` section of a response."""
        if not isinstance(data, dict):
            data = {}
        return cls(**{key: _normalize(key, data.get(key)) for key in CRATE_FIELD_DEFAULTS})

    @property
    def created(self) -> Timestamp:
        return Timestamp.parse(self.created_at)

    @property
    def updated(self) -> Timestamp:
        return Timestamp.parse(self.updated_at)


@dataclass(frozen=True)
class VersionEntry:
    """One published version of a crate."""

    num: str
    created_at: str
    downloads: int
    yanked: bool

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "VersionEntry":
        return cls(
            num=_text(data.get("num")),
            created_at=_text(data.get("created_at")),
            downloads=_count(data.get("downloads")),
            yanked=data.get("yanked") is True,
        )

    @property
    def released(self) -> Timestamp:
        return Timestamp.parse(self.created_at)


@dataclass(frozen=True)
class KeywordEntry:
    """A keyword attached to a crate, with registry-wide usage metadata."""

    keyword: str
    id: str
    crates_cnt: int
    created_at: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "KeywordEntry":
        return cls(
            keyword=_text(data.get("keyword")),
            id=_text(data.get("id")),
            crates_cnt=_count(data.get("crates_cnt")),
            created_at=_text(data.get("created_at")),
        )


@dataclass(frozen=True)
class CrateDocument:
    """A full crate lookup: the crate record, its versions and its keywords.

    Built once from the parsed response body. Nothing downstream looks at
    the raw JSON tree again, so no formatting code checks for nulls.
    """

    crate: CrateRecord
    versions: tuple[VersionEntry, ...]
    keywords: tuple[KeywordEntry, ...]

    @classmethod
    def from_json(cls, data: Any) -> "CrateDocument":
        """Create a CrateDocument from a parsed crates.io response.

        Args:
            data: Parsed JSON body; any shape is accepted

        Returns:
            CrateDocument with every missing or malformed part defaulted
        """
        if not isinstance(data, dict):
            data = {}

        return cls(
            crate=CrateRecord.from_json(data.get("crate")),
            versions=tuple(VersionEntry.from_json(v) for v in _objects(data.get("versions"))),
            keywords=tuple(KeywordEntry.from_json(k) for k in _objects(data.get("keywords"))),
        )

    def field(self, name: str) -> str:
        """Return the display string for one of the crate's text fields.

        Raises:
            KeyError: If ``name`` is not one of TEXT_FIELDS
        """
        if name not in TEXT_FIELDS:
            raise KeyError(name)
        return getattr(self.crate, name)
