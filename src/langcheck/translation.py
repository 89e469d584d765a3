import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from langcheck.classes import Compatibility, Diagnostic, EmptyValue, MissingKey
from langcheck.errors import ParseError, ReadError

logger = logging.getLogger(__name__)


def parse_entries(path: Path, content: str) -> dict[str, str]:
    entries: dict[str, str] = {}
    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key:
            raise ParseError(path, line_number, line)
        if key in entries:
            logger.warning(f"{path}:{line_number}: duplicate key {key}, keeping the last value")
        entries[key] = value.strip()
    return entries


class TranslationFile:
    """Key/value entries of one locale file, read-only once loaded."""

    def __init__(self, path: Path, entries: Mapping[str, str]) -> None:
        self.path = Path(path)
        self.entries = MappingProxyType(dict(entries))

    @classmethod
    def load(cls, path: Path) -> "TranslationFile":
        path = Path(path)
        logger.debug(f"Parsing {path}")
        try:
            content = path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            raise ReadError(path, str(ex)) from ex
        return cls(path, parse_entries(path, content))

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def problems_against(self, other: "TranslationFile") -> list[Diagnostic]:
        problems: list[Diagnostic] = [
            MissingKey(key, self.path) for key in other.entries if key not in self.entries
        ]
        problems.extend(EmptyValue(key) for key, value in self.entries.items() if not value)
        return problems

    def is_compatible_with(self, other: "TranslationFile") -> Compatibility:
        return Compatibility(self.problems_against(other), other.problems_against(self))
