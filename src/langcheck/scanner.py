import logging
from collections.abc import Iterable, Mapping
from functools import cached_property
from pathlib import Path

from langcheck.classes import MarkerPair, Usage
from langcheck.errors import MarkerError, ReadError
from langcheck.fenced import find_fenced

logger = logging.getLogger(__name__)

FORMATTED_MESSAGE = "formatted_message"
FORMAT_MESSAGE = "format_message"
MISC = "misc"

# Each kind is tried with every alternative, in order
USAGE_KINDS: dict[str, tuple[MarkerPair, ...]] = {
    FORMATTED_MESSAGE: (
        MarkerPair('<FormattedMessage id="', '"'),
        MarkerPair("<FormattedMessage id='", "'"),
    ),
    FORMAT_MESSAGE: (
        MarkerPair('formatMessage("', '"'),
        MarkerPair("formatMessage('", "'"),
        MarkerPair('formatMessage({ id: "', '"'),
        MarkerPair("formatMessage({ id: '", "'"),
    ),
    MISC: (
        MarkerPair('translationKey="', '"'),
        MarkerPair('translationKey: "', '"'),
        MarkerPair("translationKey: '", "'"),
    ),
}


def scan_text(text: str, markers: Iterable[MarkerPair]) -> list[Usage]:
    usages = []
    for marker in markers:
        usages.extend(find_fenced(text, marker.start, marker.end))
    return usages


class SourceFile:
    """A source file searched for translation key usages.

    The file is read on the first scan and the text is kept for later scans.
    """

    def __init__(
        self,
        path: Path,
        extra_markers: Mapping[str, Iterable[MarkerPair]] | None = None,
    ) -> None:
        self.path = Path(path)
        self.kinds = {kind: list(markers) for kind, markers in USAGE_KINDS.items()}
        for kind, markers in (extra_markers or {}).items():
            if kind not in self.kinds:
                raise MarkerError(f"Unknown usage kind: {kind}")
            self.kinds[kind].extend(markers)

    @cached_property
    def text(self) -> str:
        logger.debug(f"Reading {self.path}")
        try:
            return self.path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            raise ReadError(self.path, str(ex)) from ex

    def find_usages(self, kind: str) -> list[Usage]:
        return scan_text(self.text, self.kinds[kind])

    def find_formatted_message_usages(self) -> list[Usage]:
        return self.find_usages(FORMATTED_MESSAGE)

    def find_format_message_usages(self) -> list[Usage]:
        return self.find_usages(FORMAT_MESSAGE)

    def find_misc_usages(self) -> list[Usage]:
        return self.find_usages(MISC)

    def used_keys(self) -> frozenset[str]:
        usages = (
            self.find_formatted_message_usages()
            + self.find_format_message_usages()
            + self.find_misc_usages()
        )
        return frozenset(usage.key for usage in usages)
