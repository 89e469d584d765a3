from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Usage:
    location: int
    key: str


@dataclass(frozen=True)
class MarkerPair:
    start: str
    end: str


@dataclass(frozen=True)
class Diagnostic:
    key: str


@dataclass(frozen=True)
class MissingKey(Diagnostic):
    missing_in: Path


@dataclass(frozen=True)
class EmptyValue(Diagnostic):
    pass


@dataclass(frozen=True)
class InvalidUsage(Diagnostic):
    pass


@dataclass(frozen=True)
class UnusedKey(Diagnostic):
    value: str


@dataclass
class Compatibility:
    own: list[Diagnostic]
    other: list[Diagnostic]

    def __bool__(self) -> bool:
        return not self.own and not self.other
