from pathlib import Path


class LangcheckError(Exception):
    pass


class ReadError(LangcheckError):
    """A file could not be read or is not valid UTF-8."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not read {path}: {reason}")


class ParseError(LangcheckError):
    """A translation file line is not of the form ``key=value``."""

    def __init__(self, path: Path, line_number: int, line: str) -> None:
        self.path = path
        self.line_number = line_number
        self.line = line
        super().__init__(f"{path}:{line_number}: expected key=value, got {line!r}")


class MarkerError(LangcheckError, ValueError):
    """A usage kind or fence marker pair is not usable."""


class ConfigError(LangcheckError):
    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")
