import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from langcheck.classes import Compatibility, InvalidUsage, MarkerPair, UnusedKey
from langcheck.errors import ReadError
from langcheck.scanner import SourceFile
from langcheck.translation import TranslationFile

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("ts", "tsx")
DEFAULT_EXCLUDE_DIRS = ("node_modules",)


@dataclass
class RunResult:
    en: TranslationFile
    sv: TranslationFile
    compatibility: Compatibility
    invalid_usages: list[InvalidUsage]
    unused_keys: list[UnusedKey]
    ignored_count: int = 0
    scanned: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.compatibility) and not self.invalid_usages and not self.unused_keys


def walk_source_files(
    root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> Iterator[Path]:
    suffixes = {f".{ext.lstrip('.')}" for ext in extensions}
    excluded = set(exclude_dirs)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        for filename in sorted(filenames):
            path = Path(dirpath, filename)
            if path.suffix in suffixes and path.is_file():
                yield path


def load_ignore_list(path: Path | None) -> set[str]:
    if path is None:
        return set()
    try:
        content = Path(path).read_text("utf-8")
    except (OSError, UnicodeDecodeError) as ex:
        raise ReadError(Path(path), str(ex)) from ex
    return {line.strip() for line in content.splitlines() if line.strip()}


def collect_used_keys(
    paths: Iterable[Path],
    extra_markers: Mapping[str, Iterable[MarkerPair]] | None = None,
) -> tuple[frozenset[str], list[Path]]:
    """Union the keys used by every file; unreadable files are skipped."""
    used: frozenset[str] = frozenset()
    skipped = []
    for path in paths:
        try:
            used |= SourceFile(path, extra_markers).used_keys()
        except ReadError as ex:
            logger.error(f"Skipping {path}: {ex.reason}")
            skipped.append(path)
    return used, skipped


def find_invalid_usages(table: TranslationFile, used: Iterable[str]) -> list[InvalidUsage]:
    return [InvalidUsage(key) for key in sorted(used) if key not in table]


def find_unused_keys(
    table: TranslationFile, used: Iterable[str], ignored: Iterable[str] = ()
) -> list[UnusedKey]:
    skip = set(used) | set(ignored)
    return [
        UnusedKey(key, value)
        for key, value in sorted(table.entries.items())
        if key not in skip
    ]


def run(
    *,
    en_file: Path,
    sv_file: Path,
    root_dir: Path,
    ignore_file: Path | None = None,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
    extra_markers: Mapping[str, Iterable[MarkerPair]] | None = None,
) -> RunResult:
    # Table errors propagate; nothing else is worth checking without them
    logger.info("Loading translation files...")
    en = TranslationFile.load(en_file)
    sv = TranslationFile.load(sv_file)
    logger.info(f"Loaded {len(en)} keys from {en.path} and {len(sv)} keys from {sv.path}")
    ignored = load_ignore_list(ignore_file)

    compatibility = en.is_compatible_with(sv)

    paths = list(walk_source_files(root_dir, extensions, exclude_dirs))
    logger.info(f"Scanning {len(paths)} source files in {root_dir}")
    used, skipped = collect_used_keys(paths, extra_markers)
    logger.info(f"Found {len(used)} distinct keys in use")

    return RunResult(
        en=en,
        sv=sv,
        compatibility=compatibility,
        invalid_usages=find_invalid_usages(en, used),
        unused_keys=find_unused_keys(en, used, ignored),
        ignored_count=len(ignored),
        scanned=[p for p in paths if p not in skipped],
        skipped=skipped,
    )
