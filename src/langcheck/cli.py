import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

import click
from langcheck import checker, report
from langcheck.classes import MarkerPair
from langcheck.errors import ConfigError, LangcheckError
from langcheck.scanner import USAGE_KINDS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "scan": {
        "extensions": list(checker.DEFAULT_EXTENSIONS),
        "exclude_dirs": list(checker.DEFAULT_EXCLUDE_DIRS),
    },
    "usages": {},
}


def load_config(config_file_path: str) -> tuple[dict[str, Any], bool]:
    """Merge ``config.yml`` over the defaults; the flag tells whether it was found."""
    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    try:
        with open(config_file_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        return config, False

    if not isinstance(loaded, dict):
        raise ConfigError(config_file_path, "top level must be a mapping")
    for section, values in loaded.items():
        if not isinstance(values, dict):
            raise ConfigError(config_file_path, f"section {section!r} must be a mapping")
        config.setdefault(section, {}).update(values)

    for option in ("extensions", "exclude_dirs"):
        values = config["scan"].get(option)
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ConfigError(config_file_path, f"scan.{option} must be a list of strings")
    return config, True


def marker_pairs(config_file_path: str, usages: dict[str, Any]) -> dict[str, list[MarkerPair]]:
    markers = {}
    for kind, pairs in usages.items():
        if kind not in USAGE_KINDS:
            raise ConfigError(config_file_path, f"unknown usage kind {kind!r}")
        if not isinstance(pairs, list):
            raise ConfigError(config_file_path, f"usages.{kind} must be a list of [start, end] pairs")
        markers[kind] = []
        for pair in pairs:
            if (
                not isinstance(pair, list)
                or len(pair) != 2
                or not all(isinstance(marker, str) and marker for marker in pair)
            ):
                raise ConfigError(
                    config_file_path,
                    f"usages.{kind} entry {pair!r} must be a [start, end] pair of non-empty strings",
                )
            markers[kind].append(MarkerPair(*pair))
    return markers


@click.group()
@click.version_option()
def cli() -> None:
    pass


@cli.command("check")
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option(
    "-r", "--root-dir", default=".", type=click.Path(exists=True, file_okay=False),
    help="Root directory to search from.",
)
@click.option("-e", "--en-file", required=True, help="Path to English translation file.")
@click.option("-s", "--sv-file", required=True, help="Path to Swedish translation file.")
@click.option("-i", "--ignore-file", default=None, help="Path to key ignore unused file.")
def check(
    config_folder: str, root_dir: str, en_file: str, sv_file: str, ignore_file: str | None
) -> None:
    config_folder_path = os.path.abspath(config_folder)
    config_file_path = os.path.abspath(f"{config_folder_path}/config.yml")

    try:
        config, found = load_config(config_file_path)
        extra_markers = marker_pairs(config_file_path, config["usages"])
    except yaml.YAMLError as exc:
        logger.error(f"{config_file_path}: {exc}")
        sys.exit(1)
    except ConfigError as exc:
        logger.error(str(exc))
        report.error(str(exc))
        sys.exit(1)

    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )
    if not found:
        logger.warning(f"{config_file_path} not found, using defaults")

    click.echo("\n" + click.style("Checking translations...", fg="blue", bold=True) + "\n")

    try:
        result = checker.run(
            en_file=Path(en_file),
            sv_file=Path(sv_file),
            root_dir=Path(root_dir),
            ignore_file=Path(ignore_file) if ignore_file else None,
            extensions=config["scan"]["extensions"],
            exclude_dirs=config["scan"]["exclude_dirs"],
            extra_markers=extra_markers,
        )
    except LangcheckError as ex:
        report.error(str(ex))
        sys.exit(1)

    report.render(result)
    if not result.ok:
        sys.exit(1)
