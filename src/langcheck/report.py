import click

from langcheck.checker import RunResult
from langcheck.classes import Diagnostic, EmptyValue, InvalidUsage, MissingKey, UnusedKey


def tag(label: str) -> str:
    return click.style(f"[{label}]", fg="yellow", bold=True)


def bold(text: str) -> str:
    return click.style(text, bold=True)


def italic(text: str) -> str:
    return click.style(text, italic=True)


def error(message: str, note: str = "") -> None:
    line = click.style("ERROR", fg="red", bold=True) + bold(f": {message}")
    if note:
        line += " " + italic(note)
    click.echo(line)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    key = bold(diagnostic.key)
    if isinstance(diagnostic, MissingKey):
        return f"{tag('MISSING')} key {key} not found in {italic(str(diagnostic.missing_in))}"
    if isinstance(diagnostic, EmptyValue):
        return f"{tag('EMPTY')} key {key} seems to be empty"
    if isinstance(diagnostic, InvalidUsage):
        return f"{tag('INVALID')} key {key} does not exist!"
    if isinstance(diagnostic, UnusedKey):
        value = italic(f"\"{diagnostic.value}\"")
        return f"{tag('UNUSED')} key {key}={value}"
    raise TypeError(f"Unknown diagnostic: {diagnostic!r}")


def render(result: RunResult) -> None:
    if not result.compatibility:
        for diagnostic in result.compatibility.own + result.compatibility.other:
            click.echo(format_diagnostic(diagnostic))
        error("translation files are not compatible, see problems above")

    for diagnostic in result.invalid_usages:
        click.echo(format_diagnostic(diagnostic))
    if result.invalid_usages:
        error(f"{len(result.invalid_usages)} invalid key usages!")

    for diagnostic in result.unused_keys:
        click.echo(format_diagnostic(diagnostic))
    if result.unused_keys:
        error(
            f"{len(result.unused_keys)} unused keys found!",
            f"({result.ignored_count} keys ignored)",
        )
        click.echo(
            italic(
                "Unused keys should be removed from the translation files if they really are unused."
            )
        )
        click.echo(
            italic("If they are used (false positive), add them to the ignore file (--ignore-file).")
        )

    if result.ok:
        click.echo(click.style("SUCCESS", fg="green", bold=True) + bold(": great translations!"))
