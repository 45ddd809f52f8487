"""Parser for compiler response files (.rsp).

A response file holds compiler arguments separated by whitespace, with
single or double quotes grouping text that contains spaces:

    -define:FOO;BAR
    /r:"Assets/Plugins/My Lib.dll"
    -unsafe
    -langversion:9.0
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from upath import UPath

from slnsync.models import ResponseFileDirectives, ResponseFileReference
from slnsync.paths import is_rooted


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence


ARGUMENT_SEPARATORS = (";", ",")
WARNASERROR = "warnaserror"

REFERENCE_NOT_FOUND_HINT = (
    "If this was meant as a user reference please provide the relative path "
    "from project root in the response file."
)


def _split_values(value: str) -> list[str]:
    for separator in ARGUMENT_SEPARATORS[1:]:
        value = value.replace(separator, ARGUMENT_SEPARATORS[0])
    return value.split(ARGUMENT_SEPARATORS[0])


def tokenize(text: str) -> list[str]:
    """Split response file text into arguments, honoring quotes."""
    args: list[str] = []
    for line in text.replace("\r", "\n").split("\n"):
        current: list[str] = []
        i = 0
        while i < len(line):
            char = line[i]
            if char in {'"', "'"}:
                end = line.find(char, i + 1)
                if end == -1:
                    end = len(line)
                current.append(line[i + 1 : end])
                i = end + 1
                continue
            if char == " ":
                if current:
                    args.append("".join(current))
                    current = []
            else:
                current.append(char)
            i += 1
        if current:
            args.append("".join(current))
    return args


def _split_option(token: str) -> tuple[str, str]:
    arg, _, value = token.partition(":")
    if arg.startswith("-"):
        arg = f"/{arg[1:]}"
    return arg, value


class ResponseFileResolver:
    """Parses response files into `ResponseFileDirectives`."""

    def __init__(self, file_exists: Callable[[str], bool] | None = None):
        """Initialize the resolver.

        Args:
            file_exists: Predicate used to probe reference locations
                (default: any universal_pathlib location)
        """
        self._file_exists = file_exists or (lambda path: UPath(path).is_file())

    def parse(
        self,
        path: str,
        base_directory: str,
        system_directories: Sequence[str] = (),
    ) -> ResponseFileDirectives:
        """Parse the response file at `path`.

        `base_directory` may be any universal_pathlib location such as
        'memory://project'. A missing file yields empty directives.
        """
        rooted = is_rooted(path) or "://" in path
        file_path = UPath(path) if rooted else UPath(base_directory) / path
        if not file_path.is_file():
            return ResponseFileDirectives()
        text = file_path.read_bytes().decode("utf-8-sig")
        return self.parse_text(text, path, base_directory, system_directories)

    def parse_text(
        self,
        text: str,
        file_name: str,
        base_directory: str,
        system_directories: Sequence[str] = (),
    ) -> ResponseFileDirectives:
        """Parse response file content. Errors are collected, never raised."""
        result = ResponseFileDirectives()
        for token in tokenize(text):
            arg, value = _split_option(token)
            match arg:
                case "/d" | "/define":
                    if not value:
                        result.errors.append("No value set for define")
                        continue
                    result.defines.extend(d.strip() for d in _split_values(value) if d.strip())
                case "/r" | "/reference":
                    self._parse_reference(
                        value, file_name, base_directory, system_directories, result
                    )
                case "/unsafe" | "/unsafe+":
                    result.unsafe = True
                case "/unsafe-":
                    result.unsafe = False
                case _:
                    result.other_arguments.append(f"{arg}:{value}" if value else arg)
        return result

    def _parse_reference(
        self,
        value: str,
        file_name: str,
        base_directory: str,
        system_directories: Sequence[str],
        result: ResponseFileDirectives,
    ) -> None:
        if not value:
            result.errors.append("No value set for reference")
            return
        refs = _split_values(value)
        if len(refs) != 1:
            result.errors.append("Cannot specify multiple aliases using single /reference option")
            return
        reference = refs[0]
        if not reference:
            return

        alias, sep, assembly = reference.partition("=")
        if not sep:
            alias, assembly = "", reference
        resolved = self._resolve_reference(assembly, base_directory, system_directories)
        if resolved is None:
            msg = (
                f"{file_name}: not parsed correctly: {assembly} could not be found "
                f"as a system library.\n{REFERENCE_NOT_FOUND_HINT}"
            )
            result.errors.append(msg)
            return
        ref = ResponseFileReference(path=resolved.replace("\\", "/"), alias=alias)
        result.references.append(ref)

    def _resolve_reference(
        self,
        assembly: str,
        base_directory: str,
        system_directories: Sequence[str],
    ) -> str | None:
        if is_rooted(assembly):
            return assembly
        found: str | None = None
        for directory in system_directories:
            candidate = f"{directory.rstrip('/')}/{assembly}"
            if self._file_exists(candidate):
                found = candidate
                break
        # A file next to the project wins over a system library.
        user_path = f"{base_directory.rstrip('/')}/{assembly}"
        if self._file_exists(user_path):
            found = user_path
        return found


def merge_directives(directives: Iterable[ResponseFileDirectives]) -> ResponseFileDirectives:
    """Merge the directives of several response files of one unit.

    Defines, references and raw arguments are unioned in first-seen order,
    unsafe is true if any file enables it, errors are concatenated.
    """
    merged = ResponseFileDirectives()
    seen_refs: set[str] = set()
    for item in directives:
        merged.defines.extend(d for d in item.defines if d not in merged.defines)
        for ref in item.references:
            if ref.path not in seen_refs:
                seen_refs.add(ref.path)
                merged.references.append(ref)
        merged.other_arguments.extend(
            a for a in item.other_arguments if a not in merged.other_arguments
        )
        merged.unsafe = merged.unsafe or item.unsafe
        merged.errors.extend(item.errors)
    return merged


def other_arguments_lookup(other_arguments: Iterable[str]) -> dict[str, list[str]]:
    """Group raw '/flag:value' arguments by flag name.

    '/warnaserror+:CS0168' style flags are grouped under 'warnaserror'.
    Arguments without a value are ignored. Values are de-duplicated per flag.
    """
    lookup: dict[str, list[str]] = defaultdict(list)
    for argument in other_arguments:
        if not argument.startswith(("/", "-")):
            continue
        index = argument.find(":")
        if index > 0:
            key, value = argument[1:index], argument[index + 1 :]
        elif argument[1:].startswith(WARNASERROR):
            key, value = WARNASERROR, argument[len(WARNASERROR) + 1 :]
        else:
            continue
        if value not in lookup[key]:
            lookup[key].append(value)
    return dict(lookup)
