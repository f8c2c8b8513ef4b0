"""Binding-generator options and their decoding from an options file."""

import enum
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Any, Optional

import toml

from . import shlex_parser
from .diagnostics import Diagnostics, Location


# Custom exceptions
class OptionsException(Exception):
    """Base exception for option errors."""

    pass


class ValidationFailed(OptionsException):
    """Raised when an options file has errors."""

    pass


class InvalidOption(OptionsException):
    """Raised when a key is unknown or its value has the wrong type."""

    pass


class InvalidLinkType(InvalidOption):
    """Raised when a link directive names an unknown link kind."""

    pass


class InvalidLinkDirective(InvalidOption):
    """Raised when a link directive has more than one '='."""

    pass


class ClangNotFound(OptionsException):
    """Raised when no clang executable can be located."""

    pass


class LinkType(enum.Enum):
    """How a library is linked."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    FRAMEWORK = "framework"


@dataclass
class BindgenOptions:
    """Accumulates the options passed on to the binding generator."""

    headers: list[str] = field(default_factory=list)
    builtins: bool = False
    match_patterns: list[str] = field(default_factory=list)
    allow_unknown_types: bool = True
    clang_args: list[str] = field(default_factory=list)
    enum_type: Optional[str] = None
    links: list[tuple[str, LinkType]] = field(default_factory=list)

    def add_header(self, header: str) -> None:
        self.headers.append(header)

    def enable_builtins(self) -> None:
        self.builtins = True

    def match_pattern(self, pattern: str) -> None:
        self.match_patterns.append(pattern)

    def forbid_unknown_types(self) -> None:
        self.allow_unknown_types = False

    def clang_arg(self, arg: str) -> None:
        self.clang_args.append(arg)

    def override_enum_type(self, enum_type: str) -> None:
        self.enum_type = enum_type

    def link(self, name: str, kind: LinkType = LinkType.DYNAMIC) -> None:
        self.links.append((name, kind))

    def command_line(self) -> list[str]:
        """Return the clang argument vector, headers last."""
        return self.clang_args + self.headers


def parse_link(value: str) -> tuple[str, LinkType]:
    """
    Parse a link directive.

    Accepted forms are ``name`` (linked dynamically) and ``kind=name``
    where kind is one of static, dynamic or framework.

    Raises:
        InvalidLinkType: If kind is not recognized
        InvalidLinkDirective: If the directive has more than one '='
    """
    parts = value.split("=")
    if len(parts) == 1:
        return parts[0], LinkType.DYNAMIC
    if len(parts) == 2:
        kind, name = parts
        try:
            return name, LinkType(kind)
        except ValueError:
            raise InvalidLinkType(f"Invalid link type: {kind}")
    raise InvalidLinkDirective(f"Invalid link directive: {value}")


def _strings(value: Any) -> Optional[list[str]]:
    """Return a string or a list of strings as a list, None for anything else."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return value
    return None


def decode_key_value(key: str, value: Any, options: BindgenOptions) -> None:
    """
    Apply one key/value pair to the options.

    ``match`` and ``link`` take a string or a list of strings, since an
    options file can only hold each key once.
    """
    values = _strings(value)
    if key == "builtins" and isinstance(value, bool):
        if value:
            options.enable_builtins()
    elif key == "match" and values is not None:
        for pattern in values:
            options.match_pattern(pattern)
    elif key == "allow_unknown_types" and isinstance(value, bool):
        if not value:
            options.forbid_unknown_types()
    elif key == "clang_args" and isinstance(value, str):
        for arg in shlex_parser.tokenize(value):
            options.clang_arg(arg)
    elif key == "override_enum_type" and isinstance(value, str):
        options.override_enum_type(value)
    elif key == "link" and values is not None:
        # Parse every directive before adding any
        links = [parse_link(directive) for directive in values]
        for name, kind in links:
            options.link(name, kind)
    else:
        raise InvalidOption(f"Invalid key or value: {key}")


def find_clang_search_paths(clang: str = "clang") -> list[str]:
    """
    Return the directories clang searches for ``#include <...>``.

    Raises:
        ClangNotFound: If clang is not on PATH
    """
    executable = shutil.which(clang)
    if executable is None:
        raise ClangNotFound("No clang found, is it installed?")

    result = subprocess.run(
        [executable, "-E", "-x", "c", "-", "-v"],
        input="",
        capture_output=True,
        text=True,
        check=False,
    )

    paths = []
    in_list = False
    for line in result.stderr.splitlines():
        if line.startswith("#include <...> search starts here:"):
            in_list = True
        elif line.startswith("End of search list."):
            break
        elif in_list:
            path = line.strip()
            if path.endswith(" (framework directory)"):
                path = path[: -len(" (framework directory)")]
            paths.append(path)
    return paths


def load_options(
    path: str,
    diagnostics: Diagnostics,
    system_includes: Optional[list[str]] = None,
) -> BindgenOptions:
    """
    Load binding-generator options from a TOML file.

    Args:
        path: Options file
        diagnostics: Where errors and warnings are reported
        system_includes: Directories added with -idirafter

    Returns:
        The decoded options

    Raises:
        OptionsException: If the file cannot be read or parsed
        ValidationFailed: If any option was reported as an error
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = toml.load(f)
    except OSError as e:
        raise OptionsException(f"Cannot read options file '{path}': {e}")
    except toml.TomlDecodeError as e:
        raise OptionsException(f"Cannot parse options file '{path}': {e}")

    options = BindgenOptions()
    error_count = 0

    for key, value in content.items():
        location = Location(path, key)

        if key == "headers":
            headers = _strings(value)
            if headers is None:
                diagnostics.error(
                    location, "headers must be a string or a list of strings"
                )
                error_count += 1
                continue
            for header in headers:
                if header in options.headers:
                    diagnostics.warning(location, f"Duplicate header: {header}")
                    continue
                options.add_header(header)
            continue

        if key == "clang_args" and isinstance(value, str) and not value.strip():
            diagnostics.warning(location, "clang_args is empty")

        try:
            decode_key_value(key, value, options)
        except InvalidOption as e:
            diagnostics.error(location, str(e))
            error_count += 1

    if error_count:
        raise ValidationFailed(f"{error_count} invalid option(s) in '{path}'")

    for include_dir in system_includes or []:
        options.clang_arg("-idirafter")
        options.clang_arg(include_dir)

    # Headers are resolved relative to the options file
    options.clang_arg("-I")
    options.clang_arg(os.path.dirname(os.path.abspath(path)))

    return options
