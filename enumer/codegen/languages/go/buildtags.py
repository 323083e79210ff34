"""
Build constraint matching for Go source files.

A package directory can hold files that the Go toolchain never compiles
together: generator programs tagged `//go:build ignore`, and per-platform
variants such as `conn_windows.go` and `conn_linux.go`. The loader asks a
BuildContext which files belong to the package for the target platform.
"""

import os
import platform
import re
import sys
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from ...core.errors import ResolutionError

KNOWN_GOOS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "js",
        "linux",
        "nacl",
        "netbsd",
        "openbsd",
        "plan9",
        "solaris",
        "wasip1",
        "windows",
        "zos",
    }
)

KNOWN_GOARCH = frozenset(
    {
        "386",
        "amd64",
        "amd64p32",
        "arm",
        "armbe",
        "arm64",
        "arm64be",
        "loong64",
        "mips",
        "mipsle",
        "mips64",
        "mips64le",
        "mips64p32",
        "mips64p32le",
        "ppc",
        "ppc64",
        "ppc64le",
        "riscv",
        "riscv64",
        "s390",
        "s390x",
        "sparc",
        "sparc64",
        "wasm",
    }
)

UNIX_GOOS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "linux",
        "netbsd",
        "openbsd",
        "solaris",
    }
)

# GOOS values that also satisfy another GOOS tag
IMPLIED_GOOS = {"android": "linux", "ios": "darwin", "illumos": "solaris"}

_MACHINE_TO_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
}

_TOKEN = re.compile(r"\s*(\(|\)|!|&&|\|\||[\w.]+)")


def host_goos() -> str:
    if sys.platform.startswith(("win32", "cygwin", "msys")):
        return "windows"
    for goos in ("darwin", "freebsd", "openbsd", "netbsd", "dragonfly", "aix"):
        if sys.platform.startswith(goos):
            return goos
    if sys.platform.startswith("sunos"):
        return "solaris"
    return "linux"


def host_goarch() -> str:
    return _MACHINE_TO_GOARCH.get(platform.machine().lower(), "amd64")


def find_build_constraint(source: str) -> Optional[str]:
    """
    Return the expression of the `//go:build` line in a file header.

    Only comments and blank lines may precede the constraint; scanning
    stops at the first line of code.
    """
    in_block = False
    for line in source.splitlines():
        stripped = line.strip()
        if in_block:
            if "*/" in stripped:
                in_block = False
            continue
        if not stripped:
            continue
        if stripped.startswith("//go:build"):
            return stripped[len("//go:build") :].strip()
        if stripped.startswith("//"):
            continue
        if stripped.startswith("/*"):
            in_block = "*/" not in stripped[2:]
            continue
        break
    return None


class _ConstraintParser:
    """Recursive descent over `||`, `&&`, `!` and parentheses."""

    def __init__(self, expression: str, tags: FrozenSet[str]):
        self.tokens = self._tokenize(expression)
        self.position = 0
        self.tags = tags

    @staticmethod
    def _tokenize(expression: str) -> List[str]:
        tokens = []
        position = 0
        expression = expression.rstrip()
        while position < len(expression):
            match = _TOKEN.match(expression, position)
            if not match:
                raise ValueError(f"unexpected character at {expression[position:]!r}")
            tokens.append(match.group(1))
            position = match.end()
        return tokens

    def parse(self) -> bool:
        result = self._or()
        if self.position != len(self.tokens):
            raise ValueError(f"unexpected token {self.tokens[self.position]!r}")
        return result

    def _peek(self) -> Optional[str]:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise ValueError("unexpected end of expression")
        self.position += 1
        return token

    def _or(self) -> bool:
        result = self._and()
        while self._peek() == "||":
            self._next()
            right = self._and()
            result = result or right
        return result

    def _and(self) -> bool:
        result = self._unary()
        while self._peek() == "&&":
            self._next()
            right = self._unary()
            result = result and right
        return result

    def _unary(self) -> bool:
        token = self._next()
        if token == "!":
            return not self._unary()
        if token == "(":
            result = self._or()
            if self._next() != ")":
                raise ValueError("missing closing parenthesis")
            return result
        if token in (")", "&&", "||"):
            raise ValueError(f"unexpected token {token!r}")
        return token in self.tags


@dataclass(frozen=True)
class BuildContext:
    """Target platform used to decide which files make up a package."""

    goos: str
    goarch: str

    @classmethod
    def from_environment(cls) -> "BuildContext":
        """GOOS and GOARCH from the environment, defaulting to the host."""
        return cls(
            goos=os.environ.get("GOOS") or host_goos(),
            goarch=os.environ.get("GOARCH") or host_goarch(),
        )

    @property
    def tags(self) -> FrozenSet[str]:
        tags = {self.goos, self.goarch, "gc"}
        if self.goos in IMPLIED_GOOS:
            tags.add(IMPLIED_GOOS[self.goos])
        if self.goos in UNIX_GOOS:
            tags.add("unix")
        # Release tags are assumed satisfied by any toolchain new enough to build the output
        tags.update(f"go1.{minor}" for minor in range(1, 40))
        return frozenset(tags)

    def matches_file_name(self, file_name: str) -> bool:
        """Apply the `_GOOS`, `_GOARCH` and `_GOOS_GOARCH` file name suffixes."""
        if file_name.startswith(("_", ".")):
            return False

        stem = file_name[: -len(".go")] if file_name.endswith(".go") else file_name
        if stem.endswith("_test"):
            stem = stem[: -len("_test")]
        parts = stem.split("_")[1:]

        if len(parts) >= 2 and parts[-2] in KNOWN_GOOS and parts[-1] in KNOWN_GOARCH:
            return self._goos_matches(parts[-2]) and parts[-1] == self.goarch
        if parts and parts[-1] in KNOWN_GOOS:
            return self._goos_matches(parts[-1])
        if parts and parts[-1] in KNOWN_GOARCH:
            return parts[-1] == self.goarch
        return True

    def matches_source(self, unit: str, source: str) -> bool:
        """Evaluate the file's `//go:build` line, if it has one."""
        expression = find_build_constraint(source)
        if expression is None:
            return True
        try:
            return _ConstraintParser(expression, self.tags).parse()
        except ValueError as e:
            raise ResolutionError(f"{unit}: invalid //go:build line: {e}") from e

    def _goos_matches(self, goos: str) -> bool:
        return goos == self.goos or IMPLIED_GOOS.get(self.goos) == goos
