"""Shared fixtures for the enumer test suite."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from enumer.codegen.core.symbols import ConstantRecord, SymbolTable, TypeHandle
from enumer.codegen.languages.go import formatter
from enumer.codegen.languages.go.source import GoPackageLoader

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata() -> Path:
    return TESTDATA


@pytest.fixture
def load_case():
    """Load one Go package fixture from tests/testdata."""

    def _load(name: str) -> SymbolTable:
        return GoPackageLoader().load_directory(TESTDATA / name)

    return _load


def make_table(
    type_name: str,
    constants: list[tuple[str, int]],
    comments: dict[str, str] | None = None,
    package: str = "testpkg",
) -> SymbolTable:
    """Build a symbol table holding one type and its constants in order."""
    comments = comments or {}
    records = tuple(
        ConstantRecord(
            declared_name=name,
            owner_type=type_name,
            exact_value=value,
            source_unit="types.go",
            source_order=order,
            trailing_comment=comments.get(name),
        )
        for order, (name, value) in enumerate(constants)
    )
    return SymbolTable(package, (TypeHandle(type_name),), records)


@pytest.fixture
def fake_gofmt(monkeypatch):
    """Replace the gofmt subprocess with a recorder."""
    calls: list[list[str]] = []
    outcome = {"returncode": 0, "stderr": ""}

    def _run(cmd, **kwargs):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, outcome["returncode"], "", outcome["stderr"])

    monkeypatch.setattr(formatter.shutil, "which", lambda name: "/usr/bin/gofmt")
    monkeypatch.setattr(formatter.subprocess, "run", _run)
    return {"calls": calls, "outcome": outcome}
