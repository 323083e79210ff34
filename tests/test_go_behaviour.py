"""Compile the generated methods with the Go toolchain and run Go tests against them."""

import os
import shutil
import subprocess

import pytest

from enumer.cli import main

pytestmark = pytest.mark.skipif(shutil.which("go") is None, reason="go toolchain not installed")

GO_MOD = "module testpkg\n\ngo 1.21\n"


def go_env(tmp_path):
    env = dict(os.environ, GOTOOLCHAIN="local", GOFLAGS="-mod=mod", GOWORK="off")
    if "HOME" not in env and "GOCACHE" not in env:
        env["GOCACHE"] = str(tmp_path / ".gocache")
        env["GOPATH"] = str(tmp_path / ".gopath")
    return env


@pytest.mark.parametrize(
    "case, flags",
    [
        ("simple_iota", ["-type=Status", "-json", "-sql"]),
        ("with_gaps", ["-type=Priority"]),
        ("trim_prefix", ["-type=Direction", "-trimprefix=Direction"]),
        ("line_comment", ["-type=Color", "-linecomment"]),
        ("flags", ["-type=Permission", "-bitmask", "-json"]),
        ("composite", ["-type=RunStatus", "-bitmask"]),
    ],
)
def test_generated_package_passes_go_test(case, flags, testdata, tmp_path):
    package = tmp_path / case
    package.mkdir()
    for name in ("types.go", "types_test.go"):
        shutil.copy(testdata / case / name, package / name)
    (package / "go.mod").write_text(GO_MOD)

    assert main(flags + ["--dir", str(package), "--no-format"]) == 0

    completed = subprocess.run(
        ["go", "test", "./..."],
        cwd=package,
        env=go_env(tmp_path),
        capture_output=True,
        text=True,
        timeout=600,
    )
    assert completed.returncode == 0, completed.stdout + completed.stderr
