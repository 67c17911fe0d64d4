from __future__ import annotations

import tomllib
from pathlib import Path

"""A bare ``pytest`` run collects the test tree and the package doctests."""

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_pytest_collects_tests_and_doctests():
    opts = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["tool"]["pytest"]["ini_options"]
    assert set(opts["testpaths"]) == {"tests", "offer_funnel"}
    # addopts の位置引数は testpaths を上書きしてしまう
    assert opts["addopts"].split() == ["--doctest-modules"]
