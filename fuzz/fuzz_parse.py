#!/usr/bin/env python3
"""
atheris fuzz harness for ``Num.parse``.

Every input is decoded as UTF-8 (undecodable inputs are skipped) and
parsed both by ``Num.parse`` and by the independent reference parser in
``validation.parse_oracle``.  Any disagreement raises AssertionError,
which atheris reports as a crash.

    pip install -e ".[fuzz]"
    python fuzz/fuzz_parse.py -atheris_runs=1000000
"""

import sys

import atheris

with atheris.instrument_imports():
    from validation.parse_oracle import check_bytes


def TestOneInput(data: bytes) -> None:
    check_bytes(data)


if __name__ == "__main__":
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()
