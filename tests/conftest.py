from __future__ import annotations

import os

import pytest

from tests._constants import TESTDATA_DIR


def read_testdata(name: str) -> bytes:
    with open(os.path.join(TESTDATA_DIR, name), "rb") as f:
        return f.read()


@pytest.fixture
def testdata():
    return read_testdata
