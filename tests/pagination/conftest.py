from dataclasses import dataclass

import pytest
from bson import ObjectId


@dataclass(frozen=True)
class Row:
    key: ObjectId
    label: str = ""

    @property
    def ordered_key(self) -> ObjectId:
        return self.key


@pytest.fixture
def make_rows():
    """Factory for rows k0 < k1 < ... created in that order."""

    def _make(n: int) -> list[Row]:
        return [Row(ObjectId(), f"k{i}") for i in range(n)]

    return _make


@pytest.fixture
def rows(make_rows) -> list[Row]:
    return make_rows(8)
