from __future__ import annotations

from collections.abc import Generator, Sequence
from pathlib import Path
from typing import Any

import pytest

from sqlbridge.adapters._registry import _reset_registry

here = Path(__file__).parent
root_path = here.parent


class FakeMetaData:
    def __init__(self, labels: Sequence[str]) -> None:
        self.labels = list(labels)

    def getColumnCount(self) -> int:  # noqa: N802
        return len(self.labels)

    def getColumnLabel(self, column: int) -> str:  # noqa: N802
        return self.labels[column - 1]


class FakeResultSet:
    def __init__(self, labels: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        self.metadata = FakeMetaData(labels)
        self.rows = [list(row) for row in rows]
        self.cursor = -1
        self.closed = False

    def next(self) -> bool:
        self.cursor += 1
        return self.cursor < len(self.rows)

    def getMetaData(self) -> FakeMetaData:  # noqa: N802
        return self.metadata

    def getString(self, column: int) -> Any:  # noqa: N802
        return self.rows[self.cursor][column - 1]

    def close(self) -> None:
        self.closed = True


class FakeStatement:
    def __init__(self, sql: str, result_set: FakeResultSet | None = None, fail_on_bind: bool = False) -> None:
        self.sql = sql
        self.bound: list[tuple[int, Any]] = []
        self.result_set = result_set or FakeResultSet([], [])
        self.fail_on_bind = fail_on_bind
        self.closed = False

    def setObject(self, index: int, value: Any) -> None:  # noqa: N802
        if self.fail_on_bind:
            msg = "bind failed"
            raise RuntimeError(msg)
        self.bound.append((index, value))

    def executeQuery(self) -> FakeResultSet:  # noqa: N802
        return self.result_set

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """Records every prepared statement; result sets are queued per call."""

    def __init__(
        self,
        result_sets: Sequence[FakeResultSet] = (),
        fail_on_bind: bool = False,
        fail_on_prepare: Exception | None = None,
    ) -> None:
        self.result_sets = list(result_sets)
        self.fail_on_bind = fail_on_bind
        self.fail_on_prepare = fail_on_prepare
        self.statements: list[FakeStatement] = []
        self.closed = False

    def prepareStatement(self, sql: str) -> FakeStatement:  # noqa: N802
        if self.fail_on_prepare is not None:
            raise self.fail_on_prepare
        result_set = self.result_sets.pop(0) if self.result_sets else None
        statement = FakeStatement(sql, result_set, fail_on_bind=self.fail_on_bind)
        self.statements.append(statement)
        return statement

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def connection_factory() -> type[FakeConnection]:
    return FakeConnection


@pytest.fixture
def result_set_factory() -> type[FakeResultSet]:
    return FakeResultSet


@pytest.fixture
def db2_properties() -> dict[str, str]:
    return {
        "Username": "db2inst1",
        "Password": "s3cret",
        "Database Name": "SAMPLE",
    }


@pytest.fixture(autouse=True)
def reset_adapter_registry() -> Generator[None, None, None]:
    yield
    _reset_registry()
