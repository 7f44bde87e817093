"""Unit tests for sqlbridge.jdbc against a stand-in for the jpype module."""

import logging
from types import SimpleNamespace
from typing import Any

import pytest

from sqlbridge import jdbc
from sqlbridge.exceptions import BridgeError, MissingDependencyError


class JException(Exception):
    pass


class FakeProperties:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def setProperty(self, key: str, value: str) -> None:  # noqa: N802
        self.values[key] = value


class FakeJpype:
    def __init__(self, started: bool = False) -> None:
        self.started = started
        self.classpath: list[str] = []
        self.start_kwargs: dict[str, Any] = {}
        self.loaded: list[str] = []
        self.connect_error: "Exception | None" = None
        self.connections: list[tuple[str, dict[str, str]]] = []
        self.JException = JException

    def isJVMStarted(self) -> bool:  # noqa: N802
        return self.started

    def addClassPath(self, entry: str) -> None:  # noqa: N802
        self.classpath.append(entry)

    def startJVM(self, **kwargs: Any) -> None:  # noqa: N802
        self.started = True
        self.start_kwargs = kwargs

    def JClass(self, name: str) -> Any:  # noqa: N802
        if name == "java.util.Properties":
            return FakeProperties
        if name == "java.sql.DriverManager":
            return SimpleNamespace(getConnection=self._get_connection)
        if name.startswith("missing."):
            msg = f"Class {name} is not found"
            raise TypeError(msg)
        self.loaded.append(name)
        return object

    def _get_connection(self, url: str, properties: FakeProperties) -> Any:
        if self.connect_error is not None:
            raise self.connect_error
        self.connections.append((url, properties.values))
        return SimpleNamespace(url=url)


@pytest.fixture
def fake_jpype(monkeypatch: pytest.MonkeyPatch) -> FakeJpype:
    fake = FakeJpype()
    monkeypatch.setattr(jdbc, "_import_jpype", lambda: fake)
    return fake


def test_missing_jpype(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(jdbc, "module_available", lambda name: False)

    with pytest.raises(MissingDependencyError, match="JPype1"):
        jdbc.start_jvm()


def test_start_jvm_adds_classpath(fake_jpype: FakeJpype) -> None:
    jdbc.start_jvm(["/opt/db2/db2jcc4.jar"])

    assert fake_jpype.classpath == ["/opt/db2/db2jcc4.jar"]
    assert fake_jpype.start_kwargs == {"convertStrings": True}


def test_start_jvm_is_idempotent(fake_jpype: FakeJpype) -> None:
    fake_jpype.started = True

    jdbc.start_jvm(["/opt/db2/db2jcc4.jar"])

    assert fake_jpype.classpath == []
    assert fake_jpype.start_kwargs == {}


def test_load_driver(fake_jpype: FakeJpype) -> None:
    jdbc.load_driver("com.ibm.db2.jcc.DB2Driver")

    assert fake_jpype.started is True
    assert fake_jpype.loaded == ["com.ibm.db2.jcc.DB2Driver"]


def test_load_driver_failure(fake_jpype: FakeJpype) -> None:
    with pytest.raises(BridgeError, match="Unable to load the missing.Driver JDBC driver"):
        jdbc.load_driver("missing.Driver")


def test_connect_passes_properties(fake_jpype: FakeJpype) -> None:
    connection = jdbc.connect("jdbc:db2://localhost:50000/SAMPLE", {"user": "db2inst1", "password": "s3cret"})

    assert connection.url == "jdbc:db2://localhost:50000/SAMPLE"
    assert fake_jpype.connections == [
        ("jdbc:db2://localhost:50000/SAMPLE", {"user": "db2inst1", "password": "s3cret"})
    ]


def test_connect_failure_redacts_password(fake_jpype: FakeJpype) -> None:
    fake_jpype.connect_error = JException("authorization failure for password s3cret")

    with pytest.raises(BridgeError) as exc_info:
        jdbc.connect("jdbc:db2://localhost:50000/SAMPLE", {"user": "db2inst1", "password": "s3cret"})

    message = str(exc_info.value)
    assert "s3cret" not in message
    assert "[REDACTED]" in message
    assert "jdbc:db2://localhost:50000/SAMPLE" in message


def test_read_records(result_set_factory: Any) -> None:
    result_set = result_set_factory(["ID", "NAME"], [[1, "Ada"], [2, None]])

    labels, records = jdbc.read_records(result_set)

    assert labels == ["ID", "NAME"]
    assert records == [{"ID": "1", "NAME": "Ada"}, {"ID": "2", "NAME": None}]


def test_close_quietly_logs_failures(caplog: pytest.LogCaptureFixture) -> None:
    class Broken:
        def close(self) -> None:
            msg = "already closed"
            raise RuntimeError(msg)

    caplog.set_level(logging.WARNING)

    jdbc.close_quietly(Broken())
    jdbc.close_quietly(None)

    assert "Unable to close Broken" in caplog.text
