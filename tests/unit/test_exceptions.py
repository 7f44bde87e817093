from sqlbridge.exceptions import (
    BridgeError,
    ImproperConfigurationError,
    InvalidOrderError,
    MissingDependencyError,
    MissingParameterError,
    MultipleResultsFoundError,
    QualificationError,
    SQLBridgeError,
)


def test_exception_hierarchy():
    """Test exception classes inherit correctly."""
    assert issubclass(MissingParameterError, BridgeError)
    assert issubclass(QualificationError, BridgeError)
    assert issubclass(InvalidOrderError, BridgeError)
    assert issubclass(MultipleResultsFoundError, BridgeError)

    assert issubclass(BridgeError, SQLBridgeError)
    assert issubclass(ImproperConfigurationError, SQLBridgeError)
    assert issubclass(MissingDependencyError, SQLBridgeError)
    assert issubclass(MissingDependencyError, ImportError)


def test_exception_instantiation():
    exc = BridgeError("Something failed")
    assert str(exc) == "Something failed"
    assert repr(exc) == "BridgeError - Something failed"


def test_missing_parameter_message():
    exc = MissingParameterError("Last Name")
    assert exc.parameter_name == "Last Name"
    assert str(exc) == "Unable to parse qualification, the 'Last Name' parameter was referenced but not provided."


def test_qualification_error_includes_expression():
    exc = QualificationError("Bad filter", "A = ?")
    assert str(exc) == "Bad filter\nQualification: A = ?"
    assert str(QualificationError()) == "Unable to parse qualification."


def test_missing_dependency_message():
    exc = MissingDependencyError(package="jpype", install_package="JPype1")
    assert "'jpype' is not installed" in str(exc)
    assert "pip install JPype1" in str(exc)


def test_improper_configuration_properties():
    exc = ImproperConfigurationError("Missing Port", ("Port",))
    assert exc.properties == ("Port",)
    assert str(exc) == "Missing Port"
    assert ImproperConfigurationError("Unknown adapter").properties == ()
