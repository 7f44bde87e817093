from typing import Any, Optional

__all__ = (
    "BridgeError",
    "ImproperConfigurationError",
    "InvalidOrderError",
    "MissingDependencyError",
    "MissingParameterError",
    "MultipleResultsFoundError",
    "QualificationError",
    "SQLBridgeError",
)


class SQLBridgeError(Exception):
    """Base exception class from which all SQLBridge exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBridgeError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(SQLBridgeError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqlbridge[{install_package or package}]' to install sqlbridge with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(SQLBridgeError):
    """Raised when adapter properties are missing or invalid."""

    properties: tuple[str, ...]

    def __init__(self, message: str, properties: "Optional[tuple[str, ...]]" = None) -> None:
        super().__init__(detail=message)
        self.properties = properties or ()


# -- Bridge Errors --
class BridgeError(SQLBridgeError):
    """A bridge operation could not be completed for the caller."""


class MissingParameterError(BridgeError):
    """A filter expression referenced a parameter that the request did not supply."""

    parameter_name: str

    def __init__(self, parameter_name: str, message: Optional[str] = None) -> None:
        if message is None:
            message = (
                f"Unable to parse qualification, the '{parameter_name}' parameter was referenced but not provided."
            )
        super().__init__(detail=message)
        self.parameter_name = parameter_name


class QualificationError(BridgeError):
    """Issues parsing a filter expression into a parameterized WHERE clause."""

    expression: Optional[str]

    def __init__(self, message: Optional[str] = None, expression: Optional[str] = None) -> None:
        if message is None:
            message = "Unable to parse qualification."
        detail_message = message
        if expression:
            detail_message = f"{message}\nQualification: {expression}"
        super().__init__(detail=detail_message)
        self.expression = expression


class InvalidOrderError(BridgeError):
    """An order was malformed or referenced a field outside the requested fields."""


class MultipleResultsFoundError(BridgeError):
    """A single record was required but more than one were found."""
