"""Adapter configuration.

A bridge framework hands adapters a flat ``{"Property Name": "value"}`` map.
Each adapter declares the properties it understands as
:class:`ConfigurableProperty` descriptors and turns the map into a frozen
configuration object once, at startup, so missing or malformed values fail
before any connection is attempted.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Optional, TypeVar

from sqlbridge.exceptions import ImproperConfigurationError
from sqlbridge.utils.logging import get_logger

__all__ = (
    "AdapterConfig",
    "AdapterConfigT",
    "ConfigurableProperty",
    "parse_port",
)

logger = get_logger("config")

AdapterConfigT = TypeVar("AdapterConfigT", bound="AdapterConfig")


@dataclass(frozen=True)
class ConfigurableProperty:
    """Describes one property an adapter accepts.

    Args:
        name: Display name used in the framework's property map.
        attribute: Attribute of the configuration object that receives the value.
        required: Whether a value (or default) must be present.
        sensitive: Whether the value must be masked when displayed.
        default: Value used when the property is absent or blank.
        converter: Callable turning the raw string into the attribute value.
        description: Human readable help text.
    """

    name: str
    attribute: str
    required: bool = False
    sensitive: bool = False
    default: Optional[str] = None
    converter: "Optional[Callable[[str], Any]]" = None
    description: str = ""


def parse_port(value: str) -> int:
    """Convert a port property to an integer in the TCP range.

    Raises:
        ValueError: If the value is not an integer between 1 and 65535.
    """
    port = int(value.strip())
    if not 0 < port < 65536:  # noqa: PLR2004
        msg = f"{port} is outside the valid port range"
        raise ValueError(msg)
    return port


@dataclass(frozen=True)
class AdapterConfig:
    """Base class for frozen adapter configurations."""

    properties: ClassVar["tuple[ConfigurableProperty, ...]"] = ()

    @classmethod
    def from_properties(cls: "type[AdapterConfigT]", values: "Mapping[str, Optional[str]]") -> AdapterConfigT:
        """Build a configuration from a framework property map.

        Defaults are applied to absent or blank values and required properties
        are checked before the object is created. Other values are kept exactly
        as given; converters handle their own whitespace.

        Args:
            values: Property display names mapped to raw string values.

        Raises:
            ImproperConfigurationError: If required properties are missing or a
                value cannot be converted.

        Returns:
            The validated configuration.
        """
        known = {prop.name for prop in cls.properties}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning("Ignoring unknown properties for %s: %s", cls.__name__, ", ".join(unknown))

        missing: list[str] = []
        invalid: list[str] = []
        kwargs: dict[str, Any] = {}
        for prop in cls.properties:
            raw = values.get(prop.name)
            if raw is None or not str(raw).strip():
                raw = prop.default
            if raw is None:
                if prop.required:
                    missing.append(prop.name)
                continue
            raw = str(raw)
            if prop.converter is not None:
                try:
                    kwargs[prop.attribute] = prop.converter(raw)
                except (TypeError, ValueError):
                    invalid.append(prop.name)
                    continue
            else:
                kwargs[prop.attribute] = raw

        if missing:
            msg = f"The following required properties are missing: {', '.join(missing)}"
            raise ImproperConfigurationError(msg, tuple(missing))
        if invalid:
            msg = f"The following properties have invalid values: {', '.join(invalid)}"
            raise ImproperConfigurationError(msg, tuple(invalid))
        return cls(**kwargs)

    def to_properties(self, *, mask_sensitive: bool = True) -> "dict[str, Optional[str]]":
        """Render the configuration back into a display property map.

        Args:
            mask_sensitive: Replace sensitive values with ``********``.
        """
        attributes = {f.name for f in fields(self)}
        rendered: dict[str, Optional[str]] = {}
        for prop in self.properties:
            if prop.attribute not in attributes:
                continue
            value = getattr(self, prop.attribute)
            if isinstance(value, tuple):
                value = ",".join(value) or None
            if value is None:
                rendered[prop.name] = None
            elif prop.sensitive and mask_sensitive:
                rendered[prop.name] = "********"
            else:
                rendered[prop.name] = str(value)
        return rendered
