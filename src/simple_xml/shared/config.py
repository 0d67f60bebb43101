"""Configuration classes for simple-xml.

Configuration objects are frozen dataclasses validated on construction. The
parser and the writer each get their own section; :class:`SimpleXMLConfig`
bundles both and handles dictionary and JSON file round trips.
"""

import json
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_INDENT = 4
DEFAULT_MAX_DEPTH = 256
DEFAULT_HEADER_SEPARATORS = " \t\r\n"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the recursive descent parser."""

    # Skip same-named descendants when looking for the closing tag. When
    # False the first literal ``</tag>`` closes the element.
    nesting_aware_closing: bool = True
    # Treat ``<!-- ... -->`` and ``<!...>`` as transparent like ``<?...?>``.
    skip_comments: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    header_separators: str = DEFAULT_HEADER_SEPARATORS

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if not self.header_separators:
            raise ValueError("header_separators cannot be empty")
        if '"' in self.header_separators:
            raise ValueError("header_separators cannot contain a double quote")


@dataclass(frozen=True)
class WriterConfig:
    """Configuration for XML serialization."""

    indent: int = DEFAULT_INDENT
    escape: bool = False

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if self.indent < 0:
            raise ValueError("indent must be >= 0")


@dataclass(frozen=True)
class SimpleXMLConfig:
    """Complete configuration for parsing and writing."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)
    name: Optional[str] = None

    def override(self, **kwargs: Any) -> "SimpleXMLConfig":
        """Create a new configuration with specific overrides.

        Nested fields use a double underscore, for example
        ``config.override(parser__max_depth=32, writer__escape=True)``.
        """
        sections: Dict[str, Dict[str, Any]] = {"parser": {}, "writer": {}}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                if section not in sections:
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}",
                        field_name=key,
                    )
                sections[section][field_name] = value
            else:
                top_level[key] = value

        try:
            new_fields: Dict[str, Any] = {
                "parser": replace(self.parser, **sections["parser"]),
                "writer": replace(self.writer, **sections["writer"]),
            }
            new_fields.update(top_level)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimpleXMLConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        silently fall back to defaults.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                field_name=sorted(unknown)[0],
                suggestions=sorted(known),
            )

        try:
            return cls(
                parser=_section_from_dict(ParserConfig, data.get("parser", {}), "parser"),
                writer=_section_from_dict(WriterConfig, data.get("writer", {}), "writer"),
                name=data.get("name"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "SimpleXMLConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "SimpleXMLConfig":
        """Load configuration from a JSON file."""
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def default(cls) -> "SimpleXMLConfig":
        """Nesting-aware parsing, raw output."""
        return cls(name="default")

    @classmethod
    def compatible(cls) -> "SimpleXMLConfig":
        """Reproduce the literal first-occurrence closing tag search."""
        return cls(
            parser=ParserConfig(nesting_aware_closing=False, skip_comments=False),
            name="compatible",
        )

    @classmethod
    def strict_output(cls) -> "SimpleXMLConfig":
        """Escape special characters when writing."""
        return cls(writer=WriterConfig(escape=True), name="strict_output")


def _section_from_dict(section_class: type, data: Any, section_name: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Section '{section_name}' must be an object", field_name=section_name
        )
    known = {f.name for f in fields(section_class)}
    for key in data:
        if key not in known:
            raise ConfigValidationError(
                f"Unknown field '{key}' in section '{section_name}'",
                field_name=f"{section_name}.{key}",
                suggestions=sorted(known),
            )
    return section_class(**data)
