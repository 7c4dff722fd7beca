"""
Renderer command-line options.

OPTION_SCHEMA is the fixed table of options the renderer accepts and the kind
of value each takes. CommandOptionSet is an insertion-ordered, validated
collection of those options that serializes to ``--name=value`` tokens.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from phantom_pdf.contexts.rendering.exceptions import InvalidOptionError
from phantom_pdf.contexts.rendering.logger import _log_warning


class OptionKind(Enum):
    BOOL = "bool"
    STRING = "string"
    INTEGER = "integer"
    ENUM = "enum"


@dataclass(frozen=True)
class RendererOption:
    """
    One recognized renderer option.

    Attributes:
        name: Option name without leading dashes (e.g., 'load-images')
        kind: Value kind the option accepts
        choices: Accepted values for ENUM options
    """

    name: str
    kind: OptionKind
    choices: Tuple[str, ...] = ()

    def rejection_reason(self, value: Any) -> Optional[str]:
        """Why value does not fit this option, or None when it does."""
        if self.kind is OptionKind.BOOL:
            if not isinstance(value, bool):
                return "expected true or false"
        elif self.kind is OptionKind.STRING:
            if not isinstance(value, str) or not value:
                return "expected a non-empty string"
        elif self.kind is OptionKind.INTEGER:
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                return "expected a non-negative integer"
        elif self.kind is OptionKind.ENUM:
            if value not in self.choices:
                return f"expected one of: {', '.join(self.choices)}"
        return None


def _option(name: str, kind: OptionKind, *choices: str) -> Tuple[str, RendererOption]:
    return name, RendererOption(name, kind, tuple(choices))


OPTION_SCHEMA: Dict[str, RendererOption] = dict(
    [
        _option("debug", OptionKind.BOOL),
        _option("cookies-file", OptionKind.STRING),
        _option("disk-cache", OptionKind.BOOL),
        _option("load-images", OptionKind.BOOL),
        _option("local-storage-path", OptionKind.STRING),
        _option("local-storage-quota", OptionKind.INTEGER),
        _option("local-to-remote-url-access", OptionKind.BOOL),
        _option("max-disk-cache-size", OptionKind.INTEGER),  # in KB
        _option("output-encoding", OptionKind.STRING),
        _option("proxy", OptionKind.STRING),  # 192.168.1.42:8080
        _option("proxy-type", OptionKind.ENUM, "http", "socks5", "none"),
        _option("proxy-auth", OptionKind.STRING),  # username:password
        _option("script-encoding", OptionKind.STRING),
        _option("ssl-protocol", OptionKind.ENUM, "sslv3", "sslv2", "tlsv1", "any"),
        _option("ssl-certificates-path", OptionKind.STRING),
        _option("web-security", OptionKind.BOOL),
        _option("webdriver", OptionKind.STRING),
        _option("webdriver-selenium-grid-hub", OptionKind.STRING),
    ]
)


def format_option_value(value: Any) -> str:
    """Render an option value the way the renderer expects it on the command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CommandOptionSet:
    """
    Validated, insertion-ordered renderer options.

    Rejected pairs never change the set. In lenient mode (default) they are
    reported as warnings and dropped; in strict mode they raise
    InvalidOptionError.

    Example:
        >>> options = CommandOptionSet()
        >>> options.add("load-images", False).add("proxy-type", "socks5")
        >>> options.serialize()
        ('--load-images=false', '--proxy-type=socks5')
    """

    def __init__(self, strict: bool = False, schema: Mapping[str, RendererOption] = None):
        self.strict = strict
        self.schema = OPTION_SCHEMA if schema is None else schema
        self._values: Dict[str, Any] = {}

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]], strict: bool = False) -> "CommandOptionSet":
        """Build a set from a mapping, validating each pair in mapping order."""
        option_set = cls(strict=strict)
        option_set.update(options or {})
        return option_set

    def _reject(self, name: str, value: Any, reason: str) -> None:
        if self.strict:
            raise InvalidOptionError(name, value, reason)
        _log_warning(f"Ignoring renderer option --{name}={value!r}: {reason}")

    def add(self, name: str, value: Any) -> "CommandOptionSet":
        """
        Admit one option if the schema knows it and the value fits its kind.

        Re-adding a name replaces its value and keeps its original position.

        Args:
            name: Option name without leading dashes
            value: Option value

        Returns:
            self, for chaining

        Raises:
            InvalidOptionError: In strict mode, if the pair is rejected
        """
        option = self.schema.get(name)
        if option is None:
            self._reject(name, value, "unknown option")
            return self

        reason = option.rejection_reason(value)
        if reason:
            self._reject(name, value, reason)
            return self

        self._values[name] = value
        return self

    def update(self, options: Mapping[str, Any]) -> "CommandOptionSet":
        for name, value in options.items():
            self.add(name, value)
        return self

    def remove(self, name: str) -> "CommandOptionSet":
        self._values.pop(name, None)
        return self

    def serialize(self) -> Tuple[str, ...]:
        """Ordered ``--name=value`` tokens."""
        return tuple(f"--{name}={format_option_value(value)}" for name, value in self._values.items())

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        mode = "strict" if self.strict else "lenient"
        return f"CommandOptionSet({mode}, {self._values!r})"
