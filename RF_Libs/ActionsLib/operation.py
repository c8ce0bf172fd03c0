"""
Operation contract shared by every action and filter.

An operation receives an Image and an options mapping (or a typed
options dataclass), validates the options at the boundary and then
mutates the Image. The boolean result tells whether the operation took
effect; malformed options raise InvalidOptionsError instead.

Classes:
    OperationOptions: Base for typed per-operation options
    Operation: Abstract operation with apply(image, options) -> bool
    Action: Base for geometric operations
    Filter: Base for photometric operations
"""

from abc import ABC, abstractmethod
from dataclasses import asdict
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Sequence, Type

from RF_Libs.ImageLib.exceptions import InvalidOptionsError


def require_options(data: Mapping[str, Any], keys: Sequence[str]) -> None:
    """
    Check that every key is present and not None.

    Raises:
        InvalidOptionsError: Naming all mandatory options
    """
    missing = [key for key in keys if data.get(key) is None]
    if missing:
        raise InvalidOptionsError(
            f"Some options are missing. Mandatory options: {', '.join(keys)}",
            missing[0],
        )


def as_int(value: Any, key: str) -> int:
    """Convert a numeric option to int (floats are truncated)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidOptionsError(f"Option '{key}' must be a number, got {type(value).__name__}", key)
    return int(value)


def as_float(value: Any, key: str) -> float:
    """Convert a numeric option to float."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidOptionsError(f"Option '{key}' must be a number, got {type(value).__name__}", key)
    return float(value)


def as_bool(value: Any, key: str) -> bool:
    """Convert a boolean-like option (bool or 0/1) to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise InvalidOptionsError(f"Option '{key}' must be a boolean, got {value!r}", key)


class OperationOptions:
    """Base class for the typed options dataclasses."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OperationOptions":
        """Create from dictionary. Unknown keys are ignored."""
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


class Operation(ABC):
    """
    An operation that can be applied to an Image.

    Subclasses set options_class and implement process().
    """

    kind: str = "operation"
    options_class: Type[OperationOptions] = OperationOptions

    def apply(self, image: Any, options: Optional[Any] = None) -> bool:
        """
        Apply the operation to an image.

        Args:
            image: The Image to mutate
            options: Mapping of option name to value, or an instance of
                     options_class

        Returns:
            True if successful, else False for a legitimate no-op

        Raises:
            InvalidOptionsError: If options are missing or malformed
        """
        return self.process(image, self.resolve_options(options))

    def resolve_options(self, options: Optional[Any]) -> OperationOptions:
        """Validate raw options into an instance of options_class."""
        if isinstance(options, self.options_class):
            return options

        if options is None:
            options = {}

        if not isinstance(options, Mapping):
            raise InvalidOptionsError(
                f"{type(self).__name__} options must be a mapping or "
                f"{self.options_class.__name__}, got {type(options).__name__}"
            )

        return self.options_class.from_dict(options)

    @abstractmethod
    def process(self, image: Any, options: Any) -> bool:
        """Mutate image according to validated options."""


class Action(Operation):
    """Base class for actions (crop, resize, rotate, copy, orientation)."""

    kind = "action"


class Filter(Operation):
    """Base class for filters (sharpen, unsharp mask)."""

    kind = "filter"
