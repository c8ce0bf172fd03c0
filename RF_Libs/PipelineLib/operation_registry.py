"""
Operation Registry and sequential runner.

This module provides a centralized registry for named operations. It enables
registration, lookup and in-order application of actions and filters.

Classes:
    OperationRegistry: Registry for operations

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_operations: Register all built-in operations
    apply_operations: Apply a sequence of named operations to an image
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from RF_Libs.ActionsLib.operation import Operation

logger = logging.getLogger(__name__)

# (operation name, options) pair for apply_operations
Step = Tuple[str, Optional[Mapping[str, Any]]]


class OperationRegistry:
    """
    Registry for named operations.

    Example:
        >>> registry = OperationRegistry()
        >>> registry.register("Crop", CropAction(), tags=["geometry"])
        >>> registry.apply("Crop", image, {"width": 100, "height": 100})
        True
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._operations: Dict[str, Operation] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        name: str,
        operation: Operation,
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register an operation.

        Args:
            name: Unique operation name (e.g., "Crop")
            operation: Action or Filter instance
            description: Human-readable description
            tags: Optional list of tags for categorization

        Raises:
            ValueError: If name is empty or operation is not an Operation
            RuntimeError: If name is already registered
        """
        name = str(name).strip()

        if not name:
            raise ValueError("name cannot be empty")

        if not isinstance(operation, Operation):
            raise ValueError(f"operation must be an Operation, got {type(operation)}")

        if name in self._operations:
            raise RuntimeError(
                f"Operation '{name}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._operations[name] = operation
        self._metadata[name] = {
            "description": str(description),
            "kind": operation.kind,
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered operation: {name}")

    def unregister(self, name: str) -> bool:
        """
        Unregister an operation.

        Returns:
            True if unregistered, False if name was not registered
        """
        name = str(name).strip()

        if name in self._operations:
            del self._operations[name]
            del self._metadata[name]
            logger.debug(f"Unregistered operation: {name}")
            return True

        return False

    def get_operation(self, name: str) -> Operation:
        """
        Get an operation by name.

        Raises:
            KeyError: If name is not registered
        """
        name = str(name).strip()

        if name not in self._operations:
            available = ", ".join(self.list_operations())
            raise KeyError(
                f"No operation registered as '{name}'. "
                f"Available operations: {available}"
            )

        return self._operations[name]

    def has_operation(self, name: str) -> bool:
        """Check if an operation is registered under name."""
        return str(name).strip() in self._operations

    def apply(self, name: str, image: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Apply a named operation to an image.

        Returns:
            The operation's result

        Raises:
            KeyError: If name is not registered
            ImageError: Any error raised by the operation
        """
        operation = self.get_operation(name)
        if operation.kind == "filter":
            return image.apply_filter(operation, options)
        return image.apply_action(operation, options)

    def list_operations(self) -> List[str]:
        """Sorted list of registered operation names."""
        return sorted(self._operations.keys())

    def get_metadata(self, name: str) -> Dict[str, Any]:
        """
        Get metadata (description, kind, tags) for an operation.

        Raises:
            KeyError: If name is not registered
        """
        name = str(name).strip()

        if name not in self._metadata:
            raise KeyError(f"No metadata for operation: {name}")

        return dict(self._metadata[name])

    def get_all_metadata(self) -> Dict[str, Dict[str, Any]]:
        return {name: dict(meta) for name, meta in self._metadata.items()}

    def filter_by_tag(self, tag: str) -> List[str]:
        """Sorted list of operation names carrying tag (case-insensitive)."""
        tag = str(tag).strip().lower()
        return sorted([
            name
            for name, meta in self._metadata.items()
            if tag in [t.lower() for t in meta.get("tags", [])]
        ])

    def filter_by_kind(self, kind: str) -> List[str]:
        """Sorted list of operation names of a kind ('action' or 'filter')."""
        kind = str(kind).strip().lower()
        return sorted([name for name, meta in self._metadata.items() if meta["kind"] == kind])

    def clear(self) -> None:
        """Clear all registered operations. Use with caution."""
        self._operations.clear()
        self._metadata.clear()
        logger.warning("Operation registry cleared")


# Global singleton registry
_default_registry: Optional[OperationRegistry] = None


def get_default_registry() -> OperationRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in operations.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = OperationRegistry()
        register_default_operations(_default_registry)

    return _default_registry


def register_default_operations(registry: OperationRegistry) -> None:
    """
    Register all built-in operations.

    Args:
        registry: The registry to register operations with
    """
    from RF_Libs.ActionsLib.orientation_action import AdjustOrientationByExifAction
    from RF_Libs.ActionsLib.crop_action import CropAction
    from RF_Libs.ActionsLib.resize_action import ResizeAction
    from RF_Libs.ActionsLib.rotate_action import RotateAction
    from RF_Libs.ActionsLib.copy_action import CopyAction
    from RF_Libs.FiltersLib.sharpen_filter import SharpenFilter
    from RF_Libs.FiltersLib.unsharp_mask_filter import UnsharpMaskFilter

    registry.register(
        "Adjust Orientation",
        AdjustOrientationByExifAction(),
        description="Rotate upright according to the EXIF Orientation tag",
        tags=["geometry", "exif"],
    )
    registry.register(
        "Crop",
        CropAction(),
        description="Crop or extend around an anchor with an optional fill color",
        tags=["geometry"],
    )
    registry.register(
        "Resize",
        ResizeAction(),
        description="Resample to a size, optionally keeping the aspect ratio",
        tags=["geometry"],
    )
    registry.register(
        "Rotate",
        RotateAction(),
        description="Rotate by an angle with a background color",
        tags=["geometry"],
    )
    registry.register(
        "Copy",
        CopyAction(),
        description="Paste another image with an opacity, honouring its alpha",
        tags=["composition"],
    )
    registry.register(
        "Sharpen",
        SharpenFilter(),
        description="Sharpen with a normal or smooth 3x3 kernel",
        tags=["convolution", "sharpen"],
    )
    registry.register(
        "Unsharp Mask",
        UnsharpMaskFilter(),
        description="Photoshop-style unsharp mask",
        tags=["convolution", "sharpen"],
    )

    logger.info("Registered default operations")


def apply_operations(
    image: Any,
    steps: Iterable[Step],
    registry: Optional[OperationRegistry] = None,
) -> List[bool]:
    """
    Apply named operations to an image, one after the other.

    Args:
        image: The Image to transform
        steps: (name, options) pairs in application order
        registry: Registry to look names up in (default: the global one)

    Returns:
        The result of each step, in order

    Raises:
        KeyError: If a step names an unknown operation
        ImageError: If a step fails; later steps are not applied
    """
    if registry is None:
        registry = get_default_registry()

    results = []
    for index, (name, options) in enumerate(steps):
        result = registry.apply(name, image, options)
        logger.debug(f"Step {index} '{name}' -> {result}")
        results.append(result)

    return results
