"""
PipelineLib - Named operations and sequential application
"""

from RF_Libs.PipelineLib.operation_registry import (
    OperationRegistry,
    get_default_registry,
    register_default_operations,
    apply_operations,
)

__all__ = [
    "OperationRegistry",
    "get_default_registry",
    "register_default_operations",
    "apply_operations",
]
