"""
Common response models and utilities.

Generic response wrapper.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Generic success response wrapper."""

    success: bool = True
    data: T
