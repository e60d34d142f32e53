"""
Box Container - Payload carrier for bus and node events.

Every event delivered by the bus or by a node carries exactly one Box.
Two transport modes are used:
1. Dill serialization path: for picklable payloads (value semantics)
2. Reference path: for unpicklable objects, and for any value boxed with
   Box.ref() (container-scoped event details keep their identity)

Payload-less events (lifecycle notifications) carry Box.empty().
"""

import pickle
from typing import Any

import dill


class BoxError(Exception):
    """Base exception for Box-related errors."""
    pass


class EmptyBoxError(BoxError):
    """Raised when .into() is called on an empty Box."""
    pass


_EMPTY = "empty"
_DILL = "dill"
_REF = "ref"


def _is_serializable(obj: Any) -> bool:
    """
    Detect if object can be dill-serialized.

    Trade-off: Try-except is slower than type checking, but more accurate.
    Event payloads are small, so this stays off the hot path.
    """
    try:
        dill.dumps(obj)
        return True
    except (TypeError, AttributeError, pickle.PicklingError):
        return False


class Box:
    """
    Payload container passed to every event handler.

    Usage:
        box = Box.any({"message": "saved"})
        detail = box.into()  # Returns deserialized copy

        box = Box.ref(node)  # Shared object, no copy
        box.into() is node   # True
    """

    def __init__(self, inner_type: type, transport_mode: str, data: Any):
        """
        Internal constructor. Use Box.any(), Box.ref() or Box.empty() instead.

        Args:
            inner_type: The type of the contained value
            transport_mode: One of 'empty', 'dill' or 'ref'
            data: Serialized bytes (dill), the object itself (ref) or None
        """
        self._inner_type = inner_type
        self._mode = transport_mode
        self._data = data

    @classmethod
    def any(cls, value: Any) -> "Box":
        """
        Create a Box from any value, auto-detecting transport mode.

        Args:
            value: The value to box

        Returns:
            Box instance with appropriate transport mode
        """
        if _is_serializable(value):
            return cls(type(value), _DILL, dill.dumps(value))
        return cls(type(value), _REF, value)

    @classmethod
    def ref(cls, value: Any) -> "Box":
        """Box a value by reference, skipping serialization."""
        return cls(type(value), _REF, value)

    @classmethod
    def empty(cls) -> "Box":
        """Create a Box carrying no payload."""
        return cls(type(None), _EMPTY, None)

    def is_empty(self) -> bool:
        return self._mode == _EMPTY

    def into(self) -> Any:
        """
        Unpack the Box and return the contained value.

        For dill mode: deserializes and returns a new copy
        For ref mode: returns the same object

        Raises:
            EmptyBoxError: If the Box carries no payload
        """
        if self._mode == _EMPTY:
            raise EmptyBoxError("Cannot unpack an empty Box")
        if self._mode == _DILL:
            return dill.loads(self._data)
        return self._data

    def into_or(self, default: Any = None) -> Any:
        """Unpack the Box, returning ``default`` when it is empty."""
        if self._mode == _EMPTY:
            return default
        return self.into()

    def clone(self) -> "Box":
        """
        Clone the Box.

        Dill payloads share the serialized bytes, so every into() on the
        clone still yields an independent copy. Ref payloads share the object.
        """
        return Box(self._inner_type, self._mode, self._data)

    def inner_type(self) -> type:
        """Get the type of the contained value."""
        return self._inner_type

    def __repr__(self) -> str:
        return f"Box<{self._inner_type.__name__}, mode={self._mode}>"
