"""Type protocols for the collaborators around the binding metadata.

This module defines the contracts for transforms and for the binder that
consumes finished binding maps. Neither is implemented here.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from fastapi import Request
from pydantic import BaseModel, ConfigDict

from .descriptor import Descriptor
from .enums import PIPELINE_KINDS, SourceKind


class ArgumentMetadata(BaseModel):
    """Description of a handler argument, passed to each transform.

    Attributes:
        type: ``"body"``, ``"query"``, ``"param"`` or ``"custom"``
        metatype: Declared type of the handler parameter, if known
        data: Property plucked from the source, None for the whole value
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    type: str
    metatype: Optional[Any] = None
    data: Optional[Any] = None

    @classmethod
    def for_descriptor(
        cls,
        kind: SourceKind,
        descriptor: Descriptor,
        metatype: Optional[Any] = None,
    ) -> "ArgumentMetadata":
        """Build the metadata the binder hands to the descriptor's transforms."""
        arg_type = kind.name.lower() if kind in PIPELINE_KINDS else "custom"
        return cls(type=arg_type, metatype=metatype, data=descriptor.data)


@runtime_checkable
class PipeTransform(Protocol):
    """A transform applied to an extracted value before handler invocation."""

    def transform(self, value: Any, metadata: ArgumentMetadata) -> Any:
        """Transform ``value``.

        Args:
            value: Value extracted from the request, or the previous transform's output
            metadata: Description of the handler argument

        Returns:
            The transformed value
        """
        ...


class RouteArgumentsBinder(Protocol):
    """Consumes a finished binding map to produce handler arguments.

    The binder reads each handler's map once, during route registration, and
    parses its composite keys with ``parse_composite_key``. ``bind`` then runs
    on every request for that route against the map read at registration.
    """

    async def bind(
        self, request: Request, arguments: Mapping[str, Descriptor]
    ) -> Dict[int, Any]:
        """Extract and transform every bound argument of a handler.

        Args:
            request: Incoming request
            arguments: Binding map of the handler

        Returns:
            Argument values keyed by parameter index
        """
        ...


__all__ = ["ArgumentMetadata", "PipeTransform", "RouteArgumentsBinder"]
