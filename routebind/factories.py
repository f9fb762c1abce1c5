"""Factories that turn a SourceKind into a parameter annotation constructor.

Two flavours exist:

1. Simple annotations (``Request()``, ``UploadedFile("avatar")``) carry at most
   a data value and never a transform pipeline.
2. Pipeline annotations (``Body()``, ``Query("page", ParseIntPipe)``) accept an
   optional property name followed by transforms. The first positional
   argument is interpreted by its runtime type:

   - None or any ``str`` (``""`` included) is the property name;
   - anything else is the first transform of the pipeline.

Both produce a ``ParameterBinding``: a callable applied to
``(target, key, index)`` that records its descriptor in a MetadataStore.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional, Tuple

from .arguments import Named, Pipeline
from .constants import LogIcons
from .descriptor import ParamData, Transform, assign_metadata, composite_key
from .enums import SourceKind
from .metadata import MetadataStore, get_metadata_registry

logger = logging.getLogger(__name__)


def _owner_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or type(target).__qualname__


@dataclass(frozen=True)
class ParameterBinding:
    """A resolved parameter annotation, ready to be applied to a parameter.

    Attributes:
        kind: Source the parameter value comes from
        data: Property to pluck from the source, None for the whole value
        pipes: Transforms applied to the extracted value
    """

    kind: SourceKind
    data: Optional[ParamData] = None
    pipes: Tuple[Transform, ...] = field(default_factory=tuple)

    def __call__(
        self,
        target: Any,
        key: Hashable,
        index: int,
        store: Optional[MetadataStore] = None,
    ) -> None:
        """Record this binding for parameter ``index`` of ``target.key``.

        Args:
            target: Type that declares the handler method
            key: Handler method name
            index: Parameter position in the handler signature
            store: Store to write to (defaults to the process-wide registry)
        """
        store = store if store is not None else get_metadata_registry()
        args = store.get(target, key) or {}
        store.set(
            target,
            key,
            assign_metadata(args, self.kind, index, self.data, *self.pipes),
        )
        logger.debug(
            f"{LogIcons.REGISTERED} Bound {composite_key(self.kind, index)} "
            f"on {_owner_name(target)}.{key} (data={self.data!r}, "
            f"pipes={len(self.pipes)})"
        )


def _flatten_pipes(pipes: Tuple[Any, ...]) -> Tuple[Transform, ...]:
    flat = []
    for pipe in pipes:
        if isinstance(pipe, Pipeline):
            flat.extend(pipe.transforms)
        else:
            flat.append(pipe)
    return tuple(flat)


def resolve_pipe_arguments(
    data: Any = None, *pipes: Any
) -> Tuple[Optional[ParamData], Tuple[Transform, ...]]:
    """Split the arguments of a pipeline annotation into data and pipes.

    Args:
        data: Property name, transform, ``Named`` or ``Pipeline`` wrapper
        *pipes: Remaining transforms

    Returns:
        Tuple of (data, pipes)
    """
    rest = _flatten_pipes(pipes)
    if isinstance(data, Named):
        return data.name, rest
    if isinstance(data, Pipeline):
        return None, data.transforms + rest
    if data is None or isinstance(data, str):
        return data, rest
    return None, (data, *rest)


def create_route_param_decorator(
    kind: SourceKind, name: Optional[str] = None
) -> Callable[..., ParameterBinding]:
    """Create a constructor for annotations that take only a data value."""

    def decorator(data: Optional[ParamData] = None) -> ParameterBinding:
        return ParameterBinding(kind=kind, data=data)

    decorator.__name__ = name or kind.name.title()
    decorator.__qualname__ = decorator.__name__
    return decorator


def create_pipes_route_param_decorator(
    kind: SourceKind, name: Optional[str] = None
) -> Callable[..., ParameterBinding]:
    """Create a constructor for annotations that take a property and/or pipes."""

    def decorator(data: Any = None, *pipes: Any) -> ParameterBinding:
        param_data, param_pipes = resolve_pipe_arguments(data, *pipes)
        return ParameterBinding(kind=kind, data=param_data, pipes=param_pipes)

    decorator.__name__ = name or kind.name.title()
    decorator.__qualname__ = decorator.__name__
    return decorator


__all__ = [
    "ParameterBinding",
    "resolve_pipe_arguments",
    "create_route_param_decorator",
    "create_pipes_route_param_decorator",
]
