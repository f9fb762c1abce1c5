"""Parameter descriptors and the merge step that folds them into a method map.

A handler method accumulates one ``Descriptor`` per ``(SourceKind, index)``
pair. Each annotation application produces a *new* mapping; maps already
handed out are never mutated.

Examples:
    args = assign_metadata(None, SourceKind.BODY, 0, "role")
    args = assign_metadata(args, SourceKind.QUERY, 1, None, ParseIntPipe)
    # {"BODY:0": Descriptor(0, "role", ()), "QUERY:1": Descriptor(1, None, (ParseIntPipe,))}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .constants import KEY_SEPARATOR
from .enums import SourceKind
from .exceptions import InvalidCompositeKeyError

# A named property (str) or any structured key understood by the binder
ParamData = Union[str, int, object]

# A transform class or a ready transform instance
Transform = Any


@dataclass(frozen=True)
class Descriptor:
    """Binding record for one handler parameter.

    Attributes:
        index: Position of the parameter in the handler signature
        data: Property to pluck from the source, None for the whole value
        pipes: Transforms applied left to right to the extracted value
    """

    index: int
    data: Optional[ParamData] = None
    pipes: Tuple[Transform, ...] = field(default_factory=tuple)


MethodBindingMap = Dict[str, Descriptor]


def composite_key(kind: SourceKind, index: int) -> str:
    """Build the ``"{KIND}:{index}"`` key the binder parses."""
    return f"{kind.name}{KEY_SEPARATOR}{index}"


def parse_composite_key(key: str) -> Tuple[SourceKind, int]:
    """Split a composite key back into its source kind and parameter index.

    Args:
        key: Composite key such as ``"BODY:0"``

    Returns:
        Tuple of (source kind, parameter index)

    Raises:
        InvalidCompositeKeyError: If the key is not ``KIND:index`` with a known
            kind and a non-negative integer index
    """
    kind_name, sep, raw_index = key.partition(KEY_SEPARATOR)
    if not sep:
        raise InvalidCompositeKeyError(key, "missing separator")
    try:
        kind = SourceKind[kind_name]
    except KeyError:
        raise InvalidCompositeKeyError(
            key, f"unknown source kind {kind_name!r}"
        ) from None
    if not (raw_index.isascii() and raw_index.isdigit()):
        raise InvalidCompositeKeyError(key, f"index {raw_index!r} is not a number")
    return kind, int(raw_index)


def assign_metadata(
    args: Optional[Mapping[str, Descriptor]],
    kind: SourceKind,
    index: int,
    data: Optional[ParamData] = None,
    *pipes: Transform,
) -> MethodBindingMap:
    """Return a copy of ``args`` with the descriptor for ``kind``/``index`` set.

    Existing entries for other keys are carried over unchanged; an entry with
    the same key is replaced. ``args`` itself is left untouched.
    """
    return {
        **(args or {}),
        composite_key(kind, index): Descriptor(index=index, data=data, pipes=pipes),
    }


__all__ = [
    "Descriptor",
    "MethodBindingMap",
    "ParamData",
    "Transform",
    "assign_metadata",
    "composite_key",
    "parse_composite_key",
]
