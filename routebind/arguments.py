"""Tagged arguments for pipeline annotations.

``Body("role")`` and ``Body(ParseIntPipe)`` are told apart by the type of the
first argument. Wrapping it states the intent explicitly instead:

    Body(Named("role"), ValidationPipe)
    Query(Pipeline(ParseIntPipe, DefaultValuePipe(1)))
"""

from dataclasses import dataclass
from typing import Tuple

from .descriptor import ParamData, Transform


@dataclass(frozen=True)
class Named:
    """Marks a value as the property key to pluck from the source."""

    name: ParamData


@dataclass(frozen=True, init=False)
class Pipeline:
    """Marks one or more transforms as pipeline entries."""

    transforms: Tuple[Transform, ...]

    def __init__(self, *transforms: Transform):
        object.__setattr__(self, "transforms", transforms)


__all__ = ["Named", "Pipeline"]
