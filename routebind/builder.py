"""Fluent API for declaring parameter bindings during route registration.

An alternative to class-level annotations for registration code that owns
the handler table:

    builder = RouteArgumentsBuilder(registry)
    users = builder.handler(UsersController, "update")
    users.bind(0).from_param("id").through(ParseIntPipe)
    users.bind(1).from_body().with_property("role").through(ValidationPipe)
    users.bind(2).from_request()

Each call writes through to the store immediately, so the stored map always
reflects the chain built so far.
"""

import logging
from typing import Any, Hashable, Mapping, Optional, Tuple

from .arguments import Named, Pipeline
from .decorators import DEFAULT_CATALOG, BindingCatalog
from .descriptor import Descriptor, ParamData, Transform
from .enums import PIPELINE_KINDS, SourceKind
from .exceptions import BindingConfigurationError
from .metadata import MetadataStore, get_metadata_registry, get_route_arguments

logger = logging.getLogger(__name__)


class ParameterBindingBuilder:
    """Builds the binding for a single parameter index."""

    def __init__(self, handler: "HandlerBindings", index: int):
        self._handler = handler
        self._index = index
        self._kind: Optional[SourceKind] = None
        self._data: Optional[ParamData] = None
        self._pipes: Tuple[Transform, ...] = ()

    @property
    def index(self) -> int:
        return self._index

    @property
    def kind(self) -> Optional[SourceKind]:
        return self._kind

    def from_source(
        self, kind: SourceKind, data: Optional[ParamData] = None
    ) -> "ParameterBindingBuilder":
        """Choose where the parameter value comes from.

        Raises:
            BindingConfigurationError: If a source was already chosen
        """
        if self._kind is not None:
            raise BindingConfigurationError(
                f"Parameter {self._index} of {self._handler} is already bound "
                f"to {self._kind.name}"
            )
        self._kind = kind
        self._data = data
        return self._write()

    def from_request(self) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.REQUEST)

    def from_response(self) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.RESPONSE)

    def from_next(self) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.NEXT)

    def from_session(self) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.SESSION)

    def from_file(self, file_key: Optional[str] = None) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.FILE, file_key)

    def from_files(self) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.FILES)

    def from_headers(self, name: Optional[str] = None) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.HEADERS, name)

    def from_query(self, name: Optional[str] = None) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.QUERY, name)

    def from_body(self, name: Optional[str] = None) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.BODY, name)

    def from_param(self, name: Optional[str] = None) -> "ParameterBindingBuilder":
        return self.from_source(SourceKind.PARAM, name)

    def with_property(self, name: ParamData) -> "ParameterBindingBuilder":
        """Pluck ``name`` from the source instead of using the whole value."""
        self._require_source("with_property")
        self._data = name
        return self._write()

    def through(self, *transforms: Transform) -> "ParameterBindingBuilder":
        """Append transforms to the pipeline, in order.

        Raises:
            BindingConfigurationError: If no source was chosen or the source
                does not take a transform pipeline
        """
        kind = self._require_source("through")
        if kind not in PIPELINE_KINDS:
            raise BindingConfigurationError(
                f"{kind.name} bindings do not take transforms "
                f"(parameter {self._index} of {self._handler})"
            )
        self._pipes = self._pipes + transforms
        return self._write()

    with_transforms = through

    def _require_source(self, operation: str) -> SourceKind:
        if self._kind is None:
            raise BindingConfigurationError(
                f"{operation}() called before a source was chosen for "
                f"parameter {self._index} of {self._handler}"
            )
        return self._kind

    def _write(self) -> "ParameterBindingBuilder":
        kind = self._require_source("bind")
        factory = self._handler.catalog[kind]
        if kind in PIPELINE_KINDS:
            binding = factory(Named(self._data), Pipeline(*self._pipes))
        else:
            binding = factory(self._data)
        handler = self._handler
        binding(handler.owner, handler.method, self._index, handler.store)
        return self


class HandlerBindings:
    """Bindings of one handler method, identified by owner type and method name."""

    def __init__(
        self,
        owner: Any,
        method: Hashable,
        store: MetadataStore,
        catalog: BindingCatalog,
    ):
        self.owner = owner
        self.method = method
        self.store = store
        self.catalog = catalog

    def bind(self, index: int) -> ParameterBindingBuilder:
        """Start declaring the binding for parameter ``index``."""
        return ParameterBindingBuilder(self, index)

    @property
    def arguments(self) -> Mapping[str, Descriptor]:
        """Current binding map of this handler."""
        return get_route_arguments(self.owner, self.method, self.store)

    def __str__(self) -> str:
        owner = getattr(self.owner, "__qualname__", repr(self.owner))
        return f"{owner}.{self.method}"


class RouteArgumentsBuilder:
    """Entry point of the fluent binding API.

    Args:
        store: Store bindings are written to (defaults to the process-wide registry)
        catalog: Annotation table used to build each binding
    """

    def __init__(
        self,
        store: Optional[MetadataStore] = None,
        catalog: BindingCatalog = DEFAULT_CATALOG,
    ):
        self.store = store if store is not None else get_metadata_registry()
        self.catalog = catalog

    def handler(self, owner: Any, method: Hashable) -> HandlerBindings:
        """Select the handler method to declare bindings for."""
        handler = HandlerBindings(owner, method, self.store, self.catalog)
        logger.debug(f"Declaring bindings for {handler}")
        return handler


__all__ = [
    "RouteArgumentsBuilder",
    "HandlerBindings",
    "ParameterBindingBuilder",
]
