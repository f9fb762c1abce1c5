"""
routebind - Parameter binding metadata for request handlers.

routebind lets a framework author declare, per handler parameter, which part
of a request is bound there (the request itself, the body, a query field, an
uploaded file, ...) and which transforms the value passes through first. The
declarations accumulate into one binding map per handler method that a
binder reads at route registration.

Main Exports (Import from top level):
    Annotations:
        - Request / Req, Response / Res, Next, Session
        - UploadedFile, UploadedFiles, Headers
        - Query, Body, Param
        - Named, Pipeline: explicit argument tagging

    Declaration:
        - controller / bind_parameters: apply annotations found in signatures
        - RouteArgumentsBuilder: fluent declaration API

    Metadata:
        - Descriptor, SourceKind
        - assign_metadata, composite_key, parse_composite_key
        - MetadataRegistry, get_metadata_registry, get_route_arguments

    Configuration:
        - BindingConfig, configure_logging
"""

__version__ = "0.1.0"

from .arguments import Named, Pipeline
from .builder import HandlerBindings, ParameterBindingBuilder, RouteArgumentsBuilder
from .config import BindingConfig
from .constants import ROUTE_ARGS_METADATA
from .controller import bind_parameters, controller, iter_parameter_bindings
from .decorators import (
    DEFAULT_CATALOG,
    Body,
    BindingCatalog,
    Headers,
    Next,
    Param,
    Query,
    Req,
    Request,
    Res,
    Response,
    Session,
    UploadedFile,
    UploadedFiles,
)
from .descriptor import (
    Descriptor,
    MethodBindingMap,
    assign_metadata,
    composite_key,
    parse_composite_key,
)
from .enums import SourceKind
from .exceptions import (
    BindingConfigurationError,
    InvalidCompositeKeyError,
    RouteBindError,
)
from .factories import (
    ParameterBinding,
    create_pipes_route_param_decorator,
    create_route_param_decorator,
)
from .logging_config import configure_logging
from .metadata import (
    MetadataNamespace,
    MetadataRegistry,
    MetadataStore,
    clear_metadata_registry,
    get_metadata_registry,
    get_route_arguments,
)
from .protocols import ArgumentMetadata, PipeTransform, RouteArgumentsBinder

__all__ = [
    # Version
    "__version__",
    # Annotations
    "Request",
    "Req",
    "Response",
    "Res",
    "Next",
    "Session",
    "UploadedFile",
    "UploadedFiles",
    "Headers",
    "Query",
    "Body",
    "Param",
    "Named",
    "Pipeline",
    "BindingCatalog",
    "DEFAULT_CATALOG",
    "ParameterBinding",
    "create_route_param_decorator",
    "create_pipes_route_param_decorator",
    # Declaration
    "controller",
    "bind_parameters",
    "iter_parameter_bindings",
    "RouteArgumentsBuilder",
    "HandlerBindings",
    "ParameterBindingBuilder",
    # Metadata
    "ROUTE_ARGS_METADATA",
    "SourceKind",
    "Descriptor",
    "MethodBindingMap",
    "assign_metadata",
    "composite_key",
    "parse_composite_key",
    "MetadataStore",
    "MetadataRegistry",
    "MetadataNamespace",
    "get_metadata_registry",
    "clear_metadata_registry",
    "get_route_arguments",
    # Protocols
    "ArgumentMetadata",
    "PipeTransform",
    "RouteArgumentsBinder",
    # Configuration
    "BindingConfig",
    "configure_logging",
    # Errors
    "RouteBindError",
    "BindingConfigurationError",
    "InvalidCompositeKeyError",
]
