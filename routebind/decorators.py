"""Parameter annotations for request handlers.

Each annotation is bound to exactly one SourceKind when this module is
imported. Attach them to handler parameters with ``typing.Annotated``:

    @controller
    class UsersController:
        async def update(
            self,
            user_id: Annotated[int, Param("id", ParseIntPipe)],
            role: Annotated[str, Body("role")],
            request: Annotated[Any, Req()],
        ):
            ...

Simple annotations (no transforms):
    - Request / Req, Response / Res, Next, Session
    - UploadedFile(file_key=None), UploadedFiles()
    - Headers(property=None)

Pipeline annotations (optional property, then transforms):
    - Query(), Query(*pipes), Query(property, *pipes)
    - Body(), Body(*pipes), Body(property, *pipes)
    - Param(), Param(*pipes), Param(property, *pipes)
"""

from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional

from .enums import SourceKind
from .factories import (
    ParameterBinding,
    create_pipes_route_param_decorator,
    create_route_param_decorator,
)

AnnotationFactory = Callable[..., ParameterBinding]

Request: AnnotationFactory = create_route_param_decorator(SourceKind.REQUEST)
Response: AnnotationFactory = create_route_param_decorator(SourceKind.RESPONSE)
Next: AnnotationFactory = create_route_param_decorator(SourceKind.NEXT)
Session: AnnotationFactory = create_route_param_decorator(SourceKind.SESSION)
UploadedFile: AnnotationFactory = create_route_param_decorator(
    SourceKind.FILE, "UploadedFile"
)
UploadedFiles: AnnotationFactory = create_route_param_decorator(
    SourceKind.FILES, "UploadedFiles"
)
# Takes a header name only; headers never carry a transform pipeline
Headers: AnnotationFactory = create_route_param_decorator(SourceKind.HEADERS)

Query: AnnotationFactory = create_pipes_route_param_decorator(SourceKind.QUERY)
Body: AnnotationFactory = create_pipes_route_param_decorator(SourceKind.BODY)
Param: AnnotationFactory = create_pipes_route_param_decorator(SourceKind.PARAM)

Req = Request
Res = Response


class BindingCatalog(Mapping[SourceKind, AnnotationFactory]):
    """Read-only table of annotation constructors keyed by SourceKind.

    Built once and handed to whatever exposes binding declarations, e.g. the
    fluent builder.
    """

    def __init__(
        self,
        factories: Mapping[SourceKind, AnnotationFactory],
        aliases: Optional[Mapping[str, SourceKind]] = None,
    ):
        self._factories = MappingProxyType(dict(factories))
        names: Dict[str, SourceKind] = {
            factory.__name__: kind for kind, factory in self._factories.items()
        }
        names.update(aliases or {})
        self._names = MappingProxyType(names)

    def __getitem__(self, kind: SourceKind) -> AnnotationFactory:
        return self._factories[kind]

    def __iter__(self) -> Iterator[SourceKind]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def by_name(self, name: str) -> AnnotationFactory:
        """Look up an annotation by its exported name (aliases included)."""
        return self._factories[self._names[name]]

    @property
    def names(self) -> Mapping[str, SourceKind]:
        """Exported annotation names mapped to their SourceKind."""
        return self._names


DEFAULT_CATALOG = BindingCatalog(
    {
        SourceKind.REQUEST: Request,
        SourceKind.RESPONSE: Response,
        SourceKind.NEXT: Next,
        SourceKind.SESSION: Session,
        SourceKind.FILE: UploadedFile,
        SourceKind.FILES: UploadedFiles,
        SourceKind.HEADERS: Headers,
        SourceKind.QUERY: Query,
        SourceKind.BODY: Body,
        SourceKind.PARAM: Param,
    },
    aliases={"Req": SourceKind.REQUEST, "Res": SourceKind.RESPONSE},
)


__all__ = [
    "AnnotationFactory",
    "BindingCatalog",
    "DEFAULT_CATALOG",
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
]
