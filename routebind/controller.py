"""Apply parameter annotations declared in handler signatures.

Python has no parameter decorators, so bindings are attached to parameters
either through ``typing.Annotated`` metadata or as the parameter default:

    @controller
    class CatsController:
        async def find(self, cat_id: Annotated[int, Param("id", ParseIntPipe)]):
            ...

        async def create(self, dto=Body(ValidationPipe)):
            ...

When the class is decorated every marker is applied with the parameter's
position as the index. The bound ``self``/``cls`` parameter is not counted.

String annotations (``from __future__ import annotations``) are evaluated one
parameter at a time against the module globals, the names visible where the
class is defined and the class namespace. An annotation that cannot be
evaluated is skipped unless it mentions ``Annotated``; in that case it may
hide a marker and ``BindingConfigurationError`` is raised.
"""

import inspect
import logging
import types
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    overload,
)

from typing_extensions import Annotated, get_args, get_origin

from .constants import LogIcons
from .exceptions import BindingConfigurationError
from .factories import ParameterBinding
from .metadata import MetadataStore

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type)

_UNION_ORIGINS = tuple(
    origin for origin in (Union, getattr(types, "UnionType", None)) if origin
)

_EVALUATION_ERRORS = (NameError, AttributeError, SyntaxError, TypeError)


def _unwrap(member: Any) -> Any:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def _caller_namespace(frame: Optional[types.FrameType]) -> Dict[str, Any]:
    """Copy the locals of the frame a class is being defined in."""
    if frame is None:
        return {}
    try:
        return dict(frame.f_locals)
    finally:
        del frame


def _raw_annotations(func: Callable[..., Any]) -> Dict[str, Any]:
    try:
        return dict(getattr(func, "__annotations__", None) or {})
    except NameError:
        # Deferred annotations with an undefined name; keep it as a forward ref
        import annotationlib

        return dict(
            annotationlib.get_annotations(
                func, format=annotationlib.Format.FORWARDREF
            )
        )


def _resolve_hint(
    func: Callable[..., Any], name: str, hint: Any, localns: Mapping[str, Any]
) -> Any:
    expression = getattr(hint, "__forward_arg__", hint)
    if not isinstance(expression, str):
        return hint
    try:
        return eval(expression, func.__globals__, dict(localns))  # noqa: S307
    except _EVALUATION_ERRORS as exc:
        if "Annotated" in expression:
            raise BindingConfigurationError(
                f"Cannot evaluate annotation {expression!r} of parameter "
                f"{name!r} in {func.__qualname__}: {exc}"
            ) from exc
        logger.debug(
            f"Skipping unresolved annotation {expression!r} of {func.__qualname__}: {exc}"
        )
        return None


def _markers_in(hint: Any) -> Iterator[ParameterBinding]:
    origin = get_origin(hint)
    if origin is Annotated:
        for meta in hint.__metadata__:
            if isinstance(meta, ParameterBinding):
                yield meta
    elif origin in _UNION_ORIGINS:
        # Optional[Annotated[...]]
        for arg in get_args(hint):
            yield from _markers_in(arg)


def iter_parameter_bindings(
    member: Any,
    localns: Optional[Mapping[str, Any]] = None,
) -> Iterator[Tuple[int, ParameterBinding]]:
    """Yield ``(index, binding)`` for every marker on a class member.

    Args:
        member: Function, staticmethod or classmethod as found in a class body
        localns: Extra names for evaluating string annotations

    Yields:
        Parameter index and binding, in declaration order

    Raises:
        BindingConfigurationError: If an ``Annotated`` string annotation
            cannot be evaluated
    """
    func = _unwrap(member)
    if not inspect.isfunction(func):
        return

    localns = localns or {}
    annotations = _raw_annotations(func)
    params = list(inspect.signature(func).parameters.values())
    if not isinstance(member, staticmethod):
        params = params[1:]

    for index, param in enumerate(params):
        if param.name in annotations:
            hint = _resolve_hint(func, param.name, annotations[param.name], localns)
            for marker in _markers_in(hint):
                yield index, marker
        if isinstance(param.default, ParameterBinding):
            yield index, param.default


def _bind(
    cls: C, store: Optional[MetadataStore], namespace: Dict[str, Any]
) -> C:
    localns = {**namespace, **vars(cls)}
    localns.setdefault(cls.__name__, cls)

    count = 0
    for name, member in vars(cls).items():
        for index, binding in iter_parameter_bindings(member, localns):
            binding(cls, name, index, store)
            count += 1
    logger.debug(
        f"{LogIcons.DISCOVERY} Recorded {count} parameter binding(s) on {cls.__qualname__}"
    )
    return cls


def bind_parameters(
    cls: C,
    store: Optional[MetadataStore] = None,
    localns: Optional[Mapping[str, Any]] = None,
) -> C:
    """Record the bindings of every handler declared directly on ``cls``.

    Args:
        cls: Handler class to scan
        store: Store to write to (defaults to the process-wide registry)
        localns: Names for evaluating string annotations (defaults to the
            caller's local variables)

    Returns:
        The class, unchanged

    Raises:
        BindingConfigurationError: If an ``Annotated`` string annotation
            cannot be evaluated
    """
    if localns is None:
        frame = inspect.currentframe()
        namespace = _caller_namespace(frame.f_back if frame else None)
    else:
        namespace = dict(localns)
    return _bind(cls, store, namespace)


@overload
def controller(cls: C) -> C: ...


@overload
def controller(*, store: Optional[MetadataStore] = None) -> Callable[[C], C]: ...


def controller(
    cls: Optional[Type[Any]] = None, *, store: Optional[MetadataStore] = None
) -> Any:
    """Class decorator form of ``bind_parameters``.

    Examples:
        @controller
        class A: ...

        @controller(store=registry)
        class B: ...
    """

    def decorator(target: C) -> C:
        frame = inspect.currentframe()
        return _bind(target, store, _caller_namespace(frame.f_back if frame else None))

    if cls is None:
        return decorator

    frame = inspect.currentframe()
    return _bind(cls, store, _caller_namespace(frame.f_back if frame else None))


__all__ = ["bind_parameters", "controller", "iter_parameter_bindings"]
