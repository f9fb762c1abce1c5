"""Enumerations for route parameter binding."""

from enum import Enum


class SourceKind(Enum):
    """Origin of a value bound to a handler parameter.

    The member name is what appears in composite keys (``"BODY:0"``), so
    members must never be renamed.
    """

    REQUEST = "REQUEST"
    RESPONSE = "RESPONSE"
    NEXT = "NEXT"
    SESSION = "SESSION"
    FILE = "FILE"
    FILES = "FILES"
    HEADERS = "HEADERS"
    QUERY = "QUERY"
    BODY = "BODY"
    PARAM = "PARAM"


# Kinds whose annotations accept a transform pipeline
PIPELINE_KINDS = frozenset({SourceKind.QUERY, SourceKind.BODY, SourceKind.PARAM})
