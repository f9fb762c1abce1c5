"""Transforms used as pipeline entries in tests."""


class ParseIntPipe:
    """Transform class that converts the value to int."""

    def transform(self, value, metadata):
        return int(value)


class ValidationPipe:
    """Transform class that returns the value unchanged."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def transform(self, value, metadata):
        return value
