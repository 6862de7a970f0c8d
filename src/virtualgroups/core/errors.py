"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception types raised by the grouping engine.
"""


class GroupingError(Exception):
    """Base class for all grouping engine errors."""


class InvalidGroupQueryError(GroupingError, IndexError):
    """
    A reverse-index query was made with a group position or item index that is
    outside the currently published result.
    """


class AspectError(GroupingError, AttributeError):
    """A dotted aspect path could not be resolved against a model."""

    def __init__(self, aspect_name: str, part: str, target: object):
        self.aspect_name = aspect_name
        self.part = part
        self.target = target
        super().__init__(
            f"'{part}' (from '{aspect_name}') is not a parameter-less method, "
            f"property, field or key of type '{type(target).__name__}'"
        )
