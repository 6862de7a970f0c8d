"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/columns.py
Column descriptor: knows how to read a value and a group key from a model,
how to turn a group key into a title, and how to decorate a finished group.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from virtualgroups.core.aspects import AttributePath
from virtualgroups.core.models import GROUP_TITLE_DEFAULT, is_missing

OTHER_GROUP_TITLE = "[other]"


@dataclass(eq=False)
class Column:
    """
    Describes one aspect of the models.
    Columns compare by identity: two distinct Column objects are never
    "the same column", even if they read the same field.
    """
    name: str = ""
    aspect_name: Optional[str] = None
    aspect_getter: Optional[Callable[[Any], Any]] = None
    aspect_to_string_format: Optional[str] = None
    aspect_to_string_converter: Optional[Callable[[Any], str]] = None
    group_key_getter: Optional[Callable[[Any], Any]] = None
    group_key_to_title_converter: Optional[Callable[[Any], str]] = None
    group_formatter: Optional[Callable[[Any, Any], None]] = None
    use_initial_letter_for_group: bool = False
    ignore_missing_aspects: bool = False
    _aspect_path: AttributePath = field(init=False, repr=False)

    def __post_init__(self):
        if self.aspect_name is None and self.aspect_getter is None:
            self.aspect_name = self.name
        self._aspect_path = AttributePath(self.aspect_name or "", self.ignore_missing_aspects)

    # --- Values ---

    def get_value(self, model: Any) -> Any:
        """Extract this column's value from the model."""
        if self.aspect_getter is not None:
            return self.aspect_getter(model)
        return self._aspect_path.get_value(model)

    def value_to_string(self, value: Any) -> str:
        """Render a value for display. Missing values become empty strings."""
        if self.aspect_to_string_converter is not None:
            return self.aspect_to_string_converter(value) or ""
        if is_missing(value):
            return ""
        if self.aspect_to_string_format:
            return self.aspect_to_string_format.format(value)
        return str(value)

    def get_string_value(self, model: Any) -> str:
        return self.value_to_string(self.get_value(model))

    # --- Grouping ---

    def get_group_key(self, model: Any) -> Any:
        """Key of the group this model belongs to. None is a valid key."""
        if self.group_key_getter is not None:
            return self.group_key_getter(model)

        key = self.get_value(model)
        if self.use_initial_letter_for_group and isinstance(key, str) and key:
            return key[0].upper()
        return key

    def convert_group_key_to_title(self, key: Any) -> str:
        if self.group_key_to_title_converter is not None:
            return self.group_key_to_title_converter(key)
        if is_missing(key):
            return GROUP_TITLE_DEFAULT
        return self.value_to_string(key)

    def make_groupies(
            self,
            values: Sequence[Any],
            descriptions: Sequence[str],
            subtitles: Optional[Sequence[str]] = None,
            tasks: Optional[Sequence[str]] = None
    ) -> None:
        """
        Group the column's values into progressive ranges.
        A value below values[n] is grouped under descriptions[n]; a value not
        below any boundary goes under the last description.

        Example:
            salary.make_groupies([20000, 100000],
                                 ["Lowly worker", "Middle management", "Rarified elevation"])
        """
        if values is None or descriptions is None:
            raise ValueError("values and descriptions are required")
        if len(values) + 1 != len(descriptions):
            raise ValueError("descriptions must have one more element than values.")

        def key_getter(model: Any) -> int:
            aspect = self.get_value(model)
            if is_missing(aspect):
                return -1
            for i, boundary in enumerate(values):
                if aspect < boundary:
                    return i
            return len(descriptions) - 1

        self.group_key_getter = key_getter
        self.group_key_to_title_converter = lambda key: "" if key < 0 else descriptions[key]
        self.group_formatter = _metadata_formatter(subtitles, tasks)

    def make_equal_groupies(
            self,
            values: Sequence[Any],
            descriptions: Sequence[str],
            subtitles: Optional[Sequence[str]] = None,
            tasks: Optional[Sequence[str]] = None
    ) -> None:
        """
        Group rows whose value equals values[n] under descriptions[n].
        Values matching nothing are grouped under "[other]".
        """
        if values is None or descriptions is None:
            raise ValueError("values and descriptions are required")
        if len(values) != len(descriptions):
            raise ValueError("descriptions must have the same number of elements as values.")

        known = list(values)

        def key_getter(model: Any) -> int:
            aspect = self.get_value(model)
            return known.index(aspect) if aspect in known else -1

        self.group_key_getter = key_getter
        self.group_key_to_title_converter = lambda key: OTHER_GROUP_TITLE if key < 0 else descriptions[key]
        self.group_formatter = _metadata_formatter(subtitles, tasks)

    def __repr__(self):
        return f"<Column name={self.name!r}>"


def _metadata_formatter(subtitles: Optional[Sequence[str]], tasks: Optional[Sequence[str]]):
    """Formatter that copies per-key subtitle and task onto a finished group."""
    def formatter(group, params) -> None:
        key = group.key
        if key is None or key < 0:
            return
        if subtitles is not None and key < len(subtitles):
            group.subtitle = subtitles[key]
        if tasks is not None and key < len(tasks):
            group.task = tasks[key]
    return formatter
