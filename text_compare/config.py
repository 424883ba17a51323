"""
Row Generator Configuration
===========================
Immutable rendering options for side-by-side diff rows.

Build with keyword arguments, with the fluent builder
(``DiffRowConfig.builder().show_inline_diffs(True).build()``), or from
TC_* environment variables via ``DiffRowConfig.from_env()``.
"""

import os
import re
from dataclasses import dataclass, replace
from typing import Callable, Optional

from config_logging import ENV_PREFIX, ValidationError, env_flag, env_text, get_logger

logger = get_logger('text_compare.config')

DEFAULT_COLUMN_WIDTH = 80
DEFAULT_TAB_SIZE = 4
DEFAULT_INLINE_TAG = "span"
DEFAULT_OLD_CSS_CLASS = "editOldInline"
DEFAULT_NEW_CSS_CLASS = "editNewInline"

_WHITESPACE_RUN = re.compile(r'\s+')


def collapse_whitespace(line: str) -> str:
    """Trim a line and collapse internal whitespace runs to one space."""
    return _WHITESPACE_RUN.sub(' ', line.strip())


@dataclass(frozen=True)
class DiffRowConfig:
    """
    Options for generating side-by-side rows.

    Attributes:
        show_inline_diffs: Highlight changed characters inside CHANGE rows
        ignore_white_space: Compare lines with whitespace runs collapsed
        inline_old_tag: Tag name for highlights in the original text
        inline_new_tag: Tag name for highlights in the revised text
        inline_old_css_class: Class on original highlights (None omits it)
        inline_new_css_class: Class on revised highlights (None omits it)
        column_width: Wrap width; non-positive values keep the default
        tab_size: Spaces per tab when normalizing lines
    """
    show_inline_diffs: bool = False
    ignore_white_space: bool = False
    inline_old_tag: str = DEFAULT_INLINE_TAG
    inline_new_tag: str = DEFAULT_INLINE_TAG
    inline_old_css_class: Optional[str] = DEFAULT_OLD_CSS_CLASS
    inline_new_css_class: Optional[str] = DEFAULT_NEW_CSS_CLASS
    column_width: int = DEFAULT_COLUMN_WIDTH
    tab_size: int = DEFAULT_TAB_SIZE

    def __post_init__(self):
        if self.column_width <= 0:
            logger.debug(f"Ignoring non-positive column width {self.column_width}")
            object.__setattr__(self, 'column_width', DEFAULT_COLUMN_WIDTH)
        if self.tab_size < 0:
            object.__setattr__(self, 'tab_size', DEFAULT_TAB_SIZE)
        for name in ('inline_old_tag', 'inline_new_tag'):
            if not getattr(self, name):
                raise ValidationError(f"{name} must be a non-empty tag name", field=name)

    @classmethod
    def builder(cls) -> 'DiffRowConfigBuilder':
        """Start a fluent builder with default values."""
        return DiffRowConfigBuilder()

    @classmethod
    def from_env(cls) -> 'DiffRowConfig':
        """
        Load configuration from TC_* environment variables.

        Unset or blank variables keep the defaults. TC_INLINE_OLD_CSS_CLASS
        and TC_INLINE_NEW_CSS_CLASS accept "none" to omit the class attribute.
        """
        return cls(
            show_inline_diffs=env_flag('SHOW_INLINE_DIFFS'),
            ignore_white_space=env_flag('IGNORE_WHITE_SPACE'),
            inline_old_tag=env_text('INLINE_OLD_TAG', DEFAULT_INLINE_TAG),
            inline_new_tag=env_text('INLINE_NEW_TAG', DEFAULT_INLINE_TAG),
            inline_old_css_class=_env_css_class('INLINE_OLD_CSS_CLASS', DEFAULT_OLD_CSS_CLASS),
            inline_new_css_class=_env_css_class('INLINE_NEW_CSS_CLASS', DEFAULT_NEW_CSS_CLASS),
            column_width=_env_int('COLUMN_WIDTH', DEFAULT_COLUMN_WIDTH),
            tab_size=_env_int('TAB_SIZE', DEFAULT_TAB_SIZE),
        )

    def equalizer(self) -> Optional[Callable[[str], str]]:
        """
        Key function used by the line differ to decide line equality.

        Returns:
            None for exact comparison, or a function mapping each line to
            its whitespace-insensitive comparison key
        """
        if self.ignore_white_space:
            return collapse_whitespace
        return None


def _env_css_class(name: str, default: str) -> Optional[str]:
    """Read a class setting; the value 'none' omits the class attribute."""
    value = env_text(name, default)
    if value.lower() == 'none':
        return None
    return value


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise ValidationError(
            f"{ENV_PREFIX}{name} must be an integer, got {value!r}",
            field=ENV_PREFIX + name
        ) from e


class DiffRowConfigBuilder:
    """
    Fluent builder for DiffRowConfig.

    Every setter returns the builder; ``build()`` produces the frozen
    configuration. Options that are never set keep their defaults.
    """

    def __init__(self):
        self._config = DiffRowConfig()

    def _set(self, **changes) -> 'DiffRowConfigBuilder':
        self._config = replace(self._config, **changes)
        return self

    def show_inline_diffs(self, value: bool) -> 'DiffRowConfigBuilder':
        return self._set(show_inline_diffs=value)

    def ignore_white_space(self, value: bool) -> 'DiffRowConfigBuilder':
        return self._set(ignore_white_space=value)

    def inline_old_tag(self, tag: str) -> 'DiffRowConfigBuilder':
        return self._set(inline_old_tag=tag)

    def inline_new_tag(self, tag: str) -> 'DiffRowConfigBuilder':
        return self._set(inline_new_tag=tag)

    def inline_old_css_class(self, css_class: Optional[str]) -> 'DiffRowConfigBuilder':
        return self._set(inline_old_css_class=css_class)

    def inline_new_css_class(self, css_class: Optional[str]) -> 'DiffRowConfigBuilder':
        return self._set(inline_new_css_class=css_class)

    def column_width(self, width: int) -> 'DiffRowConfigBuilder':
        """Set the wrap width. Non-positive widths keep the current value."""
        if width > 0:
            return self._set(column_width=width)
        logger.debug(f"Ignoring non-positive column width {width}")
        return self

    def tab_size(self, size: int) -> 'DiffRowConfigBuilder':
        return self._set(tab_size=size)

    def build(self) -> DiffRowConfig:
        return self._config
