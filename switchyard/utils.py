"""
Switchyard utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the parameters, commands and dispatcher layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as a
    fresh copy, so registries cannot be mutated through the public API.

- ordinal(number)
  • Human-friendly ordinal label ("first", "second", ..., "11th") for token positions.

- pluralize(word, count)
  • Tiny pluralizer for fault messages ("parameter" / "parameters").

- validate_name(kind, name)
  • Shared guard for switch, parameter and command names.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce("", "fallback")
    ''
    >>> ordinal(3)
    'third'
"""
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("prod", "dev") -> "prod"
    - coalesce(Unset, "dev")  -> "dev"
    - coalesce("", "dev")     -> ""
    """
    return object if object is not Unset else default


def _immortalize(object):
    # Fresh shallow containers; nested values are copied the same way.
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are returned as fresh copies, so callers may iterate or even mutate
    the result without touching the registry behind it. Non-container values
    (Parameter or Command instances inside a registry) are shared, not copied.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def pluralize(word, count, /):
    """
    Pluralize a regular English noun when count is not exactly one.
    """
    return word if count == 1 else word + "s"


def validate_name(kind, name, /):
    """
    Guard a switch, parameter or command name at configuration time.

    Names are matched exactly against tokens, so surrounding whitespace would make
    them unreachable; it is rejected instead of silently trimmed.

    Raises
    - TypeError: when name is not a string.
    - ValueError: when name is empty or carries whitespace.
    """
    if not isinstance(name, str):
        raise TypeError(f"{kind} name must be a string")
    if not name:
        raise ValueError(f"{kind} name cannot be empty")
    if any(char.isspace() for char in name):
        raise ValueError(f"{kind} name {name!r} cannot contain whitespace")
    return name


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when "" or None is a meaningful user value but you still
need to distinguish “no input” from an explicit value; materialize with coalesce().
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "ordinal",
    "pluralize",
    "validate_name",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
