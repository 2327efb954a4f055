r"""
Switchyard parameter slots.

Overview
- Parameter: a named, optionally mandatory key/value slot owned either by a Command
  or by the Dispatcher's global scope.
  • name: immutable after construction; uniqueness is enforced by the owning scope.
  • mandatory: whether resolution must leave the slot with a value.
  • default: the configured value the slot starts from (and is reset to).
  • value: the current raw string value (mutable during resolution).
  • descr: optional help text rendered by the built-in help command.

Values
- The external contract is string-typed: tokens arrive as strings and are stored
  as-is. An integer view is parsed lazily and cached per raw value; every write
  drops the cache. A value that fails to parse raises InvalidParameterTypeError
  on every read instead of being remembered as a fallback.

Quick example:
    >>> port = Parameter("port", default="8080")
    >>> port.as_int()
    8080
    >>> port.value = "http"
    >>> port.as_int()
    Traceback (most recent call last):
    ...
    switchyard.faults.InvalidParameterTypeError: value 'http' of parameter 'port' is not a valid integer
"""
import copy
import re

from rich.text import Text

from .faults import FaultCode, InvalidParameterTypeError, getdoc, trigger
from .utils import Unset, coalesce, validate_name

# ASCII decimal digits with an optional sign; no digit separators
_INTEGER = re.compile(r"[+-]?[0-9]+")


def invalid_integer(name, value, /):
    """
    Trigger InvalidParameterTypeError for a value that does not read as an integer.
    """
    trigger(InvalidParameterTypeError(
        "value %r of parameter %r is not a valid integer" % (value, name),
        title="invalid parameter type",
        code=FaultCode.INVALID_PARAMETER_TYPE,
        name=name,
        value=value,
        hint="pass a whole number (for example: 42)",
        docs=getdoc(FaultCode.INVALID_PARAMETER_TYPE),
    ))


class Parameter:
    """
    Named key/value slot.

    Parameters
    - name: str, non-empty and whitespace-free.
    - mandatory: bool (default False).
    - default: str (default ""). An empty default means “no value yet”.
    - descr: str | Text | Unset, optional help text.
    """

    __slots__ = ("_name", "_mandatory", "_default", "_value", "_integer", "_descr")

    def __init__(self, name, /, mandatory=False, default="", *, descr=Unset):
        if not isinstance(mandatory, bool):
            raise TypeError(f"parameter {name!r} 'mandatory' must be a boolean")
        if not isinstance(default, str):
            raise TypeError(f"parameter {name!r} 'default' must be a string")
        if not isinstance(descr, str | Text | Unset):
            raise TypeError(f"parameter {name!r} 'descr' must be a string")
        self._name = validate_name("parameter", name)
        self._mandatory = mandatory
        self._default = default
        self._value = default
        self._integer = Unset
        self._descr = coalesce(descr) or None

    @property
    def name(self):
        return self._name

    @property
    def mandatory(self):
        return self._mandatory

    @property
    def default(self):
        return self._default

    @property
    def descr(self):
        return self._descr

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        if not isinstance(value, str):
            raise TypeError(f"parameter {self._name!r} value must be a string")
        self._value = value
        self._integer = Unset

    @property
    def assigned(self):
        """
        True when the slot currently holds a non-empty value.
        """
        return bool(self._value)

    def as_int(self):
        """
        Return the current value parsed as an integer.

        The parse is cached until the next write. Raises InvalidParameterTypeError
        when the raw value is not a plain decimal integer: surrounding whitespace and
        a sign are accepted, digit separators ("1_000") and non-ASCII digits are not.
        """
        if self._integer is Unset:
            if not _INTEGER.fullmatch(self._value.strip()):
                invalid_integer(self._name, self._value)
            self._integer = int(self._value)
        return self._integer

    def reset(self):
        """
        Restore the configured default.
        """
        self.value = self._default

    def fresh(self):
        """
        Return a copy sharing this configuration and holding the default value.

        Every resolution works on fresh copies, so the registered slot keeps its default.
        """
        parameter = copy.copy(self)
        parameter.reset()
        return parameter

    def __repr__(self):
        return "parameter(name=%r, mandatory=%r, default=%r, value=%r)" % (
            self._name, self._mandatory, self._default, self._value
        )

    def __rich_repr__(self):
        yield "name", self._name
        yield "mandatory", self._mandatory
        yield "default", self._default
        yield "value", self._value


__all__ = (
    "Parameter",
)
