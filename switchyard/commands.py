"""
Switchyard command layer: named units of execution and their local scope.

What this module provides
- Command: wraps a Python callable (the action) into a named, registrable unit with:
  • Switches: name → bool, registered up front with a default (False unless specified).
  • Parameters: an ordered list of Parameter slots; the order defines positional matching.
  • Tolerance policy: strict_switches / strict_parameters decide whether an unknown
    name raises (UnknownSwitchError / UnknownParameterError) or is silently ignored.
  • Optional descr and aliases used by the dispatcher's help command and selection.

- command(...): create a Command or a decorator that produces one.

Contract
- Every action receives the Dispatcher that executes it and reads resolved values
  through it (global scope first, then the command's own scope).
- Names are validated at configuration time and checked BEFORE any mutation, so a
  rejected call never leaves a half-applied value behind.

Quick start
    from switchyard import Dispatcher, command, invoke

    @command(descr="ship the current build")
    def deploy(dispatcher):
        print("deploying to", dispatcher.get_parameter_as_string("env"))

    deploy.configure_parameter("env", mandatory=True)
    deploy.configure_switch("dry")

    dispatcher = Dispatcher()
    dispatcher.configure_command(deploy)
    invoke(dispatcher, "deploy -env prod /dry")
"""
import copy
import inspect
import logging

from rich.text import Text

from .faults import *
from .parameters import Parameter, invalid_integer
from .utils import *

logger = logging.getLogger(__name__)


class Command:
    """
    Named unit of execution owned by exactly one Dispatcher.

    Parameters
    - action: Callable[[Dispatcher], Any] (positional-only), invoked by Dispatcher.execute().
    - name: str | Unset; defaults to the action's __name__.
    - descr: str | Text | Unset; defaults to the action's docstring (or None).
    - aliases: Iterable[str]; alternative tokens that select this command.
    - strict_switches / strict_parameters: bool (keyword-only, default True).

    Lifecycle
    - created by the caller, configured (switches/parameters added), then registered
      once through Dispatcher.configure_command(). The name never changes afterwards.
    """

    name = mirror("name")
    descr = mirror("descr")
    aliases = mirror("aliases")
    action = mirror("action")
    switches = mirror("switches")
    parameters = mirror("parameters")

    def __init__(
            self,
            action,
            /,
            name=Unset,
            descr=Unset,
            aliases=(),
            *,
            strict_switches=True,
            strict_parameters=True
    ):
        if not callable(action):
            raise TypeError("command action must be callable")
        name = validate_name("command", coalesce(name, getattr(action, "__name__", Unset)))
        if not isinstance(descr, str | Text | Unset):
            raise TypeError(f"command {name!r} 'descr' must be a string")
        if isinstance(aliases, str):
            raise TypeError(f"command {name!r} 'aliases' must be an iterable of strings")

        aliases = tuple(validate_name("command alias", alias) for alias in aliases)
        if name in aliases or len(set(aliases)) != len(aliases):
            raise ValueError(f"command {name!r} 'aliases' cannot repeat a name")

        self._action = action
        self._name = name
        self._descr = coalesce(descr, inspect.getdoc(action)) or None
        self._aliases = aliases
        self._switches = {}
        self._defaults = {}
        self._parameters = []
        self._lookup = {}
        self.strict_switches = strict_switches
        self.strict_parameters = strict_parameters

    @property
    def strict_switches(self):
        return self._strict_switches

    @strict_switches.setter
    def strict_switches(self, value):
        if not isinstance(value, bool):
            raise TypeError(f"command {self._name!r} 'strict_switches' must be a boolean")
        self._strict_switches = value

    @property
    def strict_parameters(self):
        return self._strict_parameters

    @strict_parameters.setter
    def strict_parameters(self, value):
        if not isinstance(value, bool):
            raise TypeError(f"command {self._name!r} 'strict_parameters' must be a boolean")
        self._strict_parameters = value

    @property
    def mandatory_parameters(self):
        """
        Tuple of the mandatory Parameter slots, in declaration order.
        """
        return tuple(parameter for parameter in self._parameters if parameter.mandatory)

    def has_switch(self, name, /):
        return name in self._switches

    def has_parameter(self, name, /):
        return name in self._lookup

    def configure_parameter(self, name, /, mandatory=False, default="", *, descr=Unset):
        """
        Append a parameter slot; its position in the list is its positional index.

        Raises DuplicateDefinitionError when the name is already configured here.
        """
        if name in self._lookup:
            trigger(DuplicateDefinitionError(
                "parameter %r is already configured for command %r" % (name, self._name),
                title="duplicate definition",
                code=FaultCode.DUPLICATE_DEFINITION,
                tool=self,
                name=name,
                hint="give every parameter of a command a distinct name",
                docs=getdoc(FaultCode.DUPLICATE_DEFINITION),
            ))
        parameter = Parameter(name, mandatory, default, descr=descr)
        self._parameters.append(parameter)
        self._lookup[name] = parameter
        logger.debug("command %r: parameter %r configured (mandatory=%s)", self._name, name, mandatory)
        return parameter

    def configure_switch(self, name, /, default=False):
        """
        Register a switch with its initial value.

        Raises DuplicateDefinitionError when the name is already configured here.
        """
        if name in self._switches:
            trigger(DuplicateDefinitionError(
                "switch %r is already configured for command %r" % (name, self._name),
                title="duplicate definition",
                code=FaultCode.DUPLICATE_DEFINITION,
                tool=self,
                name=name,
                hint="give every switch of a command a distinct name",
                docs=getdoc(FaultCode.DUPLICATE_DEFINITION),
            ))
        if not isinstance(default, bool):
            raise TypeError(f"switch {name!r} default must be a boolean")
        validate_name("switch", name)
        self._switches[name] = self._defaults[name] = default
        logger.debug("command %r: switch %r configured (default=%s)", self._name, name, default)

    def _unknown_switch(self, name):
        trigger(UnknownSwitchError(
            "switch %r is not known to command %r" % (name, self._name),
            title="unknown switch",
            code=FaultCode.UNKNOWN_SWITCH,
            tool=self,
            name=name,
            hint="configure the switch on the command first",
            docs=getdoc(FaultCode.UNKNOWN_SWITCH),
        ))

    def _unknown_parameter(self, name):
        trigger(UnknownParameterError(
            "parameter %r is not known to command %r" % (name, self._name),
            title="unknown parameter",
            code=FaultCode.UNKNOWN_PARAMETER,
            tool=self,
            name=name,
            hint="configure the parameter on the command first",
            docs=getdoc(FaultCode.UNKNOWN_PARAMETER),
        ))

    def get_switch(self, name, /):
        """
        Current value of a switch; False for an unknown name under the lenient policy.
        """
        try:
            return self._switches[name]
        except KeyError:
            if self._strict_switches:
                self._unknown_switch(name)
            return False

    def set_switch(self, name, value, /):
        if not isinstance(value, bool):
            raise TypeError(f"switch {name!r} value must be a boolean")
        if name not in self._switches:
            if self._strict_switches:
                self._unknown_switch(name)
            logger.debug("command %r: unknown switch %r ignored", self._name, name)
            return
        self._switches[name] = value

    def get_parameter_as_string(self, name, /):
        """
        Current raw value of a parameter; "" for an unknown name under the lenient policy.
        """
        try:
            return self._lookup[name].value
        except KeyError:
            if self._strict_parameters:
                self._unknown_parameter(name)
            return ""

    def get_parameter_as_int(self, name, /):
        """
        Current value of a parameter parsed as an integer.

        Raises InvalidParameterTypeError when the value is not an integer. Under the
        lenient policy an unknown name reads as "" and fails the same way.
        """
        try:
            parameter = self._lookup[name]
        except KeyError:
            if self._strict_parameters:
                self._unknown_parameter(name)
            invalid_integer(name, "")
        return parameter.as_int()

    def set_parameter(self, name, value, /):
        if name not in self._lookup:
            if self._strict_parameters:
                self._unknown_parameter(name)
            logger.debug("command %r: unknown parameter %r ignored", self._name, name)
            return
        self._lookup[name].value = value

    def reset(self):
        """
        Restore every switch and parameter to its configured default.
        """
        self._switches.update(self._defaults)
        for parameter in self._parameters:
            parameter.reset()

    def fresh(self):
        """
        Return a per-invocation copy of this command.

        The copy shares the action, names and tolerance flags, and owns new switch and
        parameter values seeded from the defaults. The dispatcher resolves tokens into
        such a copy, so a registered command is configuration only and can be shared
        between dispatchers.
        """
        command = copy.copy(self)
        command._switches = dict(self._defaults)
        command._parameters = [parameter.fresh() for parameter in self._parameters]
        command._lookup = {parameter.name: parameter for parameter in command._parameters}
        return command

    def __repr__(self):
        return "command(name=%r, switches=%r, parameters=%r)" % (
            self._name, list(self._switches), [parameter.name for parameter in self._parameters]
        )

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "aliases", self._aliases
        yield "switches", dict(self._switches)
        yield "parameters", list(self._parameters)


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct callback:
        cmd = command(func, name="x", ...)
    - Decorator:
        @command(name="x", ...)
        def func(dispatcher): ...
    - Bare decorator:
        @command
        def func(dispatcher): ...

    Parameters
    - source: Unset | Callable
    - *args, **kwargs: forwarded to Command (name, descr, aliases, strict_* flags).
    """
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, *args, **kwargs)

    wrapper.__name__ = wrapper.__qualname__ = "command"
    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "command",
)
