"""
Switchyard dispatcher: register commands, resolve argv-like tokens, execute actions.

What this module provides
- Dispatcher: owns the registered commands (insertion ordered), the global parameters,
  the set of commands exempt from global-mandatory enforcement, the switch/parameter
  markers and the default-command policy.
- Resolution: the explicit per-invocation result of Dispatcher.resolve().
- invoke(dispatcher, prompt): resolve + execute in one call.

Resolution phases (Dispatcher.resolve)
- selection
  • empty tokens, or a first token starting with the switch marker → default command
    (when use_default_command is enabled) or NoCommandSelectedError.
  • otherwise the first token is matched exactly against command names and aliases;
    a hit consumes it, a miss falls back to the default command (the token is kept
    and scanned as an argument) or raises NoCommandSelectedError.
- mandatory set
  • mandatory globals (unless the command is exempt, like the built-in help) plus the
    command's mandatory parameters, skipping slots whose default already has a value.
- switch scan
  • every token starting with the switch marker turns that switch on.
- parameter scan (left to right, switch tokens skipped)
  • "<param-marker><name> <value>" sets a named parameter; global scope wins over a
    same-named local parameter.
  • any other token binds positionally: the Nth one fills parameters[N].
- enforcement
  • MissingMandatoryParametersError lists every outstanding name.

Faults
- every fault is raised where it is detected and surfaced through Dispatcher.trigger(),
  which merges the runtime flags (shell/fancy/colorful): outside shell mode the fault
  propagates as an exception; in shell mode it is rendered with rich and the process
  exits. A handler registered with Dispatcher.fallback() replaces that behavior.
- values are written into fresh copies of the command and the global parameters
  owned by the Resolution; a failed scan discards them and clears the current resolution.

Threading
- registered commands are configuration only and can be shared between dispatchers. A Dispatcher tracks one current Resolution; use one instance
  per concurrent invocation.
"""
import copy
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable
from collections import defaultdict
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .commands import Command
from .faults import *
from .parameters import Parameter
from .utils import *

logger = logging.getLogger(__name__)

HELP = "help"


class Resolution:
    """
    Outcome of one successful Dispatcher.resolve() call, and the values it produced.

    Fields (read-only)
    - command: the selected (registered) Command.
    - tokens: the full token tuple that was resolved.
    - defaulted: True when the command came from the default-command fallback.
    - switches: names of the switches turned on, in token order.
    - assigned: mapping of parameter name → value for every token-supplied value.
    - scope: the per-invocation copy of the command that holds its switch and
      parameter values (see Command.fresh()).

    Values
    - the resolution owns fresh copies of the command and of the global parameters,
      so it stays valid after later resolutions and can be executed at any time.
    - accessors read the global scope first, then the command scope.
    """

    __slots__ = ("_command", "_tokens", "_defaulted", "_switches", "_assigned", "_scope", "_globals")

    def __init__(self, command, tokens, defaulted, switches, assigned, scope=Unset, shared=Unset):
        self._command = command
        self._tokens = tuple(tokens)
        self._defaulted = defaulted
        self._switches = tuple(switches)
        self._assigned = MappingProxyType(dict(assigned))
        self._scope = command.fresh() if scope is Unset else scope
        self._globals = dict(coalesce(shared, {}))

    @property
    def command(self):
        return self._command

    @property
    def tokens(self):
        return self._tokens

    @property
    def defaulted(self):
        return self._defaulted

    @property
    def switches(self):
        return self._switches

    @property
    def assigned(self):
        return self._assigned

    @property
    def scope(self):
        return self._scope

    def get_parameter_as_string(self, name, /):
        if name in self._globals:
            return self._globals[name].value
        return self._scope.get_parameter_as_string(name)

    def get_parameter_as_int(self, name, /):
        if name in self._globals:
            return self._globals[name].as_int()
        return self._scope.get_parameter_as_int(name)

    def set_parameter(self, name, value, /):
        if name in self._globals:
            self._globals[name].value = value
            return
        self._scope.set_parameter(name, value)

    def get_switch(self, name, /):
        return self._scope.get_switch(name)

    def set_switch(self, name, value, /):
        self._scope.set_switch(name, value)

    def __repr__(self):
        return "resolution(command=%r, switches=%r, assigned=%r)" % (
            self._command.name, self._switches, dict(self._assigned)
        )


def _check_markers(switch_marker, param_marker):
    for kind, marker in (("switch", switch_marker), ("parameter", param_marker)):
        if not isinstance(marker, str):
            raise TypeError(f"{kind} marker must be a string")
        if not marker or any(char.isspace() for char in marker):
            raise ValueError(f"{kind} marker must be a non-empty string without whitespace")
    # a marker that prefixes the other one would swallow its tokens
    if switch_marker.startswith(param_marker) or param_marker.startswith(switch_marker):
        raise ValueError(
            "switch marker %r and parameter marker %r cannot prefix each other" % (switch_marker, param_marker)
        )


class Dispatcher:
    """
    Command registry and argument resolver.

    Parameters
    - name: str | Unset (positional-only); program name used in fault headers and help.
      Defaults to the basename of sys.argv[0].
    - switch_marker: str (default "/"); parameter marker: str (default "-").
    - use_default_command: bool (default False).
    - default_command: str | Unset; explicit default command name (first registered when Unset).
    - help: bool (default True); register the built-in help command.
    - shell, fancy, colorful: bool | Unset; runtime flags for fault rendering.

    The built-in help command is registered first, so it is the implicit default
    command unless another default is designated or help is disabled.
    """

    name = mirror("name")
    commands = mirror("commands")
    globals = mirror("globals")

    def __init__(
            self,
            name=Unset,
            /,
            *,
            switch_marker="/",
            param_marker="-",
            use_default_command=False,
            default_command=Unset,
            help=True,
            shell=Unset,
            fancy=Unset,
            colorful=Unset
    ):
        _check_markers(switch_marker, param_marker)
        self._name = validate_name("program", coalesce(name, os.path.basename(sys.argv[0]) or "switchyard"))
        self._commands = {}
        self._aliases = {}
        self._globals = {}
        self._exceptions = {HELP}
        self._switch_marker = switch_marker
        self._param_marker = param_marker
        self._default_command = Unset
        self._current = Unset
        self._fallback = Unset
        self.use_default_command = use_default_command
        self.shell = bool(coalesce(shell, False))
        self.fancy = bool(coalesce(fancy, False))
        self.colorful = bool(coalesce(colorful, False))

        if default_command is not Unset:
            self.set_default_command(default_command)

        if help:
            helper = Command(self._helper, HELP, "list the available commands or describe one of them")
            helper.configure_parameter("cmd", descr="command to describe")
            self.configure_command(helper)

    # ── configuration ──────────────────────────────────────────────────────────

    @property
    def switch_marker(self):
        return self._switch_marker

    @switch_marker.setter
    def switch_marker(self, marker):
        _check_markers(marker, self._param_marker)
        self._switch_marker = marker

    @property
    def param_marker(self):
        return self._param_marker

    @param_marker.setter
    def param_marker(self, marker):
        _check_markers(self._switch_marker, marker)
        self._param_marker = marker

    @property
    def use_default_command(self):
        return self._use_default_command

    @use_default_command.setter
    def use_default_command(self, value):
        if not isinstance(value, bool):
            raise TypeError("dispatcher 'use_default_command' must be a boolean")
        self._use_default_command = value

    @property
    def default_command(self):
        """
        The Command used by the default fallback, or None when none is available.
        """
        if self._default_command is not Unset:
            return self._commands.get(self._default_command)
        return next(iter(self._commands.values()), None)

    def set_default_command(self, name, /):
        """
        Designate the default command by name (Unset restores “first registered”).

        The name may be registered later; resolution fails with NoCommandSelectedError
        while it is missing.
        """
        if name is not Unset:
            validate_name("command", name)
        self._default_command = name

    @property
    def exceptions(self):
        """
        Names of the commands exempt from global-mandatory enforcement.
        """
        return frozenset(self._exceptions)

    def add_mandatory_exception(self, name, /):
        self._exceptions.add(validate_name("command", name))

    @property
    def current(self):
        """
        The Resolution of the most recent successful resolve(), or None.
        """
        return coalesce(self._current)

    def fallback(self, fallback, /):
        """
        Register a one-time handler for resolution and execution faults.

        Contract
        - fallback: callable receiving the fault (already merged with the runtime flags).
        - while registered, faults are handed to it instead of being raised/rendered, and
          the failing resolve()/execute() call returns None.
        - can be set only once per dispatcher.

        Returns the same callable, enabling decorator-style usage: @dispatcher.fallback
        """
        if not callable(fallback):
            raise TypeError("dispatcher fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError("dispatcher fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this dispatcher's runtime flags merged in.
        """
        fault = copy.replace(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)
        if self._fallback:
            return self._fallback(fault)
        trigger(fault)

    # ── registration ───────────────────────────────────────────────────────────

    def find_command(self, name, /):
        """
        Registered Command selected by a name or alias, or None.
        """
        try:
            return self._commands[self._aliases.get(name, name)]
        except (KeyError, TypeError):
            return None

    def configure_command(self, command, /):
        """
        Register a Command; insertion order is kept (first registered = implicit default).

        Raises CommandAlreadyConfiguredError when its name or one of its aliases is
        already taken by a registered command.
        """
        if not isinstance(command, Command):
            raise TypeError("configure_command() argument must be a command")
        for name in (command.name, *command.aliases):
            if name in self._commands or name in self._aliases:
                trigger(CommandAlreadyConfiguredError(
                    "command %r is already configured" % name,
                    title="command already configured",
                    code=FaultCode.COMMAND_ALREADY_CONFIGURED,
                    tool=self,
                    name=name,
                    hint="register every command (and alias) once with a distinct name",
                    docs=getdoc(FaultCode.COMMAND_ALREADY_CONFIGURED),
                ))
        self._commands[command.name] = command
        self._aliases.update(dict.fromkeys(command.aliases, command.name))
        logger.debug("command %r registered (aliases=%s)", command.name, command.aliases)

    def configure_global_parameter(self, name, /, mandatory=False, default="", *, descr=Unset):
        """
        Register a parameter shared by every command.

        Raises DuplicateDefinitionError when a global parameter of that name exists.
        """
        if name in self._globals:
            trigger(DuplicateDefinitionError(
                "global parameter %r is already configured" % name,
                title="duplicate definition",
                code=FaultCode.DUPLICATE_DEFINITION,
                tool=self,
                name=name,
                hint="give every global parameter a distinct name",
                docs=getdoc(FaultCode.DUPLICATE_DEFINITION),
            ))
        parameter = self._globals[name] = Parameter(name, mandatory, default, descr=descr)
        logger.debug("global parameter %r registered (mandatory=%s)", name, mandatory)
        return parameter

    def disable_help_command(self):
        """
        Remove the built-in help command; no-op when it is already gone.
        """
        helper = self._commands.get(HELP)
        if helper is None or getattr(helper.action, "__self__", None) is not self:
            return
        del self._commands[HELP]
        for alias in helper.aliases:
            self._aliases.pop(alias, None)
        logger.debug("built-in help command disabled")

    # ── resolution ─────────────────────────────────────────────────────────────

    def resolve(self, tokens, /):
        """
        Resolve a token sequence (argv without the program name) into a Resolution.

        On success the Resolution becomes the current one and is returned. On failure
        the current resolution is cleared and the fault is triggered (see module docs).
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("resolve() argument must be an iterable of strings")
        tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("resolve() argument must be an iterable of strings")

        self._current = Unset
        try:
            self._current = self._resolve(tokens)
        except DispatchException as fault:
            self.trigger(fault)
            return None
        return self._current

    def _select(self, tokens):
        # returns (command, defaulted)
        if tokens and not tokens[0].startswith(self._switch_marker):
            if command := self.find_command(tokens[0]):
                logger.debug("command %r selected by token %r", command.name, tokens[0])
                return command, False
            reason = "unknown command %r at first position" % tokens[0]
            hint = "run '%s %s' to see the available commands" % (self._name, HELP)
        else:
            reason = "no command given"
            hint = "start with a command name, for example: %s %s" % (self._name, HELP)

        if self._use_default_command:
            if command := self.default_command:
                logger.debug("default command %r selected (%s)", command.name, reason)
                return command, True
            reason += " and the default command is not available"
            hint = "register the default command or designate another one"

        raise NoCommandSelectedError(
            reason,
            title="no command selected",
            code=FaultCode.NO_COMMAND_SELECTED,
            name=tokens[0] if tokens else None,
            hint=hint,
            docs=getdoc(FaultCode.NO_COMMAND_SELECTED),
        )

    def _resolve(self, tokens):
        command, defaulted = self._select(tokens)
        start = 0 if defaulted else 1

        # values of this invocation only; the registered objects stay untouched
        scope = command.fresh()
        shared = {name: parameter.fresh() for name, parameter in self._globals.items()}

        # ordered set of the names that still need a value
        outstanding = {}
        if command.name not in self._exceptions:
            outstanding.update(dict.fromkeys(
                parameter.name for parameter in shared.values()
                if parameter.mandatory and not parameter.assigned
            ))
        outstanding.update(dict.fromkeys(
            parameter.name for parameter in scope.mandatory_parameters if not parameter.assigned
        ))

        switches = []
        for index in range(start, len(tokens)):
            if not tokens[index].startswith(self._switch_marker):
                continue
            name = tokens[index][len(self._switch_marker):]
            if scope.has_switch(name):
                scope.set_switch(name, True)
                switches.append(name)
            elif scope.strict_switches:
                raise UnknownSwitchError(
                    "unknown switch %r at %s position" % (name, ordinal(index + 1)),
                    title="unknown switch",
                    code=FaultCode.UNKNOWN_SWITCH,
                    name=name,
                    index=index,
                    hint="run '%s %s -cmd %s' to see its switches" % (self._name, HELP, command.name),
                    docs=getdoc(FaultCode.UNKNOWN_SWITCH),
                )
            else:
                logger.debug("unknown switch %r ignored by command %r", name, command.name)

        parameters = scope.parameters
        assigned = {}
        position = 0
        index = start
        while index < len(tokens):
            token = tokens[index]

            if token.startswith(self._switch_marker):
                index += 1
                continue

            if token.startswith(self._param_marker):
                name = token[len(self._param_marker):]
                if index + 1 == len(tokens) or tokens[index + 1].startswith((self._switch_marker, self._param_marker)):
                    raise MissingParameterValueError(
                        "missing value for parameter %r at %s position" % (name, ordinal(index + 1)),
                        title="missing parameter value",
                        code=FaultCode.MISSING_PARAMETER_VALUE,
                        name=name,
                        index=index,
                        hint="pass the value right after the name (for example: %s%s <value>)" % (
                            self._param_marker, name
                        ),
                        docs=getdoc(FaultCode.MISSING_PARAMETER_VALUE),
                    )
                value = tokens[index + 1]
                index += 2

                if name in shared:
                    if scope.has_parameter(name):
                        self.trigger(ShadowedParameterWarning(
                            "global parameter %r shadows the parameter of command %r" % (name, command.name),
                            title="shadowed parameter",
                            code=FaultCode.SHADOWED_PARAMETER,
                            name=name,
                            index=index - 2,
                            hint="rename the command parameter to make it reachable by name",
                            docs=getdoc(FaultCode.SHADOWED_PARAMETER),
                        ))
                    shared[name].value = value
                    logger.debug("global parameter %r set from %s position", name, ordinal(index - 1))
                elif scope.has_parameter(name):
                    scope.set_parameter(name, value)
                    logger.debug("parameter %r set from %s position", name, ordinal(index - 1))
                elif scope.strict_parameters:
                    raise UnknownParameterError(
                        "unknown parameter %r at %s position" % (name, ordinal(index - 1)),
                        title="unknown parameter",
                        code=FaultCode.UNKNOWN_PARAMETER,
                        name=name,
                        index=index - 2,
                        hint="run '%s %s -cmd %s' to see its parameters" % (self._name, HELP, command.name),
                        docs=getdoc(FaultCode.UNKNOWN_PARAMETER),
                    )
                else:
                    logger.debug("unknown parameter %r ignored by command %r", name, command.name)
                    continue

                assigned[name] = value
                outstanding.pop(name, None)
                continue

            if position < len(parameters):
                parameter = parameters[position]
                parameter.value = token
                assigned[parameter.name] = token
                outstanding.pop(parameter.name, None)
                logger.debug("parameter %r bound positionally from %s position", parameter.name, ordinal(index + 1))
            elif scope.strict_parameters:
                raise UnknownParameterError(
                    "unexpected positional value %r at %s position" % (token, ordinal(index + 1)),
                    title="unexpected positional",
                    code=FaultCode.UNKNOWN_PARAMETER,
                    name=token,
                    index=index,
                    hint="command %r takes at most %d positional %s" % (
                        command.name, len(parameters), pluralize("value", len(parameters))
                    ),
                    docs=getdoc(FaultCode.UNKNOWN_PARAMETER),
                )
            else:
                logger.debug("surplus positional value at %s position ignored", ordinal(index + 1))
            position += 1
            index += 1

        if outstanding:
            names = tuple(outstanding)
            raise MissingMandatoryParametersError(
                "following mandatory %s %s not set: %s" % (
                    pluralize("parameter", len(names)), "was" if len(names) == 1 else "were", ", ".join(names)
                ),
                title="missing mandatory parameters",
                code=FaultCode.MISSING_MANDATORY_PARAMETERS,
                names=names,
                hint="pass %s (for example: %s%s <value>)" % (
                    "it" if len(names) == 1 else "each of them", self._param_marker, names[0]
                ),
                docs=getdoc(FaultCode.MISSING_MANDATORY_PARAMETERS),
            )

        return Resolution(command, tokens, defaulted, switches, assigned, scope, shared)

    # ── execution ──────────────────────────────────────────────────────────────

    def execute(self, resolution=Unset, /):
        """
        Invoke the action of the resolved command with this dispatcher.

        Parameters
        - resolution: Resolution | Unset; defaults to the current resolution. An explicit
          resolution becomes the current one before the action runs.

        Returns the action's return value. Raises NoCommandSelectedError when there is
        nothing resolved; faults raised from inside the action are surfaced the same way.
        """
        if not isinstance(resolution, Resolution | Unset):
            raise TypeError("execute() argument must be a resolution")
        try:
            if not (resolution := coalesce(resolution, self._current)):
                raise NoCommandSelectedError(
                    "there is no resolved command to execute",
                    title="no command selected",
                    code=FaultCode.NO_COMMAND_SELECTED,
                    hint="call resolve() with the arguments before execute()",
                    docs=getdoc(FaultCode.NO_COMMAND_SELECTED),
                )
            self._current = resolution
            logger.debug("executing command %r", resolution.command.name)
            return resolution.command.action(self)
        except DispatchException as fault:
            self.trigger(fault)
            return None

    def __invoke__(self, prompt=Unset):
        """
        Resolve and execute a prompt.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        if self.resolve(tokens) is None:
            return None
        return self.execute()

    # ── accessors (values of the current resolution, global scope first) ──────

    def _active(self):
        if not self._current:
            raise NoCommandSelectedError(
                "there is no resolved command to read values from",
                title="no command selected",
                code=FaultCode.NO_COMMAND_SELECTED,
                hint="call resolve() with the arguments first",
                docs=getdoc(FaultCode.NO_COMMAND_SELECTED),
            )
        return self._current

    def get_parameter_as_string(self, name, /):
        # before any resolution a global reads as its configured default
        if not self._current and name in self._globals:
            return self._globals[name].value
        return self._active().get_parameter_as_string(name)

    def get_parameter_as_int(self, name, /):
        if not self._current and name in self._globals:
            return self._globals[name].as_int()
        return self._active().get_parameter_as_int(name)

    def set_parameter(self, name, value, /):
        self._active().set_parameter(name, value)

    def get_switch(self, name, /):
        return self._active().get_switch(name)

    def set_switch(self, name, value, /):
        self._active().set_switch(name, value)

    # ── built-in help ──────────────────────────────────────────────────────────

    def _helper(self, dispatcher):
        """
        Render the command listing, or the parameters and switches of one command.

        Palette keys
        - program-name, section-label, command-name, alias, description, parameter-name,
          switch-name, mandatory, default, unknown, panel-title
        Define a mapping named __styles__ in __main__ to override any palette entry.
        """
        console = Console()
        styles = defaultdict(str, {
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "section-label": "bold #FFFFFF",  # Pure white headers
            "command-name": "bold #36C5F0",  # SKY-BLUE commands
            "alias": "#36C5F0 dim",
            "description": "#9CA3AF",  # Muted gray
            "parameter-name": "bold #00E6FF",  # CYAN for parameters
            "switch-name": "bold #22C55E",  # GREEN for switches
            "mandatory": "bold #FFD600",  # AMBER marker
            "default": "italic #A3A3A3",
            "unknown": "bold #EF4444",
            "panel-title": "bold #FF4D94",
        } | getattr(__import__('__main__'), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        renders = []
        target = dispatcher.get_parameter_as_string("cmd")

        if not target:
            title = "available commands"
            table = Table(box=None, show_header=False, pad_edge=False)
            table.add_column("name", no_wrap=True)
            table.add_column("description")
            for command in self._commands.values():
                name = text(command.name, styler("command-name"))
                if command.aliases:
                    name = Text.assemble(name, " (", text(", ".join(command.aliases), styler("alias")), ")")
                table.add_row(name, text(command.descr, styler("description")))
            renders.append(table)
        elif (command := self.find_command(target)) is None:
            title = "unknown command"
            renders.append(Text.assemble(
                "command ", text(repr(target), styler("unknown")), " not recognized"
            ))
        else:
            title = "command %s" % command.name
            if command.descr:
                renders.append(text(command.descr, styler("description")))

            rows = []
            for index, parameter in enumerate(command.parameters):
                rows.append((
                    text("%s%s" % (self._param_marker, parameter.name), styler("parameter-name")),
                    text("#%d" % index, styler("default")),
                    text("mandatory" if parameter.mandatory else "", styler("mandatory")),
                    text(parameter.default and "default: %r" % parameter.default, styler("default")),
                    text(parameter.descr, styler("description")),
                ))
            for name, default in command.switches.items():
                rows.append((
                    text("%s%s" % (self._switch_marker, name), styler("switch-name")),
                    Text(""),
                    Text(""),
                    text(default and "default: on", styler("default")),
                    Text(""),
                ))

            if rows:
                table = Table(box=None, show_header=False, pad_edge=False)
                for column in ("name", "position", "mandatory", "default", "description"):
                    table.add_column(column)
                for row in rows:
                    table.add_row(*row)
                renders.append(table)
            else:
                renders.append(Text("no parameters or switches"))

        header = Text.assemble(text(self._name, styler("program-name")), " — ", text(title, styler("section-label")))
        if self.fancy:
            console.print(Panel(Group(*renders), title=header, title_align="left"))
        else:
            console.print(header, *renders, sep="\n")

    def __repr__(self):
        return "dispatcher(name=%r, commands=%r, globals=%r)" % (
            self._name, list(self._commands), list(self._globals)
        )


def invoke(dispatcher, prompt=Unset, /):
    """
    Convenience runner: resolve the prompt and execute the selected command.

    Parameters
    - dispatcher: an object implementing __invoke__(prompt) (a Dispatcher).
    - prompt: Unset (sys.argv[1:]), a shell-like str, or an Iterable[str].

    Returns the action's return value (None when a fallback handled a fault).
    """
    if hasattr(dispatcher, "__invoke__") and callable(dispatcher.__invoke__):
        return dispatcher.__invoke__(prompt)
    raise TypeError("invoke() first argument must implement __invoke__ method")


__all__ = (
    "Dispatcher",
    "Resolution",
    "invoke",
    "HELP",
)
