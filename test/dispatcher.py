"""
Dispatcher behavioral tests (registration, resolution, execution, help).

Scope
- Validate registration guards (duplicate commands/aliases/global parameters, help removal).
- Validate every resolution phase: selection, switches, named and positional parameters,
  global precedence, mandatory enforcement and default-command fallback.
- Validate execution, accessors, fallback handler, shell-mode rendering and the help command.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Dispatcher, Command, invoke, fault classes).
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import TestCase

from switchyard import (
    Command,
    Dispatcher,
    Resolution,
    invoke,
    DispatchException,
    DuplicateDefinitionError,
    CommandAlreadyConfiguredError,
    NoCommandSelectedError,
    UnknownSwitchError,
    UnknownParameterError,
    MissingParameterValueError,
    MissingMandatoryParametersError,
    InvalidParameterTypeError,
    ShadowedParameterWarning,
    FaultCode,
)


class Recorder:
    """Action stub that remembers every dispatcher it was called with."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, dispatcher):
        self.calls.append(dispatcher)
        return self.result


def build(name, action=None, **options):
    return Command(action or Recorder(), name, **options)


class TestRegistration(TestCase):
    """Command and global parameter registration."""

    def testHelpIsRegisteredFirst(self):
        d = Dispatcher("app")
        self.assertEqual(list(d.commands), ["help"])
        self.assertIn("help", d.exceptions)

    def testHelpCanBeSkipped(self):
        self.assertEqual(Dispatcher("app", help=False).commands, {})

    def testCommandsKeepInsertionOrder(self):
        d = Dispatcher("app")
        d.configure_command(build("deploy"))
        d.configure_command(build("build"))
        self.assertEqual(list(d.commands), ["help", "deploy", "build"])

    def testDuplicateCommandRejected(self):
        d = Dispatcher("app")
        d.configure_command(build("deploy"))
        with self.assertRaises(CommandAlreadyConfiguredError) as context:
            d.configure_command(build("deploy"))
        self.assertEqual(context.exception.options["name"], "deploy")
        self.assertEqual(context.exception.options["code"], FaultCode.COMMAND_ALREADY_CONFIGURED)

    def testCommandAlreadyConfiguredIsADuplicateDefinition(self):
        self.assertTrue(issubclass(CommandAlreadyConfiguredError, DuplicateDefinitionError))

    def testAliasCollisionRejected(self):
        d = Dispatcher("app")
        d.configure_command(build("deploy", aliases=("ship",)))
        with self.assertRaises(CommandAlreadyConfiguredError):
            d.configure_command(build("ship"))
        with self.assertRaises(CommandAlreadyConfiguredError):
            d.configure_command(build("release", aliases=("deploy",)))
        self.assertEqual(list(d.commands), ["help", "deploy"])

    def testNonCommandRejected(self):
        with self.assertRaises(TypeError):
            Dispatcher("app").configure_command("deploy")

    def testDuplicateGlobalRejected(self):
        d = Dispatcher("app")
        d.configure_global_parameter("profile")
        with self.assertRaises(DuplicateDefinitionError):
            d.configure_global_parameter("profile")

    def testDisableHelpCommand(self):
        d = Dispatcher("app")
        d.disable_help_command()
        self.assertNotIn("help", d.commands)
        d.disable_help_command()  # no-op when already gone

    def testDisableHelpKeepsUserHelp(self):
        d = Dispatcher("app", help=False)
        d.configure_command(build("help"))
        d.disable_help_command()
        self.assertIn("help", d.commands)

    def testMarkersMustNotPrefixEachOther(self):
        with self.assertRaises(ValueError):
            Dispatcher("app", switch_marker="-", param_marker="--")
        d = Dispatcher("app")
        with self.assertRaises(ValueError):
            d.switch_marker = "-"
        with self.assertRaises(ValueError):
            d.param_marker = ""
        self.assertEqual((d.switch_marker, d.param_marker), ("/", "-"))


class TestScenarios(TestCase):
    """End-to-end resolution scenarios."""

    def setUp(self):
        self.dispatcher = Dispatcher("app")
        self.deploy = build("deploy")
        self.deploy.configure_parameter("env", True)
        self.dispatcher.configure_command(self.deploy)

    def testNamedMandatoryParameter(self):
        resolution = self.dispatcher.resolve(["deploy", "-env", "prod"])
        self.assertIsInstance(resolution, Resolution)
        self.assertIs(resolution.command, self.deploy)
        self.assertEqual(self.dispatcher.get_parameter_as_string("env"), "prod")

    def testMissingMandatoryParameter(self):
        with self.assertRaises(MissingMandatoryParametersError) as context:
            self.dispatcher.resolve(["deploy"])
        self.assertEqual(context.exception.options["names"], ("env",))
        self.assertIn("env", str(context.exception))

    def testSwitch(self):
        c = build("build")
        c.configure_switch("verbose")
        self.dispatcher.configure_command(c)
        resolution = self.dispatcher.resolve(["build", "/verbose"])
        self.assertTrue(self.dispatcher.get_switch("verbose"))
        self.assertEqual(resolution.switches, ("verbose",))

    def testNoTokensWithoutDefault(self):
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.resolve([])

    def testPositionalParameters(self):
        c = build("run")
        c.configure_parameter("target")
        c.configure_parameter("mode")
        self.dispatcher.configure_command(c)
        self.dispatcher.resolve(["run", "web", "fast"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("target"), "web")
        self.assertEqual(self.dispatcher.get_parameter_as_string("mode"), "fast")

    def testTrailingNamedParameter(self):
        with self.assertRaises(MissingParameterValueError) as context:
            self.dispatcher.resolve(["deploy", "-env", "prod", "-missing"])
        self.assertEqual(context.exception.options["name"], "missing")


class TestSelection(TestCase):
    """Command selection and default-command fallback."""

    def setUp(self):
        self.dispatcher = Dispatcher("app")
        self.first = build("first")
        self.first.configure_parameter("file")
        self.first.configure_switch("all")
        self.second = build("second", aliases=("2nd",))
        self.dispatcher.configure_command(self.first)
        self.dispatcher.configure_command(self.second)

    def testMatchingTokenWinsRegardlessOfDefault(self):
        for enabled in (False, True):
            self.dispatcher.use_default_command = enabled
            self.assertIs(self.dispatcher.resolve(["second"]).command, self.second)

    def testAliasSelects(self):
        self.assertIs(self.dispatcher.resolve(["2nd"]).command, self.second)

    def testUnknownCommandWithoutDefault(self):
        with self.assertRaises(NoCommandSelectedError) as context:
            self.dispatcher.resolve(["third"])
        self.assertEqual(context.exception.options["name"], "third")

    def testLeadingSwitchWithoutDefault(self):
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.resolve(["/all"])

    def testDefaultIsFirstRegistered(self):
        self.dispatcher.use_default_command = True
        resolution = self.dispatcher.resolve([])
        self.assertEqual(resolution.command.name, "help")
        self.assertTrue(resolution.defaulted)

    def testDefaultAfterHelpDisabled(self):
        self.dispatcher.disable_help_command()
        self.dispatcher.use_default_command = True
        self.assertIs(self.dispatcher.resolve([]).command, self.first)

    def testExplicitDefaultWithLeadingSwitch(self):
        self.dispatcher.use_default_command = True
        self.dispatcher.set_default_command("first")
        resolution = self.dispatcher.resolve(["/all"])
        self.assertIs(resolution.command, self.first)
        self.assertTrue(self.dispatcher.get_switch("all"))

    def testUnknownTokenIsKeptForTheDefault(self):
        d = Dispatcher("app", use_default_command=True, default_command="first")
        d.configure_command(self.first)
        d.resolve(["notes.txt"])
        self.assertEqual(d.get_parameter_as_string("file"), "notes.txt")

    def testMissingDesignatedDefault(self):
        self.dispatcher.use_default_command = True
        self.dispatcher.set_default_command("ghost")
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.resolve([])

    def testNoCommandsAtAll(self):
        d = Dispatcher("app", help=False, use_default_command=True)
        with self.assertRaises(NoCommandSelectedError):
            d.resolve([])

    def testTokensMustBeStrings(self):
        with self.assertRaises(TypeError):
            self.dispatcher.resolve("first")
        with self.assertRaises(TypeError):
            self.dispatcher.resolve(["first", 1])


class TestClassification(TestCase):
    """Switch scan, named/positional parameters and global precedence."""

    def setUp(self):
        self.dispatcher = Dispatcher("app")
        self.copy = build("copy")
        self.copy.configure_parameter("source", True)
        self.copy.configure_parameter("target", True)
        self.copy.configure_parameter("mode", default="fast")
        self.copy.configure_switch("force")
        self.copy.configure_switch("quiet")
        self.dispatcher.configure_command(self.copy)

    def testInterleavedForms(self):
        resolution = self.dispatcher.resolve(["copy", "/force", "a.txt", "-mode", "safe", "b.txt", "/quiet"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("source"), "a.txt")
        self.assertEqual(self.dispatcher.get_parameter_as_string("target"), "b.txt")
        self.assertEqual(self.dispatcher.get_parameter_as_string("mode"), "safe")
        self.assertTrue(self.dispatcher.get_switch("force"))
        self.assertTrue(self.dispatcher.get_switch("quiet"))
        self.assertEqual(dict(resolution.assigned), {"source": "a.txt", "mode": "safe", "target": "b.txt"})

    def testNamedTokenDoesNotAdvancePositionalIndex(self):
        self.dispatcher.resolve(["copy", "-target", "b.txt", "a.txt"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("source"), "a.txt")
        self.assertEqual(self.dispatcher.get_parameter_as_string("target"), "b.txt")

    def testLastPositionalSlotIsFilled(self):
        self.dispatcher.resolve(["copy", "a", "b", "slow"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("mode"), "slow")

    def testSurplusPositionalStrict(self):
        with self.assertRaises(UnknownParameterError) as context:
            self.dispatcher.resolve(["copy", "a", "b", "c", "d"])
        self.assertEqual(context.exception.options["index"], 4)

    def testSurplusPositionalLenient(self):
        self.copy.strict_parameters = False
        self.dispatcher.resolve(["copy", "a", "b", "c", "d"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("mode"), "c")

    def testUnknownSwitchStrict(self):
        with self.assertRaises(UnknownSwitchError) as context:
            self.dispatcher.resolve(["copy", "a", "b", "/fast"])
        self.assertEqual(context.exception.options["name"], "fast")

    def testUnknownSwitchLenient(self):
        self.copy.strict_switches = False
        self.dispatcher.resolve(["copy", "a", "b", "/fast"])
        self.assertFalse(self.dispatcher.get_switch("fast"))

    def testUnknownNamedParameterStrict(self):
        with self.assertRaises(UnknownParameterError) as context:
            self.dispatcher.resolve(["copy", "a", "b", "-zone", "eu"])
        self.assertEqual(context.exception.options["name"], "zone")

    def testUnknownNamedParameterLenient(self):
        self.copy.strict_parameters = False
        resolution = self.dispatcher.resolve(["copy", "a", "b", "-zone", "eu"])
        self.assertIs(resolution.command, self.copy)

    def testValueStartingWithMarkerIsMissing(self):
        for marker in ("/", "-"):
            with self.assertRaises(MissingParameterValueError):
                self.dispatcher.resolve(["copy", "-source", marker + "force", "b"])

    def testSwitchScanRunsBeforeParameterScan(self):
        # the unknown switch is reported before the missing value
        with self.assertRaises(UnknownSwitchError):
            self.dispatcher.resolve(["copy", "-source", "/nope"])

    def testMissingMandatoryListsEveryName(self):
        self.dispatcher.configure_global_parameter("profile", True)
        with self.assertRaises(MissingMandatoryParametersError) as context:
            self.dispatcher.resolve(["copy", "/force"])
        self.assertEqual(context.exception.options["names"], ("profile", "source", "target"))
        for name in ("profile", "source", "target"):
            self.assertIn(name, str(context.exception))

    def testNonEmptyDefaultSatisfiesMandatory(self):
        c = build("serve")
        c.configure_parameter("port", True, "8080")
        self.dispatcher.configure_command(c)
        self.dispatcher.resolve(["serve"])
        self.assertEqual(self.dispatcher.get_parameter_as_int("port"), 8080)

    def testValuesAreResetBetweenResolutions(self):
        self.dispatcher.resolve(["copy", "a", "b", "slow", "/force"])
        self.dispatcher.resolve(["copy", "c", "d"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("mode"), "fast")
        self.assertFalse(self.dispatcher.get_switch("force"))

    def testFailedResolutionDiscardsItsValues(self):
        resolution = self.dispatcher.resolve(["copy", "a", "b"])
        with self.assertRaises(MissingParameterValueError):
            self.dispatcher.resolve(["copy", "-source", "x", "-target"])
        self.assertIsNone(self.dispatcher.current)
        self.assertEqual(resolution.get_parameter_as_string("source"), "a")
        self.assertEqual(self.copy.get_parameter_as_string("source"), "")

    def testRegisteredCommandKeepsItsDefaults(self):
        self.dispatcher.resolve(["copy", "a", "b", "slow", "/force"])
        self.assertEqual(self.copy.get_parameter_as_string("mode"), "fast")
        self.assertEqual(self.copy.get_parameter_as_string("source"), "")
        self.assertFalse(self.copy.get_switch("force"))

    def testIgnoredNamedParameterIsNotAssigned(self):
        self.copy.strict_parameters = False
        resolution = self.dispatcher.resolve(["copy", "a", "b", "-zone", "eu"])
        self.assertNotIn("zone", resolution.assigned)
        self.assertEqual(dict(resolution.assigned), {"source": "a", "target": "b"})

    def testSwitchMarkerChangeAppliesToRegisteredCommands(self):
        self.dispatcher.switch_marker = "+"
        self.dispatcher.resolve(["copy", "a", "b", "+force"])
        self.assertTrue(self.dispatcher.get_switch("force"))

    def testParameterMarkerChange(self):
        self.dispatcher.param_marker = "--"
        self.dispatcher.resolve(["copy", "--target", "b", "a"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("target"), "b")


class TestGlobals(TestCase):
    """Global parameters, precedence and mandatory exceptions."""

    def setUp(self):
        self.dispatcher = Dispatcher("app")
        self.dispatcher.configure_global_parameter("profile", True)
        self.dispatcher.configure_global_parameter("level", default="3")
        self.deploy = build("deploy")
        self.deploy.configure_parameter("level")
        self.dispatcher.configure_command(self.deploy)

    def testGlobalShadowsLocal(self):
        with self.assertWarns(ShadowedParameterWarning):
            resolution = self.dispatcher.resolve(["deploy", "-profile", "dev", "-level", "9"])
        self.assertEqual(self.dispatcher.get_parameter_as_string("level"), "9")
        self.assertEqual(self.dispatcher.get_parameter_as_int("level"), 9)
        self.assertEqual(resolution.scope.get_parameter_as_string("level"), "")

    def testPositionalStillReachesShadowedLocal(self):
        resolution = self.dispatcher.resolve(["deploy", "5", "-profile", "dev"])
        self.assertEqual(resolution.scope.get_parameter_as_string("level"), "5")
        self.assertEqual(self.dispatcher.get_parameter_as_string("level"), "3")

    def testGlobalDefaultIsHonoured(self):
        self.dispatcher.resolve(["deploy", "-profile", "dev"])
        self.assertEqual(self.dispatcher.get_parameter_as_int("level"), 3)

    def testGlobalMandatoryEnforced(self):
        with self.assertRaises(MissingMandatoryParametersError) as context:
            self.dispatcher.resolve(["deploy"])
        self.assertEqual(context.exception.options["names"], ("profile",))

    def testHelpIsExemptFromGlobalMandatory(self):
        resolution = self.dispatcher.resolve(["help"])
        self.assertEqual(resolution.command.name, "help")

    def testCustomMandatoryException(self):
        self.dispatcher.add_mandatory_exception("deploy")
        self.assertIs(self.dispatcher.resolve(["deploy"]).command, self.deploy)

    def testExemptionDoesNotCoverLocalMandatory(self):
        c = build("status")
        c.configure_parameter("id", True)
        self.dispatcher.configure_command(c)
        self.dispatcher.add_mandatory_exception("status")
        with self.assertRaises(MissingMandatoryParametersError) as context:
            self.dispatcher.resolve(["status"])
        self.assertEqual(context.exception.options["names"], ("id",))

    def testGlobalReadableWithoutResolution(self):
        self.assertEqual(self.dispatcher.get_parameter_as_string("level"), "3")


class TestExecution(TestCase):
    """execute(), accessors and invoke()."""

    def setUp(self):
        self.dispatcher = Dispatcher("app")
        self.action = Recorder(result="done")
        self.deploy = build("deploy", self.action)
        self.deploy.configure_parameter("env", True)
        self.deploy.configure_parameter("replicas", default="2")
        self.deploy.configure_switch("dry")
        self.dispatcher.configure_command(self.deploy)

    def testExecuteCallsActionWithDispatcher(self):
        self.dispatcher.resolve(["deploy", "prod"])
        self.assertEqual(self.dispatcher.execute(), "done")
        self.assertEqual(self.action.calls, [self.dispatcher])

    def testExecuteWithoutResolution(self):
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.execute()

    def testExecuteAfterFailedResolution(self):
        self.dispatcher.resolve(["deploy", "prod"])
        with self.assertRaises(MissingMandatoryParametersError):
            self.dispatcher.resolve(["deploy"])
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.execute()

    def testExecuteExplicitResolution(self):
        resolution = self.dispatcher.resolve(["deploy", "prod"])
        self.dispatcher.resolve(["help"])
        self.dispatcher.execute(resolution)
        self.assertIs(self.dispatcher.current, resolution)
        self.assertEqual(len(self.action.calls), 1)

    def testEarlierResolutionKeepsItsValues(self):
        seen = []
        d = Dispatcher("app")
        c = Command(lambda dispatcher: seen.append(dispatcher.get_parameter_as_string("env")), "deploy")
        c.configure_parameter("env", True)
        d.configure_command(c)
        first = d.resolve(["deploy", "-env", "prod"])
        d.resolve(["deploy", "-env", "dev"])
        d.execute(first)
        self.assertEqual(seen, ["prod"])
        self.assertEqual(dict(first.assigned), {"env": "prod"})

    def testCommandSharedBetweenDispatchers(self):
        seen = []
        c = Command(lambda dispatcher: seen.append(dispatcher.get_parameter_as_string("env")), "deploy")
        c.configure_parameter("env", True)
        a, b = Dispatcher("a"), Dispatcher("b")
        a.configure_command(c)
        b.configure_command(c)
        a.resolve(["deploy", "-env", "prod"])
        b.resolve(["deploy", "-env", "dev"])
        a.execute()
        b.execute()
        self.assertEqual(seen, ["prod", "dev"])

    def testGlobalSetterNeedsResolution(self):
        self.dispatcher.configure_global_parameter("profile", default="dev")
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.set_parameter("profile", "prod")
        self.assertEqual(self.dispatcher.get_parameter_as_string("profile"), "dev")

    def testExecuteRejectsOtherObjects(self):
        with self.assertRaises(TypeError):
            self.dispatcher.execute("deploy")

    def testAccessorsWithoutResolution(self):
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.get_parameter_as_string("env")
        with self.assertRaises(NoCommandSelectedError):
            self.dispatcher.get_switch("dry")

    def testDispatcherSetters(self):
        self.dispatcher.resolve(["deploy", "prod"])
        self.dispatcher.set_parameter("replicas", "5")
        self.dispatcher.set_switch("dry", True)
        self.assertEqual(self.dispatcher.get_parameter_as_int("replicas"), 5)
        self.assertTrue(self.dispatcher.get_switch("dry"))

    def testFaultFromActionPropagates(self):
        def broken(dispatcher):
            return dispatcher.get_parameter_as_int("env")

        d = Dispatcher("app")
        c = Command(broken, "broken")
        c.configure_parameter("env", default="prod")
        d.configure_command(c)
        d.resolve(["broken"])
        with self.assertRaises(InvalidParameterTypeError) as context:
            d.execute()
        self.assertIs(context.exception.options["tool"], d)

    def testInvokeWithString(self):
        self.assertEqual(invoke(self.dispatcher, "deploy -env 'eu west' /dry"), "done")
        self.assertEqual(self.dispatcher.get_parameter_as_string("env"), "eu west")
        self.assertTrue(self.dispatcher.get_switch("dry"))

    def testInvokeWithIterable(self):
        self.assertEqual(invoke(self.dispatcher, ["deploy", "prod"]), "done")

    def testInvokeRejectsNonDispatcher(self):
        with self.assertRaises(TypeError):
            invoke(object(), "deploy")


class TestFaultSurfacing(TestCase):
    """Fallback handler and shell-mode rendering."""

    def testFallbackReceivesFault(self):
        d = Dispatcher("app")
        faults = []
        d.fallback(faults.append)
        self.assertIsNone(d.resolve(["nothing"]))
        self.assertEqual(len(faults), 1)
        self.assertIsInstance(faults[0], NoCommandSelectedError)
        self.assertIs(faults[0].options["tool"], d)
        self.assertIsNone(invoke(d, "nothing"))

    def testFallbackCannotBeOverridden(self):
        d = Dispatcher("app")
        d.fallback(print)
        with self.assertRaises(TypeError):
            d.fallback(print)

    def testFallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            Dispatcher("app").fallback("print")

    def testRaisedFaultCarriesRuntimeFlags(self):
        d = Dispatcher("app", fancy=True)
        with self.assertRaises(DispatchException) as context:
            d.resolve([])
        self.assertTrue(context.exception.options["fancy"])
        self.assertFalse(context.exception.options["shell"])

    def testShellModeRendersAndExits(self):
        d = Dispatcher("app", shell=True)
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            d.resolve([])
        self.assertEqual(context.exception.code, 1)
        output = stderr.getvalue()
        self.assertIn("no command given", output)
        self.assertIn(str(int(FaultCode.NO_COMMAND_SELECTED)), output)


class TestHelpCommand(TestCase):
    """Built-in help listing."""

    def setUp(self):
        self.dispatcher = Dispatcher("app")
        deploy = build("deploy", descr="ship the build", aliases=("ship",))
        deploy.configure_parameter("env", True, descr="target environment")
        deploy.configure_switch("dry")
        self.dispatcher.configure_command(deploy)

    def run_help(self, prompt):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            invoke(self.dispatcher, prompt)
        return stdout.getvalue()

    def testListsCommands(self):
        output = self.run_help("help")
        self.assertIn("help", output)
        self.assertIn("deploy", output)
        self.assertIn("ship the build", output)

    def testDescribesCommand(self):
        output = self.run_help("help -cmd deploy")
        self.assertIn("-env", output)
        self.assertIn("mandatory", output)
        self.assertIn("/dry", output)

    def testDescribesCommandByAlias(self):
        self.assertIn("-env", self.run_help("help -cmd ship"))

    def testUnknownCommand(self):
        self.assertIn("not recognized", self.run_help(["help", "-cmd", "ghost"]))

    def testPositionalCommandName(self):
        self.assertIn("-env", self.run_help("help deploy"))


if __name__ == "__main__":
    unittest.main()
