"""
Commands module behavioral tests (construction, factory, validation policy).

Scope
- Validate Command construction: field sanitizing and type errors.
- Validate the command() factory in direct and decorator form.
- Validate the three-tier argument policy (validator > options > anything).
- Validate dispatch variant resolution.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Command, command, validate, resolve).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commander import Command, Commander, Handler, Delegate, Incomplete, command, validate, resolve


def noop(commander, command, args):
    pass


class TestCommandConstruction(TestCase):
    """Field sanitizing for Command."""

    def testDefaultsAreNone(self):
        c = Command("status")
        self.assertEqual(c.name, "status")
        self.assertIsNone(c.descr)
        self.assertIsNone(c.handler)
        self.assertIsNone(c.delegate)
        self.assertIsNone(c.completer)
        self.assertIsNone(c.options)
        self.assertIsNone(c.validator)

    def testEmptyNameIsAllowedUntilRegistration(self):
        self.assertEqual(Command().name, "")

    def testNameIsStoredUnchanged(self):
        self.assertEqual(Command("git.status").name, "git.status")

    def testNameCannotContainSpaces(self):
        for name in (" build", "build ", "a b", "   "):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Command(name)

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Command(42)

    def testDescrMustBeString(self):
        with self.assertRaises(TypeError):
            Command("status", 3)

    def testHandlerMustBeCallable(self):
        with self.assertRaises(TypeError):
            Command("status", handler="print")

    def testCompleterMustBeCallable(self):
        with self.assertRaises(TypeError):
            Command("status", completer=["a", "b"])

    def testValidatorMustBeCallable(self):
        with self.assertRaises(TypeError):
            Command("status", validator=True)

    def testDelegateMustBeRunnable(self):
        with self.assertRaises(TypeError):
            Command("env", delegate=object())

    def testOptionsAreFrozen(self):
        c = Command("build", options=["linux", "windows", "linux"])
        self.assertEqual(c.options, frozenset({"linux", "windows"}))

    def testOptionsRejectPlainString(self):
        with self.assertRaises(TypeError):
            Command("build", options="linux")

    def testOptionsRejectNonStrings(self):
        with self.assertRaises(TypeError):
            Command("build", options=["linux", 3])

    def testHandlerAndDelegateAreNotCheckedHere(self):
        # exclusivity belongs to the registry
        c = Command("env", handler=noop, delegate=Commander("%s>"))
        self.assertIs(c.handler, noop)

    def testFieldsAreReadOnly(self):
        c = Command("status")
        with self.assertRaises(AttributeError):
            c.name = "other"

    def testRepr(self):
        self.assertTrue(repr(Command("status")).startswith("command(name='status'"))


class TestCommandFactory(TestCase):
    """Direct and decorator forms of command()."""

    def testDirectForm(self):
        c = command("build", "compile a target", handler=noop)
        self.assertEqual(c.name, "build")
        self.assertEqual(c.descr, "compile a target")
        self.assertIs(c.handler, noop)

    def testBareDecoratorUsesFunctionNameAndDoc(self):
        @command
        def deploy(commander, command, args):
            """ship it"""

        self.assertIsInstance(deploy, Command)
        self.assertEqual(deploy.name, "deploy")
        self.assertEqual(deploy.descr, "ship it")

    def testDecoratorWithOverrides(self):
        @command(name="ship", descr="deploy", options=("prod", "dev"))
        def deploy(commander, command, args):
            pass

        self.assertEqual(deploy.name, "ship")
        self.assertEqual(deploy.descr, "deploy")
        self.assertEqual(deploy.options, frozenset({"prod", "dev"}))

    def testDecoratorIsReusable(self):
        decorator = command(name="same")
        first = decorator(noop)
        second = decorator(noop)
        self.assertEqual(first.name, second.name)

    def testDecoratorRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            command()(42)


class TestValidation(TestCase):
    """The validator > options > unconstrained policy."""

    def testUnconstrainedAcceptsAnything(self):
        c = Command("echo")
        self.assertTrue(validate(c, []))
        self.assertTrue(validate(c, ["a", "b"]))

    def testOptionsCheckFirstArgumentOnly(self):
        c = Command("build", options=("linux", "windows"))
        self.assertTrue(validate(c, ["linux"]))
        self.assertTrue(validate(c, ["windows", "anything", "else"]))
        self.assertFalse(validate(c, ["mac"]))
        self.assertFalse(validate(c, []))

    def testValidatorOverridesOptions(self):
        c = Command("build", options=("linux",), validator=lambda args: args == ["mac"])
        self.assertTrue(validate(c, ["mac"]))
        self.assertFalse(validate(c, ["linux"]))

    def testValidatorReceivesAllArguments(self):
        seen = []
        c = Command("build", validator=lambda args: seen.append(list(args)) or True)
        validate(c, ["linux", "x64"])
        self.assertEqual(seen, [["linux", "x64"]])

    def testPrecomputedOptionsAreUsed(self):
        c = Command("build", options=("linux",))
        self.assertTrue(validate(c, ["bsd"], frozenset({"bsd"})))


class TestResolve(TestCase):
    """Dispatch variant selection."""

    def testHandler(self):
        action = resolve(Command("a", handler=noop))
        self.assertIsInstance(action, Handler)
        self.assertIs(action.callback, noop)

    def testDelegate(self):
        child = Commander("%s>")
        action = resolve(Command("a", delegate=child))
        self.assertIsInstance(action, Delegate)
        self.assertIs(action.commander, child)

    def testIncomplete(self):
        self.assertIsInstance(resolve(Command("a")), Incomplete)


if __name__ == "__main__":
    unittest.main()
