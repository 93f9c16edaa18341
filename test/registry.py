"""
Registry tests: uniqueness, ordering, default short letters and built-ins.
"""
import unittest
from unittest import TestCase

from argot import DefinitionError, ConstraintKind, OptionSpec, Banner
from argot.registry import Registry
from argot.utils import Unset


class RegistryTest(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()

    def testDefineIndexesSwitches(self) -> None:
        spec = self.registry.define("dry_run", "Do nothing", short="n")
        self.assertIn("dry_run", self.registry)
        self.assertIs(self.registry.spec("dry_run"), spec)
        self.assertEqual(self.registry.by_long("dry-run"), "dry_run")
        self.assertEqual(self.registry.by_short("n"), "dry_run")
        self.assertIs(self.registry.by_long("dry_run"), Unset)
        self.assertIs(self.registry.by_short("d"), Unset)

    def testDuplicateName(self) -> None:
        self.registry.define("name")
        with self.assertRaises(DefinitionError):
            self.registry.define("name")

    def testDuplicateLong(self) -> None:
        self.registry.define("first", long="same")
        with self.assertRaises(DefinitionError):
            self.registry.define("second", long="--same")
        self.assertNotIn("second", self.registry)
        self.assertEqual(len(self.registry), 1)

    def testDuplicateShort(self) -> None:
        self.registry.define("first", short="x")
        with self.assertRaises(DefinitionError):
            self.registry.define("second", short="x")
        self.assertNotIn("second", self.registry)

    def testNoneShortIsNeverIndexed(self) -> None:
        self.registry.define("first", short="none")
        self.registry.define("second", short="none")
        self.registry.resolve_default_shorts()
        self.assertEqual(self.registry.spec("first").short, "none")
        self.assertEqual(dict(self.registry.shorts), {})

    def testInvalidDefinitionLeavesRegistryUntouched(self) -> None:
        with self.assertRaises(DefinitionError):
            self.registry.define("count", type=int, default="x")
        self.assertEqual(len(self.registry), 0)
        self.assertEqual(self.registry.entries, ())

    def testEntriesKeepDeclarationOrder(self) -> None:
        self.registry.banner("Usage: tool [options]")
        self.registry.define("alpha")
        self.registry.banner("More:")
        self.registry.define("beta")
        kinds = [type(entry) for entry in self.registry.entries]
        self.assertEqual(kinds, [Banner, OptionSpec, Banner, OptionSpec])
        self.assertEqual([spec.name for spec in self.registry], ["alpha", "beta"])

    def testDefaultShorts(self) -> None:
        self.registry.define("verbose")
        self.registry.define("value")
        self.registry.define("2nd-pass")
        self.registry.define("vv")
        self.registry.resolve_default_shorts()
        self.assertEqual(self.registry.spec("verbose").short, "v")
        self.assertEqual(self.registry.spec("value").short, "a")
        self.assertEqual(self.registry.spec("2nd-pass").short, "n")
        self.assertIs(self.registry.spec("vv").short, Unset)
        self.assertEqual(self.registry.by_short("a"), "value")

    def testExplicitShortsWinOverDefaults(self) -> None:
        self.registry.define("verbose")
        self.registry.define("version", short="v")
        self.registry.resolve_default_shorts()
        self.assertEqual(self.registry.spec("verbose").short, "e")

    def testBuiltinsWithVersion(self) -> None:
        self.registry.ensure_builtins("1.0")
        self.registry.resolve_default_shorts()
        self.assertEqual([spec.name for spec in self.registry], ["version", "help"])
        self.assertEqual(self.registry.spec("version").short, "v")
        self.assertEqual(self.registry.spec("help").short, "h")
        self.assertEqual(self.registry.spec("help").descr, "Show this message")
        self.assertTrue(self.registry.builtin("help"))

    def testBuiltinsWithoutVersion(self) -> None:
        self.registry.ensure_builtins()
        self.assertNotIn("version", self.registry)
        self.assertIn("help", self.registry)

    def testBuiltinsAreIdempotent(self) -> None:
        self.registry.ensure_builtins("1.0")
        self.registry.ensure_builtins("1.0")
        self.assertEqual(len(self.registry), 2)

    def testBuiltinsRespectUserLongs(self) -> None:
        self.registry.define("usage", long="help", type=str)
        self.registry.ensure_builtins()
        self.assertNotIn("help", self.registry)
        self.assertFalse(self.registry.builtin("help"))

    def testConstrainUnknownOption(self) -> None:
        self.registry.define("alpha")
        with self.assertRaises(DefinitionError):
            self.registry.constrain(ConstraintKind.DEPENDS, ("alpha", "beta"))
        self.assertEqual(self.registry.constraints, ())

    def testConstrain(self) -> None:
        self.registry.define("alpha")
        self.registry.define("beta")
        constraint = self.registry.constrain(ConstraintKind.CONFLICTS, ["alpha", "beta"])
        self.assertEqual(constraint.members, ("alpha", "beta"))
        self.assertEqual(self.registry.constraints, (constraint,))


if __name__ == "__main__":
    unittest.main()
