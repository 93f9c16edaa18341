"""
Constraint engine tests (presence-only checks after scanning).
"""
import unittest
from unittest import TestCase

from argot import ConstraintKind, FaultCode, DependencyError, ConflictError, MissingRequiredError
from argot.constraints import check_constraints, check_required
from argot.registry import Registry


class ConstraintsTest(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()
        self.registry.define("alpha")
        self.registry.define("beta", long="bravo")
        self.registry.define("gamma")

    def testNothingGivenSkipsConstraints(self) -> None:
        self.registry.constrain(ConstraintKind.DEPENDS, ("alpha", "beta"))
        self.registry.constrain(ConstraintKind.CONFLICTS, ("alpha", "gamma"))
        check_constraints(self.registry, {})

    def testDependsSatisfied(self) -> None:
        self.registry.constrain(ConstraintKind.DEPENDS, ("alpha", "beta"))
        check_constraints(self.registry, {"alpha", "beta"})

    def testDependsViolationNamesBothLongs(self) -> None:
        self.registry.constrain(ConstraintKind.DEPENDS, ("alpha", "beta"))
        with self.assertRaises(DependencyError) as context:
            check_constraints(self.registry, {"alpha"})
        self.assertEqual(context.exception.message, "--alpha requires --bravo")
        self.assertIs(context.exception.code, FaultCode.UNMET_DEPENDENCY)

    def testDependsIsMutual(self) -> None:
        self.registry.constrain(ConstraintKind.DEPENDS, ("alpha", "beta"))
        with self.assertRaises(DependencyError) as context:
            check_constraints(self.registry, {"beta"})
        self.assertEqual(context.exception.message, "--bravo requires --alpha")

    def testConflicts(self) -> None:
        self.registry.constrain(ConstraintKind.CONFLICTS, ("alpha", "gamma"))
        check_constraints(self.registry, {"alpha"})
        with self.assertRaises(ConflictError) as context:
            check_constraints(self.registry, {"alpha", "gamma"})
        self.assertEqual(context.exception.message, "--alpha conflicts with --gamma")
        self.assertIs(context.exception.code, FaultCode.CONFLICTING_SWITCHES)

    def testTriggerIsFirstGivenMember(self) -> None:
        self.registry.constrain(ConstraintKind.CONFLICTS, ("gamma", "alpha"))
        with self.assertRaises(ConflictError) as context:
            check_constraints(self.registry, {"alpha", "gamma"})
        self.assertEqual(context.exception.message, "--gamma conflicts with --alpha")

    def testFirstDeclaredConstraintWins(self) -> None:
        self.registry.constrain(ConstraintKind.CONFLICTS, ("alpha", "gamma"))
        self.registry.constrain(ConstraintKind.DEPENDS, ("alpha", "beta"))
        with self.assertRaises(ConflictError):
            check_constraints(self.registry, {"alpha", "gamma"})


class RequiredTest(TestCase):

    def testFirstMissingInDeclarationOrder(self) -> None:
        registry = Registry()
        registry.define("output", type=str, required=True)
        registry.define("input", type=str, required=True)
        with self.assertRaises(MissingRequiredError) as context:
            check_required(registry, {})
        self.assertEqual(context.exception.message, "option 'output' must be specified")
        self.assertIs(context.exception.code, FaultCode.MISSING_REQUIRED)
        with self.assertRaises(MissingRequiredError) as context:
            check_required(registry, {"output"})
        self.assertEqual(context.exception.message, "option 'input' must be specified")
        check_required(registry, {"output", "input"})


if __name__ == "__main__":
    unittest.main()
