"""
Argot constraint checks.

Both checks look at presence only (which options were supplied), never at
values, and run after a successful scan:

- check_constraints(): every depends/conflicts constraint, in declaration
  order. The triggering member is the first member (in member order) that was
  given; constraints with no given member are skipped.
  • depends   → every member must be given: "--A requires --B".
  • conflicts → no other member may be given: "--A conflicts with --B".
- check_required(): the first required option (declaration order) that was
  not given: "option 'name' must be specified".
"""
from .faults import FaultCode, DependencyError, ConflictError, MissingRequiredError, getdoc
from .specs import ConstraintKind, OptionSpec
from .utils import Unset


def _check_depends(registry, constraint, trigger, given):
    for member in constraint.members:
        if member not in given:
            source, target = registry.spec(trigger), registry.spec(member)
            raise DependencyError(
                "--%s requires --%s" % (source.long, target.long),
                title="unmet dependency",
                code=FaultCode.UNMET_DEPENDENCY,
                hint="add --%s, or remove --%s" % (target.long, source.long),
                input="--" + source.long,
                members=constraint.members,
                docs=getdoc(FaultCode.UNMET_DEPENDENCY),
            )


def _check_conflicts(registry, constraint, trigger, given):
    for member in constraint.members:
        if member != trigger and member in given:
            source, target = registry.spec(trigger), registry.spec(member)
            raise ConflictError(
                "--%s conflicts with --%s" % (source.long, target.long),
                title="conflicting options",
                code=FaultCode.CONFLICTING_SWITCHES,
                hint="use either --%s or --%s, not both" % (source.long, target.long),
                input="--" + source.long,
                members=constraint.members,
                docs=getdoc(FaultCode.CONFLICTING_SWITCHES),
            )


def check_constraints(registry, given, /):
    """
    raise the first depends/conflicts violation among the supplied options.
    """
    for constraint in registry.constraints:
        if (trigger := constraint.trigger(given)) is Unset:
            continue
        match constraint.kind:
            case ConstraintKind.DEPENDS:
                _check_depends(registry, constraint, trigger, given)
            case ConstraintKind.CONFLICTS:
                _check_conflicts(registry, constraint, trigger, given)


def check_required(registry, given, /):
    """
    raise MissingRequiredError for the first required option never supplied.
    """
    for entry in registry.entries:
        if isinstance(entry, OptionSpec) and entry.required and entry.name not in given:
            raise MissingRequiredError(
                "option %r must be specified" % entry.name,
                title="missing required option",
                code=FaultCode.MISSING_REQUIRED,
                hint="add --%s to the command line" % entry.long,
                option=entry.name,
                docs=getdoc(FaultCode.MISSING_REQUIRED),
            )


__all__ = (
    "check_constraints",
    "check_required",
)
