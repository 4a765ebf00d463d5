"""Outbound az invocations and their mutation classification.

An Invocation pairs the argument vector handed to az with a kind tag that
is decided once, where the invocation is built:

- RemoteCall: ``az rest --method <m> ...``
- WorkItemOp: ``az boards work-item <verb> [<subverb>] ...``
- OtherCall: anything else (queries, ad, devops)
"""

import shlex
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

AZ_PROGRAM = "az"

SAFE_REMOTE_METHODS = frozenset({"get"})
MUTATING_WORK_ITEM_VERBS = frozenset({"create", "update", "delete"})
MUTATING_RELATION_VERBS = frozenset({"add", "remove", "delete"})


@dataclass(frozen=True)
class RemoteCall:
    """Generic REST call; ``method`` is None when none was declared."""

    method: Optional[str] = None


@dataclass(frozen=True)
class WorkItemOp:
    """Work item operation, e.g. ``update`` or ``relation add``."""

    verb: str
    subverb: Optional[str] = None


@dataclass(frozen=True)
class OtherCall:
    """Any invocation that is neither a REST call nor a work item operation."""


InvocationKind = Union[RemoteCall, WorkItemOp, OtherCall]


@dataclass(frozen=True)
class Invocation:
    """One outbound call to az.

    Attributes:
        argv: Arguments passed to az, without the program name
        kind: Structural classification of the call
    """

    argv: Tuple[str, ...]
    kind: InvocationKind

    @classmethod
    def rest(cls, method: str, url: str, *extra: str) -> "Invocation":
        argv = ("rest", "--method", method, "--url", url) + tuple(extra)
        return cls(argv, RemoteCall(method))

    @classmethod
    def work_item(cls, verb: str, *args: str, subverb: Optional[str] = None) -> "Invocation":
        """Build ``az boards work-item <verb> [<subverb>] <args>``."""
        head: Tuple[str, ...] = ("boards", "work-item", verb)
        if subverb is not None:
            head += (subverb,)
        return cls(head + tuple(args), WorkItemOp(verb, subverb))

    @classmethod
    def other(cls, *argv: str) -> "Invocation":
        return cls(tuple(argv), OtherCall())

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "Invocation":
        """Classify an arbitrary argument vector by its structure.

        Used for invocations that were not built through one of the
        constructors above.
        """
        args = tuple(argv)
        if not args:
            return cls(args, OtherCall())

        if args[0] == "rest":
            for i in range(1, len(args) - 1):
                if args[i] == "--method":
                    return cls(args, RemoteCall(args[i + 1]))
            return cls(args, RemoteCall(None))

        for i in range(len(args) - 2):
            if args[i] == "boards" and args[i + 1] == "work-item":
                verb = args[i + 2]
                subverb = None
                if verb.lower() == "relation" and i + 3 < len(args):
                    subverb = args[i + 3]
                return cls(args, WorkItemOp(verb, subverb))

        return cls(args, OtherCall())

    def command_line(self, program: str = AZ_PROGRAM) -> str:
        """Render the invocation as a command line safe to paste into a shell."""
        return shlex.join((program,) + self.argv)

    @property
    def is_mutating(self) -> bool:
        return is_mutating(self.kind)

    def __str__(self) -> str:
        return self.command_line()


def is_mutating(kind: InvocationKind) -> bool:
    """Decide whether an invocation kind is expected to change remote state.

    REST calls mutate unless their method is GET; a REST call without a
    method counts as mutating. Work item create/update/delete mutate, as do
    relation add/remove/delete. Every other kind is treated as a read.
    """
    if isinstance(kind, RemoteCall):
        if kind.method is None:
            return True
        return kind.method.lower() not in SAFE_REMOTE_METHODS

    if isinstance(kind, WorkItemOp):
        verb = kind.verb.lower()
        if verb in MUTATING_WORK_ITEM_VERBS:
            return True
        if verb == "relation":
            return kind.subverb is not None and kind.subverb.lower() in MUTATING_RELATION_VERBS
        return False

    return False
