#!/usr/bin/env python3
"""
Compensating action sequencer.

Runs an ordered list of steps. When a step fails, every step that already
completed is undone in reverse order before the original error is raised.

Each Action carries the compensation for the step *before* it
(reverse_previous), because undoing a step means restoring the state the
previous step left behind.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional


DEFAULT_REWIND_FAILURE_MESSAGE = (
    "Oh no. Something's gone wrong. I've tried to roll back "
    "but you should check to see if everything is OK."
)


class RewindError(RuntimeError):
    """Raised when a forward step failed and undoing the completed steps also failed."""

    def __init__(self, message, cause, rewind_errors):
        self.cause = cause
        self.rewind_errors = list(rewind_errors)
        details = "; ".join(str(e) for e in self.rewind_errors)
        super().__init__(f"{message}: {cause} (rollback errors: {details})")


@dataclass
class Action:
    """One step: a forward operation and an optional undo of the previous step."""

    forward: Callable[[], None]
    reverse_previous: Optional[Callable[[], None]] = None
    description: str = ''


@dataclass
class Actions:
    actions: List[Action] = field(default_factory=list)
    rewind_failure_message: str = DEFAULT_REWIND_FAILURE_MESSAGE

    def __len__(self):
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    def execute(self):
        """
        Run every forward operation in order.

        On the first failure at index k the completed steps k-1 .. 0 are
        undone, newest first. Step j is undone by actions[j + 1].reverse_previous;
        steps without a compensation are skipped.

        Raises:
            The original exception when unwinding succeeded (or had nothing to do).
            RewindError when at least one compensation also failed.
        """
        for index, action in enumerate(self.actions):
            if action.description:
                print(f"  -> {action.description}")
            try:
                action.forward()
            except Exception as e:
                print(f"ERROR: step {index + 1}/{len(self.actions)} failed: {e}")
                rewind_errors = self._rewind(index)
                if rewind_errors:
                    raise RewindError(self.rewind_failure_message, e, rewind_errors) from e
                raise

    def _rewind(self, failed_index):
        """Undo steps failed_index-1 .. 0 and return the errors raised while doing so."""
        errors = []
        for index in range(failed_index, 0, -1):
            reverse = self.actions[index].reverse_previous
            if reverse is None:
                continue
            print(f"  <- undoing step {index}/{len(self.actions)}")
            try:
                reverse()
            except Exception as e:
                print(f"ERROR: rollback of step {index} failed: {e}")
                errors.append(e)
        return errors
