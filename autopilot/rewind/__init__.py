"""
Compensating action sequencer package.

Provides Action/Actions and the RewindError raised when automatic
recovery could not complete.
"""

from .actions import Action, Actions, RewindError, DEFAULT_REWIND_FAILURE_MESSAGE

__all__ = ['Action', 'Actions', 'RewindError', 'DEFAULT_REWIND_FAILURE_MESSAGE']
