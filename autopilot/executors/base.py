#!/usr/bin/env python3
"""
Base executor interface for cf CLI operations.
"""

import json


class CfCommandError(RuntimeError):
    """A cf command exited non-zero or returned output we could not use."""


class BaseExecutor:
    """Interface for cf executors (local subprocess or remote jump host)."""

    def cf(self, *args):
        """
        Run a cf command with its output shown to the operator.

        Args:
            *args: cf arguments, e.g. ('rename', 'old', 'new')

        Raises:
            CfCommandError: if the command exits non-zero
        """
        raise NotImplementedError("Subclasses must implement cf()")

    def cf_quiet(self, *args):
        """Run a cf command and return its stdout instead of printing it."""
        raise NotImplementedError("Subclasses must implement cf_quiet()")

    def read_cf_config(self):
        """Return the raw text of the cf CLI config.json."""
        raise NotImplementedError("Subclasses must implement read_cf_config()")

    def stage_files(self, *paths):
        """
        Make local files visible to the machine that runs cf.

        Returns the paths cf should be given, in the same order. Empty
        paths are passed through unchanged.
        """
        return list(paths)

    def cleanup_staged_files(self):
        """Remove anything stage_files() created."""

    def current_space_guid(self):
        """GUID of the space the cf CLI is currently targeting."""
        raw = self.read_cf_config()
        try:
            cf_config = json.loads(raw)
        except ValueError as e:
            raise CfCommandError(f"Could not parse cf config.json: {e}")

        guid = (cf_config.get('SpaceFields') or {}).get('GUID')
        if not guid:
            raise CfCommandError("No space targeted. Run 'cf target -o ORG -s SPACE' first.")
        return guid
