#!/usr/bin/env python3
"""
Application repository: the cf operations the deployment plans are built from.
"""

import json

from ..executors import CfCommandError


class ApplicationRepo:
    """Rename/push/start/stop/delete/list/exists for apps in the targeted space."""

    def __init__(self, executor, space_guid=None):
        """
        Args:
            executor: BaseExecutor used to run cf commands
            space_guid: space to query for existence (defaults to the cf CLI's target)
        """
        self.executor = executor
        self._space_guid = space_guid

    @property
    def space_guid(self):
        if not self._space_guid:
            self._space_guid = self.executor.current_space_guid()
        return self._space_guid

    def rename_application(self, old_name, new_name):
        self.executor.cf('rename', old_name, new_name)

    def push_application(self, app_name, manifest_path, app_path=''):
        args = ['push', app_name, '-f', manifest_path]

        if app_path:
            args.extend(['-p', app_path])

        self.executor.cf(*args)

    def stage_push_files(self, manifest_path, app_path=''):
        """Returns (manifest_path, app_path) as the machine running cf will see them."""
        manifest_path, app_path = self.executor.stage_files(manifest_path, app_path)
        return manifest_path, app_path

    def cleanup_staged_files(self):
        self.executor.cleanup_staged_files()

    def delete_application(self, app_name):
        self.executor.cf('delete', app_name, '-f')

    def start_application(self, app_name):
        self.executor.cf('start', app_name)

    def stop_application(self, app_name):
        self.executor.cf('stop', app_name)

    def list_applications(self):
        self.executor.cf('apps')

    def does_app_exist(self, app_name):
        """True iff exactly one app with this name exists in the space."""
        path = f"v2/apps?q=name:{app_name}&q=space_guid:{self.space_guid}"
        output = self.executor.cf_quiet('curl', path)

        try:
            response = json.loads(output)
        except ValueError as e:
            raise CfCommandError(f"Invalid JSON from cf curl {path}: {e}")

        if not isinstance(response, dict) or 'total_results' not in response:
            raise CfCommandError("Missing total_results from api response")

        total_results = response['total_results']
        if isinstance(total_results, bool) or not isinstance(total_results, (int, float)):
            raise CfCommandError(f"total_results didn't have a number {total_results!r}")

        return total_results == 1
