"""Shared fixtures: an in-memory stand-in for the cf application namespace."""

import pytest

from autopilot.executors import CfCommandError


class FakeAppRepo:
    """
    Records every call and keeps a set of app names so plans can run end to end.

    fail_on maps an operation tuple, e.g. ('push', 'foo'), to the number of
    times it should fail (None = always).
    """

    def __init__(self, apps=()):
        self.apps = {name: 'stopped' for name in apps}
        self.builds = {name: f"{name}-build" for name in apps}
        self.calls = []
        self.fail_on = {}
        self.staged = []
        self.cleaned = False

    def _record(self, *call):
        self.calls.append(call)
        if call in self.fail_on:
            remaining = self.fail_on[call]
            if remaining is None or remaining > 0:
                if remaining is not None:
                    self.fail_on[call] = remaining - 1
                raise CfCommandError(f"cf {' '.join(call)} failed")

    def _require(self, name):
        if name not in self.apps:
            raise CfCommandError(f"App {name} not found")

    def rename_application(self, old_name, new_name):
        self._record('rename', old_name, new_name)
        self._require(old_name)
        if new_name in self.apps:
            raise CfCommandError(f"App {new_name} already exists")
        self.apps[new_name] = self.apps.pop(old_name)
        self.builds[new_name] = self.builds.pop(old_name)

    def push_application(self, app_name, manifest_path, app_path=''):
        self._record('push', app_name)
        self.apps[app_name] = 'started'
        self.builds[app_name] = f"new-build:{manifest_path}"

    def stage_push_files(self, manifest_path, app_path=''):
        self.staged.append((manifest_path, app_path))
        return manifest_path, app_path

    def cleanup_staged_files(self):
        self.cleaned = True

    def start_application(self, app_name):
        self._record('start', app_name)
        self._require(app_name)
        self.apps[app_name] = 'started'

    def stop_application(self, app_name):
        self._record('stop', app_name)
        self._require(app_name)
        self.apps[app_name] = 'stopped'

    def delete_application(self, app_name):
        self._record('delete', app_name)
        self.apps.pop(app_name, None)
        self.builds.pop(app_name, None)

    def list_applications(self):
        self._record('apps')

    def does_app_exist(self, app_name):
        self.calls.append(('exists', app_name))
        return app_name in self.apps

    def mutations(self):
        """Calls that change the platform (exists/apps filtered out)."""
        return [c for c in self.calls if c[0] not in ('exists', 'apps')]


@pytest.fixture
def fake_repo():
    return FakeAppRepo


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "manifest.yml"
    path.write_text("applications:\n- name: foo\n  instances: 2\n")
    return str(path)
