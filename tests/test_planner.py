"""Tests for the push and rollback plans, executed against the fake app namespace."""

import pytest

from autopilot.deployment.push import new_app_actions, existing_app_actions, push_actions
from autopilot.deployment.rollback import (
    PreconditionError, check_rollback_preconditions, rollback_actions
)
from autopilot.deployment.utils import (
    AppState, AutopilotOptions, venerable_app_name, rollback_app_name
)
from autopilot.executors import CfCommandError
from autopilot.rewind import Actions, RewindError


class TestNaming:

    def test_suffixes(self):
        assert venerable_app_name('foo') == 'foo-venerable'
        assert rollback_app_name('foo') == 'foo-rollback'


class TestNewApp:

    def test_single_push_without_compensation(self, fake_repo):
        repo = fake_repo()
        actions = push_actions(repo, 'foo', 'manifest.yml', '', AutopilotOptions(), AppState(live_exists=False))

        assert len(actions) == 1
        assert actions[0].reverse_previous is None

        Actions(actions=actions).execute()
        assert repo.mutations() == [('push', 'foo')]

    def test_never_touches_venerable_or_rollback_names(self, fake_repo):
        repo = fake_repo()
        Actions(actions=new_app_actions(repo, 'foo', 'manifest.yml')).execute()

        names = [arg for call in repo.calls for arg in call[1:]]
        assert not any('venerable' in n or 'rollback' in n for n in names)

    def test_failed_push_surfaces_error(self, fake_repo):
        repo = fake_repo()
        repo.fail_on[('push', 'foo')] = None

        with pytest.raises(CfCommandError):
            Actions(actions=new_app_actions(repo, 'foo', 'manifest.yml')).execute()
        assert repo.mutations() == [('push', 'foo')]


class TestExistingApp:

    def plan(self, repo, keep_existing=False, venerable_exists=False):
        state = AppState(live_exists=True, venerable_exists=venerable_exists)
        return push_actions(repo, 'foo', 'manifest.yml', 'build/', AutopilotOptions(keep_existing), state)

    def test_four_steps_ending_in_delete(self, fake_repo):
        repo = fake_repo(['foo'])
        actions = self.plan(repo)

        assert len(actions) == 4
        Actions(actions=actions).execute()

        assert repo.mutations() == [
            ('rename', 'foo', 'foo-venerable'),
            ('push', 'foo'),
            ('delete', 'foo-venerable'),
        ]
        assert set(repo.apps) == {'foo'}
        assert repo.builds['foo'] == 'new-build:manifest.yml'

    def test_keep_existing_stops_instead_of_deleting(self, fake_repo):
        repo = fake_repo(['foo'])
        Actions(actions=self.plan(repo, keep_existing=True)).execute()

        assert repo.mutations()[-1] == ('stop', 'foo-venerable')
        assert repo.apps == {'foo': 'started', 'foo-venerable': 'stopped'}

    def test_stale_venerable_deleted_before_rename(self, fake_repo):
        repo = fake_repo(['foo', 'foo-venerable'])
        Actions(actions=self.plan(repo, venerable_exists=True)).execute()

        mutations = repo.mutations()
        assert mutations.index(('delete', 'foo-venerable')) < mutations.index(('rename', 'foo', 'foo-venerable'))
        assert set(repo.apps) == {'foo'}

    def test_failed_push_restores_original_app(self, fake_repo):
        repo = fake_repo(['foo'])
        repo.fail_on[('push', 'foo')] = None
        actions = self.plan(repo)

        with pytest.raises(CfCommandError):
            Actions(actions=actions).execute()

        assert repo.mutations() == [
            ('rename', 'foo', 'foo-venerable'),
            ('push', 'foo'),
            ('delete', 'foo'),
            ('rename', 'foo-venerable', 'foo'),
        ]
        assert set(repo.apps) == {'foo'}
        assert repo.builds['foo'] == 'foo-build'

    def test_half_started_push_is_cleared_before_restore(self, fake_repo):
        repo = fake_repo(['foo'])
        actions = self.plan(repo)

        def push_then_crash():
            repo.push_application('foo', 'manifest.yml')
            raise CfCommandError("app failed to start")

        actions[2].forward = push_then_crash

        with pytest.raises(CfCommandError, match="failed to start"):
            Actions(actions=actions).execute()

        assert set(repo.apps) == {'foo'}
        assert repo.builds['foo'] == 'foo-build'

    def test_failed_restore_rename_is_reported(self, fake_repo):
        repo = fake_repo(['foo'])
        repo.fail_on[('push', 'foo')] = None
        repo.fail_on[('rename', 'foo-venerable', 'foo')] = None

        with pytest.raises(RewindError) as exc_info:
            Actions(actions=self.plan(repo), rewind_failure_message="inspect manually").execute()

        assert "inspect manually" in str(exc_info.value)
        assert "cf push foo failed" in str(exc_info.value)

    def test_failed_retire_unwinds_to_original_app(self, fake_repo):
        repo = fake_repo(['foo'])
        repo.fail_on[('delete', 'foo-venerable')] = None

        with pytest.raises(CfCommandError):
            Actions(actions=self.plan(repo)).execute()

        assert repo.mutations()[-2:] == [
            ('delete', 'foo'),
            ('rename', 'foo-venerable', 'foo'),
        ]
        assert set(repo.apps) == {'foo'}
        assert repo.builds['foo'] == 'foo-build'

    def test_existing_app_actions_direct(self, fake_repo):
        repo = fake_repo(['foo'])
        actions = existing_app_actions(
            repo, 'foo', 'm.yml', '', AutopilotOptions(), AppState(live_exists=True)
        )
        assert [a.reverse_previous is not None for a in actions] == [False, False, True, False]


class TestRollbackPreconditions:

    def test_missing_live_app(self):
        with pytest.raises(PreconditionError, match='Live version of app "foo" not found'):
            check_rollback_preconditions('foo', AppState(live_exists=False, venerable_exists=True))

    def test_missing_venerable_app(self):
        with pytest.raises(PreconditionError, match='--keep-existing-app'):
            check_rollback_preconditions('foo', AppState(live_exists=True, venerable_exists=False))

    def test_both_present(self):
        check_rollback_preconditions('foo', AppState(live_exists=True, venerable_exists=True))


class TestRollback:

    def make_repo(self, fake_repo):
        repo = fake_repo(['foo', 'foo-venerable'])
        repo.builds['foo'] = 'v2'
        repo.builds['foo-venerable'] = 'v1'
        return repo

    def test_swaps_versions_and_removes_rollback_app(self, fake_repo):
        repo = self.make_repo(fake_repo)
        actions = rollback_actions(repo, 'foo')

        assert len(actions) == 4
        Actions(actions=actions).execute()

        assert repo.mutations() == [
            ('rename', 'foo', 'foo-rollback'),
            ('rename', 'foo-venerable', 'foo'),
            ('start', 'foo'),
            ('delete', 'foo-rollback'),
        ]
        assert repo.apps == {'foo': 'started'}
        assert repo.builds['foo'] == 'v1'

    def test_failed_restore_rename_puts_live_back(self, fake_repo):
        repo = self.make_repo(fake_repo)
        repo.fail_on[('rename', 'foo-venerable', 'foo')] = None

        with pytest.raises(CfCommandError):
            Actions(actions=rollback_actions(repo, 'foo')).execute()

        assert repo.mutations()[-1] == ('rename', 'foo-rollback', 'foo')
        assert repo.builds == {'foo': 'v2', 'foo-venerable': 'v1'}

    def test_failed_start_restores_both_names(self, fake_repo):
        repo = self.make_repo(fake_repo)
        repo.fail_on[('start', 'foo')] = None

        with pytest.raises(CfCommandError):
            Actions(actions=rollback_actions(repo, 'foo')).execute()

        assert repo.mutations()[-2:] == [
            ('rename', 'foo', 'foo-venerable'),
            ('rename', 'foo-rollback', 'foo'),
        ]
        assert repo.builds == {'foo': 'v2', 'foo-venerable': 'v1'}
