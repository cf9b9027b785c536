#!/usr/bin/env python3
"""
cf Autopilot Orchestrator
Zero-downtime push and rollback of Cloud Foundry applications
"""

import sys
import argparse
from enum import Enum

from .. import __version__
from ..config.validation import ConfigurationError, validate_manifest, require_valid
from ..executors import get_executor
from ..rewind import Actions, DEFAULT_REWIND_FAILURE_MESSAGE
from .app_repo import ApplicationRepo
from .push import push_actions
from .rollback import check_rollback_preconditions, rollback_actions
from .utils import AppState, AutopilotOptions, load_config, venerable_app_name


NO_MANIFEST_MESSAGE = "a manifest is required to push this application"


class Scenario(Enum):
    PUSH = 'zero-downtime-push'
    ROLLBACK = 'zero-downtime-rollback'


SUCCESS_MESSAGES = {
    Scenario.PUSH: "A new version of your application has successfully been pushed!",
    Scenario.ROLLBACK: "Your application has been successfully rolled back!",
}


def _print_phase(phase_name, app_name=None):
    """Helper to print phase headers."""
    print(f"\n{'='*60}")
    if app_name:
        print(f"{phase_name} ({app_name})")
    else:
        print(phase_name)
    print(f"{'='*60}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog='cf-autopilot',
        description='Zero-downtime push and rollback for Cloud Foundry applications',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replace a running app without downtime
  cf-autopilot zero-downtime-push myapp -f manifest.yml -p build/app.jar

  # Keep the previous version (stopped) so it can be rolled back to
  cf-autopilot zero-downtime-push myapp -f manifest.yml --keep-existing-app

  # Swap back to the previous version
  cf-autopilot zero-downtime-rollback myapp
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    push_parser = subparsers.add_parser(
        Scenario.PUSH.value,
        help='Perform a zero-downtime push of an application over the top of an old one'
    )
    push_parser.add_argument('app_name', help='Application to replace')
    push_parser.add_argument('-f', dest='manifest',
                             help='path to an application manifest (must declare applications or inherit)')
    push_parser.add_argument('-p', dest='app_path', default='', help='path to application files')
    push_parser.add_argument('--keep-existing-app', dest='keep_existing', action='store_true',
                             help='keep existing app (stopped) instead of deleting it')
    push_parser.add_argument('--config', help='autopilot config file')

    rollback_parser = subparsers.add_parser(
        Scenario.ROLLBACK.value,
        help="Perform a zero-downtime rollback to the previous version of the application. "
             "Requires that the previous, 'venerable' version of the app still exists. "
             "Use the --keep-existing-app flag when performing a zero-downtime-push to ensure this."
    )
    rollback_parser.add_argument('app_name', help='Application to revert')
    rollback_parser.add_argument('--config', help='autopilot config file')

    return parser


def build_repo(config):
    executor = get_executor(config)
    return ApplicationRepo(executor, space_guid=config.get('cf', {}).get('space_guid'))


def plan_push(repo, args):
    """Validate push arguments, snapshot the platform and build the push plan."""
    if not args.manifest:
        raise ConfigurationError(NO_MANIFEST_MESSAGE)

    is_valid, errors = validate_manifest(args.manifest)
    require_valid(is_valid, errors, f"Manifest {args.manifest}")

    live_exists = repo.does_app_exist(args.app_name)
    venerable_exists = live_exists and repo.does_app_exist(venerable_app_name(args.app_name))
    state = AppState(live_exists=live_exists, venerable_exists=venerable_exists)

    options = AutopilotOptions(keep_existing=args.keep_existing)
    print(f"App: {args.app_name}, Existing: {'yes' if live_exists else 'no'}, Manifest: {args.manifest}")
    manifest_path, app_path = repo.stage_push_files(args.manifest, args.app_path)
    return push_actions(repo, args.app_name, manifest_path, app_path, options, state)


def plan_rollback(repo, args):
    """Check both versions exist, then build the rollback plan."""
    state = AppState(
        live_exists=repo.does_app_exist(args.app_name),
        venerable_exists=repo.does_app_exist(venerable_app_name(args.app_name)),
    )
    check_rollback_preconditions(args.app_name, state)
    return rollback_actions(repo, args.app_name)


PLANNERS = {
    Scenario.PUSH: plan_push,
    Scenario.ROLLBACK: plan_rollback,
}


def run(argv, repo=None, config=None):
    """
    Run one scenario end to end.

    Args:
        argv: command line arguments (without program name)
        repo: ApplicationRepo to use (built from config when None)
        config: loaded config dict (loaded from disk when None)

    Returns:
        Process exit code: 0 on success, non-zero on any error
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1

    scenario = Scenario(args.command)

    try:
        if config is None:
            config = load_config(args.config)
        if repo is None:
            repo = build_repo(config)

        _print_phase(scenario.value.upper(), args.app_name)
        action_list = PLANNERS[scenario](repo, args)

        actions = Actions(
            actions=action_list,
            rewind_failure_message=config.get('messages', {}).get('rewind_failure', DEFAULT_REWIND_FAILURE_MESSAGE),
        )
        print(f"Executing {len(actions)} steps...\n")
        actions.execute()

        print()
        print(f"✓ {SUCCESS_MESSAGES[scenario]}")
        print()

        repo.list_applications()
    except Exception as e:
        print(f"error: {e}")
        return 1
    finally:
        if repo is not None:
            repo.cleanup_staged_files()

    return 0


def main():
    """Main entry point - parse command line and run the scenario."""
    sys.exit(run(sys.argv[1:]))


if __name__ == '__main__':
    main()
