#!/usr/bin/env python3
"""
Zero-downtime push plans.

New apps are pushed straight under their real name. Existing apps are
renamed to <app>-venerable, the new build is pushed as <app>, and only then
is the venerable copy stopped or deleted.
"""

from ..rewind import Action
from .utils import venerable_app_name


def new_app_actions(repo, app_name, manifest_path, app_path=''):
    """Nothing exists yet, so a failed push leaves nothing to undo."""
    return [
        Action(
            forward=lambda: repo.push_application(app_name, manifest_path, app_path),
            description=f"push {app_name}",
        ),
    ]


def existing_app_actions(repo, app_name, manifest_path, app_path, options, state):
    """
    Build the four-step replace plan.

    Args:
        repo: ApplicationRepo
        app_name: live app name
        manifest_path: manifest for the new build
        app_path: optional path to the app bits ('' to use the manifest's)
        options: AutopilotOptions
        state: AppState snapshot taken before planning
    """
    venerable = venerable_app_name(app_name)

    def delete_stale_venerable():
        if state.venerable_exists:
            print("Found old version of app running, deleting.")
            repo.delete_application(venerable)

    def restore_live():
        # A failed push can leave a half-started app holding the live name
        try:
            repo.delete_application(app_name)
        except Exception as e:
            print(f"Could not delete failed push of {app_name}: {e}")
        repo.rename_application(venerable, app_name)

    def retire_venerable():
        if options.keep_existing:
            print("Stopping old version of app. Remove the --keep-existing-app flag to delete it automatically.")
            repo.stop_application(venerable)
        else:
            print("Deleting old version of app. Use the --keep-existing-app flag to preserve it.")
            repo.delete_application(venerable)

    return [
        Action(
            forward=delete_stale_venerable,
            description=f"delete {venerable}" if state.venerable_exists else f"check for stale {venerable}",
        ),
        Action(
            forward=lambda: repo.rename_application(app_name, venerable),
            description=f"rename {app_name} -> {venerable}",
        ),
        Action(
            forward=lambda: repo.push_application(app_name, manifest_path, app_path),
            reverse_previous=restore_live,
            description=f"push {app_name}",
        ),
        Action(
            forward=retire_venerable,
            description=f"{'stop' if options.keep_existing else 'delete'} {venerable}",
        ),
    ]


def push_actions(repo, app_name, manifest_path, app_path, options, state):
    if state.live_exists:
        return existing_app_actions(repo, app_name, manifest_path, app_path, options, state)
    return new_app_actions(repo, app_name, manifest_path, app_path)
