#!/usr/bin/env python3
"""
Zero-downtime rollback plan.

The live app is parked as <app>-rollback while <app>-venerable takes the
live name back; the parked copy is deleted only once the restored app has
started.
"""

from ..rewind import Action
from .utils import venerable_app_name, rollback_app_name


class PreconditionError(RuntimeError):
    """The platform is not in a state the requested operation can start from."""


def check_rollback_preconditions(app_name, state):
    """Both the live and the venerable app must exist before anything is renamed."""
    if not state.live_exists:
        raise PreconditionError(f'Live version of app "{app_name}" not found, cannot rollback.')
    if not state.venerable_exists:
        raise PreconditionError(
            f'Venerable version of "{app_name}" not found, cannot rollback. Make sure you push with the '
            '--keep-existing-app flag to leave the venerable version behind.'
        )


def rollback_actions(repo, app_name):
    venerable = venerable_app_name(app_name)
    parked = rollback_app_name(app_name)

    return [
        Action(
            forward=lambda: repo.rename_application(app_name, parked),
            description=f"rename {app_name} -> {parked}",
        ),
        Action(
            forward=lambda: repo.rename_application(venerable, app_name),
            reverse_previous=lambda: repo.rename_application(parked, app_name),
            description=f"rename {venerable} -> {app_name}",
        ),
        Action(
            forward=lambda: repo.start_application(app_name),
            reverse_previous=lambda: repo.rename_application(app_name, venerable),
            description=f"start {app_name}",
        ),
        Action(
            forward=lambda: repo.delete_application(parked),
            description=f"delete {parked}",
        ),
    ]
