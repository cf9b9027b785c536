#!/usr/bin/env python3
"""
Executor factory and package exports.
"""

from .base import BaseExecutor, CfCommandError
from .local import LocalExecutor
from .remote import RemoteCfExecutor
from .ssh import RemoteExecutor
from ..config.validation import ConfigurationError


def is_remote_mode(config):
    """Check if cf commands should run on the ssh jump host."""
    return config.get('executor', 'local') == 'ssh'


def get_executor(config):
    """
    Factory function to create appropriate executor.

    Args:
        config: Autopilot configuration dict

    Returns:
        LocalExecutor or RemoteCfExecutor instance
    """
    mode = config.get('executor', 'local')
    cf_config = config.get('cf', {})

    if is_remote_mode(config):
        ssh_config = config.get('ssh') or {}
        if not ssh_config.get('ssh_host'):
            raise ConfigurationError("executor 'ssh' requires ssh.ssh_host")
        return RemoteCfExecutor(ssh_config, cf_config, RemoteExecutor())
    elif mode == 'local':
        return LocalExecutor(cf_config)
    else:
        raise ConfigurationError(f"Unknown executor: {mode} (must be 'local' or 'ssh')")


# Package exports
__all__ = [
    'BaseExecutor', 'CfCommandError', 'LocalExecutor', 'RemoteCfExecutor',
    'RemoteExecutor', 'get_executor', 'is_remote_mode'
]
