#!/usr/bin/env python3
"""
SSH helpers for running commands on a cf jump host.
Thin wrappers around sshpass + ssh.
"""

import os
import subprocess
from pathlib import Path

from .base import CfCommandError


class RemoteExecutor:
    """SSH command runner using sshpass."""

    def _get_credentials(self, ssh_config):
        """Returns (username, password) read from the env vars named in ssh_env_vars."""
        ssh_vars = ssh_config.get('ssh_env_vars', {})
        username_env = ssh_vars.get('username')
        password_env = ssh_vars.get('password')

        if not username_env or not password_env:
            raise CfCommandError(
                "Missing ssh_env_vars in ssh config.\n"
                "Add to autopilot-config.yaml: ssh_env_vars: {username: 'ENV_VAR', password: 'ENV_VAR'}"
            )

        username = os.environ.get(username_env)
        password = os.environ.get(password_env)

        if not username or not password:
            raise CfCommandError(f"SSH credentials not found: {username_env} and {password_env} required")

        return username, password

    def build_ssh_cmd(self, ssh_config, remote_command):
        """Build the sshpass + ssh argument list for one remote command."""
        ssh_user, _ = self._get_credentials(ssh_config)
        return [
            'sshpass', '-e',
            'ssh',
            '-o', 'StrictHostKeyChecking=no',
            '-o', 'UserKnownHostsFile=/dev/null',
            '-p', str(ssh_config.get('ssh_port', 22)),
            f"{ssh_user}@{ssh_config['ssh_host']}",
            remote_command
        ]

    def ssh_exec(self, ssh_config, command):
        """Execute command on remote host. Returns (stdout, stderr, returncode)."""
        _, ssh_password = self._get_credentials(ssh_config)
        env = os.environ.copy()
        env['SSHPASS'] = ssh_password

        result = subprocess.run(
            self.build_ssh_cmd(ssh_config, command), env=env, capture_output=True, text=True
        )
        return result.stdout, result.stderr, result.returncode

    def ssh_exec_check(self, ssh_config, command):
        """Execute command and raise if it fails."""
        stdout, stderr, returncode = self.ssh_exec(ssh_config, command)

        if returncode != 0:
            raise CfCommandError(f"SSH command failed (exit {returncode}): {stderr.strip()}")

        return stdout

    def scp_upload(self, ssh_config, local_path, remote_path):
        """Upload a file or directory to the remote host via SCP."""
        ssh_user, ssh_password = self._get_credentials(ssh_config)
        env = os.environ.copy()
        env['SSHPASS'] = ssh_password

        scp_cmd = [
            'sshpass', '-e',
            'scp',
            '-o', 'StrictHostKeyChecking=no',
            '-o', 'UserKnownHostsFile=/dev/null',
            '-P', str(ssh_config.get('ssh_port', 22)),
        ]
        if Path(local_path).is_dir():
            scp_cmd.append('-r')
        scp_cmd.extend([str(local_path), f"{ssh_user}@{ssh_config['ssh_host']}:{remote_path}"])

        result = subprocess.run(scp_cmd, env=env, capture_output=True, text=True)
        if result.returncode != 0:
            raise CfCommandError(f"SCP upload failed (exit {result.returncode}): {result.stderr.strip()}")

        return result.stdout
