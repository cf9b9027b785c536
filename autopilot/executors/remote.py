#!/usr/bin/env python3
"""
Remote executor for cf operations on a jump host.
"""

import os
import shlex
from pathlib import Path

from .base import BaseExecutor, CfCommandError
from .ssh import RemoteExecutor


class RemoteCfExecutor(BaseExecutor):
    """
    Runs cf on a remote jump host over SSH.

    Used where the platform API is only reachable from inside the
    network; the jump host must already be logged in and targeted.
    """

    def __init__(self, ssh_config, cf_config=None, ssh_executor=None):
        """
        Args:
            ssh_config: ssh section of the config (ssh_host, ssh_port, ssh_env_vars)
            cf_config: cf section of the config (binary, home)
            ssh_executor: RemoteExecutor instance (optional, creates new if None)
        """
        cf_config = cf_config or {}
        self.ssh_config = ssh_config
        self.binary = cf_config.get('binary') or 'cf'
        self.home = cf_config.get('home')
        self.ssh = ssh_executor if ssh_executor else RemoteExecutor()
        self._workspace = None

    def _get_remote_workspace(self):
        """Generate remote workspace directory path."""
        pipeline_id = os.environ.get('CI_PIPELINE_ID', 'local')
        return f"/tmp/cf-autopilot-{pipeline_id}-{os.getpid()}"

    def stage_files(self, *paths):
        """Upload manifest and app bits into a remote workspace and return the remote paths."""
        if not any(paths):
            return list(paths)

        workspace = self._get_remote_workspace()
        slots = [f"{workspace}/{index}" for index, path in enumerate(paths) if path]
        self.ssh.ssh_exec_check(self.ssh_config, 'mkdir -p ' + ' '.join(shlex.quote(s) for s in slots))
        self._workspace = workspace

        staged = []
        for index, path in enumerate(paths):
            if not path:
                staged.append(path)
                continue
            remote_path = f"{workspace}/{index}/{Path(path).resolve().name}"
            print(f"Uploading {path} to {self.ssh_config['ssh_host']}:{remote_path}")
            self.ssh.scp_upload(self.ssh_config, str(path), remote_path)
            staged.append(remote_path)
        return staged

    def cleanup_staged_files(self):
        if self._workspace:
            self.ssh.ssh_exec(self.ssh_config, f"rm -rf {shlex.quote(self._workspace)}")
            self._workspace = None

    def _remote_command(self, args):
        command = ' '.join(shlex.quote(str(a)) for a in (self.binary, *args))
        if self.home:
            command = f"CF_HOME={shlex.quote(str(self.home))} {command}"
        return command

    def _execute(self, args):
        stdout, stderr, returncode = self.ssh.ssh_exec(self.ssh_config, self._remote_command(args))
        if returncode != 0:
            raise CfCommandError(
                f"cf {' '.join(args)} failed on {self.ssh_config['ssh_host']} (exit {returncode}): {stderr.strip()}"
            )
        return stdout

    def cf(self, *args):
        stdout = self._execute(args)
        if stdout:
            print(stdout, end='' if stdout.endswith('\n') else '\n')

    def cf_quiet(self, *args):
        return self._execute(args)

    def read_cf_config(self):
        home = shlex.quote(str(self.home)) if self.home else '"$HOME"'
        return self.ssh.ssh_exec_check(self.ssh_config, f"cat {home}/.cf/config.json")
