#!/usr/bin/env python3
"""
Local executor for cf operations (runs the cf binary on this machine).
"""

import os
import subprocess
from pathlib import Path

from .base import BaseExecutor, CfCommandError


class LocalExecutor(BaseExecutor):
    """Runs cf through subprocess on the local machine."""

    def __init__(self, cf_config=None):
        cf_config = cf_config or {}
        self.binary = cf_config.get('binary') or 'cf'
        self.home = cf_config.get('home')

    def _env(self):
        env = os.environ.copy()
        if self.home:
            env['CF_HOME'] = str(self.home)
        return env

    def _run(self, args, capture):
        cmd = [self.binary, *args]
        try:
            result = subprocess.run(cmd, env=self._env(), capture_output=capture, text=True)
        except FileNotFoundError:
            raise CfCommandError(f"cf binary not found: {self.binary}")

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or '').strip() if capture else ''
            raise CfCommandError(
                f"cf {' '.join(args)} failed (exit {result.returncode})" + (f": {detail}" if detail else "")
            )
        return result.stdout

    def cf(self, *args):
        self._run(args, capture=False)

    def cf_quiet(self, *args):
        return self._run(args, capture=True)

    def read_cf_config(self):
        cf_home = Path(self._env().get('CF_HOME') or Path.home())
        config_path = cf_home / '.cf' / 'config.json'
        if not config_path.exists():
            raise CfCommandError(f"cf config not found: {config_path}. Run 'cf login' first.")
        with open(config_path, 'r') as f:
            return f.read()
