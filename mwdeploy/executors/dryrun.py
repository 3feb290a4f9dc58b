#!/usr/bin/env python3
"""
Dry-run executor: prints the commands a deploy would run.
"""

import shlex

from .local import LocalExecutor


class DryRunExecutor(LocalExecutor):
    """LocalExecutor that records and prints commands instead of running them."""

    def __init__(self, config):
        super().__init__(config)
        self.commands = []

    def run_command(self, cmd, cwd=None):
        self.commands.append((cmd, cwd))
        where = f" (in {cwd})" if cwd else ""
        print(f"[DRY-RUN] {' '.join(shlex.quote(part) for part in cmd)}{where}")
