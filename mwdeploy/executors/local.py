#!/usr/bin/env python3
"""
Subprocess executor for deploy steps.

Runs git, composer, rsync and the MediaWiki maintenance scripts on this host.
Command output goes straight to the terminal.
"""

import subprocess
from pathlib import Path

from .base import BaseExecutor
from .ssh import build_remote_shell, remote_destination
from ..errors import (
    DependencyUpdateFailed, ExtensionUpdateFailed, LocalSyncFailed,
    LocalizationRebuildFailed, RemoteSyncFailed, SkinUpdateFailed
)


class CommandFailed(Exception):
    """An external command exited non-zero, could not start, or timed out."""

    def __init__(self, cmd, reason):
        self.cmd = cmd
        self.reason = reason
        super().__init__(f"{' '.join(cmd)}: {reason}")


class LocalExecutor(BaseExecutor):
    """Deploy step executor backed by subprocess."""

    def __init__(self, config):
        self.config = config
        self.deploy_config = config['deployment']
        self.l10n_config = config.get('localization', {})
        self.staging = Path(self.deploy_config['staging_path'])
        self.production = Path(self.deploy_config['production_path'])
        self.timeout = self.deploy_config.get('command_timeout')

    def run_command(self, cmd, cwd=None):
        """Run cmd, raising CommandFailed on any failure."""
        try:
            subprocess.run(cmd, cwd=cwd, check=True, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            raise CommandFailed(cmd, f"exit status {e.returncode}") from e
        except subprocess.TimeoutExpired as e:
            raise CommandFailed(cmd, f"timed out after {e.timeout}s") from e
        except OSError as e:
            raise CommandFailed(cmd, e.strerror or str(e)) from e

    def rsync_command(self, mode, src, dst, remote_shell=None):
        cmd = ['rsync', mode]
        if remote_shell:
            cmd += ['-e', remote_shell]
        return cmd + ['-r', '--delete', '--exclude=.*', src, dst]

    def update_dependencies(self):
        vendor_path = str(self.staging / "vendor")
        branch = self.deploy_config.get('vendor_branch', 'master')

        try:
            self.run_command(['git', '-C', vendor_path, 'reset', '--hard'])
        except CommandFailed as e:
            raise DependencyUpdateFailed(f"failed to reset vendor: {e}") from e

        try:
            self.run_command(['git', '-C', vendor_path, 'pull', '--recurse-submodules',
                              'origin', branch, '--quiet'])
        except CommandFailed as e:
            raise DependencyUpdateFailed(f"failed to pull vendor: {e}") from e

        try:
            self.run_command(['composer', 'update', '--no-dev', '--quiet'], cwd=str(self.staging))
        except CommandFailed as e:
            raise DependencyUpdateFailed(f"failed to run composer update: {e}") from e

    def update_extension(self, name):
        ext_path = str(self.staging / "extensions" / name)
        try:
            self.run_command(['git', '-C', ext_path, 'pull', '--recurse-submodules', '--quiet'])
        except CommandFailed as e:
            raise ExtensionUpdateFailed(name, e) from e

    def update_skin(self, name):
        skin_path = str(self.staging / "skins" / name)
        try:
            self.run_command(['git', '-C', skin_path, 'pull', '--quiet'])
        except CommandFailed as e:
            raise SkinUpdateFailed(name, e) from e

    def local_sync_pairs(self, request):
        """(source, destination) pairs for every subtree in scope, trailing slashes kept."""
        subtrees = []
        if request.dependency_update:
            subtrees.append("vendor")
        subtrees += [f"extensions/{ext}" for ext in request.extensions]
        subtrees += [f"skins/{skin}" for skin in request.skins]
        return [(f"{self.staging / sub}/", f"{self.production / sub}/") for sub in subtrees]

    def sync_local(self, request):
        for src, dst in self.local_sync_pairs(request):
            try:
                self.run_command(self.rsync_command(request.rsync_mode, src, dst))
            except CommandFailed as e:
                raise LocalSyncFailed(f"failed to sync {src} to {dst}: {e}") from e

    def localization_commands(self, languages=()):
        production = str(self.production)
        wiki = self.l10n_config.get('wiki', 'metawiki')
        merge_script = self.production / self.l10n_config['merge_script']
        rebuild_script = self.production / self.l10n_config['rebuild_script']
        message_file_list = self.production / self.l10n_config['message_file_list']

        merge_cmd = [
            'php', str(merge_script), '--quiet', f'--wiki={wiki}',
            f'--extensions-dir={production}/extensions:{production}/skins',
            '--output', str(message_file_list)
        ]
        rebuild_cmd = ['php', str(rebuild_script), '--quiet', f'--wiki={wiki}']
        if languages:
            rebuild_cmd.append(f"--lang={','.join(languages)}")
        return merge_cmd, rebuild_cmd

    def rebuild_localization(self, languages=()):
        merge_cmd, rebuild_cmd = self.localization_commands(languages)

        try:
            self.run_command(merge_cmd)
        except CommandFailed as e:
            raise LocalizationRebuildFailed(f"failed to merge message files: {e}") from e

        try:
            self.run_command(rebuild_cmd)
        except CommandFailed as e:
            raise LocalizationRebuildFailed(f"failed to rebuild l10n cache: {e}") from e

    def remote_sync_command(self, server, request):
        src = f"{self.production}/"
        dst = remote_destination(self.deploy_config, server, str(self.production))
        return self.rsync_command(request.rsync_mode, src, dst,
                                  remote_shell=build_remote_shell(self.deploy_config))

    def sync_remote(self, server, request):
        try:
            self.run_command(self.remote_sync_command(server, request))
        except CommandFailed as e:
            raise RemoteSyncFailed(server, e) from e
