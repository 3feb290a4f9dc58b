"""Subprocess, dry-run and ssh helpers for deploy steps."""

import subprocess
from unittest.mock import patch

import pytest

from mwdeploy.config.request import DeployRequest
from mwdeploy.errors import (
    DependencyUpdateFailed, ExtensionUpdateFailed, LocalSyncFailed,
    LocalizationRebuildFailed, RemoteSyncFailed, SkinUpdateFailed
)
from mwdeploy.executors import DryRunExecutor, LocalExecutor, get_executor
from mwdeploy.executors.ssh import build_remote_shell, remote_destination


@pytest.fixture
def run():
    with patch('mwdeploy.executors.local.subprocess.run') as mock_run:
        yield mock_run


def commands(mock_run):
    return [c.args[0] for c in mock_run.call_args_list]


class TestLocalExecutor:

    def test_update_dependencies(self, config, run):
        staging = config['deployment']['staging_path']

        LocalExecutor(config).update_dependencies()

        assert commands(run) == [
            ['git', '-C', f'{staging}/vendor', 'reset', '--hard'],
            ['git', '-C', f'{staging}/vendor', 'pull', '--recurse-submodules', 'origin', 'REL1_43', '--quiet'],
            ['composer', 'update', '--no-dev', '--quiet'],
        ]
        assert run.call_args_list[2].kwargs['cwd'] == staging
        assert run.call_args_list[0].kwargs['check'] is True

    def test_dependency_pull_failure(self, config, run):
        run.side_effect = [None, subprocess.CalledProcessError(1, 'git')]

        with pytest.raises(DependencyUpdateFailed, match="failed to pull vendor"):
            LocalExecutor(config).update_dependencies()

        assert run.call_count == 2

    def test_update_extension_is_recursive(self, config, run):
        staging = config['deployment']['staging_path']

        LocalExecutor(config).update_extension('Echo')

        assert commands(run) == [
            ['git', '-C', f'{staging}/extensions/Echo', 'pull', '--recurse-submodules', '--quiet']
        ]

    def test_update_skin_is_not_recursive(self, config, run):
        staging = config['deployment']['staging_path']

        LocalExecutor(config).update_skin('Vector')

        assert commands(run) == [['git', '-C', f'{staging}/skins/Vector', 'pull', '--quiet']]

    def test_extension_failure_names_extension(self, config, run):
        run.side_effect = subprocess.CalledProcessError(128, 'git')

        with pytest.raises(ExtensionUpdateFailed, match="Echo.*exit status 128"):
            LocalExecutor(config).update_extension('Echo')

    def test_missing_binary_is_step_failure(self, config, run):
        run.side_effect = FileNotFoundError(2, 'No such file or directory')

        with pytest.raises(SkinUpdateFailed, match="No such file"):
            LocalExecutor(config).update_skin('Vector')

    def test_timeout_is_step_failure(self, config, run):
        config['deployment']['command_timeout'] = 5
        run.side_effect = subprocess.TimeoutExpired('git', 5)

        with pytest.raises(ExtensionUpdateFailed, match="timed out"):
            LocalExecutor(config).update_extension('Echo')

        assert run.call_args.kwargs['timeout'] == 5

    def test_sync_local_scope(self, config, run):
        staging = config['deployment']['staging_path']
        prod = config['deployment']['production_path']
        request = DeployRequest(dependency_update=True, extensions=('Echo',), skins=('Vector',))

        LocalExecutor(config).sync_local(request)

        assert commands(run) == [
            ['rsync', '--update', '-r', '--delete', '--exclude=.*', f'{staging}/vendor/', f'{prod}/vendor/'],
            ['rsync', '--update', '-r', '--delete', '--exclude=.*',
             f'{staging}/extensions/Echo/', f'{prod}/extensions/Echo/'],
            ['rsync', '--update', '-r', '--delete', '--exclude=.*',
             f'{staging}/skins/Vector/', f'{prod}/skins/Vector/'],
        ]

    def test_sync_local_inplace(self, config, run):
        request = DeployRequest(extensions=('Echo',), bypass_timestamp_sync=True)

        LocalExecutor(config).sync_local(request)

        assert commands(run)[0][1] == '--inplace'

    def test_sync_local_stops_at_first_failure(self, config, run):
        run.side_effect = subprocess.CalledProcessError(23, 'rsync')
        request = DeployRequest(extensions=('Echo', 'CheckUser'))

        with pytest.raises(LocalSyncFailed, match="extensions/Echo"):
            LocalExecutor(config).sync_local(request)

        assert run.call_count == 1

    def test_rebuild_localization(self, config, run):
        prod = config['deployment']['production_path']

        LocalExecutor(config).rebuild_localization(('en', 'de'))

        assert commands(run) == [
            ['php', f'{prod}/extensions/TelepediaMagic/maintenance/mergeMessageFileList.php',
             '--quiet', '--wiki=metawiki',
             f'--extensions-dir={prod}/extensions:{prod}/skins',
             '--output', f'{prod}/config/ExtensionMessageFiles.php'],
            ['php', f'{prod}/maintenance/rebuildLocalisationCache.php', '--quiet', '--wiki=metawiki',
             '--lang=en,de'],
        ]

    def test_rebuild_localization_all_languages(self, config, run):
        LocalExecutor(config).rebuild_localization()

        assert not any(arg.startswith('--lang') for arg in commands(run)[1])

    def test_merge_failure_skips_rebuild(self, config, run):
        run.side_effect = subprocess.CalledProcessError(255, 'php')

        with pytest.raises(LocalizationRebuildFailed, match="merge message files"):
            LocalExecutor(config).rebuild_localization()

        assert run.call_count == 1

    def test_sync_remote(self, config, run):
        prod = config['deployment']['production_path']

        LocalExecutor(config).sync_remote('mw2', DeployRequest())

        assert commands(run) == [[
            'rsync', '--update', '-e', 'ssh -i /keys/deploykey',
            '-r', '--delete', '--exclude=.*',
            f'{prod}/', f'mediawikiuser@mw2:{prod}/',
        ]]

    def test_sync_remote_failure(self, config, run):
        run.side_effect = subprocess.CalledProcessError(12, 'rsync')

        with pytest.raises(RemoteSyncFailed) as exc:
            LocalExecutor(config).sync_remote('mwtask1', DeployRequest(bypass_timestamp_sync=True))

        assert exc.value.server == 'mwtask1'
        assert commands(run)[0][1] == '--inplace'


class TestDryRunExecutor:

    def test_prints_instead_of_running(self, config, run, capsys):
        executor = DryRunExecutor(config)

        executor.update_skin('Vector')

        run.assert_not_called()
        assert executor.commands[0][0][-2:] == ['pull', '--quiet']
        assert "[DRY-RUN] git -C" in capsys.readouterr().out

    def test_factory(self, config):
        assert isinstance(get_executor(config), LocalExecutor)
        assert not isinstance(get_executor(config), DryRunExecutor)
        assert isinstance(get_executor(config, dry_run=True), DryRunExecutor)


class TestSsh:

    def test_remote_shell_with_port(self):
        assert build_remote_shell({'ssh_key': '/k', 'ssh_port': 2222}) == 'ssh -i /k -p 2222'

    def test_remote_shell_quotes_key_path(self):
        assert build_remote_shell({'ssh_key': '/my keys/k'}) == "ssh -i '/my keys/k'"

    def test_missing_key(self):
        with pytest.raises(ValueError):
            build_remote_shell({})

    def test_destination(self):
        assert remote_destination({'deploy_user': 'mw'}, 'mw2', '/prod/mediawiki/') == 'mw@mw2:/prod/mediawiki/'
