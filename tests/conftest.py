"""Shared fixtures: a fake staging tree, configs and a recording executor."""

import pytest
import yaml

from mwdeploy.deployment.inventory import Inventory
from mwdeploy.errors import (
    DependencyUpdateFailed, ExtensionUpdateFailed, LocalSyncFailed,
    LocalizationRebuildFailed, RemoteSyncFailed, SkinUpdateFailed
)
from mwdeploy.executors import BaseExecutor


class RecordingExecutor(BaseExecutor):
    """Records every call; fails the calls listed in fail_on."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def _record(self, key, error):
        self.calls.append(key)
        if key in self.fail_on:
            raise error

    def update_dependencies(self):
        self._record(('dependencies', None), DependencyUpdateFailed("vendor broke"))

    def update_extension(self, name):
        self._record(('extension', name), ExtensionUpdateFailed(name, "pull failed"))

    def update_skin(self, name):
        self._record(('skin', name), SkinUpdateFailed(name, "pull failed"))

    def sync_local(self, request):
        self.last_local_request = request
        self._record(('local-sync', None), LocalSyncFailed("rsync failed"))

    def rebuild_localization(self, languages=()):
        self.last_languages = tuple(languages)
        self._record(('localization', None), LocalizationRebuildFailed("php failed"))

    def sync_remote(self, server, request):
        self._record(('remote-sync', server), RemoteSyncFailed(server, "rsync failed"))


@pytest.fixture
def recorder():
    return RecordingExecutor


@pytest.fixture
def inventory():
    return Inventory(extensions=('CheckUser', 'Echo', 'Foo'), skins=('Timeless', 'Vector'))


@pytest.fixture
def staging(tmp_path):
    root = tmp_path / "staging"
    for name in ('Echo', 'CheckUser'):
        (root / "extensions" / name / ".git").mkdir(parents=True)
    (root / "extensions" / "NotARepo").mkdir()
    (root / "extensions" / "README").write_text("not a directory")
    (root / "skins" / "Vector" / ".git").mkdir(parents=True)
    # submodule-style checkout: .git is a file
    (root / "skins" / "Timeless").mkdir()
    (root / "skins" / "Timeless" / ".git").write_text("gitdir: ../../.git/modules/Timeless")
    (root / "skins" / "Plain").mkdir()
    return root


@pytest.fixture
def config(tmp_path, staging):
    return {
        'servers': ['mw1', 'mw2', 'mwtask1'],
        'deployment': {
            'staging_path': str(staging),
            'production_path': str(tmp_path / "prod"),
            'deploy_user': 'mediawikiuser',
            'ssh_key': '/keys/deploykey',
            'vendor_branch': 'REL1_43',
            'command_timeout': None,
            'hostname': 'mw1',
        },
        'localization': {
            'wiki': 'metawiki',
            'merge_script': 'extensions/TelepediaMagic/maintenance/mergeMessageFileList.php',
            'rebuild_script': 'maintenance/rebuildLocalisationCache.php',
            'message_file_list': 'config/ExtensionMessageFiles.php',
        },
    }


@pytest.fixture
def config_file(tmp_path, config):
    path = tmp_path / "deploy-config.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv('MWDEPLOY_CONFIG', raising=False)
    monkeypatch.delenv('DEPLOYMENT_ENV', raising=False)
