#!/usr/bin/env python3
"""
SSH helpers for pushing the production tree to remote servers.
Builds the rsync remote-shell option and user@host destinations.
"""

import shlex


def build_remote_shell(deploy_config):
    """Return the ssh command rsync should use, authenticated by the deploy key."""
    ssh_key = deploy_config.get('ssh_key')
    if not ssh_key:
        raise ValueError("ERROR: Missing deployment.ssh_key in deploy config")

    ssh_cmd = ['ssh', '-i', ssh_key]
    ssh_port = deploy_config.get('ssh_port')
    if ssh_port:
        ssh_cmd += ['-p', str(ssh_port)]
    return ' '.join(shlex.quote(part) for part in ssh_cmd)


def remote_destination(deploy_config, server, path):
    """user@server:path/ for rsync."""
    deploy_user = deploy_config.get('deploy_user')
    if not deploy_user:
        raise ValueError("ERROR: Missing deployment.deploy_user in deploy config")
    return f"{deploy_user}@{server}:{path.rstrip('/')}/"
