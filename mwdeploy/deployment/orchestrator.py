#!/usr/bin/env python3
"""
MediaWiki Deployment Orchestrator
Updates staging, syncs it into production and mirrors production to the other app servers
"""

import sys
import argparse

from .utils import load_config, get_short_hostname, print_phase, split_list
from .inventory import load_inventory
from .plan import StepOutcome, plan_deploy, run_step
from ..config.request import build_request
from ..config.validation import validate_request
from ..errors import DeployToolError, DeploymentFailed, StepError
from ..executors import get_executor


def execute_deploy(request, executor, hostname):
    """
    Run every planned step for request on hostname.

    With continue_on_error off the first StepError is re-raised and nothing
    after it runs. With it on, every step is attempted and DeploymentFailed
    is raised at the end if any of them failed.

    Returns:
        List of StepOutcome, one per step, when every step succeeded
    """
    outcomes = []

    for step in plan_deploy(request, hostname):
        print(f"{step.description}...")
        try:
            run_step(step, request, executor)
        except StepError as e:
            print(f"ERROR: {e}")
            outcomes.append(StepOutcome(step, False, e))
            if not request.continue_on_error:
                raise
            continue
        outcomes.append(StepOutcome(step, True))
        print(f"✓ {step.description}")

    failures = [outcome for outcome in outcomes if not outcome.succeeded]
    if failures:
        raise DeploymentFailed(failures)

    return outcomes


def request_from_args(args, inventory, roster):
    """Build the expanded DeployRequest from parsed CLI arguments."""
    return build_request(
        inventory, roster,
        extensions=split_list(args.upgrade_extensions),
        skins=split_list(args.upgrade_skins),
        dependency_update=args.upgrade_vendor,
        full_upgrade=args.upgrade_world,
        localization=args.l10n,
        languages=split_list(args.lang),
        servers=split_list(args.servers),
        bypass_timestamp_sync=args.ignore_time,
        continue_on_error=args.force,
    )


def _prepare(args):
    """Load config, scan inventory, build and validate the request."""
    config = load_config(args.config)
    hostname = get_short_hostname(config)
    inventory = load_inventory(config)
    request = request_from_args(args, inventory, config['servers'])
    validate_request(request, inventory)
    return config, hostname, request


def deploy_command(args):
    """Validate the request, then run the full local + remote sequence."""
    config, hostname, request = _prepare(args)

    mode = "DRY-RUN" if args.dry_run else None
    print_phase("DEPLOYMENT", mode)
    print(f"Host: {hostname}")
    print(f"Deploying to servers: {', '.join(request.servers)}")
    print(f"Sync mode: {request.rsync_mode}, continue on error: {'yes' if request.continue_on_error else 'no'}\n")

    executor = get_executor(config, dry_run=args.dry_run)
    execute_deploy(request, executor, hostname)

    print("=" * 60)
    print("Deploy completed successfully")
    print("=" * 60)


def validate_command(args):
    """Resolve and validate the request and print the plan without running it."""
    config, hostname, request = _prepare(args)

    print_phase("DEPLOY PLAN", hostname)
    steps = plan_deploy(request, hostname)
    if not steps:
        print("Nothing to do on this host.")
    for i, step in enumerate(steps, 1):
        print(f"[{i}/{len(steps)}] {step.description}")
    print()
    print("[OK] Request is valid")


def inventory_command(args):
    """List the extensions and skins that can be deployed."""
    config = load_config(args.config)
    inventory = load_inventory(config)

    print_phase("INVENTORY", config['deployment']['staging_path'])
    print(f"Extensions ({len(inventory.extensions)}):")
    for name in inventory.extensions:
        print(f"  - {name}")
    print(f"Skins ({len(inventory.skins)}):")
    for name in inventory.skins:
        print(f"  - {name}")
    print(f"Servers: {', '.join(config['servers'])}")


def report_error(error):
    print(f"ERROR: {error}", file=sys.stderr)
    if isinstance(error, DeploymentFailed):
        for outcome in error.failures:
            print(f"  - {outcome.step.description}: {outcome.error}", file=sys.stderr)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='mwdeploy',
        description='MediaWiki Deployment Orchestrator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Update two extensions and push them everywhere
  mwdeploy deploy --upgrade-extensions CheckUser,Echo --servers all

  # Update everything on this host only, carrying on past failures
  mwdeploy deploy --upgrade-world --servers mw1 --force

  # Rebuild the English and German l10n cache without deploying code
  mwdeploy deploy --l10n --lang en,de --servers mw1

  # Show what a deploy would do
  mwdeploy validate --upgrade-skins Vector --servers all
  mwdeploy deploy --upgrade-vendor --servers all --dry-run

  # List deployable extensions and skins
  mwdeploy inventory
        """
    )
    parser.add_argument('command', choices=['deploy', 'validate', 'inventory'], help='Deployment command')
    parser.add_argument('--config', help='Deploy config file (default: $MWDEPLOY_CONFIG or the packaged deploy-config.yaml)')
    parser.add_argument('--upgrade-extensions', default='', help='Comma separated extensions to upgrade')
    parser.add_argument('--upgrade-skins', default='', help='Comma separated skins to upgrade')
    parser.add_argument('--upgrade-vendor', action='store_true', help='Update vendor directory (Composer dependencies)')
    parser.add_argument('--upgrade-world', action='store_true', help='Update everything (vendor, all extensions, all skins, l10n)')
    parser.add_argument('--l10n', action='store_true', help='Rebuild localization cache')
    parser.add_argument('--lang', default='', help='Specific languages for l10n (comma-separated)')
    parser.add_argument('--servers', default='', help="Target servers (comma-separated, or 'all')")
    parser.add_argument('--ignore-time', action='store_true', help='Use --inplace instead of --update for rsync')
    parser.add_argument('--force', action='store_true', help='Continue deployment past failing steps')
    parser.add_argument('--dry-run', action='store_true', help='Print commands instead of running them')
    return parser


def main(argv=None):
    """Main entry point - parse command line and run deployment."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'deploy':
            deploy_command(args)
        elif args.command == 'validate':
            validate_command(args)
        elif args.command == 'inventory':
            inventory_command(args)
    except DeployToolError as e:
        report_error(e)
        sys.exit(1)


if __name__ == '__main__':
    main()
