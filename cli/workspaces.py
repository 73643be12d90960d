#!/usr/bin/env python3

import sys
from logger import get_logger
from session import LedgerSession

logger = get_logger()


def cmd_list(args, services):
    """List the workspaces of the current user."""
    workspaces = services.workspaces.find_for_user(services.config.user_id)

    if not workspaces:
        logger.info("No workspaces found.")
        return

    current_id = services.state.current_workspace_id()

    logger.info("\nWorkspaces:")
    logger.info("=" * 80)
    for workspace in workspaces:
        marker = " (current)" if workspace.id == current_id else ""
        logger.info(f"ID: {workspace.id}{marker}")
        logger.info(f"Name: {workspace.name}")
        logger.info(f"Currency: {workspace.currency}")
        logger.info("-" * 80)

    logger.info(f"\nTotal workspaces: {len(workspaces)}")


def cmd_create(args, services):
    """Create a workspace, seed its defaults and make it current."""
    session = LedgerSession(services, services.config.user_id)
    try:
        workspace = session.create_workspace(args.name, args.currency)
        created = session.ensure_defaults()
    except Exception as e:
        logger.error(f"Error creating workspace: {e}")
        sys.exit(1)
    finally:
        session.close()

    logger.info(f"✓ Workspace created successfully with ID: {workspace.id}")
    logger.info(f"  Name: {workspace.name}")
    logger.info(f"  Currency: {workspace.currency}")
    logger.info(f"  Seeded {created} default accounts and categories")


def cmd_switch(args, services):
    """Make another workspace the current one."""
    session = LedgerSession(services, services.config.user_id)
    try:
        workspace = session.switch_workspace(args.workspace_id)
    except ValueError as e:
        logger.error(str(e))
        logger.info("Use 'python -m cli workspaces list' to see available workspaces.")
        sys.exit(1)
    finally:
        session.close()

    logger.info(f"✓ Switched to workspace '{workspace.name}'")


def cmd_sign_out(args, services):
    """Forget the selected workspace and onboarding state."""
    session = LedgerSession(services, services.config.user_id)
    session.sign_out()
    logger.info("✓ Signed out")


def setup_parser(subparsers):
    """Setup workspaces subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "workspaces",
        help="Manage workspaces",
        description="Create, list and switch workspaces",
    )

    workspaces_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available workspace commands",
        dest="subcommand",
        required=True,
    )

    list_parser = workspaces_subparsers.add_parser("list", help="List workspaces")
    list_parser.set_defaults(func=cmd_list)

    create_parser = workspaces_subparsers.add_parser(
        "create", help="Create a workspace and make it current"
    )
    create_parser.add_argument("name", help="Workspace name")
    create_parser.add_argument(
        "--currency", default=None, help="Currency code (default from config)"
    )
    create_parser.set_defaults(func=cmd_create)

    switch_parser = workspaces_subparsers.add_parser(
        "switch", help="Switch the current workspace"
    )
    switch_parser.add_argument("workspace_id", help="ID of the workspace")
    switch_parser.set_defaults(func=cmd_switch)

    sign_out_parser = workspaces_subparsers.add_parser(
        "sign-out", help="Clear the locally saved workspace and onboarding state"
    )
    sign_out_parser.set_defaults(func=cmd_sign_out)
