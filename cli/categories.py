#!/usr/bin/env python3

import sys
from cli.common import open_session
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the categories of the current workspace."""
    session = open_session(services)
    categories = services.categories.find_all(session.workspace.id, args.type)

    if not categories:
        logger.info("No categories found.")
        logger.info(
            "Use 'python -m cli categories seed' to create the default categories."
        )
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name}")
        logger.info(f"Type: {category.type}")
        logger.info(f"Icon: {category.icon} ({category.color})")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category in the current workspace."""
    session = open_session(services)
    try:
        category = services.categories.create(
            session.workspace.id,
            services.config.user_id,
            args.name,
            args.type,
            icon=args.icon,
            color=args.color,
        )
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Type: {category.type}")


def cmd_delete(args, services):
    """Delete a category by ID."""
    session = open_session(services)
    workspace_id = session.workspace.id

    category = services.categories.find(workspace_id, args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Type: {category.type}")

    confirm = (
        input("\nAre you sure you want to delete this category? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    try:
        if services.categories.delete(workspace_id, category.id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def cmd_seed(args, services):
    """Create the default categories if the workspace has none."""
    session = open_session(services)
    created = services.categories.ensure_defaults(
        session.workspace.id, services.config.user_id
    )
    if created:
        logger.info(f"✓ Created {created} default categories")
    else:
        logger.info("Workspace already has categories; nothing seeded.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list and delete income and expense categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List categories")
    list_parser.add_argument(
        "--type", choices=["income", "expense"], default=None, help="Filter by type"
    )
    list_parser.set_defaults(func=cmd_list)

    create_parser = categories_subparsers.add_parser(
        "create", help="Create a category"
    )
    create_parser.add_argument("name", help="Category name, e.g. Groceries")
    create_parser.add_argument(
        "--type", choices=["income", "expense"], default="expense", help="Category type"
    )
    create_parser.add_argument("--icon", default="pricetag-outline", help="Icon name")
    create_parser.add_argument("--color", default="#95a5a6", help="Hex color")
    create_parser.set_defaults(func=cmd_create)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories in an empty workspace"
    )
    seed_parser.set_defaults(func=cmd_seed)
