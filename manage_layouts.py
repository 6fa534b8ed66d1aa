#!/usr/bin/env python3
"""Manage shop page layouts from the command line.

Usage:
    python manage_layouts.py provision OWNER "Shop Name"    # new shop with default pages
    python manage_layouts.py seed                           # demo shop for owner "demo"
    python manage_layouts.py show OWNER [CATEGORY]          # print page(s) as JSON
    python manage_layouts.py replace OWNER CATEGORY FILE    # replace a layout from a JSON file
    python manage_layouts.py reset OWNER CATEGORY           # restore the category default
    python manage_layouts.py defaults CATEGORY              # print a fresh default layout
    python manage_layouts.py render CATEGORY --owner OWNER  # preview render plan
    python manage_layouts.py render CATEGORY --shop ID --html

Exit codes: 1 when a shop or page does not exist, 2 for malformed input.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from settings import Settings
from models.layout import MalformedLayoutError
from models.page import PageCategory
from services.authoring import LayoutAuthoringService
from services.defaults import DefaultLayoutProvider
from services.errors import ShopAlreadyExistsError
from services.provisioning import ShopProvisioningService
from services.render import render_html
from services.storefront import StorefrontService
from storage.page_store import PageStore
from utils.settings_key import from_storage

logger = logging.getLogger("manage_layouts")

DEMO_OWNER = "demo"
DEMO_SHOP_NAME = "Demo Shop"


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage shop page layouts")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("provision", help="Create a shop with default pages for an owner")
    p.add_argument("owner")
    p.add_argument("name")
    p.add_argument("--theme", type=Path, help="JSON file with the shop's theme settings")

    sub.add_parser("seed", help=f"Provision the demo shop for owner '{DEMO_OWNER}' if missing")

    p = sub.add_parser("show", help="Print an owner's page(s) as JSON")
    p.add_argument("owner")
    p.add_argument("category", nargs="?")

    p = sub.add_parser("replace", help="Replace a page layout from a JSON file")
    p.add_argument("owner")
    p.add_argument("category")
    p.add_argument("file", type=Path)

    p = sub.add_parser("reset", help="Reset a page to its category default")
    p.add_argument("owner")
    p.add_argument("category")

    p = sub.add_parser("defaults", help="Print a fresh default layout")
    p.add_argument("category")

    p = sub.add_parser("render", help="Render a page (preview by owner, public by shop id)")
    p.add_argument("category")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--owner")
    target.add_argument("--shop", dest="shop_id")
    p.add_argument("--html", action="store_true", help="Write HTML to the output directory")
    return parser


def _run(args: argparse.Namespace, settings: Settings, store: PageStore) -> None:
    authoring = LayoutAuthoringService(store)

    if args.command == "provision":
        theme = json.loads(args.theme.read_text(encoding="utf-8")) if args.theme else None
        shop = ShopProvisioningService(store).provision(args.owner, args.name, theme)
        _print_json(shop.model_dump(mode="json"))

    elif args.command == "seed":
        try:
            shop = ShopProvisioningService(store).provision(DEMO_OWNER, DEMO_SHOP_NAME)
            logger.info("Demo shop seeded: %s", shop.id)
        except ShopAlreadyExistsError:
            logger.info("Demo shop already exists; nothing to seed")

    elif args.command == "show":
        if args.category:
            _print_json(authoring.get_page(args.owner, args.category).as_dict())
        else:
            _print_json([page.as_dict() for page in authoring.list_pages(args.owner)])

    elif args.command == "replace":
        # accepts entries with either "settings" or stored-style "props"
        raw = from_storage(json.loads(args.file.read_text(encoding="utf-8")))
        layout = authoring.replace_page_layout(args.owner, args.category, raw)
        _print_json(layout.to_array())

    elif args.command == "reset":
        _print_json(authoring.reset_page_layout(args.owner, args.category).to_array())

    elif args.command == "defaults":
        _print_json(DefaultLayoutProvider().get_default_layout(args.category).to_array())

    elif args.command == "render":
        storefront = StorefrontService(store, settings)
        if args.owner:
            plan = storefront.render_preview(args.owner, args.category)
            name = f"preview_{args.owner}_{PageCategory.parse(args.category).value}"
        else:
            plan = storefront.render_public(args.shop_id, args.category)
            name = f"{args.shop_id}_{PageCategory.parse(args.category).value}"
        if args.html:
            output_path = settings.output_dir / f"{name}.html"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(render_html(plan), encoding="utf-8")
            logger.info("Rendered page → %s", output_path)
        else:
            _print_json(plan.model_dump(mode="json"))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    store = PageStore(settings.db_path)
    try:
        _run(args, settings, store)
    except LookupError as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        # MalformedLayoutError, unknown categories, duplicate shops
        if isinstance(exc, MalformedLayoutError):
            for problem in exc.problems:
                logger.error("  %s", problem)
        logger.error("%s", exc)
        return 2
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
