#!/usr/bin/env python3
"""
Storefront command line.

Usage:
  python backend/main.py init            # create tables
  python backend/main.py seed            # create tables and sample orders
  python backend/main.py report [--naive] [--json]

The report prints every order with its lines, built by the order query
repository (two queries, or 1 + N with --naive).
"""
import argparse
import json
import logging
import sys

from database import SessionLocal
from dependencies import get_order_query_repository
from init_db import init_database, seed_sample_data, check_schema
from utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _print_report(orders, as_json: bool) -> None:
    if as_json:
        print(json.dumps([order.model_dump(mode="json") for order in orders], indent=2))
        return

    for order in orders:
        total = sum(line.total_price for line in order.order_items)
        print(f"#{order.order_id} {order.name} {order.order_status.value} "
              f"{order.order_date:%Y-%m-%d %H:%M} -> {order.address or '-'}  total={total}")
        for line in order.order_items:
            print(f"    {line.item_name}: {line.count} x {line.order_price}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Storefront order backend")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init", help="Create missing tables")
    sub.add_parser("seed", help="Create tables and insert sample orders")
    report = sub.add_parser("report", help="Print all orders with their lines")
    report.add_argument("--naive", action="store_true", help="Fetch lines with one query per order")
    report.add_argument("--json", action="store_true", help="Print JSON instead of text")
    args = parser.parse_args(argv)

    configure_logging()
    init_database()

    if args.command == "init":
        return 0

    db = SessionLocal()
    try:
        if args.command == "seed":
            order_ids = seed_sample_data(db)
            print(f"Placed {len(order_ids)} orders")
            return 0

        schema = check_schema()
        if not schema["valid"]:
            print(f"Missing tables: {', '.join(schema['missing_tables'])}", file=sys.stderr)
            return 1

        repo = get_order_query_repository(db)
        orders = repo.find_order_query_dtos() if args.naive else repo.find_orders_query_dtos_optimize()
        _print_report(orders, args.json)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
