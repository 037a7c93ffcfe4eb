import argparse
import logging
from typing import List, Optional

from ..errors import GsmSpecError
from ..ingestion.client import GsmSpecClient
from ..ingestion.fetcher import Fetcher, RateLimiter
from ..models import to_dict
from ..processing.export import brands_to_frame, summaries_to_frame, write_csv
from ..utils.console import print_json
from ..utils.logging import get_logger, set_level

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsmspec",
        description="Mobile device specification scraper",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--cooldown", type=float, default=None, help="Seconds to wait before each request")
    parser.add_argument("--csv", dest="csv_path", default=None, help="Write brand/listing rows to this CSV")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("brands", help="List every brand")

    p_device = sub.add_parser("device", help="Full specification of one device")
    p_device.add_argument("device_id", help="e.g. samsung_galaxy_s24_ultra-12771")

    p_search = sub.add_parser("search", help="Quick search by name")
    p_search.add_argument("query")

    p_brand = sub.add_parser("brand", help="Every device of one brand")
    p_brand.add_argument("brand_id", help="e.g. samsung-phones-9")

    sub.add_parser("options", help="Advanced search form schema")
    return parser


def build_client(args: argparse.Namespace) -> GsmSpecClient:
    limiter = RateLimiter() if args.cooldown is None else RateLimiter(cooldown=args.cooldown)
    return GsmSpecClient(fetcher=Fetcher(limiter=limiter))


def run(args: argparse.Namespace, client: GsmSpecClient) -> None:
    if args.command == "brands":
        result = client.get_all_brands()
        if args.csv_path:
            write_csv(brands_to_frame(result), args.csv_path)
    elif args.command == "device":
        result = client.get_device(args.device_id)
    elif args.command == "search":
        result = client.search(args.query)
        if args.csv_path:
            write_csv(summaries_to_frame(result), args.csv_path)
    elif args.command == "brand":
        result = client.get_all_devices_of_brand(args.brand_id)
        if args.csv_path:
            write_csv(summaries_to_frame(result), args.csv_path)
    else:
        result = client.get_adv_search_options()

    print_json(to_dict(result))


def main(argv: Optional[List[str]] = None, client: Optional[GsmSpecClient] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        set_level(logging.DEBUG)

    try:
        run(args, client or build_client(args))
    except GsmSpecError as e:
        logger.error("%s", e)
        return 1
    return 0
