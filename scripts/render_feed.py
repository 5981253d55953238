#!/usr/bin/env python3
"""
Feed Banner Rendering Script

Fetches a product feed (cluster id or URL), normalizes it and renders a
1000x1000 promotional JPEG for every product.

Features:
- Relay fallback for the feed download
- Sequential rendering with settle/pacing delays
- Photo failures fall back to a placeholder without stopping the batch
- manifest.csv next to the banners

Usage:
    python3 scripts/render_feed.py --source 1629
    python3 scripts/render_feed.py --source https://www.pardo.com.ar/XMLData/cluster1629.xml --limit 10
    python3 scripts/render_feed.py --source 1629 --no-price --frame-color "#222222"
"""

import argparse
import dataclasses
import logging
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dotenv import load_dotenv

from bannergen.common import constants
from bannergen.common.config_loader import load_settings
from bannergen.common.log_config import setup_logging
from bannergen.session import BannerSession

logger = logging.getLogger(__name__)


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Render promotional banners for every product in a feed"
    )
    parser.add_argument(
        "--source", "-s",
        default=constants.DEFAULT_FEED_SOURCE,
        help="Cluster id (e.g. 1629) or feed URL"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output directory (default: batch.output_dir from config/settings.yaml)"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=0,
        help="Render only the first N products (0 = no limit)"
    )
    parser.add_argument(
        "--frame-color",
        help="Frame colour as hex, e.g. #0033A0"
    )
    parser.add_argument(
        "--bank-text",
        help="Default bank promotion text (empty string hides the badge)"
    )
    parser.add_argument(
        "--no-price",
        action="store_true",
        help="Do not print the price block"
    )
    parser.add_argument(
        "--no-badges",
        action="store_true",
        help="Do not draw promotion/instalment/pickup badges"
    )
    parser.add_argument(
        "--settle-delay",
        type=float,
        help="Seconds to wait before each render"
    )
    parser.add_argument(
        "--pacing-delay",
        type=float,
        help="Seconds to wait after each export"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_settings()
    if args.settle_delay is not None:
        settings["batch"]["settle_delay"] = args.settle_delay
    if args.pacing_delay is not None:
        settings["batch"]["pacing_delay"] = args.pacing_delay

    with BannerSession(settings=settings) as session:
        config = session.default_config()
        overrides = {}
        if args.frame_color:
            overrides["frame_color"] = args.frame_color
        if args.bank_text is not None:
            overrides["default_bank_text"] = args.bank_text
        if args.no_price:
            overrides["show_price"] = False
        if args.no_badges:
            overrides["show_badges"] = False
        config = dataclasses.replace(config, **overrides)

        if not session.load_feed(args.source):
            print(f"Error: {session.state.error_message}")
            sys.exit(1)

        products = session.state.products
        if args.limit > 0:
            session.state.replace_products(products[:args.limit])

        output_dir = args.output or session.output_dir

        print("=" * 60)
        print("Feed Banner Rendering")
        print("=" * 60)
        print(f"  Source:           {args.source}")
        print(f"  Relay:            {session.state.source_label}")
        print(f"  Products:         {len(session.state.products)}")
        print(f"  Output dir:       {output_dir}")
        print(f"  Show price:       {config.show_price}")
        print(f"  Show badges:      {config.show_badges}")

        count = session.run_batch(config, output_dir=output_dir)
        stats = session.last_batch.get_stats()

        print("\n" + "=" * 60)
        print("Proceso finalizado.")
        print(f"  Processed:        {count}")
        print(f"  Written:          {stats['written']}")
        print(f"  Placeholders:     {stats['placeholders']}")
        print(f"  Failed exports:   {stats['failed']}")
        print(f"  Manifest:         {session.last_batch.manifest_file}")
        print("=" * 60)


if __name__ == "__main__":
    main()
