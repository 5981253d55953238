#!/usr/bin/env python3
"""
Single Banner Rendering

Renders one product to pardo_<sku>.jpg and prints what was placed on it.

Usage:
    python3 render_single.py --demo
    python3 render_single.py --source 1629
    python3 render_single.py --source 1629 --sku 86QNED85SQA --verbose
"""

import argparse
import dataclasses
import sys

from dotenv import load_dotenv

from bannergen.common.log_config import setup_logging
from bannergen.common.text_utils import format_price
from bannergen.rendering import RenderedBanner
from bannergen.session import BannerSession


def print_report(banner: RenderedBanner, path: str):
    """Print product data and the elements placed on the banner."""
    product = banner.product

    print("\n" + "=" * 60)
    print("BANNER REPORT")
    print("=" * 60)
    print(f"  SKU:          {product.sku}")
    print(f"  Name:         {product.name}")
    print(f"  Precio:       {format_price(product.price)}")
    print(f"  Cuotas:       {product.installments} sin interés")
    print(f"  Envío:        {'Retiro Gratis' if product.pickup else 'Normal'}")
    print(f"  Photo:        {'PLACEHOLDER' if banner.photo_placeholder else 'OK'}")

    print("\n" + "-" * 60)
    print("ELEMENTS")
    print("-" * 60)
    for element in banner.elements:
        label = f" {element.text!r}" if element.text else ""
        print(f"  {element.kind:26} {element.box}{label}")

    print(f"\nSaved: {path}")


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Render a single product banner")
    parser.add_argument("--source", "-s", help="Cluster id or feed URL to load")
    parser.add_argument("--sku", help="SKU of the product to render (default: first product)")
    parser.add_argument("--demo", action="store_true", help="Render the built-in demo product")
    parser.add_argument("--output", "-o", help="Output directory")
    parser.add_argument("--bank-text", help="Default bank promotion text")
    parser.add_argument("--no-price", action="store_true", help="Do not print the price block")
    parser.add_argument("--no-badges", action="store_true", help="Do not draw badges")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose (debug) logging")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    with BannerSession() as session:
        if args.demo or not args.source:
            session.load_demo()
        elif not session.load_feed(args.source):
            print(f"Error: {session.state.error_message}")
            sys.exit(1)

        if args.sku:
            try:
                session.select(args.sku)
            except KeyError as e:
                print(f"Error: {e}")
                sys.exit(1)

        config = session.default_config()
        if args.bank_text is not None:
            config = dataclasses.replace(config, default_bank_text=args.bank_text)
        if args.no_price:
            config = dataclasses.replace(config, show_price=False)
        if args.no_badges:
            config = dataclasses.replace(config, show_badges=False)

        banner = session.render_selected(config)
        path = session.exporter.save(banner, args.output or session.output_dir)
        print_report(banner, str(path))


if __name__ == "__main__":
    main()
