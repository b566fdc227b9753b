"""CLI entry point for the Victorian housing targets map."""

import asyncio
import argparse
import logging
import os

import pandas as pd

from config import (
    DATA_SOURCE,
    HTML_FILENAME,
    OUTPUT_DIR,
    SNAPSHOT_FILENAME,
    SUMMARY_FILENAME,
)
from session import DataFetchError, MapSession
from snapshot import MapSnapshotter
from styler import category_phrase
from visualize import write_html

logger = logging.getLogger(__name__)


def load_session(source: str) -> MapSession:
    """Load the dataset, falling back to a map with no choropleth layer."""
    try:
        return MapSession.from_source(source)
    except DataFetchError as e:
        logger.error("Error loading GeoJSON data: %s", e)
        return MapSession.empty()


def save_summary(rows: list[dict], output_dir: str) -> str | None:
    """Save the per-LGA summary table to CSV."""
    if not rows:
        logger.warning("No LGA rows to summarise.")
        return None

    os.makedirs(output_dir, exist_ok=True)
    csv_path = os.path.join(output_dir, SUMMARY_FILENAME)
    df = pd.DataFrame(rows)
    df.to_csv(csv_path, index=False, encoding="utf-8")
    logger.info("Saved CSV: %s (%d records)", csv_path, len(rows))
    return csv_path


def print_summary(session: MapSession, rows: list[dict], html_path: str, csv_path: str | None):
    print(f"\n{'='*60}")
    print(f"Mapped {len(rows)} of {len(session.features or ())} LGAs")
    print(f"{'='*60}")
    print(f"  Map: {html_path}")
    if csv_path:
        print(f"  CSV: {csv_path}")

    if rows:
        counts = pd.DataFrame(rows)["Cat"].value_counts().sort_index()
        print(f"\nBy tracking category:")
        for cat, count in counts.items():
            print(f"  {cat} ({category_phrase(cat) or 'unknown'}): {count}")
    print(f"{'='*60}")


async def take_snapshot(html_path: str, png_path: str, visible: bool):
    snapshotter = MapSnapshotter(headless=not visible)
    try:
        await snapshotter.start()
        await snapshotter.capture(html_path, png_path)
    finally:
        await snapshotter.stop()


def run(args):
    session = load_session(args.data)

    html_path = write_html(session, os.path.join(args.output_dir, HTML_FILENAME))
    rows = session.summary()
    csv_path = save_summary(rows, args.output_dir)
    print_summary(session, rows, html_path, csv_path)

    if args.screenshot:
        png_path = os.path.join(args.output_dir, SNAPSHOT_FILENAME)
        asyncio.run(take_snapshot(html_path, png_path, args.visible))
        print(f"  Snapshot: {png_path}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build an interactive map of Victorian LGA housing target progress"
    )
    parser.add_argument(
        "--data",
        default=DATA_SOURCE,
        help=f"GeoJSON FeatureCollection path or URL (default: {DATA_SOURCE})",
    )
    parser.add_argument(
        "--output-dir",
        default=OUTPUT_DIR,
        help=f"Directory for map.html and the CSV summary (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "--screenshot",
        action="store_true",
        help="Also render the map to PNG with a headless browser",
    )
    parser.add_argument(
        "--visible",
        action="store_true",
        help="Run browser in visible (non-headless) mode for debugging",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-feature colour lookups",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    run(args)


if __name__ == "__main__":
    main()
