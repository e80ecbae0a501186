import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterator, List, Sequence

from dotenv import load_dotenv
from tqdm import tqdm

# Load environment variables first
load_dotenv()

from ..exceptions import DecodeError, UnknownFilterError
from ..models.filter_kind import FilterKind
from ..pipeline.apply_filter import apply_filter
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

OUTPUT_DIR = os.getenv("FILTER_OUTPUT_DIR", "filtered")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nft-filter",
        description="Apply one of the built-in filters to image files and write PNG results.",
    )
    parser.add_argument("filter", nargs="?", help="filter name, e.g. sepia (see --list)")
    parser.add_argument("inputs", nargs="*", type=Path, help="image files or directories")
    parser.add_argument("-o", "--output-dir", type=Path, default=Path(OUTPUT_DIR),
                        help=f"where results are written (default: {OUTPUT_DIR})")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="descend into sub-directories of directory inputs")
    parser.add_argument("--list", action="store_true", help="print the available filters and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _expand_inputs(
    inputs: Sequence[Path],
    image_service: ImageService,
    recursive: bool,
) -> Iterator[Path]:
    for item in inputs:
        if item.is_dir():
            yield from image_service.stream_paths(item, recursive=recursive)
        else:
            yield item


def output_path_for(source: Path, kind: FilterKind, output_dir: Path) -> Path:
    return output_dir / f"{source.stem}_{kind.value}.png"


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.list:
        for kind in FilterKind:
            print(f"{kind.value:<10} {kind.label}")
        return 0

    if not args.filter or not args.inputs:
        parser.print_usage(sys.stderr)
        print("nft-filter: a filter name and at least one input are required", file=sys.stderr)
        return 2

    try:
        kind = FilterKind.from_name(args.filter)
    except UnknownFilterError as err:
        print(f"nft-filter: {err}", file=sys.stderr)
        return 2

    image_service = ImageService()
    sources = list(_expand_inputs(args.inputs, image_service, args.recursive))
    if not sources:
        logger.warning("No images found in the given inputs")
        return 1

    failed = 0
    for source in tqdm(sources, desc=kind.value, unit="img", ncols=70):
        try:
            result = apply_filter(source.read_bytes(), kind.value)
        except (DecodeError, OSError) as err:
            failed += 1
            logger.error(f"Skipping {source}: {err}")
            continue

        target = image_service.save_bytes(result, output_path_for(source, kind, args.output_dir))
        logger.debug(f"Wrote {target}")

    logger.info(f"{len(sources) - failed}/{len(sources)} images written to {args.output_dir}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
