import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from causemap import (
    REFERENCE_HIERARCHY,
    MapSession,
    ValidationError,
    format_layout,
    generate_tikz_document,
    load_hierarchy,
    validate_hierarchy,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _load(path: Optional[str]):
    if not path:
        logger.info("No hierarchy given, using the reference map")
        return REFERENCE_HIERARCHY
    logger.info("Loading hierarchy from %s", path)
    hierarchy = load_hierarchy(path)
    validate_hierarchy(hierarchy)
    return hierarchy


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out a problem/cause map")
    parser.add_argument("path", nargs="?", help="JSON hierarchy (defaults to the reference map)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--settle",
        action="store_true",
        help="Run one sub-cause collision pass after seeding",
    )
    parser.add_argument(
        "--format",
        choices=["json", "text", "tikz"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output",
        help="Write the output to this path instead of stdout",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        hierarchy = _load(args.path)
        session = MapSession(hierarchy)
    except (OSError, ValueError, ValidationError) as exc:
        logger.error("Cannot build map: %s", exc)
        raise SystemExit(1) from exc

    if args.settle:
        result = session.settle()
        if not result.converged:
            logger.warning("Collision pass hit the iteration cap (max overlap %.3g)", result.max_overlap)

    if args.format == "json":
        rendered = json.dumps(session.layout.snapshot(), indent=2, ensure_ascii=False) + "\n"
    elif args.format == "tikz":
        rendered = generate_tikz_document(session.layout)
    else:
        rendered = format_layout(session.layout, session.view_state)

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s output to %s", args.format, out_path)
    else:
        print(rendered, end="")


if __name__ == "__main__":
    main()
