from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import markdown_parser, serialization
from .folding import flat_elements
from .utils import OUTPUT_SUFFIXES, configure_logging, read_markdown, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="FlatMark",
        description="Flatten Markdown into a sequence of display elements.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output path (defaults to stdout)")
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(OUTPUT_SUFFIXES),
        default="text",
        help="Output format",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def render_output(source: bytes, fmt: str) -> str | None:
    document = markdown_parser.parse_markdown(source)
    if document is None:
        return None
    if fmt == "html":
        return markdown_parser.markdown_to_html(source.decode("utf-8"))
    elements = flat_elements(document)
    logging.debug("Flattened into %d elements", len(elements))
    if fmt == "yaml":
        return serialization.dump_yaml(elements)
    if fmt == "json":
        return serialization.dump_json(elements) + "\n"
    if fmt == "text":
        return "".join(f"{element}\n" for element in elements)
    raise ValueError(f"Unknown output format: {fmt}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output, args.format)

    logging.info("Reading %s", input_path)
    source = read_markdown(input_path)
    logging.debug("Markdown length: %d bytes", len(source))

    logging.info("Parsing markdown...")
    rendered = render_output(source, args.format)
    if rendered is None:
        logging.error("Could not parse %s", input_path)
        return 1

    if output_path is None:
        sys.stdout.write(rendered)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
        logging.info("Done. Saved to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
