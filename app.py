"""Clearance Report - Command Line Application

Renders a clearance certificate PDF from a JSON record.

Usage:
    python app.py record.json [-o OUTDIR] [--template template.json] [--verbose]
"""
import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

from clearance_report import (
    ClearanceRecord,
    ClearanceReportError,
    DocumentTemplate,
    ReportOptions,
    ReportPipeline,
    clean_filename,
    default_template,
)

logger = logging.getLogger("clearance_report.app")


def load_json(path: str) -> dict:
    """Read a JSON object from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clearance-report",
        description="Render an asbestos removal clearance certificate to PDF.",
    )
    parser.add_argument("record", help="Path to the clearance record JSON file")
    parser.add_argument("-o", "--output-dir", default=".", help="Directory to write the PDF to")
    parser.add_argument("--template", help="Optional template JSON overlaid on the built-in template")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """
    Command line entry point.

    Returns:
        Process exit code (0 on success)
    """
    args = build_parser().parse_args(argv)

    # Load environment variables (CLEARANCE_REPORT_*)
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        record = ClearanceRecord.from_dict(load_json(args.record))
        template = None
        if args.template:
            template = DocumentTemplate.from_dict(
                load_json(args.template), base=default_template(record.clearance_type)
            )

        options = ReportOptions.from_env()
        result = ReportPipeline(options).generate(record, template)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read input: %s", e)
        return 2
    except ClearanceReportError as e:
        logger.error("Report generation failed: %s", e)
        return 1

    os.makedirs(args.output_dir, exist_ok=True)
    output_path = os.path.join(args.output_dir, clean_filename(result.filename))
    with open(output_path, "wb") as f:
        f.write(result.pdf_bytes)

    if result.missing_assets:
        logger.warning("Rendered with placeholders for: %s", ", ".join(result.missing_assets))
    logger.info("Wrote %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
