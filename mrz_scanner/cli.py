"""Command-line interface for scanning passport photos.

Provides a ``scan`` subcommand for a single image and a ``batch``
subcommand that scans a folder and exports the decoded fields to CSV.
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from mrz_scanner.ocr.debug_sink import DirectoryDebugSink
from mrz_scanner.ocr.diagnostics import Diagnostic, ScanOk, ScanRejected, ScanWarning
from mrz_scanner.ocr.scan_processor import MrzScanProcessor
from mrz_scanner.utils.config import load_config
from mrz_scanner.utils.errors import ErrorKind
from mrz_scanner.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg")
_META_COLUMNS = ["filename", "status", "message"]

EXIT_OK = 0
EXIT_REJECTED = 2


def diagnostic_to_payload(diagnostic: Diagnostic) -> dict[str, str]:
    """Render a scan outcome as the same mapping the HTTP API returns.

    Args:
        diagnostic: Scan outcome.

    Returns:
        Field mapping with ``rawText``, ``rawText`` plus ``warning``, or
        ``error``.
    """
    if isinstance(diagnostic, ScanOk):
        return diagnostic.record.to_dict()
    if isinstance(diagnostic, ScanWarning):
        return {"rawText": diagnostic.raw_text, "warning": diagnostic.message}
    return {"error": diagnostic.reason}


def _status(diagnostic: Diagnostic) -> str:
    if isinstance(diagnostic, ScanOk):
        return "ok"
    if isinstance(diagnostic, ScanWarning):
        return "warning"
    return "rejected"


def _find_images(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory, sorted by name."""
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def scan_file(processor: MrzScanProcessor, file_path: Path) -> Diagnostic:
    """Scan a single image file.

    Args:
        processor: Scan processor to use.
        file_path: Path to a PNG or JPEG image.

    Returns:
        Scan outcome.
    """
    return processor.scan_bytes(file_path.read_bytes(), file_path.name)


def scan_folder(
    processor: MrzScanProcessor,
    input_dir: Path,
    output_csv: Path,
    verbose: bool = False,
) -> dict[str, int]:
    """Scan every image in a folder and export the results to CSV.

    Args:
        processor: Scan processor to use.
        input_dir: Directory containing passport photos.
        output_csv: Path for the output CSV file.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, ok, warning, and rejected counts.
    """
    files = _find_images(input_dir)
    summary = {"total": len(files), "ok": 0, "warning": 0, "rejected": 0}
    if not files:
        logger.warning("No images found in %s", input_dir)
        return summary

    logger.info("Found %d images to scan", len(files))
    rows: list[dict[str, str]] = []

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Scanning [{i}/{len(files)}]: {file_path.name}")

        try:
            diagnostic = scan_file(processor, file_path)
        except Exception as exc:
            logger.error("Failed to scan %s: %s", file_path.name, exc)
            diagnostic = ScanRejected(str(exc), ErrorKind.INPUT)
        status = _status(diagnostic)
        summary[status] += 1

        payload = diagnostic_to_payload(diagnostic)
        message = payload.pop("warning", None) or payload.pop("error", "")
        rows.append(
            {"filename": file_path.name, "status": status, "message": message}
            | payload
        )

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, str]], output_path: Path) -> None:
    """Write scan rows to CSV, metadata columns first."""
    all_keys: set[str] = set()
    for row in rows:
        all_keys.update(row.keys())

    field_columns = sorted(all_keys - set(_META_COLUMNS))
    columns = _META_COLUMNS + field_columns

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Batch Scan Complete")
    print(f"{'=' * 50}")
    print(f"Total:    {summary['total']}")
    print(f"Ok:       {summary['ok']}")
    print(f"Warning:  {summary['warning']}")
    print(f"Rejected: {summary['rejected']}")
    print(f"Output:   {output_csv}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``mrz-scan`` command."""
    parser = argparse.ArgumentParser(
        description="Passport MRZ Scanner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML configuration file"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="Scan a single passport photo")
    scan_parser.add_argument("file", type=Path, help="Image file to scan")
    scan_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")
    scan_parser.add_argument(
        "--debug-dir", type=Path, help="Write intermediate images to this directory"
    )

    batch_parser = subparsers.add_parser("batch", help="Scan a folder of photos")
    batch_parser.add_argument("input_dir", type=Path, help="Input image directory")
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.log_level)

    if args.command == "scan":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        sink = DirectoryDebugSink(args.debug_dir) if args.debug_dir else None
        processor = MrzScanProcessor(config, debug_sink=sink)
        diagnostic = scan_file(processor, args.file)
        output_str = json.dumps(diagnostic_to_payload(diagnostic), indent=2)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str)
            print(f"Output written to {args.output}")
        else:
            print(output_str)
        sys.exit(EXIT_REJECTED if _status(diagnostic) == "rejected" else EXIT_OK)
    elif args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        scan_folder(MrzScanProcessor(config), args.input_dir, args.output, args.verbose)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
