"""
Benford Document Scanner

Routes text documents by first-digit conformance to Benford's Law. Each
file is read as raw bytes, classified, and reported with its relationship.

Usage:
    # Three-way routing with defaults (alpha 0.05, min-sample 5)
    python scan_documents.py invoices/*.txt

    # Two-way suspect / not-suspect routing, no sample gate
    python scan_documents.py --mode two-way ledger.txt

    # Stricter significance level, JSON report
    python scan_documents.py --alpha 0.01 --format json --output reports/ ledger.txt
"""

import argparse
import csv
import json
import sys
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from config import ClassifierConfig, env_settings, parse_alpha, parse_min_sample, parse_mode
from console import logger, print_scan_header, print_scan_results, error, success
from detectors import ConfigurationError
from processor import BenfordProcessor, RoutedDocument

load_dotenv()

console = Console()

RELATIONSHIP_STYLES = {
    "NON_CONFORMING": "red bold",
    "SUSPECT": "red bold",
    "CONFORMING": "green",
    "NOT_SUSPECT": "green",
    "INSUFFICIENT_SAMPLE": "yellow",
}


def document_record(doc: RoutedDocument) -> dict:
    """Flatten a routed document for JSON/CSV output."""
    a = doc.assessment
    return {
        "source": doc.source,
        "relationship": doc.relationship.name,
        "classification": doc.classification.value,
        "sample_size": a.sample_size,
        "alpha": a.alpha,
        "min_sample": a.min_sample,
        "chi_square": a.chi_square,
        "p_value": a.p_value,
        "most_deviant_digit": a.most_deviant_digit,
        "observed_counts": list(a.observed_counts),
        "description": a.deviation_description,
        "content_bytes": len(doc.content),
    }


def build_config(args: argparse.Namespace, environ=None) -> ClassifierConfig:
    """Environment settings overridden by command-line flags."""
    settings = env_settings(environ)
    if args.mode:
        settings["mode"] = parse_mode(args.mode)
    if args.alpha is not None:
        settings["alpha"] = parse_alpha(args.alpha)
    if args.no_min_sample:
        settings["min_sample"] = None
    elif args.min_sample is not None:
        settings["min_sample"] = parse_min_sample(args.min_sample)
    if args.legacy_zero_sample:
        settings["strict_minimum"] = False
    return ClassifierConfig(**settings)


def read_document(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def format_console_report(documents: list[RoutedDocument]) -> Table:
    table = Table(title="Benford Routing", show_lines=False)
    table.add_column("Document", style="cyan", no_wrap=True)
    table.add_column("Relationship")
    table.add_column("n", justify="right")
    table.add_column("Chi²", justify="right")
    table.add_column("p-value", justify="right")
    table.add_column("Notes")

    for doc in documents:
        a = doc.assessment
        name = doc.relationship.name
        table.add_row(
            doc.source or "-",
            f"[{RELATIONSHIP_STYLES.get(name, 'white')}]{name}[/]",
            str(a.sample_size),
            f"{a.chi_square:.2f}" if a.chi_square is not None else "-",
            f"{a.p_value:.4f}" if a.p_value is not None else "-",
            a.deviation_description,
        )
    return table


def save_json_report(documents: list[RoutedDocument], output_path: Path, config: ClassifierConfig):
    """Save routed documents as JSON for downstream processing."""
    data = {
        "scan_timestamp": datetime.now().isoformat(),
        "mode": config.mode.value,
        "alpha": config.alpha,
        "min_sample": config.min_sample,
        "strict_minimum": config.strict_minimum,
        "document_count": len(documents),
        "summary": dict(Counter(d.relationship.name for d in documents)),
        "documents": [document_record(d) for d in documents]
    }

    output_path.write_text(json.dumps(data, indent=2))


def save_csv_report(documents: list[RoutedDocument], output_path: Path):
    """Save routed documents as CSV for spreadsheet analysis."""
    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow([
            "source", "relationship", "sample_size", "chi_square", "p_value",
            "most_deviant_digit", "observed_counts", "description"
        ])

        for d in documents:
            r = document_record(d)
            writer.writerow([
                r["source"], r["relationship"], r["sample_size"], r["chi_square"], r["p_value"],
                r["most_deviant_digit"], "|".join(str(c) for c in r["observed_counts"]), r["description"]
            ])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Benford Gate - route documents by first-digit conformance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Classify a folder of extracted invoices:
    python scan_documents.py invoices/*.txt

  Read a document from stdin:
    cat ledger.txt | python scan_documents.py -

  Suspect / not-suspect routing:
    python scan_documents.py --mode two-way ledger.txt

  CSV report:
    python scan_documents.py --format csv --output reports/ invoices/*.txt

Environment (.env supported):
  BENFORD_ALPHA, BENFORD_MIN_SAMPLE, BENFORD_STRICT_MINIMUM, BENFORD_MODE
        """
    )

    parser.add_argument("paths", nargs="+", help="Documents to classify ('-' for stdin)")
    parser.add_argument("--alpha", "-a", default=None, help="Significance level in (0, 1) (default: 0.05)")
    parser.add_argument("--min-sample", "-m", default=None,
                        help="Minimum leading digits before testing (default: 5 in three-way mode)")
    parser.add_argument("--no-min-sample", action="store_true", help="Always run the test regardless of sample size")
    parser.add_argument("--legacy-zero-sample", action="store_true",
                        help="Route documents with no leading digits like the legacy two-way processor")
    parser.add_argument("--mode", default=None, choices=["three-way", "two-way"], help="Routing mode")
    parser.add_argument("--format", "-f", default="console", choices=["console", "json", "csv"],
                        help="Output format")
    parser.add_argument("--output", "-o", help="Output directory for reports")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logger.setLevel("DEBUG")

    try:
        config = build_config(args)
    except ConfigurationError as e:
        error(f"Configuration error: {e}")
        return 2

    processor = BenfordProcessor(config)
    if args.format == "console":
        print_scan_header(config, len(args.paths))

    documents = []
    failed = 0
    for path in args.paths:
        try:
            content = read_document(path)
        except OSError as e:
            error(f"Could not read {path}: {e}")
            failed += 1
            continue
        routed = processor.process(content, source=path)
        documents.append(routed)
        if args.format == "console":
            logger.verdict(routed.relationship.name, path, routed.assessment.sample_size,
                           routed.assessment.deviation_description)

    if args.format == "console":
        console.print(format_console_report(documents))
        counts = {r.name: 0 for r in sorted(processor.relationships(), key=lambda r: r.name)}
        counts.update(Counter(d.relationship.name for d in documents))
        print_scan_results(counts, failed)
    else:
        suffix = "json" if args.format == "json" else "csv"
        if args.output:
            output_dir = Path(args.output)
            output_dir.mkdir(parents=True, exist_ok=True)
            output_file = output_dir / f"benford_scan_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{suffix}"
            if args.format == "json":
                save_json_report(documents, output_file, config)
            else:
                save_csv_report(documents, output_file)
            success(f"Report saved to: {output_file}")
        elif args.format == "json":
            print(json.dumps([document_record(d) for d in documents], indent=2))
        else:
            writer = csv.writer(sys.stdout)
            writer.writerow(["source", "relationship", "sample_size", "p_value"])
            for d in documents:
                writer.writerow([d.source, d.relationship.name, d.assessment.sample_size, d.assessment.p_value])

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
