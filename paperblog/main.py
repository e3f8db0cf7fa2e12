import argparse
import json
import sys
from dataclasses import asdict

from paperblog.config.settings import Settings
from paperblog.logging.logger import Log
from paperblog.processor.processor import build_processor


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="paperblog",
        description="Convert an academic PDF into an illustrated blog post (JSON on stdout).",
    )
    parser.add_argument("pdf", help="path to the PDF file")
    parser.add_argument("--user-name", default=None, help="uploading user, checked against the authors")
    parser.add_argument("--user-email", default="", help="uploading user's email")
    parser.add_argument(
        "--alt-name",
        action="append",
        default=[],
        dest="alternative_names",
        help="alternative name of the uploading user (repeatable)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build processor -> convert one PDF."""
    args = parse_args(argv)
    settings = Settings()
    # stdout carries the JSON result
    Log.configure(settings.log_level, stream=sys.stderr)

    try:
        processor = build_processor(settings)
        result = processor.process_file(
            args.pdf,
            user_name=args.user_name,
            user_email=args.user_email,
            alternative_names=args.alternative_names,
        )
    except Exception as exc:
        Log.error(f"Conversion of {args.pdf} failed", exc=exc if Log.is_debug() else None)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    json.dump(asdict(result), sys.stdout, ensure_ascii=False, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
