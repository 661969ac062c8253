import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from packages.statement_engine.core.config import get_settings
from packages.statement_engine.core.errors import StatementError
from packages.statement_engine.core.logging import setup_logging
from packages.statement_engine.parser import StatementParser, transactions_to_frame

FORMAT_BY_SUFFIX = {
    ".xlsx": "excel",
    ".xls": "excel",
    ".csv": "csv",
    ".pdf": "pdf",
}


def guess_format(path: str) -> Optional[str]:
    return FORMAT_BY_SUFFIX.get(Path(path).suffix.lower())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statement-engine",
        description="Extract withdrawals from a bank statement",
    )
    parser.add_argument("file", help="Statement file (.xlsx, .xls, .csv, .pdf)")
    parser.add_argument(
        "--format",
        choices=["excel", "csv", "pdf"],
        help="Front end to use (default: from file extension)",
    )
    parser.add_argument("--password", help="Password for encrypted workbooks")
    parser.add_argument(
        "--json", action="store_true", help="Print one JSON object per transaction"
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        log_level=args.log_level or settings.log_level,
        json_output=settings.json_logs,
    )

    file_format = args.format or guess_format(args.file)
    if not file_format:
        print(f"Cannot tell the format of {args.file}; pass --format", file=sys.stderr)
        return 2

    try:
        content = Path(args.file).read_bytes()
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    try:
        transactions = StatementParser(settings).parse(
            content, file_format, password=args.password
        )
    except StatementError as e:
        print(f"Error parsing file: {e.detail}", file=sys.stderr)
        return 1

    if args.json:
        for txn in transactions:
            print(json.dumps(txn.to_dict(), ensure_ascii=False))
    elif transactions:
        frame = transactions_to_frame(transactions).drop(columns=["rawData"])
        print(frame.to_string(index=False))
    print(f"Found {len(transactions)} withdrawals.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
