import argparse
import json
import logging
import sys
from pathlib import Path

from .config import get_settings
from .exporters import export_csv, export_json
from .imports import NOT_AN_ARRAY, import_json
from .intake import build_property
from .models import QueryOptions, as_record
from .normalize import normalize_properties
from .parsing import parse_deal_text
from .search import SORT_FIELDS, get_filtered
from .security import safe_output_path
from .stats import compute_county_counts, compute_stats, compute_type_counts
from .validation import validate_property


logger = logging.getLogger("dealpipe.cli")


class _JsonLogFormatter(logging.Formatter):
    def format(self, record):
        return json.dumps(
            {
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
        )


def _configure_logging(level, as_json):
    handler = logging.StreamHandler(sys.stderr)
    if as_json:
        handler.setFormatter(_JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def _read_text(path):
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _load_collection(path):
    data = json.loads(_read_text(path))
    if not isinstance(data, list):
        raise ValueError(NOT_AN_ARRAY)
    return data


def _write_output(path, text, suffix):
    output_path = safe_output_path(path, Path.cwd(), suffixes=[suffix])
    output_path.write_text(text, encoding="utf-8")
    logger.info("wrote %s", output_path)


def _emit(payload):
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _cmd_parse(args):
    deals = parse_deal_text(_read_text(args.file))
    _emit([build_property(deal).to_record() for deal in deals])
    return 0


def _cmd_validate(args):
    collection = _load_collection(args.file)
    problems = {}
    for index, record in enumerate(collection):
        violations = validate_property(record)
        if violations:
            problems[str(index)] = violations
    _emit(problems)
    return 1 if problems else 0


def _cmd_import(args):
    result = import_json(_read_text(args.file))
    summary = result.to_dict()
    if not result.valid:
        _emit(summary)
        return 1
    summary.pop("properties")
    summary["count"] = len(result.properties)
    if args.output:
        _write_output(
            args.output, export_json(normalize_properties(result.properties)), ".json"
        )
    _emit(summary)
    return 0


def _cmd_query(args):
    collection = _load_collection(args.file)
    options = QueryOptions(
        current_filter=args.filter,
        county_filter=args.county,
        type_filter=args.type,
        search_term=args.search,
        sort_field=args.sort,
        sort_direction=args.direction,
    )
    _emit([as_record(r) for r in get_filtered(collection, options)])
    return 0


def _cmd_stats(args):
    collection = _load_collection(args.file)
    _emit(
        {
            "stages": compute_stats(collection),
            "counties": dict(compute_county_counts(collection)),
            "types": dict(compute_type_counts(collection)),
        }
    )
    return 0


def _cmd_export(args):
    collection = _load_collection(args.file)
    if args.format == "csv":
        text = export_csv(collection, neutralize=args.neutralize or None)
    else:
        text = export_json(collection)
    if args.output:
        _write_output(args.output, text, "." + args.format)
    else:
        print(text)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="deal_pipeline",
        description="Wholesale deal pipeline tools",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, etc.)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit one JSON object per log line",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Parse pasted deal text into records")
    p.add_argument("file", help="Text file, or - for stdin")
    p.set_defaults(func=_cmd_parse)

    p = sub.add_parser("validate", help="Check a collection for invalid records")
    p.add_argument("file")
    p.set_defaults(func=_cmd_validate)

    p = sub.add_parser("import", help="Validate and dedupe a JSON backup")
    p.add_argument("file")
    p.add_argument("--output", default=None, help="Write the deduplicated collection here")
    p.set_defaults(func=_cmd_import)

    p = sub.add_parser("query", help="Filter, search and sort a collection")
    p.add_argument("file")
    p.add_argument("--filter", default="all", help="Stage bucket: all, ready, new, hold, high, sold")
    p.add_argument("--county", default=None)
    p.add_argument("--type", default=None)
    p.add_argument("--search", default="")
    p.add_argument("--sort", default="dateAdded", choices=sorted(SORT_FIELDS))
    p.add_argument("--direction", default="desc", choices=["asc", "desc"])
    p.set_defaults(func=_cmd_query)

    p = sub.add_parser("stats", help="Stage, county and type counts")
    p.add_argument("file")
    p.set_defaults(func=_cmd_stats)

    p = sub.add_parser("export", help="Export a collection as CSV or JSON")
    p.add_argument("file")
    p.add_argument("--format", choices=["csv", "json"], default="csv")
    p.add_argument("--output", default=None, help="Write to a file instead of stdout")
    p.add_argument(
        "--neutralize",
        action="store_true",
        help="Prefix formula-like cells with a quote",
    )
    p.set_defaults(func=_cmd_export)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level or get_settings().log_level, args.log_json)
    try:
        return args.func(args)
    except (OSError, ValueError) as exc:
        logger.debug("%s failed: %s", args.command, exc)
        print(json.dumps({"error": str(exc)}))
        return 1


def _safe_main():
    try:
        code = main()
    except SystemExit:
        raise
    except Exception as exc:
        print(json.dumps({"error": str(exc)}))
        raise SystemExit(1)
    raise SystemExit(code)


if __name__ == "__main__":
    _safe_main()
