import argparse
import json
import logging
import math
import sys
from typing import Any, Optional, Sequence

from cephtrace import (
    TracingFormatError,
    extract_steps,
    get_display_name_for_category,
    get_display_name_for_indication,
    get_display_name_for_severity,
    index_results,
    load_tracing_file,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _json_safe(value: Any) -> Any:
    # Degenerate geometry yields nan, which JSON cannot represent.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Evaluate cephalometric tracings")
    parser.add_argument("path", help="Path to an index.json document or a single image entry")
    parser.add_argument(
        "--image",
        help="Image id to evaluate (default: every image in the file)",
    )
    parser.add_argument(
        "--analysis",
        help="Override the analysis stored in the file (e.g. basic, downs, steiner)",
    )
    parser.add_argument(
        "--dedupe",
        choices=["structural", "symbol"],
        default="structural",
        help="Step deduplication used for the step listing (default: structural)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        sessions = load_tracing_file(args.path)
        if args.image is not None:
            if args.image not in sessions:
                raise TracingFormatError(f"no image {args.image!r} in {args.path}")
            sessions = {args.image: sessions[args.image]}
        if args.analysis:
            for session in sessions.values():
                session.set_analysis(args.analysis)
    except (OSError, KeyError, TracingFormatError) as exc:
        logger.error("Could not load %s: %s", args.path, exc)
        raise SystemExit(1)

    report = {}
    for image_id, session in sessions.items():
        if session.analysis is None:
            logger.warning("Image %s has no active analysis; nothing to evaluate", image_id)
            continue
        evaluation = session.evaluate()
        results = session.interpret(evaluation)
        steps = extract_steps(session.analysis.landmarks, args.dedupe)
        report[image_id] = {
            "analysis": session.analysis_id,
            "steps": [step.symbol for step in steps],
            "values": evaluation.values,
            "unresolved": [
                {"symbol": u.symbol, "missing": list(u.missing)} for u in evaluation.unresolved
            ],
            "pending": [step.symbol for step in session.pending_steps()],
            "interpretation": {
                category: result.to_dict() for category, result in index_results(results).items()
            },
        }

    if args.json:
        print(json.dumps(_json_safe(report), indent=2, ensure_ascii=False, allow_nan=False))
        return

    for image_id, entry in report.items():
        print(f"Image: {image_id}")
        print(f"Analysis: {entry['analysis']}")
        print("Steps:")
        for symbol in entry["steps"]:
            print(f"  - {symbol}")
        print("Values:")
        if entry["values"]:
            for symbol, value in entry["values"].items():
                print(f"  {symbol}: {value:.2f}")
        else:
            print("  (none)")
        for unresolved in entry["unresolved"]:
            print(f"Unresolved: {unresolved['symbol']} (missing {', '.join(unresolved['missing'])})")
        if entry["pending"]:
            print("Pending: " + ", ".join(entry["pending"]))
        print("Interpretation:")
        if entry["interpretation"]:
            for category, result in entry["interpretation"].items():
                print(
                    f"  {get_display_name_for_category(category)}: "
                    f"{get_display_name_for_indication(result['indication'])} "
                    f"(severity: {get_display_name_for_severity(result['severity'])})"
                )
        else:
            print("  (none)")


if __name__ == "__main__":
    main(sys.argv[1:])
