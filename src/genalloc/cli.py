"""Project CLI entrypoint.

Provides CLI commands for GENALLOC:
- genalloc build: Encode a genesis allocation document into a hex-escaped constant
- genalloc inspect: Decode a written constant back into accounts
- genalloc verify-determinism: Build repeatedly from shuffled input, compare digests
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from genalloc.config import ConfigError, load_config_from_env
from genalloc.errors import AllocError
from genalloc.formatting import parse_const, render_const
from genalloc.io import load_alloc_document, read_artifact, write_artifact
from genalloc.numeric import int_to_decimal
from genalloc.pipeline import build_allocation, decode_allocation

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _pkg_version() -> str:
    try:
        return version("genalloc")
    except PackageNotFoundError:
        return "0.0.0"


def _require_file(path: Path, what: str) -> None:
    if not path.is_file():
        print(f"{what} not found: {path}", file=sys.stderr)
        raise SystemExit(1)


def _cmd_build(args: argparse.Namespace) -> None:
    """Run build command."""
    config = load_config_from_env(
        const_name=args.name,
        max_balance_bits=args.max_balance_bits,
        log_level=args.log_level,
    )
    input_path = Path(args.input)
    _require_file(input_path, "Input file")

    mapping = load_alloc_document(input_path)
    result = build_allocation(mapping, max_bits=config.max_balance_bits)
    text = render_const(config.const_name, result.encoded)

    if args.out:
        write_artifact(Path(args.out), text)
    else:
        print(text)

    if args.verbose:
        print(f"Accounts: {len(result.items)}", file=sys.stderr)
        print(f"Encoded bytes: {len(result.encoded)}", file=sys.stderr)
        print(f"Output digest: {result.digest}", file=sys.stderr)


def _cmd_inspect(args: argparse.Namespace) -> None:
    """Run inspect command."""
    artifact_path = Path(args.artifact)
    _require_file(artifact_path, "Artifact")

    name, data = parse_const(read_artifact(artifact_path))
    items = decode_allocation(data)

    if args.json:
        out = {"name": name, "accounts": [item.to_dict() for item in items]}
        print(json.dumps(out, indent=2))
        return

    print(f"const {name}: {len(items)} accounts, {len(data)} bytes")
    for item in items:
        print(f"{item.address_hex} {int_to_decimal(item.entry.balance)}")


def _cmd_verify_determinism(args: argparse.Namespace) -> None:
    """Build ``--runs`` times from shuffled iteration orders and compare digests."""
    input_path = Path(args.input)
    _require_file(input_path, "Input file")
    if args.runs < 2:
        print("--runs must be at least 2", file=sys.stderr)
        raise SystemExit(2)

    max_bits = load_config_from_env().max_balance_bits
    mapping = load_alloc_document(input_path)
    digests: list[str] = []
    for run_id in range(args.runs):
        records = list(mapping.items())
        if run_id > 0:
            random.Random(run_id).shuffle(records)
        result = build_allocation(dict(records), max_bits=max_bits)
        print(f"Run #{run_id + 1} digest: {result.digest}")
        digests.append(result.digest)

    if len(set(digests)) != 1:
        print("FAIL: digests differ across runs", file=sys.stderr)
        raise SystemExit(1)
    print("OK: all runs produced identical output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genalloc", description="GENALLOC CLI")
    parser.add_argument("--version", action="version", version=f"genalloc {_pkg_version()}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $GENALLOC_LOG_LEVEL or WARNING)",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_build = sub.add_parser("build", help="Encode an allocation document into a constant")
    p_build.add_argument("--input", required=True, help="Path to JSON/YAML allocation document")
    p_build.add_argument("--out", help="Output path for the constant (default: stdout)")
    p_build.add_argument("--name", help="Constant name (default: $GENALLOC_CONST_NAME or allocData)")
    p_build.add_argument(
        "--max-balance-bits",
        type=int,
        help="Reject balances wider than this many bits; 0 disables (default: 256)",
    )
    p_build.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    p_inspect = sub.add_parser("inspect", help="Decode a written constant")
    p_inspect.add_argument("--artifact", required=True, help="Path to the constant file")
    p_inspect.add_argument("--json", action="store_true", help="Print accounts as JSON")

    p_verify = sub.add_parser(
        "verify-determinism", help="Build from shuffled input orders and compare digests"
    )
    p_verify.add_argument("--input", required=True, help="Path to JSON/YAML allocation document")
    p_verify.add_argument("--runs", type=int, default=2, help="Number of builds (default: 2)")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = load_config_from_env(log_level=args.log_level).log_level
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        raise SystemExit(2) from e
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    commands = {
        "build": _cmd_build,
        "inspect": _cmd_inspect,
        "verify-determinism": _cmd_verify_determinism,
    }
    try:
        commands[args.cmd](args)
    except (AllocError, ConfigError) as e:
        logger.debug("%s failed", args.cmd, exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    except OSError as e:
        print(f"ERROR: I/O failure: {e}", file=sys.stderr)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
