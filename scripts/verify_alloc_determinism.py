#!/usr/bin/env python3
"""
Verify build determinism across processes by building twice and comparing digests.

Each build runs in a fresh interpreter with a different PYTHONHASHSEED, so
any dependence on hash or dict iteration order shows up as a digest mismatch.

Usage:
    python -m scripts.verify_alloc_determinism
    python -m scripts.verify_alloc_determinism --input tests/fixtures/genalloc/sample_alloc.json
"""

import argparse
import hashlib
import os
import subprocess
import sys
import tempfile
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent


def run_build(input_path: Path, out_path: Path, run_id: int) -> str:
    """Run a build in a subprocess and return the artifact digest."""
    print(f"\n--- Build run #{run_id} ---")

    env = {**os.environ, "PYTHONHASHSEED": str(run_id), "PYTHONPATH": str(REPO_ROOT / "src")}
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "genalloc.cli",
            "build",
            "--input",
            str(input_path),
            "--out",
            str(out_path),
            "-v",
        ],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        env=env,
        check=False,
    )

    if result.stderr:
        print(result.stderr, file=sys.stderr)

    if result.returncode != 0:
        raise RuntimeError(f"Build run #{run_id} failed with exit code {result.returncode}")

    return hashlib.sha256(out_path.read_bytes()).hexdigest()[:16]


def main() -> None:
    parser = argparse.ArgumentParser(description="Verify allocation build determinism")
    parser.add_argument(
        "--input",
        type=Path,
        default=REPO_ROOT / "tests" / "fixtures" / "genalloc" / "sample_alloc.json",
        help="Allocation document to build",
    )
    args = parser.parse_args()

    if not args.input.exists():
        print(f"Input file not found: {args.input}")
        sys.exit(1)

    print(f"Using input: {args.input}")

    with tempfile.TemporaryDirectory() as tmp:
        try:
            digest1 = run_build(args.input, Path(tmp) / "run1.go", 1)
            digest2 = run_build(args.input, Path(tmp) / "run2.go", 2)
        except RuntimeError as e:
            print(f"\nERROR: {e}")
            sys.exit(1)

    print("\n--- Digest verification ---")
    print(f"Run #1 digest: {digest1}")
    print(f"Run #2 digest: {digest2}")

    if digest1 == digest2:
        print("\nOK: builds are deterministic")
        sys.exit(0)

    print("\nFAIL: digests differ between runs")
    sys.exit(1)


if __name__ == "__main__":
    main()
