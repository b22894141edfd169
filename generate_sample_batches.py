#!/usr/bin/env python3
"""
Sample Batch Generator CLI

Writes generated diagnostic-log batches to a local JSON file instead of
sending them, for inspecting the wire format offline.

Usage:
    python generate_sample_batches.py --num-batches 10
    python generate_sample_batches.py --num-batches 10 --third-party --seed 42
    python generate_sample_batches.py --list-candidates
"""

import argparse
import json
import random
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from synthetic_logs import BatchBuilder, DEFAULT_CANDIDATES


def main():
    parser = argparse.ArgumentParser(
        description="Generate sample IoT Hub diagnostic-log batches without sending them"
    )

    parser.add_argument(
        '--num-batches',
        type=int,
        default=10,
        help='Number of batches to generate (default: 10)'
    )

    parser.add_argument(
        '--third-party',
        action='store_true',
        help='Append the third-party service chain to every batch'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Seed for reproducible output'
    )

    parser.add_argument(
        '--output-file',
        type=str,
        help='Output file path (default: auto-generated)'
    )

    parser.add_argument(
        '--list-candidates',
        action='store_true',
        help='List device, endpoint and third-party service names'
    )

    args = parser.parse_args()

    if args.list_candidates:
        print("\n".join(DEFAULT_CANDIDATES.summary()))
        return

    if args.num_batches < 1:
        print("Error: --num-batches must be at least 1")
        sys.exit(1)

    output_file = args.output_file or f"output/batches/sample_batches_{args.num_batches}.json"

    builder = BatchBuilder(rng=random.Random(args.seed), include_third_party=args.third_party)
    batches = [builder.build_batch().to_dict() for _ in range(args.num_batches)]

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(batches, f, indent=2)

    records = sum(len(batch['records']) for batch in batches)
    print(f"Generated {len(batches)} batches ({records} records)")
    print(f"Saved to: {output_path}")


if __name__ == "__main__":
    main()
