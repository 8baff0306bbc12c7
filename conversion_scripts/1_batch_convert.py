#!/usr/bin/env python3
"""
Batch convert lexical resources (PropBank, NomBank, FrameNet releases) to RDF.

Resources are described in a JSON file, one object per resource, e.g.

    [
      {"input": "raw/propbank-1.7/frames", "variant": "propbank", "prefix": "pb17",
       "extract_examples": true, "links": {"vn": ["vn32"], "fn": ["fn16"]}},
      {"input": "raw/fndata-1.6", "variant": "framenet", "prefix": "fn16",
       "retro_file": "raw/fndata-1.6/frameDiff.xml", "retro_prefix": "fn15"}
    ]

Every key except 'input' is a field of ConversionConfig.
"""

import json
from dataclasses import fields
from pathlib import Path

from lxg.converters import ConversionConfig, LexicalResourceConverter
from lxg.errors import ConversionError

CONFIG_FIELDS = {f.name for f in fields(ConversionConfig)}


def load_jobs(jobs_file):
    """
    Read the resource descriptions.

    Args:
        jobs_file: path to the JSON file

    Returns:
        list: (input path, ConversionConfig) pairs
    """
    with open(jobs_file, 'r', encoding='utf-8') as f:
        raw_jobs = json.load(f)

    jobs = []
    for job in raw_jobs:
        unknown = set(job) - CONFIG_FIELDS - {'input'}
        if unknown:
            raise ValueError(f"Unknown keys in job {job.get('prefix')}: {sorted(unknown)}")
        options = {key: value for key, value in job.items() if key != 'input'}
        if 'links' in options:
            options['links'] = {kind: tuple(prefixes) for kind, prefixes in options['links'].items()}
        if 'external_entries' in options:
            options['external_entries'] = frozenset(options['external_entries'])
        jobs.append((job['input'], ConversionConfig(**options)))
    return jobs


def batch_convert(jobs_file, output_dir='bin/converted', output_format='trig.gz'):
    """
    Convert every resource listed in the jobs file.

    Args:
        jobs_file: JSON file describing the resources
        output_dir: Directory to save the converted files
        output_format: Output extension ('trig', 'trig.gz', 'nq', 'nq.gz')
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    jobs = load_jobs(jobs_file)
    print(f"Found {len(jobs)} resources to convert")
    print()

    success_count = 0
    error_count = 0
    skipped_count = 0

    for i, (input_path, config) in enumerate(jobs, 1):
        print(f"[{i}/{len(jobs)}] Processing {config.prefix} ({config.variant})...")

        output_filename = f"{config.prefix}.{output_format}"
        output_file = output_path / output_filename

        # Check if output already exists
        if output_file.exists():
            print(f"  ⊘ Skipping {config.prefix} (output {output_filename} already exists)")
            skipped_count += 1
            continue

        try:
            converter = LexicalResourceConverter(config)
            converter.convert(input_path)
            converter.save(str(output_file))
            print(f"  ✓ Converted to {output_filename}")
            success_count += 1
        except (ConversionError, OSError, ValueError) as e:
            print(f"  ✗ Error converting {config.prefix}: {e}")
            error_count += 1

        print()

    # Print summary
    print("=" * 70)
    print("Batch conversion complete!")
    print(f"  Successful: {success_count}")
    print(f"  Skipped: {skipped_count}")
    print(f"  Errors: {error_count}")
    print(f"  Total: {len(jobs)}")
    print(f"  Output directory: {output_dir}")
    print("=" * 70)


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description='Batch convert lexical resources to RDF.'
    )
    parser.add_argument(
        '--jobs',
        default='bin/resources.json',
        help='JSON file describing the resources to convert (default: bin/resources.json)'
    )
    parser.add_argument(
        '--output-dir',
        default='bin/converted',
        help='Directory to save converted files (default: bin/converted)'
    )
    parser.add_argument(
        '--format',
        default='trig.gz',
        choices=['trig', 'trig.gz', 'nq', 'nq.gz'],
    )

    args = parser.parse_args()

    batch_convert(
        jobs_file=args.jobs,
        output_dir=args.output_dir,
        output_format=args.format
    )


if __name__ == '__main__':
    main()
