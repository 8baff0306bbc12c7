#!/usr/bin/env python3
"""
Merge the converted resources into a single dataset.

Statements emitted for the same entity by different resources (shared
lexical entries, mappings, the lexicon) collapse here; the merged dataset is
written with every known prefix bound.
"""

import json
from pathlib import Path

from rdflib import Dataset

from lxg.statements import read_dataset, write_dataset


class MergeStats:
    """Track statistics during merge process."""

    def __init__(self):
        self.files_processed = 0
        self.statements_total = 0
        self.statements_per_file = {}
        self.statements_merged = 0

    @property
    def duplicates_removed(self):
        return self.statements_total - self.statements_merged

    def to_dict(self):
        """Convert stats to dictionary for JSON serialization."""
        return {
            'files_processed': self.files_processed,
            'statements_total': self.statements_total,
            'statements_per_file': dict(self.statements_per_file),
            'statements_merged': self.statements_merged,
            'duplicates_removed': self.duplicates_removed,
        }


def collect_files(input_dir):
    input_path = Path(input_dir)
    files = []
    for pattern in ('*.trig', '*.trig.gz', '*.nq', '*.nq.gz'):
        files.extend(input_path.glob(pattern))
    return sorted(files)


def merge_files(files, stats):
    """Load every file and add its quads to one dataset."""
    merged = Dataset()
    for path in files:
        print(f"  Loading {path.name}...")
        dataset = read_dataset([path])
        count = 0
        for s, p, o, g in dataset.quads((None, None, None, None)):
            merged.add((s, p, o, g))
            count += 1
        stats.files_processed += 1
        stats.statements_total += count
        stats.statements_per_file[path.name] = count
    stats.statements_merged = sum(1 for _ in merged.quads((None, None, None, None)))
    return merged


def synthesise(input_dir='bin/converted', output_file='bin/lxg.trig.gz'):
    files = collect_files(input_dir)
    if not files:
        print(f"No statement files found in {input_dir}")
        return

    print(f"Merging {len(files)} files from {input_dir}...")
    stats = MergeStats()
    merged = merge_files(files, stats)

    print(f"Writing merged dataset to {output_file}...")
    write_dataset(merged, output_file)

    name = output_file[:-3] if output_file.endswith('.gz') else output_file
    stats_path = name.rsplit('.', 1)[0] + '_stats.json'
    with open(stats_path, 'w', encoding='utf-8') as f:
        json.dump(stats.to_dict(), f, indent=2)

    print("=" * 70)
    print("Merge complete!")
    print(f"  Files: {stats.files_processed}")
    print(f"  Statements read: {stats.statements_total}")
    print(f"  Statements written: {stats.statements_merged}")
    print(f"  Duplicates removed: {stats.duplicates_removed}")
    print("=" * 70)


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description='Merge converted resources into a single dataset.'
    )
    parser.add_argument('--input-dir', default='bin/converted',
                        help='Directory with the converted files (default: bin/converted)')
    parser.add_argument('--output', default='bin/lxg.trig.gz',
                        help='Merged output file (default: bin/lxg.trig.gz)')

    args = parser.parse_args()
    synthesise(args.input_dir, args.output)


if __name__ == '__main__':
    main()
