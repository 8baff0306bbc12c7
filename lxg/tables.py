"""
Correction tables for known errors in the source resources.

The tables are built once per run and never modified afterwards.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

# Role codes found in specific frameset files
ARGUMENT_BUGS = {
    '@': '2',  # overburden-v.xml
    'av': 'adv',  # turn-v.xml (turn.15)
    'ds': 'dis',  # assume-v.xml
    'pred': 'prd',  # flatten-v.xml
    'o': '0',  # be.xml (be.04)
    'emitter of hoot': '0',  # hoot.xml
    '8': 'tmp',  # NomBank: date, meeting
    '9': 'loc',  # NomBank: date, meeting, option
}

ROLESET_BUGS = {
    'transfuse.101': 'transfuse.01',
}

LEMMA_REWRITES = {
    'cry+down(e)': 'cry+down',
}

EXCLUDED_FILES = {
    'except-v.xml',
}

# FrameNet relations pointing at test frames
EXCLUDED_RELATED_FRAMES = {
    'Test35',
    'Test_the_test',
}


def _check_idempotent(name: str, table: Mapping[str, str]):
    for key, value in table.items():
        if value != key and value in table and table[value] != value:
            raise ValueError(f"{name}: {key!r} -> {value!r} is rewritten again to {table[value]!r}")


def _frozen(table: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(table))


@dataclass(frozen=True)
class CorrectionTables:
    """Read-only lookup tables applied before any statement is emitted."""

    argument_bugs: Mapping[str, str] = field(default_factory=lambda: _frozen(ARGUMENT_BUGS))
    roleset_bugs: Mapping[str, str] = field(default_factory=lambda: _frozen(ROLESET_BUGS))
    lemma_rewrites: Mapping[str, str] = field(default_factory=lambda: _frozen(LEMMA_REWRITES))
    excluded_files: FrozenSet[str] = frozenset(EXCLUDED_FILES)
    excluded_related_frames: FrozenSet[str] = frozenset(EXCLUDED_RELATED_FRAMES)

    def __post_init__(self):
        _check_idempotent('argument_bugs', self.argument_bugs)
        _check_idempotent('roleset_bugs', self.roleset_bugs)
        _check_idempotent('lemma_rewrites', self.lemma_rewrites)

    def fix_argument(self, code: str) -> str:
        return self.argument_bugs.get(code, code)

    def fix_roleset(self, roleset_id: str) -> str:
        return self.roleset_bugs.get(roleset_id, roleset_id)

    def fix_lemma(self, joined_lemma: str) -> str:
        return self.lemma_rewrites.get(joined_lemma, joined_lemma)

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'CorrectionTables':
        """
        Build the tables, extending the built-in ones with a JSON file.

        The file may contain any of the keys 'argument_bugs', 'roleset_bugs',
        'lemma_rewrites' (objects) and 'excluded_files',
        'excluded_related_frames' (lists).
        """
        if path is None:
            return cls()

        print(f"Loading correction tables from {path}...")
        with open(path, 'r', encoding='utf-8') as f:
            extra = json.load(f)

        return cls(
            argument_bugs=_frozen({**ARGUMENT_BUGS, **extra.get('argument_bugs', {})}),
            roleset_bugs=_frozen({**ROLESET_BUGS, **extra.get('roleset_bugs', {})}),
            lemma_rewrites=_frozen({**LEMMA_REWRITES, **extra.get('lemma_rewrites', {})}),
            excluded_files=frozenset(EXCLUDED_FILES | set(extra.get('excluded_files', []))),
            excluded_related_frames=frozenset(EXCLUDED_RELATED_FRAMES
                                              | set(extra.get('excluded_related_frames', []))),
        )
