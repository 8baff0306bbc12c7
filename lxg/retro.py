"""
Alignment of frames and frame elements with the previous release of the
same resource.
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from lxml import etree
from rdflib import URIRef

from lxg.errors import ConversionError, FailureKind
from lxg.uris import ARGUMENT_SEPARATOR

# (previous tag, current tag, previous frame name attribute) per release
RELEASE_TAGS = {
    '1.6': ('r1-5', 'r1-6', 'r1-5_FrameName'),
    '1.7': ('r1.6', 'r1.7', 'r1.6_FrameName'),
}
DEFAULT_VERSION = '1.6'


def role_key(frame: str, role: str) -> str:
    return frame.lower() + ARGUMENT_SEPARATOR + role.lower()


@dataclass(frozen=True)
class FrameDiff:
    """Keys added in the current release, and current key -> previous key."""
    added: FrozenSet[str] = frozenset()
    changed: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, added, changed) -> 'FrameDiff':
        return cls(frozenset(k.lower() for k in added),
                   MappingProxyType({k.lower(): v.lower() for k, v in changed.items()}))

    def prior_frame(self, frame: str) -> Optional[str]:
        key = frame.lower()
        if key in self.added:
            return None
        return self.changed.get(key, key)

    def prior_role(self, frame: str, role: str) -> Optional[Tuple[str, str]]:
        """(previous frame, previous role), None for roles added in this release."""
        key = role_key(frame, role)
        if key in self.added:
            return None
        if key in self.changed:
            prior_frame, _, prior_role = self.changed[key].partition(ARGUMENT_SEPARATOR)
            return prior_frame, prior_role
        frame = frame.lower()
        return self.changed.get(frame, frame), role.lower()


def _text(element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ''
    return child.text.strip().lower()


def load_frame_diff(path: str, this_version: str = DEFAULT_VERSION) -> FrameDiff:
    """
    Read a frame diff file.

    Args:
        path: XML file with FrameDiff and FrameElementDiff sections
        this_version: current release ('1.6' or '1.7'), selects the tag names

    Returns:
        FrameDiff with lower-cased keys
    """
    if not os.path.exists(path):
        raise ConversionError(f"Diff file not found: {path}", FailureKind.MISSING_RESOURCE)

    tag_previous, tag_current, fn_previous = RELEASE_TAGS.get(this_version, RELEASE_TAGS[DEFAULT_VERSION])

    print(f"Loading frame diff from {path}...")
    try:
        tree = etree.parse(path)
    except etree.XMLSyntaxError as e:
        raise ConversionError(f"Unreadable diff file {path}: {e}", FailureKind.MISSING_RESOURCE) from e

    added = set()
    changed = {}

    for frame in tree.xpath('//FrameDiff/Added/Frame'):
        added.add((frame.text or '').strip().lower())

    for frame in tree.xpath('//FrameDiff/Changed/Frame'):
        changed[_text(frame, tag_current)] = _text(frame, tag_previous)

    for fe in tree.xpath('//FrameElementDiff/Added/FrameElement'):
        added.add(role_key(fe.get('FrameName', ''), (fe.text or '').strip()))

    for fe in tree.xpath('//FrameElementDiff/Changed/FrameElement'):
        frame = fe.get('FrameName', '').lower()
        prior_frame = (fe.get(fn_previous) or frame).lower()
        changed[role_key(frame, _text(fe, tag_current))] = role_key(prior_frame, _text(fe, tag_previous))

    print(f"Loaded {len(added)} added and {len(changed)} changed keys")
    return FrameDiff.build(added, changed)


class RetroMapper:
    """
    Emits, for every entity not added in the current release, a mapping to
    its counterpart in the previous release (addressed through prior_prefix).
    """

    def __init__(self, diff: FrameDiff, minter, linker, prior_prefix: str):
        self.diff = diff
        self.minter = minter
        self.linker = linker
        self.prior_prefix = prior_prefix
        self.log = {
            'frames_mapped': 0,
            'roles_mapped': 0,
            'added_skipped': 0,
        }

    def map_frame(self, sink, frame_name: str) -> Optional[URIRef]:
        prior = self.diff.prior_frame(frame_name)
        if prior is None:
            self.log['added_skipped'] += 1
            return None
        self.log['frames_mapped'] += 1
        return self.linker.add_mappings(sink, self.minter.roleset(frame_name.lower()),
                                        self.minter.roleset(prior, prefix=self.prior_prefix))

    def map_role(self, sink, frame_name: str, role_name: str) -> Optional[URIRef]:
        prior = self.diff.prior_role(frame_name, role_name)
        if prior is None:
            self.log['added_skipped'] += 1
            return None
        prior_frame, prior_role = prior
        self.log['roles_mapped'] += 1
        return self.linker.add_mappings(
            sink,
            self.minter.roleset(frame_name.lower()),
            self.minter.roleset(prior_frame, prefix=self.prior_prefix),
            argument=self.minter.argument(frame_name.lower(), role_name.lower()),
            other_argument=self.minter.argument(prior_frame, prior_role, prefix=self.prior_prefix),
        )
