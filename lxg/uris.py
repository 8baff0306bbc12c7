"""
Deterministic URI minting.

Every identifier is a pure function of its semantic inputs, so that the
statements produced for the same entity by different records (or different
runs) collapse when the output is deduplicated.
"""

import hashlib
import re
import zlib
from typing import Iterable, Optional

from rdflib import URIRef

from lxg.vocab import RESOURCE_NS

SEPARATOR = '-'
ARGUMENT_SEPARATOR = '@'

EXAMPLE_PREFIX = 'example'
CONCEPTUALIZATION_PREFIX = 'co'
LEXICAL_ENTRY_PREFIX = 'le'
MAPPING_PREFIX = 'mapping'
INFLECTION_PREFIX = 'inflection'

_UNSAFE_RE = re.compile(r'[^a-z0-9_+.\-]')


def normalize_part(part) -> str:
    """Lower-case a URI part and drop everything outside the safe set."""
    if part is None:
        return ''
    return _UNSAFE_RE.sub('', str(part).lower())


def _label_part(name) -> str:
    """'Physical_entity', 'Sentient being' -> 'physical_entity', 'sentient_being'"""
    return normalize_part(re.sub(r'[\s\-]+', '_', str(name).strip()))


def content_hash(text: str) -> str:
    """8 hex digit CRC-32 of the text. Collisions are possible and accepted."""
    return f"{zlib.crc32(text.encode('utf-8')) & 0xffffffff:08x}"


def _short_sha1(text: str, n: int = 16) -> str:
    return hashlib.sha1(text.encode('utf-8')).hexdigest()[:n]


class URIMinter:
    """
    Mints the URIs of one resource (e.g. PropBank 1.7, prefix 'pb17').

    Sibling resources are addressed by passing their prefix explicitly
    (e.g. roleset('give-13.1', prefix='vn32')).
    """

    def __init__(self, prefix: str, language: str = 'en', arg_label: str = 'arg',
                 namespace: str = RESOURCE_NS):
        self.prefix = normalize_part(prefix)
        self.language = normalize_part(language)
        self.arg_label = arg_label
        self.namespace = namespace

    def _uri(self, *parts) -> URIRef:
        return URIRef(self.namespace + SEPARATOR.join(parts))

    def roleset_part(self, roleset_id: str, prefix: Optional[str] = None) -> str:
        prefix = self.prefix if prefix is None else normalize_part(prefix)
        return prefix + SEPARATOR + normalize_part(roleset_id)

    def roleset(self, roleset_id: str, prefix: Optional[str] = None) -> URIRef:
        return self._uri(self.roleset_part(roleset_id, prefix))

    def argument(self, roleset_id: str, code: str, prefix: Optional[str] = None,
                 label: Optional[str] = None) -> URIRef:
        label = self.arg_label if label is None else label
        return URIRef(self.roleset(roleset_id, prefix) + ARGUMENT_SEPARATOR
                      + normalize_part(label) + normalize_part(code))

    def lexicon(self) -> URIRef:
        return self._uri(self.prefix, 'lexicon', self.language)

    def lexical_entry(self, uri_lemma: str, pos: str) -> URIRef:
        return self._uri(LEXICAL_ENTRY_PREFIX, self.language, normalize_part(uri_lemma), normalize_part(pos))

    def conceptualization(self, uri_lemma: str, pos: str, roleset_id: str,
                          prefix: Optional[str] = None) -> URIRef:
        return self._uri(CONCEPTUALIZATION_PREFIX, normalize_part(pos), normalize_part(uri_lemma),
                         self.roleset_part(roleset_id, prefix))

    def example(self, roleset_id: str, normalized_text: str) -> URIRef:
        return URIRef(self.roleset(roleset_id) + SEPARATOR + EXAMPLE_PREFIX + '_' + content_hash(normalized_text))

    def annotation_set(self, example_uri: URIRef, target_start: Optional[int] = None) -> URIRef:
        if target_start is None:
            return URIRef(f"{example_uri}_annSet")
        return URIRef(f"{example_uri}_annSet_{target_start}")

    def annotation(self, annotation_set_uri: URIRef, suffix: str) -> URIRef:
        return URIRef(f"{annotation_set_uri}_{normalize_part(suffix)}")

    def markable(self, example_uri: URIRef, begin: int, end: int) -> URIRef:
        return URIRef(f"{example_uri}_mark_{begin}_{end}")

    def mapping(self, items: Iterable[URIRef]) -> URIRef:
        key = ' '.join(str(item) for item in items)
        return self._uri(MAPPING_PREFIX, _short_sha1(key))

    def inflection(self, *values: Optional[str]) -> URIRef:
        parts = [normalize_part(v) or 'x' for v in values]
        return self._uri(INFLECTION_PREFIX, *parts)


    def semantic_type(self, name: str) -> URIRef:
        return URIRef(f"{self._uri(self.prefix, _label_part(name))}_semType")

    def creator(self, name: str) -> URIRef:
        return URIRef(f"{self.namespace}{_label_part(name)}_Creator")

    def lu_status(self, name: str) -> URIRef:
        return URIRef(f"{self._uri(self.prefix, _label_part(name))}_LUStatus")
