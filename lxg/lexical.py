"""
Lexical entries for predicate lemmas and their aliases.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional, Sequence, Tuple

from rdflib import URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS

from lxg.statements import emit
from lxg.tables import CorrectionTables
from lxg.uris import SEPARATOR, URIMinter
from lxg.vocab import DECOMP, LEXINFO, LIME, ONTOLEX, language_uri, pos_name, pos_uri

JOIN_MARKER = '+'
WORD_SEPARATORS = re.compile(r'[_ ]+')


@dataclass(frozen=True)
class LexicalEntry:
    uri: URIRef
    tokens: Tuple[str, ...]
    pos: str  # POS code of the whole entry
    token_pos: Tuple[str, ...]  # one code per token

    @property
    def lemma(self) -> str:
        return ' '.join(self.tokens)

    @property
    def uri_lemma(self) -> str:
        return JOIN_MARKER.join(self.tokens)

    @property
    def is_multiword(self) -> bool:
        return len(self.tokens) > 1


def canonical_tokens(raw_lemma: str, tables: CorrectionTables) -> Tuple[str, ...]:
    """
    Tokens of a raw lemma: separators become the join marker, the joined form
    goes through the lemma rewrite table, then it is split on the marker.

    Args:
        raw_lemma: lemma as found in the source ('cry_down', 'give up', 'be')
        tables: correction tables of the run

    Returns:
        Tuple of non-empty tokens
    """
    joined = WORD_SEPARATORS.sub(JOIN_MARKER, raw_lemma.strip())
    joined = tables.fix_lemma(joined)
    return tuple(token for token in joined.split(JOIN_MARKER) if token)


class LexicalEntryBuilder:
    """Mints lexical entries and emits their statements into a given sink."""

    def __init__(self, minter: URIMinter, pos_table: Mapping[str, URIRef], tables: CorrectionTables,
                 language: str = 'en', external_entries: FrozenSet[str] = frozenset(),
                 external_lexicon_ns: Optional[str] = None):
        self.minter = minter
        self.pos_table = pos_table
        self.tables = tables
        self.language = language
        self.external_entries = external_entries
        self.external_lexicon_ns = external_lexicon_ns
        self.lexicon = minter.lexicon()

    def entry(self, raw_lemma: str, pos: str, token_pos: Optional[Sequence[str]] = None) -> LexicalEntry:
        tokens = canonical_tokens(raw_lemma, self.tables)
        if token_pos is not None and len(token_pos) == len(tokens):
            token_pos = tuple(token_pos)
        else:
            token_pos = (pos,) * len(tokens)
        uri = self.minter.lexical_entry(JOIN_MARKER.join(tokens), pos_name(pos, self.pos_table))
        return LexicalEntry(uri, tokens, pos, token_pos)

    def external_entry(self, entry: LexicalEntry) -> Optional[URIRef]:
        """Entry of the external lexicon with the same lemma and POS, if loaded."""
        if self.external_lexicon_ns is None:
            return None
        candidate = self.external_lexicon_ns + entry.uri_lemma + SEPARATOR + entry.pos
        if candidate in self.external_entries:
            return URIRef(candidate)
        return None

    def add_lexicon(self, sink):
        emit(sink, self.lexicon, RDF.type, LIME.Lexicon)
        emit(sink, self.lexicon, LIME.language, self.language)
        emit(sink, self.lexicon, DCTERMS.language, language_uri(self.language))

    def build(self, sink, raw_lemma: str, pos: str, token_pos: Optional[Sequence[str]] = None) -> LexicalEntry:
        entry = self.entry(raw_lemma, pos, token_pos)
        self._add_entry(sink, entry)

        if entry.is_multiword:
            for i, (token, token_code) in enumerate(zip(entry.tokens, entry.token_pos), start=1):
                component = URIRef(f"{entry.uri}{SEPARATOR}comp{i}")
                part = self.entry(token, token_code)
                self._add_entry(sink, part)
                emit(sink, component, RDF.type, DECOMP.Component)
                emit(sink, component, DECOMP.correspondsTo, part.uri)
                emit(sink, entry.uri, DECOMP.constituent, component)
                emit(sink, entry.uri, RDF[f"_{i}"], component)

        return entry

    def _add_entry(self, sink, entry: LexicalEntry):
        form = URIRef(f"{entry.uri}{SEPARATOR}form")
        entry_type = ONTOLEX.MultiwordExpression if entry.is_multiword else ONTOLEX.Word

        emit(sink, entry.uri, RDF.type, ONTOLEX.LexicalEntry)
        emit(sink, entry.uri, RDF.type, entry_type)
        emit(sink, entry.uri, RDFS.label, entry.lemma, language=self.language)
        emit(sink, entry.uri, LIME.language, self.language)
        emit(sink, entry.uri, LEXINFO.partOfSpeech, pos_uri(entry.pos, self.pos_table))
        emit(sink, entry.uri, ONTOLEX.canonicalForm, form)
        emit(sink, form, RDF.type, ONTOLEX.Form)
        emit(sink, form, ONTOLEX.writtenRep, entry.lemma, language=self.language)
        emit(sink, self.lexicon, LIME.entry, entry.uri)
        emit(sink, entry.uri, OWL.sameAs, self.external_entry(entry))
