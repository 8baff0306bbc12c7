"""
Conversion of one frameset entry (PropBank / NomBank): rolesets, the lexical
entries evoking them, their arguments, links and examples.
"""

from dataclasses import dataclass
from typing import List, Optional

from rdflib import URIRef
from rdflib.namespace import DCTERMS, RDF, RDFS, SKOS

from lxg.errors import ClassificationError
from lxg.examples import ExampleAnnotator, commit_example, example_stats
from lxg.lexical import LexicalEntry, LexicalEntryBuilder
from lxg.linker import CrossResourceLinker
from lxg.records import FramesetRecord, PredicateRecord, RolesetRecord
from lxg.roles import ArgumentClassifier, role_code
from lxg.statements import emit
from lxg.tables import CorrectionTables
from lxg.vocab import ONTOLEX, PMO

ALIAS_PLACEHOLDER = '>'
LEGACY_NOUN_PREFIX = 'n-'


@dataclass(frozen=True)
class EvokingLemma:
    """A lexical entry evoking a roleset, with the links it carries."""
    entry: LexicalEntry
    framenet: Optional[str] = None
    verbnet: Optional[str] = None
    pb_source: Optional[str] = None

    @property
    def uri_lemma(self) -> str:
        return self.entry.uri_lemma

    @property
    def pos(self) -> str:
        return self.entry.pos


class RolesetResolver:

    def __init__(self, variant, minter, tables: CorrectionTables, lexical: LexicalEntryBuilder,
                 classifier: ArgumentClassifier, linker: CrossResourceLinker,
                 annotator: Optional[ExampleAnnotator] = None, legacy: bool = False,
                 skip_definitions: bool = False, language: str = 'en'):
        self.variant = variant
        self.minter = minter
        self.tables = tables
        self.lexical = lexical
        self.classifier = classifier
        self.linker = linker
        self.annotator = annotator
        self.legacy = legacy
        self.skip_definitions = skip_definitions
        self.language = language

        self.log = {
            'rolesets': 0,
            'arguments': 0,
            'skipped_arguments': 0,
            'first_20_skipped_arguments': [],
            'no_argument': 0,
            'examples': example_stats(),
        }

    def roleset_id(self, raw_id: str, entry_type: str) -> str:
        """Corrected roleset identifier; legacy noun rolesets get their own prefix."""
        roleset_id = self.tables.fix_roleset(raw_id.strip())
        if self.legacy and entry_type == 'n':
            roleset_id = LEGACY_NOUN_PREFIX + roleset_id
        return roleset_id

    def convert(self, sink, frameset: FramesetRecord):
        for predicate in frameset.predicates:
            self.convert_predicate(sink, frameset, predicate)

    def convert_predicate(self, sink, frameset: FramesetRecord, predicate: PredicateRecord):
        main_type = frameset.entry.type
        entry = self.lexical.build(sink, predicate.lemma, main_type)

        for roleset in predicate.rolesets:
            lemmas = self.evoking_lemmas(sink, roleset, entry)
            self.convert_roleset(sink, frameset, roleset, lemmas)

    def evoking_lemmas(self, sink, roleset: RolesetRecord, entry: LexicalEntry) -> List[EvokingLemma]:
        """Aliases of the roleset, or the predicate lemma when none is declared."""
        lemmas = []
        for alias in roleset.aliases:
            if alias.value.strip() == ALIAS_PLACEHOLDER:
                continue
            alias_entry = self.lexical.build(sink, alias.value, alias.pos or entry.pos)
            lemmas.append(EvokingLemma(alias_entry, alias.framenet, alias.verbnet, roleset.source))

        if not lemmas:
            lemmas.append(EvokingLemma(entry, roleset.framenet, roleset.vncls, roleset.source))
        return lemmas

    def convert_roleset(self, sink, frameset: FramesetRecord, roleset: RolesetRecord,
                        lemmas: List[EvokingLemma]) -> URIRef:
        roleset_id = self.roleset_id(roleset.id, frameset.entry.type)
        roleset_uri = self.minter.roleset(roleset_id)
        self.log['rolesets'] += 1

        emit(sink, roleset_uri, RDF.type, self.variant.predicate_class)
        emit(sink, roleset_uri, RDFS.label, roleset_id)
        emit(sink, roleset_uri, DCTERMS.source, frameset.entry.source)
        if not self.skip_definitions:
            emit(sink, roleset_uri, SKOS.definition, roleset.name, language=self.language)

        conceptualizations = []
        for lemma in lemmas:
            page = self.variant.page('_'.join(lemma.entry.tokens))
            emit(sink, roleset_uri, RDFS.seeAlso, URIRef(page) if page else None)
            emit(sink, lemma.entry.uri, ONTOLEX.evokes, roleset_uri)

            conceptualization = self.minter.conceptualization(lemma.uri_lemma, lemma.pos, roleset_id)
            emit(sink, conceptualization, RDF.type, PMO.Conceptualization)
            emit(sink, conceptualization, PMO.evokingEntry, lemma.entry.uri)
            emit(sink, conceptualization, PMO.evokedConcept, roleset_uri)
            conceptualizations.append(conceptualization)

            self.linker.link_roleset(sink, roleset_id, lemma.uri_lemma, lemma.pos,
                                     framenet=lemma.framenet, verbnet=lemma.verbnet, pb_source=lemma.pb_source)

        self.classifier.add_adjuncts(sink, roleset_id, roleset_uri)

        for role in roleset.roles:
            try:
                code, category = self.classifier.classify(role_code(role.n, role.f))
            except ClassificationError as e:
                print(f"Warning! {e} in {roleset_id}, skipping argument")
                self.log['skipped_arguments'] += 1
                if len(self.log['first_20_skipped_arguments']) < 20:
                    self.log['first_20_skipped_arguments'].append(f"{roleset_id}: {e.code}")
                continue
            if code is None:
                self.log['no_argument'] += 1
                continue

            argument_uri = self.classifier.argument_uri(roleset_id, code, category)
            self.classifier.add_argument(sink, roleset_uri, argument_uri, code, category,
                                         function_tag=role.f, definition=role.descr)
            self.log['arguments'] += 1

            for lemma in lemmas:
                self.linker.link_role(sink, roleset_id, argument_uri, role, [(lemma.uri_lemma, lemma.pos)])

        if self.annotator is not None:
            targets = [roleset_uri]
            if len(conceptualizations) == 1:
                targets.append(conceptualizations[0])
            for example in roleset.examples:
                commit_example(sink, self.annotator.annotate(example, roleset_id, targets), self.log['examples'])

        return roleset_uri

