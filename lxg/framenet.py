"""
Conversion of FrameNet frames, frame elements, lexical units and their
annotated sentences.
"""

from datetime import datetime
from typing import Dict, FrozenSet, Optional, Tuple

from rdflib import URIRef
from rdflib.namespace import DCTERMS, RDF, RDFS, SKOS

from lxg.examples import ExampleAnnotator, commit_example, example_stats
from lxg.lexical import LexicalEntryBuilder
from lxg.records import FERecord, FrameRecord, LexUnitExamples, LexUnitRecord
from lxg.retro import RetroMapper
from lxg.statements import emit
from lxg.tables import CorrectionTables
from lxg.vocab import FE_CORE_TYPES, FRAME_RELATIONS, LEXINFO, ONTOLEX, PMO, PMOFN, pos_uri

CDATE_FORMAT = '%m/%d/%Y %H:%M:%S'


def lexical_unit_lemma(name: str) -> str:
    """'give up.v' -> 'give up'"""
    lemma, _, _ = name.rpartition('.')
    return lemma or name


def parse_cdate(value: Optional[str]) -> Optional[datetime]:
    """'02/07/2001 04:12:10 PST Wed' -> datetime(2001, 2, 7, 4, 12, 10). The zone is dropped."""
    if not value:
        return None
    return datetime.strptime(' '.join(value.split()[:2]), CDATE_FORMAT)


class FrameConverter:
    """
    Emits frames and everything attached to them.

    Lexical units are remembered by ID while frames are converted, so that
    the annotated sentences read afterwards can point at them.
    """

    def __init__(self, variant, minter, tables: CorrectionTables, lexical: LexicalEntryBuilder,
                 annotator: Optional[ExampleAnnotator] = None, retro: Optional[RetroMapper] = None,
                 skip_definitions: bool = False, language: str = 'en'):
        self.variant = variant
        self.minter = minter
        self.tables = tables
        self.lexical = lexical
        self.annotator = annotator
        self.retro = retro
        self.skip_definitions = skip_definitions
        self.language = language

        self.lexunits: Dict[str, Tuple[str, URIRef]] = {}

        self.log = {
            'frames': 0,
            'frame_elements': 0,
            'lexical_units': 0,
            'relations': {
                'created': 0,
                'unknown_types': {},
                'excluded': 0,
            },
            'unknown_lexical_units': 0,
            'semantic_types': 0,
            'core_sets': 0,
            'invalid_dates': 0,
            'unknown_incorporated_fes': 0,
            'examples': example_stats(),
        }

    def _definition(self, sink, subject: URIRef, text: str):
        if not self.skip_definitions:
            emit(sink, subject, SKOS.definition, text, language=self.language)

    def _add_semtypes(self, sink, subject: URIRef, names):
        for name in names:
            emit(sink, subject, PMOFN.semType, self.minter.semantic_type(name))
            self.log['semantic_types'] += 1

    def _add_metadata(self, sink, subject: URIRef, created_by: Optional[str], created: Optional[str]):
        if created_by and created_by.strip():
            creator = self.minter.creator(created_by)
            emit(sink, subject, DCTERMS.creator, creator)
            emit(sink, creator, DCTERMS.identifier, created_by)
        try:
            emit(sink, subject, DCTERMS.created, parse_cdate(created))
        except ValueError:
            print(f"Warning! Could not parse date '{created}' of {subject}")
            self.log['invalid_dates'] += 1

    def convert_frame(self, sink, frame: FrameRecord) -> URIRef:
        frame_id = frame.name.lower()
        frame_uri = self.minter.roleset(frame_id)
        self.log['frames'] += 1

        if self.retro is not None:
            self.retro.map_frame(sink, frame.name)

        emit(sink, frame_uri, RDF.type, self.variant.predicate_class)
        emit(sink, frame_uri, RDFS.label, frame.name)
        emit(sink, frame_uri, DCTERMS.identifier, frame.id)
        page = self.variant.page(frame.name)
        emit(sink, frame_uri, RDFS.seeAlso, URIRef(page) if page else None)
        self._definition(sink, frame_uri, frame.definition)
        self._add_semtypes(sink, frame_uri, frame.semtypes)
        self._add_metadata(sink, frame_uri, frame.created_by, frame.created)

        for fe in frame.fes:
            self.convert_fe(sink, frame, frame_uri, fe)

        for relation_type, related in frame.relations:
            self.add_relation(sink, frame_uri, relation_type, related)

        for i, members in enumerate(frame.core_sets, start=1):
            self.add_core_set(sink, frame_id, frame_uri, i, members)

        fe_names = frozenset(fe.name for fe in frame.fes)
        for lu in frame.lexunits:
            self.convert_lexunit(sink, frame_id, frame_uri, lu, fe_names)

        return frame_uri

    def convert_fe(self, sink, frame: FrameRecord, frame_uri: URIRef, fe: FERecord) -> URIRef:
        frame_id = frame.name.lower()
        argument = self.minter.argument(frame_id, fe.name)
        self.log['frame_elements'] += 1

        if self.retro is not None:
            self.retro.map_role(sink, frame.name, fe.name)

        emit(sink, argument, RDF.type, self.variant.semantic_argument)
        emit(sink, argument, RDF.type, FE_CORE_TYPES.get(fe.core_type))
        emit(sink, argument, self.variant.core_property, fe.core_type in ('Core', 'Core-Unexpressed'))
        emit(sink, argument, RDFS.label, fe.name)
        emit(sink, argument, PMO.abbreviation, fe.abbrev)
        emit(sink, argument, DCTERMS.identifier, fe.id)
        self._definition(sink, argument, fe.definition)
        self._add_semtypes(sink, argument, fe.semtypes)
        self._add_metadata(sink, argument, fe.created_by, fe.created)
        emit(sink, frame_uri, PMO.semRole, argument)

        for name in fe.excludes:
            emit(sink, argument, PMOFN.excludesFE, self.minter.argument(frame_id, name))
        for name in fe.requires:
            emit(sink, argument, PMOFN.requiresFE, self.minter.argument(frame_id, name))
        return argument

    def add_core_set(self, sink, frame_id: str, frame_uri: URIRef, index: int, members) -> URIRef:
        core_set = URIRef(f"{frame_uri}_coreSet{index}")
        emit(sink, frame_uri, PMOFN.feCoreSet, core_set)
        emit(sink, core_set, RDF.type, PMOFN.FECoreSet)
        for name in members:
            emit(sink, core_set, PMO.item, self.minter.argument(frame_id, name))
        self.log['core_sets'] += 1
        return core_set

    def add_relation(self, sink, frame_uri: URIRef, relation_type: str, related: str) -> bool:
        relations_log = self.log['relations']
        prop = FRAME_RELATIONS.get(relation_type)
        if prop is None:
            relations_log['unknown_types'][relation_type] = relations_log['unknown_types'].get(relation_type, 0) + 1
            return False
        if related in self.tables.excluded_related_frames:
            relations_log['excluded'] += 1
            return False
        emit(sink, frame_uri, prop, self.minter.roleset(related.lower()))
        relations_log['created'] += 1
        return True

    def convert_lexunit(self, sink, frame_id: str, frame_uri: URIRef, lu: LexUnitRecord,
                        fe_names: Optional[FrozenSet[str]] = None) -> URIRef:
        if lu.lexemes:
            entry = self.lexical.build(sink, ' '.join(lx.name for lx in lu.lexemes), lu.pos,
                                       token_pos=[lx.pos or lu.pos for lx in lu.lexemes])
        else:
            entry = self.lexical.build(sink, lexical_unit_lemma(lu.name), lu.pos)

        lu_uri = self.minter.conceptualization(entry.uri_lemma, lu.pos, frame_id)
        self.log['lexical_units'] += 1

        emit(sink, lu_uri, RDF.type, PMOFN.LexicalUnit)
        emit(sink, lu_uri, RDF.type, PMO.Conceptualization)
        emit(sink, lu_uri, PMO.evokingEntry, entry.uri)
        emit(sink, lu_uri, PMO.evokedConcept, frame_uri)
        emit(sink, entry.uri, ONTOLEX.evokes, frame_uri)
        emit(sink, lu_uri, RDFS.label, lu.name)
        emit(sink, lu_uri, DCTERMS.identifier, lu.id)
        emit(sink, lu_uri, LEXINFO.partOfSpeech, pos_uri(lu.pos, self.variant.pos_table))
        if lu.status:
            emit(sink, lu_uri, PMOFN.status, self.minter.lu_status(lu.status))
        self._definition(sink, lu_uri, lu.definition)
        self._add_semtypes(sink, lu_uri, lu.semtypes)
        self._add_metadata(sink, lu_uri, lu.created_by, lu.created)

        incorporated = (lu.incorporated_fe or '').strip()
        if incorporated and fe_names is not None and incorporated in fe_names:
            emit(sink, lu_uri, PMOFN.incorporatedFE, self.minter.argument(frame_id, incorporated))
        elif incorporated:
            print(f"Warning! Incorporated FE '{incorporated}' of LU {lu.name} is not in frame {frame_id}")
            self.log['unknown_incorporated_fes'] += 1

        self.lexunits[lu.id] = (frame_id, lu_uri)
        return lu_uri

    def convert_examples(self, sink, lu_examples: LexUnitExamples) -> int:
        """Annotated sentences of one lexical unit. Returns the number kept."""
        if self.annotator is None:
            return 0

        known = self.lexunits.get(lu_examples.lu_id)
        if known is None:
            print(f"Warning! LU {lu_examples.lu_id} is not present in any frame, skipping its examples")
            self.log['unknown_lexical_units'] += 1
            return 0

        frame_id, lu_uri = known
        targets = [self.minter.roleset(frame_id), lu_uri]
        kept = 0
        for sentence in lu_examples.sentences:
            result = self.annotator.annotate(sentence, frame_id, targets)
            if commit_example(sink, result, self.log['examples']):
                kept += 1
        return kept
