from rdflib import Literal, URIRef
from rdflib.namespace import DCTERMS, RDF, RDFS

from lxg.examples import ExampleAnnotator
from lxg.lexical import LexicalEntryBuilder
from lxg.linker import CrossResourceLinker
from lxg.records import (AliasRecord, ExampleRecord, FramesetRecord, LabelRecord, LayerRecord, PredicateRecord,
                         ResourceEntry, RoleRecord, RolesetRecord)
from lxg.roles import ArgumentClassifier
from lxg.rolesets import RolesetResolver
from lxg.statements import ListSink
from lxg.tables import CorrectionTables
from lxg.uris import URIMinter
from lxg.variants import NOMBANK, PROPBANK
from lxg.vocab import EXAMPLE_GRAPH, ONTOLEX, PMO, PMONB, PMOPB


def make_resolver(variant=PROPBANK, prefix='pb17', legacy=False, examples=False, links=None):
    tables = CorrectionTables()
    minter = URIMinter(prefix)
    lexical = LexicalEntryBuilder(minter, variant.pos_table, tables)
    classifier = ArgumentClassifier(variant, minter, tables)
    linker = CrossResourceLinker(minter, links or {})
    annotator = ExampleAnnotator(variant, minter, classifier) if examples else None
    return RolesetResolver(variant, minter, tables, lexical, classifier, linker, annotator=annotator, legacy=legacy)


def frameset(*rolesets, lemma='give', entry_type='v', source=None):
    entry = ResourceEntry(f'{lemma}.xml', lemma, entry_type, source)
    return FramesetRecord(entry, (PredicateRecord(lemma, tuple(rolesets)),))


def test_roleset_statements():
    resolver = make_resolver()
    sink = ListSink()
    roleset = RolesetRecord('give.01', name='transfer', roles=(RoleRecord('0', 'PAG', 'giver'),))
    resolver.convert(sink, frameset(roleset, source='pb17'))

    minter = resolver.minter
    roleset_uri = minter.roleset('give.01')
    entry = resolver.lexical.entry('give', 'v')
    conceptualization = minter.conceptualization('give', 'v', 'give.01')
    triples = sink.triples()

    assert (roleset_uri, RDF.type, PMOPB.Roleset) in triples
    assert (roleset_uri, DCTERMS.source, Literal('pb17')) in triples
    assert (entry.uri, ONTOLEX.evokes, roleset_uri) in triples
    assert (conceptualization, PMO.evokingEntry, entry.uri) in triples
    assert (conceptualization, PMO.evokedConcept, roleset_uri) in triples
    assert (minter.argument('give.01', '0'), RDF.type, PMOPB.SemanticArgument) in triples
    assert (minter.argument('give.01', '0'), PMO.core, Literal(True)) in triples
    assert resolver.log['rolesets'] == 1
    assert resolver.log['arguments'] == 1


def test_bad_roles_are_skipped():
    resolver = make_resolver()
    sink = ListSink()
    roleset = RolesetRecord('give.01', roles=(RoleRecord('7', None), RoleRecord(None, None), RoleRecord('o', None)))
    resolver.convert(sink, frameset(roleset))

    assert resolver.log['skipped_arguments'] == 1
    assert resolver.log['first_20_skipped_arguments'] == ['give.01: 7']
    assert resolver.log['no_argument'] == 1
    assert resolver.log['arguments'] == 1
    assert not any(str(s).endswith('@arg7') for s, _, _ in sink.triples())
    assert (resolver.minter.argument('give.01', '0'), PMOPB.roleClass, PMOPB.ARG0) in sink.triples()


def test_aliases_evoke_the_roleset():
    resolver = make_resolver()
    sink = ListSink()
    roleset = RolesetRecord('give.01', aliases=(
        AliasRecord('give', 'v'),
        AliasRecord('give_out', 'v'),
        AliasRecord('>', 'v'),
    ))
    resolver.convert(sink, frameset(roleset))

    roleset_uri = resolver.minter.roleset('give.01')
    evoking = {s for s, p, o in sink.triples() if p == ONTOLEX.evokes and o == roleset_uri}
    assert evoking == {resolver.lexical.entry('give', 'v').uri, resolver.lexical.entry('give_out', 'v').uri}


def test_legacy_noun_rolesets_are_prefixed():
    resolver = make_resolver(NOMBANK, 'on5', legacy=True)
    sink = ListSink()
    resolver.convert(sink, frameset(RolesetRecord('date.01'), lemma='date', entry_type='n'))
    assert (resolver.minter.roleset('n-date.01'), RDF.type, PMONB.Roleset) in sink.triples()

    resolver = make_resolver(NOMBANK, 'nb10')
    sink = ListSink()
    resolver.convert(sink, frameset(RolesetRecord('date.01'), lemma='date', entry_type='n'))
    assert (resolver.minter.roleset('date.01'), RDF.type, PMONB.Roleset) in sink.triples()


def test_roleset_bug_is_corrected():
    resolver = make_resolver()
    sink = ListSink()
    resolver.convert(sink, frameset(RolesetRecord('transfuse.101'), lemma='transfuse'))
    assert (resolver.minter.roleset('transfuse.01'), RDF.type, PMOPB.Roleset) in sink.triples()


def test_examples_are_committed_or_discarded():
    resolver = make_resolver(examples=True)
    sink = ListSink()
    good = ExampleRecord('John gave Mary a book', layers=(
        LayerRecord('rel', (LabelRecord(value='gave'),)),
        LayerRecord('arg', (LabelRecord(value='John', n='0'),)),
    ))
    bad = ExampleRecord('Nothing here', layers=(LayerRecord('rel', (LabelRecord(value='gave'),)),))
    resolver.convert(sink, frameset(RolesetRecord('give.01', roles=(RoleRecord('0', None),), examples=(good, bad))))

    stats = resolver.log['examples']
    assert stats['total_found'] == 2
    assert stats['processed'] == 1
    assert stats['skipped'] == 1
    examples = {s for s, p, o in sink.triples(EXAMPLE_GRAPH) if p == RDF.type and o == PMO.Example}
    assert len(examples) == 1

    # the single conceptualization is a target value
    conceptualization = resolver.minter.conceptualization('give', 'v', 'give.01')
    assert any(p == PMO.valueObj and o == conceptualization for _, p, o in sink.triples(EXAMPLE_GRAPH))


def test_links_are_emitted_per_lemma():
    resolver = make_resolver(links={'fn': ['fn15']})
    sink = ListSink()
    resolver.convert(sink, frameset(RolesetRecord('give.01', framenet='Giving')))
    assert resolver.linker.log['mappings'] == 2


def test_each_alias_links_its_own_page():
    resolver = make_resolver()
    sink = ListSink()
    roleset = RolesetRecord('give.01', aliases=(AliasRecord('give', 'v'), AliasRecord('give_out', 'v')))
    resolver.convert(sink, frameset(roleset))

    roleset_uri = resolver.minter.roleset('give.01')
    pages = [o for s, p, o, _ in sink.statements if s == roleset_uri and p == RDFS.seeAlso]
    assert sorted(pages) == [
        URIRef('http://verbs.colorado.edu/propbank/framesets-english-aliases/give.html'),
        URIRef('http://verbs.colorado.edu/propbank/framesets-english-aliases/give_out.html'),
    ]
