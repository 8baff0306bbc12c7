from rdflib import Literal
from rdflib.namespace import RDF, SKOS

import pytest

from lxg.errors import ClassificationError, FailureKind
from lxg.roles import ArgumentCategory, ArgumentClassifier, categorize, classify, role_code
from lxg.statements import ListSink
from lxg.tables import CorrectionTables
from lxg.uris import URIMinter
from lxg.variants import NOMBANK, PROPBANK, get_variant
from lxg.vocab import PMO, PMONB, PMOPB


def make_classifier(variant=PROPBANK, skip_definitions=False):
    return ArgumentClassifier(variant, URIMinter('pb17'), CorrectionTables(), skip_definitions=skip_definitions)


def test_role_code():
    assert role_code('0', None) == '0'
    assert role_code('M', 'TMP') == 'tmp'
    assert role_code('m', None) == 'm'
    assert role_code(None, 'LOC') == 'loc'
    assert role_code('', '') is None
    assert role_code(None, None) is None


def test_categories():
    adjuncts = PROPBANK.adjunct_codes
    assert categorize('0', adjuncts) == ArgumentCategory.NUMERIC
    assert categorize('6', adjuncts) == ArgumentCategory.NUMERIC
    assert categorize('tmp', adjuncts) == ArgumentCategory.ADDITIONAL
    assert categorize('prep_on', adjuncts) == ArgumentCategory.PREPOSITION
    assert categorize('prep', adjuncts) == ArgumentCategory.PREPOSITION
    assert categorize('a', adjuncts) == ArgumentCategory.AGENT
    assert categorize('m', adjuncts) == ArgumentCategory.M_FUNCTION
    assert categorize(None, adjuncts) == ArgumentCategory.NULL


def test_numeric_wins_over_other_categories():
    # '1' is never an adjunct even if a table lists it as one
    assert categorize('1', frozenset({'1'})) == ArgumentCategory.NUMERIC


def test_unknown_code_is_a_classification_failure():
    with pytest.raises(ClassificationError) as info:
        categorize('7', PROPBANK.adjunct_codes)
    assert info.value.code == '7'
    assert info.value.kind == FailureKind.CLASSIFICATION_FAILURE


def test_adjuncts_depend_on_the_variant():
    tables = CorrectionTables()
    assert classify('gol', PROPBANK, tables) == ('gol', ArgumentCategory.ADDITIONAL)
    with pytest.raises(ClassificationError):
        classify('gol', NOMBANK, tables)


def test_codes_are_corrected_before_classification():
    tables = CorrectionTables()
    assert classify('o', PROPBANK, tables) == ('0', ArgumentCategory.NUMERIC)
    assert classify('8', NOMBANK, tables) == ('tmp', ArgumentCategory.ADDITIONAL)
    assert classify(None, PROPBANK, tables) == (None, ArgumentCategory.NULL)


def test_numeric_argument_statements():
    classifier = make_classifier()
    sink = ListSink()
    roleset = classifier.minter.roleset('give.01')
    code, category = classifier.classify('0')
    argument = classifier.argument_uri('give.01', code, category)
    classifier.add_argument(sink, roleset, argument, code, category, function_tag='pag', definition='giver')

    triples = sink.triples()
    assert (argument, RDF.type, PMOPB.SemanticArgument) in triples
    assert (argument, PMO.core, Literal(True)) in triples
    assert (argument, PMOPB.roleClass, PMOPB.ARG0) in triples
    assert (argument, PMOPB.tag, PMOPB.PAG) in triples
    assert (argument, SKOS.definition, Literal('giver', lang='en')) in triples
    assert (roleset, PMO.semRole, argument) in triples


def test_modifier_argument_is_not_core():
    classifier = make_classifier(skip_definitions=True)
    sink = ListSink()
    roleset = classifier.minter.roleset('give.01')
    code, category = classifier.classify('tmp')
    argument = classifier.argument_uri('give.01', code, category)
    classifier.add_argument(sink, roleset, argument, code, category, definition='when')

    assert argument.endswith('@argm-tmp')
    triples = sink.triples()
    assert (argument, PMO.core, Literal(False)) in triples
    assert (argument, PMOPB.roleClass, PMOPB['ARGM-TMP']) in triples
    assert not any(p == SKOS.definition for _, p, _ in triples)


def test_adjuncts_are_attached_to_every_roleset():
    classifier = make_classifier(NOMBANK)
    sink = ListSink()
    roleset = classifier.minter.roleset('date.01')
    classifier.add_adjuncts(sink, 'date.01', roleset)

    roles = {o for s, p, o in sink.triples() if p == PMO.semRole}
    assert len(roles) == len(NOMBANK.adjunct_codes)
    assert (classifier.minter.argument('date.01', 'm-loc'), PMONB.roleClass, PMONB['ARGM-LOC']) in sink.triples()


def test_get_variant():
    assert get_variant('PropBank') is PROPBANK
    with pytest.raises(ValueError):
        get_variant('verbnet')
