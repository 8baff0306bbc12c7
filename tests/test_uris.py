from rdflib import URIRef

from lxg.uris import URIMinter, content_hash, normalize_part
from lxg.vocab import RESOURCE_NS


def test_normalize_part_lowercases_and_strips_unsafe_characters():
    assert normalize_part('Give.01') == 'give.01'
    assert normalize_part('cry+down(e)') == 'cry+downe'
    assert normalize_part('Body_part') == 'body_part'
    assert normalize_part('a b/c') == 'abc'
    assert normalize_part(None) == ''


def test_content_hash_is_eight_hex_digits():
    h = content_hash('the cat ran quickly')
    assert len(h) == 8
    assert int(h, 16) >= 0
    assert h == content_hash('the cat ran quickly')
    assert h != content_hash('the cat ran slowly')


def test_minting_is_deterministic():
    a = URIMinter('pb17')
    b = URIMinter('pb17')
    assert a.roleset('give.01') == b.roleset('give.01')
    assert a.argument('give.01', '0') == b.argument('give.01', '0')
    assert a.lexical_entry('give', 'verb') == b.lexical_entry('give', 'verb')
    assert a.example('give.01', 'john gave mary a book') == b.example('give.01', 'john gave mary a book')
    assert a.mapping([a.roleset('give.01'), a.roleset('give-13.1', prefix='vn32')]) == \
        b.mapping([b.roleset('give.01'), b.roleset('give-13.1', prefix='vn32')])


def test_uri_shapes():
    minter = URIMinter('pb17')
    assert minter.roleset('give.01') == URIRef(RESOURCE_NS + 'pb17-give.01')
    assert minter.roleset('give-13.1', prefix='vn32') == URIRef(RESOURCE_NS + 'vn32-give-13.1')
    assert minter.argument('give.01', '0') == URIRef(RESOURCE_NS + 'pb17-give.01@arg0')
    assert minter.argument('give-13.1', 'agent', prefix='vn32', label='') == \
        URIRef(RESOURCE_NS + 'vn32-give-13.1@agent')
    assert minter.lexicon() == URIRef(RESOURCE_NS + 'pb17-lexicon-en')
    assert minter.lexical_entry('cry+down', 'verb') == URIRef(RESOURCE_NS + 'le-en-cry+down-verb')
    assert minter.conceptualization('give', 'v', 'give.01') == URIRef(RESOURCE_NS + 'co-v-give-pb17-give.01')


def test_example_annotation_and_markable_uris_extend_the_example():
    minter = URIMinter('pb17')
    example = minter.example('give.01', 'the cat ran quickly')
    assert str(example).startswith(RESOURCE_NS + 'pb17-give.01-example_')
    assert len(str(example).rsplit('_', 1)[1]) == 8

    annotation_set = minter.annotation_set(example)
    assert annotation_set == URIRef(f'{example}_annSet')
    assert minter.annotation_set(example, 8) == URIRef(f'{example}_annSet_8')
    assert minter.annotation(annotation_set, 'arg1') == URIRef(f'{example}_annSet_arg1')
    assert minter.markable(example, 8, 11) == URIRef(f'{example}_mark_8_11')


def test_mapping_depends_on_item_order_and_items():
    minter = URIMinter('pb17')
    x, y = minter.roleset('give.01'), minter.roleset('giving', prefix='fn15')
    assert minter.mapping([x, y]) != minter.mapping([x, minter.roleset('giving', prefix='fn16')])
    assert str(minter.mapping([x, y])).startswith(RESOURCE_NS + 'mapping-')
