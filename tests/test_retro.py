import pytest

from lxg.errors import ConversionError, FailureKind
from lxg.linker import CrossResourceLinker
from lxg.retro import FrameDiff, RetroMapper, load_frame_diff
from lxg.statements import ListSink
from lxg.uris import URIMinter
from lxg.vocab import PMO

DIFF_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Diff>
  <FrameDiff>
    <Added><Frame>Being_born</Frame></Added>
    <Changed>
      <Frame><r1-5>Move</r1-5><r1-6>Motion</r1-6></Frame>
    </Changed>
  </FrameDiff>
  <FrameElementDiff>
    <Added><FrameElement FrameName="Motion">Carrier</FrameElement></Added>
    <Changed>
      <FrameElement FrameName="Motion" r1-5_FrameName="Move"><r1-5>Mover</r1-5><r1-6>Theme</r1-6></FrameElement>
    </Changed>
  </FrameElementDiff>
</Diff>
"""


def make_mapper(diff):
    minter = URIMinter('fn16', arg_label='')
    linker = CrossResourceLinker(minter, {})
    return RetroMapper(diff, minter, linker, 'fn15'), minter


def test_changed_frame_maps_to_previous_name():
    mapper, minter = make_mapper(FrameDiff.build(set(), {'motion': 'move'}))
    sink = ListSink()
    mapping = mapper.map_frame(sink, 'Motion')

    assert mapping is not None
    assert {o for s, p, o in sink.triples() if s == mapping and p == PMO.item} == {
        minter.roleset('motion'),
        minter.roleset('move', prefix='fn15'),
    }
    assert mapper.log['frames_mapped'] == 1


def test_added_frame_has_no_mapping():
    mapper, _ = make_mapper(FrameDiff.build({'Being_born'}, {}))
    sink = ListSink()
    assert mapper.map_frame(sink, 'Being_born') is None
    assert len(sink) == 0
    assert mapper.log['added_skipped'] == 1


def test_unchanged_frame_maps_to_itself():
    diff = FrameDiff.build(set(), {})
    assert diff.prior_frame('Giving') == 'giving'


def test_prior_role():
    diff = FrameDiff.build({'motion@carrier'}, {'motion': 'move', 'motion@theme': 'move@mover'})
    assert diff.prior_role('Motion', 'Theme') == ('move', 'mover')
    assert diff.prior_role('Motion', 'Path') == ('move', 'path')
    assert diff.prior_role('Motion', 'Carrier') is None


def test_role_mapping_has_argument_sub_mapping():
    mapper, minter = make_mapper(FrameDiff.build(set(), {'motion': 'move', 'motion@theme': 'move@mover'}))
    sink = ListSink()
    parent = mapper.map_role(sink, 'Motion', 'Theme')

    children = {s for s, p, o in sink.triples() if p == PMO.subMappingOf and o == parent}
    assert len(children) == 1
    assert {o for s, p, o in sink.triples() if s in children and p == PMO.item} == {
        minter.argument('motion', 'theme'),
        minter.argument('move', 'mover', prefix='fn15'),
    }


def test_load_frame_diff(tmp_path):
    path = tmp_path / 'frameDiff.xml'
    path.write_text(DIFF_XML, encoding='utf-8')

    diff = load_frame_diff(str(path), '1.6')
    assert 'being_born' in diff.added
    assert 'motion@carrier' in diff.added
    assert diff.prior_frame('Motion') == 'move'
    assert diff.prior_role('Motion', 'Theme') == ('move', 'mover')


def test_missing_diff_file(tmp_path):
    with pytest.raises(ConversionError) as info:
        load_frame_diff(str(tmp_path / 'missing.xml'))
    assert info.value.kind == FailureKind.MISSING_RESOURCE


def test_diff_tables_are_read_only():
    diff = FrameDiff.build(set(), {'motion': 'move'})
    with pytest.raises(TypeError):
        diff.changed['motion'] = 'other'
