"""
Readers turning resource files into immutable records.
"""

import gzip
import lzma
import os
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import lxml.html
from lxml import etree
from rdflib import Graph
from rdflib.namespace import RDF

from lxg.errors import UnparseableEntryError
from lxg.linker import VN_PATTERN
from lxg.records import (AliasRecord, ExampleRecord, FERecord, FrameRecord, FramesetRecord,
                         InflectionRecord, LabelRecord, LayerRecord, LexemeRecord, LexUnitExamples,
                         LexUnitRecord, PredicateRecord, ResourceEntry, RoleRecord, RolesetRecord,
                         VnRoleRecord)
from lxg.tables import CorrectionTables

XML_SUFFIXES = ('.xml', '.xml.gz', '.xml.xz')
LEGACY_NAME_RE = re.compile(r'^(.+)-([a-z]+)$')


def _open_file(filepath: str):
    """
    Open a file for reading, automatically handling compression.
    Supports .xml, .xml.gz, and .xml.xz files.
    """
    if filepath.endswith('.gz'):
        return gzip.open(filepath, 'rb')
    elif filepath.endswith('.xz'):
        return lzma.open(filepath, 'rb')
    else:
        return open(filepath, 'rb')


def _parse(path) -> etree._Element:
    """Parse an XML file and drop namespaces from its tags."""
    path = str(path)
    try:
        with _open_file(path) as f:
            root = etree.parse(f).getroot()
    except (etree.XMLSyntaxError, OSError, EOFError) as e:
        raise UnparseableEntryError(path, str(e)) from e

    for element in root.iter():
        if isinstance(element.tag, str):
            element.tag = etree.QName(element).localname
    return root


def _text(element) -> str:
    if element is None:
        return ''
    return ''.join(element.itertext()).strip()


def _int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def strip_html(text: Optional[str]) -> str:
    """FrameNet definitions embed HTML-like markup: keep the text only."""
    if not text or not text.strip():
        return ''
    return ' '.join(lxml.html.fromstring(text).text_content().split())


def file_stem(name: str) -> str:
    for suffix in ('.gz', '.xz'):
        if name.endswith(suffix):
            name = name[:-len(suffix)]
    if name.endswith('.xml'):
        name = name[:-4]
    return name


# Framesets (PropBank / NomBank)

def discard_file(path, tables: CorrectionTables, verbs_only: bool = True, legacy: bool = False) -> bool:
    """
    Check if a frameset file should be skipped.

    Args:
        path: file path
        tables: correction tables (excluded file names)
        verbs_only: keep only verb framesets (legacy naming only)
        legacy: files are named lemma-type.xml

    Returns:
        bool: True if file should be skipped
    """
    path = Path(path)
    if path.is_dir() or not path.name.endswith(XML_SUFFIXES):
        return True
    if path.name in tables.excluded_files:
        return True
    if verbs_only and legacy and not file_stem(path.name).endswith('-v'):
        return True
    return False


def entry_from_file(path, default_type: Optional[str], legacy: bool = False,
                    source: Optional[str] = None) -> ResourceEntry:
    """'give-v.xml' (legacy) -> (give, v); 'give.xml' -> (give, default type)."""
    name = Path(path).name
    stem = file_stem(name)
    if legacy:
        match = LEGACY_NAME_RE.match(stem)
        if match is None:
            raise UnparseableEntryError(path, 'file name is not lemma-type.xml')
        return ResourceEntry(name, match.group(1), match.group(2), source)
    return ResourceEntry(name, stem, default_type or 'v', source)


def collect_frameset_files(root_dir, tables: CorrectionTables, verbs_only: bool = True,
                           legacy: bool = False) -> List[Path]:
    root_path = Path(root_dir)
    if not root_path.is_dir():
        raise FileNotFoundError(f"Input directory not found: {root_dir}")
    return sorted(p for p in root_path.rglob('*') if not discard_file(p, tables, verbs_only, legacy))


def _label(element) -> LabelRecord:
    return LabelRecord(
        name=element.get('name'),
        start=_int(element.get('start')),
        end=_int(element.get('end')),
        value=_text(element) if element.tag in ('arg', 'rel') else None,
        n=element.get('n'),
        f=element.get('f'),
    )


def _inflection(element) -> Optional[InflectionRecord]:
    if element is None:
        return None
    return InflectionRecord(
        person=element.get('person'),
        tense=element.get('tense'),
        aspect=element.get('aspect'),
        voice=element.get('voice'),
        form=element.get('form'),
    )


def _bank_example(element) -> ExampleRecord:
    args = tuple(_label(arg) for arg in element.findall('arg'))
    rels = tuple(_label(rel) for rel in element.findall('rel'))
    return ExampleRecord(
        text=_text(element.find('text')),
        name=element.get('name'),
        src=element.get('src'),
        layers=(LayerRecord('rel', rels), LayerRecord('arg', args)),
        inflection=_inflection(element.find('inflection')),
    )


def _roleset(element) -> RolesetRecord:
    roles = []
    for role in element.iterfind('roles/role'):
        vnroles = tuple(VnRoleRecord(vn.get('vncls'), vn.get('vntheta')) for vn in role.findall('vnrole'))
        roles.append(RoleRecord(role.get('n'), role.get('f'), role.get('descr'), vnroles))

    aliases = []
    for alias in element.iterfind('aliases/alias'):
        aliases.append(AliasRecord(_text(alias), alias.get('pos'), alias.get('framenet'), alias.get('verbnet')))

    return RolesetRecord(
        id=element.get('id', ''),
        name=element.get('name'),
        # the attribute is spelled 'framnet' in PropBank
        framenet=element.get('framnet') or element.get('framenet'),
        vncls=element.get('vncls'),
        source=element.get('source'),
        roles=tuple(roles),
        aliases=tuple(aliases),
        examples=tuple(_bank_example(e) for e in element.findall('example')),
    )


def read_frameset(path, entry: ResourceEntry) -> FramesetRecord:
    root = _parse(path)
    if root.tag != 'frameset':
        raise UnparseableEntryError(path, f"unexpected root element <{root.tag}>")

    predicates = []
    for predicate in root.findall('predicate'):
        lemma = predicate.get('lemma')
        if not lemma:
            raise UnparseableEntryError(path, 'predicate without lemma')
        rolesets = tuple(_roleset(r) for r in predicate.findall('roleset'))
        predicates.append(PredicateRecord(lemma, rolesets))

    return FramesetRecord(entry, tuple(predicates))


# FrameNet

def _semtypes(element) -> Tuple[str, ...]:
    return tuple(st.get('name') for st in element.findall('semType') if st.get('name'))


def _fe(element) -> FERecord:
    return FERecord(
        id=_int(element.get('ID')),
        name=element.get('name', ''),
        abbrev=element.get('abbrev'),
        core_type=element.get('coreType'),
        definition=strip_html(_text(element.find('definition'))),
        excludes=tuple(e.get('name') for e in element.findall('excludesFE') if e.get('name')),
        requires=tuple(e.get('name') for e in element.findall('requiresFE') if e.get('name')),
        semtypes=_semtypes(element),
        created_by=element.get('cBy'),
        created=element.get('cDate'),
    )


def _lexunit(element) -> LexUnitRecord:
    lexemes = tuple(LexemeRecord(lx.get('name', ''), lx.get('POS'))
                    for lx in sorted(element.findall('lexeme'), key=lambda lx: _int(lx.get('order')) or 0))
    return LexUnitRecord(
        id=element.get('ID', ''),
        name=element.get('name', ''),
        pos=element.get('POS', ''),
        definition=strip_html(_text(element.find('definition'))),
        lexemes=lexemes,
        incorporated_fe=element.get('incorporatedFE'),
        status=element.get('status'),
        semtypes=_semtypes(element),
        created_by=element.get('cBy'),
        created=element.get('cDate'),
    )


def read_frame(path) -> FrameRecord:
    root = _parse(path)
    if root.tag != 'frame' or not root.get('name'):
        raise UnparseableEntryError(path, 'not a frame file')

    seen = set()
    fes = []
    for fe in root.findall('FE'):
        if fe.get('name') in seen:
            continue
        seen.add(fe.get('name'))
        fes.append(_fe(fe))

    relations = []
    for relation in root.findall('frameRelation'):
        for related in relation.findall('relatedFrame'):
            relations.append((relation.get('type', ''), _text(related)))

    core_sets = []
    for core_set in root.findall('FEcoreSet'):
        members = tuple(m.get('name') for m in core_set.findall('memberFE') if m.get('name'))
        if members:
            core_sets.append(members)

    return FrameRecord(
        id=_int(root.get('ID')),
        name=root.get('name'),
        definition=strip_html(_text(root.find('definition'))),
        fes=tuple(fes),
        relations=tuple(relations),
        lexunits=tuple(_lexunit(lu) for lu in root.findall('lexUnit')),
        semtypes=_semtypes(root),
        core_sets=tuple(core_sets),
        created_by=root.get('cBy'),
        created=root.get('cDate'),
    )


def _sentence(element) -> ExampleRecord:
    layers = []
    for annotation_set in element.findall('annotationSet'):
        for layer in annotation_set.findall('layer'):
            labels = tuple(_label(label) for label in layer.findall('label'))
            layers.append(LayerRecord(layer.get('name', ''), labels))
    return ExampleRecord(
        text=element.findtext('text') or '',
        name=element.get('ID'),
        layers=tuple(layers),
    )


def read_lexunit_examples(path) -> LexUnitExamples:
    root = _parse(path)
    if root.tag != 'lexUnit':
        raise UnparseableEntryError(path, 'not a lexical unit file')
    sentences = tuple(_sentence(s) for s in root.iter('sentence'))
    return LexUnitExamples(root.get('ID', ''), root.get('frame', ''), sentences)


def iter_xml_files(directory) -> Iterator[Path]:
    for path in sorted(Path(directory).rglob('*')):
        if path.is_file() and path.name.endswith(XML_SUFFIXES):
            yield path


# VerbNet

def read_verbnet_index(directory) -> Dict[str, str]:
    """
    VerbNet class number -> full class id ('13.1-1' -> 'give-13.1-1'),
    from the VNCLASS / VNSUBCLASS elements of a VerbNet directory.
    """
    index = {}
    if not os.path.isdir(directory):
        print(f"Warning! VerbNet directory not found: {directory}")
        return index

    print(f"Loading VerbNet classes from {directory}...")
    for path in iter_xml_files(directory):
        try:
            root = _parse(path)
        except UnparseableEntryError as e:
            print(f"Warning! {e}")
            continue
        for element in root.iter('VNCLASS', 'VNSUBCLASS'):
            class_id = element.get('ID', '')
            match = VN_PATTERN.search(class_id)
            if match is None:
                print(f"Warning! Unable to parse VerbNet class {class_id}")
                continue
            index[match.group(2)] = match.group(1) + '-' + match.group(2)

    print(f"Loaded {len(index)} VerbNet classes")
    return index


def read_external_entries(path, entry_type) -> Tuple[str, ...]:
    """URIs of the lexical entries declared in an RDF file (e.g. a WordNet lexicon)."""
    print(f"Loading external lexical entries from {path}...")
    graph = Graph()
    graph.parse(str(path))
    entries = tuple(sorted(str(s) for s in graph.subjects(RDF.type, entry_type)))
    print(f"Loaded {len(entries)} external lexical entries")
    return entries
