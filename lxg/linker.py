"""
Links between a resource and its sibling resources (FrameNet, VerbNet,
PropBank), expressed as pmo:Mapping entities.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from rdflib import URIRef
from rdflib.namespace import RDF

from lxg.records import RoleRecord
from lxg.statements import emit
from lxg.uris import URIMinter
from lxg.vocab import PMO

VN_PATTERN = re.compile(r'([^-]*)-([0-9.\-]*)')
PB_PATTERN = re.compile(r'^verb-((.*)\.[0-9]+)$')

FN = 'fn'
VN = 'vn'
PB = 'pb'

VERB = 'v'


def split_links(value: Optional[str]) -> List[str]:
    """'fn15, vn32' -> ['fn15', 'vn32']"""
    if not value:
        return []
    return [part for part in re.split(r'[,\s]+', value.strip()) if part]


def parse_vn_classes(vn_list: Optional[str], index: Mapping[str, str]) -> Tuple[List[str], List[str]]:
    """
    VerbNet classes referenced by a 'vncls' attribute.

    Class numbers are resolved through the index; when the index is empty the
    references are taken verbatim.

    Returns:
        (resolved classes, unresolved references)
    """
    classes = []
    unresolved = []
    if not vn_list:
        return classes, unresolved

    for vn_class in vn_list.replace(',', ' ').split():
        if vn_class == '-':
            continue
        if vn_class.endswith('.'):
            vn_class = vn_class[:-1]
        if not vn_class:
            continue

        real_class = index.get(vn_class)
        if real_class is None:
            if index and not VN_PATTERN.search(vn_class):
                unresolved.append(vn_class)
                continue
            real_class = vn_class

        classes.append(real_class)

    return classes, unresolved


def fold_theta(theta: Optional[str]) -> str:
    """'Agent1' -> 'agent'"""
    if not theta:
        return ''
    return re.sub(r'[0-9]', '', theta).strip().lower()


def propbank_sources(source: Optional[str]) -> List[Tuple[str, str]]:
    """'verb-give.01 verb-hand.01' -> [('give.01', 'give'), ('hand.01', 'hand')]"""
    ret = []
    for part in (source or '').split():
        match = PB_PATTERN.match(part)
        if match:
            ret.append((match.group(1), match.group(2)))
    return ret


def framenet_frames(value: Optional[str]) -> List[str]:
    frames = []
    for frame in (value or '').replace(',', ' ').split():
        if frame != '-' and frame.lower() != 'null':
            frames.append(frame)
    return frames


class CrossResourceLinker:
    """
    Emits mappings between entities of the converted resource and entities of
    its sibling resources, addressed through their URI prefixes.

    Args:
        minter: URI minter of the converted resource
        links: sibling prefixes by resource kind, e.g. {'vn': ['vn32'], 'fn': ['fn15']}
        vn_index: VerbNet class number -> full class id (may be empty)
    """

    def __init__(self, minter: URIMinter, links: Mapping[str, Sequence[str]],
                 vn_index: Optional[Mapping[str, str]] = None):
        self.minter = minter
        self.fn_links = tuple(links.get(FN, ()))
        self.vn_links = tuple(links.get(VN, ()))
        self.pb_links = tuple(links.get(PB, ()))
        self.vn_index = dict(vn_index or {})

        self.log = {
            'mappings': 0,
            'unresolved_references': 0,
            'first_20_unresolved': [],
        }

    def add_mapping(self, sink, items: Sequence[URIRef], parent: Optional[URIRef] = None) -> URIRef:
        mapping = self.minter.mapping(items)
        emit(sink, mapping, RDF.type, PMO.Mapping)
        for item in items:
            emit(sink, mapping, PMO.item, item)
        emit(sink, mapping, PMO.subMappingOf, parent)
        self.log['mappings'] += 1
        return mapping

    def add_mappings(self, sink, roleset: URIRef, other_roleset: URIRef,
                     conceptualization: Optional[URIRef] = None, other_conceptualization: Optional[URIRef] = None,
                     argument: Optional[URIRef] = None, other_argument: Optional[URIRef] = None) -> URIRef:
        """Roleset-level mapping, with conceptualization and argument sub-mappings."""
        parent = self.add_mapping(sink, [roleset, other_roleset])
        if conceptualization is not None and other_conceptualization is not None:
            self.add_mapping(sink, [conceptualization, other_conceptualization], parent)
        if argument is not None and other_argument is not None:
            self.add_mapping(sink, [argument, other_argument], parent)
        return parent

    def vn_classes(self, vn_list: Optional[str]) -> List[str]:
        classes, unresolved = parse_vn_classes(vn_list, self.vn_index)
        for vn_class in unresolved:
            print(f'Warning! VerbNet class not found: {vn_class}')
            self.log['unresolved_references'] += 1
            if len(self.log['first_20_unresolved']) < 20:
                self.log['first_20_unresolved'].append(vn_class)
        return classes

    def link_roleset(self, sink, roleset_id: str, uri_lemma: str, pos: str,
                     framenet: Optional[str] = None, verbnet: Optional[str] = None,
                     pb_source: Optional[str] = None) -> int:
        """
        Links of one (lemma, roleset) pair: the roleset and its conceptualization
        against frames, VerbNet classes and PropBank rolesets.

        Returns:
            Number of sibling entities linked
        """
        roleset = self.minter.roleset(roleset_id)
        conceptualization = self.minter.conceptualization(uri_lemma, pos, roleset_id)
        count = 0

        for frame in framenet_frames(framenet):
            for prefix in self.fn_links:
                self.add_mappings(sink, roleset, self.minter.roleset(frame, prefix=prefix),
                                  conceptualization,
                                  self.minter.conceptualization(uri_lemma, pos, frame, prefix=prefix))
                count += 1

        for vn_class in self.vn_classes(verbnet):
            for prefix in self.vn_links:
                self.add_mappings(sink, roleset, self.minter.roleset(vn_class, prefix=prefix),
                                  conceptualization,
                                  self.minter.conceptualization(uri_lemma, VERB, vn_class, prefix=prefix))
                count += 1

        for pb_roleset, pb_lemma in propbank_sources(pb_source):
            for prefix in self.pb_links:
                self.add_mappings(sink, roleset, self.minter.roleset(pb_roleset, prefix=prefix),
                                  conceptualization,
                                  self.minter.conceptualization(pb_lemma, VERB, pb_roleset, prefix=prefix))
                count += 1

        return count

    def link_role(self, sink, roleset_id: str, argument: URIRef, role: RoleRecord,
                  lemmas: Iterable[Tuple[str, str]]) -> int:
        """
        Links of one argument against the VerbNet thematic roles it is aligned to.

        Args:
            lemmas: (uri lemma, pos) of every lexical entry evoking the roleset
        """
        roleset = self.minter.roleset(roleset_id)
        lemmas = list(lemmas)
        count = 0

        for vnrole in role.vnroles:
            theta = fold_theta(vnrole.vntheta)
            for vn_class in self.vn_classes(vnrole.vncls):
                for prefix in self.vn_links:
                    vn_class_uri = self.minter.roleset(vn_class, prefix=prefix)
                    vn_argument = self.minter.argument(vn_class, theta, prefix=prefix, label='') if theta else None
                    for uri_lemma, pos in lemmas:
                        self.add_mappings(sink, roleset, vn_class_uri,
                                          self.minter.conceptualization(uri_lemma, pos, roleset_id),
                                          self.minter.conceptualization(uri_lemma, VERB, vn_class, prefix=prefix),
                                          argument, vn_argument)
                        count += 1

        return count


def load_links(fn: Optional[str] = None, vn: Optional[str] = None, pb: Optional[str] = None) -> Dict[str, List[str]]:
    links = {FN: split_links(fn), VN: split_links(vn), PB: split_links(pb)}
    for kind, prefixes in links.items():
        if prefixes:
            print(f"Links to {kind}: {', '.join(prefixes)}")
    return links
