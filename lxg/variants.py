"""
Resource variants (PropBank, NomBank, FrameNet).

A variant is a plain value handed to the shared pipeline: it names the
vocabulary terms of the resource and the few rules that differ between them.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional, Tuple

from rdflib import Namespace, URIRef

from lxg.roles import AGENT_CODE, FUNCTION_CODE, ArgumentCategory
from lxg.vocab import BANK_POS, FRAMENET_POS, PMO, PMOFN, PMONB, PMOPB

# ArgM function tags
PROPBANK_ADJUNCTS = frozenset({
    'adv', 'cau', 'dir', 'dis', 'ext', 'loc', 'mnr', 'mod', 'neg', 'pnc', 'prd',
    'rec', 'tmp', 'prp', 'gol', 'com', 'adj', 'dsp', 'lvb', 'cxn', 'prr',
})
NOMBANK_ADJUNCTS = frozenset({
    'adv', 'cau', 'dir', 'dis', 'ext', 'loc', 'mnr', 'mod', 'neg', 'pnc', 'prd', 'tmp',
})

# Function tags of numbered arguments (the 'f' attribute of a role)
FUNCTION_TAGS = {
    'pag': 'PAG',
    'ppt': 'PPT',
    'gol': 'GOL',
    'vsp': 'VSP',
    'com': 'COM',
    'dir': 'DIR',
    'loc': 'LOC',
    'mnr': 'MNR',
    'ext': 'EXT',
    'prp': 'PRP',
    'cau': 'CAU',
    'tmp': 'TMP',
    'adv': 'ADV',
    'prd': 'PRD',
    'rec': 'REC',
    'adj': 'ADJ',
}


@dataclass(frozen=True)
class ResourceVariant:
    name: str
    ns: Namespace
    default_type: Optional[str]
    predicate_class: URIRef
    semantic_argument: URIRef
    adjunct_codes: FrozenSet[str] = frozenset()
    pos_table: Mapping[str, URIRef] = field(default_factory=dict)
    arg_label: str = 'arg'
    merge_targets: bool = False
    target_layer: str = 'rel'
    role_layers: Tuple[str, ...] = ('arg',)
    named_roles: bool = False  # roles named freely (frame elements) rather than coded
    see_also: Optional[str] = None  # page template, formatted with lemma=

    core_property: URIRef = PMO.core
    role_property: URIRef = PMOPB.roleClass
    tag_property: URIRef = PMOPB.tag

    def role_class(self, code: str, category: ArgumentCategory) -> Optional[URIRef]:
        """Resource-wide class of an argument (ARG0, ARGM-TMP, ARGA, ...)."""
        if category == ArgumentCategory.NUMERIC:
            return self.ns['ARG' + code]
        if category == ArgumentCategory.ADDITIONAL:
            return self.ns['ARGM-' + code.upper()]
        if category == ArgumentCategory.AGENT:
            return self.ns['ARG' + AGENT_CODE.upper()]
        if category == ArgumentCategory.M_FUNCTION:
            return self.ns['ARG' + FUNCTION_CODE.upper()]
        if category == ArgumentCategory.PREPOSITION:
            return self.ns['ARG-' + code.upper()]
        return None

    def tag_class(self, tag: str) -> Optional[URIRef]:
        tag = FUNCTION_TAGS.get(tag.lower())
        return self.ns[tag] if tag else None

    def page(self, lemma: str) -> Optional[str]:
        if self.see_also is None:
            return None
        return self.see_also.format(lemma=lemma)


PROPBANK = ResourceVariant(
    name='propbank',
    ns=PMOPB,
    default_type='v',
    predicate_class=PMOPB.Roleset,
    semantic_argument=PMOPB.SemanticArgument,
    adjunct_codes=PROPBANK_ADJUNCTS,
    pos_table=BANK_POS,
    see_also='http://verbs.colorado.edu/propbank/framesets-english-aliases/{lemma}.html',
)

NOMBANK = ResourceVariant(
    name='nombank',
    ns=PMONB,
    default_type='n',
    predicate_class=PMONB.Roleset,
    semantic_argument=PMONB.SemanticArgument,
    adjunct_codes=NOMBANK_ADJUNCTS,
    pos_table=BANK_POS,
    see_also='http://nlp.cs.nyu.edu/meyers/nombank/nombank.1.0/frames/{lemma}.xml',
    role_property=PMONB.roleClass,
    tag_property=PMONB.tag,
)

FRAMENET = ResourceVariant(
    name='framenet',
    ns=PMOFN,
    default_type=None,
    predicate_class=PMOFN.Frame,
    semantic_argument=PMOFN.FrameElement,
    pos_table=FRAMENET_POS,
    arg_label='',
    merge_targets=True,
    target_layer='Target',
    role_layers=('FE',),
    named_roles=True,
    see_also='https://framenet2.icsi.berkeley.edu/fnReports/data/frameIndex.xml?frame={lemma}',
    role_property=PMOFN.fe,
    tag_property=PMOFN.tag,
)

VARIANTS = {variant.name: variant for variant in (PROPBANK, NOMBANK, FRAMENET)}


def get_variant(name: str) -> ResourceVariant:
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown resource variant {name!r} (expected one of {sorted(VARIANTS)})") from None
