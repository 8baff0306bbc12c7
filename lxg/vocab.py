"""
Target vocabulary for the lexical resource graph.
"""

from typing import Dict, Optional

import langcodes
from rdflib import Namespace, URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, SKOS

RESOURCE_NS = "http://premon.fbk.eu/resource/"

PMO = Namespace("http://premon.fbk.eu/ontology/core#")
PMOPB = Namespace("http://premon.fbk.eu/ontology/pb#")
PMONB = Namespace("http://premon.fbk.eu/ontology/nb#")
PMOFN = Namespace("http://premon.fbk.eu/ontology/fn#")
PMOVN = Namespace("http://premon.fbk.eu/ontology/vn#")
ONTOLEX = Namespace("http://www.w3.org/ns/lemon/ontolex#")
DECOMP = Namespace("http://www.w3.org/ns/lemon/decomp#")
LIME = Namespace("http://www.w3.org/ns/lemon/lime#")
LEXINFO = Namespace("http://www.lexinfo.net/ontology/2.0/lexinfo#")
NIF = Namespace("http://persistence.uni-leipzig.org/nlp2rdf/ontologies/nif-core#")
LEXVO = Namespace("http://lexvo.org/id/iso639-3/")
RES = Namespace(RESOURCE_NS)

# Named graphs partitioning the output
CORE_GRAPH = URIRef(RESOURCE_NS + "graph-core")
EXAMPLE_GRAPH = URIRef(RESOURCE_NS + "graph-examples")

# Prefixes bound on the output dataset (used by the final compaction pass)
PREFIXES = {
    'pmo': PMO,
    'pmopb': PMOPB,
    'pmonb': PMONB,
    'pmofn': PMOFN,
    'pmovn': PMOVN,
    'ontolex': ONTOLEX,
    'decomp': DECOMP,
    'lime': LIME,
    'lexinfo': LEXINFO,
    'nif': NIF,
    'lexvo': LEXVO,
    'pm': RES,
    'rdf': RDF,
    'rdfs': RDFS,
    'skos': SKOS,
    'dct': DCTERMS,
    'owl': OWL,
}

# Frameset POS codes (PropBank / NomBank)
BANK_POS = {
    'v': LEXINFO.verb,
    'l': LEXINFO.verb,  # light verb constructions
    'n': LEXINFO.noun,
    'j': LEXINFO.adjective,
    'prep': LEXINFO.preposition,
}

# FrameNet lexical unit / lexeme POS codes
FRAMENET_POS = {
    'A': LEXINFO.adjective,
    'ADV': LEXINFO.adverb,
    'ART': LEXINFO.determiner,
    'C': LEXINFO.conjunction,
    'INTJ': LEXINFO.interjection,
    'N': LEXINFO.noun,
    'NUM': LEXINFO.cardinalNumeral,
    'PREP': LEXINFO.preposition,
    'PRON': LEXINFO.pronoun,
    'SCON': LEXINFO.subordinatingConjunction,
    'V': LEXINFO.verb,
    'IDIO': PMO.idiosyncratic,
    'AVP': LEXINFO.particle,
}

# FrameNet coreType attribute -> frame element class
FE_CORE_TYPES = {
    'Core': PMOFN.CoreFrameElement,
    'Peripheral': PMOFN.PeripheralFrameElement,
    'Extra-Thematic': PMOFN.ExtraThematicFrameElement,
    'Core-Unexpressed': PMOFN.CoreUnexpressedFrameElement,
}

# FrameNet frame relation labels (frame files) -> property
FRAME_RELATIONS = {
    'Inherits from': PMOFN.inheritsFrom,
    'Is Causative of': PMOFN.isCausativeOf,
    'Is Inchoative of': PMOFN.isInchoativeOf,
    'Perspective on': PMOFN.isPerspectiveOf,
    'Precedes': PMOFN.precedes,
    'See also': PMOFN.seeAlso,
    'Subframe of': PMOFN.subframeOf,
    'Uses': PMOFN.uses,
}


def pos_uri(pos: Optional[str], table: Dict[str, URIRef]) -> Optional[URIRef]:
    """Look up a POS code in one of the tables above, None when unknown."""
    if pos is None:
        return None
    return table.get(pos)


def pos_name(pos: Optional[str], table: Dict[str, URIRef]) -> str:
    """
    Short POS name used inside URIs (the local name of the LexInfo term).
    Unknown codes are kept as given, lower-cased.
    """
    uri = pos_uri(pos, table)
    if uri is None:
        return (pos or 'unk').lower()
    return str(uri).rsplit('#', 1)[-1].lower()


def language_uri(language: str) -> URIRef:
    """Lexvo URI for an ISO 639-1/639-3 language tag (e.g. 'en' -> .../eng)."""
    return LEXVO[langcodes.Language.get(language).to_alpha3()]
