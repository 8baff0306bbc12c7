"""
Immutable input records, as produced by the document readers.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class ResourceEntry:
    """One input file: identity derived from its name."""
    file_name: str
    lemma: str
    type: str  # resource-variant type / POS code ('v', 'n', ...)
    source: Optional[str] = None


@dataclass(frozen=True)
class VnRoleRecord:
    vncls: Optional[str]
    vntheta: Optional[str]


@dataclass(frozen=True)
class RoleRecord:
    n: Optional[str]
    f: Optional[str]
    descr: Optional[str] = None
    vnroles: Tuple[VnRoleRecord, ...] = ()


@dataclass(frozen=True)
class AliasRecord:
    value: str
    pos: Optional[str]
    framenet: Optional[str] = None
    verbnet: Optional[str] = None


@dataclass(frozen=True)
class LabelRecord:
    """
    One annotated span.

    Offset labels follow the FrameNet convention: start and end are both
    inclusive character indices into the raw text. Literal labels only carry
    a value, to be located in the text.
    """
    name: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    value: Optional[str] = None
    n: Optional[str] = None
    f: Optional[str] = None

    @property
    def has_offsets(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class LayerRecord:
    name: str
    labels: Tuple[LabelRecord, ...] = ()


@dataclass(frozen=True)
class InflectionRecord:
    person: Optional[str] = None
    tense: Optional[str] = None
    aspect: Optional[str] = None
    voice: Optional[str] = None
    form: Optional[str] = None


@dataclass(frozen=True)
class ExampleRecord:
    text: str
    name: Optional[str] = None
    src: Optional[str] = None
    layers: Tuple[LayerRecord, ...] = ()
    inflection: Optional[InflectionRecord] = None

    def layer(self, name: str) -> Tuple[LabelRecord, ...]:
        """All labels of the layers with the given name, in document order."""
        labels = []
        for layer in self.layers:
            if layer.name == name:
                labels.extend(layer.labels)
        return tuple(labels)


@dataclass(frozen=True)
class RolesetRecord:
    id: str
    name: Optional[str] = None  # textual definition
    framenet: Optional[str] = None
    vncls: Optional[str] = None
    source: Optional[str] = None
    roles: Tuple[RoleRecord, ...] = ()
    aliases: Tuple[AliasRecord, ...] = ()
    examples: Tuple[ExampleRecord, ...] = ()


@dataclass(frozen=True)
class PredicateRecord:
    lemma: str
    rolesets: Tuple[RolesetRecord, ...] = ()


@dataclass(frozen=True)
class FramesetRecord:
    entry: ResourceEntry
    predicates: Tuple[PredicateRecord, ...] = ()


# FrameNet

@dataclass(frozen=True)
class FERecord:
    id: Optional[int]
    name: str
    abbrev: Optional[str] = None
    core_type: Optional[str] = None
    definition: str = ''
    excludes: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    semtypes: Tuple[str, ...] = ()
    created_by: Optional[str] = None
    created: Optional[str] = None  # raw cDate value


@dataclass(frozen=True)
class LexemeRecord:
    name: str
    pos: Optional[str] = None


@dataclass(frozen=True)
class LexUnitRecord:
    id: str
    name: str
    pos: str
    definition: str = ''
    lexemes: Tuple[LexemeRecord, ...] = ()
    incorporated_fe: Optional[str] = None
    status: Optional[str] = None
    semtypes: Tuple[str, ...] = ()
    created_by: Optional[str] = None
    created: Optional[str] = None


@dataclass(frozen=True)
class FrameRecord:
    id: Optional[int]
    name: str
    definition: str = ''
    fes: Tuple[FERecord, ...] = ()
    relations: Tuple[Tuple[str, str], ...] = ()  # (relation type, related frame name)
    lexunits: Tuple[LexUnitRecord, ...] = ()
    semtypes: Tuple[str, ...] = ()
    core_sets: Tuple[Tuple[str, ...], ...] = ()  # member FE names of each FEcoreSet
    created_by: Optional[str] = None
    created: Optional[str] = None


@dataclass(frozen=True)
class LexUnitExamples:
    lu_id: str
    frame_name: str
    sentences: Tuple[ExampleRecord, ...] = field(default_factory=tuple)
