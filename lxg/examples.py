"""
Annotated examples.

Each example is converted into its own StatementBatch. The annotator never
writes to a sink: it returns the batch together with the failure kind (if
any) and the caller commits or discards it.
"""

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from rdflib import URIRef
from rdflib.namespace import DCTERMS, RDF, RDFS

from lxg.errors import ClassificationError, FailureKind
from lxg.records import ExampleRecord, InflectionRecord, LabelRecord
from lxg.roles import ArgumentClassifier, role_code
from lxg.statements import StatementBatch, emit
from lxg.vocab import EXAMPLE_GRAPH, NIF, PMO

TOKEN_RE = re.compile(r'\S+')
WHITESPACE_RE = re.compile(r'\s+')

Span = Tuple[int, int]


def collapse(text: str) -> str:
    return WHITESPACE_RE.sub(' ', text).strip()


@dataclass(frozen=True)
class NormalizedText:
    """
    Whitespace-collapsed text with its token boundaries.

    starts maps the raw offset of every token start to its normalized offset;
    ends maps the raw offset of every token's last character to the
    normalized (exclusive) end of that token.
    """
    text: str
    starts: Mapping[int, int]
    ends: Mapping[int, int]

    @property
    def lower(self) -> str:
        return self.text.lower()

    def span(self, start: int, end: int) -> Optional[Span]:
        """Normalized [begin, end) of a raw inclusive span, None off token boundaries."""
        begin = self.starts.get(start)
        stop = self.ends.get(end)
        if begin is None or stop is None or begin >= stop:
            return None
        return begin, stop

    def find(self, value: Optional[str]) -> Optional[Span]:
        """First case-insensitive occurrence of a literal value."""
        value = collapse(value or '')
        if not value:
            return None
        # offsets index self.text, whose lower-cased form can be longer
        match = re.search(re.escape(value), self.text, re.IGNORECASE)
        if match is None:
            return None
        return match.start(), match.end()

    def anchor(self, span: Span) -> str:
        return self.text[span[0]:span[1]].lower()


def normalize_text(raw: str) -> NormalizedText:
    tokens = []
    starts = {}
    ends = {}
    position = 0
    for match in TOKEN_RE.finditer(raw):
        if tokens:
            position += 1
        starts[match.start()] = position
        position += len(match.group())
        ends[match.end() - 1] = position
        tokens.append(match.group())
    return NormalizedText(' '.join(tokens), starts, ends)


@dataclass
class AnnotationResult:
    batch: StatementBatch = field(default_factory=StatementBatch)
    example: Optional[URIRef] = None
    failure: Optional[FailureKind] = None
    skipped_spans: int = 0
    skipped_arguments: int = 0
    no_argument: int = 0
    markables: List[Tuple[URIRef, Span, str]] = field(default_factory=list)

    @property
    def kept(self) -> bool:
        return self.failure is None


class ExampleAnnotator:
    """
    Aligns the labels of an example with its text.

    Args:
        variant: resource variant (target layer, role layers, target merging)
        minter: URI minter of the resource
        classifier: argument classifier, used for coded roles
    """

    def __init__(self, variant, minter, classifier: ArgumentClassifier):
        self.variant = variant
        self.minter = minter
        self.classifier = classifier

    def annotate(self, example: ExampleRecord, roleset_id: str, targets: Sequence[URIRef]) -> AnnotationResult:
        """
        Build the statements of one example.

        Args:
            example: the example record
            roleset_id: identifier of the owning roleset / frame
            targets: values of the target annotation (roleset, conceptualization, lexical unit)
        """
        result = AnnotationResult()
        text = normalize_text(example.text or '')
        if not text.starts or not text.ends:
            result.failure = FailureKind.UNRESOLVABLE_SPAN
            return result

        spans = self._target_spans(text, example.layer(self.variant.target_layer))
        if not spans:
            result.failure = FailureKind.UNRESOLVABLE_SPAN
            return result

        example_uri = self.minter.example(roleset_id, text.lower)
        result.example = example_uri
        batch = result.batch

        if self.variant.merge_targets:
            annotation_set = self.minter.annotation_set(example_uri, spans[0][0])
        else:
            annotation_set = self.minter.annotation_set(example_uri)

        self._add(batch, example_uri, RDF.type, PMO.Example)
        self._add(batch, example_uri, NIF.isString, text.text)
        self._add(batch, example_uri, RDFS.comment, example.name)
        if example.src != example.name:
            self._add(batch, example_uri, DCTERMS.source, example.src)
        self._add(batch, annotation_set, RDF.type, PMO.AnnotationSet)
        self._add_inflection(batch, example_uri, example.inflection)

        for i, span in enumerate(spans):
            suffix = 'pred' if len(spans) == 1 else f'pred{i}'
            annotation = self._add_annotation(batch, example_uri, annotation_set, suffix, targets)
            self._add_markable(result, example_uri, annotation, text, span)

        count = 0
        for layer in self.variant.role_layers:
            for label in example.layer(layer):
                argument = self._argument(result, roleset_id, label)
                if argument is None:
                    continue

                span = None
                if label.has_offsets:
                    span = text.span(label.start, label.end)
                    if span is None:
                        result.skipped_spans += 1
                        continue
                elif label.value is not None:
                    span = text.find(label.value)
                    if span is None:
                        result.skipped_spans += 1
                        continue
                elif not self.variant.named_roles:
                    result.skipped_spans += 1
                    continue

                count += 1
                annotation = self._add_annotation(batch, example_uri, annotation_set, f'arg{count}', [argument])
                if span is None:
                    # null instantiation
                    self._add(batch, annotation, RDF.type, PMO.ImplicitAnnotation)
                else:
                    self._add_markable(result, example_uri, annotation, text, span)

        return result

    def _target_spans(self, text: NormalizedText, labels: Sequence[LabelRecord]) -> List[Span]:
        spans = []
        for label in labels:
            if label.has_offsets:
                span = text.span(label.start, label.end)
            else:
                span = text.find(label.value)
            if span is None:
                if not self.variant.merge_targets:
                    # every literal target must be found
                    return []
                continue
            spans.append(span)

        if spans and self.variant.merge_targets:
            return [(min(s[0] for s in spans), max(s[1] for s in spans))]
        return spans

    def _argument(self, result: AnnotationResult, roleset_id: str, label: LabelRecord) -> Optional[URIRef]:
        if self.variant.named_roles:
            if not label.name:
                result.no_argument += 1
                return None
            return self.minter.argument(roleset_id, label.name)

        try:
            code, category = self.classifier.classify(role_code(label.n, label.f))
        except ClassificationError:
            result.skipped_arguments += 1
            return None
        if code is None:
            result.no_argument += 1
            return None
        return self.classifier.argument_uri(roleset_id, code, category)

    def _add(self, batch, subject, predicate, value):
        emit(batch, subject, predicate, value, graph=EXAMPLE_GRAPH)

    def _add_annotation(self, batch, example_uri, annotation_set, suffix, values) -> URIRef:
        annotation = self.minter.annotation(annotation_set, suffix)
        self._add(batch, annotation, RDF.type, NIF.Annotation)
        self._add(batch, annotation_set, PMO.item, annotation)
        self._add(batch, example_uri, NIF.annotation, annotation)
        for value in values:
            self._add(batch, annotation, PMO.valueObj, value)
        return annotation

    def _add_markable(self, result: AnnotationResult, example_uri, annotation, text: NormalizedText, span: Span):
        begin, end = span
        anchor = text.anchor(span)
        markable = self.minter.markable(example_uri, begin, end)
        batch = result.batch
        self._add(batch, markable, RDF.type, PMO.Markable)
        self._add(batch, markable, NIF.beginIndex, begin)
        self._add(batch, markable, NIF.endIndex, end)
        self._add(batch, markable, NIF.anchorOf, anchor)
        self._add(batch, markable, NIF.referenceContext, example_uri)
        self._add(batch, markable, NIF.annotation, annotation)
        result.markables.append((markable, span, anchor))

    def _add_inflection(self, batch, example_uri, inflection: Optional[InflectionRecord]):
        if inflection is None:
            return
        values = (inflection.person, inflection.tense, inflection.aspect, inflection.voice, inflection.form)
        if not any(values):
            return
        uri = self.minter.inflection(*values)
        ns = self.variant.ns
        self._add(batch, example_uri, ns.inflection, uri)
        self._add(batch, uri, RDF.type, ns.Inflection)
        for name, value in zip(('person', 'tense', 'aspect', 'voice', 'form'), values):
            self._add(batch, uri, ns[name], value)


def example_stats() -> dict:
    return {
        'total_found': 0,
        'processed': 0,
        'skipped': 0,
        'skipped_spans': 0,
        'skipped_arguments': 0,
        'no_argument': 0,
        'markables': 0,
    }


def commit_example(sink, result: AnnotationResult, stats: dict) -> bool:
    """Commit a kept example into the sink, discard the others. Updates stats."""
    stats['total_found'] += 1
    stats['skipped_spans'] += result.skipped_spans
    stats['skipped_arguments'] += result.skipped_arguments
    stats['no_argument'] += result.no_argument

    if not result.kept:
        result.batch.discard()
        stats['skipped'] += 1
        return False

    result.batch.commit(sink)
    stats['processed'] += 1
    stats['markables'] += len(result.markables)
    return True
