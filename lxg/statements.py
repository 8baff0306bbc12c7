"""
Statements and the sinks receiving them.

A statement is an immutable (subject, predicate, object, graph) tuple. Sinks
are append-only; the converters never retract what they emitted, so every
correction happens before emission.
"""

import gzip
from typing import Iterable, Iterator, List, NamedTuple, Optional

from rdflib import Dataset, Literal, URIRef
from rdflib.term import Node

from lxg.vocab import CORE_GRAPH, PREFIXES


class Statement(NamedTuple):
    subject: URIRef
    predicate: URIRef
    object: Node
    graph: Optional[URIRef] = None


def to_object(value, language: Optional[str] = None) -> Optional[Node]:
    """
    Turn a Python value into a statement object.

    Strings become literals (language-tagged when a language is given),
    rdflib nodes are kept, None and blank strings give None.
    """
    if value is None:
        return None
    if isinstance(value, Node):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return Literal(value, lang=language) if language else Literal(value)
    return Literal(value)


def emit(sink, subject: URIRef, predicate: URIRef, value, graph: Optional[URIRef] = None,
         language: Optional[str] = None) -> bool:
    """Append one statement to the sink. Missing values emit nothing."""
    obj = to_object(value, language)
    if subject is None or obj is None:
        return False
    sink.add(Statement(subject, predicate, obj, graph))
    return True


class ListSink:
    """Keeps statements in memory, in emission order."""

    def __init__(self):
        self.statements: List[Statement] = []

    def add(self, statement: Statement):
        self.statements.append(statement)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self):
        return len(self.statements)

    def triples(self, graph: Optional[URIRef] = None):
        """(s, p, o) triples, optionally restricted to one named graph."""
        return {(s, p, o) for s, p, o, g in self.statements if graph is None or g == graph}


class StatementBatch(ListSink):
    """
    Statements accumulated for one unit of work (e.g. an example), committed
    to a sink as a whole or discarded.
    """

    def __init__(self):
        super().__init__()
        self.closed = False

    def commit(self, sink) -> int:
        if self.closed:
            raise RuntimeError('Batch already committed or discarded')
        for statement in self.statements:
            sink.add(statement)
        self.closed = True
        return len(self.statements)

    def discard(self) -> int:
        if self.closed:
            raise RuntimeError('Batch already committed or discarded')
        count = len(self.statements)
        self.statements = []
        self.closed = True
        return count


class DatasetSink:
    """
    Sink backed by an rdflib Dataset. Statements without a graph go to the
    core graph. Duplicates collapse on insertion.
    """

    def __init__(self, dataset: Optional[Dataset] = None):
        self.dataset = dataset if dataset is not None else Dataset()
        self.added = 0
        for prefix, namespace in PREFIXES.items():
            self.dataset.bind(prefix, namespace)

    def add(self, statement: Statement):
        graph = statement.graph if statement.graph is not None else CORE_GRAPH
        self.dataset.add((statement.subject, statement.predicate, statement.object, graph))
        self.added += 1


def output_format(path: str) -> str:
    """rdflib serialisation format from the output file name."""
    name = path[:-3] if path.endswith('.gz') else path
    if name.endswith('.trig'):
        return 'trig'
    if name.endswith('.nq'):
        return 'nquads'
    raise ValueError(f"Unsupported output format (use .trig or .nq, optionally .gz): {path}")


def write_dataset(dataset: Dataset, path: str):
    """Serialise a dataset with all known prefixes bound, gzipping *.gz files."""
    for prefix, namespace in PREFIXES.items():
        dataset.bind(prefix, namespace)
    fmt = output_format(path)
    if path.endswith('.gz'):
        with gzip.open(path, 'wb') as f:
            dataset.serialize(destination=f, format=fmt)
    else:
        dataset.serialize(destination=path, format=fmt)


def read_dataset(paths: Iterable) -> Dataset:
    """Load (and thereby deduplicate) several statement files into one dataset."""
    dataset = Dataset()
    for path in paths:
        path = str(path)
        fmt = output_format(path)
        if path.endswith('.gz'):
            with gzip.open(path, 'rb') as f:
                dataset.parse(f, format=fmt)
        else:
            dataset.parse(path, format=fmt)
    return dataset
