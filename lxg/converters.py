"""
Converters for transforming lexical resources (PropBank, NomBank, FrameNet)
into RDF statements.
"""

import argparse
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

from lxg.errors import ConversionError, FailureKind
from lxg.examples import ExampleAnnotator
from lxg.framenet import FrameConverter
from lxg.lexical import LexicalEntryBuilder
from lxg.linker import CrossResourceLinker, load_links
from lxg.readers import (collect_frameset_files, entry_from_file, iter_xml_files, read_external_entries,
                         read_frame, read_frameset, read_lexunit_examples, read_verbnet_index)
from lxg.retro import DEFAULT_VERSION, RetroMapper, load_frame_diff
from lxg.roles import ArgumentClassifier
from lxg.rolesets import RolesetResolver
from lxg.statements import DatasetSink, output_format, write_dataset
from lxg.tables import CorrectionTables
from lxg.uris import URIMinter
from lxg.variants import FRAMENET, get_variant
from lxg.vocab import ONTOLEX

PROGRESS_EVERY = 500


@dataclass(frozen=True)
class ConversionConfig:
    variant: str = 'propbank'
    prefix: str = 'pb17'
    source: Optional[str] = None
    language: str = 'en'
    non_verbs: bool = False  # keep non-verb framesets (legacy naming)
    legacy: bool = False  # OntoNotes-style file names and noun roleset prefix
    extract_examples: bool = False
    skip_definitions: bool = False
    single_lemma: Optional[str] = None
    links: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    external_entries: FrozenSet[str] = frozenset()
    external_lexicon_ns: Optional[str] = None
    tables: Optional[str] = None  # JSON file extending the correction tables
    verbnet: Optional[str] = None  # VerbNet directory for class resolution
    retro_file: Optional[str] = None
    retro_prefix: Optional[str] = None
    this_version: str = DEFAULT_VERSION


class LexicalResourceConverter:
    """
    Runs one conversion: every entry of the input directory goes through the
    shared pipeline configured by the resource variant, into one sink.
    """

    def __init__(self, config: ConversionConfig, tables: Optional[CorrectionTables] = None,
                 vn_index: Optional[Dict[str, str]] = None):
        self.config = config
        self.variant = get_variant(config.variant)
        self.tables = tables if tables is not None else CorrectionTables.load(config.tables)

        if vn_index is None and config.verbnet:
            vn_index = read_verbnet_index(config.verbnet)

        self.sink = DatasetSink()
        self.minter = URIMinter(config.prefix, config.language, arg_label=self.variant.arg_label)
        self.lexical = LexicalEntryBuilder(self.minter, self.variant.pos_table, self.tables, config.language,
                                           external_entries=config.external_entries,
                                           external_lexicon_ns=config.external_lexicon_ns)
        self.classifier = ArgumentClassifier(self.variant, self.minter, self.tables, config.language,
                                             skip_definitions=config.skip_definitions)
        self.linker = CrossResourceLinker(self.minter, config.links, vn_index)
        self.annotator = None
        if config.extract_examples:
            self.annotator = ExampleAnnotator(self.variant, self.minter, self.classifier)

        self.resolver = RolesetResolver(self.variant, self.minter, self.tables, self.lexical, self.classifier,
                                        self.linker, annotator=self.annotator, legacy=config.legacy,
                                        skip_definitions=config.skip_definitions, language=config.language)
        self.frames: Optional[FrameConverter] = None

        # Logging
        self.log = {
            'files': {
                'found': 0,
                'converted': 0,
                'filtered': 0,
            },
            'failures': {kind.value: 0 for kind in FailureKind},
            'first_20_failures': [],
            'statistics': {
                'statements_added': 0,
            },
        }

    def _skip(self, error: ConversionError):
        """Record a recovered failure."""
        self.log['failures'][error.kind.value] += 1
        if len(self.log['first_20_failures']) < 20:
            self.log['first_20_failures'].append(str(error))
        print(f"Warning! {error}")

    def convert(self, input_path: str):
        """Main conversion process."""
        self.lexical.add_lexicon(self.sink)
        if self.variant is FRAMENET:
            self.convert_framenet(input_path)
        else:
            self.convert_framesets(input_path)
        self.log['statistics']['statements_added'] = self.sink.added

        # failures recovered inside the pipeline are counted there
        summary = self.summary()
        failures = self.log['failures']
        failures[FailureKind.CLASSIFICATION_FAILURE.value] = summary['skipped_arguments']
        failures[FailureKind.UNRESOLVABLE_SPAN.value] = summary['skipped_spans'] + summary['skipped_examples']
        failures[FailureKind.UNRESOLVABLE_REFERENCE.value] = summary['unresolved_references']

    def convert_framesets(self, input_dir: str):
        print(f"\nCollecting frameset files from {input_dir}...")
        files = collect_frameset_files(input_dir, self.tables, verbs_only=not self.config.non_verbs,
                                       legacy=self.config.legacy)
        self.log['files']['found'] = len(files)
        print(f"Found {len(files)} frameset files")

        for i, path in enumerate(files, 1):
            try:
                entry = entry_from_file(path, self.variant.default_type, self.config.legacy, self.config.source)
                if self.config.single_lemma is not None and entry.lemma != self.config.single_lemma:
                    self.log['files']['filtered'] += 1
                    continue
                frameset = read_frameset(path, entry)
            except ConversionError as e:
                if e.kind is not FailureKind.UNPARSEABLE_ENTRY:
                    raise
                self._skip(e)
                continue

            self.resolver.convert(self.sink, frameset)
            self.log['files']['converted'] += 1

            if i % PROGRESS_EVERY == 0:
                print(f"  Processed {i}/{len(files)} files")

        self.log['rolesets'] = self.resolver.log
        self.log['linking'] = self.linker.log

    def load_retro_mapper(self) -> Optional[RetroMapper]:
        if not self.config.retro_file:
            return None
        if not self.config.retro_prefix:
            print("Warning! --retro-file given without --retro-prefix, version alignment disabled")
            return None
        try:
            diff = load_frame_diff(self.config.retro_file, self.config.this_version)
        except ConversionError as e:
            if e.kind is not FailureKind.MISSING_RESOURCE:
                raise
            self._skip(e)
            print("Warning! Version alignment disabled")
            return None
        return RetroMapper(diff, self.minter, self.linker, self.config.retro_prefix)

    def convert_framenet(self, input_dir: str):
        root = Path(input_dir)
        frame_dir = root / 'frame'
        if not frame_dir.is_dir():
            raise FileNotFoundError(f"Frame directory not found: {frame_dir}")

        retro = self.load_retro_mapper()
        self.frames = FrameConverter(self.variant, self.minter, self.tables, self.lexical,
                                     annotator=self.annotator, retro=retro,
                                     skip_definitions=self.config.skip_definitions,
                                     language=self.config.language)

        print(f"\nPass 1: Converting frames from {frame_dir}...")
        for path in iter_xml_files(frame_dir):
            self.log['files']['found'] += 1
            if self.config.single_lemma is not None and path.name != self.config.single_lemma + '.xml':
                self.log['files']['filtered'] += 1
                continue
            try:
                frame = read_frame(path)
            except ConversionError as e:
                self._skip(e)
                continue
            self.frames.convert_frame(self.sink, frame)
            self.log['files']['converted'] += 1

        print(f"  Converted {self.frames.log['frames']} frames")
        print(f"  Converted {self.frames.log['frame_elements']} frame elements")
        print(f"  Converted {self.frames.log['lexical_units']} lexical units")

        lu_dir = root / 'lu'
        if self.annotator is not None:
            if not lu_dir.is_dir():
                self._skip(ConversionError(f"Lexical unit directory not found: {lu_dir}",
                                           FailureKind.MISSING_RESOURCE))
            else:
                print(f"\nPass 2: Converting annotated sentences from {lu_dir}...")
                for path in iter_xml_files(lu_dir):
                    try:
                        lu_examples = read_lexunit_examples(path)
                    except ConversionError as e:
                        self._skip(e)
                        continue
                    self.frames.convert_examples(self.sink, lu_examples)

        self.log['framenet'] = self.frames.log
        self.log['linking'] = self.linker.log
        if retro is not None:
            self.log['retro_mapping'] = retro.log

    def summary(self) -> dict:
        """Run-level skip counters."""
        if self.frames is not None:
            examples = self.frames.log['examples']
            skipped_arguments = examples['skipped_arguments']
        else:
            examples = self.resolver.log['examples']
            skipped_arguments = self.resolver.log['skipped_arguments'] + examples['skipped_arguments']
        return {
            'skipped_arguments': skipped_arguments,
            'skipped_spans': examples['skipped_spans'],
            'skipped_examples': examples['skipped'],
            'unparseable_entries': self.log['failures'][FailureKind.UNPARSEABLE_ENTRY.value],
            'unresolved_references': self.linker.log['unresolved_references'],
        }

    def save(self, output_path: str):
        """Write the statements and the log next to them."""
        # Derive log filename from output
        name = output_path[:-3] if output_path.endswith('.gz') else output_path
        log_path = name.rsplit('.', 1)[0] + '_log.json'
        self.log['summary'] = self.summary()

        print(f"Writing output to {output_path}...")
        write_dataset(self.sink.dataset, output_path)

        print(f"Writing log to {log_path}...")
        with open(log_path, 'w', encoding='utf-8') as f:
            json.dump(self.log, f, indent=2, ensure_ascii=False)

        print("\nSummary:")
        for key, value in self.log['summary'].items():
            print(f"  {key}: {value}")


def convert_resource(input_path: str, output_path: str, config: ConversionConfig) -> LexicalResourceConverter:
    converter = LexicalResourceConverter(config)
    converter.convert(input_path)
    converter.save(output_path)

    print("\nConversion complete!")
    return converter


def build_config(args) -> ConversionConfig:
    links = load_links(args.link_fn, args.link_vn, args.link_pb)

    external_entries = frozenset()
    if args.wordnet:
        external_entries = frozenset(read_external_entries(args.wordnet, ONTOLEX.LexicalEntry))

    return ConversionConfig(
        variant=args.variant,
        prefix=args.prefix,
        source=args.source,
        language=args.language,
        non_verbs=args.non_verbs,
        legacy=args.legacy,
        extract_examples=args.examples,
        skip_definitions=args.no_def,
        single_lemma=args.single,
        links={kind: tuple(prefixes) for kind, prefixes in links.items()},
        external_entries=external_entries,
        external_lexicon_ns=args.wordnet_ns,
        tables=args.tables,
        verbnet=args.verbnet,
        retro_file=args.retro_file,
        retro_prefix=args.retro_prefix,
        this_version=args.fn_version,
    )


def main():
    parser = argparse.ArgumentParser(
        description='Convert PropBank, NomBank or FrameNet data to RDF'
    )
    parser.add_argument('--input', required=True,
                        help='Input directory (frameset files, or FrameNet data with frame/ and lu/)')
    parser.add_argument('--output', required=True,
                        help='Output file (.trig or .nq, optionally .gz)')
    parser.add_argument('--variant', default='propbank', choices=['propbank', 'nombank', 'framenet'],
                        help='Resource variant')
    parser.add_argument('--prefix', required=True,
                        help='Resource prefix used in URIs (e.g. pb17, nb10, fn15)')
    parser.add_argument('--source',
                        help='Source tag attached to each roleset')
    parser.add_argument('--language', default='en',
                        help='Language of lemmas and definitions')
    parser.add_argument('--non-verbs', action='store_true',
                        help='Keep non-verb framesets (with --legacy)')
    parser.add_argument('--legacy', action='store_true',
                        help='OntoNotes-style data (lemma-type.xml files, n- prefix for noun rolesets)')
    parser.add_argument('--examples', action='store_true',
                        help='Extract annotated examples')
    parser.add_argument('--no-def', action='store_true',
                        help='Skip definitions')
    parser.add_argument('--single',
                        help='Only convert the entry with this lemma (frame name for FrameNet)')
    parser.add_argument('--link-fn', help='FrameNet prefixes to link to (e.g. fn15,fn16)')
    parser.add_argument('--link-vn', help='VerbNet prefixes to link to (e.g. vn32)')
    parser.add_argument('--link-pb', help='PropBank prefixes to link to (e.g. pb17)')
    parser.add_argument('--verbnet', help='VerbNet directory, used to resolve class numbers')
    parser.add_argument('--wordnet', help='RDF file with the lexical entries of an external lexicon')
    parser.add_argument('--wordnet-ns', help='Namespace of the external lexical entries')
    parser.add_argument('--tables', help='JSON file extending the correction tables')
    parser.add_argument('--retro-file', help='FrameNet frame diff file (version alignment)')
    parser.add_argument('--retro-prefix', help='Prefix of the previous release (e.g. fn15)')
    parser.add_argument('--fn-version', default=DEFAULT_VERSION, choices=['1.6', '1.7'],
                        help='FrameNet release being converted')

    args = parser.parse_args()

    # Validate output filename
    try:
        output_format(args.output)
    except ValueError as e:
        parser.error(str(e))
    if args.wordnet and not args.wordnet_ns:
        parser.error("--wordnet requires --wordnet-ns")

    convert_resource(args.input, args.output, build_config(args))


if __name__ == '__main__':
    main()
