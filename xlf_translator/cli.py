"""
XLF Translator command line interface.

Usage:
  xlf-translator init
  xlf-translator import <file> [--dry-run]
  xlf-translator export <language> <output-file>
  xlf-translator languages
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from xlf_translator.config import load_config
from xlf_translator.core import export, sync
from xlf_translator.core.languages import LanguageRegistry
from xlf_translator.exceptions import XlfTranslatorError
from xlf_translator.logger import get_logger
from xlf_translator.store import create_store, initialize_store

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xlf-translator",
        description="Sync XLF files with a translation store and export translated XLF files.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the store columns (base, active and configured languages)")

    import_parser = subparsers.add_parser("import", help="Import an XLF file into the store")
    import_parser.add_argument("file", type=Path, help="XLF file to import")
    import_parser.add_argument("--dry-run", action="store_true", help="Show the changes without writing them")

    export_parser = subparsers.add_parser("export", help="Export translated XLF from the store")
    export_parser.add_argument("language", help="Language display name, e.g. French")
    export_parser.add_argument("output", type=Path, help="Output XLF file")

    subparsers.add_parser("languages", help="List available languages")
    return parser


def cmd_init(config, store) -> int:
    added = initialize_store(store, config)
    print(f"Store ready. {len(added)} columns added.")
    return 0


def cmd_import(config, store, file_path: Path, dry_run: bool) -> int:
    print(f"[IMPORT] Importing {file_path}...")
    content = file_path.read_bytes()
    report = sync.sync_document(content, store, config, dry_run=dry_run)

    print("Dry run, nothing written." if dry_run else "Import completed.")
    print(f"   Added: {report.stats.added}")
    print(f"   Updated: {report.stats.updated}")
    print(f"   Unchanged: {report.stats.unchanged}")
    print(f"   Deactivated: {report.stats.deactivated}")
    return 0


def cmd_export(config, store, language: str, output: Path) -> int:
    print(f"Exporting {language} translations to {output}...")
    registry = LanguageRegistry.from_config(config)
    document = export.generate_document(language, store, registry, config)
    output.write_bytes(document.content)

    print(f"Export completed. {document.segment_count} segments exported.")
    if document.violations:
        print(f"{len(document.violations)} translations exceed their max width and were skipped:")
        for violation in document.violations:
            print(f"   {violation.id} (max {violation.max_width}): {violation.value}")
    if document.invalid:
        print(f"{len(document.invalid)} records hold characters XML cannot contain and were skipped:")
        for item in document.invalid:
            print(f"   {item.id} ({item.cell}): {item.value!r}")
    return 0


def cmd_languages(config, store) -> int:
    registry = LanguageRegistry.from_config(config)
    languages = export.get_languages(store, registry)

    print("Available languages:\n")
    for index, language in enumerate(languages, start=1):
        print(f"   {index}. {language}")
    print(f"\n   Total: {len(languages)} languages")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    store = None

    try:
        # Bad config values (strategy, backend, missing sheet id) raise ValueError
        config = load_config(args.config)
        store = create_store(config)

        if args.command == "init":
            return cmd_init(config, store)
        if args.command == "import":
            return cmd_import(config, store, args.file, args.dry_run)
        if args.command == "export":
            return cmd_export(config, store, args.language, args.output)
        return cmd_languages(config, store)
    except (XlfTranslatorError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if store is not None:
            store.close()


if __name__ == "__main__":
    sys.exit(main())
