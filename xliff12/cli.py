"""
xliff12 command line.

Commands:
    validate  - Run structural checks, print every finding
    complete  - Report whether every trans-unit has a source and a target
    info      - List files, languages and trans-unit counts
    new       - Write a fresh, empty document
    add       - Append a trans-unit to the last file of a document

Every command prints JSON on stdout and exits 1 when the check fails or an
error occurs (error details go to stderr).
"""

import argparse
import json
import sys

from lxml import etree

from . import __version__
from .exceptions import XliffError
from .logger import get_logger, setup_exception_hook, setup_logging
from .parser import from_file, to_file
from .xliff_obj import Document, with_note, with_target

logger = get_logger(__name__)


def cmd_validate(args) -> dict:
    document = from_file(args.file)
    errors = document.validate()
    return {
        "status": "ok" if not errors else "invalid",
        "file": args.file,
        "count": len(errors),
        "errors": [{"code": e.code.value, "message": e.message} for e in errors],
    }


def cmd_complete(args) -> dict:
    document = from_file(args.file)
    complete = document.is_complete()
    total = sum(1 for _ in document.iter_trans_units())
    translated = sum(1 for _, u in document.iter_trans_units() if u.source and u.target)
    return {
        "status": "ok" if complete else "incomplete",
        "file": args.file,
        "complete": complete,
        "translated": translated,
        "total": total,
    }


def cmd_info(args) -> dict:
    document = from_file(args.file)
    return {
        "status": "ok",
        "file": args.file,
        "version": document.version,
        "files": [
            {
                "original": f.original,
                "source_language": f.source_language,
                "target_language": f.target_language,
                "datatype": f.datatype,
                "trans_units": len(f.body.trans_units),
            }
            for f in document.files
        ],
    }


def cmd_new(args) -> dict:
    document = Document.new(args.source_lang, args.target_lang)
    if args.original:
        document.files[0].original = args.original
    to_file(document, args.output)
    return {"status": "ok", "file": args.output}


def cmd_add(args) -> dict:
    document = from_file(args.file)

    options = []
    if args.target is not None:
        options.append(with_target(args.target))
    if args.note is not None:
        options.append(with_note(args.note))

    unit = document.add_trans_unit(args.source, *options)
    output = args.output or args.file
    to_file(document, output)
    return {"status": "ok", "file": output, "id": unit.id}


COMMANDS = {
    "validate": cmd_validate,
    "complete": cmd_complete,
    "info": cmd_info,
    "new": cmd_new,
    "add": cmd_add,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xliff12",
        description="Check and edit XLIFF 1.2 translation files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Run structural checks")
    validate_parser.add_argument("file", help="XLIFF file")

    complete_parser = subparsers.add_parser("complete", help="Check that every unit is translated")
    complete_parser.add_argument("file", help="XLIFF file")

    info_parser = subparsers.add_parser("info", help="Show files and languages")
    info_parser.add_argument("file", help="XLIFF file")

    new_parser = subparsers.add_parser("new", help="Create an empty document")
    new_parser.add_argument("output", help="Path of the file to write")
    new_parser.add_argument("--source-lang", "-s", required=True, help="Source language code")
    new_parser.add_argument("--target-lang", "-t", required=True, help="Target language code")
    new_parser.add_argument("--original", help="Value of the file's 'original' attribute")

    add_parser = subparsers.add_parser("add", help="Append a trans-unit to the last file")
    add_parser.add_argument("file", help="XLIFF file")
    add_parser.add_argument("source", help="Source text")
    add_parser.add_argument("--target", help="Translated text")
    add_parser.add_argument("--note", help="Note for translators")
    add_parser.add_argument("--output", "-o", help="Write here instead of overwriting the input")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        result = COMMANDS[args.command](args)
    except (OSError, etree.XMLSyntaxError, XliffError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0 if result["status"] == "ok" else 1


def run():
    """Console script entry point."""
    setup_logging()
    setup_exception_hook()
    sys.exit(main())


if __name__ == "__main__":
    run()
