"""
xliff12 - read, check, edit and write XLIFF 1.2 translation files.

Quick start:
    from xliff12 import from_file, with_target
    doc = from_file("strings.xliff")
    doc.add_trans_unit("Hallo Welt", with_target("Hello World"))
    for error in doc.validate():
        print(error)
    doc.to_file("strings.xliff")
"""

__version__ = "0.1.0"

from .exceptions import InvalidLastIDError, NoFilesError, XliffError
from .xliff_obj import (
    Body,
    Document,
    File,
    Header,
    Tool,
    TransUnit,
    new_document,
    with_note,
    with_target,
)
from .parser import XMLSyntaxError, decode, encode, from_file, read_all, to_file, write_all
from .validator import ValidationError, ValidationErrorCode, XliffValidator, validate

__all__ = [
    "Body",
    "Document",
    "File",
    "Header",
    "Tool",
    "TransUnit",
    "new_document",
    "with_note",
    "with_target",
    "decode",
    "encode",
    "from_file",
    "to_file",
    "read_all",
    "write_all",
    "ValidationError",
    "ValidationErrorCode",
    "XliffValidator",
    "validate",
    "XliffError",
    "NoFilesError",
    "InvalidLastIDError",
    "XMLSyntaxError",
]
