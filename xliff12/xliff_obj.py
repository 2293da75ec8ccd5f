import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from .exceptions import InvalidLastIDError, NoFilesError
from .logger import get_logger

logger = get_logger(__name__)

XLIFF_VERSION = "1.2"
PLAINTEXT = "plaintext"

# Auto-increment only understands plain decimal ids such as "7" or "-1"
_NUMERIC_ID = re.compile(r"[+-]?[0-9]+")


@dataclass
class Tool:
    """<tool> metadata in a file header. Carried through, never validated."""
    tool_id: str = ""
    tool_name: str = ""
    tool_version: str = ""
    build_num: str = ""

    def is_empty(self) -> bool:
        return not (self.tool_id or self.tool_name or self.tool_version or self.build_num)


@dataclass
class Header:
    tool: Tool = field(default_factory=Tool)


@dataclass
class TransUnit:
    """
    Represents a single translation unit (trans-unit) from an XLIFF file.
    An empty target means the unit has not been translated yet.
    """
    id: str
    source: str = ""
    target: str = ""
    note: str = ""


@dataclass
class Body:
    trans_units: List[TransUnit] = field(default_factory=list)


@dataclass
class File:
    """One <file> element: a single source file being localized."""
    original: str = ""
    source_language: str = ""
    target_language: str = ""
    datatype: str = ""
    header: Header = field(default_factory=Header)
    body: Body = field(default_factory=Body)

    @property
    def trans_units(self) -> List[TransUnit]:
        return self.body.trans_units


TransUnitOption = Callable[[TransUnit], None]


def with_note(note: str) -> TransUnitOption:
    """Option for Document.add_trans_unit() that sets the unit's note."""
    def apply(unit: TransUnit):
        unit.note = note
    return apply


def with_target(target: str) -> TransUnitOption:
    """Option for Document.add_trans_unit() that sets the unit's target."""
    def apply(unit: TransUnit):
        unit.target = target
    return apply


@dataclass
class Document:
    """
    In-memory XLIFF document. The first file's languages are treated as the
    language pair of the whole document.

    Not safe for concurrent mutation; callers sharing a Document across
    threads must hold their own lock.
    """
    version: str = ""
    files: List[File] = field(default_factory=list)

    @classmethod
    def new(cls, source_language: str, target_language: str) -> "Document":
        """
        Returns a new, empty document holding a single file.
        datatype will always be "plaintext" and version will always be "1.2".
        """
        new_file = File(
            source_language=source_language,
            target_language=target_language,
            datatype=PLAINTEXT,
        )
        return cls(version=XLIFF_VERSION, files=[new_file])

    def file(self, original: str) -> Optional[File]:
        """Finds the first file whose 'original' matches exactly, or None."""
        for candidate in self.files:
            if candidate.original == original:
                return candidate
        return None

    def iter_trans_units(self) -> Iterator[Tuple[File, TransUnit]]:
        """Yields (file, unit) pairs in document order."""
        for xliff_file in self.files:
            for unit in xliff_file.body.trans_units:
                yield xliff_file, unit

    def add_trans_unit(self, source: str, *options: TransUnitOption) -> TransUnit:
        """
        Appends a new trans-unit to the last file of the document.

        The id is the previous unit's id plus one ("0" for an empty body).
        Options such as with_target() / with_note() run in the order given.

        Raises:
            NoFilesError: the document has no file.
            InvalidLastIDError: the last unit's id is not an integer.
        """
        if not self.files:
            logger.warning("Cannot add trans-unit: document has no file")
            raise NoFilesError()

        last_file = self.files[-1]
        next_id = self._next_id(last_file)

        unit = TransUnit(id=str(next_id), source=source)
        for option in options:
            option(unit)

        last_file.body.trans_units.append(unit)
        logger.debug(f"Added trans-unit {unit.id} to file '{last_file.original}'")
        return unit

    @staticmethod
    def _next_id(xliff_file: File) -> int:
        units = xliff_file.body.trans_units
        last_id = units[-1].id if units else "-1"
        if not _NUMERIC_ID.fullmatch(last_id):
            logger.warning(f"Last trans-unit id {last_id!r} in file '{xliff_file.original}' is not numeric")
            raise InvalidLastIDError(last_id)
        return int(last_id) + 1

    def is_complete(self) -> bool:
        """
        Returns True if all translation units in all files have both a
        non-empty source and target.
        """
        for _, unit in self.iter_trans_units():
            if not unit.source or not unit.target:
                return False
        return True

    def validate(self):
        """Runs the structural checks. See xliff12.validator.validate()."""
        from .validator import validate
        return validate(self)

    def to_bytes(self) -> bytes:
        from .parser import encode
        return encode(self)

    def to_file(self, path: str):
        """Writes the document to disk as XLIFF 1.2."""
        from .parser import to_file
        to_file(self, path)


def new_document(source_language: str, target_language: str) -> Document:
    return Document.new(source_language, target_language)
