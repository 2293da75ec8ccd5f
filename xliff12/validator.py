from dataclasses import dataclass
from enum import Enum
from typing import List

from .xliff_obj import Document, PLAINTEXT, XLIFF_VERSION
from .logger import get_logger

logger = get_logger(__name__)


class ValidationErrorCode(Enum):
    UNSUPPORTED_VERSION = "UnsupportedVersion"
    MISSING_ORIGINAL_ATTRIBUTE = "MissingOriginalAttribute"
    MISSING_SOURCE_LANGUAGE = "MissingSourceLanguage"
    MISSING_TARGET_LANGUAGE = "MissingTargetLanguage"
    UNSUPPORTED_DATATYPE = "UnsupportedDatatype"
    INCONSISTENT_SOURCE_LANGUAGE = "InconsistentSourceLanguage"
    INCONSISTENT_TARGET_LANGUAGE = "InconsistentTargetLanguage"
    MISSING_TRANS_UNIT_ID = "MissingTransUnitID"
    MISSING_TRANS_UNIT_SOURCE = "MissingTransUnitSource"
    MISSING_TRANS_UNIT_TARGET = "MissingTransUnitTarget"
    # No <file> at all, so there is no language pair to compare against
    NO_FILES = "NoFiles"


@dataclass(frozen=True)
class ValidationError:
    """One finding produced by the validator. A value, not an exception."""
    code: ValidationErrorCode
    message: str

    def __str__(self):
        return f"{self.code.value}: {self.message}"


class XliffValidator:
    """
    Runs the structural consistency checks against a Document.

    Every check runs; all findings are returned in check order rather than
    stopping at the first problem. The document is never modified.
    """

    def check(self, document: Document) -> List[ValidationError]:
        errors: List[ValidationError] = []
        errors.extend(self._check_version(document))
        errors.extend(self._check_file_attributes(document))
        errors.extend(self._check_language_consistency(document))
        errors.extend(self._check_trans_units(document))

        for error in errors:
            logger.debug(str(error))
        if errors:
            logger.debug(f"Validation found {len(errors)} problem(s)")
        else:
            logger.debug("Validation passed")
        return errors

    def _check_version(self, document: Document) -> List[ValidationError]:
        if document.version == XLIFF_VERSION:
            return []
        return [ValidationError(
            ValidationErrorCode.UNSUPPORTED_VERSION,
            f"Version '{document.version}' is not supported",
        )]

    def _check_file_attributes(self, document: Document) -> List[ValidationError]:
        errors = []
        for idx, xliff_file in enumerate(document.files):
            if not xliff_file.original:
                errors.append(ValidationError(
                    ValidationErrorCode.MISSING_ORIGINAL_ATTRIBUTE,
                    f"File #{idx} is missing 'original' attribute",
                ))
            if not xliff_file.source_language:
                errors.append(ValidationError(
                    ValidationErrorCode.MISSING_SOURCE_LANGUAGE,
                    f"File '{xliff_file.original}' is missing 'source-language' attribute",
                ))
            if not xliff_file.target_language:
                errors.append(ValidationError(
                    ValidationErrorCode.MISSING_TARGET_LANGUAGE,
                    f"File '{xliff_file.original}' is missing 'target-language' attribute",
                ))
            if xliff_file.datatype != PLAINTEXT:
                errors.append(ValidationError(
                    ValidationErrorCode.UNSUPPORTED_DATATYPE,
                    f"File '{xliff_file.original}' has unsupported 'datatype' attribute "
                    f"with value '{xliff_file.datatype}'",
                ))
        return errors

    def _check_language_consistency(self, document: Document) -> List[ValidationError]:
        if not document.files:
            return [ValidationError(
                ValidationErrorCode.NO_FILES,
                "Document contains no <file> element",
            )]

        errors = []
        first = document.files[0]
        for xliff_file in document.files:
            if xliff_file.source_language != first.source_language:
                errors.append(ValidationError(
                    ValidationErrorCode.INCONSISTENT_SOURCE_LANGUAGE,
                    f"File '{xliff_file.original}' has inconsistent 'source-language' "
                    f"attribute '{xliff_file.source_language}'",
                ))
            if xliff_file.target_language != first.target_language:
                errors.append(ValidationError(
                    ValidationErrorCode.INCONSISTENT_TARGET_LANGUAGE,
                    f"File '{xliff_file.original}' has inconsistent 'target-language' "
                    f"attribute '{xliff_file.target_language}'",
                ))
        return errors

    def _check_trans_units(self, document: Document) -> List[ValidationError]:
        # Ids are only required to be present; uniqueness is not checked.
        errors = []
        for xliff_file in document.files:
            for idx, unit in enumerate(xliff_file.body.trans_units):
                if not unit.id:
                    errors.append(ValidationError(
                        ValidationErrorCode.MISSING_TRANS_UNIT_ID,
                        f"Translation unit #{idx} in file '{xliff_file.original}' "
                        f"is missing 'id' attribute",
                    ))
                if not unit.source:
                    errors.append(ValidationError(
                        ValidationErrorCode.MISSING_TRANS_UNIT_SOURCE,
                        f"Translation unit '{unit.id}' in file '{xliff_file.original}' "
                        f"is missing 'source' element",
                    ))
                if not unit.target:
                    errors.append(ValidationError(
                        ValidationErrorCode.MISSING_TRANS_UNIT_TARGET,
                        f"Translation unit '{unit.id}' in file '{xliff_file.original}' "
                        f"is missing 'target' element",
                    ))
        return errors


def validate(document: Document) -> List[ValidationError]:
    """Convenience wrapper around XliffValidator().check()."""
    return XliffValidator().check(document)
