import copy

from xliff12.parser import from_file
from xliff12.validator import ValidationError, ValidationErrorCode, XliffValidator, validate
from xliff12.xliff_obj import Document, File, TransUnit

CHECKED_CODES = [
    ValidationErrorCode.UNSUPPORTED_VERSION,
    ValidationErrorCode.MISSING_ORIGINAL_ATTRIBUTE,
    ValidationErrorCode.MISSING_SOURCE_LANGUAGE,
    ValidationErrorCode.MISSING_TARGET_LANGUAGE,
    ValidationErrorCode.UNSUPPORTED_DATATYPE,
    ValidationErrorCode.INCONSISTENT_SOURCE_LANGUAGE,
    ValidationErrorCode.INCONSISTENT_TARGET_LANGUAGE,
    ValidationErrorCode.MISSING_TRANS_UNIT_ID,
    ValidationErrorCode.MISSING_TRANS_UNIT_SOURCE,
    ValidationErrorCode.MISSING_TRANS_UNIT_TARGET,
]


def test_validate_good(testdata):
    doc = from_file(testdata("good.xliff"))
    assert doc.validate() == []


def test_validate_errors_reports_every_code(testdata):
    doc = from_file(testdata("errors.xliff"))
    errors = doc.validate()

    assert errors
    for code in CHECKED_CODES:
        matching = [e for e in errors if e.code == code]
        assert matching, f"Expected validation to fail with {code.value}"
        for error in matching:
            assert not str(error).startswith("Unknown: "), f"Error has no good message: {error}"


def test_validate_errors_order(testdata):
    errors = validate(from_file(testdata("errors.xliff")))
    # errors.xliff triggers each of the ten checks exactly once
    assert [e.code for e in errors] == CHECKED_CODES


def test_messages_name_the_offender(testdata):
    errors = validate(from_file(testdata("errors.xliff")))
    by_code = {e.code: e.message for e in errors}

    assert "1.1" in by_code[ValidationErrorCode.UNSUPPORTED_VERSION]
    assert "File #1" in by_code[ValidationErrorCode.MISSING_ORIGINAL_ATTRIBUTE]
    assert "'html'" in by_code[ValidationErrorCode.UNSUPPORTED_DATATYPE]
    assert "#0" in by_code[ValidationErrorCode.MISSING_TRANS_UNIT_ID]
    assert "'no-source'" in by_code[ValidationErrorCode.MISSING_TRANS_UNIT_SOURCE]
    assert "'no-target'" in by_code[ValidationErrorCode.MISSING_TRANS_UNIT_TARGET]


def test_every_code_renders_its_name():
    for code in ValidationErrorCode:
        rendered = str(ValidationError(code, "detail"))
        assert rendered == f"{code.value}: detail"
        assert not rendered.startswith("Unknown")


def test_inconsistent_languages_reported_per_file():
    doc = Document(version="1.2", files=[
        File(original="a", source_language="en", target_language="de", datatype="plaintext"),
        File(original="b", source_language="fr", target_language="de", datatype="plaintext"),
        File(original="c", source_language="en", target_language="es", datatype="plaintext"),
    ])
    errors = validate(doc)

    assert [(e.code, e.message) for e in errors] == [
        (ValidationErrorCode.INCONSISTENT_SOURCE_LANGUAGE,
         "File 'b' has inconsistent 'source-language' attribute 'fr'"),
        (ValidationErrorCode.INCONSISTENT_TARGET_LANGUAGE,
         "File 'c' has inconsistent 'target-language' attribute 'es'"),
    ]


def test_document_without_files_reports_no_files():
    errors = XliffValidator().check(Document(version="1.2"))

    assert [e.code for e in errors] == [ValidationErrorCode.NO_FILES]


def test_duplicate_ids_are_not_reported():
    doc = Document.new("de", "en")
    doc.files[0].original = "dup.txt"
    doc.files[0].body.trans_units = [
        TransUnit(id="1", source="a", target="b"),
        TransUnit(id="1", source="c", target="d"),
    ]
    assert validate(doc) == []


def test_validate_does_not_mutate(testdata):
    doc = from_file(testdata("errors.xliff"))
    before = copy.deepcopy(doc)

    validate(doc)

    assert doc == before


def test_built_document_validates():
    doc = Document.new("de", "en")
    doc.add_trans_unit("Hallo Welt")

    codes = [e.code for e in doc.validate()]
    assert codes == [
        ValidationErrorCode.MISSING_ORIGINAL_ATTRIBUTE,
        ValidationErrorCode.MISSING_TRANS_UNIT_TARGET,
    ]

    doc.files[0].original = "Welt.strings"
    doc.files[0].trans_units[0].target = "Hello World"
    assert doc.validate() == []
