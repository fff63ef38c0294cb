import pytest

from lead_importer.ingestion.tokenizer import (
    CsvImportError,
    EmptyInputError,
    MalformedCsvError,
    NoDataError,
    parse,
)


@pytest.mark.parametrize("text", ["", "   ", "\n\n  \t\n", "\ufeff", "\ufeff \n"])
def test_blank_input_is_rejected(text):
    with pytest.raises(EmptyInputError, match="CSV content cannot be empty"):
        parse(text)


def test_header_only_document_has_no_data():
    with pytest.raises(NoDataError, match="contains no valid data"):
        parse("firstName,lastName,email")


def test_document_with_only_blank_rows_has_no_data():
    with pytest.raises(NoDataError):
        parse("firstName,lastName,email\n,,\n\n , , \n")


def test_headers_are_trimmed_and_lowercased():
    rows = parse(" First Name ,LASTNAME,Email\nJohn,Doe,john@example.com")

    assert rows == [{"first name": "John", "lastname": "Doe", "email": "john@example.com"}]


def test_values_are_trimmed():
    rows = parse("firstName,lastName,email\n John , Doe , john@example.com ")

    assert rows[0] == {"firstname": "John", "lastname": "Doe", "email": "john@example.com"}


def test_quoted_fields_may_contain_delimiters_and_quotes():
    rows = parse('firstName,lastName,companyName\nJohn,Doe,"Acme, ""Widgets"" Inc"')

    assert rows[0]["companyname"] == 'Acme, "Widgets" Inc'


def test_quoted_field_may_span_lines():
    rows = parse('firstName,lastName,jobTitle\nJohn,Doe,"Head of\nSales"\nJane,Smith,CTO')

    assert [row["jobtitle"] for row in rows] == ["Head of\nSales", "CTO"]


def test_custom_quote_character():
    rows = parse("firstName,lastName,companyName\nJohn,Doe,'Acme, Inc'", quote_char="'")

    assert rows[0]["companyname"] == "Acme, Inc"


def test_custom_delimiter():
    rows = parse("firstName;lastName;email\nJohn;Doe;john@example.com", delimiter=";")

    assert rows[0]["email"] == "john@example.com"


def test_blank_rows_are_skipped():
    rows = parse("firstName,lastName,email\n\nJohn,Doe,j@example.com\n,,\nJane,Smith,s@example.com\n")

    assert [row["firstname"] for row in rows] == ["John", "Jane"]


def test_leading_blank_lines_before_header_are_ignored():
    rows = parse("\n\nfirstName,lastName,email\nJohn,Doe,j@example.com")

    assert rows[0]["firstname"] == "John"


def test_byte_order_mark_is_ignored():
    rows = parse("\ufefffirstName,lastName,email\nJohn,Doe,j@example.com")

    assert "firstname" in rows[0]


def test_too_many_fields_fails_whole_parse():
    text = "firstName,lastName,email\nJohn,Doe,john@example.com,ExtraField,AnotherExtra\nJane,Smith"

    with pytest.raises(MalformedCsvError, match="CSV parsing failed: Too many fields") as excinfo:
        parse(text)

    assert "expected 3 fields but parsed 5" in excinfo.value.reason


def test_too_few_fields_fails_whole_parse():
    with pytest.raises(MalformedCsvError, match="Too few fields: expected 3 fields but parsed 2 \\(line 3\\)"):
        parse("firstName,lastName,email\nJohn,Doe,john@example.com\nJane,Smith")


def test_characters_after_closing_quote_are_rejected():
    text = 'firstName,lastName,email\n"John,Doe,john@example.com,extra"field'

    with pytest.raises(MalformedCsvError, match="CSV parsing failed"):
        parse(text)


def test_unterminated_quote_is_rejected():
    with pytest.raises(MalformedCsvError):
        parse('firstName,lastName,email\n"John,Doe,john@example.com\n')


def test_single_column_header_is_rejected():
    with pytest.raises(MalformedCsvError, match="delimiting character"):
        parse("firstName lastName email\nJohn Doe john@example.com")


def test_structural_errors_share_a_base_class():
    assert issubclass(EmptyInputError, CsvImportError)
    assert issubclass(NoDataError, CsvImportError)
    assert issubclass(MalformedCsvError, CsvImportError)
    assert issubclass(CsvImportError, ValueError)


def test_very_large_cells_are_accepted():
    job_title = "x" * 200_000

    rows = parse("firstName,lastName,email,jobTitle\nJohn,Doe,j@example.com," + job_title)

    assert rows[0]["jobtitle"] == job_title


def test_whitespace_after_closing_quote_is_rejected():
    with pytest.raises(MalformedCsvError, match="expected after"):
        parse('firstName,lastName,email\n"John" ,Doe,john@example.com')
