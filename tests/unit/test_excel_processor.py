# tests/unit/test_excel_processor.py
import io
from datetime import datetime

import pandas as pd
import pytest
from openpyxl import load_workbook

from idcard_api.core.exceptions import ServiceError
from idcard_api.services.excel_processor import ExcelProcessor, header_for_tag


def workbook_bytes(rows, columns):
    buffer = io.BytesIO()
    pd.DataFrame(rows, columns=columns).to_excel(buffer, index=False, engine="openpyxl")
    return buffer.getvalue()


def test_header_for_known_and_unknown_tags():
    assert header_for_tag("admissionNo") == "Admission Number"
    assert header_for_tag("fatherName") == "Father's Name"
    assert header_for_tag("houseColour") == "House Colour"


def test_generated_template_has_headers_and_example_row():
    content = ExcelProcessor.generate_template(["studentName", "admissionNo", "classId", "photo", "photoUrl"])
    sheet = load_workbook(io.BytesIO(content)).active

    headers = [cell.value for cell in sheet[1]]
    assert headers == ["Student Name", "Admission Number", "Class ID", "Photo URL"]
    assert [cell.value for cell in sheet[2]] == ["Example data"] * 4
    assert sheet.freeze_panes == "A2"


def test_template_headers_map_back_to_fields():
    content = ExcelProcessor.generate_template(["studentName", "admissionNo", "fatherName", "dob"])
    rows = ExcelProcessor.read_rows(content)
    assert ExcelProcessor.map_row(rows[0]) == {
        "name": "Example data",
        "admissionNo": "Example data",
        "fatherName": "Example data",
        "dob": "Example data",
    }


def test_read_rows_normalizes_cells_and_drops_blank_rows():
    content = workbook_bytes(
        [
            ["Aarav", 9876543210, datetime(2014, 6, 15)],
            [None, None, None],
            ["  Meera ", 9123456780.0, "2013-01-02"],
        ],
        ["Student Name", "Mobile Number", "Date of Birth"],
    )

    rows = ExcelProcessor.read_rows(content)
    assert rows == [
        {"Student Name": "Aarav", "Mobile Number": "9876543210", "Date of Birth": "2014-06-15"},
        {"Student Name": "Meera", "Mobile Number": "9123456780", "Date of Birth": "2013-01-02"},
    ]


def test_map_row_ignores_unknown_headers():
    assert ExcelProcessor.map_row({"Admission No": "A1", "Favourite Colour": "red"}) == {"admissionNo": "A1"}


def test_header_only_workbook_has_no_rows():
    with pytest.raises(ServiceError) as exc:
        ExcelProcessor.read_rows(workbook_bytes([], ["Student Name", "Class ID"]))
    assert exc.value.message == "Excel file contains no data rows"


def test_garbage_bytes_are_unreadable():
    with pytest.raises(ServiceError) as exc:
        ExcelProcessor.read_rows(b"definitely not a zip file")
    assert exc.value.message == "Unable to read Excel file"


@pytest.mark.parametrize(
    "filename,size,message",
    [
        (None, 10, "No file uploaded"),
        ("students.csv", 10, "Only Excel files (.xlsx) are allowed"),
        ("students.xlsx", 11 * 1024 * 1024, "File is too large (maximum 10 MB)"),
    ],
)
def test_check_upload_rejections(filename, size, message):
    with pytest.raises(ServiceError) as exc:
        ExcelProcessor.check_upload(filename, size, 10 * 1024 * 1024)
    assert exc.value.message == message
