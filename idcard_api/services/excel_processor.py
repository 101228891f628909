# idcard_api/services/excel_processor.py
"""Excel workbooks in and out, via pandas and openpyxl.

The header table below is used both ways: template downloads write these
headers and the bulk importer maps them back to field names.
"""
import io
import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl.styles import Font, PatternFill

from ..core.exceptions import ErrorCode, ServiceError

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXAMPLE_VALUE = "Example data"

# Spreadsheet header -> field name
HEADER_FIELDS: Dict[str, str] = {
    "Student Name": "name",
    "Name": "name",
    "Admission Number": "admissionNo",
    "Admission No": "admissionNo",
    "Class": "class",
    "Father's Name": "fatherName",
    "Father Name": "fatherName",
    "Mother's Name": "motherName",
    "Mother Name": "motherName",
    "Date of Birth": "dob",
    "DOB": "dob",
    "Mobile Number": "mobile",
    "Mobile": "mobile",
    "Phone Number": "phone",
    "Phone": "phone",
    "Email": "email",
    "Address": "address",
    "Photo URL": "photoUrl",
    "Photo": "photoUrl",
    "Aadhaar Number": "aadhaar",
    "Aadhaar": "aadhaar",
    "Blood Group": "bloodGroup",
    "Username": "username",
    "Password": "password",
    "School ID": "schoolId",
    "School": "schoolId",
    "Class ID": "classId",
}

# Template data tag -> spreadsheet header
TAG_HEADERS: Dict[str, str] = {
    "studentName": "Student Name",
    "admissionNo": "Admission Number",
    "class": "Class",
    "fatherName": "Father's Name",
    "motherName": "Mother's Name",
    "dob": "Date of Birth",
    "bloodGroup": "Blood Group",
    "mobile": "Mobile Number",
    "address": "Address",
    "photo": "Photo URL",
    "photoUrl": "Photo URL",
    "aadhaar": "Aadhaar Number",
    "name": "Name",
    "email": "Email",
    "classId": "Class ID",
    "username": "Username",
    "password": "Password",
    "phone": "Phone Number",
    "schoolId": "School ID",
}


def header_for_tag(tag: str) -> str:
    """``fatherName`` -> ``Father's Name``; unknown tags become Title Case."""
    if tag in TAG_HEADERS:
        return TAG_HEADERS[tag]
    spaced = re.sub(r"([A-Z])", r" \1", tag).strip()
    return spaced[:1].upper() + spaced[1:]


def _cell_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime, pd.Timestamp)):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        if pd.isna(value):
            return None
        # Excel stores 9876543210 as 9876543210.0
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text or None


class ExcelProcessor:
    ALLOWED_EXTENSIONS = (".xlsx",)

    @staticmethod
    def check_upload(filename: Optional[str], size: int, max_bytes: int):
        if not filename:
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "No file uploaded")
        if not filename.lower().endswith(ExcelProcessor.ALLOWED_EXTENSIONS):
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Only Excel files (.xlsx) are allowed")
        if size > max_bytes:
            raise ServiceError(
                ErrorCode.VALIDATION_ERROR,
                f"File is too large (maximum {max_bytes // (1024 * 1024)} MB)",
            )

    @staticmethod
    def read_rows(contents: bytes) -> List[Dict[str, str]]:
        """
        Parse the first worksheet into a list of ``{header: text}`` dicts.
        Blank cells are left out and fully blank rows are dropped.
        """
        try:
            df = pd.read_excel(io.BytesIO(contents), sheet_name=0, dtype=object, engine="openpyxl")
        except Exception as e:
            logger.info(f"Unreadable workbook: {e}")
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Unable to read Excel file")

        # Clean column names; pandas labels empty header cells "Unnamed: N"
        df.columns = [str(col).strip() for col in df.columns]
        headers = [col for col in df.columns if col and not col.startswith("Unnamed:")]
        if not headers:
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "No headers found in Excel file")

        df = df[headers].dropna(how="all").reset_index(drop=True)

        rows = []
        for _, row in df.iterrows():
            row_dict = {}
            for col, value in row.items():
                text = _cell_text(value)
                if text is not None:
                    row_dict[col] = text
            if row_dict:
                rows.append(row_dict)

        if not rows:
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Excel file contains no data rows")
        return rows

    @staticmethod
    def map_row(raw: Dict[str, str]) -> Dict[str, str]:
        """Translate spreadsheet headers into field names; unknown headers are ignored."""
        mapped = {}
        for header, value in raw.items():
            field = HEADER_FIELDS.get(header)
            if field:
                mapped[field] = value
        return mapped

    @staticmethod
    def generate_template(data_tags: List[str], sheet_name: str = "Template") -> bytes:
        """Workbook with one header row from the tags and one example row."""
        headers = list(dict.fromkeys(header_for_tag(tag) for tag in data_tags))
        df = pd.DataFrame([[EXAMPLE_VALUE] * len(headers)], columns=headers)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            worksheet = writer.sheets[sheet_name]

            header_fill = PatternFill(start_color="FF4472C4", end_color="FF4472C4", fill_type="solid")
            for idx, cell in enumerate(worksheet[1], start=1):
                cell.font = Font(bold=True, size=12)
                cell.fill = header_fill
                column = worksheet.cell(row=1, column=idx).column_letter
                worksheet.column_dimensions[column].width = max(len(str(cell.value)) + 5, 15)
            for cell in worksheet[2]:
                cell.font = Font(italic=True, color="FF808080")

            worksheet.freeze_panes = "A2"

        return buffer.getvalue()
