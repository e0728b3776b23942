# services/importer.py
"""
Spreadsheet import of attendees.

Accepts CSV and Excel files with a name column (Nombre / Name) and an optional
email column (Email / Correo), matched case-insensitively. A file that cannot
be parsed or has no name column aborts the whole import before anything is
written; rows without a name are skipped.
"""

import io
import logging
import os

import pandas as pd

from checkin.errors import ImportFormatError
from checkin.utils.data_processing import clean_email, clean_text_field, normalize_name

logger = logging.getLogger('importer')

NAME_ALIASES = ('nombre', 'name')
EMAIL_ALIASES = ('email', 'correo')

EXCEL_EXTENSIONS = ('.xlsx', '.xls')
CSV_ENCODINGS = ('utf-8', 'utf-8-sig', 'latin-1')


def read_table(source, filename=None):
    """
    Parse a CSV or Excel file into a DataFrame.

    Args:
        source: Path, bytes or binary file-like object
        filename: Original filename, used for the extension when source is not a path

    Returns:
        pandas.DataFrame

    Raises:
        ImportFormatError: the file is not tabular-parseable
    """
    if isinstance(source, (str, os.PathLike)):
        filename = filename or os.fspath(source)
        with open(source, 'rb') as handle:
            data = handle.read()
    elif isinstance(source, bytes):
        data = source
    else:
        data = source.read()

    if not data:
        raise ImportFormatError('The file is empty')

    ext = os.path.splitext(filename or '')[1].lower()

    try:
        if ext in EXCEL_EXTENSIONS:
            return pd.read_excel(io.BytesIO(data), dtype=str)
        return _read_csv(data)
    except ImportFormatError:
        raise
    except Exception as e:
        logger.warning(f"Could not parse import file {filename}: {str(e)}")
        raise ImportFormatError(f"Error reading file: {str(e)}") from e


def _read_csv(data):
    last_error = None
    for encoding in CSV_ENCODINGS:
        try:
            return pd.read_csv(io.BytesIO(data), encoding=encoding, dtype=str)
        except UnicodeDecodeError as e:
            last_error = e

    raise ImportFormatError(f"Unable to read file with multiple encodings: {str(last_error)}")


def resolve_columns(columns):
    """
    Map the name and email columns of a sheet.

    Returns:
        tuple: (name column, email column or None)

    Raises:
        ImportFormatError: no name column
    """
    name_column = None
    email_column = None

    for column in columns:
        key = clean_text_field(column).lower()
        if name_column is None and key in NAME_ALIASES:
            name_column = column
        elif email_column is None and key in EMAIL_ALIASES:
            email_column = column

    if name_column is None:
        raise ImportFormatError("Missing required columns: Nombre", columns=[str(c) for c in columns])

    return name_column, email_column


def extract_rows(df):
    """Turn a DataFrame into the row mappings DirectoryStore.bulk_add expects."""
    name_column, email_column = resolve_columns(df.columns)

    rows = []
    for _, record in df.iterrows():
        rows.append({
            'name': normalize_name(record[name_column]),
            'email': clean_email(record[email_column]) if email_column is not None else ''
        })
    return rows


def import_spreadsheet(source, directory, filename=None):
    """
    Import attendees from a spreadsheet into the directory.

    Returns:
        ImportResult: see DirectoryStore.bulk_add

    Raises:
        ImportFormatError: unreadable file or missing name column; nothing imported
    """
    df = read_table(source, filename=filename)
    rows = extract_rows(df)

    logger.info(f"Importing {len(rows)} rows from {filename or 'upload'}")
    return directory.bulk_add(rows)
