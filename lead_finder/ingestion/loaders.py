"""Utilities for loading filing text and property facts."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import DocumentInput, ExternalFacts

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

_DOCUMENT_SUFFIXES = {".txt"}

_FIELD_SYNONYMS: Mapping[str, Sequence[str]] = {
    "document_id": ("document_id", "doc_id", "id", "instrument", "instrument_number"),
    "purchase_date": ("purchase_date", "sale_date", "deed_date"),
    "neighborhood_grade": ("neighborhood_grade", "grade", "neighborhood"),
    "bed_count": ("bed_count", "beds", "bedrooms"),
    "bath_count": ("bath_count", "baths", "bathrooms"),
}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to a loader."""


def load_documents(paths: Iterable[PathLike]) -> List[DocumentInput]:
    """Load extracted filing text from ``.txt`` files or directories of them.

    Directories are expanded to the ``.txt`` files they contain, sorted by
    name. The document id is the file stem.
    """

    documents: List[DocumentInput] = []
    for path in paths:
        path_obj = Path(path)
        if path_obj.is_dir():
            files = sorted(child for child in path_obj.iterdir() if child.suffix.lower() in _DOCUMENT_SUFFIXES)
            LOGGER.debug("Found %s documents in %s", len(files), path_obj)
        elif path_obj.suffix.lower() in _DOCUMENT_SUFFIXES:
            files = [path_obj]
        else:
            raise UnsupportedFileTypeError(f"Unsupported document extension: {path_obj.suffix}")

        for file_path in files:
            text = file_path.read_text(encoding="utf-8", errors="replace")
            documents.append(DocumentInput(id=file_path.stem, text=text))

    return documents


def load_external_facts(
    path: PathLike,
    *,
    column_mapping: Optional[Mapping[str, str]] = None,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> Dict[str, ExternalFacts]:
    """Load property facts keyed by document id from a spreadsheet.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/XLSX file to be loaded.
    column_mapping:
        Optional mapping of :class:`ExternalFacts` field names (plus
        ``document_id``) to column names.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel`. Ignored for CSV files.
    loader_kwargs:
        Extra keyword arguments forwarded to the pandas reader.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    mapping = dict(column_mapping or {})
    columns = {field: _resolve_column(field, dataframe.columns, mapping) for field in _FIELD_SYNONYMS}

    if columns["document_id"] is None:
        raise ValueError(f"No document id column found in {path}")

    facts: Dict[str, ExternalFacts] = {}
    for _, row in dataframe.iterrows():
        document_id = _clean_text(row[columns["document_id"]])
        if document_id is None:
            continue
        facts[document_id] = ExternalFacts(
            purchase_date=_parse_date(_value(row, columns["purchase_date"])),
            neighborhood_grade=_clean_text(_value(row, columns["neighborhood_grade"])),
            bed_count=_parse_int(_value(row, columns["bed_count"])),
            bath_count=_parse_float(_value(row, columns["bath_count"])),
        )

    LOGGER.debug("Loaded property facts for %s documents", len(facts))
    return facts


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    loader_kwargs.setdefault("dtype", str)
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        return pd.read_csv(path_obj, **loader_kwargs)

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=engine, **loader_kwargs)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _resolve_column(field: str, available_columns: Iterable[str], mapping: Mapping[str, str]) -> Optional[str]:
    if field in mapping:
        return mapping[field]

    available = list(available_columns)
    for synonym in _FIELD_SYNONYMS[field]:
        for column in available:
            if str(column).strip().lower().replace(" ", "_") == synonym:
                return column
    return None


def _value(row: pd.Series, column: Optional[str]) -> Any:
    if column is None or column not in row:
        return None
    return row[column]


def _clean_text(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _parse_date(value: Any) -> Optional[date]:
    text = _clean_text(value)
    if text is None:
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        LOGGER.debug("Ignoring unparseable purchase date %r", text)
        return None
    return parsed.date()


def _parse_float(value: Any) -> Optional[float]:
    text = _clean_text(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _parse_int(value: Any) -> Optional[int]:
    number = _parse_float(value)
    return None if number is None else int(number)


__all__ = ["UnsupportedFileTypeError", "load_documents", "load_external_facts"]
