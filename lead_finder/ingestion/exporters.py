"""Export utilities for classified leads."""
from __future__ import annotations

from pathlib import Path
from typing import MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import AddressCandidate, ClassifiedLead

PathLike = Union[str, Path]


def export_classified_leads(
    leads: Sequence[ClassifiedLead],
    path: PathLike,
    *,
    include_links: bool = True,
    sheet_name: str = "Leads",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write classified leads to a CSV, TSV or Excel file."""

    dataframe = results_to_dataframe(leads, include_links=include_links)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(dataframe, output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def results_to_dataframe(leads: Sequence[ClassifiedLead], *, include_links: bool = True) -> pd.DataFrame:
    """Convert classified leads into a :class:`pandas.DataFrame`, one row per lead."""

    return pd.DataFrame([_lead_to_row(lead, include_links=include_links) for lead in leads])


def _lead_to_row(lead: ClassifiedLead, *, include_links: bool) -> MutableMapping[str, object]:
    classification = lead.classification
    row: MutableMapping[str, object] = {
        "id": lead.id,
        "overall_score": classification.overall_score,
        "plaintiff": lead.plaintiff.name,
        "plaintiff_type": lead.plaintiff.type,
        "defendant": lead.defendant.name,
        "defendant_type": lead.defendant.type,
        "property_address": _address_text(lead.property_address),
        "address_quality": lead.property_address.quality if lead.property_address else None,
        "mailing_address": _address_text(lead.mailing_address),
    }

    for result in classification.levels:
        row[f"level{result.level}_score"] = result.score
        row[f"level{result.level}_note"] = result.note

    row["stop_reason"] = classification.stop_reason
    row["concerns"] = "; ".join(classification.concerns)
    row["notes"] = "; ".join(classification.notes)
    row["pdf_url"] = lead.pdf_url

    if include_links:
        for name, url in lead.lookup_links.as_dict().items():
            row[f"link.{name}"] = url

    if lead.raw_text is not None:
        row["raw_text"] = lead.raw_text
    return row


def _address_text(address: Optional[AddressCandidate]) -> Optional[str]:
    return address.cleaned if address is not None else None


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = ["export_classified_leads", "results_to_dataframe"]
