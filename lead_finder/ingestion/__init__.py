"""Loading filing text and property facts, and exporting classified leads."""

from .exporters import export_classified_leads, results_to_dataframe  # noqa: F401
from .loaders import UnsupportedFileTypeError, load_documents, load_external_facts  # noqa: F401

__all__ = [
    "UnsupportedFileTypeError",
    "export_classified_leads",
    "load_documents",
    "load_external_facts",
    "results_to_dataframe",
]
