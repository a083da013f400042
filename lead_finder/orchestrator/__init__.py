"""Workflow orchestration for classifying batches of filings."""

from .service import LeadPipeline

__all__ = ["LeadPipeline"]
