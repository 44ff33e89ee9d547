"""Batch orchestration for checking bookings across carriers."""

from .service import BatchOrchestrator, BoundedDispatcher, summarize

__all__ = ["BatchOrchestrator", "BoundedDispatcher", "summarize"]
