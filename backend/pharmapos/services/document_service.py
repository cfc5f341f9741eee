# Overview: Service-layer operations for document numbering.

from __future__ import annotations

from ..state import AppState


def next_document_number(
    state: AppState,
    *,
    document_type: str,
    prefix: str,
    pad: int = 6,
) -> str:
    """
    Allocate the next document number for a type (e.g. "S-000042").

    Numbers are never reused within a process, even after the records they
    named are removed.
    """
    number = state.sequences.get(document_type, 0) + 1
    state.sequences[document_type] = number
    return f"{prefix}-{number:0{pad}d}"
