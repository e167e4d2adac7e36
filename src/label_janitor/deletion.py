from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from label_janitor.client import ApiError, GraphQLClient, TransportError
from label_janitor.labels import Label

logger = logging.getLogger(__name__)

DELETE_LABEL_MUTATION = """
mutation DeleteLabel($id: String!) {
  issueLabelDelete(id: $id) {
    success
  }
}
"""


@dataclass(frozen=True)
class DeletionResult:
    label: Label
    deleted: bool
    error: Optional[str] = None


def delete_label(client: GraphQLClient, label: Label) -> bool:
    data = client.execute(DELETE_LABEL_MUTATION, {"id": label.id})
    payload = data.get("issueLabelDelete")
    return isinstance(payload, dict) and payload.get("success") is True


def delete_labels(
    client: GraphQLClient,
    labels: Iterable[Label],
    *,
    out: Callable[[str], None] = print,
) -> List[DeletionResult]:
    """
    Delete each label independently.

    A failure on one label is reported and recorded, then the next label is
    attempted. Returns one result per label in input order.
    """
    results: List[DeletionResult] = []
    for label in labels:
        try:
            ok = delete_label(client, label)
        except (TransportError, ApiError) as exc:
            logger.error("Deleting label %s (%s) failed: %s", label.id, label.name, exc)
            out(f"❌ Error deleting label {label.name}: {exc}")
            results.append(DeletionResult(label=label, deleted=False, error=str(exc)))
            continue
        if ok:
            out(f"✅ Deleted label: {label.name}")
            results.append(DeletionResult(label=label, deleted=True))
        else:
            out(f"⚠️ Could not delete label: {label.name}")
            results.append(DeletionResult(label=label, deleted=False, error="success=false"))
    return results
