"""
Label Janitor
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set

from label_janitor.client import ApiError, GraphQLClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

LABELS_QUERY = """
query IssueLabels($first: Int!, $after: String) {
  issueLabels(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      name
      isGroup
      issues(first: 1) { nodes { id } }
    }
  }
}
"""


@dataclass(frozen=True)
class Label:
    """A label snapshot; ``issue_ids`` holds at most one id from the usage lookup."""

    id: str
    name: str
    is_group: bool = False
    issue_ids: tuple[str, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.issue_ids)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "Label":
        if not isinstance(node, dict) or not isinstance(node.get("id"), str):
            raise ApiError(f"malformed label node: {node!r}")
        issues = node.get("issues") or {}
        issue_nodes = issues.get("nodes") if isinstance(issues, dict) else None
        issue_ids = tuple(
            str(item["id"]) for item in issue_nodes or [] if isinstance(item, dict) and item.get("id") is not None
        )
        return cls(
            id=node["id"],
            name=str(node.get("name") or ""),
            is_group=bool(node.get("isGroup")),
            issue_ids=issue_ids,
        )


class FetchState(Enum):
    FETCHING = "fetching"
    DONE = "done"


def _page_payload(data: Dict[str, Any]) -> tuple[list, Dict[str, Any]]:
    connection = data.get("issueLabels")
    if not isinstance(connection, dict):
        raise ApiError("response is missing issueLabels")
    nodes = connection.get("nodes")
    page_info = connection.get("pageInfo")
    if not isinstance(nodes, list) or not isinstance(page_info, dict):
        raise ApiError("issueLabels response is missing nodes or pageInfo")
    if not isinstance(page_info.get("hasNextPage"), bool):
        raise ApiError("pageInfo.hasNextPage must be a boolean")
    return nodes, page_info


def fetch_all_labels(client: GraphQLClient, *, page_size: int = PAGE_SIZE) -> List[Label]:
    """
    Fetch every label across all pages, in the order the service returns them.

    Only ``pageInfo.hasNextPage == false`` ends the loop; an empty page that
    still reports a next page triggers another request. A next page whose
    cursor is missing or was already requested raises ``ApiError``. Any error
    propagates, so callers never see a partial list.
    """
    labels: List[Label] = []
    seen_ids: Set[str] = set()
    used_cursors: Set[Optional[str]] = set()
    cursor: Optional[str] = None
    state = FetchState.FETCHING
    page_no = 0

    while state is FetchState.FETCHING:
        used_cursors.add(cursor)
        data = client.execute(LABELS_QUERY, {"first": page_size, "after": cursor})
        nodes, page_info = _page_payload(data)
        page_no += 1

        for node in nodes:
            label = Label.from_node(node)
            if label.id in seen_ids:
                logger.warning("Skipping duplicate label %s (%s) on page %d", label.id, label.name, page_no)
                continue
            seen_ids.add(label.id)
            labels.append(label)
        logger.info("Fetched label page %d (%d nodes, %d total)", page_no, len(nodes), len(labels))

        if not page_info["hasNextPage"]:
            state = FetchState.DONE
            continue

        next_cursor = page_info.get("endCursor")
        if not next_cursor or next_cursor in used_cursors:
            raise ApiError(f"pagination did not advance after page {page_no} (endCursor={next_cursor!r})")
        cursor = next_cursor

    return labels


def select_unused(labels: Iterable[Label]) -> List[Label]:
    """Labels with no linked issues that are not group labels, in input order."""
    return [label for label in labels if not label.has_issues and not label.is_group]
