from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from label_janitor.deletion import DeletionResult
from label_janitor.labels import Label


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def write_report(
    path: Path,
    *,
    mode: str,
    labels: Sequence[Label],
    unused: Sequence[Label],
    deletions: Optional[Sequence[DeletionResult]] = None,
) -> None:
    group_count = sum(1 for label in labels if label.is_group)
    used_count = sum(1 for label in labels if label.has_issues and not label.is_group)
    lines: list[str] = []
    lines.append("# Unused Label Report")
    lines.append("")
    lines.append(f"- generated_at: `{_utc_now_iso()}`")
    lines.append(f"- mode: `{mode}`")
    lines.append(f"- labels scanned: `{len(labels)}`")
    lines.append(f"- unused labels: `{len(unused)}`")
    lines.append(f"- group labels kept: `{group_count}`")
    lines.append(f"- labels in use: `{used_count}`")
    lines.append("")
    lines.append("## Unused")
    if not unused:
        lines.append("- (none)")
    else:
        for label in unused:
            lines.append(f"- `{label.name}` (id={label.id})")
    if deletions is not None:
        lines.append("")
        lines.append("## Deletion results")
        if not deletions:
            lines.append("- (none)")
        for result in deletions:
            status = "deleted" if result.deleted else f"failed: {result.error}"
            lines.append(f"- `{result.label.name}` {status}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
