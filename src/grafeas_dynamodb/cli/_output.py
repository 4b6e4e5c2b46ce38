"""Output formatting helpers for the CLI."""

from __future__ import annotations

import json
import sys
from typing import Any

from pydantic import BaseModel


def to_data(model: BaseModel) -> dict[str, Any]:
    """Plain JSON-ready dict of a record, using the stored camelCase field names."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _dump(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def format_rows(headers: list[str], rows: list[list[Any]]) -> list[str]:
    """Left-aligned text columns: header, rule, then one line per row."""
    cells = [list(headers)] + [[str(v) for v in row] for row in rows]
    widths = [max(len(line[i]) for line in cells) for i in range(len(headers))]
    lines = ["  ".join(c.ljust(w) for c, w in zip(line, widths)).rstrip() for line in cells]
    lines.insert(1, "  ".join("-" * w for w in widths))
    return lines


def print_object(data: dict[str, Any], *, json_mode: bool = False) -> None:
    """Print one record as JSON or ``key: value`` lines; nested values stay JSON."""
    if json_mode:
        _dump(data)
        return
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, default=str)
        print(f"{key}: {value}")


def print_page(
    headers: list[str],
    rows: list[list[Any]],
    next_page_token: str,
    *,
    json_mode: bool = False,
) -> None:
    """Print one list page followed by its continuation token."""
    if json_mode:
        _dump({"items": [dict(zip(headers, row)) for row in rows], "nextPageToken": next_page_token})
        return

    if not rows:
        print("(no results)")
    else:
        print("\n".join(format_rows(headers, rows)))
    if next_page_token:
        print(f"\nNext page token: {next_page_token}")


def print_error(msg: str) -> None:
    """Print an error message to stderr."""
    print(f"Error: {msg}", file=sys.stderr)
