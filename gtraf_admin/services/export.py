import csv
import io
import json
from typing import Any, Dict, List, Sequence

from gtraf_admin.services.query_view import display_value


def _headers(rows: Sequence[Dict[str, Any]]) -> List[str]:
    headers: List[str] = []
    for row in rows:
        for key in row:
            if key not in headers:
                headers.append(key)
    return headers


def to_csv(rows: Sequence[Dict[str, Any]]) -> str:
    """CSV text with one column per field seen, in first-seen order.

    Values go through the same display formatting as the tables, and cells
    containing commas are quoted. An empty list yields an empty string.
    """
    if not rows:
        return ""

    headers = _headers(rows)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([display_value(row.get(header)) for header in headers])
    return buffer.getvalue()


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)
