# Overview: Materialized tabular results returned by the accounting read queries.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class ResultTable:
    """
    Ordered columns plus a fully materialized list of row dicts.

    An empty table still carries its columns, so callers can render headers
    for "no rows" the same way as for a populated result.
    """
    columns: tuple[str, ...]
    rows: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_query(cls, query) -> "ResultTable":
        columns = tuple(desc["name"] for desc in query.column_descriptions)
        rows = [dict(row._mapping) for row in query.all()]
        return cls(columns=columns, rows=rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def column(self, name: str) -> list[Any]:
        if name not in self.columns:
            raise KeyError(name)
        return [row[name] for row in self.rows]

    def to_dict(self) -> dict:
        return {
            "columns": list(self.columns),
            "rows": [
                {key: value.isoformat() if hasattr(value, "isoformat") else value for key, value in row.items()}
                for row in self.rows
            ],
        }
