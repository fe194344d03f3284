"""Data models for tabular sheets."""

from pydantic import BaseModel, Field, field_validator

# A row maps header text to the cell's string value. Missing keys read as "".
Row = dict[str, str]


class SheetData(BaseModel):
    """An ordered set of headers plus the rows keyed by them."""

    headers: list[str] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)

    @field_validator("headers")
    @classmethod
    def _headers_unique(cls, headers: list[str]) -> list[str]:
        seen = set()
        for header in headers:
            if header in seen:
                raise ValueError(f"Duplicate header: '{header}'")
            seen.add(header)
        return headers

    @property
    def is_empty(self) -> bool:
        return not self.headers

    def get_statistics(self) -> dict:
        """Column and row counts, used in decode logging."""
        return {
            "column_count": len(self.headers),
            "row_count": len(self.rows),
        }
