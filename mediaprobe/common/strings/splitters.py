from typing import List, Optional


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def split_tag_values(v: Optional[str], sep: str = "/") -> List[str]:
    """
    Split a multi-valued tag ("Rock/Pop") into its segments.

    Segments are returned verbatim: no stripping, no filtering of empty
    pieces. An empty or missing value yields [].
    """
    if not v:
        return []
    return v.split(sep)


def first_segment(v: Optional[str], sep: str = "/") -> Optional[str]:
    """'2/5' -> '2'. Returns None for an empty or missing value."""
    if not v:
        return None
    return v.split(sep, 1)[0]
