from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..analysis.models import CATEGORY_NAMES, TRAIT_NAMES
from .config import DEFAULT_MATCHING_CONFIG
from .models import CatalogItem

_catalog: tuple[CatalogItem, ...] | None = None


def _scores(row: pd.Series, names: tuple[str, ...]) -> dict[str, float]:
    # Blank cells stay out of the vector so similarity only uses real scores
    return {
        name: float(row[name])
        for name in names
        if name in row.index and pd.notna(row[name])
    }


def _row_to_item(row: pd.Series) -> CatalogItem:
    keywords = row.get("keywords")
    return CatalogItem(
        id=str(row["id"]).strip(),
        name=str(row["name"]).strip() if pd.notna(row.get("name")) else "",
        traits=_scores(row, TRAIT_NAMES),
        categories=_scores(row, CATEGORY_NAMES),
        description=str(row["description"]).strip() if pd.notna(row.get("description")) else "",
        keywords=tuple(
            k.strip() for k in str(keywords).split("|") if k.strip()
        ) if pd.notna(keywords) else (),
    )


def load_catalog(path: Path | str | None = None) -> tuple[CatalogItem, ...]:
    """Read a catalog CSV into CatalogItems, preserving file order."""
    df = pd.read_csv(path or DEFAULT_MATCHING_CONFIG.catalog_path, dtype={"id": str})
    df = df[df["id"].notna() & (df["id"].str.strip() != "")]
    return tuple(_row_to_item(row) for _, row in df.iterrows())


def get_catalog() -> tuple[CatalogItem, ...]:
    """Return the bundled sample catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog
