"""
CSV loaders for the company catalog, crawl targets and query samples.
"""
from typing import List, Optional
import pandas as pd
from loguru import logger

from company_match.models import CompanyRecord, MatchQuery


def _read_csv(file_path: str) -> pd.DataFrame:
    # Everything as text so phone numbers keep their formatting
    df = pd.read_csv(file_path, dtype=str, keep_default_na=True)
    logger.debug(f"Read {len(df)} rows from {file_path}")
    return df


def _safe_get(row: pd.Series, col: str) -> Optional[str]:
    """Cell value as a stripped string, or None when the column is absent or the cell blank."""
    if col not in row.index:
        return None
    val = row[col]
    if pd.isna(val):
        return None
    val = str(val).strip()
    return val or None


def load_catalog(file_path: str) -> List[CompanyRecord]:
    """Load the reference catalog (domain plus name fields) into CompanyRecord objects."""
    df = _read_csv(file_path)
    if "domain" not in df.columns:
        raise KeyError(f"Catalog file {file_path} has no 'domain' column")

    records = []
    for _, row in df.iterrows():
        domain = _safe_get(row, "domain")
        if not domain:
            continue
        records.append(
            CompanyRecord(
                domain=domain.lower(),
                commercial_name=_safe_get(row, "company_commercial_name"),
                legal_name=_safe_get(row, "company_legal_name"),
                all_names=_safe_get(row, "company_all_available_names"),
            )
        )
    logger.info(f"Loaded {len(records)} company profiles")
    return records


def load_websites(file_path: str) -> List[str]:
    """Load the list of domains to crawl."""
    df = _read_csv(file_path)
    if "domain" not in df.columns:
        raise KeyError(f"Websites file {file_path} has no 'domain' column")
    return [d for d in (_safe_get(row, "domain") for _, row in df.iterrows()) if d]


def load_query_sample(file_path: str) -> List[MatchQuery]:
    """Load sample match queries for bulk testing."""
    df = _read_csv(file_path)
    return [
        MatchQuery(
            name=_safe_get(row, "input name"),
            phone=_safe_get(row, "input phone"),
            website=_safe_get(row, "input website"),
            facebook=_safe_get(row, "input_facebook"),
        )
        for _, row in df.iterrows()
    ]
