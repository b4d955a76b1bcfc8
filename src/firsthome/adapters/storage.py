from pathlib import Path
from typing import Any

import pandas as pd


def read_df(path: str) -> pd.DataFrame:
    suffix = Path(path).suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".json":
        return pd.read_json(path, orient="records")
    return pd.read_csv(path)


def read_records(path: str) -> list[dict[str, Any]]:
    """Rows of a catalog file as dicts; blank cells come back as None."""
    df = read_df(path)
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")
