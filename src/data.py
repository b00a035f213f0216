import logging
import os
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from .ahp import Criterion


logger = logging.getLogger(__name__)

ID_COLUMN = "PHONE"

PHONES = [
    "iPhone 12",
    "Itel A56",
    "Tecno Camon 12",
    "Infinix Hot 10",
    "Huawei P30",
    "Google Pixel 7",
    "Xiaomi Redmi Note 10",
    "Samsung Galaxy S22",
    "Motorola razr+",
    "iPhone XR",
    "Samsung Galaxy Note 10",
]

CRITERIA = [
    Criterion("Memory"),
    Criterion("Storage"),
    Criterion("CPU Frequency", key="cpu"),
    Criterion("Price"),
    Criterion("Brand"),
]

PHONE_DATA = {
    "iPhone 12": {"memory": 4, "storage": 128, "cpu": 3.1, "price": 799, "brand": 9},
    "Itel A56": {"memory": 2, "storage": 32, "cpu": 1.6, "price": 150, "brand": 2},
    "Tecno Camon 12": {"memory": 3, "storage": 64, "cpu": 2.0, "price": 250, "brand": 4},
    "Infinix Hot 10": {"memory": 4, "storage": 128, "cpu": 2.3, "price": 180, "brand": 3},
    "Huawei P30": {"memory": 6, "storage": 128, "cpu": 2.6, "price": 699, "brand": 8},
    "Google Pixel 7": {"memory": 8, "storage": 128, "cpu": 2.8, "price": 799, "brand": 9},
    "Xiaomi Redmi Note 10": {"memory": 4, "storage": 128, "cpu": 2.2, "price": 249, "brand": 7},
    "Samsung Galaxy S22": {"memory": 8, "storage": 128, "cpu": 3.0, "price": 899, "brand": 9},
    "Motorola razr+": {"memory": 6, "storage": 256, "cpu": 2.8, "price": 1399, "brand": 6},
    "iPhone XR": {"memory": 3, "storage": 64, "cpu": 2.5, "price": 599, "brand": 9},
    "Samsung Galaxy Note 10": {"memory": 8, "storage": 256, "cpu": 2.9, "price": 999, "brand": 9},
}


def required_columns(criteria: Sequence[Criterion] = CRITERIA) -> List[str]:
    return [ID_COLUMN] + [c.attribute_key for c in criteria]


def demo_dataset() -> pd.DataFrame:
    path = os.getenv("AHP_PHONES_PATH")
    if path and os.path.exists(path):
        logger.info("Loading phone catalog from %s", path)
        with open(path, "rb") as f:
            return coerce_numeric(load_dataframe(f))

    rows = [{ID_COLUMN: phone, **PHONE_DATA[phone]} for phone in PHONES]
    return pd.DataFrame(rows, columns=required_columns())


def load_dataframe(file) -> pd.DataFrame:
    name = getattr(file, "name", "")
    if name.lower().endswith(".csv"):
        df = pd.read_csv(file)
    else:
        df = pd.read_excel(file)
    df.columns = [ID_COLUMN if str(c).upper() == ID_COLUMN else str(c).lower() for c in df.columns]
    return df


def validate_schema(df: pd.DataFrame, criteria: Sequence[Criterion] = CRITERIA) -> Tuple[bool, List[str]]:
    missing = [c for c in required_columns(criteria) if c not in df.columns]
    if missing:
        return False, missing
    return True, []


def coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for col in df.columns:
        if col == ID_COLUMN:
            continue
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def to_attributes(df: pd.DataFrame) -> Dict[str, Dict[str, float]]:
    """Turn a catalog table into ``{phone: {attribute: value}}``, keeping first-seen order.

    Rows sharing a phone id are averaged. Missing cells are left out so that
    ranking reports them as missing.
    """
    df = coerce_numeric(df)
    df[ID_COLUMN] = df[ID_COLUMN].astype(str)
    grouped = df.groupby(ID_COLUMN, sort=False).mean(numeric_only=True)
    attributes = {}
    for phone, row in grouped.iterrows():
        attributes[phone] = {str(k): float(v) for k, v in row.dropna().items()}
    return attributes


def upload_signature(file) -> Tuple[str, str, int]:
    """Identify an uploaded file so a rerun with the same upload is not reloaded."""
    file_id = getattr(file, "file_id", "") or ""
    return str(file_id), getattr(file, "name", ""), int(getattr(file, "size", 0) or 0)
