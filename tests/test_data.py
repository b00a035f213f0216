import pandas as pd

from src.data import (
    CRITERIA,
    ID_COLUMN,
    PHONES,
    coerce_numeric,
    demo_dataset,
    load_dataframe,
    required_columns,
    to_attributes,
    upload_signature,
    validate_schema,
)


def test_demo_dataset_schema():
    df = demo_dataset()
    ok, missing = validate_schema(df)
    assert ok
    assert missing == []
    assert list(df[ID_COLUMN]) == PHONES


def test_required_columns_use_attribute_keys():
    assert required_columns(CRITERIA) == [ID_COLUMN, "memory", "storage", "cpu", "price", "brand"]


def test_validate_schema_reports_missing():
    df = demo_dataset().drop(columns=["price"])
    ok, missing = validate_schema(df)
    assert not ok
    assert missing == ["price"]


def test_to_attributes_keeps_order_and_skips_blanks():
    df = demo_dataset()
    df["price"] = df["price"].astype(object)
    df.loc[1, "price"] = "unknown"
    attrs = to_attributes(df)
    assert list(attrs) == PHONES
    assert attrs["Google Pixel 7"]["cpu"] == 2.8
    assert "price" not in attrs["Itel A56"]


def test_load_csv(tmp_path):
    df = demo_dataset()
    df.columns = [c.capitalize() for c in df.columns]
    path = tmp_path / "phones.csv"
    df.to_csv(path, index=False)
    with open(path, "rb") as f:
        loaded = coerce_numeric(load_dataframe(f))
    ok, _ = validate_schema(loaded)
    assert ok


def test_load_excel(tmp_path):
    df = demo_dataset()
    path = tmp_path / "phones.xlsx"
    df.to_excel(path, index=False)
    with open(path, "rb") as f:
        loaded = load_dataframe(f)
    ok, _ = validate_schema(loaded)
    assert ok


def test_catalog_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "custom.csv"
    pd.DataFrame({ID_COLUMN: ["X"], "memory": [1], "storage": [2], "cpu": [3], "price": [4], "brand": [5]}).to_csv(
        path, index=False
    )
    monkeypatch.setenv("AHP_PHONES_PATH", str(path))
    df = demo_dataset()
    assert list(df[ID_COLUMN]) == ["X"]


def test_to_attributes_averages_duplicate_phones():
    df = pd.DataFrame(
        {
            ID_COLUMN: ["X", "Y", "X"],
            "memory": [4, 2, 8],
            "storage": [64, 32, 128],
            "cpu": [2.0, 1.5, 3.0],
            "price": [300, 100, None],
            "brand": [5, 2, 7],
        }
    )
    attrs = to_attributes(df)
    assert list(attrs) == ["X", "Y"]
    assert attrs["X"]["memory"] == 6
    assert attrs["X"]["cpu"] == 2.5
    assert attrs["X"]["price"] == 300


class _Upload:
    def __init__(self, file_id, name, size):
        self.file_id = file_id
        self.name = name
        self.size = size


def test_upload_signature_is_stable_per_upload():
    first = _Upload("abc", "phones.csv", 120)
    assert upload_signature(first) == upload_signature(_Upload("abc", "phones.csv", 120))
    assert upload_signature(first) != upload_signature(_Upload("def", "phones.csv", 120))
    assert upload_signature(first) != upload_signature(_Upload("abc", "phones.csv", 121))
