"""
Test CSV phone import.
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from src.data_pipeline.csv_importer import CSVImporter, RowRejected, parse_price, split_brand_and_model
from src.store.memory_store import InMemoryPhoneStore


HEADER = ['model', 'price', 'memory_and_storage', 'display', 'camera', 'processor', 'battery', 'image', 'url']


def row(model, price, memory="8 GB RAM | 128 GB ROM"):
    return [model, price, memory, "6.7 inch Full HD+ AMOLED 120Hz", "50MP + 8MP", "Dimensity 7200",
            "5000 mAh 67W", "https://img.example/p.jpg", "https://www.flipkart.com/p"]


def test_split_brand_and_model():
    assert split_brand_and_model("Samsung Galaxy S23 (Green, 128 GB)") == ("Samsung", "Galaxy S23 (Green, 128 GB)")
    assert split_brand_and_model("Nothing") == ("Nothing", "Nothing")


def test_parse_price():
    assert parse_price("₹24,999") == 24999
    assert parse_price(" 15999 ") == 15999
    with pytest.raises(RowRejected) as excinfo:
        parse_price("")
    assert excinfo.value.reason == "Empty price"
    with pytest.raises(RowRejected) as excinfo:
        parse_price("call for price")
    assert excinfo.value.reason == "Invalid price"


def test_import_rows_counts_every_outcome():
    store = InMemoryPhoneStore()
    stats = CSVImporter(store).import_rows([
        HEADER,
        row("Realme Narzo 70 Pro", "₹19,999"),
        row("Realme Narzo 70 Pro", "₹18,999"),
        ["Poco X6", "21999"],
        row("Vivo T3", ""),
        row("Vivo T3x", "N/A"),
        row("Motorola Edge 50", "27,999"),
    ])

    assert stats.total_lines == 6
    assert stats.imported == 2
    assert stats.skipped == 4
    assert stats.errors == 0
    assert stats.skip_reasons == {
        "Duplicate (brand+model)": 1,
        "Insufficient fields": 1,
        "Empty price": 1,
        "Invalid price": 1,
    }

    narzo = store.get(1)
    assert narzo.brand == "Realme"
    assert narzo.model == "Narzo 70 Pro"
    assert narzo.price == 19999
    assert narzo.affiliate_flipkart == "https://www.flipkart.com/p"
    # scored before save
    assert narzo.camera_score is not None
    assert narzo.privacy_score == 55


def test_save_errors_are_counted():
    class BrokenStore(InMemoryPhoneStore):
        def save(self, phone):
            raise RuntimeError("connection lost")

    stats = CSVImporter(BrokenStore()).import_rows([HEADER, row("Nokia G42", "12,999")])
    assert stats.imported == 0
    assert stats.errors == 1


def test_empty_input():
    stats = CSVImporter(InMemoryPhoneStore()).import_rows([])
    assert stats.total_lines == 0
    assert stats.to_dict()['skip_reasons'] == {}


def test_import_file_handles_quoted_fields(tmp_path):
    csv_file = tmp_path / "phones.csv"
    csv_file.write_text(
        ",".join(HEADER) + "\n"
        '"Samsung Galaxy S23 (Green, 128 GB)","₹54,999","8 GB RAM | 128 GB ROM",'
        '"6.1 inch Full HD+ Dynamic AMOLED 2X","50MP + 12MP + 10MP","Snapdragon 8 Gen 2",'
        '"3900 mAh",img.jpg,https://www.flipkart.com/s23\n',
        encoding='utf-8'
    )
    store = InMemoryPhoneStore()
    stats = CSVImporter(store).import_file(csv_file)

    assert stats.imported == 1
    phone = store.get(1)
    assert phone.model == "Galaxy S23 (Green, 128 GB)"
    assert phone.price == 54999
    assert phone.processor == "Snapdragon 8 Gen 2"


def test_import_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CSVImporter(InMemoryPhoneStore()).import_file(tmp_path / "missing.csv")
