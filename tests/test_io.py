"""Unit tests for reading and writing address tables."""
import pandas as pd
import pytest

from addrcrush.utils.io import read_data_file, write_csv


class TestReadDataFile:
    """Test table reading."""

    def test_csv_as_text(self, tmp_path):
        """Test that CSV cells are read as text and blanks stay empty."""
        path = tmp_path / "records.csv"
        path.write_text("zip,unit\n02134,\n")
        df = read_data_file(path)
        assert df.iloc[0]["zip"] == "02134"
        assert df.iloc[0]["unit"] == ""

    def test_xlsx(self, tmp_path):
        """Test reading an XLSX workbook."""
        path = tmp_path / "records.xlsx"
        pd.DataFrame({"address": ["55 Elm Street"]}).to_excel(path, index=False, engine="openpyxl")
        assert list(read_data_file(path)["address"]) == ["55 Elm Street"]

    def test_legacy_xls_rejected(self, tmp_path):
        """Test that legacy .xls workbooks are rejected."""
        path = tmp_path / "records.xls"
        path.write_bytes(b"")
        with pytest.raises(ValueError, match="Unsupported file format"):
            read_data_file(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_data_file(tmp_path / "records.csv")


class TestWriteCsv:
    """Test CSV output."""

    def test_creates_parent(self, tmp_path):
        """Test that parent directories are created."""
        path = write_csv(pd.DataFrame({"address_key": ["55ELMST"]}), tmp_path / "out" / "keys.csv")
        assert path.exists()
        assert list(pd.read_csv(path)["address_key"]) == ["55ELMST"]
