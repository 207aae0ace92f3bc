"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exdict.schema import ColumnList, SingleColumn, SourceDescriptor


@pytest.fixture
def sample_csv_content():
    """Sample CSV table with header and description column."""
    return """id,sql,description
ORD001,SELECT * FROM orders,Daily orders
ORD002,SELECT * FROM order_lines,
CUS001,"SELECT id,
       name
FROM customers",Customer master
"""


@pytest.fixture
def sample_tsv_content():
    """Sample TSV table with two description columns."""
    return (
        "id\tsql\tnote\towner\n"
        "ORD001\tSELECT 1\tOverride\tsales\n"
        "INV001\tSELECT 2\t\tbilling\n"
    )


@pytest.fixture
def sample_japanese_content():
    """Sample CSV with Japanese descriptions."""
    return """ID,SQL,説明
ORD001,SELECT * FROM 受注,受注一覧
"""


@pytest.fixture
def write_source(tmp_path):
    """Factory writing a table file and returning its descriptor."""

    def _write(
        content,
        name="tables.csv",
        encoding="utf-8",
        description_columns=SingleColumn(2),
        **kwargs,
    ):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode(encoding))
        return SourceDescriptor(
            path=path,
            id_column=kwargs.pop("id_column", 0),
            value_column=kwargs.pop("value_column", 1),
            description_columns=description_columns,
            encoding=kwargs.pop("descriptor_encoding", encoding),
            **kwargs,
        )

    return _write


@pytest.fixture
def two_columns():
    """Description spread over columns 2 and 3."""
    return ColumnList((2, 3))
