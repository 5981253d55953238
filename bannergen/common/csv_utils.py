"""
CSV Utilities

Writing the banner manifest produced by batch runs.
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional

MANIFEST_FIELDNAMES = ['sku', 'name', 'price', 'installments', 'file', 'placeholder']


def write_csv(
    file_path: str | Path,
    rows: List[Dict[str, object]],
    fieldnames: Optional[List[str]] = None,
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file.

    The header is always written, even when there are no rows, as long as
    fieldnames are given.

    Args:
        file_path: Path to output CSV file
        rows: List of dictionaries to write
        fieldnames: Column names (if None, uses keys from first row)
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    if fieldnames is None:
        if not rows:
            return 0
        fieldnames = list(rows[0].keys())

    with open(file_path, 'w', encoding=encoding, newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)
