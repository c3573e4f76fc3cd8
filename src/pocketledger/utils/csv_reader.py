"""Split CSV files into headers and rows for the import mapper."""

import csv
from pathlib import Path

from pocketledger.domain.errors import ValidationError


def read_csv_table(csv_file_path: str) -> tuple[list[str], list[dict[str, str]]]:
    """Read a CSV file into headers and row mappings.

    Args:
        csv_file_path: Path to CSV file

    Returns:
        Tuple of (headers, rows) where each row maps header to raw cell text

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file has no header row
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        # Try to detect delimiter
        sample = f.read(1024)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
        except csv.Error:
            delimiter = ","

        reader = csv.DictReader(f, delimiter=delimiter)
        if not reader.fieldnames:
            raise ValidationError("CSV file has no columns")

        headers = [name.strip() for name in reader.fieldnames]
        rows = []
        for raw in reader:
            rows.append(
                {
                    header: (raw.get(original) or "")
                    for header, original in zip(headers, reader.fieldnames)
                }
            )

    return headers, rows
