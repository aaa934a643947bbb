import csv
import io
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from pagescrape_core.errors import NoDataError

logger = logging.getLogger(__name__)

CSV_HEADER = "Index,Content"


def export_filename(today: Optional[date] = None) -> str:
    """scraped-data-<YYYY-MM-DD>.csv, dated in UTC unless ``today`` is given."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    return f"scraped-data-{today.isoformat()}.csv"


def to_csv(values: List[str]) -> str:
    """
    Format values as CSV.

    Header ``Index,Content``, then ``<1-based index>,"<value>"`` per item with
    embedded quotes doubled. Rows are joined by newlines without a trailing one.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for index, value in enumerate(values, start=1):
        writer.writerow([index, value])
    rows = output.getvalue()
    if rows.endswith("\n"):
        rows = rows[:-1]
    return CSV_HEADER + "\n" + rows if rows else CSV_HEADER


def export_csv(values: List[str], directory: Union[str, Path] = ".", filename: Optional[str] = None) -> Path:
    """Write values to ``directory``; raises NoDataError when there is nothing to export."""
    if not values:
        raise NoDataError()
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / (filename or export_filename())
    path.write_text(to_csv(values), encoding="utf-8")
    logger.info(f"Exported {len(values)} rows to {path}")
    return path
