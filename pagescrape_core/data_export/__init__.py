from .export_csv import CSV_HEADER, export_csv, export_filename, to_csv

__all__ = ["CSV_HEADER", "export_csv", "export_filename", "to_csv"]
