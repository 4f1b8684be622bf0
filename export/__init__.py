"""Export-Modul: Excel (openpyxl) und Terminal-Tabellen für den Kalender."""

from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter"]
