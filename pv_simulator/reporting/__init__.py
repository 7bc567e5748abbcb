"""Reporting helpers for chart, CSV, Excel and text outputs.

Supported outputs:
- Chart data: rounded records, decimated curves, marker positions
- CSV: header block plus fixed-point curve rows
- Excel (.xlsx): curve sheet and summary sheet
- Text summary of the parameters used and the figures of merit
"""

from .chart_data import to_chart_data, decimate, annotation_points, axis_limits
from .csv_export import to_dataframe, export_to_csv, write_csv
from .excel_export import export_to_excel
from .summary import generate_summary, summary_table, is_error_acceptable

__all__ = [
    'to_chart_data',
    'decimate',
    'annotation_points',
    'axis_limits',
    'to_dataframe',
    'export_to_csv',
    'write_csv',
    'export_to_excel',
    'generate_summary',
    'summary_table',
    'is_error_acceptable',
]
