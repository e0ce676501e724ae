"""
File parsers package.
"""

from txntracker.parsers.csv_parser import CSVParser, ParsedRow

__all__ = ['CSVParser', 'ParsedRow']
