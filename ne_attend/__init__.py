"""NE-ATTEND bulk upload toolkit.

Reads the student / instructor onboarding spreadsheets, validates and
normalizes every row and hands the valid records to the NE-ATTEND backend.
"""

__version__ = "0.1.0"
