"""
Read-It-Later Ingestion

Turns a submitted URL (plus optional imported content) into a fully
populated archive entry: fetching, redirect reconciliation, metadata
extraction and automatic tagging.
"""

__version__ = "1.0.0"
