"""
IOC Tracker Service
===================

Indicator tracking backend: spreadsheet ingestion of IP addresses and
hashes, type classification, and search over the stored entries.

Features:
- CSV / XLSX / XLS upload with column-name normalization
- IPv4, IPv6, MD5, SHA-1, SHA-256 classification
- Chunked bulk persistence through SQLAlchemy
- Ranked value search and per-category counts
"""

__version__ = "1.0.0"
