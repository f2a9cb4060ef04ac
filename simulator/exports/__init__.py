"""Exports & reporting: comparison CSV and Markdown reports.

- writers.py: quoted CSV with metadata block and metric table
- reports.py: impact summary and assumptions Markdown
"""
