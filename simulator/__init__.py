"""Feedback KPI simulator: base vs. lever-adjusted financial KPIs.

- kpi: business parameters and the KPI engine
- levers: feedback toggles, lever transformer and scenario comparison
- exports: CSV export and Markdown reports
- api: Flask surface over the above
"""
