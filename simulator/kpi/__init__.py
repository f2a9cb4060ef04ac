"""KPI engine: business parameter snapshots and derived financial metrics.

- parameters.py: BusinessParameters, reference defaults, input validation
- engine.py: margins, EBIT, working capital, CCC, ROI
"""
