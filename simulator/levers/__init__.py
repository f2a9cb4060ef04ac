"""Feedback levers: operational improvements applied to a parameter snapshot.

- toggles.py: LeverToggles and lever labels
- transformer.py: declarative lever table and margin-mix redistribution
- scenario.py: base vs. tuned comparison
"""
