"""Dhanchakra personal expense tracker.

Domain model, derivation helpers and spending insights used by the
Streamlit dashboard in ``app/main.py``.
"""
