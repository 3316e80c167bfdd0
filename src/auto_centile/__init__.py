# ============================================================================
# src/auto_centile/__init__.py
# ============================================================================
"""
Auto Centile

Computes growth centiles and SDS for clinical anthropometric measurements
entered into a data-entry form, using an external growth-reference API.
"""

__version__ = "1.0.0"
