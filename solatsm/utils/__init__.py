# solatsm/utils/__init__.py

"""
Utilities: logging setup, run reports/traces and plots.
"""
