# solatsm/cli/__init__.py

"""
Command-line interface for solatsm.
"""
