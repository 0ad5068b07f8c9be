"""Parsing of clinical-trial eligibility criteria into relations, and vocabulary taxonomy matching."""

__version__ = "0.1.0"