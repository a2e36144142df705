"""
Fixtures package for the DSDOCS testing framework.

This package provides reusable fixtures to standardize the approach to
testing throughout the project.
"""
