"""
Test helper utilities for physiolog testing.

This module provides reusable utilities for writing synthetic CMRR
physio log files into a temporary directory.
"""
