"""Routing — pattern parsing, chunked regex dispatch, and reverse routing.

Routes are registered during setup and compiled into chunked lookup
structures on first dispatch.
"""
