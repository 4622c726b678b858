"""Realtime notifications backend.

The package re-exports nothing; the presence of this file makes ``app`` a
regular package so it is never resolved as a namespace package.
"""
