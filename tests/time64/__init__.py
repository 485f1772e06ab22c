"""Unit tests for :mod:`v2xtime.time64`."""
