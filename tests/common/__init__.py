"""Unit tests for :mod:`v2xtime.common`."""
