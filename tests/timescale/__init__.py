"""Unit tests for :mod:`v2xtime.timescale`."""
