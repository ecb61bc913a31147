"""Tests for the wildfire_spread package."""
