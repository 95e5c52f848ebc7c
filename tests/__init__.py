"""Tests for contextual validation."""
