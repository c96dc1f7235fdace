"""Shared utilities for http-pipeline."""
