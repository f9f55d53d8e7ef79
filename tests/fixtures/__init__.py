"""Test fixtures for the filesystem model.

This package provides reusable test fixtures:
- items: Factories for single directories and files
- trees: Pre-built directory trees for hierarchy tests
"""
