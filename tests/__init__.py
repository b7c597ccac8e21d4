"""Test suite for the GitLab client.

This package contains tests for:
- Identifier normalization and request/error translation
- Pager cursor management (next_page, all, stream)
- Resource state events endpoints and the gitlab-events CLI
"""
