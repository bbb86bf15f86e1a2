"""
Test package for dotrepo.

This package contains unit tests and integration tests for the repository
manager, Git handling, settings and the command-line interface. Git-backed
tests work against local bare repositories, so no network access is needed.
"""

import sys
from pathlib import Path

# Add src directory to path so tests can import dotrepo modules
test_dir = Path(__file__).parent
src_dir = test_dir.parent / 'src'
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

# Test constants
DEFAULT_TEST_REPO_NAME = 'dotfiles-core'
TEST_AUTHOR_NAME = 'Test User'
TEST_AUTHOR_EMAIL = 'test@example.com'

__all__ = [
    'DEFAULT_TEST_REPO_NAME',
    'TEST_AUTHOR_NAME',
    'TEST_AUTHOR_EMAIL',
]
