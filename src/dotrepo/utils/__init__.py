"""
Utility modules for dotrepo.

This package contains logging and the repo naming and path helpers.
"""

from .logger import get_logger, setup_logging
from .path import bare_repo_path, derive_repo_name, relative_to_workdir, strip_extension

__all__ = [
    'get_logger',
    'setup_logging',
    'bare_repo_path',
    'derive_repo_name',
    'relative_to_workdir',
    'strip_extension',
]
