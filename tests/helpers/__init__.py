"""Test helper modules for mirror tests.

- tree_helpers: Snapshot output trees and normalize captured CLI output
"""

from .tree_helpers import age_tree, flatten_output, snapshot_contents, snapshot_mtimes

__all__ = [
    'snapshot_contents',
    'snapshot_mtimes',
    'age_tree',
    'flatten_output',
]
