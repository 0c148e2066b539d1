"""
Services package - Editing and reading layer over activity trees.
"""

from .tree_service import TreeService, tree_snapshot

__all__ = ['TreeService', 'tree_snapshot']
