"""Testing utilities for QuadTreeLib consumers."""

from .fixtures import build_sample_tree, build_count_tree, build_full_tree, build_chain, find_by_content

__all__ = ['build_sample_tree', 'build_count_tree', 'build_full_tree', 'build_chain', 'find_by_content']
