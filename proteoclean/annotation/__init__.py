"""
Sample annotation joining for the proteoclean package.
"""

from proteoclean.annotation.merge import JoinReport, merge_annotation, rename_columns

__all__ = ["JoinReport", "merge_annotation", "rename_columns"]
