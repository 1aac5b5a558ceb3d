"""
Editor tooling integration for cmakekits.
"""

from .clangd import ClangdRefresher, clangd_arguments

__all__ = ["ClangdRefresher", "clangd_arguments"]
