"""Test fixtures for cmakekits tests.

This package provides reusable pytest fixtures for testing cmakekits components:

- projects: CMake project trees with a cmakekits.yaml
- registries: Build type / build kit registries and task contexts

Import fixtures in your tests using:
    from tests.fixtures.projects import cmake_project
    from tests.fixtures.registries import sample_registry
"""

__all__ = [
    "projects",
    "registries",
]
