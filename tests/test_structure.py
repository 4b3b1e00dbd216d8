"""Test that the project structure is correct."""

from pathlib import Path


def test_directories_exist(project_root):
    """Test that all expected directories exist."""
    assert (project_root / "core").exists()
    assert (project_root / "models").exists()
    assert (project_root / "commands").exists()
    assert (project_root / "tests").exists()


def test_init_files_exist(project_root):
    """Test that all package __init__.py files exist."""
    assert (project_root / "core" / "__init__.py").exists()
    assert (project_root / "models" / "__init__.py").exists()
    assert (project_root / "commands" / "__init__.py").exists()


def test_main_script_exists(project_root):
    """Test that main entry point exists."""
    assert (project_root / "hue_bridge.py").exists()


def test_packaging_lists_packages(project_root):
    """pyproject.toml installs the flat packages and the CLI module."""
    pyproject = (project_root / "pyproject.toml").read_text()
    for name in ('"core"', '"models"', '"commands"', '"hue_bridge"'):
        assert name in pyproject
