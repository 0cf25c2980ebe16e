"""Pytest configuration and fixtures for modchart tests."""

import pytest

from modchart.graph import MappingGraphSource


@pytest.fixture
def simple_graph():
    """Root -> A -> B, Root -> C."""
    return MappingGraphSource({
        "Root": ["A", "C"],
        "A": ["B"],
    })


@pytest.fixture
def app_graph():
    """Module graph shaped like a typical application container."""
    return MappingGraphSource({
        "AppModule": ["ConfigModule", "UsersModule", "OrdersModule", "FlowchartModule"],
        "ConfigModule": ["InternalCoreModule"],
        "UsersModule": ["DatabaseModule", "ConfigModule"],
        "OrdersModule": ["DatabaseModule", "UsersModule"],
        "DatabaseModule": ["ConfigModule"],
        "FlowchartModule": ["InternalCoreModule"],
    })


@pytest.fixture
def sample_package(tmp_path):
    """Small Python package with absolute, relative and external imports."""
    pkg = tmp_path / "shop"
    (pkg / "services").mkdir(parents=True)

    (pkg / "__init__.py").write_text(
        "from shop.app import create_app\n", encoding="utf-8"
    )
    (pkg / "app.py").write_text(
        "import json\n"
        "from . import db\n"
        "from .services import orders\n"
        "from shop.services.users import UserService\n",
        encoding="utf-8",
    )
    (pkg / "db.py").write_text(
        "import sqlite3\n"
        "from shop import config\n",
        encoding="utf-8",
    )
    (pkg / "config.py").write_text("DEBUG = False\n", encoding="utf-8")
    (pkg / "services" / "__init__.py").write_text("", encoding="utf-8")
    (pkg / "services" / "orders.py").write_text(
        "from ..db import connect\n"
        "from .users import UserService\n",
        encoding="utf-8",
    )
    (pkg / "services" / "users.py").write_text(
        "import shop.db\n"
        "\n"
        "def load():\n"
        "    from shop import config\n"
        "    return config\n",
        encoding="utf-8",
    )
    return pkg
