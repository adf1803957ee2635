"""Shared test fixtures — sample sources, engines, temp projects."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tailguard.config.schema import TailguardConfig
from tailguard.rules.builtin import ALL_BUILTIN_RULES
from tailguard.scanner.engine import RuleEngine


@pytest.fixture
def engine() -> RuleEngine:
    """An engine holding the full built-in catalog."""
    return RuleEngine(ALL_BUILTIN_RULES)


@pytest.fixture
def config() -> TailguardConfig:
    return TailguardConfig()


@pytest.fixture
def clean_component() -> str:
    """A component that follows every convention."""
    return textwrap.dedent("""\
        export function Hero() {
          return (
            <section className="bg-background text-foreground p-4 sm:p-6 md:p-8 lg:p-12">
              <h1 className="text-2xl sm:text-3xl md:text-4xl lg:text-5xl">Hello</h1>
              <div className="bg-linear-to-r from-primary to-secondary w-1/2 z-50" />
            </section>
          )
        }
    """)


@pytest.fixture
def dirty_component() -> str:
    """A component breaking several conventions."""
    return textwrap.dedent("""\
        export function Card() {
          return (
            <div className="bg-blue-500 w-[16px] bg-gradient-to-r">
              <p className="lg:text-lg md:text-base">Hi</p>
            </div>
          )
        }
    """)


@pytest.fixture
def client_component_with_db() -> str:
    return textwrap.dedent("""\
        'use client'

        import { useState } from 'react'
        import { prisma } from '@/lib/prisma'
        import type { User } from '@prisma/client'

        export function Users() {
          const [users] = useState<User[]>([])
          return <ul>{users.length}</ul>
        }
    """)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small source tree with one clean and one dirty component."""
    src = tmp_path / "app"
    src.mkdir()
    (src / "page.tsx").write_text(
        '<main className="bg-background p-4">ok</main>\n', encoding="utf-8"
    )
    (src / "card.tsx").write_text(
        '<div className="bg-red-500">\n  <span className="w-[16px]" />\n</div>\n',
        encoding="utf-8",
    )
    (src / "notes.txt").write_text("bg-gradient-to-r", encoding="utf-8")
    vendor = tmp_path / "node_modules" / "pkg"
    vendor.mkdir(parents=True)
    (vendor / "index.js").write_text('<div className="bg-red-500" />\n', encoding="utf-8")
    return tmp_path
