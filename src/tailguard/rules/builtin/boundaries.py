"""Server/client boundary rules for Next.js App Router files."""

from __future__ import annotations

import re
from typing import Iterator

from tailguard.findings.models import Span
from tailguard.rules.models import Rule

DB_PACKAGES = frozenset({
    "@prisma/client", "prisma", "drizzle-orm", "mongoose", "mongodb",
    "pg", "postgres", "mysql", "mysql2", "better-sqlite3", "sqlite3",
    "@vercel/postgres", "@vercel/kv", "@planetscale/database",
    "@neondatabase/serverless", "@libsql/client", "kysely", "typeorm",
    "sequelize", "knex", "redis", "ioredis", "@upstash/redis",
})

# Last segment of a project-local module that conventionally wraps the DB client
DB_LOCAL_NAMES = frozenset({"db", "prisma", "database", "drizzle"})

_USE_CLIENT_RE = re.compile(
    r"\A\ufeff?(?:\s|//[^\n]*|/\*.*?\*/)*(?P<q>[\"'])use client(?P=q)",
    re.DOTALL,
)

_IMPORT_RE = re.compile(
    r"(?:"
    r"^[ \t]*(?:import|export)\b(?P<clause>[^;'\"]*?)\bfrom\s*"
    r"|^[ \t]*import\s*"
    r"|\b(?:require|import)\s*\(\s*"
    r")(?P<q>[\"'])(?P<module>[^\"'\n]+)(?P=q)",
    re.MULTILINE,
)


def is_client_module(text: str) -> bool:
    """True when the file opens with the ``"use client"`` directive."""
    return _USE_CLIENT_RE.match(text) is not None


def is_db_module(module: str) -> bool:
    for pkg in DB_PACKAGES:
        if module == pkg or module.startswith(pkg + "/"):
            return True
    if module.startswith(("@/", "~/", ".", "/")):
        last = module.rstrip("/").rsplit("/", 1)[-1]
        last = last.split(".", 1)[0]
        return last in DB_LOCAL_NAMES
    return False


def detect_client_db_imports(text: str) -> Iterator[Span]:
    if not is_client_module(text):
        return
    for m in _IMPORT_RE.finditer(text):
        clause = m.group("clause")
        if clause is not None and clause.strip().startswith("type "):
            continue  # type-only imports are erased at build time
        if is_db_module(m.group("module")):
            yield Span(m.start("module"), m.end("module"))


NO_CLIENT_DB_IMPORT = Rule(
    id="no-client-db-import",
    name="Database Import in Client Component",
    description='Flags database client imports in files marked "use client".',
    detect=detect_client_db_imports,
    severity="error",
    message="Database module imported into a client component; move data access to a Server Component or Server Action.",
)

ALL_BOUNDARY_RULES = [NO_CLIENT_DB_IMPORT]
