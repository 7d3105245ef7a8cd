"""Slug column migration and backfill script.

Brings a database created before slugs existed up to date:

1. Adds a nullable ``slug`` column to ``products`` and ``categories``.
2. Backfills ``<base-slug>-<id>`` for every row without a slug.
3. Creates the unique slug index.

Every step checks the current schema first, so the script is safe to re-run.
Existing slugs are never recomputed.

Usage:
    python -m storefront.migrate_slugs
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, Table, column, inspect, or_, select, table, text, update

from storefront.config import settings, slug_config
from storefront.models import Category, Product
from storefront.utils.slug import with_bounded_suffix

logger = logging.getLogger(__name__)

# (table, primary key column, name column)
SLUG_TABLES: tuple[tuple[Table, str, str], ...] = (
    (Product.__table__, "product_id", "product_name"),
    (Category.__table__, "category_id", "category_name"),
)


def add_slug_column(engine: Engine, model_table: Table) -> bool:
    """
    Add the slug column to a table if it is missing.

    Args:
        engine: Database engine
        model_table: Table definition owning a ``slug`` column

    Returns:
        True if the column was added, False if it already existed
    """
    columns = {col["name"] for col in inspect(engine).get_columns(model_table.name)}
    if "slug" in columns:
        return False

    column_type = model_table.c.slug.type.compile(dialect=engine.dialect)
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {model_table.name} ADD COLUMN slug {column_type}"))
    logger.info("Added slug column to %s", model_table.name)
    return True


def backfill_slugs(
    engine: Engine,
    model_table: Table,
    id_column: str,
    name_column: str,
    max_length: int = 255,
) -> int:
    """
    Assign ``<base-slug>-<id>`` to rows whose slug is NULL or empty.

    Args:
        engine: Database engine
        model_table: Table definition owning a ``slug`` column
        id_column: Primary key column name, used as the slug suffix
        name_column: Column holding the human-readable name
        max_length: Maximum slug length

    Returns:
        Number of rows updated
    """
    # Lightweight construct: no ORM-level onupdate defaults are applied
    target = table(model_table.name, column(id_column), column(name_column), column("slug"))
    row_id = target.c[id_column]
    query = select(row_id, target.c[name_column]).where(
        or_(target.c.slug.is_(None), target.c.slug == "")
    )

    with engine.begin() as conn:
        rows = conn.execute(query).all()
        for record_id, record_name in rows:
            slug = with_bounded_suffix(record_name or "", record_id, max_length)
            conn.execute(update(target).where(row_id == record_id).values(slug=slug))

    logger.info("Backfilled %d slug(s) in %s", len(rows), model_table.name)
    return len(rows)


def ensure_slug_index(engine: Engine, model_table: Table) -> bool:
    """
    Create the unique slug index if it does not exist yet.

    Returns:
        True if the index was created
    """
    existing = {index["name"] for index in inspect(engine).get_indexes(model_table.name)}
    created = False
    for index in model_table.indexes:
        if "slug" in index.columns and index.name not in existing:
            index.create(bind=engine)
            logger.info("Created index %s on %s", index.name, model_table.name)
            created = True
    return created


def migrate(engine: Engine, max_length: int = 255) -> dict[str, int]:
    """
    Run all migration steps for every slugged table.

    Tables that do not exist yet are skipped; ``init_db`` creates them with
    the slug column already in place.

    Returns:
        Mapping of table name to number of backfilled rows
    """
    existing_tables = set(inspect(engine).get_table_names())
    report: dict[str, int] = {}
    for model_table, id_column, name_column in SLUG_TABLES:
        if model_table.name not in existing_tables:
            logger.info("Skipping %s: table does not exist", model_table.name)
            continue
        add_slug_column(engine, model_table)
        report[model_table.name] = backfill_slugs(
            engine, model_table, id_column, name_column, max_length
        )
        ensure_slug_index(engine, model_table)
    return report


if __name__ == "__main__":
    from storefront.database import engine

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(message)s")
    Path(settings.data_root).mkdir(parents=True, exist_ok=True)
    print("Migrating slug columns...")
    for table_name, count in migrate(engine, max_length=slug_config.max_length).items():
        print(f"  {table_name}: {count} slug(s) backfilled")
    print("Slug migration complete!")
