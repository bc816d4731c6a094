"""Preset store — named roller configurations with a user-defined order."""

from __future__ import annotations

import html
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dicepool.models.db_models import Preset

logger = logging.getLogger("dicepool.presets")

_UPDATABLE_FIELDS = ("name", "pool_size", "again_threshold", "rote", "exploding_enabled")


def sanitize_name(name: str) -> str:
    """Trim and escape markup in a preset name.

    Raises:
        ValueError: If the name is empty after trimming.
    """
    name = name.strip()
    if not name:
        raise ValueError("Preset name must not be empty")
    return html.escape(name, quote=False)


async def create_preset(
    db: AsyncSession,
    name: str,
    pool_size: int,
    again_threshold: int,
    rote: bool,
    exploding_enabled: bool,
) -> Preset:
    """Store a preset at the end of the current ordering."""
    result = await db.execute(select(func.max(Preset.position)))
    last_position = result.scalar_one_or_none()
    preset = Preset(
        name=sanitize_name(name),
        pool_size=pool_size,
        again_threshold=again_threshold,
        rote=rote,
        exploding_enabled=exploding_enabled,
        position=0 if last_position is None else last_position + 1,
    )
    db.add(preset)
    await db.flush()
    logger.info("Created preset %s", preset)
    return preset


async def get_preset(db: AsyncSession, preset_id: str) -> Preset | None:
    result = await db.execute(select(Preset).where(Preset.id == preset_id))
    return result.scalar_one_or_none()


async def list_presets(db: AsyncSession) -> list[Preset]:
    result = await db.execute(
        select(Preset).order_by(Preset.position, Preset.created_at)
    )
    return list(result.scalars().all())


async def update_preset(db: AsyncSession, preset_id: str, **fields: object) -> Preset:
    """Partially update a preset. ``None`` values are left unchanged."""
    preset = await get_preset(db, preset_id)
    if preset is None:
        raise ValueError(f"Preset {preset_id} not found")

    unknown = set(fields) - set(_UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update preset fields: {', '.join(sorted(unknown))}")

    for key, value in fields.items():
        if value is None:
            continue
        if key == "name":
            value = sanitize_name(str(value))
        setattr(preset, key, value)
    await db.flush()
    logger.info("Updated preset %s", preset)
    return preset


async def delete_preset(db: AsyncSession, preset_id: str) -> None:
    preset = await get_preset(db, preset_id)
    if preset is None:
        raise ValueError(f"Preset {preset_id} not found")
    await db.delete(preset)
    await db.flush()
    logger.info("Deleted preset %s", preset_id)


async def reorder_presets(db: AsyncSession, ordered_ids: list[str]) -> list[Preset]:
    """Rewrite positions so presets follow ``ordered_ids``.

    Raises:
        ValueError: If ``ordered_ids`` is not a permutation of the stored ids.
    """
    presets = await list_presets(db)
    by_id = {p.id: p for p in presets}
    if len(ordered_ids) != len(by_id) or set(ordered_ids) != set(by_id):
        raise ValueError("Order must list every preset exactly once")

    for position, preset_id in enumerate(ordered_ids):
        by_id[preset_id].position = position
    await db.flush()
    return [by_id[preset_id] for preset_id in ordered_ids]
