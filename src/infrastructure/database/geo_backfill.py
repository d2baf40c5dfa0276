"""Offline backfill of the indexed geo point for legacy club rows.

Usage::

    python -m infrastructure.database.geo_backfill [--verify-only] [--dry-run]
"""

import argparse
import asyncio
from dataclasses import dataclass

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import FieldValidationError
from core.logging import setup_logging
from domain.geo import validate_nearby_query
from infrastructure.database.models import ClubModel
from infrastructure.database.repositories.sqlalchemy_club_repo import geolocation_from_document

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class BackfillResult:
    migrated: int
    errors: int


@dataclass(frozen=True, slots=True)
class VerificationResult:
    total_clubs: int
    with_geolocation: int
    with_geo_point: int

    @property
    def consistent(self) -> bool:
        return self.with_geolocation == self.with_geo_point


async def backfill_geo_points(
    session_factory: async_sessionmaker[AsyncSession], dry_run: bool = False
) -> BackfillResult:
    """Derive ``geo_lat``/``geo_lng`` for clubs that only carry the document.

    Rows with non-numeric or out-of-range coordinates are skipped and counted
    as errors.
    """
    migrated = errors = 0
    async with session_factory() as session:
        stmt = select(ClubModel).where(
            ClubModel.geolocation.is_not(None),
            ClubModel.geo_lat.is_(None),
        )
        result = await session.execute(stmt)
        rows = list(result.scalars())
        logger.info("geo_backfill_candidates", count=len(rows))

        for model in rows:
            point = geolocation_from_document(model.geolocation)
            if point is None:
                logger.warning("geo_backfill_invalid_types", club_id=model.id, name=model.name)
                errors += 1
                continue
            try:
                validate_nearby_query(point.latitude, point.longitude)
            except FieldValidationError:
                logger.warning("geo_backfill_out_of_range", club_id=model.id, name=model.name)
                errors += 1
                continue

            model.geo_lat = point.latitude
            model.geo_lng = point.longitude
            migrated += 1

        if dry_run:
            await session.rollback()
        else:
            await session.commit()

    logger.info("geo_backfill_finished", migrated=migrated, errors=errors, dry_run=dry_run)
    return BackfillResult(migrated=migrated, errors=errors)


async def verify_geo_points(session_factory: async_sessionmaker[AsyncSession]) -> VerificationResult:
    """Compare the number of clubs with a geolocation against those with a point."""
    async with session_factory() as session:
        total = (await session.execute(select(func.count(ClubModel.id)))).scalar_one()
        with_geolocation = (
            await session.execute(
                select(func.count(ClubModel.id)).where(ClubModel.geolocation.is_not(None))
            )
        ).scalar_one()
        with_point = (
            await session.execute(
                select(func.count(ClubModel.id)).where(ClubModel.geo_lat.is_not(None))
            )
        ).scalar_one()

    verification = VerificationResult(
        total_clubs=total,
        with_geolocation=with_geolocation,
        with_geo_point=with_point,
    )
    log = logger.info if verification.consistent else logger.warning
    log(
        "geo_backfill_verification",
        total_clubs=total,
        with_geolocation=with_geolocation,
        with_geo_point=with_point,
        consistent=verification.consistent,
    )
    return verification


async def _run(verify_only: bool, dry_run: bool) -> int:
    from infrastructure.database.session import async_session_factory, engine

    try:
        if not verify_only:
            await backfill_geo_points(async_session_factory, dry_run=dry_run)
        verification = await verify_geo_points(async_session_factory)
    finally:
        await engine.dispose()
    return 0 if verification.consistent else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Backfill indexed geo points for clubs")
    parser.add_argument("--verify-only", action="store_true", help="Only report counts")
    parser.add_argument("--dry-run", action="store_true", help="Roll back instead of committing")
    args = parser.parse_args()

    setup_logging()
    raise SystemExit(asyncio.run(_run(args.verify_only, args.dry_run)))


if __name__ == "__main__":
    main()
