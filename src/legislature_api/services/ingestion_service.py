"""Ingestion jobs — fetch from a source, resolve references, upsert per item.

Each job is one sequential run:

1. fetch every candidate record from the source (a ``SourceError`` here is
   fatal and propagates);
2. build lookup caches once for the run (seeded states, sponsor external id
   to legislator id) and keep them on the ``IngestionContext``;
3. reconcile records one at a time, committing each. A failure on one item
   is rolled back, logged with the item's natural key, counted, and skipped.

Callers turn ``IngestionResult.failed > 0`` into a non-zero exit code.
"""

import uuid
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from typing import Any

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.database import Database
from legislature_api.core.logging import logged_job
from legislature_api.lib.sources.base import (
    BaseSource,
    BillRecord,
    LegislatorRecord,
    RepresentativeRecord,
    SourceError,
)
from legislature_api.lib.sources.normalize import session_to_year
from legislature_api.lib.us_states import US_STATES
from legislature_api.models.base import Base
from legislature_api.models.bill import Bill, BillCommitteeAssignment, BillCosponsor, BillVote, Committee
from legislature_api.models.legislator import Legislator
from legislature_api.models.representative import HouseDistrict, Representative, SenateSeat
from legislature_api.models.state import State
from legislature_api.schemas.bill_facts import (
    BillFactsFile,
    BillReference,
    CommitteeAssignmentFact,
    CommitteeFact,
    CosponsorFact,
    VoteFact,
)
from legislature_api.services.reconciler import UpsertOutcome, find_by_natural_key, upsert

# Bill columns that only the detail endpoint fills in; a list-only sync must
# not blank them out.
_DETAIL_ONLY_BILL_FIELDS = (
    "description",
    "full_text_url",
    "last_action",
    "last_action_date",
    "fiscal_note_url",
    "effective_date",
)


class IngestionError(Exception):
    """Raised when a run cannot start or must abort as a whole."""


@dataclass
class IngestionResult:
    """Counts for one ingestion run."""

    job: str
    fetched: int = 0
    created: int = 0
    updated: int = 0
    failed: int = 0
    skipped: int = 0
    unresolved: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True when no item failed."""
        return self.failed == 0

    def record(self, outcome: UpsertOutcome) -> None:
        if outcome.created:
            self.created += 1
        else:
            self.updated += 1

    def record_failure(self, key: str, error: Exception | str) -> None:
        self.failed += 1
        self.errors.append(f"{key}: {error}")
        logger.error("{} item {} failed: {}", self.job, key, error)

    def summary(self) -> str:
        return (
            f"{self.job}: fetched={self.fetched} created={self.created} updated={self.updated} "
            f"skipped={self.skipped} unresolved={self.unresolved} failed={self.failed}"
        )


@dataclass
class IngestionContext:
    """Everything one run shares: storage, the source, and the run's lookup caches."""

    database: Database
    source: BaseSource | None = None
    known_states: set[str] = field(default_factory=set)
    sponsor_cache: dict[str, uuid.UUID] = field(default_factory=dict)

    def require_source(self) -> BaseSource:
        if self.source is None:
            msg = "This job needs a data source"
            raise IngestionError(msg)
        return self.source


# ---------------------------------------------------------------------------
# Lookup caches
# ---------------------------------------------------------------------------


async def _load_state_abbreviations(session: AsyncSession) -> set[str]:
    result = await session.execute(select(State.abbreviation))
    return set(result.scalars().all())


async def load_known_states(ctx: IngestionContext) -> set[str]:
    """Populate ``ctx.known_states`` from the seeded states table.

    Raises:
        IngestionError: If no states have been seeded.
    """
    async with ctx.database.session() as session:
        ctx.known_states = await _load_state_abbreviations(session)
    if not ctx.known_states:
        msg = "No states are seeded; run 'legislature-api seed states' first"
        raise IngestionError(msg)
    return ctx.known_states


async def _load_external_id_map(session: AsyncSession, source_name: str, state: str | None) -> dict[str, uuid.UUID]:
    """Map each legislator's ``source_name`` id to its internal id.

    Rows are read oldest update first so the most recently synced legislator
    wins if two rows ever carry the same id.
    """
    query = select(Legislator).order_by(Legislator.updated_at, Legislator.id)
    if state is not None:
        query = query.where(Legislator.state == state)
    result = await session.execute(query)

    mapping: dict[str, uuid.UUID] = {}
    for legislator in result.scalars().all():
        external_id = (legislator.external_ids or {}).get(source_name)
        if external_id:
            mapping[str(external_id)] = legislator.id
    return mapping


async def _release_external_id(session: AsyncSession, legislator: Legislator, source_name: str) -> int:
    """Strip ``legislator``'s source id from every other seat that still carries it.

    A legislator who changes seat leaves the old seat's row behind; that row
    must stop resolving to them.
    """
    external_id = (legislator.external_ids or {}).get(source_name)
    if not external_id:
        return 0
    result = await session.execute(
        select(Legislator).where(Legislator.state == legislator.state, Legislator.id != legislator.id)
    )
    released = 0
    for other in result.scalars().all():
        ids = other.external_ids or {}
        if ids.get(source_name) != external_id:
            continue
        other.external_ids = {k: v for k, v in ids.items() if k != source_name}
        released += 1
        logger.info(
            "Legislator {} moved to {}/{}; released seat {}/{}",
            external_id,
            legislator.chamber,
            legislator.district_number,
            other.chamber,
            other.district_number,
        )
    if released:
        await session.flush()
    return released


async def build_sponsor_cache(ctx: IngestionContext) -> dict[str, uuid.UUID]:
    """Build the sponsor external id -> legislator id cache once for this run."""
    source = ctx.require_source()
    async with ctx.database.session() as session:
        ctx.sponsor_cache = await _load_external_id_map(session, source.source_name, source.state)
    logger.info("Sponsor cache built with {} legislators for {}", len(ctx.sponsor_cache), source.source_name)
    if not ctx.sponsor_cache:
        logger.warning("No legislators found for {}; run 'sync legislators' before syncing bills", source.source_name)
    return ctx.sponsor_cache


# ---------------------------------------------------------------------------
# Per-item persistence
# ---------------------------------------------------------------------------


async def _apply(
    session: AsyncSession,
    result: IngestionResult,
    label: str,
    model: type[Base],
    values: Mapping[str, Any],
    after: Callable[[Any], Awaitable[Any]] | None = None,
) -> UpsertOutcome | None:
    """Upsert and commit one item; on failure roll back, count it, return None.

    ``after`` runs on the upserted instance inside the same transaction.
    """
    try:
        outcome = await upsert(session, model, values)
        if after is not None:
            await after(outcome.instance)
        await session.commit()
    except (SQLAlchemyError, ValueError) as exc:
        await session.rollback()
        result.record_failure(label, exc)
        return None
    result.record(outcome)
    return outcome


def _legislator_values(record: LegislatorRecord) -> dict[str, Any]:
    return {
        "state": record.state,
        "chamber": record.chamber,
        "district_number": record.district_number,
        "first_name": record.first_name,
        "last_name": record.last_name,
        "party": record.party,
        "email": record.email,
        "phone": record.phone,
        "website": record.website,
        "image_url": record.image_url,
        "term_start": record.term_start,
        "term_end": record.term_end,
        "external_ids": {record.source_name: record.source_record_id},
    }


def _bill_values(record: BillRecord, sponsor_id: uuid.UUID | None) -> dict[str, Any]:
    values: dict[str, Any] = {
        "state": record.state,
        "bill_number": record.bill_number,
        "bill_type": record.bill_type,
        "session_year": record.session_year,
        "title": record.title,
        "sponsor_id": sponsor_id,
        "external_ids": {record.source_name: record.source_record_id},
    }
    if record.status is not None:
        values["status"] = record.status
    for name in _DETAIL_ONLY_BILL_FIELDS:
        value = getattr(record, name)
        if value is not None:
            values[name] = value
    return values


def _representative_values(record: RepresentativeRecord) -> dict[str, Any]:
    return {
        "bioguide_id": record.bioguide_id,
        "first_name": record.first_name,
        "last_name": record.last_name,
        "representative_type": record.representative_type,
        "state": record.state,
        "party": record.party,
        "phone": record.phone,
        "website": record.website,
        "office": record.office,
        "twitter_handle": record.twitter_handle,
        "term_start": record.term_start,
        "term_end": record.term_end,
    }


def _merge_detail(summary: BillRecord, detail: BillRecord) -> BillRecord:
    """Overlay the non-empty fields of a detail record onto its list entry."""
    updates = {}
    for f in fields(detail):
        value = getattr(detail, f.name)
        if value is not None and value != "" and value != {}:
            updates[f.name] = value
    return replace(summary, **updates)


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


@logged_job("legislators")
async def sync_legislators(ctx: IngestionContext) -> IngestionResult:
    """Fetch all legislators from the context's source and upsert them by seat.

    Raises:
        SourceError: If the legislator list cannot be fetched.
        IngestionError: If no states are seeded.
    """
    source = ctx.require_source()
    result = IngestionResult(job="legislators")
    logger.info("Starting legislator sync from {}", source.source_name)

    records = await source.fetch_legislators()
    result.fetched = len(records)
    await load_known_states(ctx)

    async with ctx.database.session() as session:
        for record in records:
            label = f"{record.state}/{record.chamber}/{record.district_number}"
            if record.state not in ctx.known_states:
                result.record_failure(label, f"unknown state {record.state!r}")
                continue
            await _apply(
                session,
                result,
                label,
                Legislator,
                _legislator_values(record),
                after=lambda legislator: _release_external_id(session, legislator, source.source_name),
            )

    logger.info("Legislator sync complete: {}", result.summary())
    return result


@logged_job("bills")
async def sync_bills(ctx: IngestionContext, session_token: str, *, with_details: bool = False) -> IngestionResult:
    """Fetch a session's bills, resolve sponsors, and upsert each bill.

    An unknown sponsor is not a failure: the bill is stored without one and
    counted as ``unresolved``.

    Args:
        ctx: Run context carrying the database and source.
        session_token: Session to sync (e.g. ``2026GS``).
        with_details: Also fetch each bill's detail record.

    Raises:
        ValueError: If ``session_token`` has no leading year.
        SourceError: If the bill list cannot be fetched.
        IngestionError: If no states are seeded.
    """
    source = ctx.require_source()
    session_to_year(session_token)
    result = IngestionResult(job="bills")
    logger.info("Starting bill sync for session {} from {}", session_token, source.source_name)

    records = await source.fetch_bills(session_token)
    result.fetched = len(records)
    await load_known_states(ctx)
    await build_sponsor_cache(ctx)

    async with ctx.database.session() as session:
        for record in records:
            label = f"{record.state}/{record.bill_number}/{record.session_year}"

            if with_details:
                try:
                    detail = await source.fetch_bill(session_token, record.source_record_id)
                except SourceError as exc:
                    result.record_failure(label, exc)
                    continue
                record = _merge_detail(record, detail)

            if record.state not in ctx.known_states:
                result.record_failure(label, f"unknown state {record.state!r}")
                continue

            sponsor_id = None
            if record.sponsor_source_id:
                sponsor_id = ctx.sponsor_cache.get(record.sponsor_source_id)
                if sponsor_id is None:
                    result.unresolved += 1
                    logger.warning("Bill {} sponsor {!r} not found; storing without sponsor", label, record.sponsor_source_id)

            await _apply(session, result, label, Bill, _bill_values(record, sponsor_id))

    logger.info("Bill sync complete: {}", result.summary())
    return result


@logged_job("congress")
async def sync_congress_members(ctx: IngestionContext, chambers: Sequence[str]) -> IngestionResult:
    """Upsert members of Congress and assign them to house districts / senate seats.

    Members from places that are not seeded states (DC and the territories)
    are skipped. A member whose district or seat class cannot be determined is
    stored but not assigned, and counted as skipped.

    Raises:
        SourceError: If a chamber's member list cannot be fetched.
        IngestionError: If no states are seeded.
    """
    source = ctx.require_source()
    result = IngestionResult(job="congress")
    await load_known_states(ctx)

    async with ctx.database.session() as session:
        for chamber in chambers:
            logger.info("Starting {} member sync from {}", chamber, source.source_name)
            records = await source.fetch_members(chamber)
            result.fetched += len(records)

            for record in records:
                label = f"{record.state}/{record.bioguide_id}"
                if record.state not in ctx.known_states:
                    result.skipped += 1
                    logger.info("Skipping member {} from non-state {}", record.bioguide_id, record.state)
                    continue

                outcome = await _apply(session, result, label, Representative, _representative_values(record))
                if outcome is None:
                    continue
                representative_id = outcome.instance.id

                if chamber == "house":
                    if record.district_number is None:
                        result.skipped += 1
                        logger.warning("Member {} has no usable district; not assigned", label)
                        continue
                    seat_model: type[Base] = HouseDistrict
                    seat_values = {"state": record.state, "district_number": record.district_number}
                else:
                    if record.seat_class is None:
                        result.skipped += 1
                        logger.warning("Senator {} has an unknown seat class; not assigned", label)
                        continue
                    seat_model = SenateSeat
                    seat_values = {"state": record.state, "seat_class": record.seat_class}

                try:
                    await upsert(session, seat_model, {**seat_values, "representative_id": representative_id})
                    await session.commit()
                except (SQLAlchemyError, ValueError) as exc:
                    await session.rollback()
                    result.record_failure(f"{label} seat", exc)

    logger.info("Congress sync complete: {}", result.summary())
    return result


@logged_job("states")
async def seed_states(database: Database) -> IngestionResult:
    """Load the 50 U.S. states. Safe to re-run.

    Unlike the sync jobs this commits once for the whole list: the rows come
    from a fixed in-repo table, so any failure is a bug and nothing is stored.
    """
    result = IngestionResult(job="states", fetched=len(US_STATES))
    async with database.session() as session:
        for name, abbreviation, fips_code in US_STATES:
            outcome = await upsert(
                session, State, {"name": name, "abbreviation": abbreviation, "fips_code": fips_code}
            )
            result.record(outcome)
        await session.commit()
    logger.info("State seed complete: {}", result.summary())
    return result


# ---------------------------------------------------------------------------
# Bill facts import
# ---------------------------------------------------------------------------


@dataclass
class _FactsRun:
    session: AsyncSession
    facts: BillFactsFile
    legislators: dict[str, uuid.UUID]
    committees: dict[str, uuid.UUID]
    bills: dict[tuple[str, int], uuid.UUID | None] = field(default_factory=dict)

    async def bill_id(self, ref: BillReference) -> uuid.UUID:
        year = ref.session_year or self.facts.session_year
        if year is None:
            msg = f"No session_year for bill {ref.bill_number}"
            raise ValueError(msg)
        key = (ref.bill_number, year)
        if key not in self.bills:
            bill = await find_by_natural_key(
                self.session, Bill, {"state": self.facts.state, "bill_number": ref.bill_number, "session_year": year}
            )
            self.bills[key] = bill.id if bill is not None else None
        bill_id = self.bills[key]
        if bill_id is None:
            msg = f"Unknown bill {self.facts.state}/{ref.bill_number}/{year}"
            raise ValueError(msg)
        return bill_id

    def legislator_id(self, external_id: str) -> uuid.UUID:
        legislator_id = self.legislators.get(external_id)
        if legislator_id is None:
            msg = f"Unknown {self.facts.source} legislator {external_id!r}"
            raise ValueError(msg)
        return legislator_id

    def committee_id(self, name: str) -> uuid.UUID:
        committee_id = self.committees.get(name)
        if committee_id is None:
            msg = f"Unknown committee {name!r}"
            raise ValueError(msg)
        return committee_id


_FactBuilder = Callable[[_FactsRun, dict], Awaitable[tuple[type[Base], dict[str, Any]]]]


async def _build_committee(run: _FactsRun, item: dict) -> tuple[type[Base], dict[str, Any]]:
    fact = CommitteeFact.model_validate(item)
    return Committee, {"state": run.facts.state, "name": fact.name}


async def _build_cosponsor(run: _FactsRun, item: dict) -> tuple[type[Base], dict[str, Any]]:
    fact = CosponsorFact.model_validate(item)
    return BillCosponsor, {"bill_id": await run.bill_id(fact), "legislator_id": run.legislator_id(fact.legislator)}


async def _build_vote(run: _FactsRun, item: dict) -> tuple[type[Base], dict[str, Any]]:
    fact = VoteFact.model_validate(item)
    return BillVote, {
        "bill_id": await run.bill_id(fact),
        "legislator_id": run.legislator_id(fact.legislator),
        "vote": fact.vote,
        "vote_date": fact.vote_date,
        "reading_number": fact.reading_number,
    }


async def _build_assignment(run: _FactsRun, item: dict) -> tuple[type[Base], dict[str, Any]]:
    fact = CommitteeAssignmentFact.model_validate(item)
    return BillCommitteeAssignment, {
        "bill_id": await run.bill_id(fact),
        "committee_id": run.committee_id(fact.committee),
        "assignment_date": fact.assignment_date,
        "status": fact.status,
    }


async def _import_facts(
    run: _FactsRun, result: IngestionResult, kind: str, items: list[dict], build: _FactBuilder
) -> None:
    for index, item in enumerate(items):
        label = f"{kind}[{index}]"
        try:
            model, values = await build(run, item)
        except ValueError as exc:
            result.record_failure(label, exc)
            continue
        outcome = await _apply(run.session, result, label, model, values)
        if outcome is not None and isinstance(outcome.instance, Committee):
            run.committees[outcome.instance.name] = outcome.instance.id


@logged_job("bill_facts")
async def import_bill_facts(database: Database, payload: Mapping[str, Any]) -> IngestionResult:
    """Load committees, cosponsors, votes and committee referrals from a parsed import file.

    Committees are imported first so referrals in the same file can name them.

    Raises:
        pydantic.ValidationError: If the file envelope is malformed.
        IngestionError: If the file's state is not seeded.
    """
    facts = BillFactsFile.model_validate(payload)
    result = IngestionResult(
        job="bill_facts",
        fetched=len(facts.committees) + len(facts.cosponsors) + len(facts.votes) + len(facts.committee_assignments),
    )
    logger.info("Starting bill facts import for {} ({} entries)", facts.state, result.fetched)

    async with database.session() as session:
        if facts.state not in await _load_state_abbreviations(session):
            msg = f"State {facts.state!r} is not seeded"
            raise IngestionError(msg)

        committee_rows = await session.execute(select(Committee).where(Committee.state == facts.state))
        run = _FactsRun(
            session=session,
            facts=facts,
            legislators=await _load_external_id_map(session, facts.source, facts.state),
            committees={c.name: c.id for c in committee_rows.scalars().all()},
        )

        await _import_facts(run, result, "committees", facts.committees, _build_committee)
        await _import_facts(run, result, "cosponsors", facts.cosponsors, _build_cosponsor)
        await _import_facts(run, result, "votes", facts.votes, _build_vote)
        await _import_facts(run, result, "committee_assignments", facts.committee_assignments, _build_assignment)

    logger.info("Bill facts import complete: {}", result.summary())
    return result
