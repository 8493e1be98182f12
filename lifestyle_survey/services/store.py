from __future__ import annotations
import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import SurveyResponse, new_id
from ..schemas import Ratings, SurveyRecord

log = logging.getLogger("survey_store")


class StoreError(Exception):
    """The backing database could not complete a read or write."""


class SurveyStore(Protocol):
    def insert(self, record: SurveyRecord) -> str: ...
    def find_all(self) -> list[SurveyRecord]: ...


def _to_row(record: SurveyRecord) -> SurveyResponse:
    return SurveyResponse(
        full_name=record.full_name,
        email=record.email,
        contact_number=record.contact_number,
        date_of_birth=record.date_of_birth,
        favorite_foods=[f.value for f in record.favorite_foods],
        eat_out=record.ratings.eat_out,
        watch_movies=record.ratings.watch_movies,
        watch_tv=record.ratings.watch_tv,
        listen_radio=record.ratings.listen_radio,
    )

def _to_record(row: SurveyResponse) -> SurveyRecord:
    return SurveyRecord(
        full_name=row.full_name,
        email=row.email,
        contact_number=row.contact_number,
        date_of_birth=row.date_of_birth,
        favorite_foods=tuple(row.favorite_foods or ()),
        ratings=Ratings(
            eat_out=row.eat_out,
            watch_movies=row.watch_movies,
            watch_tv=row.watch_tv,
            listen_radio=row.listen_radio,
        ),
    )


class SqlSurveyStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, record: SurveyRecord) -> str:
        row = _to_row(record)
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("insert failed")
            raise StoreError("Could not save survey response.") from e
        return row.id

    def find_all(self) -> list[SurveyRecord]:
        try:
            rows = self.db.scalars(select(SurveyResponse)).all()
        except SQLAlchemyError as e:
            log.exception("find_all failed")
            raise StoreError("Could not read survey responses.") from e
        return [_to_record(r) for r in rows]


class InMemorySurveyStore:
    """List-backed store for tests and local runs."""

    def __init__(self, records: list[SurveyRecord] | None = None):
        self._rows: list[tuple[str, SurveyRecord]] = [(new_id("sr"), r) for r in records or []]

    def insert(self, record: SurveyRecord) -> str:
        rid = new_id("sr")
        self._rows.append((rid, record))
        return rid

    def find_all(self) -> list[SurveyRecord]:
        return [r for _, r in self._rows]
