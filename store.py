import logging
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, DisconnectionError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import db
from exceptions import ConversionError, StoreUnavailable
from models import Candidate, Prospect
from records import CandidateRecord, ProspectRecord

logger = logging.getLogger(__name__)


class ProspectStore:
    """
    Datastore collaborator for the deduplication engine.

    Wraps one SQLAlchemy session. Reads return frozen records rather than
    ORM rows so that a snapshot cannot change under the engine while it runs.
    """

    def __init__(self, session):
        self.session = session

    def _read(self, query, what):
        try:
            return query.all()
        except OperationalError as e:
            self.session.rollback()
            logger.error(f"Datastore unreachable while loading {what}: {e}")
            raise StoreUnavailable(f"Could not load {what}: {e}") from e

    def list_candidates(self):
        """All candidates, oldest first"""
        query = self.session.query(Candidate).order_by(Candidate.created_at.asc(), Candidate.id.asc())
        return [CandidateRecord.from_model(c) for c in self._read(query, 'candidates')]

    def list_active_prospects(self):
        query = self.session.query(Prospect).filter(
            Prospect.is_converted.is_(False),
            Prospect.is_deleted.is_(False)
        ).order_by(Prospect.created_at.asc(), Prospect.id.asc())
        return [ProspectRecord.from_model(p) for p in self._read(query, 'active prospects')]

    def list_matchable_prospects(self):
        """Active prospects plus already converted ones (for idempotent re-runs)"""
        query = self.session.query(Prospect).filter(
            db.or_(
                Prospect.is_converted.is_(True),
                Prospect.is_deleted.is_(False)
            )
        ).order_by(Prospect.created_at.asc(), Prospect.id.asc())
        return [ProspectRecord.from_model(p) for p in self._read(query, 'prospects')]

    def get_prospect(self, prospect_id):
        try:
            prospect = self.session.get(Prospect, prospect_id)
        except OperationalError as e:
            self.session.rollback()
            raise StoreUnavailable(f"Could not load prospect {prospect_id}: {e}") from e
        return ProspectRecord.from_model(prospect) if prospect else None

    def candidate_exists(self, candidate_id):
        try:
            return self.session.get(Candidate, candidate_id) is not None
        except OperationalError as e:
            self.session.rollback()
            raise StoreUnavailable(f"Could not load candidate {candidate_id}: {e}") from e

    def update_prospect(self, prospect_id, only_if_unconverted=False, **fields):
        """
        Single-row UPDATE committed immediately. Returns the affected row count.

        With only_if_unconverted the row is only touched while is_converted is
        still false, so two concurrent conversions cannot both apply.
        """
        query = self.session.query(Prospect).filter(Prospect.id == prospect_id)
        if only_if_unconverted:
            query = query.filter(Prospect.is_converted.is_(False))

        try:
            updated = query.update(fields, synchronize_session=False)
            self.session.commit()
            return updated
        except IntegrityError as e:
            self.session.rollback()
            raise ConversionError(prospect_id, fields.get('converted_to_id'), e.orig) from e
        except DisconnectionError as e:
            self.session.rollback()
            raise StoreUnavailable(f"Could not update prospect {prospect_id}: {e}") from e
        except DBAPIError as e:
            self.session.rollback()
            if e.connection_invalidated:
                raise StoreUnavailable(f"Could not update prospect {prospect_id}: {e}") from e
            # Lock timeouts and deadlocks only affect this row
            raise ConversionError(prospect_id, fields.get('converted_to_id'), e.orig) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise ConversionError(prospect_id, fields.get('converted_to_id'), e) from e

    def mark_converted(self, prospect_id, candidate_id, converted_at):
        return self.update_prospect(
            prospect_id,
            only_if_unconverted=True,
            is_converted=True,
            converted_to_id=candidate_id,
            converted_at=converted_at,
            is_deleted=True
        )

    def counts(self):
        try:
            return {
                'candidates': self.session.query(Candidate).count(),
                'active_prospects': self.session.query(Prospect).filter(
                    Prospect.is_converted.is_(False),
                    Prospect.is_deleted.is_(False)
                ).count(),
                'converted_prospects': self.session.query(Prospect).filter(
                    Prospect.is_converted.is_(True)
                ).count()
            }
        except OperationalError as e:
            self.session.rollback()
            raise StoreUnavailable(f"Could not count records: {e}") from e


@contextmanager
def open_store(app):
    """
    Store bound to a private session for the lifetime of one run.

    The session is closed on every exit path, including errors.
    """
    with app.app_context():
        session = Session(db.engine)
        try:
            yield ProspectStore(session)
        finally:
            session.close()
