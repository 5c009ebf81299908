import logging
from typing import List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from .models import db, TrustRelationship

logger = logging.getLogger(__name__)

# Dialects with a native INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class TrustGraph:
    """
    Directed "giver trusts receiver" edges between users.
    Edges are only ever added; asserting an existing edge is a no-op.
    Writes join the caller's open transaction.
    """

    def upsert_trust(self, trust_giver_id: int, trust_receiver_id: int):
        dialect = db.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)

        if insert is not None:
            stmt = insert(TrustRelationship.__table__).values(
                trust_giver_id=trust_giver_id,
                trust_receiver_id=trust_receiver_id
            ).on_conflict_do_nothing(
                index_elements=['trust_giver_id', 'trust_receiver_id']
            )
            db.session.execute(stmt)
            return

        if self.trusts(trust_giver_id, trust_receiver_id):
            return
        try:
            # Savepoint so a concurrent insert of the same edge only undoes this row
            with db.session.begin_nested():
                db.session.add(TrustRelationship(
                    trust_giver_id=trust_giver_id,
                    trust_receiver_id=trust_receiver_id
                ))
        except IntegrityError:
            logger.info(f"Trust edge {trust_giver_id} -> {trust_receiver_id} already recorded")

    def trusts(self, trust_giver_id: int, trust_receiver_id: int) -> bool:
        return TrustRelationship.query.filter_by(
            trust_giver_id=trust_giver_id,
            trust_receiver_id=trust_receiver_id
        ).first() is not None

    def trusted_by(self, trust_giver_id: int) -> List[int]:
        """User ids the given user trusts."""
        edges = TrustRelationship.query.filter_by(trust_giver_id=trust_giver_id).all()
        return [e.trust_receiver_id for e in edges]

    def trusters_of(self, trust_receiver_id: int) -> List[int]:
        """User ids that trust the given user."""
        edges = TrustRelationship.query.filter_by(trust_receiver_id=trust_receiver_id).all()
        return [e.trust_giver_id for e in edges]
