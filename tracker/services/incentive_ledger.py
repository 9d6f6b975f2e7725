# tracker/services/incentive_ledger.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from sqlalchemy.orm import Session, joinedload

from tracker.database import commit
from tracker.exceptions import NotFound, ValidationError
from tracker.models.incentive import Incentive, IncentiveType
from tracker.models.user import User
from tracker.utils.policy import Action, Resource, ResourceKind, authorize

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Numeric(12, 2) holds ten integer digits
AMOUNT_LIMIT = 10 ** 10


def parse_incentive_type(value) -> IncentiveType:
    try:
        return IncentiveType(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("type must be bonus or deduction")


def parse_amount(value) -> float:
    """Validate an amount and round it to cents the way the column stores it"""
    try:
        amount = Decimal(str(float(value)))
    except (TypeError, ValueError):
        raise ValidationError("amount must be a positive number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("amount must be a positive number")
    if amount < AMOUNT_LIMIT:
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount >= AMOUNT_LIMIT:
        raise ValidationError("amount must be less than %d" % AMOUNT_LIMIT)
    # sub-cent amounts round down to nothing
    if amount == 0:
        raise ValidationError("amount must be a positive number")
    return float(amount)


class IncentiveLedger:
    """Append-only record of bonuses and deductions per user.

    Entries are created and deleted by admins; they are never edited in
    place, so the history of a user's incentives is the list of rows.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Incentive).options(joinedload(Incentive.user), joinedload(Incentive.creator))

    def create(self, creator: User, user_id: int, type, amount, reason) -> Incentive:
        incentive_type = parse_incentive_type(type)
        amount = parse_amount(amount)
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("reason required")

        authorize(
            creator.as_principal(),
            Action.CREATE,
            Resource(kind=ResourceKind.INCENTIVE, owner_id=user_id),
        )

        if self.db.get(User, user_id) is None:
            raise NotFound("user not found")

        incentive = Incentive(
            user_id=user_id,
            type=incentive_type.value,
            amount=amount,
            reason=reason,
            created_by=creator.id,
        )
        self.db.add(incentive)
        commit(self.db)
        self.db.refresh(incentive)

        logger.info(
            "Incentive %s (%s %.2f) recorded for user %s by user %s",
            incentive.id, incentive_type.value, amount, user_id, creator.id,
        )
        return incentive

    def list_for_user(self, user: User) -> List[Incentive]:
        return (
            self._query()
            .filter(Incentive.user_id == user.id)
            .order_by(Incentive.created_at.desc(), Incentive.id.desc())
            .all()
        )

    def list_all(self, requester: User) -> List[Incentive]:
        authorize(requester.as_principal(), Action.LIST_ALL, Resource(kind=ResourceKind.INCENTIVE))
        return self._query().order_by(Incentive.created_at.desc(), Incentive.id.desc()).all()

    def delete(self, requester: User, incentive_id: int) -> None:
        authorize(
            requester.as_principal(),
            Action.DELETE,
            Resource(kind=ResourceKind.INCENTIVE, id=incentive_id),
        )

        incentive = self.db.get(Incentive, incentive_id)
        if incentive is None:
            raise NotFound("incentive not found")

        self.db.delete(incentive)
        commit(self.db)
        logger.info("Incentive %s deleted by user %s", incentive_id, requester.id)
