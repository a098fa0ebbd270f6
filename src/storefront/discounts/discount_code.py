"""DiscountCode aggregate root and repository."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String

from storefront.domain import storefront


def _as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


@storefront.aggregate
class DiscountCode:
    code: String(required=True, max_length=50, unique=True)
    percentage: Float(required=True, min_value=0.0, max_value=100.0)
    expires_at: DateTime()
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def percentage_must_be_positive(self):
        if self.percentage is not None and self.percentage <= 0:
            raise ValidationError({"percentage": ["Discount percentage must be greater than 0"]})

    @classmethod
    def create(cls, code, percentage, expires_at=None):
        now = datetime.now()
        return cls(
            code=code.strip(),
            percentage=percentage,
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(UTC)
        return _as_utc(now) > _as_utc(self.expires_at)

    def revise(self, code=None, percentage=None, expires_at=None, is_active=None):
        if code:
            self.code = code.strip()
        if percentage is not None:
            self.percentage = percentage
        if expires_at is not None:
            self.expires_at = expires_at
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now()


@storefront.repository(part_of=DiscountCode)
class DiscountCodeRepository:
    def find_by_code(self, code: str) -> DiscountCode | None:
        """Exact, case-sensitive lookup; codes are matched as typed."""
        return self._dao.query.filter(code=code.strip()).all().first
