"""
Visit Model
One row per clinic encounter. There is no patient table: a patient is the set
of visits sharing the same (name, phone) pair.
"""
import math
from datetime import datetime

from sqlalchemy.orm import validates

from clinic_records.extensions import db
from clinic_records.utils.dates import parse_datetime, isoformat_or_none
from .base import TimestampMixin

GENDERS = ('Male', 'Female', 'Other')
DIABETES_STATUSES = (
    'No Diabetes',
    'Type 1 Diabetes',
    'Type 2 Diabetes',
    'Gestational Diabetes',
    'Prediabetes',
)
PHONE_LENGTH = 10
MIN_AGE, MAX_AGE = 0, 150

# API key -> column attribute
FIELD_MAP = {
    'name': 'name',
    'age': 'age',
    'gender': 'gender',
    'phone': 'phone',
    'email': 'email',
    'condition': 'condition',
    'treatment': 'treatment',
    'visitDate': 'visit_date',
    'followUpDate': 'follow_up_date',
    'diabetes': 'diabetes',
    'amountPaid': 'amount_paid',
}


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _quoted(values):
    return ", ".join(f"'{v}'" for v in values)


class Visit(db.Model, TimestampMixin):
    __tablename__ = 'visits'
    __table_args__ = (
        db.UniqueConstraint('name', 'phone', 'visit_date', name='uq_visits_name_phone_visit_date'),
        db.Index('ix_visits_name_phone', 'name', 'phone'),
        db.CheckConstraint(f'age >= {MIN_AGE} AND age <= {MAX_AGE}', name='ck_visits_age_range'),
        db.CheckConstraint('amount_paid >= 0', name='ck_visits_amount_paid_non_negative'),
        db.CheckConstraint(f'gender IN ({_quoted(GENDERS)})', name='ck_visits_gender'),
        db.CheckConstraint(f'diabetes IN ({_quoted(DIABETES_STATUSES)})', name='ck_visits_diabetes'),
    )

    id = db.Column(db.Integer, primary_key=True)

    # Identity
    name = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(PHONE_LENGTH), nullable=False)

    # Demographics
    age = db.Column(db.Integer)
    gender = db.Column(db.String(10))
    email = db.Column(db.String(254))

    # Clinical
    condition = db.Column(db.Text)
    treatment = db.Column(db.Text)
    diabetes = db.Column(db.String(30))

    # Scheduling (naive, server-local)
    visit_date = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)
    follow_up_date = db.Column(db.DateTime, nullable=True, index=True)

    amount_paid = db.Column(db.Float)

    @classmethod
    def from_fields(cls, fields):
        """Build a visit from API fields; raises ValueError on bad values."""
        visit = cls()
        visit.apply(fields)
        if visit.visit_date is None:
            visit.visit_date = datetime.now()
        return visit

    def apply(self, fields):
        """
        Set every known API field present in ``fields``.
        Unknown and managed keys (id, createdAt, updatedAt) are ignored.
        Returns True when at least one stored value changed.
        """
        changed = False
        for key, attr in FIELD_MAP.items():
            if key not in fields:
                continue
            before = getattr(self, attr)
            setattr(self, attr, fields[key])
            if getattr(self, attr) != before:
                changed = True
        return changed

    @validates('condition', 'treatment')
    def validate_text(self, key, value):
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        return value.strip()

    @validates('name')
    def validate_name(self, key, value):
        value = _blank_to_none(value)
        if value is None:
            if self.id is not None:
                raise ValueError("name cannot be cleared")
            return None
        if not isinstance(value, str):
            raise ValueError("name must be a string")
        return value.strip()

    @validates('phone')
    def validate_phone(self, key, value):
        if value is None:
            if self.id is not None:
                raise ValueError("phone cannot be cleared")
            return None
        value = str(value).strip()
        if len(value) != PHONE_LENGTH:
            raise ValueError(f"phone must be exactly {PHONE_LENGTH} characters")
        return value

    @validates('email')
    def validate_email(self, key, value):
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("email must be a string")
        return value.strip().lower()

    @validates('age')
    def validate_age(self, key, value):
        value = _blank_to_none(value)
        if value is None:
            return None
        try:
            age = int(value)
        except (TypeError, ValueError, OverflowError):
            raise ValueError("age must be a number") from None
        if isinstance(value, bool) or age != float(value):
            raise ValueError("age must be a whole number")
        if not MIN_AGE <= age <= MAX_AGE:
            raise ValueError(f"age must be between {MIN_AGE} and {MAX_AGE}")
        return age

    @validates('gender')
    def validate_gender(self, key, value):
        value = _blank_to_none(value)
        if value is not None and value not in GENDERS:
            raise ValueError(f"gender must be one of: {', '.join(GENDERS)}")
        return value

    @validates('diabetes')
    def validate_diabetes(self, key, value):
        value = _blank_to_none(value)
        if value is not None and value not in DIABETES_STATUSES:
            raise ValueError(f"diabetes must be one of: {', '.join(DIABETES_STATUSES)}")
        return value

    @validates('amount_paid')
    def validate_amount_paid(self, key, value):
        value = _blank_to_none(value)
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("amountPaid must be a number")
        try:
            amount = float(value)
        except (TypeError, ValueError, OverflowError):
            raise ValueError("amountPaid must be a number") from None
        if not math.isfinite(amount):
            raise ValueError("amountPaid must be a finite number")
        if amount < 0:
            raise ValueError("amountPaid must not be negative")
        return amount

    @validates('visit_date')
    def validate_visit_date(self, key, value):
        parsed = parse_datetime(value)
        if parsed is None and self.id is not None:
            raise ValueError("visitDate cannot be cleared")
        return parsed

    @validates('follow_up_date')
    def validate_follow_up_date(self, key, value):
        return parse_datetime(value)

    def __repr__(self):
        return f"<Visit {self.id} - {self.name} ({self.phone}) on {self.visit_date}>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            'id': self.id,
            'name': self.name,
            'age': self.age,
            'gender': self.gender,
            'phone': self.phone,
            'email': self.email,
            'condition': self.condition,
            'treatment': self.treatment,
            'visitDate': isoformat_or_none(self.visit_date),
            'followUpDate': isoformat_or_none(self.follow_up_date),
            'diabetes': self.diabetes,
            'amountPaid': self.amount_paid,
            'createdAt': isoformat_or_none(self.created_at),
            'updatedAt': isoformat_or_none(self.updated_at),
        }
