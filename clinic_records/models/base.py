from datetime import datetime
from clinic_records.extensions import db


class TimestampMixin:
    """Adds created_at / updated_at columns maintained on write.

    Same naive server-local clock as the visit dates.
    """
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
