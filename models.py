import uuid
from datetime import datetime
from database import db


def generate_id():
    return str(uuid.uuid4())


class Candidate(db.Model):
    """Vetted, onboarded person. Never mutated by the deduplication engine."""
    __tablename__ = 'candidate'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    first_name = db.Column(db.String(100), nullable=False, default='')
    last_name = db.Column(db.String(100), nullable=False, default='')
    email = db.Column(db.String(120), index=True)
    phone = db.Column(db.String(30))

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Prospects that were converted into this candidate
    converted_prospects = db.relationship('Prospect', backref='converted_to', lazy=True)

    @property
    def display_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Prospect(db.Model):
    """Loosely vetted lead, keyed by contact identity"""
    __tablename__ = 'prospect_candidate'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    first_name = db.Column(db.String(100), nullable=False, default='')
    last_name = db.Column(db.String(100), nullable=False, default='')
    email = db.Column(db.String(120), index=True)
    phone = db.Column(db.String(30))

    # Conversion state
    is_converted = db.Column(db.Boolean, default=False, nullable=False)
    converted_to_id = db.Column(db.String(36), db.ForeignKey('candidate.id'))
    converted_at = db.Column(db.DateTime)
    is_deleted = db.Column(db.Boolean, default=False, nullable=False)

    # Metadata
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # A converted prospect always points at its candidate and records when
    __table_args__ = (
        db.CheckConstraint(
            'NOT is_converted OR (converted_to_id IS NOT NULL AND converted_at IS NOT NULL)',
            name='ck_prospect_conversion_complete'
        ),
    )

    @property
    def display_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_active(self):
        return not self.is_converted and not self.is_deleted

    def to_dict(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'is_converted': self.is_converted,
            'converted_to_id': self.converted_to_id,
            'converted_at': self.converted_at.isoformat() if self.converted_at else None,
            'is_deleted': self.is_deleted,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
