from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from normalizer import email_key, name_key, phone_key

MATCH_EMAIL = "email"
# Phone matches are only reported for manual review, never auto-converted
MATCH_PHONE = "phone"

STATUS_CONVERTED = "converted"
STATUS_ALREADY_CONVERTED = "already_converted"


@dataclass(frozen=True)
class CandidateRecord:
    """
    Snapshot of a candidate's identity fields.

    Taken once at the start of a run; the engine never writes candidates.
    """
    id: str
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Candidate id is required")

    @classmethod
    def from_model(cls, candidate):
        return cls(
            id=candidate.id,
            first_name=candidate.first_name or "",
            last_name=candidate.last_name or "",
            email=candidate.email,
            phone=candidate.phone,
            created_at=candidate.created_at
        )

    @property
    def email_key(self) -> str:
        return email_key(self.email)

    @property
    def phone_key(self) -> str:
        return phone_key(self.phone)

    @property
    def name_key(self) -> str:
        return name_key(self.first_name, self.last_name)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ProspectRecord:
    """Snapshot of a prospect's identity and conversion state"""
    id: str
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    is_converted: bool = False
    converted_to_id: Optional[str] = None
    converted_at: Optional[datetime] = None
    is_deleted: bool = False

    def __post_init__(self):
        if not self.id:
            raise ValueError("Prospect id is required")
        if self.is_converted and (self.converted_to_id is None or self.converted_at is None):
            raise ValueError(f"Converted prospect {self.id} must have converted_to_id and converted_at")

    @classmethod
    def from_model(cls, prospect):
        return cls(
            id=prospect.id,
            first_name=prospect.first_name or "",
            last_name=prospect.last_name or "",
            email=prospect.email,
            phone=prospect.phone,
            is_converted=bool(prospect.is_converted),
            converted_to_id=prospect.converted_to_id,
            converted_at=prospect.converted_at,
            is_deleted=bool(prospect.is_deleted)
        )

    @property
    def is_active(self) -> bool:
        return not self.is_converted and not self.is_deleted

    @property
    def email_key(self) -> str:
        return email_key(self.email)

    @property
    def phone_key(self) -> str:
        return phone_key(self.phone)

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email or self.id


@dataclass(frozen=True)
class Match:
    candidate_id: str
    prospect_id: str
    matched_on: str

    def __post_init__(self):
        if self.matched_on not in (MATCH_EMAIL, MATCH_PHONE):
            raise ValueError(f"Unknown match rule: {self.matched_on}")


@dataclass(frozen=True)
class ConversionResult:
    prospect_id: str
    candidate_id: str
    status: str
    converted_at: Optional[datetime] = None

    @property
    def converted(self) -> bool:
        return self.status == STATUS_CONVERTED


@dataclass(frozen=True)
class NameDuplicateGroup:
    key: str
    candidates: Tuple[CandidateRecord, ...]

    @property
    def excess(self) -> int:
        return len(self.candidates) - 1


@dataclass
class BatchSummary:
    """Counters produced by one batch run"""
    candidates: int = 0
    prospects: int = 0
    processed: int = 0
    converted: int = 0
    already_converted: int = 0
    phone_matches: int = 0
    errors: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    error_messages: List[str] = field(default_factory=list)

    def lines(self) -> List[str]:
        return [
            "--- DEDUPLICATION SUMMARY ---",
            f"Candidates scanned: {self.candidates}",
            f"Active prospects scanned: {self.prospects}",
            f"Prospects processed: {self.processed}",
            f"Prospects converted: {self.converted}",
            f"Already converted (skipped): {self.already_converted}",
            f"Phone-only matches (manual review): {self.phone_matches}",
            f"Errors: {self.errors}",
        ]

    def to_dict(self):
        return {
            'candidates': self.candidates,
            'prospects': self.prospects,
            'processed': self.processed,
            'converted': self.converted,
            'already_converted': self.already_converted,
            'phone_matches': self.phone_matches,
            'errors': self.errors,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'error_messages': list(self.error_messages)
        }
