"""
Duplicate detection between candidates and active prospects.

Candidates are scanned oldest first. For each one the first active prospect
sharing its email key is reported, then the first active prospect sharing its
phone key unless that prospect was already reported for the same email.
Phone matches are report-only: nothing here or in the batch converts on them.
A prospect can be reported against several candidates: that is a data
quality signal and is left visible on purpose.
"""
from datetime import datetime
from typing import Dict, Iterable, Iterator, List

from records import (
    MATCH_EMAIL,
    MATCH_PHONE,
    CandidateRecord,
    Match,
    NameDuplicateGroup,
    ProspectRecord,
)


def _creation_order(candidate: CandidateRecord):
    return candidate.created_at or datetime.min


def index_by_email(prospects: Iterable[ProspectRecord]) -> Dict[str, ProspectRecord]:
    """First prospect per email key"""
    index = {}
    for prospect in prospects:
        key = prospect.email_key
        if key:
            index.setdefault(key, prospect)
    return index


def index_by_phone(prospects: Iterable[ProspectRecord]) -> Dict[str, ProspectRecord]:
    """First prospect per phone key"""
    index = {}
    for prospect in prospects:
        key = prospect.phone_key
        if key:
            index.setdefault(key, prospect)
    return index


def find_matches(candidates: Iterable[CandidateRecord],
                 prospects: Iterable[ProspectRecord]) -> Iterator[Match]:
    """Yield a Match for every (candidate, active prospect) pair that looks like the same person"""
    active = [p for p in prospects if p.is_active]
    by_email = index_by_email(active)
    by_phone = index_by_phone(active)

    for candidate in sorted(candidates, key=_creation_order):
        c_email = candidate.email_key
        if c_email and c_email in by_email:
            yield Match(candidate.id, by_email[c_email].id, MATCH_EMAIL)

        c_phone = candidate.phone_key
        if c_phone and c_phone in by_phone:
            prospect = by_phone[c_phone]
            # Same person already reported through the email rule
            if c_email and prospect.email_key == c_email:
                continue
            yield Match(candidate.id, prospect.id, MATCH_PHONE)


def find_name_duplicates(candidates: Iterable[CandidateRecord]) -> List[NameDuplicateGroup]:
    """Group candidates sharing the same normalized full name"""
    groups: Dict[str, List[CandidateRecord]] = {}
    for candidate in candidates:
        key = candidate.name_key
        if not key:
            continue
        groups.setdefault(key, []).append(candidate)

    return [
        NameDuplicateGroup(key=key, candidates=tuple(members))
        for key, members in groups.items()
        if len(members) > 1
    ]
