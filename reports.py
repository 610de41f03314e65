"""Read-only diagnostic reports over candidates and prospects."""
from dataclasses import dataclass, field
from typing import List

from matcher import find_matches, find_name_duplicates
from records import MATCH_EMAIL, MATCH_PHONE, Match, NameDuplicateGroup


@dataclass
class DuplicateReport:
    candidates: int = 0
    prospects: int = 0
    matches: List[Match] = field(default_factory=list)
    details: List[str] = field(default_factory=list)

    @property
    def email_duplicates(self):
        return sum(1 for m in self.matches if m.matched_on == MATCH_EMAIL)

    @property
    def phone_duplicates(self):
        return sum(1 for m in self.matches if m.matched_on == MATCH_PHONE)

    def lines(self):
        return [
            "--- DUPLICATE CHECK ---",
            f"Candidates total: {self.candidates}",
            f"Active prospects total: {self.prospects}",
            *self.details,
            "--- RESULTS ---",
            f"Email duplicates: {self.email_duplicates}",
            f"Phone duplicates (distinct): {self.phone_duplicates}",
        ]

    def to_dict(self):
        return {
            'candidates': self.candidates,
            'prospects': self.prospects,
            'email_duplicates': self.email_duplicates,
            'phone_duplicates': self.phone_duplicates,
            'matches': [
                {'candidate_id': m.candidate_id, 'prospect_id': m.prospect_id, 'matched_on': m.matched_on}
                for m in self.matches
            ]
        }


@dataclass
class NameDuplicateReport:
    candidates: int = 0
    unique_names: int = 0
    groups: List[NameDuplicateGroup] = field(default_factory=list)
    sample: int = 10

    @property
    def redundant_records(self):
        return sum(group.excess for group in self.groups)

    @property
    def estimated_unique(self):
        return self.candidates - self.redundant_records

    def lines(self):
        lines = [
            f"Total candidates: {self.candidates}",
            f"Unique names: {self.unique_names}",
        ]
        for group in self.groups[:self.sample]:
            lines.append(f'[DUP] "{group.key}" x {len(group.candidates)}')
            for c in group.candidates:
                lines.append(f"   - ID: {c.id} | Email: {c.email} | Phone: {c.phone}")
        lines += [
            "--- RESULTS ---",
            f"Duplicate groups (same name): {len(self.groups)}",
            f"Excess records (to merge): {self.redundant_records}",
            f"Estimated unique candidates: {self.estimated_unique}",
        ]
        return lines

    def to_dict(self):
        return {
            'candidates': self.candidates,
            'unique_names': self.unique_names,
            'duplicate_groups': len(self.groups),
            'redundant_records': self.redundant_records,
            'estimated_unique': self.estimated_unique,
            'groups': [
                {'key': g.key, 'candidate_ids': [c.id for c in g.candidates]}
                for g in self.groups[:self.sample]
            ]
        }


def duplicate_report(store):
    candidates = store.list_candidates()
    prospects = store.list_active_prospects()
    by_id = {c.id: c for c in candidates}

    report = DuplicateReport(candidates=len(candidates), prospects=len(prospects))
    for match in find_matches(candidates, prospects):
        candidate = by_id[match.candidate_id]
        identity = candidate.email if match.matched_on == MATCH_EMAIL else candidate.phone
        report.matches.append(match)
        report.details.append(
            f"[DUPLICATE {match.matched_on.upper()}] {identity} -> Candidate: {candidate.display_name} "
            f"| Prospect ID: {match.prospect_id}"
        )
    return report


def name_duplicate_report(store, sample=10):
    candidates = store.list_candidates()
    unique_names = {c.name_key for c in candidates if c.name_key}
    return NameDuplicateReport(
        candidates=len(candidates),
        unique_names=len(unique_names),
        groups=find_name_duplicates(candidates),
        sample=sample
    )
