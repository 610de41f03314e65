import types
import unittest
from datetime import datetime

from matcher import find_matches, find_name_duplicates
from records import CandidateRecord, Match, ProspectRecord


def candidate(id, email=None, phone=None, day=1, first_name='', last_name=''):
    return CandidateRecord(id=id, email=email, phone=phone, first_name=first_name,
                           last_name=last_name, created_at=datetime(2024, 1, day))


class FindMatchesTests(unittest.TestCase):
    def test_email_match_is_case_insensitive(self):
        matches = list(find_matches(
            [candidate("c1", email="Jane.Doe@X.com")],
            [ProspectRecord("p1", email="jane.doe@x.com")]
        ))
        self.assertEqual(matches, [Match("c1", "p1", "email")])

    def test_phone_match_on_digits(self):
        matches = list(find_matches(
            [candidate("c2", phone="514-123-4567")],
            [ProspectRecord("p2", phone="5141234567")]
        ))
        self.assertEqual(matches, [Match("c2", "p2", "phone")])

    def test_same_pair_not_reported_twice(self):
        matches = list(find_matches(
            [candidate("c1", email="a@x.com", phone="5141234567")],
            [ProspectRecord("p1", email="A@x.com", phone="(514) 123-4567")]
        ))
        self.assertEqual(matches, [Match("c1", "p1", "email")])

    def test_phone_match_reported_when_emails_differ(self):
        matches = list(find_matches(
            [candidate("c1", email="a@x.com", phone="5141234567")],
            [ProspectRecord("p1", email="a@x.com"), ProspectRecord("p2", email="b@x.com", phone="514.123.4567")]
        ))
        self.assertEqual(matches, [Match("c1", "p1", "email"), Match("c1", "p2", "phone")])

    def test_prospect_without_identity_never_matches(self):
        matches = list(find_matches(
            [candidate("c1", email="a@x.com", phone="5141234567"), candidate("c2")],
            [ProspectRecord("p3")]
        ))
        self.assertEqual(matches, [])

    def test_inactive_prospects_ignored(self):
        converted = ProspectRecord("p1", email="a@x.com", is_converted=True,
                                   converted_to_id="c0", converted_at=datetime(2024, 1, 1))
        deleted = ProspectRecord("p2", email="a@x.com", is_deleted=True)
        matches = list(find_matches([candidate("c1", email="a@x.com")], [converted, deleted]))
        self.assertEqual(matches, [])

    def test_candidates_scanned_oldest_first_and_prospect_may_match_twice(self):
        matches = list(find_matches(
            [candidate("late", email="a@x.com", day=5), candidate("early", email="A@X.COM", day=2)],
            [ProspectRecord("p1", email="a@x.com")]
        ))
        self.assertEqual(matches, [Match("early", "p1", "email"), Match("late", "p1", "email")])

    def test_first_prospect_wins_per_key(self):
        matches = list(find_matches(
            [candidate("c1", email="a@x.com")],
            [ProspectRecord("p1", email="a@x.com"), ProspectRecord("p2", email="a@x.com")]
        ))
        self.assertEqual(matches, [Match("c1", "p1", "email")])

    def test_lazy_and_restartable(self):
        candidates = [candidate("c1", email="a@x.com")]
        prospects = [ProspectRecord("p1", email="a@x.com")]
        result = find_matches(candidates, prospects)
        self.assertIsInstance(result, types.GeneratorType)
        self.assertEqual(list(result), list(find_matches(candidates, prospects)))


class NameDuplicateTests(unittest.TestCase):
    def test_groups_same_normalized_name(self):
        groups = find_name_duplicates([
            candidate("c1", first_name="Élise", last_name="Côté"),
            candidate("c2", first_name="elise", last_name="cote"),
            candidate("c3", first_name="Marc", last_name="Roy"),
            candidate("c4"),
            candidate("c5"),
        ])
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].key, "elise cote")
        self.assertEqual([c.id for c in groups[0].candidates], ["c1", "c2"])
        self.assertEqual(groups[0].excess, 1)


class RecordInvariantTests(unittest.TestCase):
    def test_converted_prospect_requires_link_and_timestamp(self):
        with self.assertRaises(ValueError):
            ProspectRecord("p1", is_converted=True)
        with self.assertRaises(ValueError):
            ProspectRecord("p1", is_converted=True, converted_to_id="c1")

    def test_unknown_match_rule_rejected(self):
        with self.assertRaises(ValueError):
            Match("c1", "p1", "name")
