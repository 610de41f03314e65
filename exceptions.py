class DedupeError(Exception):
    """Base class for deduplication engine errors"""


class StoreUnavailable(DedupeError):
    """The datastore could not be reached; fatal for a run"""


class ProspectNotFound(DedupeError):
    def __init__(self, prospect_id):
        super().__init__(f"Prospect {prospect_id} not found")
        self.prospect_id = prospect_id


class ConversionError(DedupeError):
    """The datastore rejected a conversion update"""

    def __init__(self, prospect_id, candidate_id, cause=None):
        super().__init__(f"Could not convert prospect {prospect_id} to candidate {candidate_id}: {cause}")
        self.prospect_id = prospect_id
        self.candidate_id = candidate_id
        self.cause = cause


class CandidateNotFound(ConversionError):
    """The conversion target does not exist"""

    def __init__(self, prospect_id, candidate_id):
        super().__init__(prospect_id, candidate_id, "candidate does not exist")
