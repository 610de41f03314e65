import logging
from datetime import datetime

from exceptions import CandidateNotFound, ProspectNotFound
from records import STATUS_ALREADY_CONVERTED, STATUS_CONVERTED, ConversionResult

logger = logging.getLogger(__name__)


def convert_prospect(store, prospect_id, candidate_id, now=None):
    """
    Mark a prospect as represented by an existing candidate.

    Sets is_converted, converted_to_id, converted_at and is_deleted in one
    conditional update. A prospect that is already converted is left alone
    and reported as such, which makes repeated runs harmless.

    Raises ProspectNotFound if the prospect is gone, CandidateNotFound if the
    candidate does not exist and ConversionError if the datastore rejects
    the update.
    """
    prospect = store.get_prospect(prospect_id)
    if prospect is None:
        raise ProspectNotFound(prospect_id)

    if prospect.is_converted:
        logger.debug(f"Prospect {prospect_id} already converted to {prospect.converted_to_id}")
        return ConversionResult(prospect_id, prospect.converted_to_id, STATUS_ALREADY_CONVERTED,
                                prospect.converted_at)

    if not store.candidate_exists(candidate_id):
        raise CandidateNotFound(prospect_id, candidate_id)

    converted_at = now or datetime.utcnow()
    updated = store.mark_converted(prospect_id, candidate_id, converted_at)

    if not updated:
        # Lost a race: either converted or removed since we read it
        current = store.get_prospect(prospect_id)
        if current is None:
            raise ProspectNotFound(prospect_id)
        return ConversionResult(prospect_id, current.converted_to_id, STATUS_ALREADY_CONVERTED,
                                current.converted_at)

    logger.info(f"[CLEANUP] Prospect {prospect.display_name} (ID: {prospect_id}) converted to candidate {candidate_id}")
    return ConversionResult(prospect_id, candidate_id, STATUS_CONVERTED, converted_at)
