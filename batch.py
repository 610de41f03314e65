import logging
from datetime import datetime

from conversion import convert_prospect
from exceptions import ConversionError, ProspectNotFound
from matcher import find_matches
from records import MATCH_PHONE, BatchSummary
from utils import log_processing_time

logger = logging.getLogger(__name__)


def _index_all_by_email(prospects):
    """Every prospect per email key, in snapshot order"""
    index = {}
    for prospect in prospects:
        key = prospect.email_key
        if key:
            index.setdefault(key, []).append(prospect)
    return index


@log_processing_time
def run_batch(store, now=None):
    """
    Convert every active prospect whose email matches a candidate.

    Candidates and prospects are read once up front; anything created after
    that is left for the next run. Per-prospect failures are logged and
    counted, only an unreachable datastore (StoreUnavailable) aborts the run.
    Phone-only matches are logged for manual review and never converted.
    """
    summary = BatchSummary(started_at=datetime.utcnow())

    candidates = store.list_candidates()
    prospects = store.list_matchable_prospects()
    active = [p for p in prospects if p.is_active]

    summary.candidates = len(candidates)
    summary.prospects = len(active)
    logger.info(f"Starting prospect cleanup: {len(candidates)} candidates, {len(active)} active prospects")

    by_email = _index_all_by_email(prospects)
    names = {c.id: c.display_name for c in candidates}
    converted_ids = set()

    for candidate in candidates:
        key = candidate.email_key
        if not key:
            continue

        for prospect in by_email.get(key, []):
            summary.processed += 1
            try:
                result = convert_prospect(store, prospect.id, candidate.id, now=now)
            except (ProspectNotFound, ConversionError) as e:
                summary.errors += 1
                summary.error_messages.append(str(e))
                logger.error(f"Failed to convert prospect {prospect.id} to candidate {candidate.id}: {e}")
                continue

            if result.converted:
                summary.converted += 1
                converted_ids.add(prospect.id)
            else:
                summary.already_converted += 1

    for match in find_matches(candidates, active):
        if match.matched_on != MATCH_PHONE or match.prospect_id in converted_ids:
            continue
        summary.phone_matches += 1
        logger.info(f"[PHONE MATCH] Prospect {match.prospect_id} shares a phone number with candidate "
                    f"{names.get(match.candidate_id, '')} (ID: {match.candidate_id}); not converted, review manually")

    summary.finished_at = datetime.utcnow()
    for line in summary.lines():
        logger.info(line)
    return summary
