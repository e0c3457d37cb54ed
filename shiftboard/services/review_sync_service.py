import logging
from datetime import datetime, timedelta

from shiftboard.extensions import db, yelp
from shiftboard.extensions.yelp import ReviewLookupError
from shiftboard.models.store import Store
from shiftboard.services.sync_summary import SyncSummary

logger = logging.getLogger(__name__)


def _apply_match(store: Store, match, searched_at: datetime):
    store.yelp_business_id = match.business_id if match else None
    store.yelp_rating = match.rating if match else None
    store.yelp_review_count = match.review_count if match else None
    store.yelp_url = match.url if match else None
    store.yelp_updated_at = searched_at if match else None
    store.yelp_search_term = f"{store.name} {store.address}"
    store.yelp_last_search = searched_at


def sync_store(store: Store):
    """
    Looks the store up on Yelp and stores the outcome. Returns the StoreMatch
    or None when nothing matched. On a lookup failure the last-search time is
    still recorded so the store is not retried immediately, and the error is
    re-raised. The caller commits.
    """
    searched_at = datetime.utcnow()
    try:
        match = yelp.lookup_store(store.name, store.address, store.phone)
    except ReviewLookupError:
        store.yelp_last_search = searched_at
        raise

    _apply_match(store, match, searched_at)
    return match


def sync_owner_stores(owner_id: int, interval_hours: int = 24, force: bool = False) -> SyncSummary:
    stores = Store.query.filter(
        Store.owner_id == owner_id,
        Store.visible(),
        Store.address.isnot(None),
        Store.address != '',
    ).order_by(Store.id).all()

    summary = SyncSummary()
    cutoff = datetime.utcnow() - timedelta(hours=interval_hours)

    for store in stores:
        if not force and store.yelp_last_search and store.yelp_last_search > cutoff:
            summary.add_skipped(store, f"Recently searched (within {interval_hours} hours)")
            continue
        try:
            match = sync_store(store)
            summary.add_synced(store, match)
        except ReviewLookupError as e:
            logger.error("Failed to sync Yelp data for store %s: %s", store.name, e)
            summary.add_failure(store, str(e))

    db.session.commit()
    return summary
