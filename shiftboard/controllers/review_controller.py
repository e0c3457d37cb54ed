from flask import Blueprint, request, jsonify, current_app

from shiftboard.extensions import db
from shiftboard.extensions.yelp import ReviewLookupError
from shiftboard.models.user import OWNER
from shiftboard.services.report_store import accessible_store
from shiftboard.services.review_sync_service import sync_owner_stores, sync_store
from shiftboard.utils.auth import login_required

review_bp = Blueprint('reviews', __name__, url_prefix='/yelp')

# Sync every active store with an address owned by the user
@review_bp.route('/sync', methods=['POST'])
@login_required(OWNER, message="Only owners can sync Yelp data")
def sync_all_stores(user):
    force = request.args.get('force', '').lower() == 'true'
    summary = sync_owner_stores(
        user.id,
        interval_hours=current_app.config['YELP_SYNC_INTERVAL_HOURS'],
        force=force,
    )
    if summary.synced_count + summary.failure_count + summary.skipped_count == 0:
        return jsonify({
            "message": "No stores found with addresses to sync",
            "synced": 0,
            "failed": 0,
            "skipped": 0,
            "details": [],
        })
    return jsonify(summary.get_summary_dict())

@review_bp.route('/sync/<int:store_id>', methods=['POST'])
@login_required(OWNER, message="Only owners can sync Yelp data")
def sync_single_store(user, store_id):
    store = accessible_store(user, store_id, owner_only=True)
    if not store or not store.is_active:
        return jsonify({"error": "Store not found or access denied"}), 404

    if not store.address:
        return jsonify({"error": "Cannot sync Yelp data for store without address"}), 400

    try:
        match = sync_store(store)
        db.session.commit()
    except ReviewLookupError as e:
        # The last-search stamp set by sync_store is kept to avoid immediate retries
        db.session.commit()
        current_app.logger.error("Failed to sync Yelp data for store %s: %s", store.name, e)
        return jsonify({
            "error": str(e),
            "store": store.to_dict(),
            "found": False,
        }), 502

    return jsonify({
        "message": (
            f"Successfully synced Yelp data for {store.name}" if match
            else f"No matching Yelp business found for {store.name}"
        ),
        "store": store.to_dict(),
        "found": match is not None,
        "match_score": match.match_score if match else None,
    })
