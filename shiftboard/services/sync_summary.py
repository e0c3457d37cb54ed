SYNCED = 'synced'
FAILED = 'failed'
SKIPPED = 'skipped'


class SyncSummary:
    def __init__(self):
        self.details = []

    def _add(self, store, status, match=None, error=None):
        self.details.append({
            'store_id': store.id,
            'store_name': store.name,
            'status': status,
            'rating': match.rating if match else None,
            'review_count': match.review_count if match else None,
            'error': error,
        })

    def add_synced(self, store, match):
        self._add(store, SYNCED, match=match)

    def add_failure(self, store, error_message):
        self._add(store, FAILED, error=error_message)

    def add_skipped(self, store, reason):
        self._add(store, SKIPPED, error=reason)

    def _count(self, status):
        return sum(1 for d in self.details if d['status'] == status)

    @property
    def synced_count(self):
        return self._count(SYNCED)

    @property
    def failure_count(self):
        return self._count(FAILED)

    @property
    def skipped_count(self):
        return self._count(SKIPPED)

    @property
    def has_failures(self):
        return self.failure_count > 0

    def get_summary_dict(self):
        return {
            'message': (
                f"Yelp sync completed: {self.synced_count} synced, "
                f"{self.failure_count} failed, {self.skipped_count} skipped"
            ),
            'synced': self.synced_count,
            'failed': self.failure_count,
            'skipped': self.skipped_count,
            'details': self.details,
        }
