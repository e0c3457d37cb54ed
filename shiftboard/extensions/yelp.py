import logging

import requests

from shiftboard.utils.store_matcher import StoreMatcher

logger = logging.getLogger(__name__)


class ReviewLookupError(Exception):
    """The review API could not be asked. Never means "no match"."""


class ReviewRateLimitError(ReviewLookupError):
    pass


class ReviewAuthError(ReviewLookupError):
    pass


class ReviewTransportError(ReviewLookupError):
    pass


class YelpClient:
    def __init__(self):
        self.api_key = None
        self.base_url = None
        self.timeout = None
        self.session = None

    def init_app(self, app):
        self.api_key = app.config.get('YELP_API_KEY')
        self.base_url = app.config['YELP_API_URL'].rstrip('/')
        self.timeout = app.config['YELP_TIMEOUT']
        self.session = requests.Session()

    def _request(self, endpoint: str, params: dict) -> dict:
        if not self.api_key:
            raise ReviewAuthError("YELP_API_KEY is not configured")

        query = {key: value for key, value in params.items() if value is not None}
        try:
            response = self.session.get(
                f"{self.base_url}{endpoint}",
                params=query,
                headers={
                    'Authorization': f"Bearer {self.api_key}",
                    'Accept': 'application/json',
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ReviewTransportError(f"Failed to reach Yelp API: {e}") from e

        if response.status_code == 429:
            raise ReviewRateLimitError("Yelp API rate limit exceeded")
        if response.status_code == 401:
            raise ReviewAuthError("Invalid Yelp API key")
        if not response.ok:
            raise ReviewTransportError(f"Yelp API error: {response.status_code} {response.reason}")

        try:
            data = response.json()
        except ValueError as e:
            raise ReviewTransportError("Yelp API returned an invalid JSON body") from e
        if not isinstance(data, dict):
            raise ReviewTransportError("Yelp API returned an unexpected JSON body")
        return data

    def search_businesses(self, store_name: str, address: str) -> list:
        """Search nearby restaurants matching the store name around its address."""
        data = self._request('/businesses/search', {
            'term': store_name,
            'location': address,
            'categories': 'restaurants,food',
            'limit': 10,
            'sort_by': 'distance',
        })
        return data.get('businesses') or []

    def lookup_store(self, store_name: str, address: str | None, phone: str | None = None):
        """
        Returns the best matching business as a StoreMatch, or None when nothing
        matched. A store without an address is never looked up.
        Raises ReviewLookupError subclasses when the API could not be queried.
        """
        if not address:
            logger.warning("Cannot search Yelp for store %r without address", store_name)
            return None

        businesses = self.search_businesses(store_name, address)
        matcher = StoreMatcher(store_name, address, phone)
        return matcher.find_best_match(businesses)
